'''
Metrics rate a sequence of chords. Each metric is a streaming accumulator: feed it the
chords in the order they were typed, then read its score. Lower scores are better.

Accumulators are mutated by every update, so do not share one between threads. To score
in parallel, give every worker its own accumulator for a consecutive chunk of chords,
then merge them in chunk order.
'''

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np

from hands import Chord, FINGERS_PER_HAND, NUM_FINGERS, Hand

NUM_HANDS = len(Hand)


def _hand_counts(finger_counts: np.ndarray) -> np.ndarray:
    return finger_counts.reshape(NUM_HANDS, FINGERS_PER_HAND).sum(axis=1)


def _hands_used(chord: Chord) -> np.ndarray:
    return _hand_counts(chord.to_array()) > 0


def _normalized_targets(targets: Sequence[float] | None, size: int) -> np.ndarray:
    if targets is None:
        return np.full(size, 1.0 / size)
    targets = np.asarray(targets, dtype=np.float64)
    if targets.shape != (size,):
        raise ValueError(f"Expected {size} target ratios, got {targets.shape[0] if targets.ndim == 1 else targets.shape}")
    if np.any(targets < 0):
        raise ValueError("Target ratios must not be negative")
    total = targets.sum()
    if total <= 0:
        raise ValueError("Target ratios must not all be zero")
    return targets / total


class Metric(ABC):
    """
    A streaming metric over a sequence of chords.
    """
    name: str = ''
    description: str = ''

    @abstractmethod
    def update_once(self, chord: Chord) -> None:
        """Update the metric with the next chord."""

    def update(self, chords: Iterable[Chord]) -> 'Metric':
        for chord in chords:
            self.update_once(chord)
        return self

    @abstractmethod
    def score(self) -> float:
        """Return the score. The lower, the better."""

    @abstractmethod
    def merge(self, other: 'Metric') -> 'Metric':
        """
        Fold in an accumulator of the same type that was fed the chords that come right
        after the ones fed to this one. Returns self.
        """

    @abstractmethod
    def reset(self) -> None:
        """Forget every chord seen so far."""

    def _check_mergeable(self, other: 'Metric') -> None:
        if type(other) is not type(self):
            raise TypeError(f"Cannot merge {type(other).__name__} into {type(self).__name__}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(score={self.score()})"


class _Counts(Metric):
    """Metrics that only count presses."""
    size: int

    def __init__(self):
        self.counts = np.zeros(self.size, dtype=np.int64)

    def reset(self) -> None:
        self.counts[:] = 0

    def merge(self, other: Metric) -> Metric:
        self._check_mergeable(other)
        self.counts += other.counts
        return self

    def total(self) -> int:
        return int(self.counts.sum())


class FingerUsage(_Counts):
    """
    Number of presses of each finger. Score is the total number of presses.
    """
    name = 'finger_usage'
    description = 'total finger presses'
    size = NUM_FINGERS

    def update_once(self, chord: Chord) -> None:
        self.counts += chord.to_array()

    def score(self) -> float:
        return float(self.total())


class HandUsage(_Counts):
    """
    Number of finger presses of each hand. Score is the total number of presses.
    """
    name = 'hand_usage'
    description = 'total hand presses'
    size = NUM_HANDS

    def update_once(self, chord: Chord) -> None:
        self.counts += _hand_counts(chord.to_array())

    def score(self) -> float:
        return float(self.total())

    @classmethod
    def from_finger_usage(cls, usage: FingerUsage) -> 'HandUsage':
        """Sum each hand's half of an already collected finger usage."""
        hand_usage = cls()
        hand_usage.counts[:] = _hand_counts(usage.counts)
        return hand_usage


class _Balance(_Counts):
    """
    Usage compared to a target distribution: the score is the L1 distance between the
    observed press ratios and the target ratios.
    """

    def __init__(self, targets: Sequence[float] | None = None):
        super().__init__()
        self.targets = _normalized_targets(targets, self.size)

    def ratios(self) -> np.ndarray:
        total = self.total()
        if total == 0:
            return np.zeros(self.size, dtype=np.float64)
        return self.counts / total

    def score(self) -> float:
        if self.total() == 0:
            return 0.0
        return float(np.abs(self.ratios() - self.targets).sum())

    def merge(self, other: Metric) -> Metric:
        self._check_mergeable(other)
        if not np.allclose(self.targets, other.targets):
            raise ValueError(f"Cannot merge {self.name} accumulators with different targets")
        return super().merge(other)


class FingerBalance(_Balance):
    """
    How far finger usage is from the target ratios (uniform by default).
    """
    name = 'finger_balance'
    description = 'finger usage distance from target ratios'
    size = NUM_FINGERS

    def update_once(self, chord: Chord) -> None:
        self.counts += chord.to_array()

    @classmethod
    def from_usage(cls, usage: FingerUsage, targets: Sequence[float] | None = None) -> 'FingerBalance':
        balance = cls(targets)
        balance.counts[:] = usage.counts
        return balance


class HandBalance(_Balance):
    """
    How far hand usage is from the target ratios (even split by default).
    """
    name = 'hand_balance'
    description = 'hand usage distance from target ratios'
    size = NUM_HANDS

    def update_once(self, chord: Chord) -> None:
        self.counts += _hand_counts(chord.to_array())

    @classmethod
    def from_usage(cls, usage: 'HandUsage | FingerUsage', targets: Sequence[float] | None = None) -> 'HandBalance':
        if isinstance(usage, FingerUsage):
            usage = HandUsage.from_finger_usage(usage)
        balance = cls(targets)
        balance.counts[:] = usage.counts
        return balance


class _Alternation(Metric):
    """
    Counts, per slot, how often a slot is used in two consecutive chords.

    Keeps the first and the last usage vector so that two accumulators fed consecutive
    chunks can be merged without losing the repeat across the boundary.
    """
    size: int

    def __init__(self):
        self.consecutive = np.zeros(self.size, dtype=np.int64)
        self.first: np.ndarray | None = None
        self.last: np.ndarray | None = None

    def _used(self, chord: Chord) -> np.ndarray:
        raise NotImplementedError

    def update_once(self, chord: Chord) -> None:
        used = self._used(chord)
        if self.last is None:
            self.first = used
        else:
            self.consecutive += self.last & used
        self.last = used

    def score(self) -> float:
        return float(self.consecutive.sum())

    def reset(self) -> None:
        self.consecutive[:] = 0
        self.first = None
        self.last = None

    def merge(self, other: Metric) -> Metric:
        self._check_mergeable(other)
        if other.last is None:
            return self
        self.consecutive += other.consecutive
        if self.last is None:
            self.first = other.first
        else:
            self.consecutive += self.last & other.first
        self.last = other.last
        return self


class FingerAlternation(_Alternation):
    """
    Number of times a finger is pressed in two consecutive chords.
    """
    name = 'finger_alt'
    description = 'same finger pressed in consecutive chords'
    size = NUM_FINGERS

    def _used(self, chord: Chord) -> np.ndarray:
        return chord.to_array() > 0


class HandAlternation(_Alternation):
    """
    Number of times a hand is used in two consecutive chords. A hand is used when any of
    its fingers is pressed.
    """
    name = 'hand_alt'
    description = 'same hand used in consecutive chords'
    size = NUM_HANDS

    def _used(self, chord: Chord) -> np.ndarray:
        return _hands_used(chord)


_ALL_METRICS = (FingerUsage, HandUsage, FingerAlternation, HandAlternation, FingerBalance, HandBalance)
METRICS: dict[str, type[Metric]] = {metric.name: metric for metric in _ALL_METRICS}

# assert that the metric names are all unique
assert len(METRICS) == len(_ALL_METRICS), "Metric names must be unique"


def evaluate(chords: Iterable[Chord], metrics: Iterable[Metric]) -> dict[str, float]:
    """
    Feed every chord, in order, to every metric and return the scores by metric name.
    """
    metrics = list(metrics)
    for chord in chords:
        for metric in metrics:
            metric.update_once(chord)
    return {metric.name: metric.score() for metric in metrics}


if __name__ == "__main__":
    for name, metric in METRICS.items():
        print(f'{name:16} {metric.description}')
