'''
These classes describe what the hands do to type a character on a chorded keyboard.

A chord is the set of fingers pressed together. Fingers are indexed pinky to thumb
on both hands:

     0 1 2 3 4    5 6 7 8 9
     P R M I T    P R M I T
       left         right
'''

from dataclasses import dataclass
from enum import Enum, unique
from itertools import combinations
from typing import Iterable, Iterator

import numpy as np

FINGERS_PER_HAND = 5
NUM_FINGERS = 2 * FINGERS_PER_HAND


@unique
class Hand(Enum):
    """
    Represent the hand of a keyboard user.
    """
    LEFT = 0
    RIGHT = 1

    @property
    def slots(self) -> range:
        """Chord positions that belong to this hand."""
        return range(self.value * FINGERS_PER_HAND, (self.value + 1) * FINGERS_PER_HAND)


@unique
class FingerType(Enum):
    """
    Represent the type of a finger.
    """
    PINKY = 0
    RING = 1
    MIDDLE = 2
    INDEX = 3
    THUMB = 4


@unique
class Finger(Enum):
    """
    Represent a finger by its position in a chord.
    """
    LP = 0
    LR = 1
    LM = 2
    LI = 3
    LT = 4

    RP = 5
    RR = 6
    RM = 7
    RI = 8
    RT = 9

    @property
    def hand(self) -> Hand:
        """Return the hand that owns this finger."""
        return Hand(self.value // FINGERS_PER_HAND)

    @property
    def type(self) -> FingerType:
        return FingerType(self.value % FINGERS_PER_HAND)

    @property
    def is_thumb(self) -> bool:
        return self.type == FingerType.THUMB


THUMBS = (Finger.LT, Finger.RT)
NON_THUMBS = tuple(finger for finger in Finger if not finger.is_thumb)


@unique
class FingerState(Enum):
    """
    Represent the state of a single finger, pressed or released.
    """
    RELEASED = 0
    PRESSED = 1

    @classmethod
    def from_value(cls, value: 'FingerState | bool | int') -> 'FingerState':
        """
        Convert a bool or an int to a finger state. Any positive int is pressed.
        """
        if isinstance(value, FingerState):
            return value
        if isinstance(value, bool):
            return cls.PRESSED if value else cls.RELEASED
        if isinstance(value, (int, np.integer)):
            return cls.PRESSED if value > 0 else cls.RELEASED
        raise ValueError(f"Cannot convert {value!r} to a finger state")

    @property
    def is_pressed(self) -> bool:
        return self is FingerState.PRESSED

    @property
    def is_released(self) -> bool:
        return self is FingerState.RELEASED

    def __bool__(self) -> bool:
        return self.is_pressed

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return '|' if self.is_pressed else '.'


@dataclass(frozen=True)
class Chord:
    """
    Represent the state of both hands: exactly ten finger states, left hand first.

    Attributes
    ----------
    states : tuple[FingerState, ...]
        The state of each finger, indexed as in ``Finger``.
    """
    states: tuple[FingerState, ...]

    def __init__(self, states: Iterable['FingerState | bool | int'] | None = None):
        if states is None:
            states = (FingerState.RELEASED,) * NUM_FINGERS
        states = tuple(FingerState.from_value(state) for state in states)
        if len(states) != NUM_FINGERS:
            raise ValueError(f"A chord has exactly {NUM_FINGERS} finger states, got {len(states)}")
        object.__setattr__(self, 'states', states)

    @classmethod
    def from_ints(cls, values: Iterable[int]) -> 'Chord':
        return cls(values)

    @classmethod
    def from_fingers(cls, *fingers: 'Finger | int') -> 'Chord':
        """Create a chord with exactly the given fingers pressed."""
        pressed = {Finger(finger).value for finger in fingers}
        return cls(i in pressed for i in range(NUM_FINGERS))

    @classmethod
    def parse(cls, text: str) -> 'Chord':
        """
        Parse the string form of a chord, e.g. ``'|.... ....|'``. Whitespace is ignored.
        """
        if not isinstance(text, str):
            raise ValueError(f"Chord string expected, got {type(text).__name__}: {text!r}")
        symbols = ''.join(text.split())
        if any(symbol not in '|.' for symbol in symbols):
            raise ValueError(f"Invalid chord string: {text!r}")
        return cls(symbol == '|' for symbol in symbols)

    def __getitem__(self, index: 'Finger | int') -> FingerState:
        if isinstance(index, Finger):
            index = index.value
        return self.states[index]

    def __iter__(self) -> Iterator[FingerState]:
        return iter(self.states)

    def __len__(self) -> int:
        return NUM_FINGERS

    def __or__(self, other: 'Chord') -> 'Chord':
        return self.combine(other)

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.left) + ' ' + ''.join(str(s) for s in self.right)

    def __repr__(self) -> str:
        return f"Chord('{self}')"

    def combine(self, other: 'Chord') -> 'Chord':
        """
        Return a chord where a finger is pressed if it is pressed in either chord.
        """
        return Chord(a.is_pressed or b.is_pressed for a, b in zip(self.states, other.states))

    def count_pressed(self) -> int:
        return sum(int(state) for state in self.states)

    def pressed_fingers(self) -> list[Finger]:
        return [Finger(i) for i, state in enumerate(self.states) if state.is_pressed]

    @property
    def left(self) -> tuple[FingerState, ...]:
        return self.states[:FINGERS_PER_HAND]

    @property
    def right(self) -> tuple[FingerState, ...]:
        return self.states[FINGERS_PER_HAND:]

    def hands(self) -> tuple[tuple[FingerState, ...], tuple[FingerState, ...]]:
        """Return the finger states of the left then the right hand."""
        return self.left, self.right

    def hand_used(self, hand: Hand) -> bool:
        return any(self.states[i].is_pressed for i in hand.slots)

    def to_array(self) -> np.ndarray:
        """Return the chord as an int64 vector of 0/1."""
        return np.fromiter((int(state) for state in self.states), dtype=np.int64, count=NUM_FINGERS)


EMPTY = Chord()
LEFT_THUMB = Chord.from_fingers(Finger.LT)
RIGHT_THUMB = Chord.from_fingers(Finger.RT)


# Chord spaces. Each generator enumerates in nested ascending finger order, so calling it
# again restarts the same sequence.

def one_key_no_thumbs() -> Iterator[Chord]:
    """Chords with a single non-thumb finger pressed (8 chords)."""
    for finger in NON_THUMBS:
        yield Chord.from_fingers(finger)


def two_keys_no_thumbs() -> Iterator[Chord]:
    """Chords with two distinct non-thumb fingers pressed (28 chords)."""
    for a, b in combinations(NON_THUMBS, 2):
        yield Chord.from_fingers(a, b)


def no_thumbs() -> Iterator[Chord]:
    """Chords with one or two non-thumb fingers pressed (36 chords)."""
    yield from one_key_no_thumbs()
    yield from two_keys_no_thumbs()


def with_thumbs() -> Iterator[Chord]:
    """
    The no-thumbs space, then the same space with the left thumb added, then with the
    right thumb added (108 chords).
    """
    yield from no_thumbs()
    for thumb in (LEFT_THUMB, RIGHT_THUMB):
        for chord in no_thumbs():
            yield chord.combine(thumb)


def all_states() -> Iterator[Chord]:
    """The with-thumbs space plus the two bare thumb chords (110 chords)."""
    yield from with_thumbs()
    yield LEFT_THUMB
    yield RIGHT_THUMB


def one_or_two_keys() -> Iterator[Chord]:
    """Chords with one or two of any of the ten fingers pressed (55 chords)."""
    for i in range(NUM_FINGERS):
        for j in range(i, NUM_FINGERS):
            yield Chord.from_fingers(i, j)


if __name__ == "__main__":
    for name, space in [
        ('one key, no thumbs', one_key_no_thumbs),
        ('two keys, no thumbs', two_keys_no_thumbs),
        ('no thumbs', no_thumbs),
        ('with thumbs', with_thumbs),
        ('all states', all_states),
    ]:
        chords = list(space())
        print(f'{name}: {len(chords)}')
        print('  ' + '  '.join(str(chord) for chord in chords[:4]) + '  ...')
