import re
from enum import Enum
from typing import Iterable, Sequence

from hands import Chord
from metrics import METRICS, FingerBalance, HandBalance, Metric, evaluate


class ObjectiveFunction:
    '''
    ObjectiveFunction is a linear combination of metrics. It summarizes, in a single number,
    how good a sequence of chords is, so layouts can be compared on the same text.

    Lower is better, like the metrics it combines. So think of it as cost or effort function.

    ObjectiveFunction allows other ObjectiveFunctions as input to the linear combination.
    '''

    def __init__(
        self,
        metrics: dict['str | ObjectiveFunction', float],
        finger_targets: Sequence[float] | None = None,
        hand_targets: Sequence[float] | None = None,
    ):
        self.metrics: dict[str, float] = {}
        self.finger_targets = finger_targets
        self.hand_targets = hand_targets

        for metric, weight in metrics.items():
            if isinstance(metric, str):
                if metric not in METRICS:
                    raise ValueError(f"Invalid metric: {metric}")
                self.metrics[metric] = self.metrics.get(metric, 0.0) + weight
            elif isinstance(metric, ObjectiveFunction):
                for sub_metric, sub_weight in metric.metrics.items():
                    self.metrics[sub_metric] = self.metrics.get(sub_metric, 0.0) + sub_weight * weight
            else:
                raise ValueError(f"Invalid metric: {metric}")

    def __str__(self):
        formatted_weights = {
            metric: f"{weight:.2f}".strip("0").strip(".").strip("+").strip("-") for metric, weight in self.metrics.items()
        }
        formatted_signs = {metric: '-' if weight < 0 else '+' for metric, weight in self.metrics.items()}

        return ' '.join([
            f"{formatted_signs[metric]} {weight}{metric}" for metric, weight in formatted_weights.items()
        ])

    def __repr__(self):
        return f"ObjectiveFunction({self})"

    def accumulators(self) -> list[Metric]:
        """Fresh accumulators for every metric in the combination."""
        accumulators = []
        for name in self.metrics:
            metric = METRICS[name]
            if metric is FingerBalance:
                accumulators.append(FingerBalance(self.finger_targets))
            elif metric is HandBalance:
                accumulators.append(HandBalance(self.hand_targets))
            else:
                accumulators.append(metric())
        return accumulators

    def analyze(self, chords: Iterable[Chord]) -> dict[str, float]:
        """Score every metric of the combination on the chords."""
        return evaluate(chords, self.accumulators())

    def score(self, chords: Iterable[Chord]) -> float:
        scores = self.analyze(chords)
        return sum(weight * scores[name] for name, weight in self.metrics.items())

    @classmethod
    def from_formula(cls, formula: str, **kwargs) -> 'ObjectiveFunction':
        '''
        Create an ObjectiveFunction from a formula string.

        The formula is a linear combination of metrics:
        [+|-][weight_1]<metric_name_1> [+|- [weight_2]<metric_name_2> ...]

        weight_i is a float.
        metric_name_i is the name of a metric in the METRICS registry.

        Examples:
        finger_alt + 2hand_alt
        finger_usage + 10finger_balance - hand_alt

        Keyword arguments are passed to the constructor (balance targets).
        '''
        metrics = {}
        space_pattern = re.compile(r'\s+')
        sign_pattern = re.compile(r'[+-]')
        float_pattern = re.compile(r'(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')
        metric_names = sorted(METRICS, key=lambda name: -len(name))

        class ParserState(Enum):
            START = 0
            SIGN = 1
            WEIGHT = 2
            METRIC = 3
            END = 4

        def parse_error_message(error: str, i: int, formula: str, state: ParserState) -> str:
            LINE_LEN = 70
            if len(formula) > LINE_LEN:
                start = max(0, i - LINE_LEN//2)
                end = min(len(formula), start + LINE_LEN)
                formula = formula[start:end]
                i -= start

            expected = {
                ParserState.START: "sign, weight, or metric name",
                ParserState.SIGN: "sign +|-",
                ParserState.WEIGHT: "weight (float) or metric name",
                ParserState.METRIC: "metric name",
                ParserState.END: "end of input",
            }

            return "\n".join([
                f"Error: {error}, at position {i}: expected {expected[state]}" if error else f"Error: at position {i}: expected {expected[state]}",
                "",
                f"\t{formula}",
                f"\t{'-' * i}^",
                ""
            ])

        state = ParserState.START

        sign = 1
        weight = 1.0
        i = 0
        while i < len(formula):
            match = space_pattern.match(formula, i)
            if match:
                i = match.end()
                continue

            match = sign_pattern.match(formula, i)
            if match:
                if state == ParserState.START or state == ParserState.SIGN:
                    state = ParserState.WEIGHT
                else:
                    raise ValueError(parse_error_message('', i, formula, state))
                sign = 1 if match.group() == '+' else -1
                i = match.end()
                continue

            match = float_pattern.match(formula, i)
            if match:
                if state in (ParserState.START, ParserState.WEIGHT):
                    state = ParserState.METRIC
                else:
                    raise ValueError(parse_error_message('', i, formula, state))
                weight = float(match.group())
                i = match.end()
                continue

            for metric_name in metric_names:
                if formula.startswith(metric_name, i):
                    i += len(metric_name)
                    break
            else:
                raise ValueError(f"Invalid metric name: {formula[i:]}")

            if state in (ParserState.START, ParserState.WEIGHT, ParserState.METRIC):
                state = ParserState.SIGN
            else:
                raise ValueError(parse_error_message('', i, formula, state))

            if metric_name in metrics:
                raise ValueError(parse_error_message(f"{metric_name} appears multiple times in the formula", i, formula, state))

            metrics[metric_name] = sign * weight
            sign = 1
            weight = 1.0

        if state == ParserState.WEIGHT or state == ParserState.METRIC:
            raise ValueError(parse_error_message("Incomplete formula", i, formula, state))

        if not metrics:
            raise ValueError("Empty formula")

        return cls(metrics, **kwargs)
