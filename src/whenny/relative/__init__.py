"""Relative phrasing, durations and comparisons."""

from .bucketer import (
    Classification,
    Direction,
    ThresholdTable,
    classify,
    phrase,
    relative,
    relative_description,
)
from .compare import Comparison, Distance, compare, distance
from .duration import Duration, parse_duration

__all__ = [
    "Classification",
    "Comparison",
    "Direction",
    "Distance",
    "Duration",
    "ThresholdTable",
    "classify",
    "compare",
    "distance",
    "parse_duration",
    "phrase",
    "relative",
    "relative_description",
]
