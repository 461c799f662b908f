"""Duration bucketing for relative phrases ("5 minutes ago", "in 3 days").

The bucketer itself is language-agnostic: ``classify`` maps an elapsed
number of seconds onto a bucket of the threshold table and a magnitude,
and ``phrase`` asks the locale table to word it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from whenny.configuration.settings import (
    DEFAULT_THRESHOLDS,
    ThresholdEntry,
    WhennyConfig,
    check_threshold_order,
    get_config,
    resolve_locale,
)
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.errors import InvalidConfigError
from whenny.i18n.locales import LocaleTable

logger = logging.getLogger(__name__)


JUST_NOW_BUCKET = "justNow"
DAY_BUCKET = "days"
MINUTE_SECONDS = 60


class Direction(Enum):
    PAST = "past"
    FUTURE = "future"


@dataclass(frozen=True)
class Classification:
    bucket_name: str
    magnitude: int


class ThresholdTable:
    """Ordered, validated threshold entries."""

    def __init__(self, entries: Iterable[ThresholdEntry]) -> None:
        entries = tuple(entries)
        try:
            check_threshold_order(entries)
        except ValueError as exc:
            raise InvalidConfigError(str(exc), input=[entry.bucket_name for entry in entries]) from exc
        self.entries: Tuple[ThresholdEntry, ...] = entries

    @classmethod
    def default(cls) -> "ThresholdTable":
        return cls(DEFAULT_THRESHOLDS)

    @classmethod
    def from_config(cls, config: WhennyConfig) -> "ThresholdTable":
        return cls(config.relative.thresholds)

    @property
    def bucket_names(self) -> Tuple[str, ...]:
        return tuple(entry.bucket_name for entry in self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


DEFAULT_TABLE = ThresholdTable.default()


def classify(elapsed_seconds: int, table: Optional[ThresholdTable] = None) -> Classification:
    """Bucket and magnitude for a signed elapsed duration.

    Only the absolute value matters here; the sign becomes the direction in
    ``phrase``. Buckets measured in minutes or larger never report zero.
    """
    table = table or DEFAULT_TABLE
    seconds = abs(int(elapsed_seconds))
    for entry in table.entries:
        if entry.cutoff_seconds is None or seconds < entry.cutoff_seconds:
            magnitude = seconds // entry.unit_seconds
            if entry.unit_seconds >= MINUTE_SECONDS:
                magnitude = max(magnitude, 1)
            return Classification(entry.bucket_name, magnitude)
    raise InvalidConfigError("Threshold table has no unbounded bucket")  # pragma: no cover


def direction_between(target: TimeValue, reference: TimeValue) -> Direction:
    return Direction.FUTURE if target.instant_millis > reference.instant_millis else Direction.PAST


def elapsed_seconds_between(target: TimeValue, reference: TimeValue) -> int:
    """``reference - target`` in whole seconds, truncated toward zero."""
    delta_ms = reference.instant_millis - target.instant_millis
    seconds = abs(delta_ms) // 1000
    return seconds if delta_ms >= 0 else -seconds


def phrase(bucket_name: str, magnitude: int, direction: Direction, locale: LocaleTable) -> str:
    if bucket_name == DAY_BUCKET and magnitude == 1:
        return locale.tomorrow if direction is Direction.FUTURE else locale.yesterday
    if direction is Direction.FUTURE:
        return locale.future_phrase(bucket_name, magnitude)
    return locale.past_phrase(bucket_name, magnitude)


def relative(
    value: TimeInput,
    reference: Optional[TimeInput] = None,
    *,
    config: Optional[WhennyConfig] = None,
    locale: Optional[LocaleTable] = None,
) -> str:
    """Relative phrase for ``value`` seen from ``reference`` (default: now)."""
    config = config or get_config()
    locale = locale or resolve_locale(config)
    target = coerce_time_value(value)
    ref = coerce_time_value(reference) if reference is not None else TimeValue.now()

    elapsed = elapsed_seconds_between(target, ref)
    classification = classify(elapsed, ThresholdTable.from_config(config))
    direction = direction_between(target, ref)
    logger.debug(
        "relative: elapsed=%ss bucket=%s magnitude=%s direction=%s",
        elapsed,
        classification.bucket_name,
        classification.magnitude,
        direction.value,
    )
    return phrase(classification.bucket_name, classification.magnitude, direction, locale)


def relative_description(
    seconds: int,
    locale: LocaleTable,
    table: Optional[ThresholdTable] = None,
) -> str:
    """Direction-free wording of a duration ("3 days"), used by comparisons."""
    classification = classify(seconds, table)
    if classification.bucket_name == JUST_NOW_BUCKET:
        return locale.duration_phrase("seconds", abs(seconds))
    return locale.duration_phrase(classification.bucket_name, classification.magnitude)


__all__ = [
    "Classification",
    "DEFAULT_TABLE",
    "Direction",
    "ThresholdTable",
    "classify",
    "direction_between",
    "elapsed_seconds_between",
    "phrase",
    "relative",
    "relative_description",
]
