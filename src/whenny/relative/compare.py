"""Compare two time values and describe the gap between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from whenny.configuration.settings import WhennyConfig, get_config, resolve_locale
from whenny.core.calendar import is_same_day
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.i18n.locales import LocaleTable
from whenny.relative.bucketer import ThresholdTable, relative_description

_UNIT_MILLIS = {
    "second": 1000,
    "minute": 60_000,
    "hour": 3_600_000,
    "day": 86_400_000,
}


def _truncate(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


@dataclass(frozen=True)
class Comparison:
    """``first`` measured against ``second``; negative differences mean ``first`` is earlier."""

    first: TimeValue
    second: TimeValue
    locale: LocaleTable
    table: ThresholdTable
    zone_id: str = "UTC"

    @property
    def difference_millis(self) -> int:
        return self.first.instant_millis - self.second.instant_millis

    def milliseconds(self) -> int:
        return self.difference_millis

    def seconds(self) -> int:
        return _truncate(self.difference_millis, 1000)

    def minutes(self) -> int:
        return _truncate(self.difference_millis, _UNIT_MILLIS["minute"])

    def hours(self) -> int:
        return _truncate(self.difference_millis, _UNIT_MILLIS["hour"])

    def days(self) -> int:
        return _truncate(self.difference_millis, _UNIT_MILLIS["day"])

    def is_before(self) -> bool:
        return self.difference_millis < 0

    def is_after(self) -> bool:
        return self.difference_millis > 0

    def is_same(self, unit: Optional[str] = None) -> bool:
        """Same instant, or within one ``unit``; ``"day"`` compares calendar dates in ``zone_id``."""
        if unit is None:
            return self.difference_millis == 0
        if unit == "day":
            return is_same_day(self.first.to_datetime(self.zone_id), self.second.to_datetime(self.zone_id))
        if unit not in _UNIT_MILLIS:
            raise ValueError(f"Unsupported comparison unit: {unit!r}")
        return abs(self.difference_millis) < _UNIT_MILLIS[unit]

    def smart(self) -> str:
        """``"3 days before"``, ``"2 hours after"`` or ``"at the same time"``."""
        seconds = self.seconds()
        if seconds == 0:
            return self.locale.template("simultaneous")
        description = relative_description(seconds, self.locale, self.table)
        return self.locale.template("before" if seconds < 0 else "after", time=description)


@dataclass(frozen=True)
class Distance:
    """Unsigned gap between two values, split into days/hours/minutes/seconds."""

    total_seconds: int
    locale: LocaleTable

    @property
    def days(self) -> int:
        return self.total_seconds // 86400

    @property
    def hours(self) -> int:
        return (self.total_seconds % 86400) // 3600

    @property
    def minutes(self) -> int:
        return (self.total_seconds % 3600) // 60

    @property
    def seconds(self) -> int:
        return self.total_seconds % 60

    def human(self) -> str:
        """Most significant unit only."""
        for unit, amount in (("days", self.days), ("hours", self.hours), ("minutes", self.minutes)):
            if amount:
                return self.locale.duration_phrase(unit, amount)
        return self.locale.duration_phrase("seconds", self.seconds)

    def exact(self) -> str:
        parts: List[str] = []
        for unit, amount in (("days", self.days), ("hours", self.hours), ("minutes", self.minutes)):
            if amount:
                parts.append(self.locale.duration_phrase(unit, amount))
        if self.seconds and len(parts) < 2:
            parts.append(self.locale.duration_phrase("seconds", self.seconds))
        if not parts:
            return self.locale.duration_phrase("seconds", 0)
        return ", ".join(parts)


def compare(
    first: TimeInput,
    second: TimeInput,
    *,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> Comparison:
    config = config or get_config()
    return Comparison(
        coerce_time_value(first),
        coerce_time_value(second),
        resolve_locale(config),
        ThresholdTable.from_config(config),
        zone_id or config.default_timezone,
    )


def distance(first: TimeInput, second: TimeInput, *, config: Optional[WhennyConfig] = None) -> Distance:
    config = config or get_config()
    a = coerce_time_value(first)
    b = coerce_time_value(second)
    return Distance(abs(a.instant_millis - b.instant_millis) // 1000, resolve_locale(config))


__all__ = ["Comparison", "Distance", "compare", "distance"]
