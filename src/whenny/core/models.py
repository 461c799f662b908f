"""Time value model shared by the rendering and parsing pipelines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from dateutil import parser as date_parser

from whenny.core.timezone import (
    DEFAULT_RESOLVER,
    ZoneResolver,
    is_valid_instant,
    to_epoch_millis,
    utc_datetime,
)
from whenny.errors import InvalidDateStringError, InvalidInstantError

logger = logging.getLogger(__name__)


Clock = Callable[[], datetime]


@dataclass(frozen=True, order=True)
class TimeValue:
    """An absolute instant with optional provenance.

    ``instant_millis`` is the authoritative UTC epoch millisecond value. The
    origin fields only record where the value came from; they never shift the
    instant. Equality and ordering compare the instant alone.
    """

    instant_millis: int
    origin_zone: Optional[str] = field(default=None, compare=False)
    origin_offset_minutes: Optional[int] = field(default=None, compare=False)

    @classmethod
    def from_datetime(
        cls,
        moment: datetime,
        zone_id: Optional[str] = None,
        *,
        resolver: Optional[ZoneResolver] = None,
    ) -> "TimeValue":
        """Build from a datetime. Naive datetimes are read in ``zone_id`` (UTC when absent)."""
        resolver = resolver or DEFAULT_RESOLVER
        if moment.tzinfo is None:
            if zone_id:
                millis = resolver.from_wall_clock(moment, zone_id)
            else:
                millis = to_epoch_millis(moment.replace(tzinfo=timezone.utc))
        else:
            millis = to_epoch_millis(moment)

        offset = None
        if zone_id:
            offset = resolver.offset_minutes(zone_id, millis)
        elif moment.tzinfo is not None and moment.utcoffset() is not None:
            offset = int(moment.utcoffset().total_seconds() // 60)
        return cls(millis, zone_id, offset)

    @classmethod
    def from_epoch_seconds(cls, seconds: float) -> "TimeValue":
        return cls(int(round(seconds * 1000)))

    @classmethod
    def from_iso(cls, text: str) -> "TimeValue":
        """Parse an ISO 8601 string; strings without an offset are UTC."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidDateStringError("Expected a non-empty ISO 8601 string", input=text)
        try:
            parsed = date_parser.isoparse(text.strip())
        except (ValueError, OverflowError) as exc:
            raise InvalidDateStringError(f"Invalid ISO 8601 date: {exc}", input=text) from exc
        return cls.from_datetime(parsed)

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> "TimeValue":
        moment = clock() if clock is not None else datetime.now(timezone.utc)
        return cls.from_datetime(moment)

    def is_valid(self) -> bool:
        return is_valid_instant(self.instant_millis)

    def to_datetime(self, zone_id: Optional[str] = None, *, resolver: Optional[ZoneResolver] = None) -> datetime:
        """Aware datetime for this instant, in ``zone_id`` or UTC."""
        if zone_id:
            return (resolver or DEFAULT_RESOLVER).to_wall_clock(self.instant_millis, zone_id)
        return utc_datetime(self.instant_millis)

    def to_iso(self) -> str:
        """UTC ISO 8601 string with millisecond precision."""
        return utc_datetime(self.instant_millis).isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def unix(self) -> float:
        return self.instant_millis / 1000

    def with_origin(self, zone_id: str, resolver: Optional[ZoneResolver] = None) -> "TimeValue":
        """Same instant, tagged with ``zone_id`` and its offset at that instant."""
        resolver = resolver or DEFAULT_RESOLVER
        return replace(
            self,
            origin_zone=zone_id,
            origin_offset_minutes=resolver.offset_minutes(zone_id, self.instant_millis),
        )

    def shifted(self, milliseconds: int) -> "TimeValue":
        return replace(self, instant_millis=self.instant_millis + milliseconds)


TimeInput = Union[TimeValue, datetime, int, str]


def coerce_time_value(value: TimeInput) -> TimeValue:
    """Accept the loose input types used by the public entry points."""
    if isinstance(value, TimeValue):
        return value
    if isinstance(value, datetime):
        return TimeValue.from_datetime(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return TimeValue(value)
    if isinstance(value, str):
        return TimeValue.from_iso(value)
    raise InvalidInstantError(
        f"Cannot interpret {type(value).__name__} as a time value",
        input=value,
    )


__all__ = ["Clock", "TimeInput", "TimeValue", "coerce_time_value"]
