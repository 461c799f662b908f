"""Timezone lookups backed by the IANA database through ``dateutil.tz``.

The rest of the package only needs two questions answered about a zone at an
instant (its UTC offset and its abbreviation) plus conversion between epoch
milliseconds and wall-clock datetimes. ``ZoneResolver`` is that seam.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List

from dateutil import tz

from whenny.errors import InvalidInstantError, InvalidTimezoneError

logger = logging.getLogger(__name__)


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)

# datetime covers years 1..9999
MIN_INSTANT_MILLIS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // ONE_MILLISECOND
MAX_INSTANT_MILLIS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - EPOCH) // ONE_MILLISECOND

UTC_ALIASES = {"utc", "z", "etc/utc", "gmt", "etc/gmt"}


COMMON_ZONES = [
    # Americas
    "America/New_York",
    "America/Chicago",
    "America/Denver",
    "America/Los_Angeles",
    "America/Anchorage",
    "America/Phoenix",
    "America/Toronto",
    "America/Mexico_City",
    "America/Sao_Paulo",
    # Europe
    "Europe/London",
    "Europe/Paris",
    "Europe/Berlin",
    "Europe/Madrid",
    "Europe/Moscow",
    # Asia
    "Asia/Tokyo",
    "Asia/Shanghai",
    "Asia/Singapore",
    "Asia/Kolkata",
    "Asia/Dubai",
    # Oceania
    "Australia/Sydney",
    "Pacific/Auckland",
    "Pacific/Honolulu",
    # Africa
    "Africa/Cairo",
    "Africa/Johannesburg",
    "UTC",
]


def common_zones() -> List[str]:
    """Frequently used IANA zone identifiers."""
    return list(COMMON_ZONES)


def format_offset(offset_minutes: int, *, separator: str = ":") -> str:
    """Format an offset in minutes as ``+HH:MM`` (or ``+HHMM`` with no separator)."""
    sign = "-" if offset_minutes < 0 else "+"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def format_offset_short(offset_minutes: int) -> str:
    """Format an offset as whole hours, e.g. ``-5`` or ``+9``."""
    hours = abs(offset_minutes) // 60
    return f"-{hours}" if offset_minutes < 0 else f"+{hours}"


class ZoneResolver:
    """Resolve IANA zone identifiers and convert instants to wall clock.

    Stateless apart from dateutil's own zone cache, so a single instance can be
    shared across threads.
    """

    def get_zone(self, zone_id: str) -> tzinfo:
        if not isinstance(zone_id, str) or not zone_id.strip():
            raise InvalidTimezoneError(zone_id)
        if zone_id.strip().lower() in UTC_ALIASES:
            return tz.UTC
        zone = tz.gettz(zone_id)
        if zone is None:
            raise InvalidTimezoneError(zone_id)
        return zone

    def is_valid_zone(self, zone_id: str) -> bool:
        try:
            self.get_zone(zone_id)
        except InvalidTimezoneError:
            return False
        return True

    def to_wall_clock(self, instant_millis: int, zone_id: str) -> datetime:
        """Aware datetime for the instant, expressed in ``zone_id``."""
        return utc_datetime(instant_millis).astimezone(self.get_zone(zone_id))

    def from_wall_clock(self, wall: datetime, zone_id: str) -> int:
        """Epoch milliseconds for a wall-clock datetime in ``zone_id``.

        Nonexistent local times (spring-forward gaps) are shifted forward past
        the gap; ambiguous ones take the first occurrence.
        """
        zone = self.get_zone(zone_id)
        localized = tz.resolve_imaginary(wall.replace(tzinfo=zone))
        return to_epoch_millis(localized)

    def offset_minutes(self, zone_id: str, instant_millis: int) -> int:
        offset = self.to_wall_clock(instant_millis, zone_id).utcoffset() or timedelta(0)
        return int(offset.total_seconds() // 60)

    def abbreviation(self, zone_id: str, instant_millis: int) -> str:
        wall = self.to_wall_clock(instant_millis, zone_id)
        name = wall.tzname()
        if not name:
            return "GMT" + format_offset_short(self.offset_minutes(zone_id, instant_millis))
        return name


def utc_datetime(instant_millis: int) -> datetime:
    """Aware UTC datetime for epoch milliseconds."""
    if not is_valid_instant(instant_millis):
        raise InvalidInstantError(
            "Instant is not a representable epoch millisecond value",
            input=instant_millis,
        )
    return EPOCH + timedelta(milliseconds=instant_millis)


def to_epoch_millis(moment: datetime) -> int:
    """Epoch milliseconds for an aware datetime (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - EPOCH) // ONE_MILLISECOND


def is_valid_instant(instant_millis: object) -> bool:
    if isinstance(instant_millis, bool) or not isinstance(instant_millis, int):
        return False
    return MIN_INSTANT_MILLIS <= instant_millis <= MAX_INSTANT_MILLIS


DEFAULT_RESOLVER = ZoneResolver()


def offset_minutes(zone_id: str, instant_millis: int) -> int:
    return DEFAULT_RESOLVER.offset_minutes(zone_id, instant_millis)


def abbreviation(zone_id: str, instant_millis: int) -> str:
    return DEFAULT_RESOLVER.abbreviation(zone_id, instant_millis)


__all__ = [
    "COMMON_ZONES",
    "DEFAULT_RESOLVER",
    "ZoneResolver",
    "abbreviation",
    "common_zones",
    "format_offset",
    "format_offset_short",
    "is_valid_instant",
    "offset_minutes",
    "to_epoch_millis",
    "utc_datetime",
]
