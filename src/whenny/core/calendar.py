"""Wall-clock calendar arithmetic.

All helpers take and return aware datetimes. Units smaller than a day move
the absolute instant; days and larger move the wall clock (so "tomorrow" keeps
the same local time across a DST change) with month-end clamping handled by
``relativedelta``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from dateutil import tz
from dateutil.relativedelta import relativedelta

ONE_MILLISECOND = timedelta(milliseconds=1)

EXACT_UNITS = {
    "millisecond": timedelta(milliseconds=1),
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
}

CALENDAR_UNITS = {
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}

BOUNDARY_UNITS = ("day", "week", "month", "year")


def normalize_unit(unit: str) -> str:
    """Accept ``"days"``/``"Day"`` style spellings."""
    name = unit.strip().lower()
    if name.endswith("s") and name[:-1] in EXACT_UNITS.keys() | CALENDAR_UNITS.keys():
        name = name[:-1]
    if name not in EXACT_UNITS and name not in CALENDAR_UNITS:
        raise ValueError(f"Unknown calendar unit: {unit!r}")
    return name


def weekday_index(moment: datetime) -> int:
    """Weekday with Sunday as 0."""
    return (moment.weekday() + 1) % 7


def _settle(moment: datetime) -> datetime:
    # shift wall times that fall into a DST gap forward
    return tz.resolve_imaginary(moment)


def add_time(moment: datetime, amount: int, unit: str) -> datetime:
    unit = normalize_unit(unit)
    if unit in EXACT_UNITS:
        shifted = moment.astimezone(timezone.utc) + EXACT_UNITS[unit] * amount
        return shifted.astimezone(moment.tzinfo)
    return _settle(moment + relativedelta(**{CALENDAR_UNITS[unit]: amount}))


def start_of(moment: datetime, unit: str, *, week_start: int = 0) -> datetime:
    """First instant of the day/week/month/year containing ``moment``.

    ``week_start`` uses Sunday = 0 numbering.
    """
    unit = normalize_unit(unit)
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "day":
        result = midnight
    elif unit == "week":
        back = (weekday_index(moment) - week_start) % 7
        result = midnight - relativedelta(days=back)
    elif unit == "month":
        result = midnight.replace(day=1)
    elif unit == "year":
        result = midnight.replace(month=1, day=1)
    else:
        raise ValueError(f"start_of does not support unit {unit!r}")
    return _settle(result)


def end_of(moment: datetime, unit: str, *, week_start: int = 0) -> datetime:
    """Last millisecond of the period containing ``moment``."""
    first = start_of(moment, unit, week_start=week_start)
    following = _settle(first + relativedelta(**{CALENDAR_UNITS[normalize_unit(unit)]: 1}))
    return (following.astimezone(timezone.utc) - ONE_MILLISECOND).astimezone(moment.tzinfo)


def calendar_days_between(earlier: datetime, later: datetime) -> int:
    """Difference in local calendar dates (``later - earlier``)."""
    return (later.date() - earlier.date()).days


def is_same_day(first: datetime, second: datetime) -> bool:
    return first.date() == second.date()


__all__ = [
    "BOUNDARY_UNITS",
    "add_time",
    "calendar_days_between",
    "end_of",
    "is_same_day",
    "normalize_unit",
    "start_of",
    "weekday_index",
]
