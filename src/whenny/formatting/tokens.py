"""Format tokens and the two pattern dialects' token tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class FieldKind(Enum):
    """Every calendar/clock field a pattern can reference."""

    YEAR = "year"
    YEAR_SHORT = "year_short"
    MONTH_NUMERIC = "month_numeric"
    MONTH_SHORT = "month_short"
    MONTH_FULL = "month_full"
    DAY = "day"
    DAY_ORDINAL = "day_ordinal"
    WEEKDAY_SHORT = "weekday_short"
    WEEKDAY_FULL = "weekday_full"
    HOUR = "hour"
    HOUR12 = "hour12"
    HOUR24 = "hour24"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    AMPM = "ampm"
    UTC_OFFSET = "utc_offset"
    UTC_OFFSET_COMPACT = "utc_offset_compact"
    UTC_OFFSET_SHORT = "utc_offset_short"
    ZONE_ABBREVIATION = "zone_abbreviation"
    TIME = "time"


class CaseVariant(Enum):
    AS_IS = "as_is"
    UPPER = "upper"
    LOWER = "lower"


class Dialect(Enum):
    AUTO = "auto"
    BRACKET = "bracket"
    LETTER = "letter"


@dataclass(frozen=True)
class LiteralToken:
    text: str


@dataclass(frozen=True)
class FieldToken:
    kind: FieldKind
    pad_width: int = 0
    case: CaseVariant = CaseVariant.AS_IS


FormatToken = Union[LiteralToken, FieldToken]
CompiledPattern = Tuple[FormatToken, ...]


def _field(kind: FieldKind, pad_width: int = 0, case: CaseVariant = CaseVariant.AS_IS) -> FieldToken:
    return FieldToken(kind, pad_width, case)


BRACKET_FIELDS: Dict[str, FieldToken] = {
    "year": _field(FieldKind.YEAR, 4),
    "yearShort": _field(FieldKind.YEAR_SHORT, 2),
    "month": _field(FieldKind.MONTH_NUMERIC, 2),
    "monthShort": _field(FieldKind.MONTH_SHORT),
    "monthFull": _field(FieldKind.MONTH_FULL),
    "day": _field(FieldKind.DAY, 2),
    "dayOrdinal": _field(FieldKind.DAY_ORDINAL),
    "weekday": _field(FieldKind.WEEKDAY_FULL),
    "weekdayShort": _field(FieldKind.WEEKDAY_SHORT),
    "hour": _field(FieldKind.HOUR),
    "hour24": _field(FieldKind.HOUR24, 2),
    "hour12": _field(FieldKind.HOUR12),
    "minute": _field(FieldKind.MINUTE, 2),
    "second": _field(FieldKind.SECOND, 2),
    "millisecond": _field(FieldKind.MILLISECOND, 3),
    "ampm": _field(FieldKind.AMPM, case=CaseVariant.LOWER),
    "AMPM": _field(FieldKind.AMPM, case=CaseVariant.UPPER),
    "timezone": _field(FieldKind.ZONE_ABBREVIATION),
    "offset": _field(FieldKind.UTC_OFFSET),
    "offsetShort": _field(FieldKind.UTC_OFFSET_SHORT),
    "time": _field(FieldKind.TIME),
}

LETTER_FIELDS: Dict[str, FieldToken] = {
    "YYYY": _field(FieldKind.YEAR, 4),
    "YY": _field(FieldKind.YEAR_SHORT, 2),
    "MMMM": _field(FieldKind.MONTH_FULL),
    "MMM": _field(FieldKind.MONTH_SHORT),
    "MM": _field(FieldKind.MONTH_NUMERIC, 2),
    "M": _field(FieldKind.MONTH_NUMERIC),
    "Do": _field(FieldKind.DAY_ORDINAL),
    "DD": _field(FieldKind.DAY, 2),
    "D": _field(FieldKind.DAY),
    "dddd": _field(FieldKind.WEEKDAY_FULL),
    "ddd": _field(FieldKind.WEEKDAY_SHORT),
    "HH": _field(FieldKind.HOUR24, 2),
    "H": _field(FieldKind.HOUR24),
    "hh": _field(FieldKind.HOUR12, 2),
    "h": _field(FieldKind.HOUR12),
    "mm": _field(FieldKind.MINUTE, 2),
    "m": _field(FieldKind.MINUTE),
    "ss": _field(FieldKind.SECOND, 2),
    "s": _field(FieldKind.SECOND),
    "SSS": _field(FieldKind.MILLISECOND, 3),
    "A": _field(FieldKind.AMPM, case=CaseVariant.UPPER),
    "a": _field(FieldKind.AMPM, case=CaseVariant.LOWER),
    "ZZ": _field(FieldKind.UTC_OFFSET_COMPACT),
    "Z": _field(FieldKind.UTC_OFFSET),
    "z": _field(FieldKind.ZONE_ABBREVIATION),
}

# longest first so the scanner always takes the greedy match
LETTER_TOKENS_BY_LENGTH: Tuple[str, ...] = tuple(sorted(LETTER_FIELDS, key=len, reverse=True))
