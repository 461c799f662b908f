"""Normalise natural-language input into lowercase words."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

WEEKDAYS: Tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

WEEKDAY_ALIASES: Dict[str, int] = {name: index for index, name in enumerate(WEEKDAYS)}
WEEKDAY_ALIASES.update({name[:3]: index for index, name in enumerate(WEEKDAYS)})
WEEKDAY_ALIASES.update({"tues": 2, "wed": 3, "thur": 4, "thurs": 4})

NUMBER_WORDS: Dict[str, int] = {
    "a": 1,
    "an": 1,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
}

UNIT_ALIASES: Dict[str, str] = {
    "second": "second",
    "seconds": "second",
    "sec": "second",
    "secs": "second",
    "minute": "minute",
    "minutes": "minute",
    "min": "minute",
    "mins": "minute",
    "hour": "hour",
    "hours": "hour",
    "hr": "hour",
    "hrs": "hour",
    "day": "day",
    "days": "day",
    "week": "week",
    "weeks": "week",
    "month": "month",
    "months": "month",
    "year": "year",
    "years": "year",
}

PERIOD_UNITS = ("day", "week", "month", "year")
QUALIFIERS = ("next", "last", "this")
TIMES_OF_DAY = ("morning", "afternoon", "evening", "night")
FILLER_WORDS = frozenset({"on", "and"})

CLOCK_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?(am|pm)?$")

_MERIDIEM_DOTS = re.compile(r"\b([ap])\.m\.?")
_PUNCTUATION = re.compile(r"[,;!?]|\.(?!\d)")


def normalize(text: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    lowered = _MERIDIEM_DOTS.sub(r"\1m", text.lower())
    return " ".join(_PUNCTUATION.sub(" ", lowered).split())


def tokenize(text: str) -> List[str]:
    normalized = normalize(text)
    return normalized.split(" ") if normalized else []


def parse_number(word: str) -> Optional[int]:
    if word.isdigit():
        return int(word)
    return NUMBER_WORDS.get(word)


def parse_unit(word: str) -> Optional[str]:
    return UNIT_ALIASES.get(word)


def parse_weekday(word: str) -> Optional[int]:
    return WEEKDAY_ALIASES.get(word)


__all__ = [
    "CLOCK_RE",
    "FILLER_WORDS",
    "NUMBER_WORDS",
    "PERIOD_UNITS",
    "QUALIFIERS",
    "TIMES_OF_DAY",
    "UNIT_ALIASES",
    "WEEKDAYS",
    "normalize",
    "parse_number",
    "parse_unit",
    "parse_weekday",
    "tokenize",
]
