"""Durations and their renderings ("1 hour, 30 minutes", "1h 30m", "1:30:00")."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from whenny.configuration.settings import get_config, resolve_locale
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.errors import ParseFailedError
from whenny.i18n.locales import LocaleTable

LONG_SEPARATOR = ", "
COMPACT_SEPARATOR = " "

_DURATION_PARTS = (
    (re.compile(r"(\d+(?:\.\d+)?)\s*h(?:ours?|rs?)?\b", re.IGNORECASE), 3600),
    (re.compile(r"(\d+(?:\.\d+)?)\s*m(?:in(?:ute)?s?)?\b", re.IGNORECASE), 60),
    (re.compile(r"(\d+(?:\.\d+)?)\s*s(?:ec(?:ond)?s?)?\b", re.IGNORECASE), 1),
)
_PLAIN_NUMBER = re.compile(r"^\s*\d+(?:\.\d+)?\s*$")


@dataclass(frozen=True)
class Duration:
    """A non-negative whole number of seconds."""

    total_seconds: int

    @classmethod
    def from_seconds(cls, seconds: float) -> "Duration":
        return cls(abs(int(seconds)))

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> "Duration":
        return cls(abs(int(milliseconds)) // 1000)

    @classmethod
    def between(cls, first: TimeInput, second: TimeInput) -> "Duration":
        a = coerce_time_value(first)
        b = coerce_time_value(second)
        return cls.from_milliseconds(b.instant_millis - a.instant_millis)

    @classmethod
    def until(cls, value: TimeInput, *, reference: Optional[TimeInput] = None) -> "Duration":
        return cls.between(reference if reference is not None else TimeValue.now(), value)

    @classmethod
    def since(cls, value: TimeInput, *, reference: Optional[TimeInput] = None) -> "Duration":
        return cls.between(value, reference if reference is not None else TimeValue.now())

    @property
    def hours(self) -> int:
        return self.total_seconds // 3600

    @property
    def minutes(self) -> int:
        return (self.total_seconds % 3600) // 60

    @property
    def seconds(self) -> int:
        return self.total_seconds % 60

    @property
    def total_minutes(self) -> int:
        return self.total_seconds // 60

    @property
    def total_hours(self) -> int:
        return self.total_seconds // 3600

    def long(self, locale: Optional[LocaleTable] = None) -> str:
        """``"1 hour, 30 minutes"``; zero renders as ``"0 seconds"``."""
        locale = locale or resolve_locale(get_config())
        parts: List[str] = []
        if self.hours:
            parts.append(locale.duration_phrase("hours", self.hours))
        if self.minutes:
            parts.append(locale.duration_phrase("minutes", self.minutes))
        if self.seconds or not parts:
            parts.append(locale.duration_phrase("seconds", self.seconds))
        return LONG_SEPARATOR.join(parts)

    def compact(self) -> str:
        """``"1h 30m"``; minutes are kept when hours are shown."""
        parts: List[str] = []
        if self.hours:
            parts.append(f"{self.hours}h")
        if self.minutes or self.hours:
            parts.append(f"{self.minutes}m")
        if self.seconds or not parts:
            parts.append(f"{self.seconds}s")
        return COMPACT_SEPARATOR.join(parts)

    def brief(self) -> str:
        """Like ``compact`` but seconds only appear under a minute."""
        parts: List[str] = []
        if self.hours:
            parts.append(f"{self.hours}h")
        if self.minutes or self.hours:
            parts.append(f"{self.minutes}m")
        if not parts:
            parts.append(f"{self.seconds}s")
        return COMPACT_SEPARATOR.join(parts)

    def clock(self) -> str:
        if self.hours:
            return f"{self.hours}:{self.minutes:02d}:{self.seconds:02d}"
        return f"{self.minutes}:{self.seconds:02d}"

    def timer(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def minimal(self) -> str:
        if self.hours:
            return f"{self.hours}h"
        if self.minutes:
            return f"{self.minutes}m"
        return f"{self.seconds}s"

    def human(self, locale: Optional[LocaleTable] = None) -> str:
        """Approximate wording: hours round to the nearest hour."""
        locale = locale or resolve_locale(get_config())
        if self.hours:
            hours = self.hours + 1 if self.minutes >= 30 else self.hours
            return locale.template("about", time=locale.duration_phrase("hours", hours))
        if self.minutes:
            return locale.duration_phrase("minutes", self.minutes)
        return locale.duration_phrase("seconds", self.seconds)


def parse_duration(text: str) -> float:
    """Seconds in ``"1h 30m"``, ``"45 sec"`` or a plain number.

    Raises ``ParseFailedError`` when nothing in ``text`` reads as a duration.
    """
    total = 0.0
    matched = False
    for pattern, multiplier in _DURATION_PARTS:
        match = pattern.search(text)
        if match:
            total += float(match.group(1)) * multiplier
            matched = True
    if matched:
        return total
    if _PLAIN_NUMBER.match(text):
        return float(text)
    raise ParseFailedError(text)


__all__ = ["Duration", "parse_duration"]
