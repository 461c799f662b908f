"""Render compiled token tuples against a time value.

Rendering never reads the clock: the output is a pure function of the
tokens, the value, the locale and the display zone.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from whenny.core.models import TimeValue
from whenny.core.timezone import DEFAULT_RESOLVER, ZoneResolver, format_offset, format_offset_short
from whenny.errors import InvalidInstantError
from whenny.formatting.tokens import CaseVariant, CompiledPattern, FieldKind, FieldToken, LiteralToken
from whenny.i18n.locales import LocaleTable

DEFAULT_DISPLAY_ZONE = "UTC"


def format_ordinal(n: int) -> str:
    """``1 -> "1st"``, ``11 -> "11th"``, ``22 -> "22nd"``, ``112 -> "112th"``."""
    if 11 <= abs(n) % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(abs(n) % 10, "th")
    return f"{n}{suffix}"


def display_zone(value: TimeValue, zone_id: Optional[str] = None) -> str:
    """Zone a value is shown in: explicit zone, then its origin zone, then UTC."""
    return zone_id or value.origin_zone or DEFAULT_DISPLAY_ZONE


def render(
    tokens: CompiledPattern,
    value: TimeValue,
    locale: LocaleTable,
    *,
    zone_id: Optional[str] = None,
    resolver: Optional[ZoneResolver] = None,
    hour12: bool = True,
) -> str:
    if not isinstance(value, TimeValue) or not value.is_valid():
        raise InvalidInstantError(
            "Cannot render an invalid time value",
            input=getattr(value, "instant_millis", value),
        )
    resolver = resolver or DEFAULT_RESOLVER
    zone = display_zone(value, zone_id)
    wall = resolver.to_wall_clock(value.instant_millis, zone)
    context = _RenderContext(value, wall, zone, locale, resolver, hour12)

    parts = []
    for token in tokens:
        if isinstance(token, LiteralToken):
            parts.append(token.text)
        else:
            parts.append(context.field(token))
    return "".join(parts)


class _RenderContext:
    def __init__(
        self,
        value: TimeValue,
        wall: datetime,
        zone: str,
        locale: LocaleTable,
        resolver: ZoneResolver,
        hour12: bool,
    ) -> None:
        self.value = value
        self.wall = wall
        self.zone = zone
        self.locale = locale
        self.resolver = resolver
        self.hour12 = hour12

    def field(self, token: FieldToken) -> str:
        text = self._raw(token.kind)
        if isinstance(text, int):
            text = str(text).zfill(token.pad_width) if token.pad_width else str(text)
        if token.case is CaseVariant.UPPER:
            return text.upper()
        if token.case is CaseVariant.LOWER:
            return text.lower()
        return text

    def _offset_minutes(self) -> int:
        offset = self.wall.utcoffset()
        return int(offset.total_seconds() // 60) if offset is not None else 0

    def _raw(self, kind: FieldKind):
        wall = self.wall
        if kind is FieldKind.YEAR:
            return wall.year
        if kind is FieldKind.YEAR_SHORT:
            return wall.year % 100
        if kind is FieldKind.MONTH_NUMERIC:
            return wall.month
        if kind is FieldKind.MONTH_SHORT:
            return self.locale.months_short[wall.month - 1]
        if kind is FieldKind.MONTH_FULL:
            return self.locale.months_full[wall.month - 1]
        if kind is FieldKind.DAY:
            return wall.day
        if kind is FieldKind.DAY_ORDINAL:
            return format_ordinal(wall.day)
        if kind is FieldKind.WEEKDAY_SHORT:
            return self.locale.weekdays_short[(wall.weekday() + 1) % 7]
        if kind is FieldKind.WEEKDAY_FULL:
            return self.locale.weekdays_full[(wall.weekday() + 1) % 7]
        if kind is FieldKind.HOUR:
            return str(wall.hour % 12 or 12) if self.hour12 else f"{wall.hour:02d}"
        if kind is FieldKind.HOUR12:
            return wall.hour % 12 or 12
        if kind is FieldKind.HOUR24:
            return wall.hour
        if kind is FieldKind.MINUTE:
            return wall.minute
        if kind is FieldKind.SECOND:
            return wall.second
        if kind is FieldKind.MILLISECOND:
            return wall.microsecond // 1000
        if kind is FieldKind.AMPM:
            return "AM" if wall.hour < 12 else "PM"
        if kind is FieldKind.UTC_OFFSET:
            return format_offset(self._offset_minutes())
        if kind is FieldKind.UTC_OFFSET_COMPACT:
            return format_offset(self._offset_minutes(), separator="")
        if kind is FieldKind.UTC_OFFSET_SHORT:
            return format_offset_short(self._offset_minutes())
        if kind is FieldKind.ZONE_ABBREVIATION:
            return self.resolver.abbreviation(self.zone, self.value.instant_millis)
        if kind is FieldKind.TIME:
            if self.hour12:
                meridiem = "AM" if wall.hour < 12 else "PM"
                return f"{wall.hour % 12 or 12}:{wall.minute:02d} {meridiem}"
            return f"{wall.hour:02d}:{wall.minute:02d}"
        raise ValueError(f"Unhandled field kind: {kind}")


__all__ = ["DEFAULT_DISPLAY_ZONE", "display_zone", "format_ordinal", "render"]
