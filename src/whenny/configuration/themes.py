"""Named configuration themes.

A theme is a partial override dict merged over the defaults by
``define_config(theme=...)``. ``casual`` is the default look.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

from whenny.errors import InvalidConfigError


def _rule(predicate: str, strategy: str, pattern: str | None = None, phrase: str | None = None) -> Dict[str, Any]:
    return {"predicate": predicate, "strategy": strategy, "pattern": pattern, "phrase": phrase}


CASUAL: Dict[str, Any] = {}


FORMAL: Dict[str, Any] = {
    "relative": {"just_now": "a moment ago"},
    "smart": {
        "past": [
            _rule("within_minute", "relative", phrase="just_now"),
            _rule("within_hour", "relative"),
            _rule("same_day", "time_only", "{time}", "today_at"),
            _rule("previous_day", "weekday_time", "{time}", "yesterday_at"),
            _rule("within_week", "weekday_time", "{time}", "weekday_at"),
            _rule("same_year", "short_date", "{monthFull} {dayOrdinal}"),
            _rule("else", "long_date", "{monthFull} {dayOrdinal}, {year}"),
        ],
    },
    "formats": {
        "presets": {
            "short": "{monthShort} {dayOrdinal}",
            "long": "{monthFull} {dayOrdinal}, {year}",
            "time": "{hour12}:{minute} {AMPM}",
            "datetime": "{monthFull} {dayOrdinal} at {hour12}:{minute} {AMPM}",
        },
    },
}


TECHNICAL: Dict[str, Any] = {
    "relative": {
        "just_now": "now",
        "past": {
            "seconds": "-{n}s",
            "minutes": "-{n}m",
            "hours": "-{n}h",
            "days": "-{n}d",
            "weeks": "-{n}w",
            "months": "-{n}mo",
            "years": "-{n}y",
        },
        "future": {
            "seconds": "+{n}s",
            "minutes": "+{n}m",
            "hours": "+{n}h",
            "days": "+{n}d",
            "weeks": "+{n}w",
            "months": "+{n}mo",
            "years": "+{n}y",
        },
        "yesterday": "-1d",
        "tomorrow": "+1d",
    },
    "smart": {
        "past": [_rule("else", "long_date", "YYYY-MM-DD[T]HH:mm:ssZ")],
        "future": [_rule("else", "long_date", "YYYY-MM-DD[T]HH:mm:ssZ")],
    },
    "formats": {"hour12": False},
}


MINIMAL: Dict[str, Any] = {
    "relative": {
        "just_now": "now",
        "past": {
            "seconds": "{n}s ago",
            "minutes": "{n}m ago",
            "hours": "{n}h ago",
            "days": "{n}d ago",
            "weeks": "{n}w ago",
            "months": "{n}mo ago",
            "years": "{n}y ago",
        },
        "future": {
            "seconds": "in {n}s",
            "minutes": "in {n}m",
            "hours": "in {n}h",
            "days": "in {n}d",
            "weeks": "in {n}w",
            "months": "in {n}mo",
            "years": "in {n}y",
        },
        "yesterday": "1d ago",
        "tomorrow": "in 1d",
    },
    "smart": {
        "past": [
            _rule("within_minute", "relative", phrase="just_now"),
            _rule("within_hour", "relative"),
            _rule("same_day", "relative"),
            _rule("within_week", "relative"),
            _rule("same_year", "short_date", "{monthShort} {day}"),
            _rule("else", "long_date", "{monthShort} {day}, {yearShort}"),
        ],
    },
}


THEMES: Dict[str, Dict[str, Any]] = {
    "casual": CASUAL,
    "formal": FORMAL,
    "technical": TECHNICAL,
    "minimal": MINIMAL,
}


def available_themes() -> List[str]:
    return sorted(THEMES)


def get_theme(name: str) -> Dict[str, Any]:
    """Override dict for ``name`` (a copy, safe to mutate)."""
    try:
        return copy.deepcopy(THEMES[name])
    except KeyError:
        raise InvalidConfigError(
            f"Unknown theme: {name}",
            input=name,
            hints=[f"Available themes: {', '.join(available_themes())}"],
        ) from None


__all__ = ["THEMES", "available_themes", "get_theme"]
