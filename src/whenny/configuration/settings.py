"""Typed configuration for Whenny.

Configuration is a tree of frozen Pydantic models. Library calls take an
explicit ``config`` argument or read the process-wide snapshot returned by
``get_config()``; ``configure()`` replaces that snapshot with a newly
validated one in a single assignment, so concurrent readers always see a
complete configuration.

The JSON file helpers at the bottom exist for the CLI; the library itself
never reads from disk.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from whenny.core.timezone import DEFAULT_RESOLVER
from whenny.errors import InvalidConfigError
from whenny.i18n.locales import LocaleTable, counted, fixed, get_locale

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".whenny" / "config.json"


# =============================================================================
# Relative time
# =============================================================================


class ThresholdEntry(BaseModel):
    """One row of the relative-time threshold table."""

    model_config = ConfigDict(frozen=True)

    bucket_name: str
    cutoff_seconds: Optional[int] = Field(None, ge=1, description="Exclusive upper bound; None = unbounded")
    unit_seconds: int = Field(1, ge=1, description="Divisor used to compute the magnitude")


def check_threshold_order(entries: Iterable[ThresholdEntry]) -> None:
    """Raise ``ValueError`` unless cutoffs increase strictly and only the last is unbounded."""
    entries = list(entries)
    if not entries:
        raise ValueError("threshold table must not be empty")
    previous = 0
    for index, entry in enumerate(entries):
        last = index == len(entries) - 1
        if entry.cutoff_seconds is None:
            if not last:
                raise ValueError(f"only the last threshold may be unbounded ({entry.bucket_name})")
            continue
        if last:
            raise ValueError(f"last threshold must be unbounded ({entry.bucket_name})")
        if entry.cutoff_seconds <= previous:
            raise ValueError(
                f"threshold cutoffs must be strictly increasing ({entry.bucket_name}={entry.cutoff_seconds})"
            )
        previous = entry.cutoff_seconds


MONTH_SECONDS = 2_629_746
YEAR_SECONDS = 31_556_952

DEFAULT_THRESHOLDS: Tuple[ThresholdEntry, ...] = (
    ThresholdEntry(bucket_name="justNow", cutoff_seconds=30, unit_seconds=1),
    ThresholdEntry(bucket_name="seconds", cutoff_seconds=60, unit_seconds=1),
    ThresholdEntry(bucket_name="minutes", cutoff_seconds=3600, unit_seconds=60),
    ThresholdEntry(bucket_name="hours", cutoff_seconds=86400, unit_seconds=3600),
    ThresholdEntry(bucket_name="days", cutoff_seconds=604800, unit_seconds=86400),
    ThresholdEntry(bucket_name="weeks", cutoff_seconds=2592000, unit_seconds=604800),
    ThresholdEntry(bucket_name="months", cutoff_seconds=31536000, unit_seconds=MONTH_SECONDS),
    ThresholdEntry(bucket_name="years", cutoff_seconds=None, unit_seconds=YEAR_SECONDS),
)


class RelativeSettings(BaseModel):
    """Threshold table plus optional phrase overrides layered over the locale.

    Phrase overrides are ``str.format`` templates receiving ``{n}``.
    """

    model_config = ConfigDict(frozen=True)

    thresholds: Tuple[ThresholdEntry, ...] = DEFAULT_THRESHOLDS
    past: Dict[str, str] = Field(default_factory=dict)
    future: Dict[str, str] = Field(default_factory=dict)
    just_now: Optional[str] = None
    yesterday: Optional[str] = None
    tomorrow: Optional[str] = None

    @field_validator("thresholds")
    def _validate_thresholds(cls, value: Tuple[ThresholdEntry, ...]) -> Tuple[ThresholdEntry, ...]:
        check_threshold_order(value)
        return value


# =============================================================================
# Smart formatting
# =============================================================================


class SmartPredicate(str, Enum):
    WITHIN_MINUTE = "within_minute"
    WITHIN_HOUR = "within_hour"
    SAME_DAY = "same_day"
    PREVIOUS_DAY = "previous_day"
    NEXT_DAY = "next_day"
    WITHIN_WEEK = "within_week"
    SAME_YEAR = "same_year"
    ELSE = "else"


class RenderStrategy(str, Enum):
    USE_RELATIVE = "relative"
    USE_TIME_ONLY = "time_only"
    USE_WEEKDAY_TIME = "weekday_time"
    USE_SHORT_DATE = "short_date"
    USE_LONG_DATE = "long_date"


class SmartBucketRule(BaseModel):
    """Predicate plus how to render a value that satisfies it.

    ``pattern`` is a format pattern (either dialect). ``phrase`` names a locale
    word (``just_now``, ``now``) or a locale template (``yesterday_at``,
    ``today_at``, ``tomorrow_at``, ``weekday_at``) wrapped around the pattern.
    """

    model_config = ConfigDict(frozen=True)

    predicate: SmartPredicate
    strategy: RenderStrategy
    pattern: Optional[str] = None
    phrase: Optional[str] = None

    @model_validator(mode="after")
    def _check_renderable(self) -> "SmartBucketRule":
        if self.strategy is not RenderStrategy.USE_RELATIVE and not self.pattern:
            raise ValueError(f"{self.strategy.value} rules need a pattern")
        return self


def _rule(predicate: SmartPredicate, strategy: RenderStrategy, pattern: Optional[str] = None, phrase: Optional[str] = None) -> SmartBucketRule:
    return SmartBucketRule(predicate=predicate, strategy=strategy, pattern=pattern, phrase=phrase)


DEFAULT_PAST_RULES: Tuple[SmartBucketRule, ...] = (
    _rule(SmartPredicate.WITHIN_MINUTE, RenderStrategy.USE_RELATIVE, phrase="just_now"),
    _rule(SmartPredicate.WITHIN_HOUR, RenderStrategy.USE_RELATIVE),
    _rule(SmartPredicate.SAME_DAY, RenderStrategy.USE_TIME_ONLY, "h:mm A"),
    _rule(SmartPredicate.PREVIOUS_DAY, RenderStrategy.USE_WEEKDAY_TIME, "h:mm A", "yesterday_at"),
    _rule(SmartPredicate.WITHIN_WEEK, RenderStrategy.USE_WEEKDAY_TIME, "h:mm A", "weekday_at"),
    _rule(SmartPredicate.SAME_YEAR, RenderStrategy.USE_SHORT_DATE, "MMM D"),
    _rule(SmartPredicate.ELSE, RenderStrategy.USE_LONG_DATE, "MMM D, YYYY"),
)

DEFAULT_FUTURE_RULES: Tuple[SmartBucketRule, ...] = (
    _rule(SmartPredicate.WITHIN_MINUTE, RenderStrategy.USE_RELATIVE, phrase="now"),
    _rule(SmartPredicate.WITHIN_HOUR, RenderStrategy.USE_RELATIVE),
    _rule(SmartPredicate.SAME_DAY, RenderStrategy.USE_TIME_ONLY, "h:mm A", "today_at"),
    _rule(SmartPredicate.NEXT_DAY, RenderStrategy.USE_WEEKDAY_TIME, "h:mm A", "tomorrow_at"),
    _rule(SmartPredicate.WITHIN_WEEK, RenderStrategy.USE_WEEKDAY_TIME, "h:mm A", "weekday_at"),
    _rule(SmartPredicate.SAME_YEAR, RenderStrategy.USE_SHORT_DATE, "MMM D"),
    _rule(SmartPredicate.ELSE, RenderStrategy.USE_LONG_DATE, "MMM D, YYYY"),
)


class SmartSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    past: Tuple[SmartBucketRule, ...] = DEFAULT_PAST_RULES
    future: Tuple[SmartBucketRule, ...] = DEFAULT_FUTURE_RULES

    @field_validator("past", "future")
    def _validate_rules(cls, value: Tuple[SmartBucketRule, ...]) -> Tuple[SmartBucketRule, ...]:
        if not value:
            raise ValueError("smart rule list must not be empty")
        if value[-1].predicate is not SmartPredicate.ELSE:
            raise ValueError("the last smart rule must use the 'else' predicate")
        return value


# =============================================================================
# Formats, styles, natural language, server, calendar
# =============================================================================


DEFAULT_PRESETS: Dict[str, str] = {
    "short": "MMM D",
    "long": "MMMM D, YYYY",
    "iso": "YYYY-MM-DD[T]HH:mm:ss.SSSZ",
    "time": "h:mm A",
    "datetime": "MMM D, h:mm A",
}


class FormatSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    presets: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PRESETS))
    hour12: bool = True


class StyleSettings(BaseModel):
    """Named output styles, from terse (``xs``) to verbose (``xl``)."""

    model_config = ConfigDict(frozen=True)

    xs: str = "M/D"
    sm: str = "MMM D"
    md: str = "MMM D, YYYY"
    lg: str = "MMMM Do, YYYY"
    xl: str = "dddd, MMMM Do, YYYY"
    time: str = "h:mm A"
    sortable: str = "YYYY-MM-DD"
    log: str = "YYYY-MM-DD HH:mm:ss"
    iso: str = "YYYY-MM-DD[T]HH:mm:ss.SSSZ"


class NaturalSettings(BaseModel):
    """Hours used for named times of day in natural-language input."""

    model_config = ConfigDict(frozen=True)

    morning: int = Field(9, ge=0, le=23)
    afternoon: int = Field(14, ge=0, le=23)
    evening: int = Field(18, ge=0, le=23)
    night: int = Field(21, ge=0, le=23)


class ServerSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    require_timezone: bool = Field(True, description="Smart formatting without a zone is an error")
    warn_on_missing_timezone: bool = True


class CalendarSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    week_start: int = Field(0, ge=0, le=6, description="First day of the week, Sunday = 0")


class WhennyConfig(BaseModel):
    """Root configuration snapshot."""

    model_config = ConfigDict(frozen=True)

    locale: str = "en"
    locale_fallback: bool = False
    default_timezone: str = "UTC"
    relative: RelativeSettings = Field(default_factory=RelativeSettings)
    smart: SmartSettings = Field(default_factory=SmartSettings)
    formats: FormatSettings = Field(default_factory=FormatSettings)
    styles: StyleSettings = Field(default_factory=StyleSettings)
    natural: NaturalSettings = Field(default_factory=NaturalSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    calendar: CalendarSettings = Field(default_factory=CalendarSettings)

    @field_validator("default_timezone")
    def _validate_default_timezone(cls, value: str) -> str:
        if not DEFAULT_RESOLVER.is_valid_zone(value):
            raise ValueError(f"unknown timezone {value!r}")
        return value


DEFAULT_CONFIG = WhennyConfig()

_current_config: WhennyConfig = DEFAULT_CONFIG


# =============================================================================
# Building and swapping configurations
# =============================================================================


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def define_config(
    overrides: Optional[Dict[str, Any]] = None,
    *,
    theme: Optional[str] = None,
    base: Optional[WhennyConfig] = None,
) -> WhennyConfig:
    """Build a complete configuration: ``base`` then ``theme`` then ``overrides``.

    Nested dicts merge key by key; lists and scalars replace. The result is
    validated as a whole, so invalid combinations raise ``InvalidConfigError``.
    """
    from whenny.configuration.themes import get_theme

    data = (base or DEFAULT_CONFIG).model_dump(mode="python")
    if theme:
        data = _deep_merge(data, get_theme(theme))
    if overrides:
        data = _deep_merge(data, overrides)
    try:
        return WhennyConfig.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}", details={"errors": exc.errors()}) from exc


def get_config() -> WhennyConfig:
    return _current_config


def configure(overrides: Optional[Dict[str, Any]] = None, *, theme: Optional[str] = None, **fields: Any) -> WhennyConfig:
    """Replace the process-wide configuration.

    ``configure(locale="fr")`` and ``configure({"server": {"require_timezone": False}})``
    both merge over the current snapshot.
    """
    global _current_config
    merged = _deep_merge(overrides or {}, fields)
    new_config = define_config(merged, theme=theme, base=_current_config)
    _current_config = new_config
    logger.debug("Configuration replaced (locale=%s, theme=%s)", new_config.locale, theme)
    return new_config


def reset_config() -> WhennyConfig:
    global _current_config
    _current_config = DEFAULT_CONFIG
    return _current_config


def resolve_locale(config: WhennyConfig) -> LocaleTable:
    """Locale table for ``config`` with its relative-phrase overrides applied."""
    table = get_locale(config.locale, fallback=config.locale_fallback)
    relative = config.relative
    if not (relative.past or relative.future or relative.just_now or relative.yesterday or relative.tomorrow):
        return table

    past = dict(table.past)
    past.update({bucket: counted(text, text) for bucket, text in relative.past.items()})
    future = dict(table.future)
    future.update({bucket: counted(text, text) for bucket, text in relative.future.items()})
    if relative.just_now is not None:
        past["justNow"] = fixed(relative.just_now)
        future["justNow"] = fixed(relative.just_now)

    return replace(
        table,
        past=past,
        future=future,
        just_now=relative.just_now if relative.just_now is not None else table.just_now,
        yesterday=relative.yesterday if relative.yesterday is not None else table.yesterday,
        tomorrow=relative.tomorrow if relative.tomorrow is not None else table.tomorrow,
    )


# =============================================================================
# Disk helpers (CLI)
# =============================================================================


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> WhennyConfig:
    """Load a configuration file, layering environment overrides on top."""

    if not path.exists():
        raise FileNotFoundError(f"Config file not found at {path}")
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Config file is not valid JSON: {exc}", input=str(path)) from exc
    theme = payload.pop("theme", None)
    payload = _apply_env_overrides(payload)
    return define_config(payload, theme=theme)


def save_config(config: WhennyConfig, path: Path = DEFAULT_CONFIG_PATH) -> None:
    payload = config.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_config(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    theme: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    force: bool = False,
) -> WhennyConfig:
    """Create the config file if missing (or when ``force``), then load it."""

    if path.exists() and not force:
        config = load_config(path)
    else:
        config = define_config(theme=theme)
    if overrides:
        config = define_config(overrides, base=config)
    save_config(config, path)
    return config


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    _set_env_override(data, "locale", "WHENNY_LOCALE")
    _set_env_override(data, "default_timezone", "WHENNY_DEFAULT_TIMEZONE")
    formats = data.setdefault("formats", {})
    _set_env_override(formats, "hour12", "WHENNY_HOUR12", cast_bool=True)
    server = data.setdefault("server", {})
    _set_env_override(server, "require_timezone", "WHENNY_REQUIRE_TIMEZONE", cast_bool=True)
    calendar = data.setdefault("calendar", {})
    _set_env_override(calendar, "week_start", "WHENNY_WEEK_START", cast_int=True)
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_bool: bool = False,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_bool:
        mapping[key] = raw.lower() in {"1", "true", "yes"}
    elif cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(f"{env_name} must be an integer, got {raw!r}", input=raw) from exc
    else:
        mapping[key] = raw


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_FUTURE_RULES",
    "DEFAULT_PAST_RULES",
    "DEFAULT_PRESETS",
    "DEFAULT_THRESHOLDS",
    "CalendarSettings",
    "FormatSettings",
    "NaturalSettings",
    "RelativeSettings",
    "RenderStrategy",
    "ServerSettings",
    "SmartBucketRule",
    "SmartPredicate",
    "SmartSettings",
    "StyleSettings",
    "ThresholdEntry",
    "WhennyConfig",
    "bootstrap_config",
    "check_threshold_order",
    "configure",
    "define_config",
    "get_config",
    "load_config",
    "reset_config",
    "resolve_locale",
    "save_config",
]
