"""Context-aware ("smart") rendering.

The selector walks an ordered rule list and picks the first rule whose
predicate holds for (target, reference) in the display zone. Calendar
predicates compare wall-clock dates in that zone, never 24-hour deltas: 23:00
yesterday is "yesterday" even when it was only two hours ago.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from whenny.configuration.settings import (
    RenderStrategy,
    SmartBucketRule,
    SmartPredicate,
    WhennyConfig,
    get_config,
    resolve_locale,
)
from whenny.core.calendar import calendar_days_between, weekday_index
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.core.timezone import DEFAULT_RESOLVER, ZoneResolver
from whenny.errors import InvalidConfigError, MissingTimezoneContextError
from whenny.formatting.compiler import compile_pattern
from whenny.formatting.renderer import render
from whenny.i18n.locales import LocaleTable
from whenny.relative.bucketer import relative

logger = logging.getLogger(__name__)


LOCALE_WORDS = ("just_now", "now", "yesterday", "tomorrow")


@dataclass(frozen=True)
class SmartSelection:
    strategy: RenderStrategy
    rule: SmartBucketRule
    pattern: Optional[str]


@dataclass(frozen=True)
class _Proximity:
    seconds: int
    day_difference: int
    same_year: bool
    is_future: bool

    @classmethod
    def measure(cls, target_wall: datetime, reference_wall: datetime, target: TimeValue, reference: TimeValue) -> "_Proximity":
        return cls(
            seconds=abs(reference.instant_millis - target.instant_millis) // 1000,
            day_difference=calendar_days_between(target_wall, reference_wall),
            same_year=target_wall.year == reference_wall.year,
            is_future=target.instant_millis > reference.instant_millis,
        )

    def satisfies(self, predicate: SmartPredicate) -> bool:
        if predicate is SmartPredicate.WITHIN_MINUTE:
            return self.seconds < 60
        if predicate is SmartPredicate.WITHIN_HOUR:
            return self.seconds < 3600
        if predicate is SmartPredicate.SAME_DAY:
            return self.day_difference == 0
        if predicate is SmartPredicate.PREVIOUS_DAY:
            return self.day_difference == 1
        if predicate is SmartPredicate.NEXT_DAY:
            return self.day_difference == -1
        if predicate is SmartPredicate.WITHIN_WEEK:
            return abs(self.day_difference) < 7
        if predicate is SmartPredicate.SAME_YEAR:
            return self.same_year
        return predicate is SmartPredicate.ELSE


def select_strategy(
    target: TimeValue,
    reference: TimeValue,
    zone_id: str,
    *,
    rules: Optional[Sequence[SmartBucketRule]] = None,
    resolver: Optional[ZoneResolver] = None,
    config: Optional[WhennyConfig] = None,
) -> SmartSelection:
    """First rule whose predicate holds. Without ``rules`` the configured past
    or future list is used depending on which side of ``reference`` the target lies."""
    resolver = resolver or DEFAULT_RESOLVER
    target_wall = resolver.to_wall_clock(target.instant_millis, zone_id)
    reference_wall = resolver.to_wall_clock(reference.instant_millis, zone_id)
    proximity = _Proximity.measure(target_wall, reference_wall, target, reference)

    if rules is None:
        smart_settings = (config or get_config()).smart
        rules = smart_settings.future if proximity.is_future else smart_settings.past

    for rule in rules:
        if proximity.satisfies(rule.predicate):
            logger.debug(
                "smart: %s matched (seconds=%s, day_difference=%s)",
                rule.predicate.value,
                proximity.seconds,
                proximity.day_difference,
            )
            return SmartSelection(rule.strategy, rule, rule.pattern)
    raise InvalidConfigError(
        "No smart rule matched; rule lists must end with an else rule",
        input=[rule.predicate.value for rule in rules],
    )


def resolve_smart_zone(zone_id: Optional[str], config: WhennyConfig) -> str:
    """Zone used for day boundaries; an absent zone is an error unless opted out."""
    if zone_id:
        return zone_id
    if config.server.require_timezone:
        raise MissingTimezoneContextError(
            "Smart formatting needs a timezone to decide calendar days",
        )
    if config.server.warn_on_missing_timezone:
        logger.warning(
            "smart() called without a timezone; using default %s", config.default_timezone
        )
    return config.default_timezone


def smart(
    value: TimeInput,
    *,
    zone_id: Optional[str] = None,
    reference: Optional[TimeInput] = None,
    config: Optional[WhennyConfig] = None,
    resolver: Optional[ZoneResolver] = None,
) -> str:
    config = config or get_config()
    resolver = resolver or DEFAULT_RESOLVER
    zone = resolve_smart_zone(zone_id, config)
    target = coerce_time_value(value)
    ref = coerce_time_value(reference) if reference is not None else TimeValue.now()
    locale = resolve_locale(config)

    selection = select_strategy(target, ref, zone, resolver=resolver, config=config)
    return render_selection(selection, target, ref, zone, locale, config, resolver)


def render_selection(
    selection: SmartSelection,
    target: TimeValue,
    reference: TimeValue,
    zone_id: str,
    locale: LocaleTable,
    config: WhennyConfig,
    resolver: ZoneResolver,
) -> str:
    phrase = selection.rule.phrase
    if phrase in LOCALE_WORDS:
        word = getattr(locale, phrase)
        if selection.strategy is RenderStrategy.USE_RELATIVE or not selection.pattern:
            return word

    if selection.strategy is RenderStrategy.USE_RELATIVE:
        return relative(target, reference, config=config, locale=locale)

    text = render(
        compile_pattern(selection.pattern),
        target,
        locale,
        zone_id=zone_id,
        resolver=resolver,
        hour12=config.formats.hour12,
    )
    if not phrase:
        return text
    if phrase in LOCALE_WORDS:
        return f"{getattr(locale, phrase)} {text}"
    weekday = locale.weekdays_full[weekday_index(resolver.to_wall_clock(target.instant_millis, zone_id))]
    return locale.template(phrase, time=text, weekday=weekday)


__all__ = [
    "SmartSelection",
    "render_selection",
    "resolve_smart_zone",
    "select_strategy",
    "smart",
]
