"""Tests for smart (context-aware) rendering."""

from __future__ import annotations

import logging

import pytest

from whenny.configuration.settings import configure, define_config
from whenny.core.models import TimeValue
from whenny.errors import InvalidConfigError, MissingTimezoneContextError
from whenny.smart import (
    RenderStrategy,
    SmartBucketRule,
    SmartPredicate,
    select_strategy,
    smart,
)


def at(iso: str) -> TimeValue:
    return TimeValue.from_iso(iso)


class TestPastRules:
    """Reference is Monday 2024-01-15 12:00 UTC."""

    @pytest.mark.parametrize(
        "target, expected",
        [
            ("2024-01-15T11:59:40Z", "just now"),
            ("2024-01-15T11:55:00Z", "5 minutes ago"),
            ("2024-01-15T08:30:00Z", "8:30 AM"),
            ("2024-01-14T12:00:00Z", "yesterday at 12:00 PM"),
            ("2024-01-12T09:00:00Z", "Friday at 9:00 AM"),
            ("2024-01-02T09:00:00Z", "Jan 2"),
            ("2023-01-15T12:00:00Z", "Jan 15, 2023"),
        ],
    )
    def test_default_rules(self, reference, target, expected):
        assert smart(at(target), zone_id="UTC", reference=reference) == expected

    def test_strategy_for_each_branch(self, reference):
        cases = {
            "2024-01-15T11:55:00Z": RenderStrategy.USE_RELATIVE,
            "2024-01-14T12:00:00Z": RenderStrategy.USE_WEEKDAY_TIME,
            "2023-01-15T12:00:00Z": RenderStrategy.USE_LONG_DATE,
        }
        for target, strategy in cases.items():
            assert select_strategy(at(target), reference, "UTC").strategy is strategy


class TestFutureRules:
    @pytest.mark.parametrize(
        "target, expected",
        [
            ("2024-01-15T12:00:30Z", "now"),
            ("2024-01-15T12:30:00Z", "in 30 minutes"),
            ("2024-01-15T18:00:00Z", "today at 6:00 PM"),
            ("2024-01-16T09:00:00Z", "tomorrow at 9:00 AM"),
            ("2024-01-19T10:00:00Z", "Friday at 10:00 AM"),
            ("2025-03-01T10:00:00Z", "Mar 1, 2025"),
        ],
    )
    def test_default_rules(self, reference, target, expected):
        assert smart(at(target), zone_id="UTC", reference=reference) == expected


class TestZoneHandling:
    def test_calendar_days_follow_display_zone(self, reference):
        # 03:00 UTC on the 15th is 22:00 on the 14th in New York
        target = at("2024-01-15T03:00:00Z")
        assert smart(target, zone_id="UTC", reference=reference) == "3:00 AM"
        assert smart(target, zone_id="America/New_York", reference=reference) == "yesterday at 10:00 PM"

    def test_missing_zone_raises_by_default(self, reference):
        with pytest.raises(MissingTimezoneContextError):
            smart(at("2024-01-14T12:00:00Z"), reference=reference)

    def test_opt_out_uses_default_zone_and_warns(self, reference, caplog):
        configure(server={"require_timezone": False})
        with caplog.at_level(logging.WARNING, logger="whenny.smart.selector"):
            text = smart(at("2024-01-14T12:00:00Z"), reference=reference)
        assert text == "yesterday at 12:00 PM"
        assert "without a timezone" in caplog.text

    def test_opt_out_without_warning(self, reference, caplog):
        configure(server={"require_timezone": False, "warn_on_missing_timezone": False})
        with caplog.at_level(logging.WARNING, logger="whenny.smart.selector"):
            smart(at("2024-01-14T12:00:00Z"), reference=reference)
        assert caplog.text == ""


class TestCustomRules:
    def test_rules_without_else_raise_when_nothing_matches(self, reference):
        rules = [SmartBucketRule(predicate=SmartPredicate.WITHIN_MINUTE, strategy=RenderStrategy.USE_RELATIVE)]
        with pytest.raises(InvalidConfigError):
            select_strategy(at("2020-01-01T00:00:00Z"), reference, "UTC", rules=rules)

    def test_config_requires_trailing_else(self):
        with pytest.raises(InvalidConfigError):
            define_config({"smart": {"past": [{"predicate": "within_minute", "strategy": "relative"}]}})

    def test_non_relative_rule_needs_pattern(self):
        with pytest.raises(InvalidConfigError):
            define_config({"smart": {"past": [{"predicate": "else", "strategy": "long_date"}]}})

    def test_formal_theme(self, reference):
        config = define_config(theme="formal")
        text = smart(at("2024-01-15T08:30:00Z"), zone_id="UTC", reference=reference, config=config)
        assert text == "today at 8:30 AM"

    def test_spanish_locale(self, reference):
        config = define_config({"locale": "es"})
        text = smart(at("2024-01-14T12:00:00Z"), zone_id="UTC", reference=reference, config=config)
        assert text == "ayer a las 12:00 PM"

    def test_technical_theme_stamps_real_offset(self, reference):
        config = define_config(theme="technical")
        target = at("2024-01-14T12:00:00Z")
        text = smart(target, zone_id="America/New_York", reference=reference, config=config)
        assert text == "2024-01-14T07:00:00-05:00"
        assert TimeValue.from_iso(text) == target
