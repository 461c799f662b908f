"""Tests for natural-language date parsing.

All relative expressions are evaluated against Monday 2024-01-15 12:00 UTC.
"""

from __future__ import annotations

import pytest

from whenny.configuration.settings import define_config
from whenny.core.models import TimeValue
from whenny.errors import InputTooLongError, InvalidTimezoneError, ParseDepthExceededError, ParseFailedError
from whenny.natural import (
    Anchor,
    BoundaryOf,
    Offset,
    TimeOfDay,
    can_parse,
    parse,
    parse_strict,
    parse_with_info,
)
from whenny.natural.nodes import nesting_depth
from whenny.natural.tokenizer import normalize, tokenize


def iso(text: str, reference: TimeValue, **kwargs) -> str:
    return parse_strict(text, reference=reference, **kwargs).to_iso()


class TestTokenizer:
    def test_normalizes_case_whitespace_and_punctuation(self):
        assert normalize("  Next   FRIDAY, at 3 P.M. ") == "next friday at 3 pm"

    def test_keeps_clock_times_together(self):
        assert tokenize("at 15:30") == ["at", "15:30"]

    def test_empty(self):
        assert tokenize("   ") == []


class TestAnchors:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("now", "2024-01-15T12:00:00.000Z"),
            ("today", "2024-01-15T00:00:00.000Z"),
            ("tomorrow", "2024-01-16T00:00:00.000Z"),
            ("yesterday", "2024-01-14T00:00:00.000Z"),
            ("the day after tomorrow", "2024-01-17T00:00:00.000Z"),
            ("day before yesterday", "2024-01-13T00:00:00.000Z"),
            ("tonight", "2024-01-15T21:00:00.000Z"),
        ],
    )
    def test_day_anchors(self, reference, text, expected):
        assert iso(text, reference) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("next friday", "2024-01-19T00:00:00.000Z"),
            ("friday", "2024-01-19T00:00:00.000Z"),
            ("on fri", "2024-01-19T00:00:00.000Z"),
            ("next monday", "2024-01-22T00:00:00.000Z"),
            ("last friday", "2024-01-12T00:00:00.000Z"),
            ("last monday", "2024-01-08T00:00:00.000Z"),
            ("this friday", "2024-01-19T00:00:00.000Z"),
            ("this sunday", "2024-01-14T00:00:00.000Z"),
        ],
    )
    def test_weekdays(self, reference, text, expected):
        assert iso(text, reference) == expected

    def test_next_friday_is_same_week(self, reference):
        """From a Monday, "next friday" is four days ahead, not eleven."""
        assert parse("next friday", reference=reference).to_iso().startswith("2024-01-19")

    def test_week_start_setting(self, reference):
        config = define_config({"calendar": {"week_start": 1}})
        assert iso("this sunday", reference, config=config) == "2024-01-21T00:00:00.000Z"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("next week", "2024-01-21T00:00:00.000Z"),
            ("last week", "2024-01-07T00:00:00.000Z"),
            ("this week", "2024-01-14T00:00:00.000Z"),
            ("next month", "2024-02-01T00:00:00.000Z"),
            ("last year", "2023-01-01T00:00:00.000Z"),
        ],
    )
    def test_periods(self, reference, text, expected):
        assert iso(text, reference) == expected


class TestOffsets:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("in 5 days", "2024-01-20T12:00:00.000Z"),
            ("in 30 minutes", "2024-01-15T12:30:00.000Z"),
            ("3 hours ago", "2024-01-15T09:00:00.000Z"),
            ("2 weeks from now", "2024-01-29T12:00:00.000Z"),
            ("an hour later", "2024-01-15T13:00:00.000Z"),
            ("in a week", "2024-01-22T12:00:00.000Z"),
            ("two months ago", "2023-11-15T12:00:00.000Z"),
            ("1 year ago", "2023-01-15T12:00:00.000Z"),
        ],
    )
    def test_offsets(self, reference, text, expected):
        assert iso(text, reference) == expected

    def test_a_few_is_three_and_not_confident(self, reference):
        result = parse_with_info("a few minutes ago", reference=reference)
        assert result.value.to_iso() == "2024-01-15T11:57:00.000Z"
        assert not result.confident

    def test_offsets_apply_to_anchor(self, reference):
        assert iso("tomorrow in 2 hours", reference) == "2024-01-16T02:00:00.000Z"


class TestTimes:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("tomorrow at 3pm", "2024-01-16T15:00:00.000Z"),
            ("tomorrow at 3 pm", "2024-01-16T15:00:00.000Z"),
            ("Next FRIDAY at 3PM", "2024-01-19T15:00:00.000Z"),
            ("3:30 p.m. tomorrow", "2024-01-16T15:30:00.000Z"),
            ("at 12am", "2024-01-15T00:00:00.000Z"),
            ("at 12pm", "2024-01-15T12:00:00.000Z"),
            ("at 3", "2024-01-15T15:00:00.000Z"),
            ("at 9", "2024-01-15T09:00:00.000Z"),
            ("at 15:30", "2024-01-15T15:30:00.000Z"),
            ("at noon", "2024-01-15T12:00:00.000Z"),
            ("tomorrow midnight", "2024-01-16T00:00:00.000Z"),
            ("tonight at 10pm", "2024-01-15T22:00:00.000Z"),
            ("in 2 days at 5pm", "2024-01-17T17:00:00.000Z"),
        ],
    )
    def test_clock_times(self, reference, text, expected):
        assert iso(text, reference) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("tomorrow morning", "2024-01-16T09:00:00.000Z"),
            ("yesterday afternoon", "2024-01-14T14:00:00.000Z"),
            ("friday evening", "2024-01-19T18:00:00.000Z"),
            ("this morning", "2024-01-15T09:00:00.000Z"),
            ("tomorrow in the evening", "2024-01-16T18:00:00.000Z"),
        ],
    )
    def test_times_of_day(self, reference, text, expected):
        assert iso(text, reference) == expected

    def test_configured_hours(self, reference):
        config = define_config({"natural": {"morning": 8}})
        assert iso("tomorrow morning", reference, config=config) == "2024-01-16T08:00:00.000Z"

    @pytest.mark.parametrize("text", ["at 25", "at 9:75", "13pm", "at 0am"])
    def test_invalid_clock_times(self, reference, text):
        assert parse(text, reference=reference) is None


class TestBoundaries:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("end of month", "2024-01-31T23:59:59.999Z"),
            ("end of the month", "2024-01-31T23:59:59.999Z"),
            ("the start of the year", "2024-01-01T00:00:00.000Z"),
            ("beginning of the day", "2024-01-15T00:00:00.000Z"),
            ("start of next week", "2024-01-21T00:00:00.000Z"),
            ("end of next month", "2024-02-29T23:59:59.999Z"),
            ("end of the week at 5pm", "2024-01-20T17:00:00.000Z"),
        ],
    )
    def test_boundaries(self, reference, text, expected):
        assert iso(text, reference) == expected


class TestZones:
    def test_expression_read_in_zone(self, reference):
        value = parse_strict("tomorrow at 9am", reference=reference, zone_id="America/New_York")
        assert value.to_iso() == "2024-01-16T14:00:00.000Z"
        assert value.origin_zone == "America/New_York"
        assert value.origin_offset_minutes == -300

    def test_default_zone_from_config(self, reference):
        config = define_config({"default_timezone": "Asia/Tokyo"})
        value = parse_strict("today", reference=reference, config=config)
        assert value.to_iso() == "2024-01-14T15:00:00.000Z"
        assert value.origin_zone == "Asia/Tokyo"

    def test_result_carries_utc_origin_by_default(self, reference):
        value = parse_strict("now", reference=reference)
        assert (value.origin_zone, value.origin_offset_minutes) == ("UTC", 0)

    def test_unknown_zone_raises(self, reference):
        with pytest.raises(InvalidTimezoneError):
            parse("tomorrow", reference=reference, zone_id="Nowhere/Special")


class TestFailures:
    def test_gibberish_returns_none(self, reference):
        assert parse("gibberish xyz", reference=reference) is None

    def test_strict_reports_unmatched_text(self, reference):
        with pytest.raises(ParseFailedError) as excinfo:
            parse_strict("tomorrow blah blah", reference=reference)
        assert excinfo.value.unmatched == "blah blah"

    def test_second_anchor_is_rejected(self, reference):
        with pytest.raises(ParseFailedError) as excinfo:
            parse_strict("tomorrow yesterday", reference=reference)
        assert excinfo.value.unmatched == "yesterday"

    @pytest.mark.parametrize("text", ["", "   ", "and on"])
    def test_empty_input(self, reference, text):
        assert parse(text, reference=reference) is None

    def test_non_string_input(self):
        assert parse(None) is None

    def test_out_of_range_result(self, reference):
        assert parse("in 99999 years", reference=reference) is None

    def test_with_info_returns_none_on_failure(self, reference):
        assert parse_with_info("gibberish", reference=reference) is None

    def test_with_info_strict_raises(self, reference):
        with pytest.raises(ParseFailedError):
            parse_with_info("gibberish", reference=reference, strict=True)


class TestLimits:
    """Input length and nesting bounds."""

    def test_long_input_rejected(self, reference):
        with pytest.raises(InputTooLongError):
            parse("a" * 600, reference=reference)

    def test_long_input_rejected_even_if_valid_prefix(self, reference):
        with pytest.raises(InputTooLongError):
            parse_strict("tomorrow " + " " * 600, reference=reference)

    def test_input_at_limit_is_parsed(self, reference):
        text = "tomorrow".ljust(500)
        assert parse(text, reference=reference) is not None

    def test_five_nested_clauses_succeed(self, reference):
        text = " ".join(["in 1 day"] * 5)
        assert iso(text, reference) == "2024-01-20T12:00:00.000Z"

    def test_six_nested_clauses_raise(self, reference):
        text = " ".join(["in 1 day"] * 6)
        with pytest.raises(ParseDepthExceededError) as excinfo:
            parse(text, reference=reference)
        assert excinfo.value.depth == 6

    def test_boundaries_count_toward_depth(self, reference):
        text = "in 1 day in 1 day in 1 day end of month start of day start of week"
        with pytest.raises(ParseDepthExceededError):
            parse_strict(text, reference=reference)

    def test_time_of_day_does_not_count(self, reference):
        text = " ".join(["in 1 day"] * 5) + " at 5pm"
        assert iso(text, reference) == "2024-01-20T17:00:00.000Z"

    def test_can_parse(self, reference):
        assert can_parse("next friday", reference=reference)
        assert not can_parse("blah", reference=reference)
        assert not can_parse("x" * 600, reference=reference)
        assert not can_parse(" ".join(["in 1 day"] * 6), reference=reference)


class TestParseTree:
    def test_anchor_node(self, reference):
        result = parse_with_info("next friday", reference=reference)
        assert result.node == Anchor("weekday", weekday=5, qualifier="next")
        assert result.matched == "next friday"
        assert result.confident

    def test_bare_weekday_not_confident(self, reference):
        assert not parse_with_info("friday", reference=reference).confident

    def test_folding_order(self, reference):
        result = parse_with_info("end of next month at 5pm", reference=reference)
        assert result.node == TimeOfDay(
            BoundaryOf(Anchor("month", qualifier="next"), "month", "end"), 17, 0
        )
        assert nesting_depth(result.node) == 1

    def test_default_anchor_is_now(self, reference):
        result = parse_with_info("in 3 days", reference=reference)
        assert result.node == Offset(Anchor("now"), 3, "day", 1)
