"""Tests for pattern compilation and rendering in both dialects."""

from __future__ import annotations

import pytest

from whenny.core.models import TimeValue
from whenny.errors import InvalidInstantError, UnknownFieldError, UnterminatedLiteralError
from whenny.formatting import (
    CaseVariant,
    Dialect,
    FieldKind,
    FieldToken,
    LiteralToken,
    compile_pattern,
    detect_dialect,
    format_ordinal,
    render,
)
from whenny.i18n.locales import ENGLISH, FRENCH

# Monday 2024-01-15 14:05:09.007 UTC
VALUE = TimeValue.from_iso("2024-01-15T14:05:09.007Z")


def _render(pattern: str, value: TimeValue = VALUE, **kwargs) -> str:
    return render(compile_pattern(pattern), value, kwargs.pop("locale", ENGLISH), **kwargs)


class TestCompiler:
    """Compilation to literal/field token tuples."""

    def test_detects_bracket_dialect(self):
        assert detect_dialect("{year}-{month}") is Dialect.BRACKET
        assert detect_dialect("YYYY-MM") is Dialect.LETTER

    def test_unknown_braces_keep_letter_dialect(self):
        assert detect_dialect("YYYY {note}") is Dialect.LETTER
        assert detect_dialect("{note} {year}") is Dialect.BRACKET
        assert _render("YYYY-MM-DD {note}") == "2024-01-15 {note}"

    def test_letter_tokens_are_greedy(self):
        tokens = compile_pattern("MMMM MMM MM M")
        kinds = [token.kind for token in tokens if isinstance(token, FieldToken)]
        assert kinds == [
            FieldKind.MONTH_FULL,
            FieldKind.MONTH_SHORT,
            FieldKind.MONTH_NUMERIC,
            FieldKind.MONTH_NUMERIC,
        ]

    def test_adjacent_literals_merge(self):
        tokens = compile_pattern("[at] -- YYYY")
        assert tokens[0] == LiteralToken("at -- ")

    def test_bracket_fields(self):
        tokens = compile_pattern("{monthShort} {dayOrdinal}")
        assert tokens == (
            FieldToken(FieldKind.MONTH_SHORT),
            LiteralToken(" "),
            FieldToken(FieldKind.DAY_ORDINAL),
        )

    def test_ampm_case_variants(self):
        assert compile_pattern("{ampm}")[0].case is CaseVariant.LOWER
        assert compile_pattern("{AMPM}")[0].case is CaseVariant.UPPER

    def test_unknown_bracket_field_kept_literally(self):
        tokens = compile_pattern("{year} {nope}")
        assert tokens[-1] == LiteralToken(" {nope}")

    def test_unknown_bracket_field_strict(self):
        with pytest.raises(UnknownFieldError) as excinfo:
            compile_pattern("{year} {nope}", strict=True)
        assert excinfo.value.name == "nope"

    def test_unterminated_literal(self):
        with pytest.raises(UnterminatedLiteralError) as excinfo:
            compile_pattern("YYYY [oops")
        assert excinfo.value.position == 5

    def test_compilation_is_memoised(self):
        assert compile_pattern("YYYY-MM-DD") is compile_pattern("YYYY-MM-DD")


class TestLetterRendering:
    @pytest.mark.parametrize(
        "pattern, expected",
        [
            ("YYYY-MM-DD", "2024-01-15"),
            ("YY", "24"),
            ("MMMM Do, YYYY", "January 15th, 2024"),
            ("ddd D MMM", "Mon 15 Jan"),
            ("dddd", "Monday"),
            ("HH:mm:ss.SSS", "14:05:09.007"),
            ("h:mm A", "2:05 PM"),
            ("hh:mm a", "02:05 pm"),
            ("H:m:s", "14:5:9"),
            ("[Today is] dddd", "Today is Monday"),
        ],
    )
    def test_patterns(self, pattern, expected):
        assert _render(pattern) == expected

    def test_literals_preserved_exactly(self):
        assert _render("YYYY/MM/DD -- !") == "2024/01/15 -- !"

    def test_iso_pattern_round_trip(self):
        value = TimeValue(1_705_327_509_007)
        text = _render("YYYY-MM-DD[T]HH:mm:ss.SSSZ", value)
        assert text == "2024-01-15T14:05:09.007+00:00"
        assert TimeValue.from_iso(text) == value

    @pytest.mark.parametrize("zone", ["America/New_York", "Asia/Tokyo", "Asia/Kolkata"])
    def test_iso_pattern_round_trip_in_origin_zone(self, zone):
        value = VALUE.with_origin(zone)
        assert TimeValue.from_iso(_render("YYYY-MM-DD[T]HH:mm:ss.SSSZ", value)) == value


class TestBracketRendering:
    @pytest.mark.parametrize(
        "pattern, expected",
        [
            ("{year}-{month}-{day}", "2024-01-15"),
            ("{monthFull} {dayOrdinal}, {year}", "January 15th, 2024"),
            ("{weekday}, {weekdayShort}", "Monday, Mon"),
            ("{hour24}:{minute}:{second}.{millisecond}", "14:05:09.007"),
            ("{hour12}{ampm}", "2pm"),
            ("{yearShort}", "24"),
        ],
    )
    def test_patterns(self, pattern, expected):
        assert _render(pattern) == expected

    def test_time_field_follows_hour12(self):
        assert _render("{time}") == "2:05 PM"
        assert _render("{time}", hour12=False) == "14:05"

    def test_hour_field_follows_hour12(self):
        assert _render("{hour}", hour12=False) == "14"


class TestZones:
    """Display zone: explicit, then origin, then UTC."""

    def test_explicit_zone(self):
        assert _render("HH:mm Z", zone_id="America/New_York") == "09:05 -05:00"

    def test_origin_zone_used_when_no_explicit_zone(self):
        value = VALUE.with_origin("Asia/Tokyo")
        assert _render("HH:mm", value) == "23:05"

    def test_defaults_to_utc(self):
        assert _render("HH:mm ZZ") == "14:05 +0000"

    def test_offset_fields(self):
        assert _render("{offset} {offsetShort}", zone_id="Asia/Kolkata") == "+05:30 +5"

    def test_zone_abbreviation(self):
        assert _render("z", zone_id="America/New_York") == "EST"


class TestLocalesAndValidity:
    def test_french_names(self):
        assert _render("dddd D MMMM", locale=FRENCH) == "Lundi 15 Janvier"

    def test_invalid_instant(self):
        with pytest.raises(InvalidInstantError):
            _render("YYYY", TimeValue(10**20))


class TestOrdinals:
    @pytest.mark.parametrize(
        "n, expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"),
         (13, "13th"), (21, "21st"), (22, "22nd"), (101, "101st"), (112, "112th")],
    )
    def test_format_ordinal(self, n, expected):
        assert format_ordinal(n) == expected
