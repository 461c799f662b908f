"""Tests for the error hierarchy and user-facing messages."""

from __future__ import annotations

import pytest

from whenny.errors import (
    MAX_INPUT_LENGTH,
    CompileError,
    ConfigurationError,
    InputTooLongError,
    InvalidTimezoneError,
    MissingTimezoneContextError,
    ParseDepthExceededError,
    ParseError,
    ParseFailedError,
    UnknownFieldError,
    UnknownPresetError,
    WhennyError,
    format_error_for_cli,
    handle_error,
    is_recoverable,
    truncate_for_display,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error, base, code",
        [
            (ParseFailedError("blah"), ParseError, "PARSE_FAILED"),
            (ParseDepthExceededError("x", 6), ParseError, "PARSE_DEPTH_EXCEEDED"),
            (InputTooLongError("x" * 600), ParseError, "INPUT_TOO_LONG"),
            (UnknownFieldError("nope"), CompileError, "UNKNOWN_FIELD"),
            (UnknownPresetError("huge", ["short"]), ConfigurationError, "UNKNOWN_PRESET"),
            (InvalidTimezoneError("Mars/Base"), WhennyError, "INVALID_TIMEZONE"),
        ],
    )
    def test_codes(self, error, base, code):
        assert isinstance(error, base)
        assert isinstance(error, WhennyError)
        assert error.code == code

    def test_recoverable_flags(self):
        assert is_recoverable(ParseFailedError("blah"))
        assert not is_recoverable(InputTooLongError("x" * 600))
        assert not is_recoverable(ParseDepthExceededError("x", 6))
        assert not is_recoverable(MissingTimezoneContextError())
        assert not is_recoverable(ValueError("plain"))


class TestErrorDetails:
    def test_parse_failed_unmatched_defaults_to_text(self):
        error = ParseFailedError("next fridya")
        assert error.unmatched == "next fridya"
        assert error.details == {"unmatched": "next fridya"}

    def test_input_too_long_details(self):
        error = InputTooLongError("x" * 600)
        assert error.details == {"length": 600, "max_length": MAX_INPUT_LENGTH}

    def test_message_includes_code_and_input(self):
        assert str(ParseFailedError("blah")) == "[PARSE_FAILED] Could not understand 'blah'\n  Input: \"blah\""

    def test_default_hints_from_catalog(self):
        assert any("at most 5" in hint or "chained" in hint for hint in ParseDepthExceededError("x", 6).hints)

    def test_explicit_hints_win(self):
        assert WhennyError("boom", hints=["try again"]).hints == ["try again"]

    def test_to_dict(self):
        payload = UnknownPresetError("huge", ["short", "long"]).to_dict()
        assert payload["code"] == "UNKNOWN_PRESET"
        assert payload["input"] == '"huge"'
        assert payload["details"] == {"available": ["long", "short"]}
        assert payload["recoverable"] is False
        assert payload["user_message"] == "That format preset doesn't exist."


class TestTruncation:
    def test_long_input_is_truncated(self):
        shown = InputTooLongError("x" * 600).display_input
        assert len(shown) == 100
        assert shown.endswith("...")

    def test_non_string_input(self):
        assert truncate_for_display(42) == "42"
        assert truncate_for_display(None) == "None"


class TestFormatting:
    def test_handle_error(self):
        text = handle_error(ParseFailedError("blah"))
        assert text.startswith("We couldn't understand that date expression.")
        assert "Suggestion:" in text

    def test_format_for_cli(self):
        text = format_error_for_cli(InvalidTimezoneError("Mars/Base"))
        lines = text.splitlines()
        assert lines[0] == "Error [INVALID_TIMEZONE]: That timezone isn't recognized."
        assert lines[1] == 'Input: "Mars/Base"'
        assert "Hints:" in lines
        assert any("IANA" in line for line in lines)

    def test_format_plain_exception(self):
        text = format_error_for_cli(RuntimeError("boom"))
        assert text.startswith("Error [ERROR]: Something went wrong.")
