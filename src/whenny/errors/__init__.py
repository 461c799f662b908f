"""Centralized error definitions for Whenny.

This module provides a unified error hierarchy for rendering and parsing.
Every error carries a machine-readable code, the offending input (truncated
for display) and remediation hints.

Usage:
    from whenny.errors import (
        WhennyError,
        ParseFailedError,
        handle_error,
    )

    try:
        value = parse_strict("next fridya")
    except WhennyError as e:
        print(handle_error(e))
"""

from __future__ import annotations

from typing import Any

from whenny.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_default_hints,
    get_recovery_suggestion,
    get_user_message,
)


# =============================================================================
# Limits
# =============================================================================

MAX_INPUT_LENGTH = 500
"""Maximum natural-language input length in characters."""

MAX_PARSE_DEPTH = 5
"""Maximum nesting of offset/boundary clauses in one expression."""

DISPLAY_INPUT_LENGTH = 100


def truncate_for_display(value: Any, max_length: int = DISPLAY_INPUT_LENGTH) -> str:
    """Render an offending input safely for error messages."""
    if value is None:
        return "None"
    text = f'"{value}"' if isinstance(value, str) else repr(value)
    if len(text) > max_length:
        return text[: max_length - 3] + "..."
    return text


# =============================================================================
# Base Error
# =============================================================================


class WhennyError(Exception):
    """Base exception for all Whenny errors.

    Attributes:
        code: Error code for categorization
        input: The offending input, if any
        hints: Remediation hints (defaults come from the message catalog)
        recoverable: Whether the caller can reasonably continue
        details: Additional error details for debugging
    """

    code: str = "WHENNY_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = False

    def __init__(
        self,
        message: str | None = None,
        *,
        input: Any = None,
        hints: list[str] | None = None,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.input = input
        self.hints = list(hints) if hints else get_default_hints(self.code)
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.input is not None:
            parts.append(f"  Input: {self.display_input}")
        return "\n".join(parts)

    @property
    def display_input(self) -> str:
        """Offending input truncated for display."""
        return truncate_for_display(self.input)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        """Get recovery suggestion."""
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "input": None if self.input is None else self.display_input,
            "user_message": self.user_message,
            "hints": list(self.hints),
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Pattern Compile Errors
# =============================================================================


class CompileError(WhennyError):
    """Base error for malformed format patterns."""

    code = "COMPILE_ERROR"
    default_message = "Format pattern could not be compiled"


class UnknownFieldError(CompileError):
    """A `{name}` field is not a known field kind (strict compilation only)."""

    code = "UNKNOWN_FIELD"
    default_message = "Unknown format field"

    def __init__(self, name: str, *, pattern: str | None = None) -> None:
        self.name = name
        super().__init__(
            f"Unknown format field: {{{name}}}",
            input=pattern if pattern is not None else name,
            details={"field": name},
        )


class UnterminatedLiteralError(CompileError):
    """A `[` literal in a letter pattern is never closed."""

    code = "UNTERMINATED_LITERAL"
    default_message = "Unterminated literal in format pattern"

    def __init__(self, pattern: str, position: int) -> None:
        self.position = position
        super().__init__(
            f"Unterminated '[' literal at position {position}",
            input=pattern,
            details={"position": position},
        )


# =============================================================================
# Render Errors
# =============================================================================


class RenderError(WhennyError):
    """Base error for render-time data problems."""

    code = "RENDER_ERROR"
    default_message = "Time value could not be rendered"


class InvalidInstantError(RenderError):
    """The time value does not hold a representable instant."""

    code = "INVALID_INSTANT"
    default_message = "Invalid instant"


class MissingLocaleEntryError(RenderError):
    """A bucket or phrase does not resolve in the active locale table."""

    code = "MISSING_LOCALE_ENTRY"
    default_message = "Locale entry is missing"

    def __init__(self, entry: str, *, locale: str | None = None) -> None:
        self.entry = entry
        self.locale = locale
        super().__init__(
            f"Locale {locale or '<custom>'!s} has no entry for '{entry}'",
            input=entry,
            details={"entry": entry, "locale": locale},
        )


# =============================================================================
# Parse Errors
# =============================================================================


class ParseError(WhennyError):
    """Base error for parsing text into time values."""

    code = "PARSE_ERROR"
    default_message = "Input could not be parsed"
    recoverable = True


class ParseFailedError(ParseError):
    """Expression was not recognized."""

    code = "PARSE_FAILED"
    default_message = "Expression not recognized"

    def __init__(self, text: str, *, unmatched: str | None = None) -> None:
        self.text = text
        self.unmatched = unmatched if unmatched is not None else text
        super().__init__(
            f"Could not understand '{self.unmatched[:60]}'",
            input=text,
            details={"unmatched": self.unmatched},
        )


class ParseDepthExceededError(ParseError):
    """Expression nests more clauses than allowed."""

    code = "PARSE_DEPTH_EXCEEDED"
    default_message = "Maximum parsing depth exceeded"
    recoverable = False

    def __init__(self, text: str, depth: int, max_depth: int = MAX_PARSE_DEPTH) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Expression nests {depth} clauses (max {max_depth})",
            input=text,
            details={"depth": depth, "max_depth": max_depth},
        )


class InputTooLongError(ParseError):
    """Input exceeds the maximum accepted length."""

    code = "INPUT_TOO_LONG"
    default_message = "Input is too long"
    recoverable = False

    def __init__(self, text: str, max_length: int = MAX_INPUT_LENGTH) -> None:
        self.length = len(text)
        self.max_length = max_length
        super().__init__(
            f"Input exceeds maximum length of {max_length} characters ({len(text)} given)",
            input=text,
            details={"length": len(text), "max_length": max_length},
        )


class InvalidDateStringError(ParseError):
    """A date string is not valid ISO 8601."""

    code = "INVALID_DATE_STRING"
    default_message = "Invalid date string"


# =============================================================================
# Timezone Errors
# =============================================================================


class TimezoneError(WhennyError):
    """Base error for timezone context problems."""

    code = "TIMEZONE_ERROR"
    default_message = "Timezone problem"


class MissingTimezoneContextError(TimezoneError):
    """Smart formatting was requested without a zone to compute day boundaries."""

    code = "MISSING_TIMEZONE_CONTEXT"
    default_message = "Smart formatting requires a timezone"


class InvalidTimezoneError(TimezoneError):
    """Zone identifier is not known to the timezone database."""

    code = "INVALID_TIMEZONE"
    default_message = "Invalid timezone"

    def __init__(self, zone_id: Any) -> None:
        self.zone_id = zone_id
        super().__init__(f"Unknown timezone: {zone_id!r}", input=zone_id)


class InvalidTransferPayloadError(WhennyError):
    """Transfer payload is malformed."""

    code = "INVALID_TRANSFER_PAYLOAD"
    default_message = "Invalid transfer payload"
    recoverable = True


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(WhennyError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"


class InvalidConfigError(ConfigurationError):
    """Configuration is invalid."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


class UnknownPresetError(ConfigurationError):
    """Named format preset or style does not exist."""

    code = "UNKNOWN_PRESET"
    default_message = "Unknown format preset"

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Unknown format preset: {name}",
            input=name,
            details={"available": sorted(available)},
        )


# =============================================================================
# Error Handler
# =============================================================================


def handle_error(error: Exception) -> str:
    """Handle an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, WhennyError):
        return error.recoverable
    return False


__all__ = [
    "MAX_INPUT_LENGTH",
    "MAX_PARSE_DEPTH",
    "truncate_for_display",
    # Base
    "WhennyError",
    # Compile
    "CompileError",
    "UnknownFieldError",
    "UnterminatedLiteralError",
    # Render
    "RenderError",
    "InvalidInstantError",
    "MissingLocaleEntryError",
    # Parse
    "ParseError",
    "ParseFailedError",
    "ParseDepthExceededError",
    "InputTooLongError",
    "InvalidDateStringError",
    # Timezone
    "TimezoneError",
    "MissingTimezoneContextError",
    "InvalidTimezoneError",
    "InvalidTransferPayloadError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    "UnknownPresetError",
    # Handlers
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
]
