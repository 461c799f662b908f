"""User-friendly error messages for Whenny.

This module provides human-readable error messages, recovery suggestions
and default remediation hints for all error codes, so callers never have to
show a bare error string.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Compile errors
    "COMPILE_ERROR": "The format pattern is malformed.",
    "UNKNOWN_FIELD": "The format pattern uses a field that doesn't exist.",
    "UNTERMINATED_LITERAL": "The format pattern opens a [literal] that is never closed.",
    # Render errors
    "RENDER_ERROR": "The time value couldn't be rendered.",
    "INVALID_INSTANT": "The time value doesn't hold a valid instant.",
    "MISSING_LOCALE_ENTRY": "The active locale is missing a phrase.",
    # Parse errors
    "PARSE_ERROR": "The input couldn't be parsed.",
    "PARSE_FAILED": "We couldn't understand that date expression.",
    "PARSE_DEPTH_EXCEEDED": "The date expression is too deeply nested.",
    "INPUT_TOO_LONG": "The input is too long to parse.",
    "INVALID_DATE_STRING": "The date string isn't valid ISO 8601.",
    # Timezone errors
    "TIMEZONE_ERROR": "There's a timezone problem.",
    "MISSING_TIMEZONE_CONTEXT": "A timezone is required to decide what 'today' means.",
    "INVALID_TIMEZONE": "That timezone isn't recognized.",
    "INVALID_TRANSFER_PAYLOAD": "The transferred date payload is malformed.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid.",
    "UNKNOWN_PRESET": "That format preset doesn't exist.",
    # Generic
    "WHENNY_ERROR": "An unexpected error occurred.",
    "UNKNOWN_ERROR": "Something went wrong.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    "COMPILE_ERROR": "Check the pattern against the documented tokens.",
    "UNKNOWN_FIELD": "Use a known field such as {year}, {monthShort} or {dayOrdinal}.",
    "UNTERMINATED_LITERAL": "Close every '[' with ']', e.g. 'dddd [at] h:mm A'.",
    "RENDER_ERROR": "Check the value and locale passed to the renderer.",
    "INVALID_INSTANT": "Pass epoch milliseconds, an aware datetime or an ISO 8601 string.",
    "MISSING_LOCALE_ENTRY": "Add the phrase to the locale table or use get_locale(code, fallback=True).",
    "PARSE_ERROR": "Try a simpler expression.",
    "PARSE_FAILED": "Try expressions like 'tomorrow at 3pm', 'in 3 days' or 'end of month'.",
    "PARSE_DEPTH_EXCEEDED": "Use at most 5 offset or boundary clauses in one expression.",
    "INPUT_TOO_LONG": "Keep expressions under 500 characters.",
    "INVALID_DATE_STRING": "Use ISO 8601: '2024-01-15' or '2024-01-15T10:30:00Z'.",
    "TIMEZONE_ERROR": "Pass an IANA zone such as 'America/New_York'.",
    "MISSING_TIMEZONE_CONTEXT": "Call smart(value, zone_id=...) or configure(server={'require_timezone': False}).",
    "INVALID_TIMEZONE": "Use IANA names like 'Europe/London' or 'UTC'.",
    "INVALID_TRANSFER_PAYLOAD": "Create payloads with create_transfer().",
    "CONFIGURATION_ERROR": "Check config: whenny config show",
    "INVALID_CONFIG": "Reset to defaults: whenny config init --force",
    "UNKNOWN_PRESET": "List presets with: whenny config show",
    "WHENNY_ERROR": "If this persists, please report the issue.",
    "UNKNOWN_ERROR": "If this persists, please report the issue.",
}


# =============================================================================
# Default Hints
# =============================================================================

DEFAULT_HINTS: dict[str, list[str]] = {
    "UNKNOWN_FIELD": [
        "Bracket fields: {year} {yearShort} {month} {monthShort} {monthFull} {day} {dayOrdinal}",
        "{weekday} {weekdayShort} {hour} {hour24} {hour12} {minute} {second} {ampm} {AMPM} {offset}",
    ],
    "UNTERMINATED_LITERAL": [
        "Text inside [brackets] is copied verbatim",
        "Every '[' needs a matching ']'",
    ],
    "INVALID_INSTANT": [
        "Time values hold integer epoch milliseconds",
        "Years must lie between 1 and 9999",
    ],
    "MISSING_LOCALE_ENTRY": [
        "Every bucket in the threshold table needs past and future phrases",
        "Register complete tables with register_locale()",
    ],
    "PARSE_FAILED": [
        "Anchors: now, today, tomorrow, yesterday, next friday, last month",
        "Offsets: in 3 days, 2 hours ago; times: at 3pm, morning",
    ],
    "PARSE_DEPTH_EXCEEDED": [
        "The input contains too many chained clauses",
        "Simplify the input: 'tomorrow at 3pm' instead of long chains",
    ],
    "INPUT_TOO_LONG": [
        "Input strings are limited to 500 characters",
        "Split longer text into separate expressions",
    ],
    "INVALID_DATE_STRING": [
        "Use ISO 8601: '2024-01-15' or '2024-01-15T10:30:00Z'",
        "For natural language use parse_natural('tomorrow at 3pm')",
    ],
    "MISSING_TIMEZONE_CONTEXT": [
        "Server-side rendering requires explicit timezone context",
        "Use smart(value, zone_id='America/New_York')",
        "Or opt out: configure(server={'require_timezone': False})",
    ],
    "INVALID_TIMEZONE": [
        "Use IANA timezone names: 'America/New_York', 'Europe/London'",
        "Use 'UTC' for Coordinated Universal Time",
    ],
    "INVALID_TRANSFER_PAYLOAD": [
        "Payloads require: {iso: str, originZone: str, originOffset: int}",
    ],
    "INVALID_CONFIG": [
        "Build configurations with define_config()",
        "Threshold cutoffs must be strictly increasing",
    ],
}


# =============================================================================
# Helper Functions
# =============================================================================


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error."""
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def get_default_hints(code: str) -> list[str]:
    """Default remediation hints for an error code."""
    return list(DEFAULT_HINTS.get(code, [RECOVERY_SUGGESTIONS.get(code, RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])]))


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message.

    Args:
        error: The error to format

    Returns:
        Complete error message with recovery suggestion
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output.

    Args:
        error: The error to format

    Returns:
        CLI-formatted error message
    """
    code = getattr(error, "code", "ERROR")
    lines = [
        f"Error [{code}]: {get_user_message(error)}",
    ]

    if getattr(error, "input", None) is not None:
        lines.append(f"Input: {error.display_input}")

    hints = getattr(error, "hints", None) or [get_recovery_suggestion(error)]
    lines.append("")
    lines.append("Hints:")
    for hint in hints:
        lines.append(f"  - {hint}")

    return "\n".join(lines)


__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_SUGGESTIONS",
    "DEFAULT_HINTS",
    "get_user_message",
    "get_recovery_suggestion",
    "get_default_hints",
    "format_error_for_user",
    "format_error_for_cli",
]
