"""Whenny: render time values as text and parse text back into time values."""

from whenny.api import format, format_preset, parse_natural, relative, smart
from whenny.configuration import WhennyConfig, configure, define_config, get_config, reset_config
from whenny.core import (
    TimeValue,
    create_transfer,
    day_bounds_in_origin,
    from_transfer,
    is_transfer_payload,
)
from whenny.errors import WhennyError
from whenny.natural import can_parse, parse_strict, parse_with_info
from whenny.relative import Duration, compare, distance, parse_duration

__version__ = "0.1.0"

__all__ = [
    "Duration",
    "TimeValue",
    "WhennyConfig",
    "WhennyError",
    "can_parse",
    "compare",
    "configure",
    "create_transfer",
    "day_bounds_in_origin",
    "define_config",
    "distance",
    "format",
    "format_preset",
    "from_transfer",
    "get_config",
    "is_transfer_payload",
    "parse_duration",
    "parse_natural",
    "parse_strict",
    "parse_with_info",
    "relative",
    "reset_config",
    "smart",
]
