"""Top-level entry points re-exported from ``whenny``."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from whenny.configuration.settings import WhennyConfig, get_config, resolve_locale
from whenny.core.models import TimeInput, TimeValue, coerce_time_value
from whenny.errors import UnknownPresetError
from whenny.formatting.compiler import compile_pattern
from whenny.formatting.renderer import render
from whenny.natural.parser import parse
from whenny.relative.bucketer import relative
from whenny.smart.selector import smart

logger = logging.getLogger(__name__)


def named_patterns(config: WhennyConfig) -> Dict[str, str]:
    """Presets and styles by name; presets win on a clash (both define ``time`` and ``iso``)."""
    patterns = dict(config.styles.model_dump())
    patterns.update(config.formats.presets)
    return patterns


def _render_pattern(value: TimeInput, pattern: str, zone_id: Optional[str], config: WhennyConfig) -> str:
    return render(
        compile_pattern(pattern),
        coerce_time_value(value),
        resolve_locale(config),
        zone_id=zone_id,
        hour12=config.formats.hour12,
    )


def format(
    value: TimeInput,
    pattern_or_preset: str,
    *,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> str:
    """Render ``value`` with a preset/style name or a literal pattern.

    >>> format(TimeValue.from_iso("2024-01-15T14:30:00Z"), "MMM Do, YYYY")
    'Jan 15th, 2024'
    """
    config = config or get_config()
    pattern = named_patterns(config).get(pattern_or_preset, pattern_or_preset)
    return _render_pattern(value, pattern, zone_id, config)


def format_preset(
    value: TimeInput,
    name: str,
    *,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> str:
    """Render with a named preset or style only; unknown names raise ``UnknownPresetError``."""
    config = config or get_config()
    patterns = named_patterns(config)
    if name not in patterns:
        raise UnknownPresetError(name, list(patterns))
    return _render_pattern(value, patterns[name], zone_id, config)


def parse_natural(
    text: str,
    *,
    reference: Optional[TimeInput] = None,
    zone_id: Optional[str] = None,
    config: Optional[WhennyConfig] = None,
) -> Optional[TimeValue]:
    return parse(text, reference=reference, zone_id=zone_id, config=config)


__all__ = [
    "format",
    "format_preset",
    "named_patterns",
    "parse_natural",
    "relative",
    "smart",
]
