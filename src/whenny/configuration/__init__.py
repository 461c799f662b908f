"""Configuration models, themes and the process-wide snapshot."""

from .settings import (
    DEFAULT_CONFIG,
    DEFAULT_CONFIG_PATH,
    WhennyConfig,
    configure,
    define_config,
    get_config,
    load_config,
    reset_config,
    resolve_locale,
    save_config,
)
from .themes import available_themes, get_theme

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_PATH",
    "WhennyConfig",
    "available_themes",
    "configure",
    "define_config",
    "get_config",
    "get_theme",
    "load_config",
    "reset_config",
    "resolve_locale",
    "save_config",
]
