"""Locale tables for rendered phrases and names."""

from .locales import (
    DEFAULT_LOCALE,
    ENGLISH,
    LocaleTable,
    available_locales,
    counted,
    fixed,
    get_locale,
    register_locale,
)

__all__ = [
    "DEFAULT_LOCALE",
    "ENGLISH",
    "LocaleTable",
    "available_locales",
    "counted",
    "fixed",
    "get_locale",
    "register_locale",
]
