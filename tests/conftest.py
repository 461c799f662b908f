"""Shared fixtures for the Whenny test suite."""

from __future__ import annotations

import pytest

from whenny.configuration.settings import reset_config
from whenny.core.models import TimeValue
from whenny.i18n.locales import ENGLISH


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts and ends with the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def reference() -> TimeValue:
    """Monday 2024-01-15 12:00:00 UTC."""
    return TimeValue.from_iso("2024-01-15T12:00:00Z")


@pytest.fixture
def english():
    return ENGLISH
