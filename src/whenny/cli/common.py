"""Helpers shared by the CLI command groups."""

from __future__ import annotations

import typer
from rich.console import Console

from whenny.core.models import TimeValue
from whenny.errors import WhennyError, format_error_for_cli

console = Console()
err_console = Console(stderr=True)


def parse_time_argument(raw: str) -> TimeValue:
    """``now``, epoch milliseconds, or an ISO 8601 string."""
    text = raw.strip()
    if text.lower() == "now":
        return TimeValue.now()
    if text.lstrip("-").isdigit():
        return TimeValue(int(text))
    return TimeValue.from_iso(text)


def fail(error: WhennyError) -> None:
    err_console.print(format_error_for_cli(error), markup=False, highlight=False)
    raise typer.Exit(code=1)
