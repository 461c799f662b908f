"""Rendering commands: ``whenny render format|relative|smart``."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from whenny.api import format as format_value
from whenny.api import relative, smart
from whenny.cli.common import console, fail, parse_time_argument
from whenny.errors import WhennyError

logger = logging.getLogger(__name__)

render_app = typer.Typer(help="Render time values as text")


@render_app.command("format")
def format_command(
    value: str = typer.Argument(..., help="ISO 8601 string, epoch milliseconds or 'now'"),
    pattern: str = typer.Argument(..., help="Preset/style name or pattern, e.g. 'MMM D, YYYY'"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="IANA zone to display in"),
) -> None:
    """Render VALUE with a preset, style or custom pattern."""
    try:
        text = format_value(parse_time_argument(value), pattern, zone_id=zone)
    except WhennyError as exc:
        fail(exc)
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@render_app.command("relative")
def relative_command(
    value: str = typer.Argument(..., help="ISO 8601 string, epoch milliseconds or 'now'"),
    reference: Optional[str] = typer.Option(None, "--from", help="Reference instant (default: now)"),
) -> None:
    """Describe VALUE relative to a reference ("3 hours ago")."""
    try:
        ref = parse_time_argument(reference) if reference else None
        text = relative(parse_time_argument(value), ref)
    except WhennyError as exc:
        fail(exc)
    console.print(text, markup=False, highlight=False, soft_wrap=True)


@render_app.command("smart")
def smart_command(
    value: str = typer.Argument(..., help="ISO 8601 string, epoch milliseconds or 'now'"),
    zone: str = typer.Option(..., "--zone", "-z", help="IANA zone that decides calendar days"),
    reference: Optional[str] = typer.Option(None, "--from", help="Reference instant (default: now)"),
) -> None:
    """Pick the most natural rendering of VALUE for its distance from now."""
    try:
        ref = parse_time_argument(reference) if reference else None
        text = smart(parse_time_argument(value), zone_id=zone, reference=ref)
    except WhennyError as exc:
        fail(exc)
    console.print(text, markup=False, highlight=False, soft_wrap=True)
