"""Timezone commands: ``whenny zones list|offset``."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from whenny.cli.common import console, fail, parse_time_argument
from whenny.core.models import TimeValue
from whenny.core.timezone import DEFAULT_RESOLVER, common_zones, format_offset
from whenny.errors import WhennyError

zones_app = typer.Typer(help="Inspect timezones")


@zones_app.command("list")
def list_zones() -> None:
    """Show common zones with their current offset."""
    now = TimeValue.now().instant_millis
    table = Table(title="Common timezones")
    table.add_column("Zone", style="cyan")
    table.add_column("Offset")
    table.add_column("Abbreviation")
    for zone_id in common_zones():
        minutes = DEFAULT_RESOLVER.offset_minutes(zone_id, now)
        table.add_row(zone_id, format_offset(minutes), DEFAULT_RESOLVER.abbreviation(zone_id, now))
    console.print(table)


@zones_app.command("offset")
def zone_offset(
    zone: str = typer.Argument(..., help="IANA zone, e.g. America/New_York"),
    at: Optional[str] = typer.Option(None, "--at", help="Instant to evaluate (default: now)"),
) -> None:
    """Print the UTC offset and abbreviation of ZONE."""
    try:
        instant = (parse_time_argument(at) if at else TimeValue.now()).instant_millis
        minutes = DEFAULT_RESOLVER.offset_minutes(zone, instant)
        abbreviation = DEFAULT_RESOLVER.abbreviation(zone, instant)
    except WhennyError as exc:
        fail(exc)
    console.print(f"{zone} {format_offset(minutes)} ({abbreviation})", markup=False, highlight=False, soft_wrap=True)
