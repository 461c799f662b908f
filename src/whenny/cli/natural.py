"""Natural-language commands: ``whenny natural parse|check``."""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.table import Table

from whenny.cli.common import console, fail, parse_time_argument
from whenny.errors import WhennyError
from whenny.natural.nodes import describe
from whenny.natural.parser import can_parse, parse_with_info

natural_app = typer.Typer(help="Parse natural-language dates")


@natural_app.command("parse")
def parse_command(
    text: str = typer.Argument(..., help="Expression such as 'next friday at 3pm'"),
    reference: Optional[str] = typer.Option(None, "--from", help="Reference instant (default: now)"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="IANA zone the expression is read in"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Parse TEXT into an instant."""
    try:
        ref = parse_time_argument(reference) if reference else None
        result = parse_with_info(text, reference=ref, zone_id=zone, strict=True)
    except WhennyError as exc:
        fail(exc)

    value = result.value
    payload = {
        "input": text,
        "iso": value.to_iso(),
        "instant_millis": value.instant_millis,
        "origin_zone": value.origin_zone,
        "origin_offset_minutes": value.origin_offset_minutes,
        "confident": result.confident,
        "matched": result.matched,
        "expression": describe(result.node),
    }
    if output_json:
        typer.echo(json.dumps(payload))
        return

    table = Table(title=f"Parsed: {text}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, item in payload.items():
        if key != "input":
            table.add_row(key, str(item))
    console.print(table)


@natural_app.command("check")
def check_command(
    text: str = typer.Argument(..., help="Expression to test"),
    zone: Optional[str] = typer.Option(None, "--zone", "-z", help="IANA zone the expression is read in"),
) -> None:
    """Exit 0 when TEXT parses, 1 otherwise."""
    if can_parse(text, zone_id=zone):
        console.print(f"[green]✓[/green] parseable: {text}", highlight=False)
        return
    console.print(f"[red]✗[/red] not parseable: {text}", highlight=False)
    raise typer.Exit(code=1)
