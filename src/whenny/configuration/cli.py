"""CLI commands for managing the Whenny configuration file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

from whenny.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    WhennyConfig,
    bootstrap_config,
    get_config,
    load_config,
)
from whenny.configuration.themes import available_themes
from whenny.errors import WhennyError, format_error_for_cli

config_app = typer.Typer(help="Manage Whenny configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    theme: Optional[str] = typer.Option(None, help=f"Theme: {', '.join(available_themes())}"),
    locale: Optional[str] = typer.Option(None, help="Override locale code"),
    timezone: Optional[str] = typer.Option(None, help="Override default timezone"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Initialize the Whenny settings file."""

    overrides = {}
    if locale:
        overrides["locale"] = locale
    if timezone:
        overrides["default_timezone"] = timezone

    try:
        config = bootstrap_config(path=config_path, theme=theme, overrides=overrides, force=force)
    except WhennyError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_config(config))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the effective configuration (library defaults when no file exists)."""

    if not config_path.exists():
        typer.echo(_summarize_config(get_config()))
        return
    try:
        config = load_config(config_path)
    except WhennyError as exc:
        typer.echo(format_error_for_cli(exc), err=True)
        raise typer.Exit(code=1)
    typer.echo(_summarize_config(config))


@config_app.command("validate")
def validate_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Validate configuration file for correctness."""

    try:
        config = load_config(config_path)
    except (WhennyError, FileNotFoundError) as exc:
        typer.echo(f"❌ Configuration invalid: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"✅ Configuration valid at {config_path}")
    typer.echo(f"   Locale: {config.locale}")
    typer.echo(f"   Default timezone: {config.default_timezone}")
    typer.echo(f"   Require timezone: {config.server.require_timezone}")


def _summarize_config(config: WhennyConfig) -> str:
    return json.dumps(config.model_dump(mode="json"), indent=2)
