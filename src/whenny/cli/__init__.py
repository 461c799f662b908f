"""Command line entry points for Whenny."""

import logging
from pathlib import Path
from typing import Optional

import typer
from typer import Typer

from ..configuration.cli import config_app
from ..configuration.settings import configure, load_config
from ..errors import WhennyError
from .common import fail
from .natural import natural_app
from .render import render_app
from .zones import zones_app


cli = Typer(help="Whenny command line tools")
cli.add_typer(render_app, name="render")
cli.add_typer(natural_app, name="natural")
cli.add_typer(zones_app, name="zones")
cli.add_typer(config_app, name="config")


@cli.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config_path: Optional[Path] = typer.Option(None, "--config", exists=True, dir_okay=False, help="Load settings from this file"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if config_path is not None:
        try:
            configure(load_config(config_path).model_dump(mode="python"))
        except WhennyError as exc:
            fail(exc)


__all__ = ["cli", "config_app", "natural_app", "render_app", "zones_app"]
