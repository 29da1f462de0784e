"""Root Typer app: global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from resmeta import __version__
from resmeta.commands import blob, config_cmd, resource

app = typer.Typer(
    name="resmeta",
    help="Inspect and stamp metadata on resource documents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"resmeta {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """resmeta: origin, folder, blob and secure value metadata for resource files."""


# Register command groups
app.add_typer(resource.app, name="resource")
app.add_typer(blob.app, name="blob")
app.add_typer(config_cmd.app, name="config")


def main() -> None:
    app()
