"""Config commands: view and change CLI settings."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from resmeta.commands._common import FormatOpt, get_manager
from resmeta.config.manager import SETTABLE_KEYS
from resmeta.errors import error_handler
from resmeta.output.formatter import output

app = typer.Typer(name="config", help="View and change CLI configuration.")
console = Console()


@app.command()
@error_handler
def show(fmt: FormatOpt = None) -> None:
    """Show the current settings."""
    mgr = get_manager()
    output(mgr.config.model_dump(), mgr.resolve_format(fmt), title="Configuration")


@app.command("set")
@error_handler
def set_value(
    key: Annotated[str, typer.Argument(help=f"Setting name ({', '.join(SETTABLE_KEYS)})")],
    value: Annotated[str, typer.Argument(help="New value (empty string to clear origin_name)")],
) -> None:
    """Change one setting."""
    mgr = get_manager()
    mgr.set_value(key, value)
    console.print(f"[green]Set {key} = {getattr(mgr.config, key)!r}.[/]")


@app.command()
@error_handler
def path() -> None:
    """Print the config file location."""
    typer.echo(str(get_manager().config_path))
