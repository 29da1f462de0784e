"""Blob commands: encode, decode and attach blob reference annotations."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from resmeta.accessor import MetaAccessor
from resmeta.annotations import BlobInfo
from resmeta.commands._common import FileArg, FormatOpt, get_manager, load_resource, save_resource
from resmeta.errors import error_handler
from resmeta.output.formatter import output

app = typer.Typer(name="blob", help="Work with blob reference annotations.")
console = Console()

UidOpt = Annotated[str, typer.Option("--uid", help="Blob UID")]
SizeOpt = Annotated[int, typer.Option("--size", min=0, help="Size in bytes")]
HashOpt = Annotated[str, typer.Option("--hash", help="Content hash")]
MimeOpt = Annotated[str, typer.Option("--mime", help="MIME type")]
CharsetOpt = Annotated[str, typer.Option("--charset", help="Character set")]


@app.command()
@error_handler
def encode(
    uid: UidOpt,
    size: SizeOpt = 0,
    content_hash: HashOpt = "",
    mime: MimeOpt = "",
    charset: CharsetOpt = "",
) -> None:
    """Print the annotation value for a blob reference."""
    info = BlobInfo(uid=uid, size=size, hash=content_hash, mime_type=mime, charset=charset)
    typer.echo(info.encode())


@app.command()
@error_handler
def decode(
    text: Annotated[str, typer.Argument(help="Encoded blob annotation")],
    fmt: FormatOpt = None,
) -> None:
    """Parse a blob annotation value."""
    info = BlobInfo.parse(text)
    output(info.model_dump(), get_manager().resolve_format(fmt), title="Blob")


@app.command()
@error_handler
def attach(
    file: FileArg,
    uid: UidOpt,
    size: SizeOpt = 0,
    content_hash: HashOpt = "",
    mime: MimeOpt = "",
    charset: CharsetOpt = "",
) -> None:
    """Attach a blob reference annotation to a resource file."""
    data = load_resource(file)
    info = BlobInfo(uid=uid, size=size, hash=content_hash, mime_type=mime, charset=charset)
    MetaAccessor(data).set_blob(info)
    save_resource(file, data, indent=get_manager().config.indent)
    console.print(f"[green]Blob '{uid}' attached to '{file}'.[/]")


@app.command()
@error_handler
def detach(file: FileArg) -> None:
    """Remove the blob reference annotation from a resource file."""
    data = load_resource(file)
    MetaAccessor(data).set_blob(None)
    save_resource(file, data, indent=get_manager().config.indent)
    console.print(f"[green]Blob reference removed from '{file}'.[/]")
