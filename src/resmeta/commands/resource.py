"""Resource commands: inspect and stamp metadata on resource files."""

from __future__ import annotations

import hashlib
import json
from typing import Annotated, Any, Optional

import typer
from rich.console import Console

from resmeta.accessor import MetaAccessor
from resmeta.annotations import ResourceOriginInfo
from resmeta.commands._common import FileArg, FormatOpt, get_manager, load_resource, save_resource
from resmeta.errors import error_handler
from resmeta.models.secure import SecureValue
from resmeta.output.formatter import output

app = typer.Typer(name="resource", help="Inspect and update resource metadata.")
console = Console()


def spec_hash(meta: MetaAccessor) -> str:
    """Fingerprint of the spec section (sha256 of its canonical JSON)."""
    spec = meta.get_spec()
    canonical = json.dumps(spec, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode()).hexdigest()


def summarize(meta: MetaAccessor) -> dict[str, Any]:
    """Collect the metadata shown by ``resource show``."""
    gvk = meta.get_group_version_kind()
    origin = meta.get_origin_info()
    blob = meta.get_blob()
    secure, supported = meta.get_secure_values()
    return {
        "name": meta.get_name(),
        "namespace": meta.get_namespace(),
        "group": gvk.group,
        "version": gvk.version,
        "kind": gvk.kind,
        "resourceVersion": meta.get_resource_version(),
        "title": meta.find_title(""),
        "folder": meta.get_folder(),
        "origin": origin.model_dump() if origin else None,
        "blob": blob.model_dump() if blob else None,
        "secure": sorted(secure) if secure else ([] if supported else None),
    }


@app.command()
@error_handler
def show(file: FileArg, fmt: FormatOpt = None) -> None:
    """Show metadata of a resource file."""
    meta = MetaAccessor(load_resource(file))
    output(summarize(meta), get_manager().resolve_format(fmt), title=str(file))


@app.command()
@error_handler
def spec(file: FileArg, fmt: FormatOpt = None) -> None:
    """Print the spec section."""
    meta = MetaAccessor(load_resource(file))
    output(meta.get_spec(), get_manager().resolve_format(fmt))


@app.command()
@error_handler
def status(file: FileArg, fmt: FormatOpt = None) -> None:
    """Print the status section."""
    meta = MetaAccessor(load_resource(file))
    output(meta.get_status(), get_manager().resolve_format(fmt))


@app.command()
@error_handler
def stamp(
    file: FileArg,
    path: Annotated[Optional[str], typer.Option("--path", "-p", help="Path in the source system")] = None,
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="Source system name")] = None,
    content_hash: Annotated[
        Optional[str], typer.Option("--hash", help="Content hash (defaults to a hash of the spec)"),
    ] = None,
    folder: Annotated[Optional[str], typer.Option("--folder", help="Folder UID")] = None,
) -> None:
    """Stamp origin (and optionally folder) annotations onto a resource file."""
    mgr = get_manager()
    origin_name = mgr.resolve_origin_name(name)
    data = load_resource(file)
    meta = MetaAccessor(data)
    info = ResourceOriginInfo(
        name=origin_name,
        path=path if path is not None else file.name,
        hash=content_hash if content_hash is not None else spec_hash(meta),
    )
    meta.set_origin_info(info)
    if folder is not None:
        meta.set_folder(folder)
    save_resource(file, data, indent=mgr.config.indent)
    console.print(f"[green]Stamped '{file}' with origin {info.name}:{info.path}.[/]")


@app.command("set-secure")
@error_handler
def set_secure(
    file: FileArg,
    key: Annotated[str, typer.Argument(help="Secure value key")],
    guid: Annotated[Optional[str], typer.Option("--guid", help="Reference to a stored secret")] = None,
    value: Annotated[Optional[str], typer.Option("--value", help="Plaintext value")] = None,
) -> None:
    """Store a secure value (a secret reference or a plaintext value)."""
    if (guid is None) == (value is None):
        raise ValueError("Pass exactly one of --guid or --value")
    data = load_resource(file)
    MetaAccessor(data).set_secure_value(key, SecureValue(guid=guid, value=value))
    save_resource(file, data, indent=get_manager().config.indent)
    console.print(f"[green]Secure value '{key}' set.[/]")


@app.command()
@error_handler
def secure(file: FileArg, fmt: FormatOpt = None) -> None:
    """List secure values (plaintext values are masked)."""
    meta = MetaAccessor(load_resource(file))
    values, _ = meta.get_secure_values()
    if not values:
        console.print("[yellow]No secure values.[/]")
        return
    rows = [
        [key, "guid" if sv.guid else "value", sv.guid or "***"]
        for key, sv in sorted(values.items())
    ]
    output(
        {key: {"guid": sv.guid} if sv.guid else {"value": "***"} for key, sv in values.items()},
        get_manager().resolve_format(fmt),
        columns=["Key", "Kind", "Reference"],
        rows=rows,
        title="Secure values",
    )
