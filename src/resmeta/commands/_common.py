"""Shared helpers for CLI commands: options, resource file I/O."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml

from resmeta.config.manager import ConfigManager
from resmeta.errors import InvalidInputError, ResourceFormatError

# Shared Typer option type aliases
FormatOpt = Annotated[
    str | None,
    typer.Option("--format", "-f", help="Output format (table, json, yaml)"),
]
FileArg = Annotated[
    Path,
    typer.Argument(help="Resource file (.json, .yaml or .yml)"),
]

_YAML_SUFFIXES = (".yaml", ".yml")


def get_manager() -> ConfigManager:
    return ConfigManager()


def load_resource(path: Path) -> dict[str, Any]:
    """Read a resource document from a JSON or YAML file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidInputError(f"Cannot read {path}: {exc.strerror}") from exc
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (ValueError, yaml.YAMLError) as exc:
        raise ResourceFormatError(f"Cannot parse {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path} does not contain a resource object")
    return data


def save_resource(path: Path, data: dict[str, Any], *, indent: int) -> None:
    """Write a resource document back in the format it was read in."""
    if path.suffix.lower() in _YAML_SUFFIXES:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(text, encoding="utf-8")
    temp.replace(path)
