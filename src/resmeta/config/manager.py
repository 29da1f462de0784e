"""Configuration manager: read/write TOML config, resolve settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from resmeta.config.constants import CONFIG_FILE, DEFAULT_INDENT, ENV_ORIGIN_NAME
from resmeta.config.models import CLIConfig
from resmeta.errors import ConfigurationError

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

SETTABLE_KEYS = ("default_format", "origin_name", "indent")


class ConfigManager:
    """Manages CLI configuration on disk."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
            return CLIConfig(**data)
        except (tomllib.TOMLDecodeError, ValidationError) as exc:
            raise ConfigurationError(f"Invalid config file {self.config_path}: {exc}") from exc

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        data: dict[str, Any] = {}
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.origin_name:
            data["origin_name"] = self.config.origin_name
        if self.config.indent != DEFAULT_INDENT:
            data["indent"] = self.config.indent
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        temp.write_text(tomli_w.dumps(data))
        temp.replace(self.config_path)

    def set_value(self, key: str, value: str) -> None:
        """Validate and persist one setting."""
        if key not in SETTABLE_KEYS:
            raise ConfigurationError(
                f"Unknown setting '{key}'. Choose from: {', '.join(SETTABLE_KEYS)}"
            )
        updated = self.config.model_dump()
        if key == "origin_name":
            updated[key] = value or None
        else:
            updated[key] = value
        try:
            self._config = CLIConfig(**updated)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid value for '{key}': {exc.errors()[0]['msg']}") from exc
        self.save()

    def resolve_origin_name(self, name: str | None = None) -> str:
        """Resolve the origin name stamped on resources.

        Precedence: CLI flag > env var > config file.
        """
        resolved = name or os.environ.get(ENV_ORIGIN_NAME) or self.config.origin_name
        if not resolved:
            raise ConfigurationError(
                "No origin name configured. Use 'resmeta config set origin_name NAME', "
                f"set {ENV_ORIGIN_NAME} or pass --name."
            )
        return resolved

    def resolve_format(self, fmt: str | None = None) -> str:
        return fmt or self.config.default_format
