"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from resmeta.annotations import ResourceOriginInfo
from resmeta.config.manager import ConfigManager


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def origin_info() -> ResourceOriginInfo:
    return ResourceOriginInfo(name="test", path="a/b/c", hash="kkk")


@pytest.fixture
def dashboard_doc() -> dict[str, Any]:
    """A sample untyped resource document."""
    return {
        "apiVersion": "dashboard.grafana.app/v0alpha1",
        "kind": "Dashboard",
        "metadata": {
            "name": "abc",
            "namespace": "default",
            "resourceVersion": "42",
        },
        "spec": {"title": "Service overview", "panels": []},
        "secure": {"token": {"guid": "TheGUID"}},
    }


@pytest.fixture
def resource_file(tmp_path: Path, dashboard_doc: dict[str, Any]) -> Path:
    """Write the sample document to a JSON file."""
    path = tmp_path / "dashboard.json"
    path.write_text(json.dumps(dashboard_doc, indent=2))
    return path


@pytest.fixture
def cli_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a temp config file and clear env overrides."""
    config_path = tmp_path / "cli-config.toml"
    monkeypatch.setattr("resmeta.config.manager.CONFIG_FILE", config_path)
    monkeypatch.delenv("RESMETA_ORIGIN_NAME", raising=False)
    return config_path
