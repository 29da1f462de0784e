"""Integration tests for config commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from resmeta.app import app

runner = CliRunner()


class TestConfigCommands:
    def test_show_defaults(self, cli_config: Path):
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "default_format": "table",
            "origin_name": None,
            "indent": 2,
        }

    def test_set_and_show(self, cli_config: Path):
        result = runner.invoke(app, ["config", "set", "origin_name", "git"])
        assert result.exit_code == 0
        assert "origin_name" in result.output
        assert 'origin_name = "git"' in cli_config.read_text()

        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "git" in result.output

    def test_set_unknown_key(self, cli_config: Path):
        result = runner.invoke(app, ["config", "set", "color", "red"])
        assert result.exit_code == 8

    def test_set_invalid_value(self, cli_config: Path):
        result = runner.invoke(app, ["config", "set", "default_format", "xml"])
        assert result.exit_code == 8

    def test_path(self, cli_config: Path):
        result = runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert result.output.strip() == str(cli_config)

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "resmeta" in result.output
