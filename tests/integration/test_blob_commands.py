"""Integration tests for blob commands."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from resmeta.app import app

runner = CliRunner()

ENCODED = "AAA; size=123; hash=xyz; mime=application/json; charset=utf-8"


class TestBlobCommands:
    def test_encode(self, cli_config: Path):
        result = runner.invoke(app, [
            "blob", "encode", "--uid", "AAA", "--size", "123", "--hash", "xyz",
            "--mime", "application/json", "--charset", "utf-8",
        ])
        assert result.exit_code == 0
        assert result.output.strip() == ENCODED

    def test_decode(self, cli_config: Path):
        result = runner.invoke(app, ["blob", "decode", ENCODED, "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "uid": "AAA",
            "size": 123,
            "hash": "xyz",
            "mime_type": "application/json",
            "charset": "utf-8",
        }

    def test_decode_malformed(self, cli_config: Path):
        result = runner.invoke(app, ["blob", "decode", "AAA; size=1"])
        assert result.exit_code == 6

    def test_attach_and_detach(self, cli_config: Path, resource_file: Path):
        result = runner.invoke(app, [
            "blob", "attach", str(resource_file), "--uid", "AAA", "--size", "123",
            "--hash", "xyz", "--mime", "application/json", "--charset", "utf-8",
        ])
        assert result.exit_code == 0
        annotations = json.loads(resource_file.read_text())["metadata"]["annotations"]
        assert annotations == {"grafana.app/blob": ENCODED}

        result = runner.invoke(app, ["blob", "detach", str(resource_file)])
        assert result.exit_code == 0
        assert "annotations" not in json.loads(resource_file.read_text())["metadata"]

    def test_attach_rejects_separator_in_mime(self, cli_config: Path, resource_file: Path):
        before = resource_file.read_text()
        result = runner.invoke(app, [
            "blob", "attach", str(resource_file), "--uid", "AAA",
            "--mime", "text/plain; charset=utf-8",
        ])
        assert result.exit_code == 1
        assert resource_file.read_text() == before
