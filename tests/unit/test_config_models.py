"""Tests for config models."""

import pytest
from pydantic import ValidationError

from resmeta.config.models import CLIConfig


class TestCLIConfig:
    def test_defaults(self):
        config = CLIConfig()
        assert config.default_format == "table"
        assert config.origin_name is None
        assert config.indent == 2

    def test_valid_formats(self):
        for fmt in ("table", "json", "yaml"):
            assert CLIConfig(default_format=fmt).default_format == fmt

    def test_invalid_format(self):
        with pytest.raises(ValidationError, match="Format must be one of"):
            CLIConfig(default_format="csv")

    def test_indent_bounds(self):
        with pytest.raises(ValidationError):
            CLIConfig(indent=-1)
        with pytest.raises(ValidationError):
            CLIConfig(indent=9)
