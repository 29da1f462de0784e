"""Tests for output formatting."""

from __future__ import annotations

from io import StringIO
from unittest.mock import patch

from rich.console import Console

from resmeta.annotations import BlobInfo
from resmeta.output.formatter import output
from resmeta.output.tables import kv_table, make_table


def render(table) -> str:
    buf = StringIO()
    Console(file=buf, force_terminal=True, width=100).print(table)
    return buf.getvalue()


def capture(data, fmt, **kwargs) -> str:
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, width=200)
    with patch("resmeta.output.formatter.console", console):
        output(data, fmt, **kwargs)
    return buf.getvalue()


class TestTables:
    def test_make_table(self):
        out = render(make_table("Test", ["A", "B"], [["1", "2"], ["3", None]]))
        assert "Test" in out
        assert "1" in out
        assert "3" in out

    def test_kv_table_nested_values(self):
        out = render(kv_table({"origin": {"name": "git"}, "secure": ["a", "b"], "blob": None}))
        assert "name=git" in out
        assert "a, b" in out
        assert "blob" in out


class TestOutput:
    def test_json(self):
        out = capture({"sloth": "🦥"}, "json")
        assert '"sloth"' in out
        assert "🦥" in out

    def test_json_model(self):
        out = capture(BlobInfo(uid="u", size=1), "json")
        assert '"uid": "u"' in out

    def test_yaml(self):
        out = capture({"key": "val", "items": [1]}, "yaml")
        assert "key: val" in out
        assert "- 1" in out

    def test_table_kv(self):
        out = capture({"key": "val"}, "table", title="T")
        assert "key" in out
        assert "val" in out

    def test_table_rows(self):
        out = capture([], "table", columns=["A"], rows=[["x"]])
        assert "x" in out

    def test_table_fallback(self):
        out = capture("plain text", "table")
        assert "plain text" in out
