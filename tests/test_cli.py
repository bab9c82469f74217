# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from fdl_parser.cli import app
from fdl_parser.cli.utils import format_parse_error
from fdl_parser.loader import ParseError, Position
from fdl_parser.utils import mock_file_path

runner = CliRunner()


def test_format_parse_error_uses_zero_based_counters() -> None:
    err = ParseError(Position(3, 7), "Unexpected token: `;`")
    assert format_parse_error(err) == "line 3:7 - Unexpected token: `;`"
    assert format_parse_error(err) == str(err)


def test_check_valid_file() -> None:
    result = runner.invoke(app, ["check", str(mock_file_path("server.fdl"))])
    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    assert "Things" in result.output


def test_check_reports_value_error() -> None:
    result = runner.invoke(app, ["check", str(mock_file_path("type_mismatch.fdl"))])
    assert result.exit_code == 1
    assert "line 2:18 - " in result.output


def test_check_tolerant_accepts_value_error() -> None:
    result = runner.invoke(
        app, ["check", "--tolerant", str(mock_file_path("type_mismatch.fdl"))]
    )
    assert result.exit_code == 0, result.output
    assert "Invalid props" in result.output


def test_check_reports_unclosed_thing() -> None:
    result = runner.invoke(app, ["check", str(mock_file_path("unclosed.fdl"))])
    assert result.exit_code == 1
    assert "line 0:0 - Thing `Outer` is missing a closing brace" in result.output


def test_check_missing_file(tmp_path) -> None:
    result = runner.invoke(app, ["check", str(tmp_path / "absent.fdl")])
    assert result.exit_code != 0


def test_view_collapsed_lists_roots_only() -> None:
    result = runner.invoke(app, ["view", str(mock_file_path("server.fdl"))])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines == ["+ Server", "- Client"]


def test_view_expand_all() -> None:
    result = runner.invoke(app, ["view", "--expand", str(mock_file_path("server.fdl"))])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "- Server",
        "-     Database",
        "-         Pool",
        "-     Cache",
        "- Client",
    ]


def test_view_depth_and_props(write_fdl) -> None:
    path = write_fdl('thing "A" { int x = 1 thing "B" { thing "C" {} } }')
    result = runner.invoke(app, ["view", "--depth", "1", "--props", str(path)])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "- A"
    assert lines[1].strip() == "x = 1"
    assert lines[2] == "+     B"


def test_export_to_stdout(write_fdl) -> None:
    path = write_fdl('thing "A" { bool on = true }')
    result = runner.invoke(app, ["export", str(path)])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {
        "A": {"name": "A", "props": {"on": True}, "things": {}}
    }


def test_export_to_file(write_fdl, tmp_path) -> None:
    path = write_fdl('thing "A" {}')
    out = tmp_path / "out.json"
    result = runner.invoke(app, ["export", str(path), "--out", str(out), "--pretty"])
    assert result.exit_code == 0, result.output
    assert json.loads(out.read_text(encoding="utf-8"))["A"]["name"] == "A"


def test_export_too_deep_for_json_exits_with_error(write_fdl) -> None:
    depth = 3000
    path = write_fdl('thing "n" {' * depth + "}" * depth)
    result = runner.invoke(app, ["export", str(path)])
    assert result.exit_code == 1
    assert "nested too deeply" in result.output
