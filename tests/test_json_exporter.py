# tests/test_json_exporter.py

from __future__ import annotations

import json

import pytest

from fdl_parser.exporter import dumps_forest, export_json, forest_to_dict
from fdl_parser.loader import Prop, Thing, parse_source


def test_forest_to_dict_nests_things_and_props() -> None:
    forest = parse_source('thing "A" { int x = 1 thing "B" { bool on = true } }')

    assert forest_to_dict(forest) == {
        "A": {
            "name": "A",
            "props": {"x": 1},
            "things": {
                "B": {"name": "B", "props": {"on": True}, "things": {}},
            },
        }
    }


def test_error_values_export_as_null() -> None:
    forest = parse_source('thing "A" { int x = nope }', strict_values=False)
    assert forest_to_dict(forest)["A"]["props"] == {"x": None}


def test_non_finite_floats_export_as_strings() -> None:
    thing = Thing("A")
    thing.add_prop(Prop.float_from_literal("big", "1e100"))
    forest = {"A": thing}
    assert json.loads(dumps_forest(forest))["A"]["props"]["big"] == "inf"


def test_export_json_writes_file(tmp_path) -> None:
    forest = parse_source('thing "A" { string s = "café" }')
    out = tmp_path / "nested" / "out.json"

    payload = export_json(forest, path=out, pretty=True)

    assert out.read_text(encoding="utf-8") == payload
    assert json.loads(payload)["A"]["props"]["s"] == "café"
    assert "\n" in payload


def test_compact_output_has_no_spaces() -> None:
    forest = parse_source('thing "A" {}')
    assert dumps_forest(forest) == '{"A":{"name":"A","props":{},"things":{}}}'


def test_deeply_nested_forest_converts_to_dict() -> None:
    depth = 3000
    forest = parse_source('thing "n" {' * depth + "}" * depth)

    data = forest_to_dict(forest)["n"]
    levels = 1
    while data["things"]:
        data = data["things"]["n"]
        levels += 1
    assert levels == depth


def test_json_encoder_depth_limit_is_a_value_error() -> None:
    depth = 3000
    forest = parse_source('thing "n" {' * depth + "}" * depth)
    with pytest.raises(ValueError):
        dumps_forest(forest)
