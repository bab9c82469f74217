# tests/test_parser.py

from __future__ import annotations

import pytest

from fdl_parser.loader import (
    ParseError,
    Parser,
    Position,
    PropValue,
    parse,
    parse_source,
    tokenize,
)


def expect_error(source: str, **kwargs) -> ParseError:
    with pytest.raises(ParseError) as excinfo:
        parse_source(source, **kwargs)
    return excinfo.value


# ---------------------------------------------------------------------------
# Well-formed input
# ---------------------------------------------------------------------------

def test_empty_source_gives_empty_forest() -> None:
    assert parse(tokenize("")) == {}
    assert parse(tokenize("  \n\t ")) == {}


def test_parses_a_thing() -> None:
    forest = parse(tokenize('thing "MyThing" {} '))
    assert list(forest) == ["MyThing"]
    thing = forest["MyThing"]
    assert thing.name == "MyThing"
    assert thing.child_count() == 0
    assert thing.props == {}


def test_parses_sibling_things() -> None:
    forest = parse_source(
        """
        thing "MyThing" {}
        thing "MyThing2" {}
        """
    )
    assert len(forest) == 2


def test_parses_nested_things() -> None:
    forest = parse_source('thing "A" { thing "B" {} }')
    assert len(forest) == 1
    a = forest["A"]
    assert a.child_count() == 1
    assert a.get_thing("B").child_count() == 0


def test_same_named_roots_overwrite() -> None:
    forest = parse_source('thing "A" { int x = 1 } thing "A" { int x = 2 }')
    assert len(forest) == 1
    assert forest["A"].get_prop("x").value == PropValue.int_(2)


def test_same_named_children_overwrite() -> None:
    forest = parse_source('thing "A" { thing "B" { int x = 1 } thing "B" {} }')
    a = forest["A"]
    assert a.child_count() == 1
    assert a.get_thing("B").props == {}


def test_parse_a_complex_source() -> None:
    source = """
        thing "Thing Name" {
            int int_prop = 12
            float float_prop = 12.1
            bool bool_prop = true
            string string_prop = "I'm a String"
        }
    """
    forest = parse_source(source)

    assert len(forest) == 1
    thing = forest["Thing Name"]
    assert thing.child_count() == 0
    assert len(thing.props) == 4

    assert thing.get_prop("int_prop").value == PropValue.int_(12)
    assert thing.get_prop("float_prop").value == PropValue.float_(12.1)
    assert thing.get_prop("bool_prop").value == PropValue.bool_(True)
    assert thing.get_prop("string_prop").value == PropValue.string("I'm a String")


def test_string_prop_accepts_bare_words() -> None:
    forest = parse_source('thing "A" { string mode = fast }')
    assert forest["A"].get_prop("mode").value == PropValue.string("fast")


def test_props_attach_to_innermost_thing() -> None:
    forest = parse_source('thing "A" { thing "B" { int x = 1 } int y = 2 }')
    a = forest["A"]
    assert set(a.props) == {"y"}
    assert set(a.get_thing("B").props) == {"x"}


def test_from_tokens_exposes_forest() -> None:
    parser = Parser.from_tokens(tokenize('thing "A" {}'))
    assert list(parser.things) == ["A"]
    assert parser.depth == 0


# ---------------------------------------------------------------------------
# Structural errors
# ---------------------------------------------------------------------------

def test_thing_as_last_token_is_an_error() -> None:
    err = expect_error("thing")
    assert err.position == Position(0, 0)


def test_thing_not_followed_by_string_is_an_error() -> None:
    err = expect_error("thing 12")
    assert err.position == Position(0, 6)


def test_thing_name_without_opening_brace_is_an_error() -> None:
    err = expect_error('thing "Name" a')
    assert err.position == Position(0, 13)


def test_missing_closing_brace_points_at_open_thing() -> None:
    err = expect_error('thing "Name" {')
    assert err.position == Position(0, 0)
    assert "Name" in err.message


def test_missing_closing_brace_reports_innermost_thing() -> None:
    err = expect_error('thing "A" {\n  thing "B" {\n')
    assert err.position == Position(1, 2)
    assert "`B`" in err.message


def test_stray_closing_brace_reports_its_position() -> None:
    err = expect_error("  }")
    assert err.position == Position(0, 2)


def test_extra_closing_brace_after_thing() -> None:
    err = expect_error('thing "A" {}\n}')
    assert err.position == Position(1, 0)


def test_prop_outside_thing_is_an_error() -> None:
    err = expect_error("int x = 1")
    assert err.position == Position(0, 0)
    assert "outside" in err.message


@pytest.mark.parametrize(
    "source, position",
    [
        ("hello", Position(0, 0)),
        ('thing "A" {} junk', Position(0, 13)),
        ('thing "A" { 12 }', Position(0, 12)),
        ('thing "A" { "x" }', Position(0, 12)),
        ('thing "A" { ; }', Position(0, 12)),
    ],
)
def test_unexpected_tokens_are_errors(source: str, position: Position) -> None:
    err = expect_error(source)
    assert err.position == position
    assert "Unexpected token" in err.message


def test_prop_missing_name() -> None:
    err = expect_error('thing "A" { int = 1 }')
    assert err.position == Position(0, 16)


def test_prop_missing_equals() -> None:
    err = expect_error('thing "A" { int x 1 }')
    assert err.position == Position(0, 18)


def test_prop_missing_value_at_end_of_stream() -> None:
    err = expect_error('thing "A" { int x =')
    assert err.position == Position(0, 18)


# ---------------------------------------------------------------------------
# Value errors
# ---------------------------------------------------------------------------

def test_type_mismatch_reports_value_position() -> None:
    err = expect_error('thing "A" {\n    int x = true\n}')
    assert err.position == Position(1, 12)
    assert "true" in err.message


def test_negative_numbers_are_not_single_value_tokens() -> None:
    err = expect_error('thing "A" { int x = -5 }')
    assert err.position == Position(0, 20)


def test_tolerant_mode_keeps_error_values() -> None:
    forest = parse_source(
        'thing "A" { int x = true float y = 1.5 }', strict_values=False
    )
    a = forest["A"]
    assert a.get_prop("x").value == PropValue.error()
    assert a.get_prop("y").value == PropValue.float_(1.5)


def test_tolerant_mode_still_fails_on_structure() -> None:
    expect_error('thing "A" {', strict_values=False)


def test_parse_error_string_format() -> None:
    err = expect_error("}")
    assert str(err) == "line 0:0 - Unexpected closing brace `}`"
