# src/fdl_parser/loader/__init__.py

"""
Public interface for the FDL loader stack.

Intended usage from other parts of the project and tests:

    from fdl_parser.loader import (
        Token,
        TokenKind,
        Position,
        tokenize,
        Thing,
        Prop,
        PropValue,
        ParseError,
        parse,
        walk,
        walk_controlled,
        Visit,
        ThingTree,
        build_tree,
    )
"""

from __future__ import annotations

from .tokenizer import Lexer, Position, Token, TokenKind, tokenize
from .things import Prop, PropType, PropValue, Thing
from .parser import ParseError, Parser, parse, parse_source
from .traversal import Visit, walk, walk_controlled
from .tree_builder import Handle, ThingTree, build_tree
from .file_loader import load_file, load_tree, resolve_input_path


__all__ = [
    "Lexer",
    "Position",
    "Token",
    "TokenKind",
    "tokenize",
    "Prop",
    "PropType",
    "PropValue",
    "Thing",
    "ParseError",
    "Parser",
    "parse",
    "parse_source",
    "Visit",
    "walk",
    "walk_controlled",
    "Handle",
    "ThingTree",
    "build_tree",
    "load_file",
    "load_tree",
    "resolve_input_path",
]
