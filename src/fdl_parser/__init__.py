"""
FDL parser: tokenizer, parser and tree model for the FDL configuration
language.

    from fdl_parser import tokenize, parse, walk_controlled, Visit

    forest = parse(tokenize('thing "Server" { int port = 8080 }'))
"""

from fdl_parser.loader import (
    ParseError,
    Position,
    Prop,
    PropType,
    PropValue,
    Thing,
    ThingTree,
    Token,
    TokenKind,
    Visit,
    build_tree,
    load_tree,
    parse,
    parse_source,
    tokenize,
    walk,
    walk_controlled,
)

__version__ = "0.1.0"

__all__ = [
    "ParseError",
    "Position",
    "Prop",
    "PropType",
    "PropValue",
    "Thing",
    "ThingTree",
    "Token",
    "TokenKind",
    "Visit",
    "build_tree",
    "load_tree",
    "parse",
    "parse_source",
    "tokenize",
    "walk",
    "walk_controlled",
]
