# src/fdl_parser/loader/parser.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from fdl_parser.utils.strings import strip_quotes

from .things import Prop, PropType, Thing
from .tokenizer import Position, Token, TokenKind, tokenize

TokenItem = Tuple[Token, Position]


class ParseError(Exception):
    """
    Raised for the first structural or value error in a token stream.

    Attributes:
        position: Zero-based location of the offending token.
        message: Human-readable description.
    """

    def __init__(self, position: Position, message: str) -> None:
        super().__init__(message)
        self.position = position
        self.message = message

    def __str__(self) -> str:
        return f"line {self.position.line}:{self.position.column} - {self.message}"


@dataclass
class _Frame:
    """An open thing on the parser stack and where its declaration began."""

    thing: Thing
    position: Position


@dataclass
class Parser:
    """
    Stack-based parser for FDL token streams.

    Grammar:

        document   := (thing_decl)*
        thing_decl := "thing" STRING "{" (prop_decl | thing_decl)* "}"
        prop_decl  := TYPE_WORD WORD "=" VALUE
        TYPE_WORD  := "int" | "float" | "bool" | "string"

    A thing is pushed when its header is read and only attached to its
    parent (or to ``things``, the forest) once its closing brace is popped,
    so a finished forest can never contain a cycle.

    Any top-level token other than ``thing`` is a ParseError; nothing is
    skipped.

    With ``strict_values`` a prop literal that does not convert to its
    declared type is a ParseError; otherwise the prop is stored with an
    error value.
    """

    strict_values: bool = True
    things: Dict[str, Thing] = field(default_factory=dict)
    _stack: List[_Frame] = field(default_factory=list, init=False, repr=False)

    @classmethod
    def from_tokens(
        cls, tokens: Iterable[TokenItem], strict_values: bool = True
    ) -> "Parser":
        """
        Consume ``tokens`` completely and return the populated parser.

        Raises:
            ParseError: on the first malformed construct.
        """
        parser = cls(strict_values=strict_values)
        stream = iter(tokens)

        for item in stream:
            parser._parse_token(item, stream)

        if parser._stack:
            frame = parser._stack[-1]
            raise ParseError(
                frame.position,
                f"Thing `{frame.thing.name}` is missing a closing brace `}}`",
            )
        return parser

    @property
    def depth(self) -> int:
        """Number of things currently open."""
        return len(self._stack)

    # ------------------------------------------------------------------ #
    # Token dispatch
    # ------------------------------------------------------------------ #

    def _parse_token(self, item: TokenItem, stream: Iterator[TokenItem]) -> None:
        token, position = item

        if token.kind is TokenKind.WORD:
            if token.literal == "thing":
                self._parse_thing(item, stream)
                return
            prop_type = PropType.from_keyword(token.literal)
            if prop_type is not None:
                self._parse_prop(item, prop_type, stream)
                return

        if token.kind is TokenKind.SYMBOL and token.literal == "}":
            self._close_thing(position)
            return

        raise ParseError(position, f"Unexpected token: `{token.literal}`")

    def _expect(
        self,
        stream: Iterator[TokenItem],
        previous: Position,
        kind: TokenKind,
        message: str,
        literal: Optional[str] = None,
    ) -> TokenItem:
        """Read the next token and check its kind (and literal, if given)."""
        item = next(stream, None)
        if item is None:
            raise ParseError(previous, message)

        token, position = item
        if token.kind is not kind or (literal is not None and token.literal != literal):
            raise ParseError(position, message)
        return item

    # ------------------------------------------------------------------ #
    # Constructs
    # ------------------------------------------------------------------ #

    def _parse_thing(self, item: TokenItem, stream: Iterator[TokenItem]) -> None:
        _, keyword_pos = item

        name_tok, name_pos = self._expect(
            stream, keyword_pos, TokenKind.STRING,
            "Expected String name after keyword `thing`",
        )
        self._expect(
            stream, name_pos, TokenKind.SYMBOL,
            "Expected `{` after thing name", literal="{",
        )

        self._stack.append(_Frame(Thing(strip_quotes(name_tok.literal)), keyword_pos))

    def _parse_prop(
        self, item: TokenItem, prop_type: PropType, stream: Iterator[TokenItem]
    ) -> None:
        type_tok, type_pos = item
        if not self._stack:
            raise ParseError(
                type_pos,
                f"Prop defined outside of any thing (found `{type_tok.literal}`)",
            )

        name_tok, name_pos = self._expect(
            stream, type_pos, TokenKind.WORD,
            f"Expected prop name after type `{prop_type.value}`",
        )
        _, eq_pos = self._expect(
            stream, name_pos, TokenKind.SYMBOL,
            f"Expected `=` after prop name `{name_tok.literal}`", literal="=",
        )

        value_item = next(stream, None)
        if value_item is None:
            raise ParseError(eq_pos, f"Expected value for prop `{name_tok.literal}`")
        value_tok, value_pos = value_item

        prop = Prop.from_literal(name_tok.literal, value_tok.literal, prop_type)
        if prop.is_error and self.strict_values:
            raise ParseError(
                value_pos,
                f"Value `{value_tok.literal}` is not a valid {prop_type.value} "
                f"for prop `{name_tok.literal}`",
            )

        self._stack[-1].thing.add_prop(prop)

    def _close_thing(self, position: Position) -> None:
        if not self._stack:
            raise ParseError(position, "Unexpected closing brace `}`")

        thing = self._stack.pop().thing
        if self._stack:
            self._stack[-1].thing.add_thing(thing)
        else:
            self.things[thing.name] = thing


def parse(tokens: Iterable[TokenItem], strict_values: bool = True) -> Dict[str, Thing]:
    """
    Parse a token stream into a forest of root things keyed by name.

    Raises:
        ParseError: on the first structural or value error.
    """
    return Parser.from_tokens(tokens, strict_values=strict_values).things


def parse_source(source: str, strict_values: bool = True) -> Dict[str, Thing]:
    """Tokenize and parse ``source`` in one step."""
    return parse(tokenize(source), strict_values=strict_values)


__all__ = [
    "ParseError",
    "Parser",
    "parse",
    "parse_source",
]
