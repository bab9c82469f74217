# src/fdl_parser/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class TokenKind(Enum):
    STRING = "string"
    NUMBER = "number"
    WORD = "word"
    SYMBOL = "symbol"


@dataclass(frozen=True)
class Token:
    """
    A single FDL lexical unit.

    Attributes:
        kind: Classification of the token (string, number, word, symbol).
        literal: The exact source text of the token. String literals keep
            their delimiting quotes and any escapes verbatim.
    """
    kind: TokenKind
    literal: str

    def __str__(self) -> str:
        return self.literal


@dataclass(frozen=True)
class Position:
    """
    Zero-based location of a token's first character.

    Attributes:
        line: Number of newlines seen before the token.
        column: Offset from the start of that line.
    """
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_ascii_letter(c: str) -> bool:
    return "a" <= c <= "z" or "A" <= c <= "Z"


class Lexer:
    """
    Lazy tokenizer over a complete source string.

    Iterating a Lexer yields ``(Token, Position)`` pairs until the input is
    exhausted. The lexer has no error state: every character is either
    whitespace or part of some token. It cannot be rewound; create a new
    Lexer to tokenize the same source again.

    Rules, in priority order at each position:
        - ASCII digit  -> NUMBER (digits, plus ``.digits`` when a digit
          follows the dot)
        - ASCII letter -> WORD (alphanumerics and underscores)
        - ``"``        -> STRING (through the first unescaped ``"``)
        - other        -> SYMBOL (single character)
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self.index = 0
        self.line = 0
        self.line_start = 0

    def __iter__(self) -> Iterator[Tuple[Token, Position]]:
        return self

    def __next__(self) -> Tuple[Token, Position]:
        self._skip_whitespace()

        if self.index >= len(self.source):
            raise StopIteration

        position = Position(self.line, self.index - self.line_start)
        c = self.source[self.index]

        if _is_ascii_digit(c):
            token = self._consume_number()
        elif _is_ascii_letter(c):
            token = self._consume_word()
        elif c == '"':
            token = self._consume_string()
        else:
            token = self._consume_symbol()

        return token, position

    # ------------------------------------------------------------------ #
    # Character helpers
    # ------------------------------------------------------------------ #

    def peek(self, offset: int = 0) -> str:
        """Return the character at ``index + offset``, or "" outside the source."""
        i = self.index + offset
        if i < 0 or i >= len(self.source):
            return ""
        return self.source[i]

    def _advance(self) -> str:
        c = self.source[self.index]
        self.index += 1
        if c == "\n":
            self.line += 1
            self.line_start = self.index
        return c

    def _skip_whitespace(self) -> None:
        while self.peek().isspace():
            self._advance()

    # ------------------------------------------------------------------ #
    # Token consumers
    # ------------------------------------------------------------------ #

    def _consume_number(self) -> Token:
        start = self.index
        while self.peek().isnumeric() or (
            self.peek() == "." and self.peek(1).isnumeric()
        ):
            self._advance()
        return Token(TokenKind.NUMBER, self.source[start:self.index])

    def _consume_word(self) -> Token:
        start = self.index
        while self.peek().isalnum() or self.peek() == "_":
            self._advance()
        return Token(TokenKind.WORD, self.source[start:self.index])

    def _consume_string(self) -> Token:
        start = self.index
        self._advance()  # opening quote

        # An unterminated string runs to the end of the source.
        while self.index < len(self.source):
            c = self.peek()
            if c == '"' and self.peek(-1) != "\\":
                self._advance()
                break
            self._advance()

        return Token(TokenKind.STRING, self.source[start:self.index])

    def _consume_symbol(self) -> Token:
        return Token(TokenKind.SYMBOL, self._advance())


def tokenize(source: str) -> Iterator[Tuple[Token, Position]]:
    """
    Return a lazy iterator of ``(Token, Position)`` pairs for ``source``.

    Example:
        >>> [str(tok) for tok, _ in tokenize('thing "A" {}')]
        ['thing', '"A"', '{', '}']
    """
    return Lexer(source)
