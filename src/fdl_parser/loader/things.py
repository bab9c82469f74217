# src/fdl_parser/loader/things.py

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from fdl_parser.utils.strings import strip_quotes


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


class PropType(Enum):
    """Declared type of a prop; the value is the keyword used in source."""

    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"

    @classmethod
    def from_keyword(cls, word: str) -> Optional["PropType"]:
        try:
            return cls(word)
        except ValueError:
            return None


@dataclass(frozen=True)
class PropValue:
    """
    Tagged value of a prop.

    ``type`` is the declared PropType for a converted value and ``None`` for
    the error variant, which marks a literal that did not match its declared
    type. The error variant is an ordinary value, not an exception.
    """

    type: Optional[PropType]
    value: Any = None

    @classmethod
    def int_(cls, value: int) -> "PropValue":
        return cls(PropType.INT, value)

    @classmethod
    def float_(cls, value: float) -> "PropValue":
        return cls(PropType.FLOAT, _to_float32(value))

    @classmethod
    def bool_(cls, value: bool) -> "PropValue":
        return cls(PropType.BOOL, value)

    @classmethod
    def string(cls, value: str) -> "PropValue":
        return cls(PropType.STRING, value)

    @classmethod
    def error(cls) -> "PropValue":
        return cls(None, None)

    @property
    def is_error(self) -> bool:
        return self.type is None

    def __repr__(self) -> str:
        if self.is_error:
            return "PropValue.error()"
        return f"PropValue({self.type.value}, {self.value!r})"


def _to_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE-754 single precision value."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


# ---------------------------------------------------------------------------
# Literal conversion
# ---------------------------------------------------------------------------

def parse_int_literal(literal: str) -> PropValue:
    if not _INT_RE.fullmatch(literal):
        return PropValue.error()
    value = int(literal, 10)
    if not INT32_MIN <= value <= INT32_MAX:
        return PropValue.error()
    return PropValue.int_(value)


def parse_float_literal(literal: str) -> PropValue:
    if not _FLOAT_RE.fullmatch(literal):
        return PropValue.error()
    return PropValue.float_(float(literal))


def parse_bool_literal(literal: str) -> PropValue:
    if literal == "true":
        return PropValue.bool_(True)
    if literal == "false":
        return PropValue.bool_(False)
    return PropValue.error()


def parse_string_literal(literal: str) -> PropValue:
    return PropValue.string(strip_quotes(literal))


_CONVERTERS = {
    PropType.INT: parse_int_literal,
    PropType.FLOAT: parse_float_literal,
    PropType.BOOL: parse_bool_literal,
    PropType.STRING: parse_string_literal,
}


@dataclass
class Prop:
    """A named, typed scalar attached to a Thing."""

    name: str
    value: PropValue

    @classmethod
    def from_literal(cls, name: str, literal: str, prop_type: PropType) -> "Prop":
        """
        Build a prop by converting ``literal`` to ``prop_type``.

        Conversion failures produce a prop holding ``PropValue.error()``;
        callers decide whether that is fatal.
        """
        return cls(name, _CONVERTERS[prop_type](literal))

    @classmethod
    def int_from_literal(cls, name: str, literal: str) -> "Prop":
        return cls.from_literal(name, literal, PropType.INT)

    @classmethod
    def float_from_literal(cls, name: str, literal: str) -> "Prop":
        return cls.from_literal(name, literal, PropType.FLOAT)

    @classmethod
    def bool_from_literal(cls, name: str, literal: str) -> "Prop":
        return cls.from_literal(name, literal, PropType.BOOL)

    @classmethod
    def string_from_literal(cls, name: str, literal: str) -> "Prop":
        return cls.from_literal(name, literal, PropType.STRING)

    @property
    def is_error(self) -> bool:
        return self.value.is_error


@dataclass(eq=False)
class Thing:
    """
    A named node of the configuration tree.

    Attributes:
        name: The thing's name, without quotes.
        props: Props keyed by name. Adding a prop with an existing name
            replaces the earlier one.
        things: Direct children keyed by name, with the same replacement
            rule. A child's key always equals its ``name``.

    Things carry no parent pointer; parent and depth are supplied by the
    traversal functions in ``fdl_parser.loader.traversal``. Equality is
    identity, so things can be used as dictionary keys.
    """

    name: str
    props: Dict[str, Prop] = field(default_factory=dict)
    things: Dict[str, "Thing"] = field(default_factory=dict)

    def add_prop(self, prop: Prop) -> None:
        self.props[prop.name] = prop

    def add_thing(self, thing: "Thing") -> Optional["Thing"]:
        """Insert or replace a child; return the child it shadowed, if any."""
        previous = self.things.get(thing.name)
        self.things[thing.name] = thing
        return previous

    def get_thing(self, name: str) -> Optional["Thing"]:
        return self.things.get(name)

    def get_prop(self, name: str) -> Optional[Prop]:
        return self.props.get(name)

    def child_count(self) -> int:
        return len(self.things)

    def iter_subtree(self) -> Iterator["Thing"]:
        """Yield this thing and all descendants in depth-first order."""
        stack = [self]
        while stack:
            thing = stack.pop()
            yield thing
            stack.extend(reversed(list(thing.things.values())))

    def __repr__(self) -> str:
        return f"<Thing {self.name!r} props={len(self.props)} things={len(self.things)}>"
