# src/fdl_parser/loader/traversal.py

"""
Depth-first traversal over things.

Both walks are pre-order: a thing is visited before its children, roots
have depth 0, and siblings come in the insertion order of their parent's
``things`` dict. The visitor receives ``(thing, parent, depth)`` where
``parent`` is ``None`` for roots.

Both walks keep their own stack, so nesting depth is not limited by the
interpreter recursion limit.

``walk_controlled`` lets the visitor steer the walk by returning a Visit:

    CONTINUE      descend into the thing's children
    STOP_SUBTREE  skip the children, carry on with the siblings
    STOP_ALL      end the whole walk immediately
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterable, List, Mapping, Optional, Tuple, Union

from .things import Thing

if TYPE_CHECKING:
    from .tree_builder import ThingTree


class Visit(Enum):
    CONTINUE = "continue"
    STOP_SUBTREE = "stop_subtree"
    STOP_ALL = "stop_all"


Walkable = Union[Thing, Mapping[str, Thing], "ThingTree"]
Visitor = Callable[[Thing, Optional[Thing], int], None]
ControlledVisitor = Callable[[Thing, Optional[Thing], int], Visit]


def _roots(target: Walkable) -> Iterable[Thing]:
    if isinstance(target, Thing):
        return (target,)
    if isinstance(target, Mapping):
        return target.values()
    # ThingTree and anything else exposing its forest
    return target.things.values()


_Entry = Tuple[Thing, Optional[Thing], int]


def _initial_stack(target: Walkable) -> List[_Entry]:
    """Roots pushed in reverse so the first root is popped first."""
    return [(root, None, 0) for root in reversed(list(_roots(target)))]


def _push_children(stack: List[_Entry], thing: Thing, depth: int) -> None:
    for child in reversed(list(thing.things.values())):
        stack.append((child, thing, depth + 1))


def walk(target: Walkable, visitor: Visitor) -> None:
    """Visit every thing under ``target``; the walk cannot be stopped early."""
    stack = _initial_stack(target)
    while stack:
        thing, parent, depth = stack.pop()
        visitor(thing, parent, depth)
        _push_children(stack, thing, depth)


def walk_controlled(target: Walkable, visitor: ControlledVisitor) -> Visit:
    """
    Visit things under ``target`` while the visitor allows it.

    Returns ``Visit.STOP_ALL`` if the visitor aborted the walk, otherwise
    ``Visit.CONTINUE``.
    """
    stack = _initial_stack(target)
    while stack:
        thing, parent, depth = stack.pop()
        signal = visitor(thing, parent, depth)
        if signal is Visit.STOP_ALL:
            return Visit.STOP_ALL
        if signal is not Visit.STOP_SUBTREE:
            _push_children(stack, thing, depth)
    return Visit.CONTINUE
