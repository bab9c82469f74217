# src/fdl_parser/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from fdl_parser.config import get_config
from fdl_parser.logging import get_logger

from .parser import TokenItem, parse
from .things import Thing
from .traversal import walk


def _log():
    # Looked up on use so importing the module configures no handlers.
    return get_logger(__name__)


Handle = int


@dataclass
class ThingTree:
    """
    A parsed forest plus an arena of integer handles.

    Every thing in the forest gets a handle (its index in pre-order walk
    order). Handles stay valid for the lifetime of the tree, so callers can
    key per-thing state (open/closed flags, selection, ...) by handle
    instead of by object identity.

    The arena is built lazily on first use and is not refreshed if the
    forest is mutated afterwards; build a new ThingTree instead.
    """

    things: Dict[str, Thing] = field(default_factory=dict)

    _nodes: List[Thing] = field(default_factory=list, init=False, repr=False)
    _parents: List[Optional[Handle]] = field(default_factory=list, init=False, repr=False)
    _depths: List[int] = field(default_factory=list, init=False, repr=False)
    _children: List[List[Handle]] = field(default_factory=list, init=False, repr=False)
    _roots: List[Handle] = field(default_factory=list, init=False, repr=False)
    _handle_by_id: Dict[int, Handle] = field(default_factory=dict, init=False, repr=False)
    _indexes_built: bool = field(default=False, init=False, repr=False)

    # ------------------------------------------------------------------ #
    # Core helpers
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        """Total number of things in the forest, at every depth."""
        self._ensure_indexes()
        return len(self._nodes)

    def __iter__(self) -> Iterator[Thing]:
        return iter(self.things.values())

    def iter_things(self) -> Iterator[Thing]:
        """Iterate over every thing, roots and descendants, depth-first."""
        for root in self.things.values():
            yield from root.iter_subtree()

    # ------------------------------------------------------------------ #
    # Arena construction
    # ------------------------------------------------------------------ #

    def _build_indexes(self) -> None:
        nodes: List[Thing] = []
        parents: List[Optional[Handle]] = []
        depths: List[int] = []
        children: List[List[Handle]] = []
        roots: List[Handle] = []
        handle_by_id: Dict[int, Handle] = {}

        def register(thing: Thing, parent: Optional[Thing], depth: int) -> None:
            handle = len(nodes)
            parent_handle = handle_by_id[id(parent)] if parent is not None else None

            nodes.append(thing)
            parents.append(parent_handle)
            depths.append(depth)
            children.append([])
            handle_by_id[id(thing)] = handle

            if parent_handle is None:
                roots.append(handle)
            else:
                children[parent_handle].append(handle)

        walk(self.things, register)

        self._nodes = nodes
        self._parents = parents
        self._depths = depths
        self._children = children
        self._roots = roots
        self._handle_by_id = handle_by_id
        self._indexes_built = True

    def _ensure_indexes(self) -> None:
        if not self._indexes_built:
            self._build_indexes()

    def _check(self, handle: Handle) -> None:
        self._ensure_indexes()
        if not 0 <= handle < len(self._nodes):
            raise KeyError(f"Unknown thing handle: {handle}")

    # ------------------------------------------------------------------ #
    # Public query API
    # ------------------------------------------------------------------ #

    def handles(self) -> List[Handle]:
        """All handles in pre-order."""
        self._ensure_indexes()
        return list(range(len(self._nodes)))

    def roots(self) -> List[Handle]:
        self._ensure_indexes()
        return list(self._roots)

    def node(self, handle: Handle) -> Thing:
        self._check(handle)
        return self._nodes[handle]

    def parent(self, handle: Handle) -> Optional[Handle]:
        self._check(handle)
        return self._parents[handle]

    def depth(self, handle: Handle) -> int:
        self._check(handle)
        return self._depths[handle]

    def children(self, handle: Handle) -> List[Handle]:
        self._check(handle)
        return list(self._children[handle])

    def handle_of(self, thing: Thing) -> Optional[Handle]:
        """Return the handle of ``thing`` if it belongs to this tree."""
        self._ensure_indexes()
        return self._handle_by_id.get(id(thing))

    def find(self, path: str) -> Optional[Thing]:
        """
        Look up a thing by its ``/``-separated name path.

        Examples:
            tree.find("Server")
            tree.find("Server/Database/Pool")

        Returns:
            The Thing, or None when any segment is missing.
        """
        if not path:
            return None

        head, *rest = path.split("/")
        thing = self.things.get(head)
        for name in rest:
            if thing is None:
                return None
            thing = thing.get_thing(name)
        return thing

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<ThingTree roots={len(self.things)}>"


def build_tree(
    tokens: Iterable[TokenItem], strict_values: Optional[bool] = None
) -> ThingTree:
    """
    Build a ThingTree from a token stream.

    This is the main entry point for the loader pipeline:

        tokens -> forest -> ThingTree(things={name: Thing, ...})

    Args:
        tokens: ``(Token, Position)`` pairs, e.g. from ``tokenize``.
        strict_values: Fail on props whose literal does not match the
            declared type. ``None`` uses ``parser.strict_values`` from the
            configuration.

    Raises:
        ParseError: propagated unchanged from the parser.
    """
    if strict_values is None:
        strict_values = get_config().strict_values

    forest = parse(tokens, strict_values=strict_values)
    tree = ThingTree(things=forest)
    _log().debug("Built tree with %d root thing(s), %d total", len(forest), len(tree))
    return tree
