# src/fdl_parser/view/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional

from fdl_parser.config import get_config
from fdl_parser.loader.things import Thing
from fdl_parser.loader.traversal import Visit, walk_controlled
from fdl_parser.loader.tree_builder import Handle, ThingTree


class Row(NamedTuple):
    handle: Handle
    depth: int
    text: str


@dataclass
class ViewState:
    """
    Open/closed bookkeeping for an interactive tree view.

    Flags are keyed by ThingTree handle. Closed things are listed but their
    children are not; roots are always listed.

    Args:
        tree: The parsed tree being displayed.
        indent: Spaces per depth level (default: ``view.indent`` from config).
        expanded: Initial state of every flag (default: ``view.expand_all``).
    """

    tree: ThingTree
    indent: Optional[int] = None
    expanded: Optional[bool] = None
    _open: Dict[Handle, bool] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        cfg = get_config()
        if self.indent is None:
            self.indent = cfg.indent
        if self.expanded is None:
            self.expanded = bool(cfg.view.get("expand_all", False))
        self._open = {h: self.expanded for h in self.tree.handles()}

    def is_open(self, handle: Handle) -> bool:
        return self._open[handle]

    def open(self, handle: Handle) -> None:
        self._set(handle, True)

    def close(self, handle: Handle) -> None:
        self._set(handle, False)

    def toggle(self, handle: Handle) -> bool:
        """Flip the flag for ``handle`` and return the new state."""
        self._set(handle, not self._open[handle])
        return self._open[handle]

    def expand_all(self) -> None:
        for handle in self._open:
            self._open[handle] = True

    def collapse_all(self) -> None:
        for handle in self._open:
            self._open[handle] = False

    def open_to_depth(self, depth: int) -> None:
        """Open every thing shallower than ``depth``, close the rest."""
        for handle in self._open:
            self._open[handle] = self.tree.depth(handle) < depth

    def _set(self, handle: Handle, value: bool) -> None:
        if handle not in self._open:
            raise KeyError(f"Unknown thing handle: {handle}")
        self._open[handle] = value

    def visible_rows(self) -> List[Row]:
        """Rows to draw, in display order, skipping children of closed things."""
        rows: List[Row] = []

        def visit(thing: Thing, parent: Optional[Thing], depth: int) -> Visit:
            handle = self.tree.handle_of(thing)
            rows.append(Row(handle, depth, " " * (self.indent * depth) + thing.name))
            return Visit.CONTINUE if self._open[handle] else Visit.STOP_SUBTREE

        walk_controlled(self.tree, visit)
        return rows
