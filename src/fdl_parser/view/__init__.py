"""
View-state helpers for presenting a parsed tree.

The terminal viewer keeps one open/closed flag per thing and redraws the
visible rows; this package provides that bookkeeping without any drawing.
"""

from fdl_parser.view.state import Row, ViewState

__all__ = [
    "Row",
    "ViewState",
]
