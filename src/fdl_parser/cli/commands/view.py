from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.text import Text

from fdl_parser.cli.utils import console, load_fdl
from fdl_parser.view import ViewState


def view_command(
    source: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    expand: bool = typer.Option(
        False,
        "--expand",
        "-e",
        help="Open every thing",
    ),
    depth: Optional[int] = typer.Option(
        None,
        "--depth",
        "-d",
        min=0,
        help="Open things shallower than this depth",
    ),
    props: bool = typer.Option(
        False,
        "--props",
        "-p",
        help="List props under each visible thing",
    ),
    tolerant: bool = typer.Option(
        False,
        "--tolerant",
        help="Keep props whose value does not match the declared type",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Print the thing tree as an indented outline.
    """
    tree = load_fdl(source, tolerant=tolerant, verbose=verbose)
    state = ViewState(tree)

    if expand:
        state.expand_all()
    elif depth is not None:
        state.open_to_depth(depth)

    for row in state.visible_rows():
        marker = "-" if state.is_open(row.handle) or not tree.children(row.handle) else "+"
        console.print(Text(f"{marker} {row.text}"), soft_wrap=True)

        if props:
            pad = " " * (state.indent * (row.depth + 1) + 2)
            for name, prop in tree.node(row.handle).props.items():
                value = "<error>" if prop.is_error else repr(prop.value.value)
                console.print(Text(f"{pad}{name} = {value}", style="dim"), soft_wrap=True)
