from __future__ import annotations

from pathlib import Path

import typer
from rich.table import Table

from fdl_parser.cli.utils import console, load_fdl


def check_command(
    source: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
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
    Validate an FDL file and show summary counts.
    """
    tree = load_fdl(source, tolerant=tolerant, verbose=verbose)

    props = 0
    bad_props = 0
    for thing in tree.iter_things():
        props += len(thing.props)
        bad_props += sum(1 for prop in thing.props.values() if prop.is_error)

    table = Table(title=f"OK: {source.name}")
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Root things", str(len(tree.things)))
    table.add_row("Things", str(len(tree)))
    table.add_row("Props", str(props))
    if tolerant:
        table.add_row("Invalid props", str(bad_props))

    console.print(table)
