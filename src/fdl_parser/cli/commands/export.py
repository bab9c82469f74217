from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from fdl_parser.cli.utils import console, err_console, load_fdl
from fdl_parser.exporter import export_json


def export_command(
    source: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
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
    Export the parsed things to JSON (stdout by default).
    """
    tree = load_fdl(source, tolerant=tolerant, verbose=verbose)

    if verbose:
        console.log("Exporting JSON")

    try:
        payload = export_json(tree.things, path=out, pretty=pretty)
    except ValueError as err:
        err_console.print(f"{source}: {err}", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1)
    if out is None:
        print(payload)

    if verbose:
        console.log("Export complete")
