from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console

from fdl_parser.loader import ParseError, ThingTree, load_tree
from fdl_parser.logging import get_logger, set_console_level

console = Console()
err_console = Console(stderr=True)


def _log():
    return get_logger("cli")


def format_parse_error(err: ParseError) -> str:
    """
    Render a ParseError as ``line {line}:{col} - {message}``.

    Line and column are the zero-based counters from the error position.
    """
    return str(err)


def load_fdl(path: Path, *, tolerant: bool = False, verbose: bool = False) -> ThingTree:
    """
    Parse an FDL file for a CLI command.

    A ParseError is printed and turned into exit code 1.
    """
    if verbose:
        set_console_level(logging.INFO)

    t0 = time.perf_counter()
    try:
        tree = load_tree(path, strict_values=False if tolerant else None)
    except ParseError as err:
        _log().info(f"Parse failed for {path}: {format_parse_error(err)}")
        err_console.print(
            f"{path}: {format_parse_error(err)}",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(code=1)

    elapsed = time.perf_counter() - t0
    if verbose:
        console.log(f"Parsed {path} in {elapsed:.3f}s")

    return tree
