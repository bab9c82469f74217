"""
File Loader

Reads FDL source text from disk and runs it through the loader pipeline.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from fdl_parser.logging import get_logger

from .tokenizer import tokenize
from .tree_builder import ThingTree, build_tree


def _log():
    # Looked up on use so importing the module configures no handlers.
    return get_logger(__name__)


def resolve_input_path(path: Union[str, Path]) -> Path:
    """
    Convert a user-provided path into an absolute validated file path.

    Raises:
        FileNotFoundError: if nothing exists at ``path``.
        ValueError: if ``path`` exists but is not a file.
    """
    abs_path = Path(path).resolve()
    _log().debug(f"Resolving input file: {abs_path}")

    if not abs_path.exists():
        _log().error(f"Input file does not exist: {abs_path}")
        raise FileNotFoundError(f"Input file not found: {abs_path}")

    if not abs_path.is_file():
        _log().error(f"Input path is not a file: {abs_path}")
        raise ValueError(f"Input path is not a file: {abs_path}")

    return abs_path


def load_file(path: Union[str, Path]) -> str:
    """Return the full text of an FDL file."""
    file_path = resolve_input_path(path)
    text = file_path.read_text(encoding="utf-8")
    _log().info(f"Loaded file: {file_path} ({len(text)} chars)")
    return text


def load_tree(
    path: Union[str, Path], strict_values: Optional[bool] = None
) -> ThingTree:
    """
    Read, tokenize and parse an FDL file.

    Raises:
        FileNotFoundError / ValueError: from ``resolve_input_path``.
        ParseError: if the source is malformed.
    """
    source = load_file(path)
    return build_tree(tokenize(source), strict_values=strict_values)
