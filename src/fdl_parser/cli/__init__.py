"""
CLI package for fdl_parser.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from fdl_parser.cli.app import app, main

__all__ = [
    "app",
    "main",
]
