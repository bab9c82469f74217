"""
CLI command modules for fdl_parser.

Each command module defines a single Typer-compatible command function.
"""

from fdl_parser.cli.commands.check import check_command
from fdl_parser.cli.commands.export import export_command
from fdl_parser.cli.commands.view import view_command

__all__ = [
    "check_command",
    "export_command",
    "view_command",
]
