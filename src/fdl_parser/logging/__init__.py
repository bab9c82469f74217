"""
Logging package for ``fdl_parser``.

Use ``get_logger(__name__)`` in modules to inherit shared handlers and write to a
module-specific log file.
"""

from .logger import (
    get_logger,
    list_active_loggers,
    reset_logging,
    set_console_level,
)

__all__ = [
    "get_logger",
    "list_active_loggers",
    "reset_logging",
    "set_console_level",
]
