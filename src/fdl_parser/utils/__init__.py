# src/fdl_parser/utils/__init__.py

from .pathing import mock_file_path
from .strings import strip_quotes

__all__ = [
    "mock_file_path",
    "strip_quotes",
]
