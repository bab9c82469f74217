# src/fdl_parser/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# <checkout>/src/fdl_parser/utils/pathing.py -> <checkout>/mock_files
MOCK_FILES_DIR = Path(__file__).resolve().parents[3] / "mock_files"


def mock_file_path(filename: Union[str, Path]) -> Path:
    """Return the absolute path to a sample file under ``mock_files/``."""
    return MOCK_FILES_DIR / filename
