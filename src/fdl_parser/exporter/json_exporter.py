"""
json_exporter.py
Structured JSON exporter for parsed FDL forests.

This exporter:
- Converts things and props to plain dictionaries (NOT strings)
- Preserves the full nesting for downstream processing
- Renders props that failed type conversion as ``null``
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from fdl_parser.loader.things import PropValue, Thing
from fdl_parser.logging import get_logger


def _log():
    return get_logger("json_exporter")


def _value_to_json(value: PropValue) -> Any:
    """
    Convert a PropValue into a JSON-compatible scalar.

    Rules:
    - Error values -> None
    - Non-finite floats -> their string form ("inf", "-inf", "nan"),
      since JSON has no literal for them
    - Everything else passes through
    """
    if value.is_error:
        return None
    if isinstance(value.value, float) and not math.isfinite(value.value):
        return str(value.value)
    return value.value


def _shell(thing: Thing) -> Dict[str, Any]:
    return {
        "name": thing.name,
        "props": {
            name: _value_to_json(prop.value) for name, prop in thing.props.items()
        },
        "things": {},
    }


def thing_to_dict(thing: Thing) -> Dict[str, Any]:
    """
    Convert a thing and its subtree into a JSON-safe dict.

    Built with an explicit stack so deeply nested things do not hit the
    recursion limit.
    """
    root = _shell(thing)
    stack = [(thing, root)]
    while stack:
        current, data = stack.pop()
        for name, child in current.things.items():
            child_data = _shell(child)
            data["things"][name] = child_data
            stack.append((child, child_data))
    return root


def forest_to_dict(forest: Mapping[str, Thing]) -> Dict[str, Any]:
    """
    Convert a forest (root name -> Thing) into a JSON-safe dict.
    """
    return {name: thing_to_dict(thing) for name, thing in forest.items()}


def dumps_forest(forest: Mapping[str, Thing], pretty: bool = False) -> str:
    """
    Serialize ``forest`` to a JSON string.

    Raises:
        ValueError: if the nesting is deeper than the json encoder supports.
    """
    data = forest_to_dict(forest)
    try:
        if pretty:
            return json.dumps(data, indent=2, ensure_ascii=False)
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except RecursionError as err:
        raise ValueError("Things are nested too deeply to encode as JSON") from err


def export_json(
    forest: Mapping[str, Thing],
    path: Optional[Path] = None,
    pretty: bool = False,
) -> str:
    """
    Serialize ``forest`` to JSON, writing it to ``path`` when given.

    Returns:
        The JSON payload.
    """
    payload = dumps_forest(forest, pretty=pretty)

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
        _log().info(f"Wrote JSON export: {path}")

    return payload
