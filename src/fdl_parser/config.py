import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "fdl_parser.yml"
CONFIG_ENV_VAR = "FDL_PARSER_CONFIG"

DEFAULTS = {
    "paths": {"logs_dir": "logs"},
    "parser": {"strict_values": True},
    "view": {"indent": 4, "expand_all": False},
    "logging": {"level": "INFO", "file": "fdl_parser.log", "rotate": False},
    "debug": False,
}


def _section(data, name):
    merged = dict(DEFAULTS[name])
    merged.update(data.get(name) or {})
    return merged


class FDLConfig:
    def __init__(self, data, source=None):
        # File the values came from; None when running on defaults.
        self.source = source
        self.paths = _section(data, "paths")
        self.parser = _section(data, "parser")
        self.view = _section(data, "view")
        self.logging = _section(data, "logging")
        self.debug = bool(data.get("debug", DEFAULTS["debug"]))

    @property
    def strict_values(self) -> bool:
        return bool(self.parser.get("strict_values", True))

    @property
    def indent(self) -> int:
        return int(self.view.get("indent", 4))


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path=None) -> 'FDLConfig':
    path = Path(path) if path is not None else config_path()
    if not path.exists():
        # Installed without the project tree; run on defaults.
        return FDLConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return FDLConfig(data, source=path.resolve())

_config_cache = None

def get_config() -> 'FDLConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
