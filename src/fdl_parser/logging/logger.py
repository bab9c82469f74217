"""
Centralized logging configuration for the FDL parser.

Key behaviors
-------------
* Single entry point via ``get_logger`` so every layer shares handlers.
* Master log file plus per-module logs, written only when a config file was
  found. Relative ``logs_dir`` values resolve against that file, so an
  installed package running on defaults never writes next to itself.
* Console logging that respects the configured debug flag.
* Optional log rotation controlled by ``config/fdl_parser.yml``.

The tokenizer, parser and traversal never log; only the loader, exporter
and CLI layers do.
"""

from __future__ import annotations

import logging
from logging import Logger, StreamHandler
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from fdl_parser.config import get_config

# -----------------------------------------------------------------------------
# Paths and configuration
# -----------------------------------------------------------------------------

BASE_LOGGER_NAME = "fdl_parser"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger_cache: Dict[str, Logger] = {}
_base_configured: bool = False
_effective_level: int = logging.INFO
_rotate_logs: bool = False


# -----------------------------------------------------------------------------
# Internal helpers
# -----------------------------------------------------------------------------

def _ensure_log_dir() -> Optional[Path]:
    """Resolve and create the log directory, or return None for console-only logging."""
    cfg = get_config()
    if cfg.source is None:
        return None

    log_dir = Path(cfg.logging.get("dir") or cfg.paths.get("logs_dir") or "logs")
    if not log_dir.is_absolute():
        log_dir = cfg.source.parent / log_dir

    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _build_file_handler(path: Path, level: int) -> logging.Handler:
    """Create a file handler with optional rotation."""
    if _rotate_logs:
        handler = RotatingFileHandler(
            path,
            maxBytes=5 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
            delay=True,
        )
    else:
        handler = logging.FileHandler(path, encoding="utf-8", delay=True)

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _configure_base_logger() -> Logger:
    """Configure the shared base logger once."""
    global _base_configured, _effective_level, _rotate_logs

    base_logger = logging.getLogger(BASE_LOGGER_NAME)
    if _base_configured:
        return base_logger

    cfg = get_config()
    _rotate_logs = bool(cfg.logging.get("rotate", False))
    master_log_name = cfg.logging.get("file", "fdl_parser.log")

    level_name = str(cfg.logging.get("level", "INFO")).upper()
    base_level = getattr(logging, level_name, logging.INFO)
    debug_enabled = bool(cfg.debug)

    _effective_level = logging.DEBUG if debug_enabled else base_level

    log_dir = _ensure_log_dir()
    base_logger.setLevel(_effective_level)
    base_logger.propagate = False

    if log_dir is not None:
        base_logger.addHandler(_build_file_handler(log_dir / master_log_name, _effective_level))

    # Console stays at WARNING unless debugging; CLI output goes through rich.
    console = StreamHandler()
    console.setLevel(logging.DEBUG if debug_enabled else logging.WARNING)
    console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    base_logger.addHandler(console)

    _base_configured = True
    return base_logger


def _module_handler_exists(logger: Logger) -> bool:
    return any(getattr(h, "is_module_handler", False) for h in logger.handlers)


def _attach_module_handler(logger: Logger, module_name: str) -> None:
    log_dir = _ensure_log_dir()
    if log_dir is None:
        return
    path = log_dir / f"{module_name.replace('.', '_')}.log"

    handler = _build_file_handler(path, _effective_level)
    handler.is_module_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def get_logger(name: str | None = None) -> Logger:
    """Return a logger configured with project-wide handlers.

    * Names are placed under the ``fdl_parser`` hierarchy so module loggers
      inherit the base console + master log handlers.
    * Each module also gains its own file handler, ``<logs_dir>/<module>.log``,
      when a config file is in use.
    * The debug flag in ``config/fdl_parser.yml`` forces DEBUG level output.
    """
    base_logger = _configure_base_logger()
    logger_name = name or BASE_LOGGER_NAME
    if logger_name != BASE_LOGGER_NAME and not logger_name.startswith(BASE_LOGGER_NAME + "."):
        logger_name = f"{BASE_LOGGER_NAME}.{logger_name}"

    if logger_name == base_logger.name:
        _logger_cache[logger_name] = base_logger
        return base_logger

    logger = logging.getLogger(logger_name)
    logger.setLevel(_effective_level)
    if not _module_handler_exists(logger):
        _attach_module_handler(logger, logger_name)
    logger.propagate = True

    _logger_cache[logger_name] = logger
    return logger


def set_console_level(level: int) -> None:
    """Adjust the console handler of the base logger (used by ``--verbose``)."""
    base_logger = _configure_base_logger()
    for handler in base_logger.handlers:
        if isinstance(handler, StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
    if level < base_logger.level:
        base_logger.setLevel(level)


def list_active_loggers() -> List[str]:
    """Helper for debugging configuration issues in tests."""
    return list(_logger_cache.keys())


def reset_logging() -> None:
    """Close and drop every project handler so the next ``get_logger`` reconfigures."""
    global _base_configured

    for name in list(_logger_cache) + [BASE_LOGGER_NAME]:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
    _logger_cache.clear()
    _base_configured = False
