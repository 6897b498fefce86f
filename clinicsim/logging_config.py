"""Opt-in logging for clinicsim.

Nothing is printed unless asked for: the package logger only carries a
NullHandler. The scheduler logs run start/end at INFO and every dispatched
event at DEBUG; the network logs drops at INFO and routing at DEBUG.

    import clinicsim

    clinicsim.enable_console_logging("DEBUG")          # trace a run on stderr
    clinicsim.enable_json_logging(path="runs/a.jsonl")  # machine-readable

configure_from_env() reads:
    CLINICSIM_LOGGING   level name, e.g. DEBUG
    CLINICSIM_LOG_FILE  rotating log file instead of stderr
    CLINICSIM_LOG_JSON  "1" for JSON lines
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

__all__ = [
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]

LOGGER_NAME = "clinicsim"

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
TIME_FORMAT = "%H:%M:%S"

ROTATE_AT_BYTES = 5 * 1024 * 1024
KEEP_FILES = 3

Level = Union[str, int]


class JsonFormatter(logging.Formatter):
    """Renders a record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _get_level(level: Level) -> int:
    """Level name or number to a number; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def _get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _clear_handlers() -> None:
    """Detach and close every handler except NullHandlers."""
    logger = _get_logger()
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            continue
        logger.removeHandler(handler)
        handler.close()


def _rotating(path: Union[str, Path]) -> RotatingFileHandler:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(path, maxBytes=ROTATE_AT_BYTES, backupCount=KEEP_FILES)


def _install(handler: logging.Handler, level: Level, formatter: logging.Formatter) -> logging.Handler:
    numeric = _get_level(level)
    handler.setLevel(numeric)
    handler.setFormatter(formatter)
    logger = _get_logger()
    logger.setLevel(numeric)
    logger.addHandler(handler)
    return handler


def enable_console_logging(level: Level = "INFO", format: str = TEXT_FORMAT) -> logging.Handler:
    """Send clinicsim records to stderr and return the new handler."""
    return _install(logging.StreamHandler(), level, logging.Formatter(format, TIME_FORMAT))


def enable_file_logging(path: Union[str, Path], level: Level = "INFO", format: str = TEXT_FORMAT) -> logging.Handler:
    """Append clinicsim records to a size-rotated file; parent dirs are created."""
    return _install(_rotating(path), level, logging.Formatter(format, TIME_FORMAT))


def enable_json_logging(level: Level = "INFO", path: Union[str, Path, None] = None) -> logging.Handler:
    """JSON lines on stderr, or in a rotated file when ``path`` is given."""
    handler = logging.StreamHandler() if path is None else _rotating(path)
    return _install(handler, level, JsonFormatter())


def configure_from_env() -> None:
    """Apply the CLINICSIM_* variables; a no-op when neither level nor file is set."""
    level = os.environ.get("CLINICSIM_LOGGING", "")
    path = os.environ.get("CLINICSIM_LOG_FILE", "")
    if not (level or path):
        return

    level = level or "INFO"
    if os.environ.get("CLINICSIM_LOG_JSON") == "1":
        enable_json_logging(level, path or None)
    elif path:
        enable_file_logging(path, level)
    else:
        enable_console_logging(level)


def set_level(level: Level) -> None:
    _get_logger().setLevel(_get_level(level))


def set_module_level(module: str, level: Level) -> None:
    """Tune one part of the package, e.g. ``set_module_level("network.network", "DEBUG")``."""
    logging.getLogger(f"{LOGGER_NAME}.{module}").setLevel(_get_level(level))


def disable_logging() -> None:
    """Remove every handler and raise the threshold above CRITICAL."""
    _clear_handlers()
    logger = _get_logger()
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.CRITICAL + 1)
