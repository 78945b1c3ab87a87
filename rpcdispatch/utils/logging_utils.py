"""Loguru helpers for consistent console and file logging."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_SINK_IDS: dict[str, int] = {}

_CONSOLE_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def default_log_dir() -> Path:
    return Path.home() / ".rpcdispatch" / "logs"


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default stderr sink with one at the given level."""
    logger.remove()
    _SINK_IDS.clear()
    logger.add(sys.stderr, level=level.upper(), format=_CONSOLE_FORMAT)


def ensure_rotating_log_file(name: str, level: str = "INFO", log_dir: Path | None = None) -> Path:
    """Ensure a rotating log sink for the given name."""
    directory = log_dir or default_log_dir()
    log_path = directory / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    directory.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level.upper(),
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def remove_log_file(name: str) -> None:
    """Detach a sink added by ensure_rotating_log_file."""
    sink_id = _SINK_IDS.pop(name, None)
    if sink_id is not None:
        logger.remove(sink_id)
