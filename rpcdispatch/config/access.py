"""Process-local config cache.

A cached Config is reused while the file it came from and the
``RPCDISPATCH_*`` environment it was built with stay the same. Editing the
file or exporting a new override makes the next ``get_config`` reload.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from rpcdispatch.config.loader import get_config_path, load_config
from rpcdispatch.config.schema import Config


@dataclass(frozen=True, slots=True)
class _Source:
    mtime_ns: int | None
    env: tuple[tuple[str, str], ...]


_lock = threading.RLock()
_entries: dict[Path, tuple[_Source, Config]] = {}


def _resolve(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def _env_overrides() -> tuple[tuple[str, str], ...]:
    prefix = str(Config.model_config.get("env_prefix", "")).upper()
    return tuple(sorted((k, v) for k, v in os.environ.items() if k.upper().startswith(prefix)))


def _source_of(path: Path) -> _Source:
    try:
        mtime_ns: int | None = path.stat().st_mtime_ns
    except FileNotFoundError:
        mtime_ns = None
    return _Source(mtime_ns=mtime_ns, env=_env_overrides())


def get_config(*, config_path: Path | None = None, force_reload: bool = False) -> Config:
    """Return the config for ``config_path``, reloading when its file or env overrides changed."""
    path = _resolve(config_path)
    source = _source_of(path)
    with _lock:
        entry = _entries.get(path)
        if entry is not None and entry[0] == source and not force_reload:
            return entry[1]
        if entry is not None and not force_reload:
            logger.debug("Config source {} changed; reloading", path)
        config = load_config(path)
        _entries[path] = (source, config)
        return config


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Drop one cached entry, or all of them."""
    with _lock:
        if config_path is None:
            _entries.clear()
            return
        _entries.pop(_resolve(config_path), None)
