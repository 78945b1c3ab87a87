"""Handler registry with lazily constructed entries.

在整体架构中：Server 通过 HandlerRegistry 保存按名称注册的处理器；类或导入路径在首次解析时实例化并原地替换。
"""

from __future__ import annotations

import importlib
import threading
from dataclasses import dataclass
from typing import Any, Callable

from loguru import logger

from rpcdispatch.utils.exceptions import DuplicateHandler


@dataclass(frozen=True, slots=True)
class Live:
    instance: Any


@dataclass(frozen=True, slots=True)
class Deferred:
    """Zero-argument factory, class, or ``"module:attr"`` import path."""

    factory: type | str | Callable[[], Any]

    def create(self) -> Any:
        factory = self.factory
        if isinstance(factory, str):
            factory = import_string(factory)
        return factory()


HandlerEntry = Live | Deferred


def lazy(factory: type | str | Callable[[], Any]) -> Deferred:
    """Mark a factory for construction on first lookup."""
    return Deferred(factory)


def import_string(path: str) -> Any:
    """Import ``package.module:attr`` (or ``package.module.attr``)."""
    if ":" in path:
        module_name, _, attr = path.partition(":")
    else:
        module_name, _, attr = path.rpartition(".")
    if not module_name or not attr:
        raise ImportError(f"Invalid import path: {path!r}")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise ImportError(f"Cannot import {attr!r} from {module_name!r}") from exc
    return target


def _to_entry(handler: Any) -> HandlerEntry:
    if isinstance(handler, (Live, Deferred)):
        return handler
    if isinstance(handler, (type, str)):
        return Deferred(handler)
    return Live(handler)


class HandlerRegistry:
    """
    Name -> handler mapping.

    Configured once before serving traffic. ``resolve`` may run concurrently
    with traffic; deferred entries are constructed at most once.
    """

    def __init__(self) -> None:
        self._entries: dict[str, HandlerEntry] = {}
        self._lock = threading.RLock()

    def register(self, name: str, handler: Any, *, overwrite: bool = False) -> None:
        """Register a handler; classes and import path strings are deferred."""
        with self._lock:
            if name in self._entries and not overwrite:
                raise DuplicateHandler(name)
            self._entries[name] = _to_entry(handler)

    def has(self, name: str) -> bool:
        return name in self._entries

    def resolve(self, name: str) -> Any | None:
        """Return the live handler for ``name``, constructing it on first use."""
        entry = self._entries.get(name)
        if entry is None:
            return None
        if isinstance(entry, Live):
            return entry.instance
        with self._lock:
            entry = self._entries.get(name)
            if entry is None:
                return None
            if isinstance(entry, Live):
                return entry.instance
            logger.debug("Instantiating deferred RPC handler {}", name)
            instance = entry.create()
            self._entries[name] = Live(instance)
            return instance

    def remove(self, name: str) -> None:
        with self._lock:
            self._entries.pop(name, None)

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return self.has(name)
