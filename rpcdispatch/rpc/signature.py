"""Signature inspection for dispatch targets.

A target is either a plain callable or a (handler instance, method name)
pair. ``describe`` reports the declared parameter shape without invoking
anything.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable

from rpcdispatch.utils.exceptions import ERROR_STATUS_CODE, HandlerError

_EMPTY = inspect.Parameter.empty


@dataclass(frozen=True, slots=True)
class ParameterInfo:
    name: str
    is_optional: bool
    default: Any = None
    keyword_only: bool = False


@dataclass(frozen=True, slots=True)
class Signature:
    parameters: tuple[ParameterInfo, ...]
    required_count: int
    total_count: int
    variadic: bool = False

    @property
    def names(self) -> list[str]:
        return [p.name for p in self.parameters]


@dataclass(frozen=True, slots=True)
class CallableTarget:
    """A resolved invokable unit: ``handler`` itself, or ``handler.<method>``."""

    handler: Any
    method: str | None = None

    @property
    def func(self) -> Callable[..., Any]:
        if self.method is None:
            return self.handler
        return getattr(self.handler, self.method)

    @property
    def label(self) -> str:
        if self.method is None:
            return getattr(self.handler, "__qualname__", type(self.handler).__name__)
        return f"{type(self.handler).__name__}.{self.method}"

    @classmethod
    def for_method(cls, handler: Any, method: str) -> CallableTarget | None:
        """Build a pair target when ``method`` is a public callable attribute of ``handler``."""
        if not method or method.startswith("_"):
            return None
        if not callable(getattr(handler, method, None)):
            return None
        return cls(handler, method)


def describe(target: CallableTarget | Callable[..., Any]) -> Signature:
    """Report declared parameters, required count and total count of a target."""
    if not isinstance(target, CallableTarget):
        target = CallableTarget(target)
    func = target.func
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise HandlerError(
            f"Cannot inspect signature of '{target.label}': {exc}",
            http_status_code=ERROR_STATUS_CODE,
        ) from exc

    params: list[ParameterInfo] = []
    required = 0
    variadic = False
    for p in sig.parameters.values():
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            variadic = True
            continue
        if p.kind is inspect.Parameter.VAR_KEYWORD:
            continue
        optional = p.default is not _EMPTY
        if not optional:
            required += 1
        params.append(
            ParameterInfo(
                name=p.name,
                is_optional=optional,
                default=p.default if optional else None,
                keyword_only=p.kind is inspect.Parameter.KEYWORD_ONLY,
            )
        )
    return Signature(
        parameters=tuple(params),
        required_count=required,
        total_count=len(params),
        variadic=variadic,
    )
