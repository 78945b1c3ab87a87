"""Method call and response envelope models."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from rpcdispatch.utils.exceptions import InvalidRequest

Parameters = tuple[Any, ...] | Mapping[str, Any]


def is_associative(params: Mapping[Any, Any]) -> bool:
    """True unless the mapping keys are exactly 0..len-1 in order."""
    return list(params.keys()) != list(range(len(params)))


def normalize_parameters(params: Any) -> Parameters:
    """Tag caller input as positional (tuple) or named (read-only mapping)."""
    if params is None:
        return ()
    if isinstance(params, Mapping):
        if not is_associative(params):
            return tuple(params.values())
        return MappingProxyType(dict(params))
    if isinstance(params, Sequence) and not isinstance(params, (str, bytes, bytearray)):
        return tuple(params)
    raise InvalidRequest(f"Parameters must be a sequence or a mapping, got {type(params).__name__}")


@dataclass(frozen=True, slots=True)
class MethodCall:
    """Decoded request: method name plus positional or named parameters."""

    method_name: str
    parameters: Parameters = ()
    call_id: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.method_name, str) or not self.method_name:
            raise InvalidRequest("Method name must be a non-empty string")
        object.__setattr__(self, "parameters", normalize_parameters(self.parameters))

    @property
    def is_named(self) -> bool:
        return isinstance(self.parameters, Mapping)


class FaultKind(Enum):
    METHOD_NOT_EXISTS = "method_not_exists"
    INVALID_PARAMETERS = "invalid_parameters"
    INVALID_REQUEST = "invalid_request"
    HANDLER_ERROR = "handler_error"


@dataclass(slots=True)
class MethodResponse:
    """Base of the response envelope; handlers may return one directly."""

    call_id: Any = field(default=None, kw_only=True)

    @property
    def is_fault(self) -> bool:
        return False


@dataclass(slots=True)
class MethodReturn(MethodResponse):
    value: Any = None


@dataclass(slots=True)
class MethodFault(MethodResponse):
    message: str = ""
    code: int = 0
    kind: FaultKind = FaultKind.HANDLER_ERROR
    status_code: int = 400
    data: Any = None

    @property
    def is_fault(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
            "kind": self.kind.value,
        }
