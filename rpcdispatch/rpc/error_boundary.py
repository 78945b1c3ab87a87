"""Common RPC error-boundary helpers for server dispatch."""

from __future__ import annotations

from typing import Any

from rpcdispatch.rpc.method import FaultKind, MethodFault
from rpcdispatch.utils.exceptions import (
    BAD_REQUEST_STATUS_CODE,
    InvalidParameters,
    InvalidRequest,
    MethodNotExists,
    RpcError,
    error_code,
    error_message,
    sanitize_error_message,
    status_hint,
)


def classify_exception(exc: BaseException) -> FaultKind:
    """Map an exception to the fault kind reported to the transport."""
    if isinstance(exc, MethodNotExists):
        return FaultKind.METHOD_NOT_EXISTS
    if isinstance(exc, InvalidParameters):
        return FaultKind.INVALID_PARAMETERS
    if isinstance(exc, InvalidRequest):
        return FaultKind.INVALID_REQUEST
    return FaultKind.HANDLER_ERROR


def is_expected(exc: BaseException) -> bool:
    """Taxonomy errors raised on purpose, as opposed to handler crashes."""
    return isinstance(exc, RpcError)


def fault_from_exception(
    exc: BaseException,
    *,
    call_id: Any = None,
    default_status: int = BAD_REQUEST_STATUS_CODE,
    sanitize: bool = False,
    expose_data: bool = True,
) -> MethodFault:
    """Build a MethodFault carrying message, code, kind and status hint."""
    message = error_message(exc)
    if sanitize:
        message = sanitize_error_message(message)
    data = getattr(exc, "data", None) if expose_data and isinstance(exc, RpcError) else None
    return MethodFault(
        message=message,
        code=error_code(exc),
        kind=classify_exception(exc),
        status_code=status_hint(exc, default_status),
        data=data,
        call_id=call_id,
    )
