"""Utility functions for rpcdispatch."""

from rpcdispatch.utils.exceptions import (
    RpcError,
    MethodNotExists,
    InvalidParameters,
    InvalidRequest,
    DuplicateHandler,
    HandlerError,
    ErrorCategory,
    error_code,
    error_message,
    status_hint,
    sanitize_error_message,
)
from rpcdispatch.utils.logging_utils import configure_logging, ensure_rotating_log_file

__all__ = [
    "RpcError",
    "MethodNotExists",
    "InvalidParameters",
    "InvalidRequest",
    "DuplicateHandler",
    "HandlerError",
    "ErrorCategory",
    "error_code",
    "error_message",
    "status_hint",
    "sanitize_error_message",
    "configure_logging",
    "ensure_rotating_log_file",
]
