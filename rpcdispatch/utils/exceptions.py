"""
Exception hierarchy and error handling utilities for rpcdispatch.

Provides:
- RpcError base class carrying a code, an HTTP status hint and extra data
- The dispatch taxonomy (MethodNotExists, InvalidParameters, ...)
- Error categorization and status-hint lookup for arbitrary exceptions
- Safe error message formatting (no sensitive data leak)
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

BAD_REQUEST_STATUS_CODE = 400
NON_EXIST_STATUS_CODE = 404
ERROR_STATUS_CODE = 500


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FATAL = "fatal"


class RpcError(Exception):
    """Base exception for all rpcdispatch errors."""

    default_code: int = 0
    default_status: int = BAD_REQUEST_STATUS_CODE
    category: ErrorCategory = ErrorCategory.FATAL

    def __init__(
        self,
        message: str,
        code: int | None = None,
        http_status_code: int | None = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = self.default_code if code is None else code
        self.http_status_code = self.default_status if http_status_code is None else http_status_code
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "data": self.data,
            "category": self.category.value,
        }

    def __str__(self) -> str:
        return self.message


class MethodNotExists(RpcError):
    """Requested method does not resolve to an invokable target."""

    default_code = -32601
    default_status = NON_EXIST_STATUS_CODE
    category = ErrorCategory.NOT_FOUND

    def __init__(self, method: str, **kwargs: Any):
        super().__init__(f"Method '{method}' is not defined", **kwargs)
        self.method = method


class InvalidParameters(RpcError):
    """Parameter count out of bounds or a required named parameter is missing."""

    default_code = -32602
    category = ErrorCategory.VALIDATION


class InvalidRequest(RpcError):
    """A wire request could not be decoded into a method call."""

    default_code = -32600
    category = ErrorCategory.VALIDATION


class DuplicateHandler(RpcError):
    """Registration attempted over an existing, non-overwritten name."""

    category = ErrorCategory.CONFLICT

    def __init__(self, name: str):
        super().__init__(f"The '{name}' handler already exists")
        self.name = name


class HandlerError(RpcError):
    """Error raised by handler code that wants to control the fault it produces."""


def status_hint(exc: BaseException, default: int = BAD_REQUEST_STATUS_CODE) -> int:
    """Return the HTTP status an exception asks for, or ``default``."""
    getter = getattr(exc, "get_http_status_code", None)
    if callable(getter):
        value = getter()
    else:
        value = getattr(exc, "http_status_code", None)
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
        return value
    return default


def error_code(exc: BaseException) -> int:
    """Return the integer fault code for an exception (0 when it has none)."""
    code = getattr(exc, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return 0


def error_message(exc: BaseException) -> str:
    if isinstance(exc, RpcError):
        return exc.message
    message = str(exc)
    return message if message else type(exc).__name__


_SENSITIVE_PATTERNS = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"sk-[a-zA-Z0-9]{20,}"),
    re.compile(r"[a-zA-Z0-9]{32,}"),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
