"""Tests for rpcdispatch.utils.exceptions module."""

from __future__ import annotations

from rpcdispatch.utils.exceptions import (
    DuplicateHandler,
    ErrorCategory,
    HandlerError,
    InvalidParameters,
    InvalidRequest,
    MethodNotExists,
    RpcError,
    error_code,
    error_message,
    sanitize_error_message,
    status_hint,
)


class TestExceptionClasses:
    """Test custom exception classes."""

    def test_rpc_error_defaults(self) -> None:
        exc = RpcError("boom")
        assert exc.code == 0
        assert exc.http_status_code == 400
        assert exc.data is None
        assert str(exc) == "boom"
        assert exc.to_dict() == {"code": 0, "message": "boom", "data": None, "category": "fatal"}

    def test_method_not_exists(self) -> None:
        exc = MethodNotExists("calc.div")
        assert exc.message == "Method 'calc.div' is not defined"
        assert exc.method == "calc.div"
        assert exc.code == -32601
        assert exc.http_status_code == 404
        assert exc.category == ErrorCategory.NOT_FOUND

    def test_invalid_parameters(self) -> None:
        exc = InvalidParameters("Parameter 'x' is missing.")
        assert exc.code == -32602
        assert exc.http_status_code == 400
        assert exc.category == ErrorCategory.VALIDATION

    def test_invalid_request_code_override(self) -> None:
        assert InvalidRequest("bad").code == -32600
        assert InvalidRequest("bad", code=-32700).code == -32700

    def test_duplicate_handler(self) -> None:
        exc = DuplicateHandler("users")
        assert exc.name == "users"
        assert "'users' handler already exists" in exc.message
        assert exc.category == ErrorCategory.CONFLICT

    def test_handler_error_carries_overrides(self) -> None:
        exc = HandlerError("locked", code=9, http_status_code=423, data={"id": 1})
        assert (exc.code, exc.http_status_code, exc.data) == (9, 423, {"id": 1})


class TestStatusHint:
    def test_attribute_hint(self) -> None:
        assert status_hint(HandlerError("x", http_status_code=503)) == 503

    def test_getter_hint(self) -> None:
        class _Legacy(Exception):
            def get_http_status_code(self):
                return 409

        assert status_hint(_Legacy()) == 409

    def test_default_when_missing_or_invalid(self) -> None:
        class _Odd(Exception):
            http_status_code = "teapot"

        assert status_hint(ValueError("x")) == 400
        assert status_hint(_Odd(), default=500) == 500
        assert status_hint(HandlerError("x", http_status_code=42)) == 400


class TestCodeAndMessage:
    def test_error_code(self) -> None:
        assert error_code(MethodNotExists("m")) == -32601
        assert error_code(RuntimeError("x")) == 0

    def test_error_message_falls_back_to_type_name(self) -> None:
        assert error_message(KeyError()) == "KeyError"
        assert error_message(RuntimeError("oops")) == "oops"


class TestSanitizeErrorMessage:
    """Test sanitize_error_message function."""

    def test_no_sensitive_info(self) -> None:
        assert sanitize_error_message("Operation failed") == "Operation failed"

    def test_redacts_tokens(self) -> None:
        msg = sanitize_error_message("auth failed: token=abc123 bearer xyz.789")
        assert "abc123" not in msg
        assert "xyz.789" not in msg
        assert "[REDACTED]" in msg

    def test_redacts_long_keys(self) -> None:
        msg = sanitize_error_message("key sk-" + "a" * 24)
        assert "a" * 24 not in msg
