"""RPC dispatcher: resolves method names to handlers and normalizes outcomes.

在整体架构中：传输层把请求解码为 MethodCall 交给 Server.handle；Server 解析处理器、绑定参数、调用，并把结果或异常统一包装为 MethodResponse。
"""

from __future__ import annotations

import inspect
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from loguru import logger

from rpcdispatch.rpc.binder import bind
from rpcdispatch.rpc.error_boundary import fault_from_exception, is_expected
from rpcdispatch.rpc.method import MethodCall, MethodFault, MethodResponse, MethodReturn
from rpcdispatch.rpc.registry import HandlerRegistry
from rpcdispatch.rpc.signature import CallableTarget, describe
from rpcdispatch.utils.exceptions import (
    BAD_REQUEST_STATUS_CODE,
    ERROR_STATUS_CODE,
    HandlerError,
    MethodNotExists,
)

if TYPE_CHECKING:
    from rpcdispatch.config.schema import Config


@runtime_checkable
class FaultLogger(Protocol):
    """External collaborator notified once per fault."""

    def log(self, error: BaseException) -> None: ...


class Server:
    """
    Dispatch core.

    Handlers are registered by name. A method name resolves either to a
    callable handler registered under that exact name, or, for
    ``handler.method``, to a public method of the handler registered under the
    part before the first dot.
    """

    HTTP_SUCCESS_STATUS = 200

    def __init__(
        self,
        registry: HandlerRegistry | None = None,
        *,
        logger: FaultLogger | None = None,
        default_error_status: int = BAD_REQUEST_STATUS_CODE,
        sanitize_errors: bool = False,
        expose_error_data: bool = True,
    ):
        self._registry = registry if registry is not None else HandlerRegistry()
        self._logger = logger
        self.default_error_status = default_error_status
        self.sanitize_errors = sanitize_errors
        self.expose_error_data = expose_error_data

    @classmethod
    def from_config(cls, config: Config) -> Server:
        """Build a server from settings and register the configured handlers lazily."""
        server = cls(
            default_error_status=config.server.default_error_status,
            sanitize_errors=config.server.sanitize_errors,
            expose_error_data=config.server.expose_error_data,
        )
        for name, import_path in config.handlers.items():
            server.add_handler(name, import_path)
        return server

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    def get_logger(self) -> FaultLogger | None:
        return self._logger

    def set_logger(self, fault_logger: FaultLogger | None) -> None:
        self._logger = fault_logger

    # -- handler management -------------------------------------------------

    def add_handler(self, name: str, handler: Any, overwrite: bool = False) -> Server:
        """Register ``handler`` under ``name``. Raises DuplicateHandler unless ``overwrite``."""
        self._registry.register(name, handler, overwrite=overwrite)
        return self

    def has_handler(self, name: str) -> bool:
        return self._registry.has(name)

    def get_handler(self, name: str) -> Any | None:
        return self._registry.resolve(name)

    def remove_handler(self, name: str) -> Server:
        self._registry.remove(name)
        return self

    # -- dispatch -----------------------------------------------------------

    def resolve_target(self, method: str) -> CallableTarget:
        """Resolve a method name to an invokable target or raise MethodNotExists."""
        if self.has_handler(method):
            handler = self.get_handler(method)
            if callable(handler):
                return CallableTarget(handler)
        if "." in method:
            handler_name, sub_method = method.split(".", 1)
            if self.has_handler(handler_name):
                target = CallableTarget.for_method(self.get_handler(handler_name), sub_method)
                if target is not None:
                    return target
        raise MethodNotExists(method)

    def call(self, method: str, parameters: Any = ()) -> Any:
        """Resolve, bind and invoke. Errors propagate to the caller."""
        target = self.resolve_target(method)
        bound = bind(describe(target), parameters)
        logger.debug("RPC dispatch {} -> {}", method, target.label)
        return target.func(*bound.args, **bound.kwargs)

    def handle(self, method_call: MethodCall) -> MethodResponse:
        """Dispatch a decoded call. Never raises: failures become a MethodFault."""
        try:
            result = self.call(method_call.method_name, method_call.parameters)
            if inspect.isawaitable(result):
                _discard_awaitable(result)
                raise HandlerError(
                    f"Method '{method_call.method_name}' is asynchronous; dispatch it with ahandle()",
                    http_status_code=ERROR_STATUS_CODE,
                )
        except Exception as exc:
            return self._fault(exc, method_call)
        return self._wrap(result, method_call)

    async def ahandle(self, method_call: MethodCall) -> MethodResponse:
        """Like ``handle`` but awaits handlers that return an awaitable."""
        try:
            result = self.call(method_call.method_name, method_call.parameters)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            return self._fault(exc, method_call)
        return self._wrap(result, method_call)

    def _wrap(self, result: Any, method_call: MethodCall) -> MethodResponse:
        if isinstance(result, MethodResponse):
            if result.call_id is None and method_call.call_id is not None:
                return replace(result, call_id=method_call.call_id)
            return result
        return MethodReturn(result, call_id=method_call.call_id)

    def _fault(self, exc: Exception, method_call: MethodCall) -> MethodFault:
        method = method_call.method_name
        if is_expected(exc):
            logger.warning("RPC method {} failed: {}", method, exc)
        else:
            logger.opt(exception=exc).error("RPC method {} raised {}", method, type(exc).__name__)
        if self._logger is not None:
            try:
                self._logger.log(exc)
            except Exception:
                logger.exception("Fault logger failed while reporting method {}", method)
        return fault_from_exception(
            exc,
            call_id=method_call.call_id,
            default_status=self.default_error_status,
            sanitize=self.sanitize_errors,
            expose_data=self.expose_error_data,
        )


def _discard_awaitable(value: Any) -> None:
    close = getattr(value, "close", None)
    if callable(close):
        close()
