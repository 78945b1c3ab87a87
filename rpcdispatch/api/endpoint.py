"""FastAPI endpoint that serves a dispatch Server over HTTP POST."""

from __future__ import annotations

from dataclasses import replace

from fastapi import APIRouter, Request, Response
from loguru import logger

from rpcdispatch.api.implementation import HttpMessage, Implementation
from rpcdispatch.api.jsonrpc import JsonRpcImplementation
from rpcdispatch.rpc.error_boundary import fault_from_exception
from rpcdispatch.rpc.method import MethodFault
from rpcdispatch.rpc.server import Server


class RpcEndpoint:
    """Decode -> dispatch -> encode. Every outcome becomes an HTTP response."""

    def __init__(self, server: Server, implementation: Implementation | None = None):
        self.server = server
        self.implementation = implementation or JsonRpcImplementation()

    async def dispatch(self, body: bytes) -> HttpMessage:
        impl = self.implementation
        try:
            method_call = impl.create_method_call(body)
        except Exception as exc:
            logger.warning("Rejected RPC request: {}", exc)
            fault_logger = self.server.get_logger()
            if fault_logger is not None:
                try:
                    fault_logger.log(exc)
                except Exception:
                    logger.exception("Fault logger failed while reporting a rejected request")
            fault = fault_from_exception(
                exc,
                default_status=self.server.default_error_status,
                sanitize=self.server.sanitize_errors,
            )
            return impl.create_http_response(fault, fault.status_code)

        response = await self.server.ahandle(method_call)
        if response.call_id is None and method_call.call_id is not None:
            response = replace(response, call_id=method_call.call_id)
        status = response.status_code if isinstance(response, MethodFault) else Server.HTTP_SUCCESS_STATUS
        try:
            return impl.create_http_response(response, status)
        except Exception as exc:
            logger.opt(exception=exc).error("Failed to encode response for RPC method {}", method_call.method_name)
            fault = fault_from_exception(
                exc,
                call_id=method_call.call_id,
                default_status=Implementation.ERROR_STATUS_CODE,
                sanitize=self.server.sanitize_errors,
            )
            fault.status_code = Implementation.ERROR_STATUS_CODE
            return impl.create_http_response(fault, fault.status_code)


def create_rpc_router(
    server: Server,
    implementation: Implementation | None = None,
    *,
    path: str = "/rpc",
) -> APIRouter:
    """Build an APIRouter exposing ``server`` at ``path``."""
    endpoint = RpcEndpoint(server, implementation)
    router = APIRouter()

    @router.post(path)
    async def rpc_entry(request: Request) -> Response:
        message = await endpoint.dispatch(await request.body())
        return Response(
            content=message.body,
            status_code=message.status_code,
            media_type=endpoint.implementation.content_type,
        )

    return router
