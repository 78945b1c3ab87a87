"""HTTP client for rpcdispatch servers."""

from __future__ import annotations

import uuid
from typing import Any

import httpx
from loguru import logger

from rpcdispatch.api.implementation import Implementation
from rpcdispatch.api.jsonrpc import JsonRpcImplementation
from rpcdispatch.rpc.method import MethodCall, MethodFault, MethodResponse, MethodReturn
from rpcdispatch.utils.exceptions import RpcError


class RpcFaultError(RpcError):
    """Raised by RpcClient.call when the server answers with a fault."""

    def __init__(self, fault: MethodFault):
        super().__init__(
            fault.message,
            code=fault.code,
            http_status_code=fault.status_code,
            data=fault.data,
        )
        self.fault = fault


class RpcClient:
    def __init__(
        self,
        url: str,
        implementation: Implementation | None = None,
        *,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.url = url
        self.implementation = implementation or JsonRpcImplementation()
        self._http = httpx.Client(timeout=timeout, headers=headers, transport=transport)

    def send(self, method_call: MethodCall) -> MethodResponse:
        """Post a call and decode whatever envelope comes back."""
        request = self.implementation.create_http_request(method_call)
        try:
            resp = self._http.post(self.url, content=request.body, headers=request.headers)
        except httpx.HTTPError as exc:
            raise RpcError(f"RPC transport error calling {method_call.method_name}: {exc}") from exc
        logger.debug("RPC {} -> HTTP {}", method_call.method_name, resp.status_code)
        return self.implementation.create_method_response(resp.status_code, resp.content)

    def call(self, method: str, params: Any = None) -> Any:
        """Call ``method`` and return its result, raising RpcFaultError on a fault."""
        response = self.send(MethodCall(method, params, call_id=f"req_{uuid.uuid4().hex[:12]}"))
        if isinstance(response, MethodFault):
            raise RpcFaultError(response)
        if isinstance(response, MethodReturn):
            return response.value
        raise RpcError(f"Unexpected response type: {type(response).__name__}")

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> RpcClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
