"""JSON-RPC 2.0 wire codec."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from pydantic_core import to_jsonable_python

from rpcdispatch.api.implementation import HttpMessage, Implementation
from rpcdispatch.rpc.method import FaultKind, MethodCall, MethodFault, MethodResponse, MethodReturn
from rpcdispatch.utils.exceptions import InvalidRequest, RpcError

JSONRPC_VERSION = "2.0"
PARSE_ERROR = -32700
_INDEX_KEY = re.compile(r"0|-?[1-9][0-9]*")

_KIND_BY_CODE = {
    -32601: FaultKind.METHOD_NOT_EXISTS,
    -32602: FaultKind.INVALID_PARAMETERS,
    -32600: FaultKind.INVALID_REQUEST,
    PARSE_ERROR: FaultKind.INVALID_REQUEST,
}


def _load(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequest(f"Parse error: {exc}", code=PARSE_ERROR) from exc


def _index_keys(params: dict[str, Any]) -> dict[Any, Any]:
    """Read canonical decimal keys (``"0"``, ``"12"``) as integers so ``{"0": a, "1": b}`` binds positionally."""
    return {int(k) if _INDEX_KEY.fullmatch(k) else k: v for k, v in params.items()}


def _dump(payload: dict[str, Any]) -> bytes:
    return json.dumps(payload, default=to_jsonable_python, ensure_ascii=False).encode("utf-8")


class JsonRpcImplementation(Implementation):
    """Request ``{"jsonrpc", "method", "params", "id"}``; response ``result`` or ``error``."""

    content_type = "application/json"

    def create_method_call(self, body: bytes) -> MethodCall:
        req = _load(body)
        if not isinstance(req, dict):
            raise InvalidRequest("Request must be a JSON object")
        method = req.get("method")
        if not isinstance(method, str) or not method:
            raise InvalidRequest("request.method is required")
        params = req.get("params")
        if params is not None and not isinstance(params, (list, dict)):
            raise InvalidRequest("request.params must be an array or an object")
        if isinstance(params, dict):
            params = _index_keys(params)
        return MethodCall(method, params, call_id=req.get("id"))

    def create_http_response(self, response: MethodResponse, status_code: int = Implementation.HTTP_SUCCESS_STATUS) -> HttpMessage:
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
        if isinstance(response, MethodFault):
            error: dict[str, Any] = {"code": response.code, "message": response.message}
            if response.data is not None:
                error["data"] = response.data
            payload["error"] = error
        elif isinstance(response, MethodReturn):
            payload["result"] = response.value
        else:
            raise TypeError(f"Unsupported response type: {type(response).__name__}")
        payload["id"] = response.call_id
        return HttpMessage(
            body=_dump(payload),
            status_code=status_code,
            headers={"content-type": self.content_type},
        )

    def create_method_response(self, status_code: int, body: bytes) -> MethodResponse:
        try:
            payload = _load(body)
        except InvalidRequest as exc:
            raise RpcError(f"Invalid RPC response (HTTP {status_code}): {exc}", http_status_code=status_code) from exc
        if not isinstance(payload, dict):
            raise RpcError(f"Invalid RPC response (HTTP {status_code})", http_status_code=status_code)
        call_id = payload.get("id")
        error = payload.get("error")
        if isinstance(error, Mapping):
            code = error.get("code", 0)
            code = code if isinstance(code, int) else 0
            return MethodFault(
                message=str(error.get("message", "")),
                code=code,
                kind=_KIND_BY_CODE.get(code, FaultKind.HANDLER_ERROR),
                status_code=status_code,
                data=error.get("data"),
                call_id=call_id,
            )
        if "result" not in payload:
            raise RpcError(f"RPC response has neither result nor error (HTTP {status_code})", http_status_code=status_code)
        return MethodReturn(payload["result"], call_id=call_id)

    def create_http_request(self, call: MethodCall) -> HttpMessage:
        params = dict(call.parameters) if call.is_named else list(call.parameters)
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "method": call.method_name,
            "params": params,
            "id": call.call_id,
        }
        return HttpMessage(body=_dump(payload), headers={"content-type": self.content_type})
