"""HTTP transport for the dispatch core."""

from rpcdispatch.api.app import create_app
from rpcdispatch.api.endpoint import RpcEndpoint, create_rpc_router
from rpcdispatch.api.implementation import HttpMessage, Implementation
from rpcdispatch.api.jsonrpc import JsonRpcImplementation

__all__ = [
    "create_app",
    "RpcEndpoint",
    "create_rpc_router",
    "HttpMessage",
    "Implementation",
    "JsonRpcImplementation",
]
