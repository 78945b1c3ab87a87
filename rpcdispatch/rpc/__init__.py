"""RPC dispatch core: registry, signature inspection, binding and the server."""

from rpcdispatch.rpc.binder import BoundArguments, bind, normalize_key
from rpcdispatch.rpc.method import (
    FaultKind,
    MethodCall,
    MethodFault,
    MethodResponse,
    MethodReturn,
    is_associative,
)
from rpcdispatch.rpc.registry import Deferred, HandlerRegistry, Live, lazy
from rpcdispatch.rpc.server import FaultLogger, Server
from rpcdispatch.rpc.signature import CallableTarget, ParameterInfo, Signature, describe

__all__ = [
    "BoundArguments",
    "bind",
    "normalize_key",
    "FaultKind",
    "MethodCall",
    "MethodFault",
    "MethodResponse",
    "MethodReturn",
    "is_associative",
    "Deferred",
    "HandlerRegistry",
    "Live",
    "lazy",
    "FaultLogger",
    "Server",
    "CallableTarget",
    "ParameterInfo",
    "Signature",
    "describe",
]
