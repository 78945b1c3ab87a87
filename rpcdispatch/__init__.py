"""
rpcdispatch - transport-agnostic RPC dispatch core.
"""

__version__ = "0.1.0"

from rpcdispatch.rpc import (
    CallableTarget,
    FaultKind,
    HandlerRegistry,
    MethodCall,
    MethodFault,
    MethodResponse,
    MethodReturn,
    Server,
    Signature,
    bind,
    describe,
    lazy,
)
from rpcdispatch.utils.exceptions import (
    DuplicateHandler,
    HandlerError,
    InvalidParameters,
    InvalidRequest,
    MethodNotExists,
    RpcError,
)

__all__ = [
    "__version__",
    "CallableTarget",
    "FaultKind",
    "HandlerRegistry",
    "MethodCall",
    "MethodFault",
    "MethodResponse",
    "MethodReturn",
    "Server",
    "Signature",
    "bind",
    "describe",
    "lazy",
    "DuplicateHandler",
    "HandlerError",
    "InvalidParameters",
    "InvalidRequest",
    "MethodNotExists",
    "RpcError",
]
