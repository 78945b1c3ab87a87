"""Wire codec contract between HTTP transports and the dispatch core."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from rpcdispatch.rpc.method import MethodCall, MethodResponse
from rpcdispatch.utils.exceptions import (
    BAD_REQUEST_STATUS_CODE,
    ERROR_STATUS_CODE,
    NON_EXIST_STATUS_CODE,
)


@dataclass(slots=True)
class HttpMessage:
    """Framework-neutral HTTP payload produced or consumed by an Implementation."""

    body: bytes
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)


class Implementation(ABC):
    """Encodes method calls and responses for one wire format."""

    ERROR_STATUS_CODE = ERROR_STATUS_CODE
    BAD_REQUEST_STATUS_CODE = BAD_REQUEST_STATUS_CODE
    NON_EXIST_STATUS_CODE = NON_EXIST_STATUS_CODE
    HTTP_SUCCESS_STATUS = 200

    content_type = "application/octet-stream"

    @abstractmethod
    def create_method_call(self, body: bytes) -> MethodCall:
        """Decode a request body. Raises InvalidRequest on malformed input."""

    @abstractmethod
    def create_http_response(self, response: MethodResponse, status_code: int = HTTP_SUCCESS_STATUS) -> HttpMessage:
        """Encode a response envelope for the wire."""

    @abstractmethod
    def create_method_response(self, status_code: int, body: bytes) -> MethodResponse:
        """Decode a wire response (client side)."""

    @abstractmethod
    def create_http_request(self, call: MethodCall) -> HttpMessage:
        """Encode a method call for the wire (client side)."""
