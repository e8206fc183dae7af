"""JSON-RPC envelope models and the wire codec.

Requests are decoded into :class:`JsonRpcRequest` (or a :class:`DecodeFailure`
when the message cannot be understood) and responses are encoded from
:class:`JsonRpcResponse`. Whether the originating request carried an ``id`` is
tracked through pydantic's ``model_fields_set`` so that responses echo the id
exactly as received, including its absence.
"""

from __future__ import annotations

import json
import math
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from weather_mcp.errors import ErrorCode

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2025-06-18"

RequestId = Union[str, int, float, None]


class _Correlated(BaseModel):
    """Base for envelopes that carry an optional request identifier."""

    id: RequestId = None

    @property
    def has_id(self) -> bool:
        """Whether an ``id`` member was present on the wire."""
        return "id" in self.model_fields_set


class JsonRpcRequest(_Correlated):
    """A decoded request message."""

    jsonrpc: str = JSONRPC_VERSION
    method: str
    params: Any = None


class DecodeFailure(_Correlated):
    """A raw message that could not be decoded into a request.

    ``id`` is populated when the message parsed far enough to recover it.
    """

    message: str


class JsonRpcError(BaseModel):
    """Error member of a response."""

    code: int
    message: str


class JsonRpcResponse(_Correlated):
    """A response message holding exactly one of ``result`` or ``error``."""

    jsonrpc: str = JSONRPC_VERSION
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @model_validator(mode="after")
    def check_exactly_one_outcome(self) -> JsonRpcResponse:
        if (self.result is None) == (self.error is None):
            raise ValueError("Response must carry exactly one of result or error")
        return self

    def to_wire(self) -> dict[str, Any]:
        """Build the JSON-ready payload, omitting unset members."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.has_id:
            payload["id"] = self.id
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        return payload


class ServerInfo(BaseModel):
    """Identity reported by ``initialize``."""

    name: str
    version: str


class InitializeResult(BaseModel):
    """Result of ``initialize``."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(PROTOCOL_VERSION, alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(alias="serverInfo")


class EmptyResult(BaseModel):
    """Result of methods that acknowledge without data, such as ``initialized``."""


class ToolDescriptor(BaseModel):
    """Discovery entry for a single tool."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class ToolsListResult(BaseModel):
    """Result of ``tools/list``."""

    tools: list[ToolDescriptor]


class TextContent(BaseModel):
    """A text content block."""

    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    """Result of ``tools/call``."""

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool = Field(False, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> ToolCallResult:
        """Wrap a single text block."""
        return cls(content=[TextContent(text=text)], is_error=is_error)


class ToolCallParams(BaseModel):
    """Parameters of ``tools/call``."""

    name: str
    arguments: dict[str, Any] | None = None


ResultPayload = Union[InitializeResult, EmptyResult, ToolsListResult, ToolCallResult]


def _echo_id(source: _Correlated) -> dict[str, Any]:
    return {"id": source.id} if source.has_id else {}


def success_response(
    source: JsonRpcRequest | DecodeFailure, result: ResultPayload
) -> JsonRpcResponse:
    """Build a successful response correlated with ``source``."""
    return JsonRpcResponse(
        **_echo_id(source), result=result.model_dump(by_alias=True)
    )


def error_response(
    source: JsonRpcRequest | DecodeFailure, code: ErrorCode, message: str
) -> JsonRpcResponse:
    """Build an error response correlated with ``source``."""
    return JsonRpcResponse(
        **_echo_id(source), error=JsonRpcError(code=int(code), message=message)
    )


def _is_request_id(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return value is None or isinstance(value, (str, int))


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def decode_request(raw: str | bytes) -> JsonRpcRequest | DecodeFailure:
    """Decode a raw message into a request.

    Args:
        raw: Message text or bytes as read from the transport.

    Returns:
        The decoded request, or a :class:`DecodeFailure` describing why the
        message is not a request. A malformed ``id`` is dropped rather than
        failing the decode.

    """
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return DecodeFailure(message="Parse error: Invalid JSON")
    if not isinstance(payload, dict):
        return DecodeFailure(message="Parse error: Invalid JSON")

    fields: dict[str, Any] = {}
    if "id" in payload and _is_request_id(payload["id"]):
        fields["id"] = payload["id"]

    method = payload.get("method")
    if not isinstance(method, str):
        return DecodeFailure(message="Parse error: Missing method", **fields)

    if "params" in payload:
        fields["params"] = payload["params"]
    return JsonRpcRequest(method=method, **fields)


def encode_response(response: JsonRpcResponse) -> str:
    """Serialize a response to a single line of JSON."""
    return json.dumps(response.to_wire(), allow_nan=False)


def decode_response(raw: str | bytes) -> JsonRpcResponse:
    """Parse an encoded response.

    Raises:
        ValueError: If the payload is not valid JSON or not a valid response.

    """
    return JsonRpcResponse.model_validate(json.loads(raw))
