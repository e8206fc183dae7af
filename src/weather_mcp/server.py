"""Request dispatcher for the MCP server.

The dispatcher is transport-agnostic: a transport hands it one raw message (or a
decoded :class:`~weather_mcp.protocol.JsonRpcRequest`) and receives exactly one
response back. It keeps no state between requests, so a single instance can be
shared by concurrent callers.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from weather_mcp.errors import ErrorCode, MCPError, raise_mcp_error
from weather_mcp.protocol import (
    DecodeFailure,
    EmptyResult,
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    ResultPayload,
    ServerInfo,
    ToolCallParams,
    ToolCallResult,
    ToolsListResult,
    decode_request,
    encode_response,
    error_response,
    success_response,
)
from weather_mcp.tools import ToolFailure, ToolRegistry

logger = logging.getLogger(__name__)


class MCPServer:
    """Routes requests to built-in methods and registered tools.

    Routing errors are raised as :class:`MCPError` inside the method handlers
    and converted into error responses at :meth:`handle`, which never raises.
    """

    def __init__(
        self, registry: ToolRegistry, *, name: str, version: str
    ) -> None:
        """Create a dispatcher over an immutable tool registry."""
        self._registry = registry
        self._server_info = ServerInfo(name=name, version=version)
        self._methods = {
            "initialize": self._initialize,
            "initialized": self._initialized,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
        }

    @property
    def registry(self) -> ToolRegistry:
        """Tools served by this dispatcher."""
        return self._registry

    async def handle_raw(self, raw: str | bytes) -> str:
        """Decode a raw message, dispatch it and encode the response."""
        decoded = decode_request(raw)
        if isinstance(decoded, DecodeFailure):
            logger.warning("Rejected malformed request: %s", decoded.message)
            response = error_response(
                decoded, ErrorCode.PARSE_ERROR, decoded.message
            )
        else:
            response = await self.handle(decoded)
        return encode_response(response)

    async def handle(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Dispatch a decoded request and return its response."""
        logger.info("MCP request received: %s (id: %s)", request.method, request.id)
        method = self._methods.get(request.method)
        if method is None:
            logger.warning("Unknown method %r", request.method)
            return error_response(
                request,
                ErrorCode.METHOD_NOT_FOUND,
                f"Method not found: {request.method}",
            )
        try:
            result = await method(request.params)
        except MCPError as error:
            logger.warning("%s failed: %s", request.method, error.message)
            return error_response(request, error.code, error.message)
        except Exception as exc:
            logger.exception("Unhandled error while executing %s", request.method)
            return error_response(
                request, ErrorCode.INTERNAL_ERROR, f"Internal error: {exc}"
            )
        return success_response(request, result)

    async def _initialize(self, _params: Any) -> ResultPayload:
        return InitializeResult(server_info=self._server_info)

    async def _initialized(self, _params: Any) -> ResultPayload:
        return EmptyResult()

    async def _list_tools(self, _params: Any) -> ResultPayload:
        return ToolsListResult(tools=self._registry.list())

    async def _call_tool(self, params: Any) -> ResultPayload:
        if params is None:
            raise_mcp_error(ErrorCode.INVALID_PARAMS, "Missing parameters")
        try:
            call = ToolCallParams.model_validate(params)
        except ValidationError:
            raise_mcp_error(ErrorCode.INVALID_PARAMS, "Invalid tool call parameters")

        tool = self._registry.get(call.name)
        if tool is None:
            logger.warning("Unknown tool %r", call.name)
            return ToolCallResult.from_text(f"Unknown tool: {call.name}", is_error=True)

        try:
            outcome = await tool.invoke(call.arguments or {})
        except Exception as exc:
            logger.exception("Tool %s raised", call.name)
            raise_mcp_error(ErrorCode.INTERNAL_ERROR, f"Tool call failed: {exc}")

        if isinstance(outcome, ToolFailure):
            logger.warning(
                "Tool %s failed (%s): %s", call.name, outcome.kind, outcome.message
            )
            raise_mcp_error(
                ErrorCode.INTERNAL_ERROR, f"Tool call failed: {outcome.message}"
            )
        return ToolCallResult.from_text(outcome.text)
