"""Tests for the MCP request dispatcher."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest

from weather_mcp.protocol import JsonRpcRequest
from weather_mcp.server import MCPServer
from weather_mcp.tools import (
    ToolDefinition,
    ToolOutcome,
    ToolParameters,
    ToolRegistry,
)
from weather_mcp_server.config import build_server
from weather_mcp_server.forecast import ForecastProvider

TOOL_NAMES = [
    "get_weather_forecast",
    "get_temperature_stats",
    "get_weather_summary",
    "get_current_weather",
]


def _request(method: str, params: Any = None, request_id: int = 1) -> JsonRpcRequest:
    if params is None:
        return JsonRpcRequest(id=request_id, method=method)
    return JsonRpcRequest(id=request_id, method=method, params=params)


class TestBuiltInMethods:
    """Routing of the fixed top-level methods."""

    @pytest.mark.anyio()
    async def test_initialize_reports_identity(self, server: MCPServer) -> None:
        """initialize returns the fixed version and server identity."""
        response = await server.handle(_request("initialize"))

        assert response.error is None
        assert response.result == {
            "protocolVersion": "2025-06-18",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "weather-forecast-mcp", "version": "1.0.0"},
        }

    @pytest.mark.anyio()
    async def test_initialized_returns_empty_result(self, server: MCPServer) -> None:
        """initialized acknowledges with an empty object."""
        response = await server.handle(_request("initialized"))

        assert response.result == {}
        assert response.error is None

    @pytest.mark.anyio()
    async def test_tools_list_in_registry_order(self, server: MCPServer) -> None:
        """tools/list returns every descriptor in registration order."""
        response = await server.handle(_request("tools/list"))

        assert response.result is not None
        tools = response.result["tools"]
        assert [tool["name"] for tool in tools] == TOOL_NAMES
        days = tools[0]["inputSchema"]["properties"]["days"]
        assert days == {
            "type": "integer",
            "description": "Number of days to forecast (1-10)",
            "default": 5,
        }
        assert tools[2]["inputSchema"]["properties"] == {}

    @pytest.mark.anyio()
    async def test_tools_list_is_idempotent(self, server: MCPServer) -> None:
        """Consecutive tools/list calls return identical descriptors."""
        first = await server.handle(_request("tools/list", request_id=1))
        second = await server.handle(_request("tools/list", request_id=2))

        assert first.result == second.result

    @pytest.mark.anyio()
    @pytest.mark.parametrize("method", ["foo/bar", "tools/lst", "shutdown"])
    async def test_unknown_method_is_method_not_found(
        self, server: MCPServer, method: str
    ) -> None:
        """Unknown top-level methods produce -32601 and no result."""
        response = await server.handle(_request(method))

        assert response.result is None
        assert response.error is not None
        assert response.error.code == -32601
        assert response.error.message == f"Method not found: {method}"

    @pytest.mark.anyio()
    async def test_unexpected_failure_is_internal_error(
        self, server: MCPServer, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Exceptions escaping a method become -32603 Internal error."""

        def explode() -> None:
            raise RuntimeError("registry exploded")

        monkeypatch.setattr(server.registry, "list", explode)

        response = await server.handle(_request("tools/list"))

        assert response.error is not None
        assert response.error.code == -32603
        assert response.error.message == "Internal error: registry exploded"


class TestToolCall:
    """The tools/call sub-protocol."""

    @pytest.mark.anyio()
    @pytest.mark.parametrize("name", TOOL_NAMES)
    async def test_known_tool_returns_result(self, server: MCPServer, name: str) -> None:
        """Every registered tool answers with text content and no error."""
        response = await server.handle(
            _request("tools/call", {"name": name, "arguments": {}})
        )

        assert response.error is None
        assert response.result is not None
        assert response.result["isError"] is False
        assert response.result["content"][0]["type"] == "text"
        assert response.result["content"][0]["text"]

    @pytest.mark.anyio()
    async def test_arguments_may_be_omitted(self, server: MCPServer) -> None:
        """A call without arguments uses each tool's defaults."""
        response = await server.handle(
            _request("tools/call", {"name": "get_weather_forecast"})
        )

        assert response.result is not None
        text = response.result["content"][0]["text"]
        assert text.startswith("Weather forecast for the next 5 days:")

    @pytest.mark.anyio()
    async def test_missing_params(self, server: MCPServer) -> None:
        """tools/call without params is -32602 Missing parameters."""
        response = await server.handle(_request("tools/call"))

        assert response.result is None
        assert response.error is not None
        assert response.error.code == -32602
        assert response.error.message == "Missing parameters"

    @pytest.mark.anyio()
    @pytest.mark.parametrize(
        "params",
        [
            "get_weather_forecast",
            ["get_weather_forecast"],
            {"arguments": {"days": 3}},
            {"name": 42},
            {"name": "get_weather_forecast", "arguments": [1, 2]},
        ],
    )
    async def test_invalid_params(self, server: MCPServer, params: Any) -> None:
        """Params that are not {name, arguments} are -32602."""
        response = await server.handle(_request("tools/call", params))

        assert response.error is not None
        assert response.error.code == -32602
        assert response.error.message == "Invalid tool call parameters"

    @pytest.mark.anyio()
    async def test_unknown_tool_is_soft_error(self, server: MCPServer) -> None:
        """Unknown tool names succeed at the protocol level with isError set."""
        response = await server.handle(
            _request("tools/call", {"name": "get_tide_tables", "arguments": {}})
        )

        assert response.error is None
        assert response.result == {
            "content": [{"type": "text", "text": "Unknown tool: get_tide_tables"}],
            "isError": True,
        }

    @pytest.mark.anyio()
    async def test_provider_failure_is_tool_call_failed(
        self, failing_provider: ForecastProvider
    ) -> None:
        """Provider errors surface as -32603 Tool call failed."""
        server = build_server(failing_provider)

        response = await server.handle(
            _request("tools/call", {"name": "get_temperature_stats"})
        )

        assert response.result is None
        assert response.error is not None
        assert response.error.code == -32603
        assert response.error.message == (
            "Tool call failed: Failed to get weather forecast: boom"
        )

    @pytest.mark.anyio()
    async def test_handler_exception_is_tool_call_failed(self) -> None:
        """A handler that raises is reported rather than propagated."""

        async def handler(_: ToolParameters) -> ToolOutcome:
            raise RuntimeError("kaboom")

        registry = ToolRegistry(
            [
                ToolDefinition(
                    name="explode",
                    description="Always raises.",
                    parameters_model=ToolParameters,
                    handler=handler,
                )
            ]
        )
        server = MCPServer(registry, name="test", version="0")

        response = await server.handle(_request("tools/call", {"name": "explode"}))

        assert response.error is not None
        assert response.error.code == -32603
        assert response.error.message == "Tool call failed: kaboom"

    @pytest.mark.anyio()
    @pytest.mark.parametrize(
        ("days", "expected"),
        [(0, 1), (15, 10), ("abc", 5), ("7", 7), (3.0, 3), (-4, 1), (None, 5)],
    )
    async def test_days_argument_is_clamped(
        self,
        static_provider: Callable[..., Any],
        days: Any,
        expected: int,
    ) -> None:
        """The effective days value always lands in [1, 10]."""
        provider = static_provider(list(range(10)))
        server = build_server(provider)

        for tool in ("get_weather_forecast", "get_temperature_stats"):
            response = await server.handle(
                _request("tools/call", {"name": tool, "arguments": {"days": days}})
            )
            assert response.error is None

        assert provider.requested == [expected, expected]


class TestHandleRaw:
    """End-to-end handling of raw wire messages."""

    @pytest.mark.anyio()
    async def test_invalid_json_is_parse_error_without_id(
        self, server: MCPServer
    ) -> None:
        """Unparsable input yields -32700 and no id member."""
        wire = json.loads(await server.handle_raw("{not json"))

        assert wire == {
            "jsonrpc": "2.0",
            "error": {"code": -32700, "message": "Parse error: Invalid JSON"},
        }

    @pytest.mark.anyio()
    async def test_missing_method_echoes_recovered_id(self, server: MCPServer) -> None:
        """A parse error still correlates when the id is recoverable."""
        wire = json.loads(await server.handle_raw('{"jsonrpc": "2.0", "id": 12}'))

        assert wire["id"] == 12
        assert wire["error"]["code"] == -32700
        assert "result" not in wire

    @pytest.mark.anyio()
    async def test_id_is_echoed_verbatim(self, server: MCPServer) -> None:
        """String ids come back unchanged."""
        wire = json.loads(
            await server.handle_raw(
                '{"jsonrpc": "2.0", "id": "abc-123", "method": "initialized"}'
            )
        )

        assert wire == {"jsonrpc": "2.0", "id": "abc-123", "result": {}}

    @pytest.mark.anyio()
    async def test_malformed_id_is_treated_as_absent(self, server: MCPServer) -> None:
        """A structured id is dropped and the request still executes."""
        wire = json.loads(
            await server.handle_raw('{"id": {"x": 1}, "method": "initialized"}')
        )

        assert wire == {"jsonrpc": "2.0", "result": {}}

    @pytest.mark.anyio()
    async def test_overflowing_id_is_dropped(self, server: MCPServer) -> None:
        """A numeric id too large for a float is dropped so the reply stays JSON."""
        raw = await server.handle_raw(
            '{"jsonrpc": "2.0", "id": 1e400, "method": "initialized"}'
        )

        assert raw == '{"jsonrpc": "2.0", "result": {}}'

    @pytest.mark.anyio()
    async def test_nan_id_is_parse_error(self, server: MCPServer) -> None:
        """The non-JSON NaN literal is rejected rather than echoed back."""
        raw = await server.handle_raw(
            '{"jsonrpc": "2.0", "id": NaN, "method": "initialized"}'
        )

        assert "NaN" not in raw
        assert json.loads(raw) == {
            "jsonrpc": "2.0",
            "error": {"code": -32700, "message": "Parse error: Invalid JSON"},
        }

    @pytest.mark.anyio()
    async def test_tool_call_over_the_wire(self, server: MCPServer) -> None:
        """A well-formed tool call carries result and no error member."""
        wire = json.loads(
            await server.handle_raw(
                json.dumps(
                    {
                        "jsonrpc": "2.0",
                        "id": 5,
                        "method": "tools/call",
                        "params": {
                            "name": "get_weather_forecast",
                            "arguments": {"days": "2"},
                        },
                    }
                )
            )
        )

        assert "error" not in wire
        text = wire["result"]["content"][0]["text"]
        assert text.startswith("Weather forecast for the next 2 days:")
