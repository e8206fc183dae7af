"""Adapters for exposing weather tools via FastMCP."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from weather_mcp.tools import ToolDefinition, ToolFailure, ToolRegistry
from weather_mcp_server.config import SERVER_NAME
from weather_mcp_server.forecast import ForecastProvider
from weather_mcp_server.tools import build_registry


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool."""

    def __init__(self, definition: ToolDefinition) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            description=definition.description,
            parameters=definition.input_schema(),
            tags=set(),
        )
        self._definition = definition

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Coerce arguments and delegate to the wrapped handler."""
        outcome = await self._definition.invoke(arguments)
        if isinstance(outcome, ToolFailure):
            raise ToolError(f"Tool call failed: {outcome.message}")
        return ToolResult(content=outcome.text)


def to_fastmcp_tools(tool_definitions: Iterable[ToolDefinition]) -> list[Tool]:
    """Convert tool definitions into FastMCP-compatible tools."""
    return [ToolDefinitionAdapter(definition) for definition in tool_definitions]


def build_fastmcp_app(provider: ForecastProvider) -> tuple[FastMCP, ToolRegistry]:
    """Create a FastMCP server instance with all weather tools registered."""
    app = FastMCP(
        name=SERVER_NAME,
        instructions="Weather forecast tools exposed over the Model Context Protocol.",
    )
    registry = build_registry(provider)
    for tool in to_fastmcp_tools(registry):
        app.add_tool(tool)
    return app, registry
