"""Tool registration helpers for the weather MCP server."""

from __future__ import annotations

from weather_mcp.tools import ToolDefinition, ToolRegistry
from weather_mcp_server.forecast import ForecastProvider
from weather_mcp_server.tools.forecast import (
    get_current_weather_tool,
    get_weather_forecast_tool,
)
from weather_mcp_server.tools.statistics import get_temperature_stats_tool
from weather_mcp_server.tools.summary import get_weather_summary_tool


def build_tools(provider: ForecastProvider) -> list[ToolDefinition]:
    """Instantiate all tool definitions backed by ``provider``."""
    return [
        get_weather_forecast_tool(provider),
        get_temperature_stats_tool(provider),
        get_weather_summary_tool(provider),
        get_current_weather_tool(provider),
    ]


def build_registry(provider: ForecastProvider) -> ToolRegistry:
    """Build the immutable registry served by the dispatcher."""
    return ToolRegistry(build_tools(provider))
