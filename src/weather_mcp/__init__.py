"""weather_mcp package initialization."""

from weather_mcp.errors import ErrorCode, MCPError
from weather_mcp.server import MCPServer
from weather_mcp.tools import ToolDefinition, ToolParameters, ToolRegistry

__all__ = [
    "ErrorCode",
    "MCPError",
    "MCPServer",
    "ToolDefinition",
    "ToolParameters",
    "ToolRegistry",
]
