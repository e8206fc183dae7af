"""Error codes and exception types for the MCP protocol layer."""

from __future__ import annotations

from enum import IntEnum
from typing import NoReturn


class ErrorCode(IntEnum):
    """JSON-RPC error codes emitted by the server."""

    PARSE_ERROR = -32700
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class MCPError(Exception):
    """Protocol-level failure carrying a JSON-RPC error code."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        """Create an error with the given code and human-readable message."""
        super().__init__(message)
        self.code = code
        self.message = message


def raise_mcp_error(code: ErrorCode, message: str) -> NoReturn:
    """Raise an :class:`MCPError` with the given code."""
    raise MCPError(code=code, message=message)
