"""Newline-delimited JSON transport over stdin/stdout."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import anyio.to_thread

from weather_mcp.server import MCPServer

logger = logging.getLogger(__name__)


async def serve_stdio(
    server: MCPServer,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Answer one response line per request line until end of input.

    Blank lines are skipped. Responses are written in request order.

    Returns:
        Number of requests answered.

    """
    reader = stdin or sys.stdin
    writer = stdout or sys.stdout
    handled = 0
    while True:
        line = await anyio.to_thread.run_sync(reader.readline)
        if not line:
            break
        if not line.strip():
            continue
        writer.write(await server.handle_raw(line) + "\n")
        writer.flush()
        handled += 1
    logger.info("Input closed after %d requests", handled)
    return handled
