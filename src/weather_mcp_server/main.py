"""Entry point for the weather MCP server."""

from __future__ import annotations

import argparse
import logging
from typing import Any

import anyio
from pydantic import ValidationError

from weather_mcp_server.config import ServerSettings, build_provider, build_server
from weather_mcp_server.fastmcp_adapter import build_fastmcp_app
from weather_mcp_server.logging_config import setup_logging
from weather_mcp_server.transport import serve_stdio

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the server."""
    parser = argparse.ArgumentParser(description="Weather forecast MCP server")
    parser.add_argument(
        "--transport",
        choices=("stdio", "http"),
        default="stdio",
        help="Serve newline-delimited JSON on stdio, or HTTP through FastMCP.",
    )
    parser.add_argument("--host", default="127.0.0.1", help="HTTP bind address")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port")
    parser.add_argument("--path", default="/mcp", help="HTTP endpoint path")
    parser.add_argument(
        "--provider",
        choices=("synthetic", "http"),
        help="Forecast source (default: $WEATHER_MCP_PROVIDER or synthetic).",
    )
    parser.add_argument(
        "--api-url", help="Upstream weather API base URL (default: $WEATHER_API_URL)."
    )
    parser.add_argument("--timeout", type=float, help="Upstream timeout in seconds.")
    parser.add_argument("--log-level", help="Logging level (default: INFO).")
    return parser


def load_settings(args: argparse.Namespace) -> ServerSettings:
    """Merge command-line overrides over environment settings."""
    overrides: dict[str, Any] = {
        "provider": args.provider,
        "api_url": args.api_url,
        "timeout": args.timeout,
        "log_level": args.log_level,
    }
    settings = ServerSettings.from_env()
    return ServerSettings.model_validate(
        {
            **settings.model_dump(),
            **{key: value for key, value in overrides.items() if value is not None},
        }
    )


def main(argv: list[str] | None = None) -> int:
    """Run the server until the transport closes."""
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as error:
        parser.error(f"invalid configuration: {error}")

    setup_logging(settings.log_level)
    provider = build_provider(settings)
    logger.info(
        "Starting weather MCP server (transport=%s, provider=%s)",
        args.transport,
        settings.provider,
    )

    if args.transport == "stdio":
        anyio.run(serve_stdio, build_server(provider))
        return 0

    app, _ = build_fastmcp_app(provider)
    app.run(transport="http", host=args.host, port=args.port, path=args.path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
