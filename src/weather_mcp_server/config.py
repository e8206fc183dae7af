"""Runtime configuration and object wiring for the weather MCP server."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, Field

from weather_mcp.server import MCPServer
from weather_mcp_server.forecast import (
    ForecastProvider,
    HttpForecastProvider,
    SyntheticForecastProvider,
)
from weather_mcp_server.tools import build_registry

SERVER_NAME = "weather-forecast-mcp"
SERVER_VERSION = "1.0.0"
DEFAULT_API_URL = "http://localhost:5000"

ENVIRONMENT_VARIABLES = {
    "provider": "WEATHER_MCP_PROVIDER",
    "api_url": "WEATHER_API_URL",
    "timeout": "WEATHER_API_TIMEOUT",
    "log_level": "WEATHER_MCP_LOG_LEVEL",
}


class ServerSettings(BaseModel):
    """Settings for the server process.

    Attributes:
        provider: Which forecast source backs the tools.
        api_url: Base URL of the upstream weather API (``http`` provider only).
        timeout: Upstream request timeout in seconds.
        log_level: Root logging level name.
    """

    provider: Literal["synthetic", "http"] = "synthetic"
    api_url: str = DEFAULT_API_URL
    timeout: float = Field(10.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerSettings:
        """Read settings from environment variables, ignoring empty values."""
        env = os.environ if environ is None else environ
        values = {
            field: env[variable]
            for field, variable in ENVIRONMENT_VARIABLES.items()
            if env.get(variable)
        }
        return cls.model_validate(values)


def build_provider(settings: ServerSettings) -> ForecastProvider:
    """Instantiate the forecast provider selected by ``settings``."""
    if settings.provider == "http":
        return HttpForecastProvider(settings.api_url, timeout=settings.timeout)
    return SyntheticForecastProvider()


def build_server(provider: ForecastProvider) -> MCPServer:
    """Create the dispatcher serving every weather tool."""
    return MCPServer(
        build_registry(provider), name=SERVER_NAME, version=SERVER_VERSION
    )
