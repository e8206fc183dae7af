"""Model Context Protocol server for weather forecasts."""

from weather_mcp_server.config import ServerSettings, build_provider, build_server
from weather_mcp_server.forecast import (
    ForecastItem,
    ForecastProvider,
    ForecastProviderError,
    HttpForecastProvider,
    SyntheticForecastProvider,
)
from weather_mcp_server.tools import build_registry, build_tools

__all__ = [
    "ForecastItem",
    "ForecastProvider",
    "ForecastProviderError",
    "HttpForecastProvider",
    "ServerSettings",
    "SyntheticForecastProvider",
    "build_provider",
    "build_registry",
    "build_server",
    "build_tools",
]
