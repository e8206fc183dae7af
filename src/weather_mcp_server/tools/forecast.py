"""Tools that report forecast items directly."""

from __future__ import annotations

from pydantic import Field

from weather_mcp.tools import (
    ToolDefinition,
    ToolFailure,
    ToolOutcome,
    ToolParameters,
    ToolSuccess,
)
from weather_mcp_server.forecast import ForecastItem, ForecastProvider
from weather_mcp_server.tools.common import (
    DEFAULT_DAYS,
    ForecastDays,
    format_day,
    load_forecast,
    weather_emoji,
)


class WeatherForecastParams(ToolParameters):
    """Parameters for get_weather_forecast."""

    days: ForecastDays = Field(
        DEFAULT_DAYS, description="Number of days to forecast (1-10)"
    )


class CurrentWeatherParams(ToolParameters):
    """Parameters for get_current_weather."""


def format_forecast_item(item: ForecastItem) -> str:
    """Render one forecast day as a labeled block."""
    return (
        f"**{format_day(item.date)}** {weather_emoji(item.summary)}\n"
        f"  Temperature: {item.temperature_c}°C ({item.temperature_f}°F)\n"
        f"  Conditions: {item.conditions}"
    )


def format_forecast(forecast: list[ForecastItem]) -> str:
    """Render a forecast with a header line giving the day count."""
    blocks = "\n".join(format_forecast_item(item) for item in forecast)
    return f"Weather forecast for the next {len(forecast)} days:\n\n{blocks}"


def format_current_weather(item: ForecastItem | None) -> str:
    """Render the current-weather report."""
    if item is None:
        return "No current weather data available"
    return "\n".join(
        [
            "Current Weather:",
            "================",
            f"Date: {item.date.isoformat()}",
            f"Temperature: {item.temperature_c}°C ({item.temperature_f}°F)",
            f"Conditions: {item.conditions}",
        ]
    )


def get_weather_forecast_tool(provider: ForecastProvider) -> ToolDefinition:
    """Create the get_weather_forecast tool."""

    async def handler(params: WeatherForecastParams) -> ToolOutcome:
        forecast = await load_forecast(provider, params.days)
        if isinstance(forecast, ToolFailure):
            return forecast
        return ToolSuccess(format_forecast(forecast))

    return ToolDefinition(
        name="get_weather_forecast",
        description=(
            "Get the weather forecast for the next 5 days with temperature "
            "and conditions"
        ),
        parameters_model=WeatherForecastParams,
        handler=handler,
    )


def get_current_weather_tool(provider: ForecastProvider) -> ToolDefinition:
    """Create the get_current_weather tool.

    The first item of the provider's forecast is reported as current weather.
    """

    async def handler(_: CurrentWeatherParams) -> ToolOutcome:
        forecast = await load_forecast(provider, 1)
        if isinstance(forecast, ToolFailure):
            return forecast
        return ToolSuccess(format_current_weather(forecast[0] if forecast else None))

    return ToolDefinition(
        name="get_current_weather",
        description="Get current weather (today's forecast)",
        parameters_model=CurrentWeatherParams,
        handler=handler,
    )
