"""Temperature statistics over a forecast window."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field

from weather_mcp.tools import (
    ToolDefinition,
    ToolFailure,
    ToolOutcome,
    ToolParameters,
    ToolSuccess,
)
from weather_mcp_server.forecast import (
    ForecastItem,
    ForecastProvider,
    celsius_to_fahrenheit,
    whole_fahrenheit,
)
from weather_mcp_server.tools.common import (
    DEFAULT_DAYS,
    ForecastDays,
    format_day,
    load_forecast,
)


class TemperatureStatsParams(ToolParameters):
    """Parameters for get_temperature_stats."""

    days: ForecastDays = Field(
        DEFAULT_DAYS, description="Number of days to analyze (1-10)"
    )


@dataclass(frozen=True)
class TemperatureStats:
    """Aggregate Celsius statistics for a non-empty forecast."""

    minimum: int
    maximum: int
    mean: float
    hottest: ForecastItem
    coldest: ForecastItem
    days: int


def compute_temperature_stats(forecast: list[ForecastItem]) -> TemperatureStats:
    """Compute min, max, mean and the extreme days.

    Ties for hottest and coldest resolve to the earliest day.

    Raises:
        ValueError: If ``forecast`` is empty.

    """
    if not forecast:
        raise ValueError("Cannot compute statistics for an empty forecast")
    temperatures = [item.temperature_c for item in forecast]
    return TemperatureStats(
        minimum=min(temperatures),
        maximum=max(temperatures),
        mean=sum(temperatures) / len(temperatures),
        hottest=max(forecast, key=lambda item: item.temperature_c),
        coldest=min(forecast, key=lambda item: item.temperature_c),
        days=len(forecast),
    )


def _notable(item: ForecastItem) -> str:
    return f"{format_day(item.date)} - {item.temperature_c}°C ({item.conditions})"


def format_temperature_stats(stats: TemperatureStats) -> str:
    """Render the statistics report."""
    return (
        f"Temperature Statistics ({stats.days} days):\n\n"
        "🌡️ **Temperature Range**\n"
        f"  • Minimum: {stats.minimum}°C ({whole_fahrenheit(stats.minimum)}°F)\n"
        f"  • Maximum: {stats.maximum}°C ({whole_fahrenheit(stats.maximum)}°F)\n"
        f"  • Average: {stats.mean:.1f}°C "
        f"({celsius_to_fahrenheit(stats.mean):.1f}°F)\n\n"
        "📅 **Notable Days**\n"
        f"  • Hottest: {_notable(stats.hottest)}\n"
        f"  • Coldest: {_notable(stats.coldest)}"
    )


def get_temperature_stats_tool(provider: ForecastProvider) -> ToolDefinition:
    """Create the get_temperature_stats tool."""

    async def handler(params: TemperatureStatsParams) -> ToolOutcome:
        forecast = await load_forecast(provider, params.days)
        if isinstance(forecast, ToolFailure):
            return forecast
        if not forecast:
            return ToolFailure(kind="empty", message="No forecast data available")
        return ToolSuccess(format_temperature_stats(compute_temperature_stats(forecast)))

    return ToolDefinition(
        name="get_temperature_stats",
        description=(
            "Get temperature statistics (min, max, average) for a weather forecast"
        ),
        parameters_model=TemperatureStatsParams,
        handler=handler,
    )
