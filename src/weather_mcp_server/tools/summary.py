"""Narrative weather summary over a fixed five-day window."""

from __future__ import annotations

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
)
from weather_mcp_server.tools.common import load_forecast

SUMMARY_DAYS = 5
COLD_THRESHOLD_C = 10
WARM_THRESHOLD_C = 25


class WeatherSummaryParams(ToolParameters):
    """Parameters for get_weather_summary."""


def group_conditions(forecast: list[ForecastItem]) -> list[tuple[str, int]]:
    """Count days per condition, most frequent first.

    Equal counts keep the order in which conditions first appear.
    """
    counts: dict[str, int] = {}
    for item in forecast:
        counts[item.conditions] = counts.get(item.conditions, 0) + 1
    return sorted(counts.items(), key=lambda entry: -entry[1])


def temperature_trend(temperatures: list[int]) -> str:
    """Compare the mean of the first half against the second half.

    The split point is ``len // 2``; an odd middle day belongs to the second
    half.
    """
    split = len(temperatures) // 2
    first, second = temperatures[:split], temperatures[split:]
    if not first or not second:
        return "stable"
    first_mean = sum(first) / len(first)
    second_mean = sum(second) / len(second)
    if second_mean > first_mean:
        return "warming"
    if second_mean < first_mean:
        return "cooling"
    return "stable"


def recommendation(mean_celsius: float) -> str:
    """Advice for the average temperature."""
    if mean_celsius < COLD_THRESHOLD_C:
        return "Bundle up! Cold weather expected. ❄️"
    if mean_celsius > WARM_THRESHOLD_C:
        return "Stay hydrated! Warm weather ahead. ☀️"
    return "Comfortable temperatures expected. Enjoy the weather! 🌤️"


def format_weather_summary(forecast: list[ForecastItem]) -> str:
    """Render the summary for a non-empty forecast."""
    temperatures = [item.temperature_c for item in forecast]
    mean = sum(temperatures) / len(temperatures)
    conditions = group_conditions(forecast)
    dominant, dominant_days = conditions[0]

    message = (
        "**Weather Summary**\n\n"
        f"The forecast shows {temperature_trend(temperatures)} temperatures over "
        f"the next {len(forecast)} days, with an average of {mean:.1f}°C "
        f"({celsius_to_fahrenheit(mean):.1f}°F).\n\n"
        f"**Conditions**: {dominant} weather will be most common "
        f"({dominant_days} days), "
    )
    if len(conditions) > 1:
        others = ", ".join(f"{label} ({days} days)" for label, days in conditions[1:])
        message += f"followed by {others}.\n\n"
    else:
        message += "with consistent conditions throughout.\n\n"
    return message + f"**Recommendations**: {recommendation(mean)}"


def get_weather_summary_tool(provider: ForecastProvider) -> ToolDefinition:
    """Create the get_weather_summary tool."""

    async def handler(_: WeatherSummaryParams) -> ToolOutcome:
        forecast = await load_forecast(provider, SUMMARY_DAYS)
        if isinstance(forecast, ToolFailure):
            return forecast
        if not forecast:
            return ToolFailure(kind="empty", message="No forecast data available")
        return ToolSuccess(format_weather_summary(forecast))

    return ToolDefinition(
        name="get_weather_summary",
        description=(
            "Get a text summary of the weather forecast including trends and "
            "notable conditions"
        ),
        parameters_model=WeatherSummaryParams,
        handler=handler,
    )
