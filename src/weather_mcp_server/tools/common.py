"""Shared helpers for weather tools."""

from __future__ import annotations

import datetime as dt
from typing import Annotated

from pydantic import BeforeValidator

from weather_mcp.tools import ToolFailure
from weather_mcp_server.forecast import (
    ForecastItem,
    ForecastProvider,
    ForecastProviderError,
)

DEFAULT_DAYS = 5
MIN_DAYS = 1
MAX_DAYS = 10

DEFAULT_EMOJI = "🌡️"
WEATHER_EMOJI = {
    "freezing": "🥶",
    "bracing": "❄️",
    "chilly": "🌨️",
    "cool": "🌤️",
    "mild": "⛅",
    "warm": "☀️",
    "balmy": "🌞",
    "hot": "🔥",
    "sweltering": "🌡️",
    "scorching": "☄️",
}


def coerce_int(value: object, default: int) -> int:
    """Extract an integer from a loosely-typed argument.

    Native integers are used as-is, integral floats are truncated, strings are
    parsed after trimming whitespace. Anything else yields ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def clamp_days(value: object) -> int:
    """Coerce a ``days`` argument and clamp it to the supported window."""
    return max(MIN_DAYS, min(MAX_DAYS, coerce_int(value, DEFAULT_DAYS)))


ForecastDays = Annotated[int, BeforeValidator(clamp_days)]


def weather_emoji(summary: str | None) -> str:
    """Map a condition label to an emoji."""
    return WEATHER_EMOJI.get((summary or "").lower(), DEFAULT_EMOJI)


def format_day(day: dt.date) -> str:
    """Format a date as e.g. ``Monday, Jan 5``."""
    return f"{day:%A, %b} {day.day}"


async def load_forecast(
    provider: ForecastProvider, days: int
) -> list[ForecastItem] | ToolFailure:
    """Fetch a forecast, turning provider errors into a :class:`ToolFailure`."""
    try:
        return await provider.generate_forecast(days)
    except ForecastProviderError as exc:
        return ToolFailure(kind="provider", message=str(exc))
