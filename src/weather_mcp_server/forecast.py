"""Forecast data providers.

Two providers satisfy :class:`ForecastProvider`: a synthetic generator producing
random forecasts, and an HTTP client for an upstream weather API.
"""

from __future__ import annotations

import datetime as dt
import logging
import random
from typing import Callable, Protocol, runtime_checkable

import httpx
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)

logger = logging.getLogger(__name__)

SUMMARIES = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)

MIN_TEMPERATURE_C = -20
MAX_TEMPERATURE_C = 55

UNKNOWN_CONDITIONS = "Unknown"


def celsius_to_fahrenheit(celsius: float) -> float:
    """Convert a Celsius value to Fahrenheit."""
    return celsius * 9 / 5 + 32


def whole_fahrenheit(celsius: int) -> int:
    """Convert whole degrees Celsius to whole degrees Fahrenheit."""
    return round(celsius * 9 / 5) + 32


class ForecastItem(BaseModel):
    """Forecast for a single day.

    Upstream members are read in camelCase or PascalCase, and ``summary`` may
    be null.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: dt.date = Field(validation_alias=AliasChoices("date", "Date"))
    temperature_c: int = Field(
        alias="temperatureC",
        validation_alias=AliasChoices(
            "temperature_c", "temperatureC", "TemperatureC"
        ),
    )
    summary: str | None = Field(
        default=None, validation_alias=AliasChoices("summary", "Summary")
    )

    @property
    def conditions(self) -> str:
        """Summary label, or a placeholder when upstream sent none."""
        return self.summary or UNKNOWN_CONDITIONS

    @property
    def temperature_f(self) -> int:
        """Temperature in Fahrenheit, derived from the Celsius value."""
        return whole_fahrenheit(self.temperature_c)


class ForecastProviderError(Exception):
    """Raised when forecast data cannot be obtained."""


@runtime_checkable
class ForecastProvider(Protocol):
    """Source of forecast items."""

    async def generate_forecast(self, days: int) -> list[ForecastItem]: ...


class SyntheticForecastProvider:
    """Generates random forecasts starting tomorrow.

    Args:
        rng: Random source; a fresh :class:`random.Random` when omitted.
        today: Callable returning the reference date, ``datetime.date.today``
            by default.

    """

    def __init__(
        self,
        rng: random.Random | None = None,
        today: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._rng = rng or random.Random()
        self._today = today

    async def generate_forecast(self, days: int) -> list[ForecastItem]:
        """Produce ``days`` independent random forecast items."""
        start = self._today()
        return [
            ForecastItem(
                date=start + dt.timedelta(days=offset),
                temperature_c=self._rng.randrange(MIN_TEMPERATURE_C, MAX_TEMPERATURE_C),
                summary=self._rng.choice(SUMMARIES),
            )
            for offset in range(1, days + 1)
        ]


_FORECAST_LIST = TypeAdapter(list[ForecastItem])


class HttpForecastProvider:
    """Fetches forecasts from an upstream weather API.

    The upstream exposes ``GET /WeatherForecast`` returning a JSON list of
    ``{date, temperatureC, summary}`` objects.
    """

    def __init__(self, base_url: str, *, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        """Upstream base URL."""
        return self._base_url

    async def fetch_forecast(self) -> list[ForecastItem]:
        """Return the full upstream forecast list."""
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            ) as client:
                response = await client.get("/WeatherForecast")
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Weather API request to %s failed: %s", self._base_url, exc)
            raise ForecastProviderError(f"Failed to get weather forecast: {exc}") from exc
        except ValueError as exc:
            raise ForecastProviderError(
                f"Failed to get weather forecast: invalid JSON ({exc})"
            ) from exc

        try:
            return _FORECAST_LIST.validate_python([] if payload is None else payload)
        except ValidationError as exc:
            detail = f"unexpected payload ({exc.error_count()} errors)"
            raise ForecastProviderError(
                f"Failed to get weather forecast: {detail}"
            ) from exc

    async def generate_forecast(self, days: int) -> list[ForecastItem]:
        """Return the first ``days`` upstream forecast items."""
        forecast = await self.fetch_forecast()
        return forecast[:days]
