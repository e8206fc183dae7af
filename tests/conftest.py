"""Shared test fixtures."""

from __future__ import annotations

import datetime as dt
import random
from collections.abc import Callable, Sequence

import pytest

from weather_mcp.server import MCPServer
from weather_mcp_server.config import build_server
from weather_mcp_server.forecast import (
    ForecastItem,
    ForecastProviderError,
    SyntheticForecastProvider,
)

TODAY = dt.date(2024, 1, 1)


class StaticForecastProvider:
    """Provider returning a fixed forecast and recording requested lengths."""

    def __init__(
        self,
        temperatures: Sequence[int],
        summaries: Sequence[str | None] | None = None,
    ) -> None:
        labels = summaries or ["Mild"] * len(temperatures)
        self.items = [
            ForecastItem(
                date=TODAY + dt.timedelta(days=offset),
                temperature_c=temperature,
                summary=label,
            )
            for offset, (temperature, label) in enumerate(
                zip(temperatures, labels), start=1
            )
        ]
        self.requested: list[int] = []

    async def generate_forecast(self, days: int) -> list[ForecastItem]:
        self.requested.append(days)
        return self.items[:days]


class FailingForecastProvider:
    """Provider whose upstream is always unavailable."""

    async def generate_forecast(self, days: int) -> list[ForecastItem]:
        raise ForecastProviderError("Failed to get weather forecast: boom")


@pytest.fixture()
def static_provider() -> Callable[..., StaticForecastProvider]:
    """Factory for providers with a fixed forecast starting 2024-01-02."""
    return StaticForecastProvider


@pytest.fixture()
def failing_provider() -> FailingForecastProvider:
    """Provider that raises on every request."""
    return FailingForecastProvider()


@pytest.fixture()
def synthetic_provider() -> SyntheticForecastProvider:
    """Seeded synthetic provider anchored on 2024-01-01."""
    return SyntheticForecastProvider(rng=random.Random(1234), today=lambda: TODAY)


@pytest.fixture()
def server(synthetic_provider: SyntheticForecastProvider) -> MCPServer:
    """Dispatcher over the seeded synthetic provider."""
    return build_server(synthetic_provider)
