"""Shared pytest fixtures - pinned clock, offline settings, async API client."""

from collections.abc import AsyncGenerator
from datetime import date, datetime

import pytest
from httpx import ASGITransport, AsyncClient

from agents.base import agent_registry
from agents.weather.models import WeatherObservation
from core.clock import fixed_clock
from core.config import get_settings

NOW = datetime(2026, 10, 19, 9, 0)


class FakeMessage:
    def __init__(self, content: str) -> None:
        self.content = content


class FakeChatModel:
    """Stands in for ChatGoogleGenerativeAI; records prompts and replays a canned reply."""

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list = []

    def invoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return FakeMessage(self.reply)


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch: pytest.MonkeyPatch):
    """No test talks to OpenWeather or Gemini."""
    settings = get_settings()
    monkeypatch.setattr(settings, "openweather_api_key", None)
    monkeypatch.setattr(settings, "gemini_api_key", None)
    return settings


@pytest.fixture
def clock():
    return fixed_clock(NOW)


@pytest.fixture
def humid_warm_weather() -> WeatherObservation:
    return WeatherObservation(temperature=32, humidity=88, rainfall=15, wind_speed=5)


@pytest.fixture
def calm_weather() -> WeatherObservation:
    return WeatherObservation(temperature=22, humidity=55, rainfall=0, wind_speed=2)


@pytest.fixture
def planted_45_days_ago() -> date:
    return date(2026, 9, 4)


@pytest.fixture
async def client(clock) -> AsyncGenerator[AsyncClient, None]:
    from agents.crop_health.agent import CropHealthAgent
    from agents.soil.agent import SoilHealthAgent
    from agents.weather.agent import WeatherAgent
    from api.app import create_app

    for agent in (WeatherAgent(), CropHealthAgent(clock=clock), SoilHealthAgent()):
        agent_registry.register(agent)

    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client

    agent_registry.clear()
