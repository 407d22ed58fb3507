import pytest
import requests

from agents.weather.service import WeatherService
from core.exceptions import WeatherDataError

CURRENT = {
    "main": {"temp": 31.4, "humidity": 72},
    "wind": {"speed": 4.2},
    "weather": [{"main": "Clouds", "description": "scattered clouds"}],
}
FORECAST = {"list": [{"rain": {"3h": 1.25}}, {}, {"rain": {"3h": 3.5}}, {"rain": None}]}


class FakeResponse:
    def __init__(self, payload, status_code: int = 200) -> None:
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        return self.payload


def _service() -> WeatherService:
    return WeatherService(config={"base_url": "https://weather.test/data/2.5/"}, api_key="test-key")


def test_fetch_observation(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append((url, params))
        return FakeResponse(CURRENT if url.endswith("/weather") else FORECAST)

    monkeypatch.setattr(requests, "get", fake_get)
    observation = _service().fetch_observation(22.57, 88.36)

    assert observation.temperature == 31.4
    assert observation.humidity == 72
    assert observation.rainfall == 4.75
    assert observation.wind_speed == 4.2
    assert observation.condition == "Clouds"
    assert [url for url, _ in calls] == [
        "https://weather.test/data/2.5/weather",
        "https://weather.test/data/2.5/forecast",
    ]
    assert calls[0][1]["units"] == "metric"
    assert calls[1][1]["cnt"] == 8


def test_missing_api_key() -> None:
    service = WeatherService(config={})
    with pytest.raises(WeatherDataError, match="OPENWEATHER_API_KEY"):
        service.fetch_observation(0, 0)


def test_http_failure_becomes_weather_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, params=None, timeout=None: FakeResponse({}, 401))
    with pytest.raises(WeatherDataError):
        _service().fetch_observation(0, 0)


def test_incomplete_payload_becomes_weather_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(requests, "get", lambda url, params=None, timeout=None: FakeResponse({"list": []}))
    with pytest.raises(WeatherDataError, match="Incomplete"):
        _service().fetch_observation(0, 0)


def test_forecast_rainfall_tolerates_junk() -> None:
    assert _service().forecast_rainfall({"list": [{"rain": {"3h": "n/a"}}, {"rain": {"3h": 2}}]}) == 2.0
    assert _service().forecast_rainfall({}) == 0.0
