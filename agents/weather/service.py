# agents/weather/service.py
"""
Weather service - current conditions and 24h rainfall from OpenWeather
"""
import requests
from typing import Any, Dict, List, Optional
import logging

from agents.weather.models import WeatherObservation
from core.config import get_settings
from core.exceptions import WeatherDataError

logger = logging.getLogger(__name__)

class WeatherService:
    """Fetches a WeatherObservation for a coordinate pair"""

    DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"

    def __init__(self, config: Dict[str, Any], api_key: Optional[str] = None):
        self.config = config
        self.api_key = api_key if api_key is not None else get_settings().openweather_api_key
        self.base_url = config.get("base_url", self.DEFAULT_BASE_URL).rstrip("/")
        self.forecast_slots = int(config.get("forecast_slots", 8))
        self.timeout = config.get("request_timeout", 20)

    def _safe_num(self, v, default: float = 0.0) -> float:
        try:
            return float(v)
        except (TypeError, ValueError):
            return default

    def _get_json(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            resp = requests.get(f"{self.base_url}/{endpoint}", params=params, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as e:
            logger.error(f"OpenWeather {endpoint} request failed: {e}")
            raise WeatherDataError(f"Weather data fetch failed: {e}") from e
        except ValueError as e:
            logger.error(f"OpenWeather {endpoint} returned invalid JSON: {e}")
            raise WeatherDataError("Weather service returned an unreadable response") from e

    def forecast_rainfall(self, forecast: Dict[str, Any]) -> float:
        """Sum the 3-hourly rain volumes over the forecast slots"""
        items: List[Dict[str, Any]] = forecast.get("list") or []
        rainfall = 0.0
        for item in items:
            rain = item.get("rain") or {}
            rainfall += self._safe_num(rain.get("3h"))
        return round(rainfall, 2)

    def fetch_observation(self, lat: float, lon: float) -> WeatherObservation:
        """Current weather plus forecast rainfall for the next slots"""
        if not self.api_key:
            raise WeatherDataError("OPENWEATHER_API_KEY not configured")

        params = {
            "lat": lat,
            "lon": lon,
            "appid": self.api_key,
            "units": "metric",
        }
        current = self._get_json("weather", params)
        forecast = self._get_json("forecast", {**params, "cnt": self.forecast_slots})

        try:
            main = current["main"]
            conditions = (current.get("weather") or [{}])[0]
            observation = WeatherObservation(
                temperature=float(main["temp"]),
                humidity=float(main["humidity"]),
                rainfall=self.forecast_rainfall(forecast),
                wind_speed=self._safe_num((current.get("wind") or {}).get("speed")),
                condition=conditions.get("main", ""),
                description=conditions.get("description", ""),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected OpenWeather payload: {e}")
            raise WeatherDataError(f"Incomplete weather data: {e}") from e

        logger.info(f"Weather fetched for lat={lat}, lon={lon}: {observation.temperature}°C, "
                    f"{observation.humidity}% RH, {observation.rainfall}mm rain")
        return observation
