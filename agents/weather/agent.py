# agents/weather/agent.py
"""
Weather agent - current conditions, severity-graded alerts and crop hazards
"""

import asyncio
from typing import Type
from datetime import datetime

from agents.base import BaseAgent
from agents.weather.alerts import generate_alerts, should_send_alert
from agents.weather.hazards import find_crop_hazards
from agents.weather.models import (
    WeatherAlertsRequest, WeatherObservation, WeatherReport, WeatherResponse
)
from agents.weather.predictive import PredictiveAlertService, combine_alerts
from agents.weather.service import WeatherService
from core.exceptions import AgentError, WeatherDataError

class WeatherAgent(BaseAgent[WeatherAlertsRequest, WeatherResponse]):
    """
    Weather alerting agent

    Features:
    - Current weather and 24h rainfall from OpenWeather
    - Rule-based alerts for rain, temperature, humidity, wind and drought
    - Notification decision based on alert severity
    - Crop-specific weather hazards
    - Optional AI predictive alerts merged with the rule-based ones
    """

    def __init__(self):
        super().__init__("weather")
        self.service = WeatherService(config=self.config)
        self.predictor = PredictiveAlertService(config=self.config)
        self.logger.info("Weather agent initialized")

    def _validate_config(self) -> None:
        """Validate weather agent configuration"""
        optional_config = ["base_url", "forecast_slots", "request_timeout", "cache_ttl"]
        missing = [key for key in optional_config if key not in self.config]
        if missing:
            self.logger.debug(f"Weather config {missing} not set, using defaults")

        if not self.settings.openweather_api_key:
            self.logger.warning("OPENWEATHER_API_KEY not found - observations must be supplied by callers")

    def _get_response_class(self) -> Type[WeatherResponse]:
        return WeatherResponse

    async def fetch_observation(self, lat: float, lon: float) -> WeatherObservation:
        """Fetch weather without blocking the event loop"""
        return await asyncio.get_running_loop().run_in_executor(
            None,
            self.service.fetch_observation,
            lat,
            lon
        )

    async def process_request(self, request: WeatherAlertsRequest) -> WeatherResponse:
        """Build alerts for the supplied or fetched observation"""
        try:
            source = "request"
            observation = request.observation
            if observation is None:
                observation = await self.fetch_observation(request.lat, request.lon)
                source = "openweather"

            alerts = generate_alerts(observation)
            hazards = find_crop_hazards(request.crops, observation)

            predictive_alerts = []
            if request.include_predictions:
                predicted = await asyncio.get_running_loop().run_in_executor(
                    None,
                    self.predictor.generate,
                    observation,
                    request.crops,
                    request.disease_history,
                    request.language
                )
                predictive_alerts = combine_alerts(alerts, predicted)

            notify = should_send_alert(alerts)
            report = WeatherReport(
                observation=observation,
                alerts=alerts,
                should_notify=notify,
                hazards=hazards,
                predictive_alerts=predictive_alerts
            )

            if alerts:
                message = f"{len(alerts)} weather alert(s); notification {'recommended' if notify else 'not needed'}"
            else:
                message = "No weather alerts for current conditions"

            self.logger.info(f"Weather alerts generated: {len(alerts)} alerts, {len(hazards)} crop hazards")
            return WeatherResponse(
                success=True,
                data=report,
                message=message,
                timestamp=datetime.now().isoformat(),
                metadata={
                    "weather_source": source,
                    "crops": request.crops,
                    "predictions_requested": request.include_predictions
                }
            )

        except WeatherDataError:
            raise
        except Exception as e:
            self.logger.error(f"Error processing weather request: {e}")
            raise AgentError(f"Failed to process weather request: {e}")

    def get_fallback_response(self, request: WeatherAlertsRequest, error: Exception) -> WeatherResponse:
        """Get fallback response when agent fails"""
        return WeatherResponse(
            success=False,
            data=None,
            message=f"Weather alerts unavailable: {str(error)}",
            timestamp=datetime.now().isoformat(),
            metadata={"fallback": True, "error": str(error), "error_type": type(error).__name__}
        )
