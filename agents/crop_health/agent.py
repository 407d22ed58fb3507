# agents/crop_health/agent.py
"""
Crop health check agent - weather-driven health analysis for a farmer's crop
"""

import asyncio
from typing import Dict, Any, List, Optional, Type
from datetime import datetime

from agents.base import BaseAgent
from agents.crop_health.models import CropHealthRequest, CropHealthResponse, CropHealthResult
from agents.crop_health.profiles import CROP_PROFILES, DEFAULT_PROFILE, get_crop_profile, is_known_crop, normalize_crop_name
from agents.crop_health.service import CropHealthService, farm_crop_status
from agents.weather.models import WeatherObservation
from agents.weather.service import WeatherService
from core.clock import Clock
from core.exceptions import AgentConfigError, AgentError, WeatherDataError

class CropHealthAgent(BaseAgent[CropHealthRequest, CropHealthResponse]):
    """
    Crop health check agent

    Features:
    - Weather suitability score against crop-specific optimal bands
    - Disease risk from per-crop humidity/temperature triggers
    - Water stress and pest risk classification
    - Growth stage and harvest readiness from the planting date
    - Ordered recommendations and alerts
    """

    # Results depend on today's date, so responses are never cached
    cacheable = False

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__("crop_health")
        self.service = CropHealthService(config=self.config, clock=clock)
        self.weather_service = WeatherService(config=self.settings.get_agent_config("weather"))
        self.logger.info("Crop health agent initialized")

    def _validate_config(self) -> None:
        """Validate crop health agent configuration"""
        ratio = self.config.get("harvest_ready_ratio", 0.9)
        if not 0 < ratio <= 1:
            raise AgentConfigError(f"harvest_ready_ratio must be in (0, 1], got {ratio}")

        if "harvest_approaching_days" not in self.config:
            self.logger.debug("Optional config harvest_approaching_days not set, using defaults")

    def _get_response_class(self) -> Type[CropHealthResponse]:
        return CropHealthResponse

    async def _get_observation(self, request: CropHealthRequest) -> WeatherObservation:
        if request.observation is not None:
            return request.observation
        return await asyncio.get_running_loop().run_in_executor(
            None,
            self.weather_service.fetch_observation,
            request.lat,
            request.lon
        )

    async def process_request(self, request: CropHealthRequest) -> CropHealthResponse:
        """Process crop health check request"""

        self.logger.info(f"Processing crop health check for crop: {request.crop_name}")

        try:
            observation = await self._get_observation(request)
            analysis = self.service.analyze(request.crop_name, request.planted_date, observation)

            known = is_known_crop(request.crop_name)
            result = CropHealthResult(
                crop_name=request.crop_name,
                profile_used=normalize_crop_name(request.crop_name) if known else "default",
                weather=observation,
                analysis=analysis,
                farm_status=farm_crop_status(analysis.overall_status)
            )

            response = CropHealthResponse(
                success=True,
                data=result,
                message=self._generate_response_message(request.crop_name, result),
                timestamp=datetime.now().isoformat(),
                metadata={
                    "weather_source": "request" if request.observation is not None else "openweather",
                    "known_crop": known,
                    "has_planted_date": request.planted_date is not None,
                    "alerts": len(analysis.alerts)
                }
            )

            self.logger.info(f"Crop health analysis completed. Overall: {analysis.overall_status}, "
                             f"disease risk: {analysis.disease_risk.level}")
            return response

        except WeatherDataError:
            raise
        except Exception as e:
            self.logger.error(f"Error processing crop health request: {e}")
            raise AgentError(f"Failed to process crop health request: {e}")

    def _generate_response_message(self, crop_name: str, result: CropHealthResult) -> str:
        analysis = result.analysis
        stage = analysis.growth_stage
        return (f"{crop_name.strip().title()} health is {analysis.overall_status} "
                f"({stage.stage} stage, day {stage.days_from_planting}). "
                f"Disease risk: {analysis.disease_risk.level}. Water stress: {analysis.water_stress.level}.")

    def get_fallback_response(self, request: CropHealthRequest, error: Exception) -> CropHealthResponse:
        """Get fallback response when agent fails"""
        if isinstance(error, WeatherDataError):
            message = "Failed to fetch weather data. Please try again."
        else:
            message = f"Crop health analysis failed: {str(error)}"

        return CropHealthResponse(
            success=False,
            data=None,
            message=message,
            timestamp=datetime.now().isoformat(),
            metadata={"fallback": True, "error": str(error), "error_type": type(error).__name__}
        )

    async def get_supported_crops(self) -> List[Dict[str, Any]]:
        """Get crops with dedicated profiles"""
        return [
            {
                "name": name,
                "growth_days": profile.growth_days,
                "optimal_temp": profile.optimal_temp.model_dump(),
                "optimal_humidity": profile.optimal_humidity.model_dump(),
                "stages": [stage.name for stage in profile.stages]
            }
            for name, profile in CROP_PROFILES.items()
        ]

    async def get_crop_profile(self, crop_name: str) -> Dict[str, Any]:
        """Resolved profile for a crop name, default profile included"""
        profile = get_crop_profile(crop_name)
        return {
            "crop": crop_name,
            "profile": normalize_crop_name(crop_name) if profile is not DEFAULT_PROFILE else "default",
            "parameters": profile.model_dump()
        }
