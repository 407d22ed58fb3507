# agents/soil/agent.py
"""
Soil health advisor agent
"""

import asyncio
from typing import Type
from datetime import datetime

from agents.base import BaseAgent
from agents.soil.models import SoilAnalysisRequest, SoilAnalysisResponse, SoilAnalysisResult
from agents.soil.service import SoilHealthService, fallback_analysis, get_soil_health_status
from core.exceptions import AgentError, AdvisorError

class SoilHealthAgent(BaseAgent[SoilAnalysisRequest, SoilAnalysisResponse]):
    """
    Soil health advisor

    Features:
    - Deterministic soil status from pH and N/P/K
    - AI crop suggestions and soil improvement plan
    - Disease history aware recommendations
    """

    def __init__(self):
        super().__init__("soil")
        self.service = SoilHealthService(config=self.config)
        self.logger.info("Soil health agent initialized")

    def _validate_config(self) -> None:
        """Validate soil agent configuration"""
        if not self.settings.gemini_api_key:
            self.logger.warning("GEMINI_API_KEY not found - soil analysis will use fallback responses")

        for key in ["model", "temperature", "default_language"]:
            if key not in self.config:
                self.logger.debug(f"Optional config {key} not set, using defaults")

    def _get_response_class(self) -> Type[SoilAnalysisResponse]:
        return SoilAnalysisResponse

    async def process_request(self, request: SoilAnalysisRequest) -> SoilAnalysisResponse:
        soil = request.soil_test
        status = get_soil_health_status(soil.ph, soil.nitrogen, soil.phosphorus, soil.potassium)
        self.logger.info(f"Processing soil analysis (pH {soil.ph}, status {status})")

        try:
            analysis = await asyncio.get_running_loop().run_in_executor(
                None,
                self.service.analyze,
                soil,
                request.disease_history,
                request.language
            )
        except AdvisorError:
            raise
        except Exception as e:
            self.logger.error(f"Error processing soil analysis request: {e}")
            raise AgentError(f"Failed to process soil analysis request: {e}")

        return SoilAnalysisResponse(
            success=True,
            data=SoilAnalysisResult(status=status, analysis=analysis),
            message=f"Soil health is {analysis.overall_health}. {len(analysis.recommendations)} crop suggestion(s).",
            timestamp=datetime.now().isoformat(),
            metadata={
                "analysis_method": "google_generative_ai",
                "language": request.language,
                "disease_history_entries": len(request.disease_history)
            }
        )

    def get_fallback_response(self, request: SoilAnalysisRequest, error: Exception) -> SoilAnalysisResponse:
        """Deterministic status with a generic analysis when the advisor is unavailable"""
        soil = request.soil_test
        status = get_soil_health_status(soil.ph, soil.nitrogen, soil.phosphorus, soil.potassium)
        return SoilAnalysisResponse(
            success=False,
            data=SoilAnalysisResult(status=status, analysis=fallback_analysis(status)),
            message=f"Soil analysis failed: {str(error)}. Basic status provided.",
            timestamp=datetime.now().isoformat(),
            metadata={"fallback": True, "error": str(error), "error_type": type(error).__name__}
        )
