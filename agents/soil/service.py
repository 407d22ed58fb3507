# agents/soil/service.py
"""
Soil health service - threshold status plus Google Generative AI recommendations
"""
import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from agents.soil.models import SoilHealthAnalysis, SoilTest
from agents.weather.models import DiseaseHistoryEntry
from core.exceptions import AdvisorError
from core.llm import build_chat_model, extract_json_object, language_name

logger = logging.getLogger(__name__)

def get_soil_health_status(
    ph: float,
    nitrogen: Optional[float] = None,
    phosphorus: Optional[float] = None,
    potassium: Optional[float] = None
) -> str:
    """Classify soil from pH (optimal 6.0-7.5) and N/P/K sufficiency"""
    if 6.0 <= ph <= 7.5:
        score = 3
    elif 5.5 <= ph < 6.0 or 7.5 < ph <= 8.0:
        score = 2
    else:
        score = 1

    if nitrogen and nitrogen >= 250:
        score += 1
    if phosphorus and phosphorus >= 25:
        score += 1
    if potassium and potassium >= 150:
        score += 1

    if score >= 5:
        return "excellent"
    if score >= 4:
        return "good"
    if score >= 2:
        return "fair"
    return "poor"

def fallback_analysis(status: str = "fair") -> SoilHealthAnalysis:
    return SoilHealthAnalysis(
        overall_health=status,
        recommendations=[],
        improvements=[],
        summary="Unable to analyze soil health. Please consult a local agricultural expert.",
    )

class SoilHealthService:
    """Service for soil analysis using Google Generative AI"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.llm = build_chat_model(
            model=config.get("model", "gemini-2.5-flash"),
            temperature=config.get("temperature", 0.3)
        )
        if self.llm:
            logger.info("Soil health service initialized with Google Generative AI")

    def _get_system_prompt(self) -> str:
        return ("You are an expert agricultural soil scientist and agronomist. Consider soil pH and nutrient "
                "levels, disease patterns, crop rotation benefits, local farming practices in India and "
                "cost-effective solutions for smallholder farmers.")

    def _prepare_analysis_request(
        self,
        soil_test: SoilTest,
        disease_history: List[DiseaseHistoryEntry],
        language: str
    ) -> str:
        def _value(v, unit=""):
            return f"{v}{unit}" if v is not None else "N/A"

        if disease_history:
            history = "\n".join(
                f"{i + 1}. {d.crop} - {d.disease or 'No disease'} ({d.severity or 'N/A'})"
                for i, d in enumerate(disease_history)
            )
        else:
            history = "No disease history recorded"

        return f"""Analyze the following soil test results and disease history to provide comprehensive recommendations.

Soil Test Results:
- pH: {soil_test.ph}
- Nitrogen: {_value(soil_test.nitrogen, ' kg/ha')}
- Phosphorus: {_value(soil_test.phosphorus, ' kg/ha')}
- Potassium: {_value(soil_test.potassium, ' kg/ha')}
- Organic Matter: {_value(soil_test.organic_matter, '%')}
- Moisture: {_value(soil_test.moisture, '%')}
- Texture: {soil_test.texture or 'N/A'}

Disease History (last 6 months):
{history}

Provide your analysis in {language_name(language)} in the following JSON format:
{{
  "overall_health": "excellent|good|fair|poor",
  "recommendations": [
    {{
      "crop": "crop name",
      "suitability": "excellent|good|moderate|poor",
      "reason": "why this crop is suitable",
      "expected_yield": "expected yield range",
      "planting_season": "best season to plant"
    }}
  ],
  "improvements": [
    {{
      "action": "what to do",
      "priority": "high|medium|low",
      "description": "detailed description",
      "materials": ["material1", "material2"],
      "cost": 0,
      "timeline": "how long it takes"
    }}
  ],
  "summary": "overall summary of soil health and recommendations"
}}"""

    def analyze(
        self,
        soil_test: SoilTest,
        disease_history: Optional[List[DiseaseHistoryEntry]] = None,
        language: str = "hi"
    ) -> SoilHealthAnalysis:
        """AI soil analysis; raises AdvisorError when the advisor cannot answer"""
        if not self.llm:
            raise AdvisorError("GEMINI_API_KEY not configured - cannot perform soil analysis")

        messages = [
            SystemMessage(content=self._get_system_prompt()),
            HumanMessage(content=self._prepare_analysis_request(soil_test, disease_history or [], language)),
        ]

        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            logger.error(f"Soil analysis request failed: {e}")
            raise AdvisorError(f"Soil analysis failed: {str(e)}") from e

        parsed = extract_json_object(str(response.content))
        if parsed is None:
            logger.warning("AI soil response had no JSON object, using fallback analysis")
            return fallback_analysis()

        try:
            return SoilHealthAnalysis(**parsed)
        except (TypeError, ValidationError) as e:
            logger.error(f"Failed to convert AI response to structured format: {e}")
            raise AdvisorError(f"Failed to process AI response: {str(e)}") from e
