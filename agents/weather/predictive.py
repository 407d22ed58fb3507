# agents/weather/predictive.py
"""
Predictive disease-risk alerts from Google Generative AI, merged with rule-based alerts
"""
import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import ValidationError

from agents.weather.models import (
    SEVERITY_RANK, DiseaseHistoryEntry, PredictiveAlert, WeatherAlert, WeatherObservation
)
from core.exceptions import AdvisorError
from core.llm import build_chat_model, extract_json_object, language_name

logger = logging.getLogger(__name__)

DEFAULT_ACTIONS: Dict[str, List[str]] = {
    "rain": [
        "Ensure proper drainage in fields",
        "Monitor for waterlogging",
        "Apply preventive fungicides if humidity is high",
    ],
    "storm": [
        "Secure farm structures",
        "Protect young plants",
        "Harvest mature crops if possible",
    ],
    "extreme_temp": [
        "Increase irrigation frequency",
        "Provide shade for sensitive crops",
        "Monitor for heat stress symptoms",
    ],
    "high_humidity": [
        "Apply preventive fungicides",
        "Improve air circulation",
        "Avoid overhead watering",
    ],
    "drought": [
        "Increase irrigation",
        "Apply mulch to retain moisture",
        "Monitor soil moisture levels",
    ],
}

GENERIC_ACTIONS = ["Monitor crops closely", "Take preventive measures"]

RULE_BASED_CONFIDENCE = 0.7

def default_actions(alert_type: str) -> List[str]:
    return list(DEFAULT_ACTIONS.get(alert_type, GENERIC_ACTIONS))

def combine_alerts(
    basic_alerts: List[WeatherAlert],
    predictive_alerts: List[PredictiveAlert]
) -> List[PredictiveAlert]:
    """
    Merge rule-based and AI alerts into one list, most severe first.

    Rule-based alerts are lifted to predictive form with their severity as the
    predicted risk. An AI alert is dropped when a rule-based one already has the
    same type and message. Ties on severity are broken by confidence.
    """
    combined: List[PredictiveAlert] = [
        PredictiveAlert(
            type=alert.type,
            severity=alert.severity,
            message=alert.message,
            crop_impact=alert.crop_impact,
            predicted_risk=alert.severity,
            time_window="next 24 hours",
            recommended_actions=default_actions(alert.type),
            confidence=RULE_BASED_CONFIDENCE,
        )
        for alert in basic_alerts
    ]

    for predicted in predictive_alerts:
        exists = any(a.type == predicted.type and a.message == predicted.message for a in combined)
        if not exists:
            combined.append(predicted)

    return sorted(combined, key=lambda a: (-SEVERITY_RANK[a.severity], -a.confidence))

class PredictiveAlertService:
    """Asks Gemini for disease risks in the next 3-24 hours"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.llm = build_chat_model(
            model=config.get("model", "gemini-2.5-flash"),
            temperature=config.get("temperature", 0.3)
        )

    def _build_prompt(
        self,
        observation: WeatherObservation,
        crops: List[str],
        disease_history: List[DiseaseHistoryEntry],
        language: str
    ) -> str:
        if disease_history:
            history = "\n".join(
                f"{i + 1}. {d.crop} - {d.disease or 'No disease'} ({d.severity or 'N/A'})"
                + (f" on {d.observed_on}" if d.observed_on else "")
                for i, d in enumerate(disease_history[:10])
            )
        else:
            history = "No disease history"

        return f"""Analyze the following weather data and disease history to predict potential crop disease risks in the next 3-24 hours.

Current Weather:
- Temperature: {observation.temperature}°C
- Humidity: {observation.humidity}%
- Rainfall (next 24h): {observation.rainfall}mm
- Wind Speed: {observation.wind_speed} m/s
- Condition: {observation.condition}

Crops Being Grown: {', '.join(crops) or 'Unknown'}

Recent Disease History (last 3 months):
{history}

Consider:
1. Weather patterns that favor disease development (high humidity + rain = fungal diseases)
2. Temperature extremes that stress crops
3. Historical disease patterns
4. Crop-specific vulnerabilities

Provide your analysis in {language_name(language)} in JSON format:
{{
  "alerts": [
    {{
      "type": "rain|storm|extreme_temp|high_humidity|drought|disease_risk",
      "severity": "low|moderate|high|critical",
      "predicted_risk": "low|moderate|high|critical",
      "message": "clear alert message",
      "crop_impact": "specific impact on crops",
      "time_window": "next 3 hours|next 6 hours|next 12 hours|next 24 hours",
      "recommended_actions": ["action 1", "action 2", "action 3"],
      "confidence": 0.85
    }}
  ]
}}"""

    def _parse_alerts(self, payload: Optional[Dict[str, Any]]) -> List[PredictiveAlert]:
        alerts: List[PredictiveAlert] = []
        for raw in (payload or {}).get("alerts", []):
            try:
                alerts.append(PredictiveAlert(**raw))
            except (TypeError, ValidationError) as e:
                logger.warning(f"Skipping malformed predictive alert: {e}")
        return alerts

    def generate(
        self,
        observation: WeatherObservation,
        crops: List[str],
        disease_history: Optional[List[DiseaseHistoryEntry]] = None,
        language: str = "hi"
    ) -> List[PredictiveAlert]:
        """Predictive alerts, or an empty list when the advisor is unavailable"""
        if not self.llm:
            return []

        messages = [
            SystemMessage(content="You are an expert agricultural meteorologist and plant pathologist. "
                                  "Focus on actionable, time-sensitive predictions that farmers can act upon immediately."),
            HumanMessage(content=self._build_prompt(observation, crops, disease_history or [], language)),
        ]

        try:
            response = self.llm.invoke(messages)
            return self._parse_alerts(extract_json_object(str(response.content)))
        except AdvisorError as e:
            logger.error(f"Predictive alerts unavailable: {e}")
            return []
        except Exception as e:
            logger.error(f"Error generating predictive alerts: {e}")
            return []
