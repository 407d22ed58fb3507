# agents/weather/models.py
"""
Pydantic models for weather observations and alerts
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Dict, Any, Literal

AlertType = Literal["rain", "storm", "extreme_temp", "high_humidity", "drought"]
Severity = Literal["low", "moderate", "high", "critical"]

SEVERITY_RANK: Dict[str, int] = {
    "low": 1,
    "moderate": 2,
    "high": 3,
    "critical": 4,
}

class WeatherObservation(BaseModel):
    """A single weather snapshot. Values are taken as reported, not range-checked."""
    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., description="Air temperature (°C)")
    humidity: float = Field(..., description="Relative humidity (%)")
    rainfall: float = Field(0.0, description="Rainfall accumulated over the forecast horizon (mm)")
    wind_speed: float = Field(0.0, description="Wind speed (m/s)")
    condition: str = Field("", description="Coarse condition label, e.g. Rain, Clear")
    description: str = Field("", description="Human-readable description")

class WeatherAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AlertType
    severity: Severity
    message: str
    crop_impact: str

class CropHazard(BaseModel):
    model_config = ConfigDict(frozen=True)

    crop: str
    hazard: str
    impact: str

class PredictiveAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["rain", "storm", "extreme_temp", "high_humidity", "drought", "disease_risk"]
    severity: Severity
    message: str
    crop_impact: str = ""
    predicted_risk: Severity
    time_window: str = "next 24 hours"
    recommended_actions: List[str] = Field(default_factory=list)
    confidence: float = Field(0.5, ge=0, le=1)

class DiseaseHistoryEntry(BaseModel):
    crop: str
    disease: Optional[str] = None
    severity: Optional[str] = None
    observed_on: Optional[str] = None

class WeatherRequest(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude of the location")
    lon: float = Field(..., ge=-180, le=180, description="Longitude of the location")

class WeatherAlertsRequest(BaseModel):
    lat: Optional[float] = Field(None, ge=-90, le=90, description="Latitude of the location")
    lon: Optional[float] = Field(None, ge=-180, le=180, description="Longitude of the location")
    observation: Optional[WeatherObservation] = Field(None, description="Weather supplied by the caller")
    crops: List[str] = Field(default_factory=list, description="Crops being grown")
    disease_history: List[DiseaseHistoryEntry] = Field(default_factory=list)
    language: str = Field("hi", description="Language for AI advice (hi, bn, en)")
    include_predictions: bool = Field(False, description="Ask the AI advisor for predictive alerts")

    @model_validator(mode="after")
    def _require_weather_source(self) -> "WeatherAlertsRequest":
        if self.observation is None and (self.lat is None or self.lon is None):
            raise ValueError("provide either observation or both lat and lon")
        return self

class WeatherReport(BaseModel):
    observation: WeatherObservation
    alerts: List[WeatherAlert]
    should_notify: bool
    hazards: List[CropHazard] = Field(default_factory=list)
    predictive_alerts: List[PredictiveAlert] = Field(default_factory=list)

class WeatherResponse(BaseModel):
    success: bool
    data: Optional[WeatherReport] = None
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
