# agents/crop_health/models.py
"""
Pydantic models for crop health analysis agent
"""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import List, Optional, Dict, Any, Literal, Union
from datetime import date as dt_date, datetime

from agents.weather.models import WeatherObservation

class WeatherSuitability(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["ideal", "favorable", "moderate", "unfavorable", "critical"]
    score: float = Field(..., ge=0, le=100)
    message: str

class DiseaseRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["low", "moderate", "high", "critical"]
    score: float = Field(..., ge=0, le=100)
    factors: List[str]
    recommendation: str

class WaterStress(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["none", "low", "moderate", "high", "severe"]
    indicator: str
    action: str

class PestRisk(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: Literal["low", "moderate", "high"]
    pests: List[str]
    prevention: str

class GrowthStage(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: str
    days_from_planting: int = Field(..., ge=0)
    next_milestone: str
    days_to_next_milestone: int = Field(..., ge=0)

class HarvestReadiness(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_ready: bool
    days_to_harvest: int = Field(..., ge=0)
    estimated_date: dt_date

class HealthAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["warning", "danger", "info"]
    message: str

OverallStatus = Literal["excellent", "good", "moderate", "poor", "critical"]

class CropHealthAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_status: OverallStatus
    weather_suitability: WeatherSuitability
    disease_risk: DiseaseRisk
    water_stress: WaterStress
    pest_risk: PestRisk
    growth_stage: GrowthStage
    harvest_readiness: HarvestReadiness
    recommendations: List[str] = Field(..., min_length=1)
    alerts: List[HealthAlert] = Field(default_factory=list)

class CropHealthRequest(BaseModel):
    crop_name: str = Field(..., min_length=1, description="Crop name (e.g., rice, wheat, tomato)")
    planted_date: Optional[Union[datetime, dt_date]] = Field(None, description="Date or timestamp the crop was planted")
    lat: Optional[float] = Field(None, ge=-90, le=90, description="Latitude of the field")
    lon: Optional[float] = Field(None, ge=-180, le=180, description="Longitude of the field")
    observation: Optional[WeatherObservation] = Field(None, description="Weather supplied by the caller")

    @model_validator(mode="after")
    def _require_weather_source(self) -> "CropHealthRequest":
        if self.observation is None and (self.lat is None or self.lon is None):
            raise ValueError("provide either observation or both lat and lon")
        return self

class CropHealthResult(BaseModel):
    crop_name: str
    profile_used: str
    weather: WeatherObservation
    analysis: CropHealthAnalysis
    farm_status: Literal["healthy", "monitoring", "diseased"]

class CropHealthResponse(BaseModel):
    success: bool
    data: Optional[CropHealthResult] = None
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
