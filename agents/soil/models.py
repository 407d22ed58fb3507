# agents/soil/models.py
"""
Pydantic models for soil health advisor
"""
from pydantic import BaseModel, Field
from typing import List, Optional, Dict, Any, Literal

from agents.weather.models import DiseaseHistoryEntry

SoilHealth = Literal["excellent", "good", "fair", "poor"]

class SoilTest(BaseModel):
    ph: float = Field(..., ge=0, le=14, description="Soil pH")
    nitrogen: Optional[float] = Field(None, ge=0, description="Available nitrogen (kg/ha)")
    phosphorus: Optional[float] = Field(None, ge=0, description="Available phosphorus (kg/ha)")
    potassium: Optional[float] = Field(None, ge=0, description="Available potassium (kg/ha)")
    organic_matter: Optional[float] = Field(None, ge=0, description="Organic matter (%)")
    moisture: Optional[float] = Field(None, ge=0, description="Moisture (%)")
    texture: Optional[str] = Field(None, description="Soil texture, e.g. loam, clay")

class CropRecommendation(BaseModel):
    crop: str
    suitability: Literal["excellent", "good", "moderate", "poor"]
    reason: str
    expected_yield: Optional[str] = None
    planting_season: Optional[str] = None

class SoilImprovementSuggestion(BaseModel):
    action: str
    priority: Literal["high", "medium", "low"]
    description: str
    materials: List[str] = Field(default_factory=list)
    cost: Optional[float] = None
    timeline: Optional[str] = None

class SoilHealthAnalysis(BaseModel):
    overall_health: SoilHealth
    recommendations: List[CropRecommendation] = Field(default_factory=list)
    improvements: List[SoilImprovementSuggestion] = Field(default_factory=list)
    summary: str

class SoilAnalysisRequest(BaseModel):
    soil_test: SoilTest
    disease_history: List[DiseaseHistoryEntry] = Field(default_factory=list)
    language: str = Field("hi", description="Language for AI advice (hi, bn, en)")

class SoilAnalysisResult(BaseModel):
    status: SoilHealth
    analysis: SoilHealthAnalysis

class SoilAnalysisResponse(BaseModel):
    success: bool
    data: Optional[SoilAnalysisResult] = None
    message: str
    timestamp: str
    metadata: Optional[Dict[str, Any]] = None
