# agents/soil/__init__.py
"""
Soil health advisor package
"""

from .agent import SoilHealthAgent
from .models import SoilAnalysisRequest, SoilAnalysisResponse
from .service import get_soil_health_status

__all__ = ["SoilHealthAgent", "SoilAnalysisRequest", "SoilAnalysisResponse", "get_soil_health_status"]
