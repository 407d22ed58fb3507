# agents/crop_health/__init__.py
"""
Crop health analysis agent package
"""

from .agent import CropHealthAgent
from .models import CropHealthAnalysis, CropHealthRequest, CropHealthResponse
from .service import analyze_crop_health

__all__ = ["CropHealthAgent", "CropHealthAnalysis", "CropHealthRequest", "CropHealthResponse", "analyze_crop_health"]
