# api/v1/endpoints/soil.py
from fastapi import APIRouter, HTTPException

from agents.base import agent_registry
from agents.soil.models import SoilAnalysisRequest, SoilTest
from agents.soil.service import get_soil_health_status

router = APIRouter()

@router.post("/status")
async def get_soil_status(soil_test: SoilTest):
    """Soil health status from pH and N/P/K levels"""
    try:
        status = get_soil_health_status(
            soil_test.ph,
            soil_test.nitrogen,
            soil_test.phosphorus,
            soil_test.potassium
        )
        return {"success": True, "status": status, "soil_test": soil_test}

    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error computing soil status: {str(e)}")

@router.post("/analyze")
async def analyze_soil(request: SoilAnalysisRequest):
    """
    AI soil analysis with crop suggestions and improvement plan

    Falls back to the threshold-based status when the advisor is unavailable.
    """
    try:
        soil_agent = agent_registry.get("soil")
        if not soil_agent:
            raise HTTPException(status_code=500, detail="Soil agent not available")

        return await soil_agent.execute(request)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error analyzing soil: {str(e)}")

@router.get("/health")
async def soil_agent_health():
    """Check soil agent health"""
    try:
        soil_agent = agent_registry.get("soil")
        if not soil_agent:
            raise HTTPException(status_code=500, detail="Soil agent not available")
        return await soil_agent.health_check()

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check failed: {str(e)}")
