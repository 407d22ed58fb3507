# api/v1/endpoints/crop_health.py
from fastapi import APIRouter, HTTPException

from agents.base import agent_registry
from agents.crop_health.models import CropHealthRequest

router = APIRouter()

def _get_agent():
    crop_health_agent = agent_registry.get("crop_health")
    if not crop_health_agent:
        raise HTTPException(status_code=500, detail="Crop health agent not available")
    return crop_health_agent

@router.post("/check")
async def check_crop_health(request: CropHealthRequest):
    """
    Analyze crop health for a planted crop

    Scores weather suitability and disease risk against the crop's profile,
    classifies water stress and pest risk, and works out growth stage and
    harvest readiness from the planting date.
    """
    try:
        crop_health_agent = _get_agent()

        if not request.crop_name.strip():
            raise HTTPException(status_code=400, detail="crop_name must not be blank")

        response = await crop_health_agent.execute(request)

        if not response.success and (response.metadata or {}).get("error_type") == "WeatherDataError":
            raise HTTPException(status_code=502, detail=response.message)

        return response

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error processing crop health request: {str(e)}")

@router.get("/crops")
async def get_supported_crops():
    """Get crops with dedicated health profiles"""
    try:
        crops = await _get_agent().get_supported_crops()
        return {
            "success": True,
            "crops": crops,
            "note": "Other crops are analyzed with a generic profile"
        }

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error getting supported crops: {str(e)}")

@router.get("/crops/{crop_name}")
async def get_crop_profile(crop_name: str):
    """Get the profile used for a crop"""
    try:
        profile = await _get_agent().get_crop_profile(crop_name)
        return {"success": True, **profile}

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error getting crop profile: {str(e)}")

@router.get("/health")
async def crop_health_agent_health():
    """Check crop health agent health"""
    try:
        return await _get_agent().health_check()

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check failed: {str(e)}")
