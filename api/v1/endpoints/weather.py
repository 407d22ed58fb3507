# api/v1/endpoints/weather.py
from fastapi import APIRouter, HTTPException, Query
from typing import List
from pydantic import ValidationError

from agents.base import agent_registry
from agents.weather.models import WeatherAlertsRequest

router = APIRouter()

def _get_agent():
    weather_agent = agent_registry.get("weather")
    if not weather_agent:
        raise HTTPException(status_code=500, detail="Weather agent not available")
    return weather_agent

async def _run(request: WeatherAlertsRequest):
    response = await _get_agent().execute(request)
    if not response.success and (response.metadata or {}).get("error_type") == "WeatherDataError":
        raise HTTPException(status_code=502, detail=response.message)
    return response

@router.get("/current")
async def get_current_weather(
    lat: float = Query(..., description="Latitude of the location"),
    lon: float = Query(..., description="Longitude of the location"),
    crops: List[str] = Query([], description="Crops grown at the location")
):
    """Current weather with rule-based alerts for a location"""
    try:
        try:
            request = WeatherAlertsRequest(lat=lat, lon=lon, crops=[c.strip() for c in crops if c.strip()])
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=f"Invalid location: {e.errors()[0]['msg']}")

        return await _run(request)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching weather: {str(e)}")

@router.post("/alerts")
async def get_weather_alerts(request: WeatherAlertsRequest):
    """
    Weather alerts for an observation or location

    Returns severity-graded alerts, whether a notification should go out,
    crop-specific hazards and, when requested, AI predictive alerts merged
    with the rule-based ones.
    """
    try:
        return await _run(request)

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error generating weather alerts: {str(e)}")

@router.get("/health")
async def weather_agent_health():
    """Check weather agent health"""
    try:
        return await _get_agent().health_check()

    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check failed: {str(e)}")
