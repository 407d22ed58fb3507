# api/v1/router.py
from fastapi import APIRouter
from .endpoints import health, crop_health, weather, soil

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(crop_health.router, prefix="/crop-health", tags=["crop-health"])
api_router.include_router(weather.router, prefix="/weather", tags=["weather"])
api_router.include_router(soil.router, prefix="/soil", tags=["soil"])
