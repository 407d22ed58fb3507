# api/v1/endpoints/health.py
from fastapi import APIRouter
from datetime import datetime

from agents.base import agent_registry

router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "KrishiMitra Crop Care Backend"
    }

@router.get("/agents")
async def agents_health():
    """Health of every registered agent"""
    return {
        "agents": await agent_registry.health_check_all(),
        "timestamp": datetime.now().isoformat()
    }
