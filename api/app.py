# api/app.py
"""
FastAPI application factory
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.base import agent_registry
from api.v1.router import api_router
from core.config import get_settings
from core.exceptions import KrishiMitraError, WeatherDataError

logger = logging.getLogger(__name__)

def create_app(lifespan=None) -> FastAPI:
    """Create FastAPI application"""
    settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(KrishiMitraError)
    async def domain_error_handler(request: Request, exc: KrishiMitraError):
        # Errors that escaped an agent's fallback
        status_code = 502 if isinstance(exc, WeatherDataError) else 500
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error_type": type(exc).__name__}
        )

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "service": settings.api_title,
            "version": settings.api_version,
            "status": "healthy",
            "agents": agent_registry.list_agents()
        }

    @app.get("/api/agents")
    async def agents_info():
        """Registered agents with their configuration"""
        return agent_registry.get_agents_info()

    return app
