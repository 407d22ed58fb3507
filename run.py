# run.py
"""
Main entry point for KrishiMitra Crop Care Backend
"""

from dotenv import load_dotenv
load_dotenv()

import uvicorn
import logging
from contextlib import asynccontextmanager

from api.app import create_app
from core.config import get_settings, validate_api_keys
from core.logging import setup_logging
from agents.crop_health.agent import CropHealthAgent
from agents.weather.agent import WeatherAgent
from agents.soil.agent import SoilHealthAgent
from agents.base import agent_registry

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app):
    """Application lifespan management"""

    # Startup
    logger.info("🚀 Starting KrishiMitra Crop Care Backend")
    validate_api_keys(get_settings())

    logger.info("Initializing agents...")
    try:
        for agent in (WeatherAgent(), CropHealthAgent(), SoilHealthAgent()):
            agent_registry.register(agent)
            logger.info(f"✅ {agent.agent_name} agent registered")

        health_results = await agent_registry.health_check_all()
        for agent_name, health in health_results.items():
            status = "✅" if health["status"] == "healthy" else "❌"
            logger.info(f"{status} {agent_name}: {health['status']}")

        logger.info("🎯 All agents initialized successfully")

    except Exception as e:
        logger.error(f"❌ Failed to initialize agents: {e}")
        raise

    yield

    # Shutdown
    agent_registry.clear()
    logger.info("🛑 Shutting down KrishiMitra Crop Care Backend")

def create_application():
    """Create FastAPI application with all configurations"""
    return create_app(lifespan=lifespan)

def main():
    """Main entry point"""
    settings = get_settings()

    logger.info(f"Starting server on {settings.api_host}:{settings.api_port}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Debug mode: {settings.debug}")

    if settings.debug:
        # Import string so reload can re-create the app
        uvicorn.run(
            "run:create_application",
            factory=True,
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )
    else:
        uvicorn.run(
            create_application(),
            host=settings.api_host,
            port=settings.api_port,
            reload=False,
            log_level=settings.log_level.value.lower(),
            access_log=True
        )

if __name__ == "__main__":
    main()
