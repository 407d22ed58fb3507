# core/config.py
"""
Configuration management for backend services
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional, Dict, Any
import logging
import os
from functools import lru_cache
from enum import Enum
from dotenv import load_dotenv
load_dotenv()

logger = logging.getLogger(__name__)

class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class Settings(BaseSettings):
    """Application settings with validation"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # API Configuration
    api_title: str = "KrishiMitra Crop Care Backend"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:4173"
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # External API Keys
    openweather_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # Cache Configuration
    cache_enabled: bool = True
    cache_default_ttl: int = 900  # 15 minutes

    # Agent Configurations
    weather_config: Dict[str, Any] = {
        "base_url": "https://api.openweathermap.org/data/2.5",
        "forecast_slots": 8,  # 8 x 3h = next 24 hours
        "request_timeout": 20,
        "cache_ttl": 600,
        "model": "gemini-2.5-flash",
        "temperature": 0.3
    }

    crop_health_config: Dict[str, Any] = {
        "harvest_ready_ratio": 0.9,
        "harvest_approaching_days": 7
    }

    soil_config: Dict[str, Any] = {
        "model": "gemini-2.5-flash",
        "temperature": 0.3,
        "default_language": "hi"
    }

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # The web client historically exported OPEN_WEATHER_API_KEY
        if not self.openweather_api_key:
            self.openweather_api_key = os.getenv('OPEN_WEATHER_API_KEY')

        if not self.gemini_api_key:
            self.gemini_api_key = os.getenv('GOOGLE_API_KEY')

    def get_agent_config(self, agent_name: str) -> Dict[str, Any]:
        """Get configuration for specific agent"""
        config_map = {
            "weather": self.weather_config,
            "crop_health": self.crop_health_config,
            "soil": self.soil_config
        }
        return config_map.get(agent_name, {})

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

# Validation functions
def validate_api_keys(settings: Settings) -> None:
    """Validate required API keys based on environment"""
    required_keys = []

    if not settings.openweather_api_key:
        required_keys.append("OPENWEATHER_API_KEY")

    if required_keys and settings.is_production:
        raise ValueError(f"Missing required API keys in production: {', '.join(required_keys)}")

    if required_keys:
        logger.warning(f"Missing API keys ({settings.environment.value} mode): {', '.join(required_keys)}")
        logger.warning("Weather must be supplied with each request until the key is configured")
    else:
        logger.info("All required API keys are present")

    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not set - AI advisors will return fallback responses")

# Initialize settings
settings = get_settings()
