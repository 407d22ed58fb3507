# core/logging.py
"""
Logging configuration for the backend
"""
import logging
import sys
from .config import get_settings

# Chatty third-party loggers and the level they are held at
QUIET_LOGGERS = {
    "urllib3": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "google": logging.WARNING,
    "langchain_google_genai": logging.WARNING,
}

def setup_logging():
    """Setup logging configuration"""
    settings = get_settings()
    level = getattr(logging, settings.log_level.value)

    logging.basicConfig(
        level=level,
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("agents").setLevel(level)
    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(logging.DEBUG if settings.debug and level == logging.DEBUG else quiet_level)
