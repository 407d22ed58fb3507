# agents/weather/__init__.py
"""
Weather observation and alerting agent package
"""

from .agent import WeatherAgent
from .alerts import generate_alerts, should_send_alert
from .models import WeatherAlert, WeatherObservation

__all__ = ["WeatherAgent", "WeatherAlert", "WeatherObservation", "generate_alerts", "should_send_alert"]
