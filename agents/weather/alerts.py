# agents/weather/alerts.py
"""
Rule-based weather alerts graded by severity and annotated with crop impact
"""
from typing import List

from agents.weather.models import WeatherAlert, WeatherObservation

CROP_IMPACT = {
    "heavy_rain": "Risk of waterlogging, fungal diseases, and crop damage. Ensure proper drainage.",
    "moderate_rain": "Monitor for waterlogging. Good for irrigation but watch for fungal diseases.",
    "heat": "High risk of heat stress, wilting, and reduced yield. Increase irrigation frequency.",
    "frost": "Risk of frost damage. Cover sensitive crops or move them indoors.",
    "high_humidity": "Increased risk of fungal diseases (powdery mildew, blight). Apply preventive fungicides.",
    "storm": "Risk of physical damage to crops. Secure structures and protect young plants.",
    "drought": "Low moisture levels. Increase irrigation to prevent crop stress.",
}

NOTIFY_SEVERITIES = frozenset({"moderate", "high", "critical"})

def generate_alerts(observation: WeatherObservation) -> List[WeatherAlert]:
    """Evaluate every alert rule against one observation, in a fixed order"""
    if observation is None:
        raise TypeError("generate_alerts() requires a weather observation")

    alerts: List[WeatherAlert] = []
    rainfall = observation.rainfall
    temp = observation.temperature
    humidity = observation.humidity
    wind = observation.wind_speed

    if rainfall > 20:
        alerts.append(WeatherAlert(
            type="rain",
            severity="critical" if rainfall > 50 else "high",
            message=f"Heavy rainfall expected: {rainfall:.1f}mm",
            crop_impact=CROP_IMPACT["heavy_rain"],
        ))
    elif rainfall > 10:
        alerts.append(WeatherAlert(
            type="rain",
            severity="moderate",
            message=f"Moderate rainfall expected: {rainfall:.1f}mm",
            crop_impact=CROP_IMPACT["moderate_rain"],
        ))

    if temp > 40:
        alerts.append(WeatherAlert(
            type="extreme_temp",
            severity="high",
            message=f"Extreme heat: {temp:.1f}°C",
            crop_impact=CROP_IMPACT["heat"],
        ))
    elif temp < 5:
        alerts.append(WeatherAlert(
            type="extreme_temp",
            severity="high",
            message=f"Freezing temperature: {temp:.1f}°C",
            crop_impact=CROP_IMPACT["frost"],
        ))

    if humidity > 80:
        alerts.append(WeatherAlert(
            type="high_humidity",
            severity="high" if humidity > 90 else "moderate",
            message=f"High humidity: {humidity:g}%",
            crop_impact=CROP_IMPACT["high_humidity"],
        ))

    if wind > 15:
        alerts.append(WeatherAlert(
            type="storm",
            severity="critical" if wind > 25 else "moderate",
            message=f"Strong winds: {wind:.1f} m/s",
            crop_impact=CROP_IMPACT["storm"],
        ))

    # Single-snapshot heuristic; a real drought signal needs rainfall history
    if rainfall == 0 and temp > 30 and humidity < 40:
        alerts.append(WeatherAlert(
            type="drought",
            severity="moderate",
            message="Dry conditions detected",
            crop_impact=CROP_IMPACT["drought"],
        ))

    return alerts

def should_send_alert(alerts: List[WeatherAlert]) -> bool:
    """Only moderate, high or critical alerts warrant a notification"""
    return any(alert.severity in NOTIFY_SEVERITIES for alert in alerts)
