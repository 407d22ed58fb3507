# agents/weather/hazards.py
"""
Crop-specific weather hazards used to decide whether a farmer should be warned
"""
from typing import Callable, Dict, Iterable, List, Tuple

from agents.weather.models import CropHazard, WeatherObservation

Condition = Callable[[WeatherObservation], bool]

# crop -> (hazard, predicate, impact)
CROP_WEATHER_SENSITIVITY: Dict[str, Tuple[Tuple[str, Condition, str], ...]] = {
    "rice": (
        ("excessive_rainfall", lambda w: w.rainfall > 100,
         "Excessive rainfall can cause waterlogging and fungal diseases in rice"),
        ("high_temperature", lambda w: w.temperature > 35,
         "High temperature can affect grain filling and reduce yield"),
        ("storm", lambda w: w.wind_speed > 40,
         "Strong winds can cause lodging (bending) of rice plants"),
    ),
    "wheat": (
        ("frost", lambda w: w.temperature < 0,
         "Frost can damage wheat seedlings and young plants"),
        ("excessive_rainfall", lambda w: w.rainfall > 80,
         "Excessive rainfall during flowering can cause diseases"),
    ),
    "cotton": (
        ("excessive_humidity", lambda w: w.humidity > 85,
         "High humidity increases risk of fungal diseases in cotton"),
        ("heavy_rainfall", lambda w: w.rainfall > 90,
         "Heavy rainfall can cause boll rot in cotton"),
    ),
    "tomato": (
        ("high_humidity", lambda w: w.humidity > 80,
         "High humidity increases risk of late blight and early blight"),
        ("excessive_rainfall", lambda w: w.rainfall > 100,
         "Excessive rainfall can cause various fungal diseases"),
    ),
    "potato": (
        ("high_humidity_temp", lambda w: w.humidity > 80 and w.temperature > 18,
         "High humidity and temperature increase late blight risk"),
        ("excessive_rainfall", lambda w: w.rainfall > 80,
         "Excessive rainfall can cause tuber rot diseases"),
    ),
}

def find_crop_hazards(crops: Iterable[str], observation: WeatherObservation) -> List[CropHazard]:
    """Hazards triggered by the observation, grouped by crop in the order given"""
    hazards: List[CropHazard] = []
    for crop in crops:
        sensitivity = CROP_WEATHER_SENSITIVITY.get(crop.strip().lower(), ())
        for hazard, condition, impact in sensitivity:
            if condition(observation):
                hazards.append(CropHazard(crop=crop, hazard=hazard, impact=impact))
    return hazards
