# agents/crop_health/service.py
"""
Crop health service - rule-based scoring of weather, disease, water, pest and growth state
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Union

from agents.crop_health.models import (
    CropHealthAnalysis, DiseaseRisk, GrowthStage, HarvestReadiness, HealthAlert,
    PestRisk, WaterStress, WeatherSuitability
)
from agents.crop_health.profiles import CropProfile, get_crop_profile
from agents.crop_health.scoring import (
    DISEASE_RISK_FLOOR, DISEASE_RISK_LADDER, OVERALL_STATUS_FLOOR, OVERALL_STATUS_LADDER,
    WEATHER_SUITABILITY_FLOOR, WEATHER_SUITABILITY_LADDER, clamp_score, classify
)
from agents.weather.models import WeatherObservation
from core.clock import Clock, system_clock

logger = logging.getLogger(__name__)

PlantingDate = Union[date, datetime]

# Wind above this speed (m/s) penalises suitability and triggers windbreak advice
STRONG_WIND_MS = 15

DISEASE_RECOMMENDATIONS = {
    "low": "Continue regular monitoring",
    "moderate": "Monitor closely and apply preventive measures",
    "high": "Apply preventive fungicide and increase monitoring frequency",
    "critical": "Apply preventive fungicide and increase monitoring frequency",
}

WATER_STRESS_GUIDANCE = {
    "severe": (
        "High temperature, low humidity, no rainfall - severe water stress conditions",
        "Irrigate immediately. Consider mulching to retain moisture. Water early morning or evening.",
    ),
    "high": (
        "Hot conditions with insufficient moisture",
        "Increase irrigation frequency. Monitor for wilting.",
    ),
    "moderate": (
        "Moderate stress conditions detected",
        "Maintain regular irrigation schedule. Check soil moisture.",
    ),
    "low": (
        "Slightly dry conditions",
        "Continue normal watering. Monitor soil moisture levels.",
    ),
    "none": (
        "Adequate moisture levels",
        "No additional irrigation needed at this time.",
    ),
}

PEST_PREVENTION = {
    "high": "Set up pheromone traps. Consider applying neem-based pesticides preventively.",
    "moderate": "Regular scouting recommended. Keep field clean of crop residues.",
    "low": "Maintain field hygiene. Monitor occasionally.",
}

FALLBACK_RECOMMENDATIONS = [
    "Continue regular crop management practices",
    "Monitor crop health daily during critical growth stages",
]

def _fmt(value: float) -> str:
    """Render 32.0 as 32 and 27.5 as 27.5"""
    return f"{value:g}"

def format_harvest_date(day: date) -> str:
    return f"{day.day} {day:%b %Y}"

def current_season(month: int) -> str:
    """Pest season for a calendar month. June counts as monsoon, not summer."""
    if 6 <= month <= 10:
        return "monsoon"
    if 3 <= month <= 6:
        return "summer"
    return "winter"

def days_since_planting(planting_date: Optional[PlantingDate], now: datetime) -> int:
    """Whole days elapsed since planting, never negative; 0 when no date is known"""
    if planting_date is None:
        return 0

    if isinstance(planting_date, datetime):
        start = planting_date
        if start.tzinfo is not None and now.tzinfo is None:
            start = start.astimezone().replace(tzinfo=None)
        elif start.tzinfo is None and now.tzinfo is not None:
            start = start.replace(tzinfo=now.tzinfo)
    else:
        start = datetime.combine(planting_date, time.min, tzinfo=now.tzinfo)

    return max(0, (now - start) // timedelta(days=1))

def farm_crop_status(overall_status: str) -> str:
    """Collapse the overall status into the status stored on a farm's crop"""
    if overall_status in ("critical", "poor"):
        return "diseased"
    if overall_status == "moderate":
        return "monitoring"
    return "healthy"

class CropHealthService:
    """Weather-driven crop health analysis for a single crop"""

    def __init__(self, config: Optional[Dict[str, Any]] = None, clock: Optional[Clock] = None):
        self.config = config or {}
        self.clock = clock or system_clock
        self.harvest_ready_ratio = float(self.config.get("harvest_ready_ratio", 0.9))
        self.harvest_approaching_days = int(self.config.get("harvest_approaching_days", 7))

    def analyze(
        self,
        crop_name: str,
        planting_date: Optional[PlantingDate],
        observation: WeatherObservation
    ) -> CropHealthAnalysis:
        if observation is None:
            raise TypeError("analyze() requires a weather observation")

        now = self.clock()
        profile = get_crop_profile(crop_name)
        days_from_planting = days_since_planting(planting_date, now)

        weather_suitability = self.analyze_weather_suitability(observation, profile)
        disease_risk = self.analyze_disease_risk(observation, profile)
        water_stress = self.analyze_water_stress(observation, profile)
        pest_risk = self.analyze_pest_risk(observation, profile, now)
        growth_stage = self.analyze_growth_stage(days_from_planting, profile)
        harvest_readiness = self.analyze_harvest_readiness(days_from_planting, profile, now)

        recommendations = self.generate_recommendations(
            observation, profile, disease_risk.level, water_stress.level
        )
        alerts = self.generate_alerts(observation, disease_risk, water_stress, harvest_readiness)
        overall_status = self.calculate_overall_status(weather_suitability.score, disease_risk.score)

        logger.debug(
            f"{crop_name}: day {days_from_planting}, weather {weather_suitability.score}, "
            f"disease {disease_risk.score}, overall {overall_status}"
        )

        return CropHealthAnalysis(
            overall_status=overall_status,
            weather_suitability=weather_suitability,
            disease_risk=disease_risk,
            water_stress=water_stress,
            pest_risk=pest_risk,
            growth_stage=growth_stage,
            harvest_readiness=harvest_readiness,
            recommendations=recommendations,
            alerts=alerts,
        )

    def analyze_weather_suitability(self, observation: WeatherObservation, profile: CropProfile) -> WeatherSuitability:
        """Penalty-based score of how far the weather sits from the crop's optimal bands"""
        score = 100.0
        issues: List[str] = []
        temp = observation.temperature
        humidity = observation.humidity

        if temp < profile.optimal_temp.min:
            score -= min((profile.optimal_temp.min - temp) * 5, 40)
            issues.append(f"Temperature too low ({_fmt(temp)}°C)")
        elif temp > profile.optimal_temp.max:
            score -= min((temp - profile.optimal_temp.max) * 5, 40)
            issues.append(f"Temperature too high ({_fmt(temp)}°C)")

        if humidity < profile.optimal_humidity.min:
            score -= min((profile.optimal_humidity.min - humidity) * 0.5, 20)
            issues.append(f"Humidity too low ({_fmt(humidity)}%)")
        elif humidity > profile.optimal_humidity.max:
            score -= min((humidity - profile.optimal_humidity.max) * 0.5, 20)
            issues.append(f"Humidity too high ({_fmt(humidity)}%)")

        if observation.rainfall > profile.max_rainfall:
            score -= min((observation.rainfall - profile.max_rainfall) * 2, 30)
            issues.append(f"Excessive rainfall ({_fmt(observation.rainfall)}mm)")

        if observation.wind_speed > STRONG_WIND_MS:
            score -= min((observation.wind_speed - STRONG_WIND_MS) * 2, 20)
            issues.append(f"Strong winds ({_fmt(observation.wind_speed)} m/s)")

        score = clamp_score(score)
        status = classify(score, WEATHER_SUITABILITY_LADDER, WEATHER_SUITABILITY_FLOOR)
        message = (f"Current conditions: {', '.join(issues)}" if issues
                   else "Weather conditions are ideal for your crop!")

        return WeatherSuitability(status=status, score=score, message=message)

    def analyze_disease_risk(self, observation: WeatherObservation, profile: CropProfile) -> DiseaseRisk:
        """Match the weather against each disease trigger, then add humidity and rain factors"""
        score = 0.0
        factors: List[str] = []
        risky_diseases: List[str] = []

        for disease in profile.diseases:
            humidity_match = observation.humidity >= disease.humidity - 10
            temp_match = abs(observation.temperature - disease.temp) <= 5

            if humidity_match and temp_match:
                score += 35
                risky_diseases.append(disease.name)
            elif humidity_match or temp_match:
                score += 15

        if observation.humidity > 85:
            score += 20
            factors.append("High humidity promotes fungal growth")

        if observation.rainfall > 10:
            score += 15
            factors.append("Rain can spread pathogens")

        score = clamp_score(score)
        level = classify(score, DISEASE_RISK_LADDER, DISEASE_RISK_FLOOR)

        if risky_diseases:
            factors.insert(0, f"Risk of: {', '.join(risky_diseases)}")

        return DiseaseRisk(
            level=level,
            score=score,
            factors=factors,
            recommendation=DISEASE_RECOMMENDATIONS[level],
        )

    def analyze_water_stress(self, observation: WeatherObservation, profile: CropProfile) -> WaterStress:
        is_hot = observation.temperature > profile.optimal_temp.max
        is_dry = observation.humidity < profile.optimal_humidity.min
        no_rain = observation.rainfall < 2

        if is_hot and is_dry and no_rain:
            level = "severe"
        elif (is_hot and is_dry) or (is_hot and no_rain):
            level = "high"
        elif is_hot or (is_dry and no_rain):
            level = "moderate"
        elif is_dry:
            level = "low"
        else:
            level = "none"

        indicator, action = WATER_STRESS_GUIDANCE[level]
        return WaterStress(level=level, indicator=indicator, action=action)

    def analyze_pest_risk(self, observation: WeatherObservation, profile: CropProfile, now: datetime) -> PestRisk:
        season = current_season(now.month)
        active_pests = [p.name for p in profile.pests if p.season in ("all", season)]

        if observation.humidity > 75 and observation.temperature > 25:
            level = "high" if len(active_pests) > 1 else "moderate"
        elif observation.humidity > 60 and observation.temperature > 20:
            level = "moderate" if active_pests else "low"
        else:
            level = "low"

        return PestRisk(level=level, pests=active_pests, prevention=PEST_PREVENTION[level])

    def analyze_growth_stage(self, days_from_planting: int, profile: CropProfile) -> GrowthStage:
        stages = profile.stages
        current_stage = stages[0]
        next_stage = stages[1] if len(stages) > 1 else stages[0]

        for i, stage in enumerate(stages):
            if days_from_planting >= stage.days_from_planting:
                current_stage = stage
                next_stage = stages[i + 1] if i + 1 < len(stages) else stage

        return GrowthStage(
            stage=current_stage.name,
            days_from_planting=days_from_planting,
            next_milestone=next_stage.name,
            days_to_next_milestone=max(0, next_stage.days_from_planting - days_from_planting),
        )

    def analyze_harvest_readiness(self, days_from_planting: int, profile: CropProfile, now: datetime) -> HarvestReadiness:
        days_to_harvest = max(0, profile.growth_days - days_from_planting)
        return HarvestReadiness(
            is_ready=days_from_planting >= profile.growth_days * self.harvest_ready_ratio,
            days_to_harvest=days_to_harvest,
            estimated_date=(now + timedelta(days=days_to_harvest)).date(),
        )

    def generate_recommendations(
        self,
        observation: WeatherObservation,
        profile: CropProfile,
        disease_level: str,
        water_level: str
    ) -> List[str]:
        """Advice for each triggered condition, in a fixed order"""
        recommendations: List[str] = []

        if observation.temperature > profile.optimal_temp.max:
            recommendations.append("Provide shade or use shade nets to protect from heat stress")
        if observation.temperature < profile.optimal_temp.min:
            recommendations.append("Use mulching or row covers to protect from cold")

        if disease_level in ("high", "critical"):
            recommendations.append("Apply preventive fungicide spray")
            recommendations.append("Ensure proper spacing between plants for air circulation")

        if water_level in ("high", "severe"):
            recommendations.append("Irrigate immediately - use drip irrigation if available")
            recommendations.append("Apply organic mulch to conserve soil moisture")

        if observation.humidity > 90:
            recommendations.append("Avoid overhead irrigation to reduce fungal spread")
            recommendations.append("Improve field drainage if possible")

        if observation.wind_speed > STRONG_WIND_MS:
            recommendations.append("Provide windbreaks or support for tall plants")

        if observation.rainfall > 20:
            recommendations.append("Check drainage systems to prevent waterlogging")
            recommendations.append("Postpone fertilizer application until rain subsides")

        return recommendations or list(FALLBACK_RECOMMENDATIONS)

    def generate_alerts(
        self,
        observation: WeatherObservation,
        disease_risk: DiseaseRisk,
        water_stress: WaterStress,
        harvest_readiness: HarvestReadiness
    ) -> List[HealthAlert]:
        alerts: List[HealthAlert] = []

        if observation.temperature > 40:
            alerts.append(HealthAlert(type="danger", message="Extreme heat warning! Immediate protective action needed."))
        if observation.temperature < 5:
            alerts.append(HealthAlert(type="danger", message="Frost risk! Cover sensitive plants immediately."))
        if observation.rainfall > 50:
            alerts.append(HealthAlert(type="danger", message="Heavy rainfall alert! Check for waterlogging."))

        if disease_risk.level == "critical":
            # every profile needs a full trigger match or a weather factor to reach 70
            alerts.append(HealthAlert(type="danger", message=f"Critical disease risk: {disease_risk.factors[0]}"))
        elif disease_risk.level == "high":
            alerts.append(HealthAlert(type="warning", message=f"High disease risk detected. {disease_risk.recommendation}"))

        if water_stress.level == "severe":
            alerts.append(HealthAlert(type="danger", message="Severe water stress! Irrigate immediately."))
        elif water_stress.level == "high":
            alerts.append(HealthAlert(type="warning", message=water_stress.indicator))

        if harvest_readiness.is_ready:
            alerts.append(HealthAlert(
                type="info",
                message=f"Crop is ready for harvest! Estimated date: {format_harvest_date(harvest_readiness.estimated_date)}",
            ))
        elif 0 < harvest_readiness.days_to_harvest <= self.harvest_approaching_days:
            alerts.append(HealthAlert(
                type="info",
                message=f"Harvest approaching in {harvest_readiness.days_to_harvest} days",
            ))

        return alerts

    @staticmethod
    def calculate_overall_status(weather_score: float, disease_score: float) -> str:
        """Only weather suitability and disease risk feed the overall status"""
        health_score = (weather_score + (100 - disease_score)) / 2
        return classify(health_score, OVERALL_STATUS_LADDER, OVERALL_STATUS_FLOOR)

def analyze_crop_health(
    crop_name: str,
    planting_date: Optional[PlantingDate],
    observation: WeatherObservation,
    clock: Optional[Clock] = None
) -> CropHealthAnalysis:
    """Full health analysis for one crop under one weather observation"""
    return CropHealthService(clock=clock).analyze(crop_name, planting_date, observation)
