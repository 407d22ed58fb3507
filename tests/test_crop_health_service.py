from datetime import date, datetime, timedelta, timezone

import pytest

from agents.crop_health import analyze_crop_health
from agents.crop_health.profiles import CROP_PROFILES, DEFAULT_PROFILE
from agents.crop_health.service import (
    FALLBACK_RECOMMENDATIONS, CropHealthService, current_season, days_since_planting, farm_crop_status
)
from agents.weather.models import WeatherObservation
from core.clock import fixed_clock

NOW = datetime(2026, 10, 19, 9, 0)


def test_humid_warm_tomato_at_flowering(clock, humid_warm_weather, planted_45_days_ago) -> None:
    result = analyze_crop_health("tomato", planted_45_days_ago, humid_warm_weather, clock=clock)

    assert result.disease_risk.score == 100
    assert result.disease_risk.level == "critical"
    assert result.disease_risk.factors == [
        "Risk of: Leaf Curl Virus",
        "High humidity promotes fungal growth",
        "Rain can spread pathogens",
    ]

    assert result.weather_suitability.score == 71
    assert result.weather_suitability.status == "favorable"
    assert result.weather_suitability.message == (
        "Current conditions: Temperature too high (32°C), Humidity too high (88%), Excessive rainfall (15mm)"
    )

    assert result.water_stress.level == "moderate"
    assert result.overall_status == "poor"

    assert result.growth_stage.stage == "Flowering"
    assert result.growth_stage.days_from_planting == 45
    assert result.growth_stage.next_milestone == "Fruiting"
    assert result.growth_stage.days_to_next_milestone == 15

    assert result.harvest_readiness.is_ready is False
    assert result.harvest_readiness.days_to_harvest == 45
    assert result.harvest_readiness.estimated_date == date(2026, 12, 3)

    assert result.recommendations == [
        "Provide shade or use shade nets to protect from heat stress",
        "Apply preventive fungicide spray",
        "Ensure proper spacing between plants for air circulation",
    ]
    assert [(a.type, a.message) for a in result.alerts] == [
        ("danger", "Critical disease risk: Risk of: Leaf Curl Virus"),
    ]


def test_unknown_crop_in_calm_weather(clock, calm_weather) -> None:
    result = analyze_crop_health("durian", None, calm_weather, clock=clock)

    assert result.weather_suitability.score == 100
    assert result.weather_suitability.status == "ideal"
    assert result.weather_suitability.message == "Weather conditions are ideal for your crop!"
    assert result.disease_risk.score == 15
    assert result.disease_risk.level == "low"
    assert result.disease_risk.factors == []
    assert result.water_stress.level == "none"
    assert result.overall_status == "excellent"
    assert result.pest_risk.level == "low"
    assert result.pest_risk.pests == ["General Pests"]
    assert result.recommendations == FALLBACK_RECOMMENDATIONS
    assert result.growth_stage.stage == "Germination"
    assert result.growth_stage.next_milestone == "Seedling"
    assert result.growth_stage.days_to_next_milestone == 15
    assert result.harvest_readiness.days_to_harvest == DEFAULT_PROFILE.growth_days
    assert result.alerts == []


def test_analysis_is_idempotent(clock, humid_warm_weather, planted_45_days_ago) -> None:
    first = analyze_crop_health("tomato", planted_45_days_ago, humid_warm_weather, clock=clock)
    second = analyze_crop_health("tomato", planted_45_days_ago, humid_warm_weather, clock=clock)
    assert first == second


def test_missing_observation_is_rejected(clock) -> None:
    with pytest.raises(TypeError):
        analyze_crop_health("rice", None, None, clock=clock)


def test_weather_penalties_are_capped(clock) -> None:
    service = CropHealthService(clock=clock)
    brutal = WeatherObservation(temperature=60, humidity=0, rainfall=200, wind_speed=80)
    suitability = service.analyze_weather_suitability(brutal, CROP_PROFILES["wheat"])
    # 40 + 20 + 30 + 20
    assert suitability.score == 0
    assert suitability.status == "critical"


def test_scores_stay_in_range_for_extreme_inputs(clock) -> None:
    extreme = WeatherObservation(temperature=-30, humidity=150, rainfall=500, wind_speed=100)
    result = analyze_crop_health("potato", None, extreme, clock=clock)
    assert 0 <= result.weather_suitability.score <= 100
    assert 0 <= result.disease_risk.score <= 100


@pytest.mark.parametrize(
    ("temperature", "humidity", "rainfall", "level"),
    [
        (35, 40, 0, "severe"),
        (35, 40, 5, "high"),
        (35, 60, 0, "high"),
        (35, 60, 5, "moderate"),
        (25, 40, 0, "moderate"),
        (25, 40, 5, "low"),
        (25, 60, 0, "none"),
    ],
)
def test_water_stress_levels(clock, temperature, humidity, rainfall, level) -> None:
    observation = WeatherObservation(temperature=temperature, humidity=humidity, rainfall=rainfall)
    stress = CropHealthService(clock=clock).analyze_water_stress(observation, CROP_PROFILES["tomato"])
    assert stress.level == level


def test_severe_water_stress_alert_and_advice(clock) -> None:
    observation = WeatherObservation(temperature=35, humidity=30, rainfall=0, wind_speed=2)
    result = analyze_crop_health("tomato", None, observation, clock=clock)
    assert result.water_stress.level == "severe"
    assert "Irrigate immediately - use drip irrigation if available" in result.recommendations
    assert ("danger", "Severe water stress! Irrigate immediately.") in [(a.type, a.message) for a in result.alerts]


def test_pest_risk_depends_on_season() -> None:
    warm_humid = WeatherObservation(temperature=28, humidity=80)
    tomato = CROP_PROFILES["tomato"]

    april = CropHealthService(clock=fixed_clock(datetime(2026, 4, 10)))
    risk = april.analyze_pest_risk(warm_humid, tomato, datetime(2026, 4, 10))
    assert risk.pests == ["Whitefly"]
    assert risk.level == "moderate"

    rice = CROP_PROFILES["rice"]
    risk = april.analyze_pest_risk(warm_humid, rice, datetime(2026, 8, 1))
    assert risk.pests == ["Stem Borer", "Brown Planthopper"]
    assert risk.level == "high"


@pytest.mark.parametrize(
    ("month", "season"),
    [(1, "winter"), (3, "summer"), (5, "summer"), (6, "monsoon"), (10, "monsoon"), (11, "winter")],
)
def test_current_season(month, season) -> None:
    assert current_season(month) == season


def test_days_since_planting() -> None:
    assert days_since_planting(None, NOW) == 0
    assert days_since_planting(date(2026, 9, 4), NOW) == 45
    assert days_since_planting(date(2026, 10, 25), NOW) == 0
    aware_now = NOW.replace(tzinfo=timezone.utc)
    assert days_since_planting(datetime(2026, 10, 18, 10, 0), aware_now) == 0
    assert days_since_planting(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc), aware_now) == 1


def test_growth_stage_past_last_milestone(clock) -> None:
    stage = CropHealthService(clock=clock).analyze_growth_stage(200, CROP_PROFILES["tomato"])
    assert stage.stage == "Maturity"
    assert stage.next_milestone == "Maturity"
    assert stage.days_to_next_milestone == 0


def test_harvest_ready_alert(clock) -> None:
    result = analyze_crop_health("tomato", date(2026, 7, 26), WeatherObservation(temperature=24, humidity=60), clock=clock)
    assert result.growth_stage.days_from_planting == 85
    assert result.harvest_readiness.is_ready is True
    assert result.harvest_readiness.days_to_harvest == 5
    assert result.alerts[-1].message == "Crop is ready for harvest! Estimated date: 24 Oct 2026"


def test_harvest_approaching_alert(clock) -> None:
    service = CropHealthService(config={"harvest_ready_ratio": 1.0}, clock=clock)
    result = service.analyze("tomato", date(2026, 7, 26), WeatherObservation(temperature=24, humidity=60))
    assert result.harvest_readiness.is_ready is False
    assert result.alerts[-1].message == "Harvest approaching in 5 days"


def test_extreme_weather_alerts_come_first(clock) -> None:
    observation = WeatherObservation(temperature=42, humidity=20, rainfall=60, wind_speed=20)
    result = analyze_crop_health("wheat", None, observation, clock=clock)
    messages = [a.message for a in result.alerts]
    assert messages[:2] == [
        "Extreme heat warning! Immediate protective action needed.",
        "Heavy rainfall alert! Check for waterlogging.",
    ]
    assert "Provide windbreaks or support for tall plants" in result.recommendations
    assert "Check drainage systems to prevent waterlogging" in result.recommendations


def test_overall_status_uses_weather_and_disease_only() -> None:
    assert CropHealthService.calculate_overall_status(71, 100) == "poor"
    assert CropHealthService.calculate_overall_status(100, 15) == "excellent"
    assert CropHealthService.calculate_overall_status(0, 100) == "critical"


@pytest.mark.parametrize(
    ("overall", "farm_status"),
    [("excellent", "healthy"), ("good", "healthy"), ("moderate", "monitoring"),
     ("poor", "diseased"), ("critical", "diseased")],
)
def test_farm_crop_status(overall, farm_status) -> None:
    assert farm_crop_status(overall) == farm_status


def test_recommendations_keep_rule_order_when_many_fire(clock) -> None:
    observation = WeatherObservation(temperature=10, humidity=95, rainfall=25, wind_speed=20)
    result = analyze_crop_health("tomato", None, observation, clock=clock)

    assert result.disease_risk.level == "critical"
    assert result.recommendations == [
        "Use mulching or row covers to protect from cold",
        "Apply preventive fungicide spray",
        "Ensure proper spacing between plants for air circulation",
        "Avoid overhead irrigation to reduce fungal spread",
        "Improve field drainage if possible",
        "Provide windbreaks or support for tall plants",
        "Check drainage systems to prevent waterlogging",
        "Postpone fertilizer application until rain subsides",
    ]


def test_frost_alert_and_cold_advice(clock) -> None:
    observation = WeatherObservation(temperature=2, humidity=60, rainfall=0, wind_speed=1)
    result = analyze_crop_health("tomato", None, observation, clock=clock)

    assert (result.alerts[0].type, result.alerts[0].message) == (
        "danger", "Frost risk! Cover sensitive plants immediately."
    )
    assert result.recommendations[0] == "Use mulching or row covers to protect from cold"


def test_high_disease_risk_warning(clock) -> None:
    observation = WeatherObservation(temperature=20, humidity=55, rainfall=0, wind_speed=2)
    result = analyze_crop_health("wheat", None, observation, clock=clock)

    # Powdery Mildew full match plus two partial matches
    assert result.disease_risk.score == 65
    assert result.disease_risk.level == "high"
    assert result.recommendations == [
        "Apply preventive fungicide spray",
        "Ensure proper spacing between plants for air circulation",
    ]
    assert [(a.type, a.message) for a in result.alerts] == [
        ("warning", "High disease risk detected. Apply preventive fungicide and increase monitoring frequency"),
    ]


def test_high_water_stress_warning(clock) -> None:
    observation = WeatherObservation(temperature=35, humidity=60, rainfall=0, wind_speed=2)
    result = analyze_crop_health("tomato", None, observation, clock=clock)

    assert result.water_stress.level == "high"
    assert result.disease_risk.level == "moderate"
    assert result.recommendations == [
        "Provide shade or use shade nets to protect from heat stress",
        "Irrigate immediately - use drip irrigation if available",
        "Apply organic mulch to conserve soil moisture",
    ]
    assert [(a.type, a.message) for a in result.alerts] == [
        ("warning", "Hot conditions with insufficient moisture"),
    ]


def test_aware_planting_time_is_converted_for_a_naive_clock() -> None:
    planted = datetime(2026, 10, 18, 23, 30, tzinfo=timezone.utc)
    local_planted = planted.astimezone().replace(tzinfo=None)
    assert days_since_planting(planted, local_planted + timedelta(days=1)) == 1
    assert days_since_planting(planted, local_planted + timedelta(hours=23)) == 0


def test_offset_planting_time_against_utc_clock() -> None:
    ist = timezone(timedelta(hours=5, minutes=30))
    planted = datetime(2026, 10, 19, 2, 0, tzinfo=ist)  # 18 Oct 20:30 UTC
    assert days_since_planting(planted, datetime(2026, 10, 19, 21, 0, tzinfo=timezone.utc)) == 1
