import pytest

from agents.weather import WeatherObservation, generate_alerts, should_send_alert
from agents.weather.models import WeatherAlert


def _obs(**overrides) -> WeatherObservation:
    values = {"temperature": 25, "humidity": 60, "rainfall": 5, "wind_speed": 3}
    values.update(overrides)
    return WeatherObservation(**values)


def test_mild_weather_raises_no_alerts() -> None:
    alerts = generate_alerts(_obs())
    assert alerts == []
    assert should_send_alert(alerts) is False


@pytest.mark.parametrize(
    ("rainfall", "severity", "message"),
    [
        (10, None, None),
        (10.5, "moderate", "Moderate rainfall expected: 10.5mm"),
        (20, "moderate", "Moderate rainfall expected: 20.0mm"),
        (20.1, "high", "Heavy rainfall expected: 20.1mm"),
        (50, "high", "Heavy rainfall expected: 50.0mm"),
        (50.1, "critical", "Heavy rainfall expected: 50.1mm"),
    ],
)
def test_rain_thresholds(rainfall, severity, message) -> None:
    rain = [a for a in generate_alerts(_obs(rainfall=rainfall)) if a.type == "rain"]
    if severity is None:
        assert rain == []
    else:
        assert len(rain) == 1
        assert rain[0].severity == severity
        assert rain[0].message == message


def test_temperature_thresholds_are_strict() -> None:
    assert [a for a in generate_alerts(_obs(temperature=40)) if a.type == "extreme_temp"] == []
    assert [a for a in generate_alerts(_obs(temperature=5)) if a.type == "extreme_temp"] == []

    heat = generate_alerts(_obs(temperature=41))
    assert heat[0].message == "Extreme heat: 41.0°C"
    assert heat[0].severity == "high"

    frost = generate_alerts(_obs(temperature=2))
    assert frost[0].message == "Freezing temperature: 2.0°C"
    assert "frost" in frost[0].crop_impact.lower()


@pytest.mark.parametrize(
    ("humidity", "severity"),
    [(80, None), (85, "moderate"), (90, "moderate"), (91, "high")],
)
def test_humidity_thresholds(humidity, severity) -> None:
    found = [a for a in generate_alerts(_obs(humidity=humidity)) if a.type == "high_humidity"]
    assert [a.severity for a in found] == ([severity] if severity else [])


@pytest.mark.parametrize(
    ("wind", "severity"),
    [(15, None), (20, "moderate"), (25, "moderate"), (26, "critical")],
)
def test_wind_thresholds(wind, severity) -> None:
    found = [a for a in generate_alerts(_obs(wind_speed=wind)) if a.type == "storm"]
    assert [a.severity for a in found] == ([severity] if severity else [])


def test_drought_needs_zero_rain_heat_and_dry_air() -> None:
    drought = generate_alerts(_obs(rainfall=0, temperature=35, humidity=30))
    assert [a.type for a in drought] == ["drought"]
    assert drought[0].message == "Dry conditions detected"

    assert generate_alerts(_obs(rainfall=0.5, temperature=35, humidity=30)) == []
    assert generate_alerts(_obs(rainfall=0, temperature=30, humidity=30)) == []
    assert generate_alerts(_obs(rainfall=0, temperature=35, humidity=40)) == []


def test_alert_order_follows_rule_order() -> None:
    alerts = generate_alerts(_obs(rainfall=60, temperature=42, humidity=95, wind_speed=30))
    assert [a.type for a in alerts] == ["rain", "extreme_temp", "high_humidity", "storm"]
    assert [a.severity for a in alerts] == ["critical", "high", "high", "critical"]


def test_alerts_are_deterministic() -> None:
    observation = _obs(rainfall=30, humidity=92)
    assert generate_alerts(observation) == generate_alerts(observation)


def test_missing_observation_is_rejected() -> None:
    with pytest.raises(TypeError):
        generate_alerts(None)


def test_should_send_alert_ignores_low_severity() -> None:
    low = WeatherAlert(type="rain", severity="low", message="Light drizzle", crop_impact="None")
    moderate = WeatherAlert(type="rain", severity="moderate", message="Rain", crop_impact="Watch")
    assert should_send_alert([]) is False
    assert should_send_alert([low]) is False
    assert should_send_alert([low, moderate]) is True
