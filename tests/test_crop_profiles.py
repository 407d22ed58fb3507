import pytest
from pydantic import ValidationError

from agents.crop_health.profiles import (
    CROP_PROFILES, DEFAULT_PROFILE, Band, CropProfile, GrowthMilestone, get_crop_profile, is_known_crop
)


def test_known_crops() -> None:
    assert set(CROP_PROFILES) == {"rice", "wheat", "tomato", "potato", "cotton", "maize"}


def test_lookup_is_case_and_whitespace_insensitive() -> None:
    assert get_crop_profile("  Tomato ") is CROP_PROFILES["tomato"]
    assert is_known_crop("RICE")


def test_unknown_crop_uses_default_profile() -> None:
    assert get_crop_profile("durian") is DEFAULT_PROFILE
    assert get_crop_profile("") is DEFAULT_PROFILE
    assert not is_known_crop("durian")


@pytest.mark.parametrize("profile", [*CROP_PROFILES.values(), DEFAULT_PROFILE])
def test_every_profile_is_well_formed(profile: CropProfile) -> None:
    days = [stage.days_from_planting for stage in profile.stages]
    assert days[0] == 0
    assert days == sorted(set(days))
    assert profile.optimal_temp.min <= profile.optimal_temp.max
    assert profile.optimal_humidity.min <= profile.optimal_humidity.max
    assert profile.growth_days > 0


def test_tomato_parameters() -> None:
    tomato = CROP_PROFILES["tomato"]
    assert (tomato.optimal_temp.min, tomato.optimal_temp.max) == (18, 30)
    assert tomato.max_rainfall == 10
    assert tomato.growth_days == 90
    assert [d.name for d in tomato.diseases] == ["Early Blight", "Late Blight", "Leaf Curl Virus"]


def test_profiles_are_read_only() -> None:
    with pytest.raises(TypeError):
        CROP_PROFILES["okra"] = DEFAULT_PROFILE
    with pytest.raises(ValidationError):
        CROP_PROFILES["rice"].growth_days = 10


def test_inverted_band_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Band(min=30, max=10)


def test_stages_must_increase() -> None:
    with pytest.raises(ValidationError):
        CropProfile(
            optimal_temp=Band(min=10, max=20),
            optimal_humidity=Band(min=40, max=60),
            max_rainfall=10,
            growth_days=50,
            stages=(GrowthMilestone(name="A", days_from_planting=0), GrowthMilestone(name="B", days_from_planting=0)),
        )
