# agents/crop_health/profiles.py
"""
Per-crop agronomic parameters: optimal bands, growth timeline, disease triggers and pests
"""
from types import MappingProxyType
from typing import List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

class Band(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    @model_validator(mode="after")
    def _ordered(self) -> "Band":
        if self.min > self.max:
            raise ValueError(f"band minimum {self.min} exceeds maximum {self.max}")
        return self

class GrowthMilestone(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    days_from_planting: int = Field(..., ge=0)

class DiseaseTrigger(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    humidity: float
    temp: float

class PestActivity(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    season: str  # monsoon, summer, winter or all
    conditions: str

class CropProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    optimal_temp: Band
    optimal_humidity: Band
    max_rainfall: float
    growth_days: int = Field(..., gt=0)
    stages: Tuple[GrowthMilestone, ...]
    diseases: Tuple[DiseaseTrigger, ...] = ()
    pests: Tuple[PestActivity, ...] = ()

    @model_validator(mode="after")
    def _stages_increase(self) -> "CropProfile":
        if not self.stages:
            raise ValueError("a crop profile needs at least one growth stage")
        days = [stage.days_from_planting for stage in self.stages]
        if any(later <= earlier for earlier, later in zip(days, days[1:])):
            raise ValueError(f"growth stages must be strictly increasing, got {days}")
        return self

def _profile(
    temp: Tuple[float, float],
    humidity: Tuple[float, float],
    max_rainfall: float,
    growth_days: int,
    stages: List[Tuple[str, int]],
    diseases: List[Tuple[str, float, float]],
    pests: List[Tuple[str, str, str]],
) -> CropProfile:
    return CropProfile(
        optimal_temp=Band(min=temp[0], max=temp[1]),
        optimal_humidity=Band(min=humidity[0], max=humidity[1]),
        max_rainfall=max_rainfall,
        growth_days=growth_days,
        stages=tuple(GrowthMilestone(name=n, days_from_planting=d) for n, d in stages),
        diseases=tuple(DiseaseTrigger(name=n, humidity=h, temp=t) for n, h, t in diseases),
        pests=tuple(PestActivity(name=n, season=s, conditions=c) for n, s, c in pests),
    )

CROP_PROFILES: Mapping[str, CropProfile] = MappingProxyType({
    "rice": _profile(
        temp=(20, 35), humidity=(60, 85), max_rainfall=30, growth_days=120,
        stages=[
            ("Germination", 0), ("Seedling", 15), ("Tillering", 30), ("Stem Elongation", 55),
            ("Heading", 75), ("Flowering", 90), ("Grain Filling", 100), ("Maturity", 120),
        ],
        diseases=[("Blast", 85, 25), ("Sheath Blight", 90, 30), ("Brown Spot", 80, 28)],
        pests=[
            ("Stem Borer", "monsoon", "humid and warm"),
            ("Brown Planthopper", "monsoon", "high humidity"),
        ],
    ),
    "wheat": _profile(
        temp=(10, 25), humidity=(40, 60), max_rainfall=15, growth_days=140,
        stages=[
            ("Germination", 0), ("Seedling", 14), ("Tillering", 35), ("Stem Extension", 60),
            ("Heading", 85), ("Flowering", 100), ("Grain Filling", 120), ("Maturity", 140),
        ],
        diseases=[("Rust", 70, 20), ("Powdery Mildew", 60, 18), ("Karnal Bunt", 75, 22)],
        pests=[
            ("Aphids", "winter", "cool and dry"),
            ("Termites", "all", "dry soil"),
        ],
    ),
    "tomato": _profile(
        temp=(18, 30), humidity=(50, 70), max_rainfall=10, growth_days=90,
        stages=[
            ("Germination", 0), ("Seedling", 14), ("Vegetative", 30), ("Flowering", 45),
            ("Fruiting", 60), ("Harvesting", 75), ("Maturity", 90),
        ],
        diseases=[("Early Blight", 75, 25), ("Late Blight", 90, 20), ("Leaf Curl Virus", 60, 30)],
        pests=[
            ("Whitefly", "summer", "hot and dry"),
            ("Fruit Borer", "monsoon", "humid"),
        ],
    ),
    "potato": _profile(
        temp=(15, 25), humidity=(60, 80), max_rainfall=15, growth_days=100,
        stages=[
            ("Sprouting", 0), ("Vegetative Growth", 20), ("Tuber Initiation", 40),
            ("Tuber Bulking", 60), ("Maturity", 90), ("Harvest", 100),
        ],
        diseases=[("Late Blight", 90, 18), ("Early Blight", 70, 25)],
        pests=[
            ("Potato Tuber Moth", "summer", "warm"),
            ("Aphids", "all", "moderate humidity"),
        ],
    ),
    "cotton": _profile(
        temp=(22, 35), humidity=(50, 70), max_rainfall=25, growth_days=160,
        stages=[
            ("Germination", 0), ("Seedling", 20), ("Square Formation", 45), ("Flowering", 70),
            ("Boll Development", 100), ("Boll Opening", 140), ("Harvest", 160),
        ],
        diseases=[("Bacterial Blight", 80, 30), ("Grey Mildew", 85, 25)],
        pests=[
            ("Bollworm", "monsoon", "humid and warm"),
            ("Whitefly", "summer", "hot and dry"),
        ],
    ),
    "maize": _profile(
        temp=(21, 32), humidity=(50, 75), max_rainfall=20, growth_days=110,
        stages=[
            ("Germination", 0), ("Seedling", 14), ("Vegetative", 35), ("Tasseling", 55),
            ("Silking", 65), ("Grain Filling", 85), ("Maturity", 110),
        ],
        diseases=[("Turcicum Leaf Blight", 80, 25), ("Downy Mildew", 90, 22)],
        pests=[
            ("Fall Armyworm", "monsoon", "warm and humid"),
            ("Stem Borer", "all", "moderate"),
        ],
    ),
})

DEFAULT_PROFILE = _profile(
    temp=(18, 30), humidity=(50, 75), max_rainfall=20, growth_days=100,
    stages=[
        ("Germination", 0), ("Seedling", 15), ("Vegetative", 30), ("Flowering", 50),
        ("Fruiting", 70), ("Maturity", 100),
    ],
    diseases=[("Fungal Infection", 80, 25), ("Bacterial Wilt", 75, 28)],
    pests=[("General Pests", "all", "various")],
)

def normalize_crop_name(crop_name: str) -> str:
    return (crop_name or "").strip().lower()

def get_crop_profile(crop_name: str) -> CropProfile:
    """Profile for a crop, falling back to the default profile for unknown names"""
    return CROP_PROFILES.get(normalize_crop_name(crop_name), DEFAULT_PROFILE)

def is_known_crop(crop_name: str) -> bool:
    return normalize_crop_name(crop_name) in CROP_PROFILES
