# agents/crop_health/scoring.py
"""
Score-to-label ladders. Each ladder is evaluated top-down; the first lower bound
the score reaches wins, otherwise the floor label applies.
"""
from typing import Tuple

Ladder = Tuple[Tuple[float, str], ...]

WEATHER_SUITABILITY_LADDER: Ladder = (
    (80, "ideal"),
    (60, "favorable"),
    (40, "moderate"),
    (20, "unfavorable"),
)
WEATHER_SUITABILITY_FLOOR = "critical"

DISEASE_RISK_LADDER: Ladder = (
    (70, "critical"),
    (50, "high"),
    (25, "moderate"),
)
DISEASE_RISK_FLOOR = "low"

OVERALL_STATUS_LADDER: Ladder = (
    (80, "excellent"),
    (60, "good"),
    (40, "moderate"),
    (20, "poor"),
)
OVERALL_STATUS_FLOOR = "critical"

def classify(score: float, ladder: Ladder, floor: str) -> str:
    for lower_bound, label in ladder:
        if score >= lower_bound:
            return label
    return floor

def clamp_score(score: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, score))
