"""Water quality score combining turbidity and pH bands."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

# Upper bounds (exclusive) in NTU, best band first.
TURBIDITY_BANDS: Tuple[Tuple[float, int], ...] = (
    (5.0, 100),
    (10.0, 80),
    (25.0, 60),
    (50.0, 40),
)
TURBIDITY_FLOOR_SCORE = 20

# Inclusive pH ranges, best band first.
PH_BANDS: Tuple[Tuple[float, float, int], ...] = (
    (6.5, 8.5, 100),
    (6.0, 9.0, 80),
    (5.5, 9.5, 60),
    (5.0, 10.0, 40),
)
PH_FLOOR_SCORE = 20

QUALITY_LABELS: Tuple[Tuple[int, str, str], ...] = (
    (90, "Excellent", "#10b981"),
    (70, "Good", "#22c55e"),
    (50, "Fair", "#eab308"),
    (30, "Poor", "#f97316"),
)


@dataclass(frozen=True)
class WaterQualityScore:
    score: int
    label: str
    color: str


INVALID_SCORE = WaterQualityScore(score=0, label="Invalid Data", color="#94a3b8")


def turbidity_score(turbidity: float) -> int:
    for upper, score in TURBIDITY_BANDS:
        if turbidity < upper:
            return score
    return TURBIDITY_FLOOR_SCORE


def ph_score(ph: float) -> int:
    for low, high, score in PH_BANDS:
        if low <= ph <= high:
            return score
    return PH_FLOOR_SCORE


def score_water_quality(ph: float, turbidity: float) -> WaterQualityScore:
    """Average the pH and turbidity scores and attach a display label."""
    if not (math.isfinite(ph) and math.isfinite(turbidity)):
        return INVALID_SCORE

    overall = (turbidity_score(turbidity) + ph_score(ph)) // 2
    for threshold, label, color in QUALITY_LABELS:
        if overall >= threshold:
            return WaterQualityScore(score=overall, label=label, color=color)
    return WaterQualityScore(score=overall, label="Very Poor", color="#ef4444")
