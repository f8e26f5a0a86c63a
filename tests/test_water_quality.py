from __future__ import annotations

import pytest

from services.water_quality import ph_score, score_water_quality, turbidity_score


@pytest.mark.parametrize(
    ("turbidity", "expected"),
    [(0.0, 100), (4.99, 100), (5.0, 80), (9.9, 80), (10.0, 60), (24.0, 60), (25.0, 40), (50.0, 20), (400.0, 20)],
)
def test_turbidity_bands(turbidity: float, expected: int) -> None:
    assert turbidity_score(turbidity) == expected


@pytest.mark.parametrize(
    ("ph", "expected"),
    [(7.0, 100), (6.5, 100), (8.5, 100), (6.2, 80), (9.0, 80), (5.6, 60), (9.5, 60), (5.0, 40), (10.0, 40), (4.9, 20), (12.0, 20)],
)
def test_ph_bands(ph: float, expected: int) -> None:
    assert ph_score(ph) == expected


def test_clean_water_scores_excellent() -> None:
    result = score_water_quality(ph=7.2, turbidity=2.0)

    assert result.score == 100
    assert result.label == "Excellent"


def test_mixed_readings_average_the_scores() -> None:
    result = score_water_quality(ph=6.2, turbidity=30.0)

    assert result.score == 60
    assert result.label == "Fair"


def test_worst_readings_score_very_poor() -> None:
    result = score_water_quality(ph=3.0, turbidity=120.0)

    assert result.score == 20
    assert result.label == "Very Poor"


def test_non_finite_readings_are_invalid() -> None:
    result = score_water_quality(ph=float("nan"), turbidity=1.0)

    assert result.score == 0
    assert result.label == "Invalid Data"
