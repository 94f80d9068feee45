"""Tests for carbohydrate and calorie calculations."""

import itertools
import math

import pytest

from guaranteed_analysis.domain.analysis import CarbsLevel
from guaranteed_analysis.domain.nutrients import Nutrient, NutritionProfile
from guaranteed_analysis.services.nutrition_math import (
    calculate_calories,
    calculate_carbs,
    classify_carbs,
    round_half_up,
)


def test_calculate_carbs_wet_food() -> None:
    carbs = calculate_carbs(protein=11.5, fat=6.5, fiber=0.5, moisture=79, ash=1.8)

    assert carbs == pytest.approx(3.33, abs=0.01)


def test_calculate_carbs_dry_food() -> None:
    carbs = calculate_carbs(protein=40, fat=18, fiber=3, moisture=10, ash=8)

    assert carbs == pytest.approx(23.33, abs=0.01)


def test_calculate_carbs_full_moisture_returns_zero() -> None:
    assert calculate_carbs(protein=0, fat=0, fiber=0, moisture=100, ash=0) == 0
    assert calculate_carbs(protein=5, fat=5, fiber=1, moisture=120, ash=1) == 0


def test_calculate_carbs_over_100_percent_returns_zero() -> None:
    assert calculate_carbs(protein=50, fat=30, fiber=10, moisture=10, ash=10) == 0


def test_calculate_carbs_rounds_to_two_decimals() -> None:
    carbs = calculate_carbs(protein=10, fat=5, fiber=1, moisture=80, ash=2)

    assert carbs == 10.0
    assert calculate_carbs(protein=30, fat=15, fiber=2, moisture=9, ash=7) == 40.66


def test_calculate_carbs_matches_formula_within_range() -> None:
    grid = [0.0, 2.5, 10.0, 25.0]
    for protein, fat, fiber, ash in itertools.product(grid, repeat=4):
        for moisture in (0.0, 8.0, 50.0, 78.0):
            if protein + fat + fiber + moisture + ash > 100:
                continue
            carbs = calculate_carbs(
                protein=protein, fat=fat, fiber=fiber, moisture=moisture, ash=ash
            )
            expected = (
                100 * (100 - protein - fat - fiber - moisture - ash) / (100 - moisture)
            )
            assert 0 <= carbs <= 100
            assert carbs == pytest.approx(expected, abs=0.005)


def test_calculate_carbs_never_negative() -> None:
    for total in range(0, 300, 7):
        carbs = calculate_carbs(protein=total, fat=10, fiber=5, moisture=20, ash=5)
        assert carbs >= 0


@pytest.mark.parametrize(
    ("carbs", "level"),
    [
        (3.33, CarbsLevel.GOOD),
        (4.99, CarbsLevel.GOOD),
        (5.0, CarbsLevel.MODERATE),
        (7.5, CarbsLevel.MODERATE),
        (10.0, CarbsLevel.HIGH),
        (23.33, CarbsLevel.HIGH),
    ],
)
def test_classify_carbs(carbs: float, level: CarbsLevel) -> None:
    assert classify_carbs(carbs) is level


def test_carbs_level_labels() -> None:
    assert CarbsLevel.GOOD.label == "Excellent"
    assert CarbsLevel.MODERATE.label == "Acceptable"
    assert CarbsLevel.HIGH.label == "Too High"


def test_calculate_calories() -> None:
    calories = calculate_calories(protein=11.5, fat=6.5, carbs=3.33)

    assert calories.protein_kcal == pytest.approx(40.25, abs=0.1)
    assert calories.fat_kcal == pytest.approx(55.25, abs=0.1)
    assert calories.carbs_kcal == pytest.approx(11.66, abs=0.1)
    assert calories.total_kcal == pytest.approx(107.16, abs=0.1)


def test_round_half_up() -> None:
    assert round_half_up(11.655) == 11.66
    assert round_half_up(2.675) == 2.68
    assert round_half_up(78.05, 1) == 78.1
    assert round_half_up(-1.005) == -1.01


def test_round_half_up_handles_huge_and_non_finite_values() -> None:
    assert round_half_up(3.5e27) == 3.5e27
    assert round_half_up(1e300, 1) == 1e300
    assert round_half_up(math.inf) == math.inf
    assert math.isnan(round_half_up(math.nan))


def test_profile_derives_carbs_only_when_complete() -> None:
    partial = NutritionProfile(protein=11.5, fat=6.5, fiber=0.5, moisture=79)
    complete = partial.with_value(Nutrient.ASH, 1.8)

    assert partial.carbs_percent is None
    assert partial.carbs_level is None
    assert partial.calories is None
    assert complete.carbs_percent == pytest.approx(3.33, abs=0.01)
    assert complete.carbs_level is CarbsLevel.GOOD
    assert complete.calories is not None
