"""Carbohydrate, calorie and carbs-tier calculations."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from guaranteed_analysis.domain.analysis import CalorieBreakdown, CarbsLevel

PROTEIN_KCAL_PER_G = 3.5
FAT_KCAL_PER_G = 8.5
CARBS_KCAL_PER_G = 3.5

GOOD_CARBS_LIMIT = 5.0
MODERATE_CARBS_LIMIT = 10.0


def round_half_up(value: float, places: int = 2) -> float:
    """Round to a number of decimals, halves away from zero.

    Non-finite values are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as context:
        context.prec = max(context.prec, exact.adjusted() + places + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def calculate_carbs(  # noqa: PLR0913
    *,
    protein: float,
    fat: float,
    fiber: float,
    moisture: float,
    ash: float,
) -> float:
    """Return carbohydrates by difference on a dry-matter basis.

    carbs% = 100 * (100 - protein - fat - fiber - moisture - ash) / (100 - moisture)

    Returns 0 when moisture leaves no dry matter or when the listed values add
    up to more than 100%.
    """
    if moisture >= 100:
        return 0.0

    dry_matter = 100 - moisture
    residual = 100 - protein - fat - fiber - moisture - ash
    if residual < 0:
        return 0.0

    return round_half_up(100 * residual / dry_matter)


def classify_carbs(carbs: float) -> CarbsLevel:
    """Return the quality tier for a carbohydrate percentage."""
    if carbs < GOOD_CARBS_LIMIT:
        return CarbsLevel.GOOD
    if carbs < MODERATE_CARBS_LIMIT:
        return CarbsLevel.MODERATE
    return CarbsLevel.HIGH


def calculate_calories(*, protein: float, fat: float, carbs: float) -> CalorieBreakdown:
    """Return kcal per 100g contributed by protein, fat and carbs."""
    return CalorieBreakdown(
        protein_kcal=round_half_up(protein * PROTEIN_KCAL_PER_G),
        fat_kcal=round_half_up(fat * FAT_KCAL_PER_G),
        carbs_kcal=round_half_up(carbs * CARBS_KCAL_PER_G),
    )
