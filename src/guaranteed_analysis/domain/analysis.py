"""Derived analysis models: carbs tiers, calories, food type, findings."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from guaranteed_analysis.domain.nutrients import Nutrient


class CarbsLevel(StrEnum):
    """Quality tier for a carbohydrate percentage."""

    GOOD = "good"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def label(self) -> str:
        """Human-readable label for display."""
        return _CARBS_LABELS[self]


_CARBS_LABELS = {
    CarbsLevel.GOOD: "Excellent",
    CarbsLevel.MODERATE: "Acceptable",
    CarbsLevel.HIGH: "Too High",
}


@dataclass(frozen=True)
class CalorieBreakdown:
    """Calories per 100g contributed by each macronutrient."""

    protein_kcal: float
    fat_kcal: float
    carbs_kcal: float

    @property
    def total_kcal(self) -> float:
        return self.protein_kcal + self.fat_kcal + self.carbs_kcal


class FoodType(StrEnum):
    """Wet or dry food, used to pick plausible nutrient ranges."""

    WET = "wet"
    DRY = "dry"
    UNKNOWN = "unknown"


class FindingKind(StrEnum):
    """Kinds of advisory validation findings."""

    TOTAL_TOO_HIGH = "total_too_high"
    NUTRIENT_TOO_HIGH = "nutrient_too_high"
    NUTRIENT_TOO_LOW = "nutrient_too_low"
    UNUSUAL_RANGE = "unusual_range"
    CARBS_HIGH = "carbs_high"
    CARBS_TOO_HIGH = "carbs_too_high"


_BLOCKING_KINDS = frozenset({FindingKind.NUTRIENT_TOO_HIGH, FindingKind.NUTRIENT_TOO_LOW})


@dataclass(frozen=True)
class ValidationFinding:
    """Advisory note produced by range-checking nutrient values."""

    kind: FindingKind
    observed_value: float
    message: str
    nutrient: "Nutrient | None" = None

    @property
    def is_blocking(self) -> bool:
        """True when the value is outside what the food could contain."""
        return self.kind in _BLOCKING_KINDS

    def as_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "nutrient": self.nutrient.value if self.nutrient is not None else None,
            "observed_value": self.observed_value,
            "message": self.message,
        }
