"""Merged nutrition record models."""

from dataclasses import dataclass

from guaranteed_analysis.domain.analysis import (
    CalorieBreakdown,
    CarbsLevel,
    FoodType,
    ValidationFinding,
)
from guaranteed_analysis.domain.nutrients import Nutrient, NutritionProfile, ReadingSource


@dataclass(frozen=True)
class FieldProvenance:
    """Where the final value of one nutrient came from."""

    nutrient: Nutrient
    value: float | None
    source: ReadingSource | None
    baseline: float | None
    scanned: float | None
    updated: bool

    def as_dict(self) -> dict[str, object]:
        return {
            "nutrient": self.nutrient.value,
            "value": self.value,
            "source": self.source.value if self.source is not None else None,
            "baseline": self.baseline,
            "scanned": self.scanned,
            "updated": self.updated,
        }


@dataclass(frozen=True)
class NutritionRecord:
    """Final nutrition record handed back to the caller."""

    profile: NutritionProfile
    provenance: dict[Nutrient, FieldProvenance]
    findings: list[ValidationFinding]
    food_type: FoodType

    @property
    def carbs_percent(self) -> float | None:
        return self.profile.carbs_percent

    @property
    def carbs_level(self) -> CarbsLevel | None:
        return self.profile.carbs_level

    @property
    def calories(self) -> CalorieBreakdown | None:
        return self.profile.calories

    @property
    def has_updates(self) -> bool:
        """True when any scanned value replaced an external one."""
        return any(field.updated for field in self.provenance.values())

    def as_dict(self) -> dict[str, object]:
        """Return the record as plain, serializable data."""
        calories = self.calories
        carbs_level = self.carbs_level
        return {
            "nutrients": self.profile.as_dict(),
            "carbs_percent": self.carbs_percent,
            "carbs_level": carbs_level.value if carbs_level is not None else None,
            "calories": (
                {
                    "protein_kcal": calories.protein_kcal,
                    "fat_kcal": calories.fat_kcal,
                    "carbs_kcal": calories.carbs_kcal,
                }
                if calories is not None
                else None
            ),
            "food_type": self.food_type.value,
            "provenance": {
                nutrient.value: field.as_dict()
                for nutrient, field in self.provenance.items()
            },
            "findings": [finding.as_dict() for finding in self.findings],
        }
