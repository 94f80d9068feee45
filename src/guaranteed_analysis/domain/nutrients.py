"""Nutrient domain models."""

from dataclasses import dataclass, replace
from enum import StrEnum

from guaranteed_analysis.domain.analysis import CalorieBreakdown, CarbsLevel
from guaranteed_analysis.services.nutrition_math import (
    calculate_calories,
    calculate_carbs,
    classify_carbs,
)


class Nutrient(StrEnum):
    """Nutrients listed in a guaranteed analysis."""

    PROTEIN = "protein"
    FAT = "fat"
    FIBER = "fiber"
    MOISTURE = "moisture"
    ASH = "ash"


class ReadingSource(StrEnum):
    """Where a nutrient value came from."""

    OCR = "ocr"
    EXTERNAL_DATABASE = "external_database"
    MANUAL = "manual"


@dataclass(frozen=True)
class NutrientReading:
    """A single value for one nutrient."""

    nutrient: Nutrient
    value: float
    source: ReadingSource


@dataclass(frozen=True)
class PartialNutritionReadings:
    """Result of one extraction pass; each nutrient is found or not."""

    protein: float | None = None
    fat: float | None = None
    fiber: float | None = None
    moisture: float | None = None
    ash: float | None = None

    def get(self, nutrient: Nutrient) -> float | None:
        """Return the value for a nutrient, if detected."""
        return getattr(self, nutrient.value)

    def found(self) -> dict[Nutrient, float]:
        """Return only the detected nutrients."""
        return {
            nutrient: value
            for nutrient in Nutrient
            if (value := self.get(nutrient)) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.found()

    def as_readings(self, source: ReadingSource) -> list[NutrientReading]:
        """Convert detected values into readings tagged with a source."""
        return [
            NutrientReading(nutrient=nutrient, value=value, source=source)
            for nutrient, value in self.found().items()
        ]


@dataclass(frozen=True)
class NutritionProfile:
    """Validated nutrient percentages for one product.

    Carbohydrates are never stored; they are recomputed from the five base
    values whenever asked for.
    """

    protein: float | None = None
    fat: float | None = None
    fiber: float | None = None
    moisture: float | None = None
    ash: float | None = None

    @classmethod
    def from_mapping(cls, values: dict[Nutrient, float | None]) -> "NutritionProfile":
        """Build a profile from a nutrient-keyed mapping."""
        return cls(**{nutrient.value: values.get(nutrient) for nutrient in Nutrient})

    def get(self, nutrient: Nutrient) -> float | None:
        """Return the value for a nutrient, if known."""
        return getattr(self, nutrient.value)

    def with_value(self, nutrient: Nutrient, value: float | None) -> "NutritionProfile":
        """Return a copy with one nutrient replaced."""
        return replace(self, **{nutrient.value: value})

    @property
    def is_complete(self) -> bool:
        return all(self.get(nutrient) is not None for nutrient in Nutrient)

    @property
    def total_percentage(self) -> float:
        """Sum of all present values; absent values count as zero."""
        return sum(self.get(nutrient) or 0.0 for nutrient in Nutrient)

    @property
    def carbs_percent(self) -> float | None:
        """Carbohydrates on a dry-matter basis, when all five values are known."""
        if not self.is_complete:
            return None
        return calculate_carbs(
            protein=self.protein,
            fat=self.fat,
            fiber=self.fiber,
            moisture=self.moisture,
            ash=self.ash,
        )

    @property
    def carbs_level(self) -> CarbsLevel | None:
        carbs = self.carbs_percent
        if carbs is None:
            return None
        return classify_carbs(carbs)

    @property
    def calories(self) -> CalorieBreakdown | None:
        carbs = self.carbs_percent
        if carbs is None:
            return None
        return calculate_calories(protein=self.protein, fat=self.fat, carbs=carbs)

    def as_dict(self) -> dict[str, float | None]:
        """Return the base values as plain data."""
        return {nutrient.value: self.get(nutrient) for nutrient in Nutrient}
