"""Plausibility range tables used by the nutrient validator."""

from pydantic import BaseModel, Field, model_validator

from guaranteed_analysis.domain.analysis import FindingKind, FoodType
from guaranteed_analysis.domain.nutrients import Nutrient


class NutrientBounds(BaseModel):
    """Inclusive plausible range for a nutrient percentage."""

    minimum: float = Field(ge=0.0, le=100.0)
    maximum: float = Field(ge=0.0, le=100.0)

    @model_validator(mode="after")
    def _check_order(self) -> "NutrientBounds":
        if self.minimum > self.maximum:
            raise ValueError("minimum must not exceed maximum")
        return self

    def union(self, other: "NutrientBounds") -> "NutrientBounds":
        """Return the smallest range covering both ranges."""
        return NutrientBounds(
            minimum=min(self.minimum, other.minimum),
            maximum=max(self.maximum, other.maximum),
        )


class MoistureBand(BaseModel):
    """Half-open moisture band [lower, upper) and how to treat it.

    A missing bound is unbounded. ``verdict`` is None for bands that are
    normal for some kind of food.
    """

    lower: float | None = None
    upper: float | None = None
    verdict: FindingKind | None = None
    description: str

    def contains(self, moisture: float) -> bool:
        """Return True if the value falls inside the band."""
        if self.lower is not None and moisture < self.lower:
            return False
        return self.upper is None or moisture < self.upper


def _default_wet_bounds() -> dict[Nutrient, NutrientBounds]:
    return {
        Nutrient.PROTEIN: NutrientBounds(minimum=5.0, maximum=20.0),
        Nutrient.FAT: NutrientBounds(minimum=1.0, maximum=15.0),
        Nutrient.FIBER: NutrientBounds(minimum=0.0, maximum=3.0),
        Nutrient.ASH: NutrientBounds(minimum=0.5, maximum=5.0),
    }


def _default_dry_bounds() -> dict[Nutrient, NutrientBounds]:
    return {
        Nutrient.PROTEIN: NutrientBounds(minimum=20.0, maximum=60.0),
        Nutrient.FAT: NutrientBounds(minimum=5.0, maximum=30.0),
        Nutrient.FIBER: NutrientBounds(minimum=0.0, maximum=10.0),
        Nutrient.ASH: NutrientBounds(minimum=3.0, maximum=12.0),
    }


def _default_moisture_bands() -> list[MoistureBand]:
    return [
        MoistureBand(
            lower=None,
            upper=6.0,
            verdict=FindingKind.NUTRIENT_TOO_LOW,
            description="below anything found in cat food",
        ),
        MoistureBand(lower=6.0, upper=12.0, description="normal for dry food"),
        MoistureBand(
            lower=12.0,
            upper=15.0,
            verdict=FindingKind.UNUSUAL_RANGE,
            description="high for dry food",
        ),
        MoistureBand(lower=15.0, upper=30.0, description="semi-moist food"),
        MoistureBand(
            lower=30.0,
            upper=70.0,
            verdict=FindingKind.UNUSUAL_RANGE,
            description="between semi-moist and wet food",
        ),
        MoistureBand(lower=70.0, upper=85.0, description="normal for wet food"),
        MoistureBand(
            lower=85.0,
            upper=100.0,
            verdict=FindingKind.UNUSUAL_RANGE,
            description="very high even for wet food",
        ),
        MoistureBand(
            lower=100.0,
            upper=None,
            verdict=FindingKind.NUTRIENT_TOO_HIGH,
            description="impossible",
        ),
    ]


class ValidationRanges(BaseModel):
    """Tunable thresholds for nutrient plausibility checks."""

    wet: dict[Nutrient, NutrientBounds] = Field(default_factory=_default_wet_bounds)
    dry: dict[Nutrient, NutrientBounds] = Field(default_factory=_default_dry_bounds)
    moisture_bands: list[MoistureBand] = Field(default_factory=_default_moisture_bands)
    total_max: float = 105.0
    carbs_high: float = 10.0
    carbs_too_high: float = 30.0

    @model_validator(mode="after")
    def _check_tables(self) -> "ValidationRanges":
        if Nutrient.MOISTURE in self.wet or Nutrient.MOISTURE in self.dry:
            raise ValueError("moisture is validated with moisture_bands")
        if set(self.wet) != set(self.dry):
            raise ValueError("wet and dry tables must cover the same nutrients")
        if self.carbs_high > self.carbs_too_high:
            raise ValueError("carbs_high must not exceed carbs_too_high")
        return self

    def bounds_for(self, nutrient: Nutrient, food_type: FoodType) -> NutrientBounds | None:
        """Return the plausible range for a nutrient and food type.

        Unknown food uses the union of the wet and dry ranges.
        """
        if food_type is FoodType.WET:
            return self.wet.get(nutrient)
        if food_type is FoodType.DRY:
            return self.dry.get(nutrient)
        wet = self.wet.get(nutrient)
        dry = self.dry.get(nutrient)
        if wet is None or dry is None:
            return wet or dry
        return wet.union(dry)

    def moisture_band(self, moisture: float) -> MoistureBand | None:
        """Return the band containing a moisture value."""
        for band in self.moisture_bands:
            if band.contains(moisture):
                return band
        return None
