"""Plausibility checks for nutrient values."""

import logging
from dataclasses import dataclass, field

from guaranteed_analysis.domain.analysis import FindingKind, FoodType, ValidationFinding
from guaranteed_analysis.domain.nutrients import Nutrient, NutritionProfile
from guaranteed_analysis.domain.validation import ValidationRanges

_logger = logging.getLogger(__name__)


@dataclass
class NutrientValidator:
    """Annotates nutrient values with advisory findings.

    The validator never rejects or drops data; callers decide what to do with
    the findings.
    """

    ranges: ValidationRanges = field(default_factory=ValidationRanges)

    def validate(
        self, profile: NutritionProfile, food_type: FoodType
    ) -> list[ValidationFinding]:
        """Return findings for a whole profile."""
        findings: list[ValidationFinding] = []

        total = profile.total_percentage
        if total > self.ranges.total_max:
            findings.append(
                ValidationFinding(
                    kind=FindingKind.TOTAL_TOO_HIGH,
                    observed_value=total,
                    message=(
                        f"Nutrients add up to {total:.1f}%, "
                        f"more than {self.ranges.total_max:.0f}%"
                    ),
                )
            )

        for nutrient in Nutrient:
            value = profile.get(nutrient)
            if value is not None:
                findings.extend(self.check_reading(nutrient, value, food_type))

        carbs = profile.carbs_percent
        if carbs is not None:
            findings.extend(self._check_carbs(carbs))

        return findings

    def check_reading(
        self, nutrient: Nutrient, value: float, food_type: FoodType
    ) -> list[ValidationFinding]:
        """Return findings for a single nutrient value."""
        if nutrient is Nutrient.MOISTURE:
            return self._check_moisture(value)

        bounds = self.ranges.bounds_for(nutrient, food_type)
        if bounds is None:
            return []
        if value > bounds.maximum:
            return [
                ValidationFinding(
                    kind=FindingKind.NUTRIENT_TOO_HIGH,
                    nutrient=nutrient,
                    observed_value=value,
                    message=(
                        f"{nutrient.value.capitalize()} {value:.1f}% is above "
                        f"{bounds.maximum:.1f}% expected for {food_type.value} food"
                    ),
                )
            ]
        if value < bounds.minimum:
            return [
                ValidationFinding(
                    kind=FindingKind.NUTRIENT_TOO_LOW,
                    nutrient=nutrient,
                    observed_value=value,
                    message=(
                        f"{nutrient.value.capitalize()} {value:.1f}% is below "
                        f"{bounds.minimum:.1f}% expected for {food_type.value} food"
                    ),
                )
            ]
        return []

    def is_acceptable(self, nutrient: Nutrient, value: float, food_type: FoodType) -> bool:
        """True when a reading has no blocking findings."""
        findings = self.check_reading(nutrient, value, food_type)
        blocking = [finding for finding in findings if finding.is_blocking]
        if blocking:
            _logger.info("Rejecting reading: %s", blocking[0].message)
        return not blocking

    def _check_moisture(self, moisture: float) -> list[ValidationFinding]:
        band = self.ranges.moisture_band(moisture)
        if band is None or band.verdict is None:
            return []
        return [
            ValidationFinding(
                kind=band.verdict,
                nutrient=Nutrient.MOISTURE,
                observed_value=moisture,
                message=f"Moisture {moisture:.1f}% is {band.description}",
            )
        ]

    def _check_carbs(self, carbs: float) -> list[ValidationFinding]:
        if carbs > self.ranges.carbs_too_high:
            return [
                ValidationFinding(
                    kind=FindingKind.CARBS_TOO_HIGH,
                    observed_value=carbs,
                    message=(
                        f"Carbs {carbs:.1f}% is above "
                        f"{self.ranges.carbs_too_high:.0f}%, likely a data error"
                    ),
                )
            ]
        if carbs > self.ranges.carbs_high:
            return [
                ValidationFinding(
                    kind=FindingKind.CARBS_HIGH,
                    observed_value=carbs,
                    message=(
                        f"Carbs {carbs:.1f}% is above "
                        f"{self.ranges.carbs_high:.0f}%, common in dry food"
                    ),
                )
            ]
        return []
