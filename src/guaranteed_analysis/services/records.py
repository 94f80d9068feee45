"""Merging external, scanned and manual values into one record."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from guaranteed_analysis.domain.analysis import FindingKind, FoodType
from guaranteed_analysis.domain.nutrients import (
    Nutrient,
    NutritionProfile,
    PartialNutritionReadings,
    ReadingSource,
)
from guaranteed_analysis.domain.products import ExternalProduct
from guaranteed_analysis.domain.records import FieldProvenance, NutritionRecord
from guaranteed_analysis.services.food_type import classify_food_type
from guaranteed_analysis.services.validation import NutrientValidator

_logger = logging.getLogger(__name__)

MATCH_TOLERANCE = 0.1
OVERRIDE_RATIO = 2.0

_EMPTY = NutritionProfile()


@dataclass
class NutritionRecordBuilder:
    """Builds a validated record from external and scanned values.

    External values are the baseline. A scanned value replaces the baseline
    only when the baseline is missing, zero, implausibly low for the food
    type, or less than half the scanned value. Manual values always win.
    """

    validator: NutrientValidator = field(default_factory=NutrientValidator)
    match_tolerance: float = MATCH_TOLERANCE
    override_ratio: float = OVERRIDE_RATIO

    def build(  # noqa: PLR0913
        self,
        baseline: NutritionProfile | None = None,
        scanned: NutritionProfile | PartialNutritionReadings | None = None,
        manual: NutritionProfile | None = None,
        *,
        category_tags: Iterable[str] | None = None,
        product_text: str = "",
    ) -> NutritionRecord:
        """Merge the sources and validate the result."""
        baseline = baseline or _EMPTY
        scanned = scanned or _EMPTY
        manual = manual or _EMPTY
        tags = tuple(category_tags or ())

        # moisture bands do not depend on the food type, so moisture is merged
        # first and the kept value decides wet or dry for the rest
        moisture = self._merge_field(
            Nutrient.MOISTURE,
            baseline=baseline.moisture,
            scanned=scanned.moisture,
            manual=manual.moisture,
            food_type=FoodType.UNKNOWN,
        )
        food_type = classify_food_type(tags, product_text, moisture.value)

        provenance = {
            nutrient: moisture
            if nutrient is Nutrient.MOISTURE
            else self._merge_field(
                nutrient,
                baseline=baseline.get(nutrient),
                scanned=scanned.get(nutrient),
                manual=manual.get(nutrient),
                food_type=food_type,
            )
            for nutrient in Nutrient
        }
        profile = NutritionProfile.from_mapping(
            {nutrient: item.value for nutrient, item in provenance.items()}
        )
        findings = self.validator.validate(profile, food_type)
        return NutritionRecord(
            profile=profile,
            provenance=provenance,
            findings=findings,
            food_type=food_type,
        )

    def build_for_product(
        self,
        product: ExternalProduct,
        scanned: NutritionProfile | PartialNutritionReadings | None = None,
        manual: NutritionProfile | None = None,
    ) -> NutritionRecord:
        """Merge scanned values over a product from the external database."""
        return self.build(
            product.nutrients,
            scanned,
            manual,
            category_tags=product.categories_tags,
            product_text=product.product_text,
        )

    def _merge_field(
        self,
        nutrient: Nutrient,
        *,
        baseline: float | None,
        scanned: float | None,
        manual: float | None,
        food_type: FoodType,
    ) -> FieldProvenance:
        if manual is not None:
            return FieldProvenance(
                nutrient=nutrient,
                value=manual,
                source=ReadingSource.MANUAL,
                baseline=baseline,
                scanned=scanned,
                updated=not self._matches(manual, baseline),
            )

        if scanned is not None and self._should_override(
            nutrient, baseline, scanned, food_type
        ):
            if baseline is not None:
                _logger.info(
                    "Scanned %s %.2f replaces external %.2f",
                    nutrient.value,
                    scanned,
                    baseline,
                )
            return FieldProvenance(
                nutrient=nutrient,
                value=scanned,
                source=ReadingSource.OCR,
                baseline=baseline,
                scanned=scanned,
                updated=True,
            )

        return FieldProvenance(
            nutrient=nutrient,
            value=baseline,
            source=ReadingSource.EXTERNAL_DATABASE if baseline is not None else None,
            baseline=baseline,
            scanned=scanned,
            updated=False,
        )

    def _should_override(
        self,
        nutrient: Nutrient,
        baseline: float | None,
        scanned: float,
        food_type: FoodType,
    ) -> bool:
        if baseline is None or baseline == 0:
            return True
        if self._matches(scanned, baseline):
            return False
        if self._is_suspiciously_low(nutrient, baseline, food_type):
            return True
        return scanned > self.override_ratio * baseline

    def _matches(self, value: float, baseline: float | None) -> bool:
        return baseline is not None and abs(value - baseline) <= self.match_tolerance

    def _is_suspiciously_low(
        self, nutrient: Nutrient, baseline: float, food_type: FoodType
    ) -> bool:
        if nutrient is Nutrient.MOISTURE:
            return any(
                finding.kind is FindingKind.NUTRIENT_TOO_LOW
                for finding in self.validator.check_reading(nutrient, baseline, food_type)
            )
        bounds = self.validator.ranges.bounds_for(nutrient, food_type)
        return bounds is not None and baseline < bounds.minimum

