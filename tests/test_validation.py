"""Tests for nutrient plausibility validation."""

import pytest
from pydantic import ValidationError

from guaranteed_analysis.domain.analysis import FindingKind, FoodType
from guaranteed_analysis.domain.nutrients import Nutrient, NutritionProfile
from guaranteed_analysis.domain.validation import NutrientBounds, ValidationRanges
from guaranteed_analysis.services.validation import NutrientValidator

WET_PROFILE = NutritionProfile(protein=11.5, fat=6.5, fiber=0.5, moisture=79.0, ash=1.8)
DRY_PROFILE = NutritionProfile(protein=40.0, fat=18.0, fiber=3.0, moisture=10.0, ash=8.0)


def _kinds(findings, nutrient=None):
    return [
        finding.kind
        for finding in findings
        if nutrient is None or finding.nutrient is nutrient
    ]


def test_plausible_wet_profile_has_no_findings(validator: NutrientValidator) -> None:
    assert validator.validate(WET_PROFILE, FoodType.WET) == []


def test_dry_profile_flags_high_carbs_only(validator: NutrientValidator) -> None:
    findings = validator.validate(DRY_PROFILE, FoodType.DRY)

    assert _kinds(findings) == [FindingKind.CARBS_HIGH]
    assert findings[0].observed_value == pytest.approx(23.33, abs=0.01)


def test_dry_values_are_too_high_for_wet_food(validator: NutrientValidator) -> None:
    findings = validator.validate(DRY_PROFILE, FoodType.WET)

    assert _kinds(findings, Nutrient.PROTEIN) == [FindingKind.NUTRIENT_TOO_HIGH]
    assert _kinds(findings, Nutrient.FAT) == [FindingKind.NUTRIENT_TOO_HIGH]
    assert _kinds(findings, Nutrient.ASH) == [FindingKind.NUTRIENT_TOO_HIGH]


def test_wet_values_are_too_low_for_dry_food(validator: NutrientValidator) -> None:
    findings = validator.validate(WET_PROFILE, FoodType.DRY)

    assert _kinds(findings, Nutrient.PROTEIN) == [FindingKind.NUTRIENT_TOO_LOW]
    assert _kinds(findings, Nutrient.ASH) == [FindingKind.NUTRIENT_TOO_LOW]


def test_unknown_food_uses_union_of_ranges(validator: NutrientValidator) -> None:
    assert validator.check_reading(Nutrient.PROTEIN, 11.5, FoodType.UNKNOWN) == []
    assert validator.check_reading(Nutrient.PROTEIN, 40.0, FoodType.UNKNOWN) == []
    findings = validator.check_reading(Nutrient.PROTEIN, 75.0, FoodType.UNKNOWN)
    assert _kinds(findings) == [FindingKind.NUTRIENT_TOO_HIGH]


def test_total_too_high(validator: NutrientValidator) -> None:
    profile = NutritionProfile(protein=50, fat=30, fiber=10, moisture=10, ash=10)

    findings = validator.validate(profile, FoodType.DRY)

    total = [f for f in findings if f.kind is FindingKind.TOTAL_TOO_HIGH]
    assert len(total) == 1
    assert total[0].observed_value == 110
    assert total[0].nutrient is None


def test_total_treats_missing_as_zero(validator: NutrientValidator) -> None:
    profile = NutritionProfile(protein=60, moisture=50)

    assert FindingKind.TOTAL_TOO_HIGH in _kinds(validator.validate(profile, FoodType.DRY))


@pytest.mark.parametrize(
    ("moisture", "kind"),
    [
        (5.0, FindingKind.NUTRIENT_TOO_LOW),
        (6.0, None),
        (10.0, None),
        (12.0, FindingKind.UNUSUAL_RANGE),
        (14.9, FindingKind.UNUSUAL_RANGE),
        (15.0, None),
        (25.0, None),
        (30.0, FindingKind.UNUSUAL_RANGE),
        (69.9, FindingKind.UNUSUAL_RANGE),
        (70.0, None),
        (79.0, None),
        (85.0, FindingKind.UNUSUAL_RANGE),
        (99.9, FindingKind.UNUSUAL_RANGE),
        (100.0, FindingKind.NUTRIENT_TOO_HIGH),
    ],
)
def test_moisture_bands(
    validator: NutrientValidator, moisture: float, kind: FindingKind | None
) -> None:
    for food_type in FoodType:
        findings = validator.check_reading(Nutrient.MOISTURE, moisture, food_type)
        assert _kinds(findings) == ([kind] if kind else [])


def test_moving_moisture_out_of_range_adds_findings(
    validator: NutrientValidator,
) -> None:
    plausible = validator.validate(WET_PROFILE, FoodType.WET)
    implausible = validator.validate(
        WET_PROFILE.with_value(Nutrient.MOISTURE, 5.0), FoodType.WET
    )

    assert len(_kinds(implausible, Nutrient.MOISTURE)) > len(
        _kinds(plausible, Nutrient.MOISTURE)
    )


def test_carbs_too_high(validator: NutrientValidator) -> None:
    profile = NutritionProfile(protein=25, fat=8, fiber=2, moisture=10, ash=5)

    findings = validator.validate(profile, FoodType.DRY)

    assert _kinds(findings) == [FindingKind.CARBS_TOO_HIGH]


def test_carbs_not_checked_for_incomplete_profile(validator: NutrientValidator) -> None:
    profile = NutritionProfile(protein=25, fat=8, moisture=10)

    assert validator.validate(profile, FoodType.DRY) == []


def test_validation_never_drops_values(validator: NutrientValidator) -> None:
    profile = NutritionProfile(protein=95, fat=50, fiber=40, moisture=120, ash=30)

    findings = validator.validate(profile, FoodType.WET)

    assert findings
    assert profile.protein == 95


def test_is_acceptable_ignores_advisory_findings(validator: NutrientValidator) -> None:
    assert validator.is_acceptable(Nutrient.MOISTURE, 40.0, FoodType.WET)
    assert not validator.is_acceptable(Nutrient.MOISTURE, 3.0, FoodType.WET)
    assert not validator.is_acceptable(Nutrient.ASH, 21.0, FoodType.WET)


def test_findings_have_messages(validator: NutrientValidator) -> None:
    finding = validator.check_reading(Nutrient.ASH, 21.0, FoodType.WET)[0]

    assert "Ash 21.0%" in finding.message
    assert finding.as_dict()["nutrient"] == "ash"


def test_custom_ranges_change_thresholds() -> None:
    ranges = ValidationRanges(total_max=101.0)
    validator = NutrientValidator(ranges=ranges)
    profile = NutritionProfile(protein=11.5, fat=6.5, fiber=0.5, moisture=79.0, ash=4.0)

    assert FindingKind.TOTAL_TOO_HIGH in _kinds(validator.validate(profile, FoodType.WET))


def test_ranges_reject_inverted_bounds() -> None:
    with pytest.raises(ValidationError):
        NutrientBounds(minimum=10, maximum=5)


def test_ranges_reject_moisture_in_bounds_table() -> None:
    with pytest.raises(ValidationError):
        ValidationRanges(wet={Nutrient.MOISTURE: NutrientBounds(minimum=0, maximum=90)})


def test_wet_bounds_are_tighter_than_dry() -> None:
    ranges = ValidationRanges()
    for nutrient in (Nutrient.PROTEIN, Nutrient.FAT, Nutrient.ASH):
        assert ranges.wet[nutrient].maximum < ranges.dry[nutrient].maximum
        assert ranges.wet[nutrient].minimum < ranges.dry[nutrient].minimum
    assert ranges.wet[Nutrient.FIBER].maximum < ranges.dry[Nutrient.FIBER].maximum
