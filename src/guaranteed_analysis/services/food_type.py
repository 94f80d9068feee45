"""Wet/dry food classification."""

import re
from collections.abc import Iterable

from guaranteed_analysis.domain.analysis import FoodType

WET_MOISTURE_THRESHOLD = 50.0

_WET_TAG_MARKERS = ("wet", "canned", "pate", "pouch")
_DRY_TAG_MARKERS = ("dry", "kibble", "croquette")

_WET_KEYWORDS = re.compile(
    r"\b(?:canned|can|cans|wet|p[âa]t[ée]|gravy|jelly|mousse|terrine|loaf|pouch(?:es)?"
    r"|chunks|nassfutter|natvoer|umido)\b",
    re.IGNORECASE,
)
_DRY_KEYWORDS = re.compile(
    r"\b(?:kibble|dry|biscuits?|crunch(?:y|ies)?|trockenfutter|droogvoer|secco|croquettes?)\b",
    re.IGNORECASE,
)


def classify_food_type(
    category_tags: Iterable[str] | None,
    product_text: str,
    moisture: float | None,
    default: FoodType = FoodType.WET,
) -> FoodType:
    """Infer wet or dry food from the strongest available signal.

    Category tags win over product name keywords, which win over the moisture
    value. With no signal at all the default is wet, the broader range.
    """
    tag_type = _classify_tags(category_tags)
    if tag_type is not None:
        return tag_type

    if _WET_KEYWORDS.search(product_text):
        return FoodType.WET
    if _DRY_KEYWORDS.search(product_text):
        return FoodType.DRY

    if moisture is not None:
        return FoodType.WET if moisture > WET_MOISTURE_THRESHOLD else FoodType.DRY

    return default


def _classify_tags(category_tags: Iterable[str] | None) -> FoodType | None:
    if not category_tags:
        return None
    tags = [tag.casefold() for tag in category_tags]
    if any(marker in tag for tag in tags for marker in _WET_TAG_MARKERS):
        return FoodType.WET
    if any(marker in tag for tag in tags for marker in _DRY_TAG_MARKERS):
        return FoodType.DRY
    return None
