"""Extraction of nutrient percentages from OCR text."""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from guaranteed_analysis.domain.nutrients import Nutrient, PartialNutritionReadings
from guaranteed_analysis.services.patterns import NUTRIENT_PATTERNS

_logger = logging.getLogger(__name__)


@dataclass
class LabelTextExtractor:
    """Finds the five guaranteed-analysis values in recognized label text."""

    patterns: Mapping[Nutrient, tuple[re.Pattern[str], ...]] = field(
        default_factory=lambda: NUTRIENT_PATTERNS
    )

    def extract(self, lines: Sequence[str]) -> PartialNutritionReadings:
        """Return the first matching value for each nutrient.

        Nutrients are independent: a nutrient that is missing or whose
        captured number does not parse resolves to None without affecting
        the others.
        """
        text = "\n".join(lines).casefold()
        _logger.debug("Label text:\n%s", text)

        values = {
            nutrient.value: self._extract_value(text, nutrient) for nutrient in Nutrient
        }
        readings = PartialNutritionReadings(**values)
        _logger.debug(
            "Parsed label: protein=%s fat=%s fiber=%s moisture=%s ash=%s",
            readings.protein,
            readings.fat,
            readings.fiber,
            readings.moisture,
            readings.ash,
        )
        return readings

    def _extract_value(self, text: str, nutrient: Nutrient) -> float | None:
        for pattern in self.patterns.get(nutrient, ()):
            match = pattern.search(text)
            if match is None:
                continue
            return _parse_number(match.group(1))
        return None


def _parse_number(raw: str) -> float | None:
    """Parse a label number, accepting a comma as the decimal separator."""
    try:
        return float(raw.replace(",", "."))
    except ValueError:
        return None
