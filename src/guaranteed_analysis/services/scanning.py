"""Accumulation of nutrient readings across repeated label scans."""

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field

from guaranteed_analysis.domain.analysis import FoodType, ValidationFinding
from guaranteed_analysis.domain.nutrients import (
    Nutrient,
    NutritionProfile,
    PartialNutritionReadings,
)
from guaranteed_analysis.domain.records import NutritionRecord
from guaranteed_analysis.services.consensus import ConsensusResolver
from guaranteed_analysis.services.extraction import LabelTextExtractor
from guaranteed_analysis.services.food_type import classify_food_type
from guaranteed_analysis.services.records import NutritionRecordBuilder
from guaranteed_analysis.services.validation import NutrientValidator

_logger = logging.getLogger(__name__)

# moisture decides wet/dry, so it is checked before the other nutrients
_FRAME_ORDER = (
    Nutrient.MOISTURE,
    Nutrient.PROTEIN,
    Nutrient.FAT,
    Nutrient.FIBER,
    Nutrient.ASH,
)


@dataclass(frozen=True)
class RejectedReading:
    """A frame reading that failed plausibility checks."""

    nutrient: Nutrient
    value: float
    findings: tuple[ValidationFinding, ...]


@dataclass(frozen=True)
class FrameResult:
    """Outcome of folding one OCR frame into a session."""

    extracted: PartialNutritionReadings
    accepted: dict[Nutrient, float]
    rejected: list[RejectedReading]
    food_type: FoodType
    profile: NutritionProfile


@dataclass
class ScanSession:
    """Owned accumulator for one label scanning session.

    Every frame adds to the per-nutrient reading history; the current value
    of a nutrient is the consensus of its history. Accepted readings are never
    removed. ``add_frame`` may be called from several threads.
    """

    extractor: LabelTextExtractor = field(default_factory=LabelTextExtractor)
    validator: NutrientValidator = field(default_factory=NutrientValidator)
    resolver: ConsensusResolver = field(default_factory=ConsensusResolver)
    record_builder: NutritionRecordBuilder | None = None
    category_tags: tuple[str, ...] = ()
    product_text: str = ""
    _history: dict[Nutrient, list[float]] = field(
        default_factory=lambda: {nutrient: [] for nutrient in Nutrient}, repr=False
    )
    _frames: int = field(default=0, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def add_frame(self, lines: Sequence[str]) -> FrameResult:
        """Extract, validate and accumulate the readings of one frame."""
        extracted = self.extractor.extract(lines)
        with self._lock:
            self._frames += 1
            accepted: dict[Nutrient, float] = {}
            rejected: list[RejectedReading] = []
            food_type = self._food_type()
            for nutrient in _FRAME_ORDER:
                value = extracted.get(nutrient)
                if value is None:
                    continue
                findings = self.validator.check_reading(nutrient, value, food_type)
                blocking = tuple(finding for finding in findings if finding.is_blocking)
                if blocking:
                    _logger.info(
                        "Frame %s: rejected %s %.2f (%s)",
                        self._frames,
                        nutrient.value,
                        value,
                        blocking[0].message,
                    )
                    rejected.append(
                        RejectedReading(nutrient=nutrient, value=value, findings=blocking)
                    )
                    continue
                self._history[nutrient].append(value)
                accepted[nutrient] = value
                if nutrient is Nutrient.MOISTURE:
                    food_type = self._food_type()
            profile = self._profile()

        return FrameResult(
            extracted=extracted,
            accepted=accepted,
            rejected=rejected,
            food_type=food_type,
            profile=profile,
        )

    def profile(self) -> NutritionProfile:
        """Return the consensus value of every nutrient seen so far."""
        with self._lock:
            return self._profile()

    def readings(self, nutrient: Nutrient) -> tuple[float, ...]:
        """Return the accepted readings of a nutrient in arrival order."""
        with self._lock:
            return tuple(self._history[nutrient])

    @property
    def frames_processed(self) -> int:
        with self._lock:
            return self._frames

    @property
    def is_complete(self) -> bool:
        """True once every nutrient has a consensus value."""
        return self.profile().is_complete

    @property
    def food_type(self) -> FoodType:
        with self._lock:
            return self._food_type()

    def build_record(self, baseline: NutritionProfile | None = None) -> NutritionRecord:
        """Merge the scanned consensus over an optional external baseline."""
        builder = self.record_builder or NutritionRecordBuilder(validator=self.validator)
        return builder.build(
            baseline,
            self.profile(),
            category_tags=self.category_tags,
            product_text=self.product_text,
        )

    def _profile(self) -> NutritionProfile:
        return NutritionProfile.from_mapping(
            {
                nutrient: self.resolver.resolve(values)
                for nutrient, values in self._history.items()
            }
        )

    def _food_type(self) -> FoodType:
        moisture = self.resolver.resolve(self._history[Nutrient.MOISTURE])
        return classify_food_type(
            self.category_tags,
            self.product_text,
            moisture,
            default=FoodType.UNKNOWN,
        )
