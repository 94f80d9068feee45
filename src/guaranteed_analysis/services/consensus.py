"""Mode-based consensus over repeated OCR readings."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from guaranteed_analysis.services.nutrition_math import round_half_up

MIN_PLAUSIBLE = 0.1
MAX_PLAUSIBLE = 100.0


def default_range_filter(value: float) -> bool:
    """Accept values strictly between 0.1 and 100."""
    return MIN_PLAUSIBLE < value < MAX_PLAUSIBLE


@dataclass(frozen=True)
class Bucket:
    """Readings that agree to one decimal place."""

    key: float
    first_value: float
    first_index: int
    count: int


@dataclass
class ConsensusResolver:
    """Resolves repeated readings of one field to the most frequent value.

    OCR misreads are discrete (a dropped decimal point, a 1 read as 7), so the
    correct reading tends to repeat while errors scatter. The mode is used
    instead of the mean so that a single outlier cannot drag the result.
    """

    range_filter: Callable[[float], bool] = field(default=default_range_filter)

    def resolve(
        self,
        readings: Iterable[float],
        range_filter: Callable[[float], bool] | None = None,
    ) -> float | None:
        """Return the consensus value, or None when nothing plausible remains."""
        accept = range_filter or self.range_filter
        values = [value for value in readings if accept(value)]
        if not values:
            return None
        if len(values) == 1:
            return values[0]

        # ties go to the bucket seen first
        best = max(
            self._buckets(values),
            key=lambda bucket: (bucket.count, -bucket.first_index),
        )
        return best.first_value

    def tally(
        self,
        readings: Iterable[float],
        range_filter: Callable[[float], bool] | None = None,
    ) -> list[Bucket]:
        """Return buckets for plausible readings, most frequent first."""
        accept = range_filter or self.range_filter
        values = [value for value in readings if accept(value)]
        buckets = self._buckets(values)
        return sorted(buckets, key=lambda bucket: (-bucket.count, bucket.first_index))

    @staticmethod
    def _buckets(values: list[float]) -> list[Bucket]:
        buckets: dict[float, Bucket] = {}
        for index, value in enumerate(values):
            key = round_half_up(value, 1)
            current = buckets.get(key)
            if current is None:
                buckets[key] = Bucket(key=key, first_value=value, first_index=index, count=1)
            else:
                buckets[key] = Bucket(
                    key=key,
                    first_value=current.first_value,
                    first_index=current.first_index,
                    count=current.count + 1,
                )
        return list(buckets.values())
