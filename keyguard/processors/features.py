"""
Keyguard Feature Vector Builder

Turns the timing streams of a parsed keystroke log into the three median
statistics used by the automation classifiers.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from keyguard.processors.keystrokes import ParsedCounts


def round2(value: float) -> float:
    """
    Round half up to two decimals.

    Values too large to scale by 100 are returned unchanged.
    """
    scaled = value * 100.0 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 100.0


def median(values: Sequence[float]) -> Optional[float]:
    """
    Median of an already sorted sequence, rounded to two decimals.

    Returns None for an empty sequence or a non-finite result.
    """
    n = len(values)
    if n == 0:
        return None
    mid = n // 2
    if n % 2 == 0:
        # Halve before adding so two huge values cannot overflow
        result = round2(values[mid] / 2.0 + values[mid - 1] / 2.0)
    else:
        result = round2(values[mid])
    return result if math.isfinite(result) else None


def sorted_distances(sorted_values: Sequence[float]) -> List[float]:
    """
    Rounded gaps between neighbours of a value-sorted sequence, sorted.

    Gaps are taken after sorting by value, not in typing order, so this
    measures dispersion of the intervals rather than rhythm.
    """
    distances = [
        round2(sorted_values[i + 1] - sorted_values[i])
        for i in range(len(sorted_values) - 1)
    ]
    distances.sort()
    return distances


# =============================================================================
# Feature Vector
# =============================================================================

@dataclass(frozen=True)
class FeatureVector:
    """
    Ordered timing features of one attempt.

    Either a full triple (median_down_down, median_down_down_distance,
    median_dwell_time) or EMPTY_VECTOR when any median was undefined.
    """
    values: Tuple[float, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.values

    @property
    def median_down_down(self) -> float:
        return self.values[0]

    @property
    def median_down_down_distance(self) -> float:
        return self.values[1]

    @property
    def median_dwell_time(self) -> float:
        return self.values[2]

    def __len__(self) -> int:
        return len(self.values)

    def as_list(self) -> List[float]:
        return list(self.values)


EMPTY_VECTOR = FeatureVector()


# =============================================================================
# Builder
# =============================================================================

class FeatureVectorBuilder:
    """
    Builds a FeatureVector from ParsedCounts.

    Steps:
        1. Sort down-down times and dwell times ascending
        2. Median down-down time
        3. Median of the sorted neighbour distances of the sorted down-downs
        4. Median dwell time
        5. EMPTY_VECTOR if any median is undefined
    """

    def build(self, counts: ParsedCounts) -> FeatureVector:
        """Compute the feature vector for one attempt."""
        down_downs = sorted(counts.down_down)
        dwell_times = sorted(counts.dwell_times)

        medians = (
            median(down_downs),
            median(sorted_distances(down_downs)),
            median(dwell_times),
        )

        if any(value is None for value in medians):
            return EMPTY_VECTOR

        return FeatureVector(values=tuple(medians))
