"""Weighted Reservoir Sampling over a stream of (weight, item) pairs.

Weighted reservoir sampling keeps a fixed-size random sample of a stream in
which each item's chance of being retained is proportional to its weight.
Every candidate is given a random selection key derived from its weight; the
reservoir keeps the items with the largest keys.

Keys follow the A-Res scheme, computed in log space so tiny weights do not
underflow:

    key = log(u) / weight,   u ~ Uniform(0, 1)

Keys are always <= 0, and a larger weight pushes the key towards 0.

Key properties:
- Space: O(k) where k is sample size
- Update: O(log k)
- Query: O(k)
- Mergeable: the top-k keys of the union of two samples is a valid sample
  of the concatenated streams, provided the original keys are kept.

Reference:
    Efraimidis, Spirakis. "Weighted random sampling with a reservoir" (2006)
"""

from __future__ import annotations

import heapq
import itertools
import math
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from sampleagg.sketching.base import SamplingSketch

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sampleagg.randomness.base import RandomSource

T = TypeVar("T")

# key (8) + tie-break sequence (8) + item reference (8) per slot
_SLOT_OVERHEAD = 24


@dataclass(frozen=True, slots=True)
class Admission(Generic[T]):
    """Outcome of offering one candidate to the reservoir.

    Attributes:
        admitted: Whether the candidate is now part of the sample.
        evicted: The item it displaced, or None if it took a free slot
            or was rejected.
    """

    admitted: bool
    evicted: T | None = None


_REJECTED: Admission = Admission(admitted=False)


class WeightedReservoir(SamplingSketch[T]):
    """Bounded weighted sample keeping the items with the largest keys.

    Slots are held in a min-heap on the selection key, so the eviction
    candidate is always at the root. Index-based accessors (``sample_at``,
    ``key_at``) walk the heap array and give no ordering guarantee.

    Args:
        capacity: Maximum number of items to keep in the sample.

    Example:
        rng = SeededRandom(seed=42)
        reservoir = WeightedReservoir[str](capacity=100)

        for url, hits in access_log:
            reservoir.consider_candidate(hits, url, rng)

        heavy_biased_sample = reservoir.sample()
    """

    def __init__(self, capacity: int):
        """Initialize the reservoir.

        Args:
            capacity: Maximum sample size. Must be > 0.

        Raises:
            ValueError: If capacity <= 0.
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._heap: list[tuple[float, int, T]] = []
        self._sequence = itertools.count()

    @property
    def capacity(self) -> int:
        """Maximum number of items in the sample."""
        return self._capacity

    @property
    def max_sample_size(self) -> int:
        """Alias of capacity."""
        return self._capacity

    @property
    def current_sample_size(self) -> int:
        """Number of items currently held."""
        return len(self._heap)

    @property
    def is_full(self) -> bool:
        """Whether the reservoir is at capacity."""
        return len(self._heap) >= self._capacity

    @property
    def min_key(self) -> float | None:
        """Smallest key held, i.e. the next eviction threshold once full."""
        return self._heap[0][0] if self._heap else None

    def consider_candidate(self, weight: float, item: T, random: RandomSource) -> Admission[T]:
        """Offer an item with a weight, drawing a fresh selection key.

        Weights that are not strictly positive are rejected without
        consuming a random draw.

        Args:
            weight: Sampling weight of the item.
            item: The item to offer.
            random: Source for the uniform draw behind the key.

        Returns:
            The admission outcome.
        """
        if not weight > 0:
            return _REJECTED
        key = math.log(random.rand_double()) / weight
        return self.consider_keyed(key, item)

    def consider_keyed(self, key: float, item: T) -> Admission[T]:
        """Offer an item that already carries a selection key.

        Used when folding in items sampled elsewhere: their original key is
        reused as-is so the merged sample stays unbiased.

        Args:
            key: The item's selection key.
            item: The item to offer.

        Returns:
            The admission outcome.
        """
        if math.isnan(key):
            return _REJECTED

        if len(self._heap) < self._capacity:
            heapq.heappush(self._heap, (key, next(self._sequence), item))
            return Admission(admitted=True)

        if key <= self._heap[0][0]:
            return _REJECTED

        _, _, evicted = heapq.heapreplace(self._heap, (key, next(self._sequence), item))
        return Admission(admitted=True, evicted=evicted)

    def sample_at(self, index: int) -> T:
        """Item held in slot ``index``. Unordered."""
        return self._heap[index][2]

    def key_at(self, index: int) -> float:
        """Selection key of slot ``index``. Unordered."""
        return self._heap[index][0]

    def entries(self) -> list[tuple[float, T]]:
        """All (key, item) pairs, largest key first."""
        return [(key, item) for key, _, item in sorted(self._heap, key=lambda s: (-s[0], s[1]))]

    def sample(self) -> list[T]:
        """Return the current sample.

        Returns:
            List of sampled items. Length is min(capacity, items admitted).
        """
        return [item for _, _, item in self._heap]

    def __iter__(self) -> Iterator[T]:
        """Iterate over sampled items."""
        return (item for _, _, item in self._heap)

    def __len__(self) -> int:
        """Number of items currently in the reservoir."""
        return len(self._heap)

    def merge(self, other: WeightedReservoir[T]) -> None:
        """Merge another reservoir into this one.

        Each of the other reservoir's items is offered with its own key, so
        the result holds the top-capacity keys of both samples.

        Args:
            other: Another WeightedReservoir with same capacity.

        Raises:
            TypeError: If other is not a WeightedReservoir.
            ValueError: If other has different capacity.
        """
        if not isinstance(other, WeightedReservoir):
            raise TypeError(f"Can only merge with WeightedReservoir, got {type(other).__name__}")
        if other._capacity != self._capacity:
            raise ValueError(
                f"Cannot merge: capacity differs ({self._capacity} vs {other._capacity})"
            )

        for key, _, item in list(other._heap):
            self.consider_keyed(key, item)

    @property
    def extra_memory(self) -> int:
        """Bookkeeping overhead in bytes, excluding the items themselves.

        Depends only on capacity, so it does not change as items come and go.
        """
        return self._capacity * _SLOT_OVERHEAD

    @property
    def memory_bytes(self) -> int:
        """Estimated memory usage in bytes."""
        return self.extra_memory + sys.getsizeof(self._heap) + sys.getsizeof(self)

    def clear(self) -> None:
        """Reset the reservoir to empty state."""
        self._heap.clear()

    def __repr__(self) -> str:
        return f"WeightedReservoir(capacity={self._capacity}, sampled={len(self._heap)})"
