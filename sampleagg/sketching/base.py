"""Base protocols for streaming sampling algorithms.

Sampling sketches keep a bounded, statistically valid subset of a data
stream. They trade completeness for bounded memory, and they can be merged
so that partial samples computed over disjoint partitions combine into a
sample of the whole stream.

This module defines the protocols sampler implementations follow:
- Sketch: Base protocol with common operations (merge, clear, memory)
- SamplingSketch: For sketches that maintain a sample of stream items
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class Sketch(ABC):
    """Base protocol for all streaming sketches.

    Sketches process a stream of items and keep a bounded summary of it.
    They support:
    - Merging two sketches of the same type
    - Estimating memory usage
    - Clearing state for reuse
    """

    @abstractmethod
    def merge(self, other: "Sketch") -> None:
        """Merge another sketch of the same type into this one.

        After merging, this sketch contains the combined information from
        both sketches, as if all items from both had been added to one sketch.

        Args:
            other: Another sketch of the same type and configuration.

        Raises:
            TypeError: If other is not the same sketch type.
            ValueError: If other has incompatible configuration.
        """

    @property
    @abstractmethod
    def memory_bytes(self) -> int:
        """Estimated memory usage in bytes.

        Returns:
            Approximate memory footprint of the sketch data structures.
        """

    @abstractmethod
    def clear(self) -> None:
        """Reset the sketch to its initial empty state."""


class SamplingSketch(Sketch, Generic[T]):
    """Protocol for sketches that maintain a sample of stream items.

    Used for maintaining a representative sample of a stream for later analysis.

    Implementations: WeightedReservoir
    """

    @abstractmethod
    def sample(self) -> list[T]:
        """Return the current sample.

        Returns:
            List of sampled items (may be smaller than capacity if fewer items seen).
        """

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        """Iterate over sampled items."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of items in the sample.

        Returns:
            Sample size limit.
        """
