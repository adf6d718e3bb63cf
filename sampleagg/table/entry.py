"""A single weighted-sample table cell."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sampleagg.adapter import WeightedSampleAdapter

if TYPE_CHECKING:
    from sampleagg.randomness.base import RandomSource
    from sampleagg.randomness.handle import RandomHandle
    from sampleagg.weights import WeightOps


class WeightedSampleEntry:
    """One table cell backed by a WeightedSampleAdapter.

    Keeps a running total of the memory deltas reported by the adapter, so
    ``memory`` always equals the bytes of the values currently held.

    Args:
        weight_ops: Converter for the table's weight type.
        max_elems: Sample capacity.
        random: Random source or handle shared with the rest of the table.
    """

    def __init__(self, weight_ops: WeightOps, max_elems: int, random: RandomSource | RandomHandle):
        self._adapter = WeightedSampleAdapter(weight_ops, max_elems, random)
        self._memory = 0

    @property
    def adapter(self) -> WeightedSampleAdapter:
        return self._adapter

    @property
    def memory(self) -> int:
        """Bytes of values currently held."""
        return self._memory

    @property
    def n_elems(self) -> int:
        return self._adapter.n_elems

    @property
    def tot_elems(self) -> int:
        return self._adapter.tot_elems

    def add(self, value: bytes | str, weight: object | None = None) -> int:
        """Offer a value, optionally weighted.

        Returns:
            Memory delta of this offer.
        """
        if weight is None:
            delta = self._adapter.add_elem(value)
        else:
            delta = self._adapter.add_weighted_elem(value, weight)
        self._memory += delta
        return delta

    def merge(self, encoded: bytes) -> bool:
        """Merge an encoded sample. Returns False if it was malformed."""
        if not self._adapter.merge(encoded):
            return False
        self._memory = self._adapter.value_bytes()
        return True

    def flush(self) -> bytes:
        """Encode the cell, then reset it."""
        encoded = self._adapter.encode()
        self.clear()
        return encoded

    def flush_for_display(self) -> list[bytes]:
        """Return display strings for the cell, then reset it."""
        output = self._adapter.encode_for_display()
        self.clear()
        return output

    def clear(self) -> None:
        self._adapter.clear()
        self._memory = 0

    def __repr__(self) -> str:
        return (
            f"WeightedSampleEntry(n_elems={self.n_elems}, "
            f"tot_elems={self.tot_elems}, memory={self._memory})"
        )
