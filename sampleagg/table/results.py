"""Read-out of merged weighted samples for display."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pandas as pd

from sampleagg.adapter import WeightedSampleAdapter


@dataclass(frozen=True)
class WeightedSampleResults:
    """Display-side view of an encoded weighted sample.

    Built without a live adapter, from the bytes a merge produced.

    Attributes:
        max_elems: Capacity the sample was encoded with.
        samples: One display string per retained value.
        total_elems: Values offered across all merged partitions.
    """

    VALUE = "value"
    TOTAL_ELEMS = "total_elems"

    max_elems: int
    samples: tuple[bytes, ...]
    total_elems: int

    @classmethod
    def from_encoded(cls, encoded: bytes, max_elems: int) -> WeightedSampleResults | None:
        """Parse encoded bytes. Returns None if they are malformed."""
        split = WeightedSampleAdapter.split_encoded_str(encoded, max_elems)
        if split is None:
            return None
        samples, total_elems = split
        return cls(max_elems=max_elems, samples=tuple(samples), total_elems=total_elems)

    @property
    def n_elems(self) -> int:
        return len(self.samples)

    def decode(self, fn: Callable[[bytes], Any] = bytes.decode) -> list[Any]:
        """Map each display string through fn (UTF-8 decoding by default)."""
        return [fn(sample) for sample in self.samples]

    def to_dataframe(self, decode: Callable[[bytes], Any] | None = None) -> pd.DataFrame:
        """One row per sample, with the total offered count repeated per row.

        Args:
            decode: Optional converter applied to each sample value.
        """
        values = self.decode(decode) if decode is not None else list(self.samples)
        return pd.DataFrame(
            {
                self.VALUE: values,
                self.TOTAL_ELEMS: [self.total_elems] * len(values),
            },
            columns=[self.VALUE, self.TOTAL_ELEMS],
        )
