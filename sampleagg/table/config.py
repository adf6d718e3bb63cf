"""Configuration for weighted-sample tables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sampleagg.schema import FieldKind, FieldType, TableType


@dataclass(frozen=True)
class TableConfig:
    """Configuration for a WeightedSampleTable.

    Args:
        capacity: Sample size kept per table key.
        seed: Seed of the shared random source. None seeds from entropy.
        weight_kind: Declared type of the weights.
        element_kind: Declared type of the sampled values.
        memory_budget: Optional soft limit, in bytes, on stored values
            across all keys.
    """

    capacity: int
    seed: int | None = None
    weight_kind: FieldKind = FieldKind.FLOAT
    element_kind: FieldKind = FieldKind.STRING
    memory_budget: int | None = None

    def table_type(self) -> TableType:
        return TableType.weighted_sample(
            element=FieldType(self.element_kind, "value"),
            weight=FieldType(self.weight_kind, "weight"),
            capacity=self.capacity,
        )

    @classmethod
    def from_env(cls, prefix: str = "SA_") -> TableConfig:
        """Build a config from environment variables.

        Reads the following variables (with the default prefix):
            - SA_CAPACITY: Sample size (required)
            - SA_SEED: Random seed
            - SA_WEIGHT_KIND: Weight type (float, int, time)
            - SA_ELEMENT_KIND: Value type (string, bytes, ...)
            - SA_MEMORY_BUDGET: Memory budget in bytes

        Raises:
            ValueError: If the capacity is missing or a value cannot be parsed.
        """
        capacity = os.environ.get(f"{prefix}CAPACITY", "")
        if not capacity:
            raise ValueError(f"{prefix}CAPACITY must be set")

        seed = os.environ.get(f"{prefix}SEED", "")
        weight_kind = os.environ.get(f"{prefix}WEIGHT_KIND", "")
        element_kind = os.environ.get(f"{prefix}ELEMENT_KIND", "")
        memory_budget = os.environ.get(f"{prefix}MEMORY_BUDGET", "")

        return cls(
            capacity=int(capacity),
            seed=int(seed) if seed else None,
            weight_kind=FieldKind(weight_kind.lower()) if weight_kind else FieldKind.FLOAT,
            element_kind=FieldKind(element_kind.lower()) if element_kind else FieldKind.STRING,
            memory_budget=int(memory_budget) if memory_budget else None,
        )
