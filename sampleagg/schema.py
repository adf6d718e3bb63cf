"""Abstract table schema descriptions.

An aggregation table is declared by its kind (which aggregator backs it), the
type of the values it collects, an optional weight type, and an optional
integer parameter (for sampling tables, the sample capacity):

    TableType.weighted_sample(
        element=FieldType(FieldKind.STRING, "url"),
        weight=FieldType(FieldKind.FLOAT, "hits"),
        capacity=100,
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

WEIGHTED_SAMPLE_KIND = "weightedsample"


class FieldKind(Enum):
    """Value types a table field can declare."""

    BYTES = "bytes"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    TIME = "time"
    TUPLE = "tuple"


@dataclass(frozen=True, slots=True)
class FieldType:
    """Type of one table field.

    Attributes:
        kind: Declared value type.
        name: Optional field name, used in error messages.
    """

    kind: FieldKind
    name: str | None = None

    def describe(self) -> str:
        if self.name:
            return f"{self.name}: {self.kind.value}"
        return self.kind.value


@dataclass(frozen=True, slots=True)
class TableType:
    """Declared type of an aggregation table.

    Attributes:
        kind: Aggregator kind, e.g. "weightedsample".
        element: Type of the collected values.
        weight: Type of the per-value weight, if the table is weighted.
        param: Integer table parameter (sample capacity for sampling tables).
    """

    kind: str
    element: FieldType | None
    weight: FieldType | None = None
    param: int | None = None

    @classmethod
    def weighted_sample(
        cls,
        element: FieldType,
        weight: FieldType,
        capacity: int,
    ) -> TableType:
        """Build a weighted-sample table type."""
        return cls(kind=WEIGHTED_SAMPLE_KIND, element=element, weight=weight, param=capacity)

    def describe(self) -> str:
        parts = [f"table {self.kind}"]
        if self.param is not None:
            parts[0] += f"({self.param})"
        if self.element is not None:
            parts.append(f"of {self.element.describe()}")
        if self.weight is not None:
            parts.append(f"weight {self.weight.describe()}")
        return " ".join(parts)
