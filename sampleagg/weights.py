"""Weight coercion ("weight ops") for weighted tables.

A table declares the type of its weights; the matching WeightOps turns each
typed weight value into the float the sampler works with. Times are weighted
by their value in microseconds.
"""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from sampleagg.schema import FieldKind

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def _real_to_float(value) -> float:
    """float(value), saturating to +/-inf when value is out of float range."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


class WeightOps(ABC):
    """Converts typed weight values to floats."""

    @property
    @abstractmethod
    def kind(self) -> FieldKind:
        """Field kind this converter accepts."""

    @abstractmethod
    def to_float(self, value: object) -> float:
        """Convert a weight value to a float.

        Values beyond float range convert to +/-inf.

        Raises:
            TypeError: If value is not of the accepted type.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FloatWeightOps(WeightOps):
    """Accepts any real number (float, int, Fraction, Decimal, numpy scalars)."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.FLOAT

    def to_float(self, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
            raise TypeError(f"float weight expected, got {type(value).__name__}")
        return _real_to_float(value)


class IntWeightOps(WeightOps):
    """Accepts integers. Booleans are rejected."""

    @property
    def kind(self) -> FieldKind:
        return FieldKind.INT

    def to_float(self, value: object) -> float:
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"int weight expected, got {type(value).__name__}")
        return _real_to_float(value)


class TimeWeightOps(WeightOps):
    """Accepts datetimes, timedeltas and integer microsecond counts.

    Naive datetimes are taken as UTC.
    """

    @property
    def kind(self) -> FieldKind:
        return FieldKind.TIME

    def to_float(self, value: object) -> float:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                value = value.replace(tzinfo=UTC)
            value = value - _EPOCH
        if isinstance(value, timedelta):
            return float(value // timedelta(microseconds=1))
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            return _real_to_float(value)
        raise TypeError(f"time weight expected, got {type(value).__name__}")


_OPS_BY_KIND: dict[FieldKind, type[WeightOps]] = {
    FieldKind.FLOAT: FloatWeightOps,
    FieldKind.INT: IntWeightOps,
    FieldKind.TIME: TimeWeightOps,
}

WEIGHT_KINDS = frozenset(_OPS_BY_KIND)


def weight_ops_for(kind: FieldKind) -> WeightOps:
    """Return the converter for a declared weight kind.

    Raises:
        ValueError: If the kind cannot be used as a weight.
    """
    try:
        return _OPS_BY_KIND[kind]()
    except KeyError:
        raise ValueError(f"{kind.value} cannot be used as a weight") from None
