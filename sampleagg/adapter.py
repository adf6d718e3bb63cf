"""Weighted-sample adapter between the reservoir engine and aggregation tables.

The adapter owns one WeightedReservoir of encoded values, counts every value
ever offered, and reports the memory each offer costs so the host table can
keep an aggregate budget without rescanning samples.

Partial samples built by independent workers are combined through
``encode()`` / ``merge()``. The encoding keeps each value's original
selection key, and merge re-offers values under those keys, so the merged
sample is distributed exactly as if one reservoir had seen every stream.

Example:
    rng = SeededRandom(seed=7)
    worker = WeightedSampleAdapter(FloatWeightOps(), max_elems=3, random=rng)
    for url, hits in partition:
        worker.add_weighted_elem(url, hits)

    coordinator = WeightedSampleAdapter(FloatWeightOps(), max_elems=3, random=rng)
    coordinator.merge(worker.encode())
"""

from __future__ import annotations

import logging

from sampleagg.codec import MalformedEncodingError, decode_samples, encode_samples
from sampleagg.randomness.base import RandomSource
from sampleagg.randomness.handle import RandomHandle
from sampleagg.schema import WEIGHTED_SAMPLE_KIND, TableType
from sampleagg.sketching.weighted_reservoir import WeightedReservoir
from sampleagg.weights import WEIGHT_KINDS, WeightOps

logger = logging.getLogger(__name__)


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"value must be bytes or str, got {type(value).__name__}")


class WeightedSampleAdapter:
    """Weighted reservoir of encoded values with merge support.

    Not thread-safe: use one adapter per worker and merge encoded states.

    Args:
        weight_ops: Converter for typed weight values.
        max_elems: Sample capacity. Fixed for the adapter's lifetime.
        random: Source for selection keys. A plain RandomSource is borrowed
            (the caller keeps it alive); a RandomHandle states the ownership
            explicitly. Only a RandomProxy source, or an owned handle, lets
            the generator be replaced later.
    """

    def __init__(self, weight_ops: WeightOps, max_elems: int, random: RandomSource | RandomHandle):
        if max_elems <= 0:
            raise ValueError(f"max_elems must be positive, got {max_elems}")
        if not isinstance(random, RandomHandle):
            random = RandomHandle.shared(random)

        self._weight_ops = weight_ops
        self._random = random
        self._sampler: WeightedReservoir[bytes] = WeightedReservoir(max_elems)
        self._tot_elems = 0

    @staticmethod
    def table_type_valid(table_type: TableType) -> str | None:
        """Check whether a table type can be backed by this adapter.

        Returns:
            None if the type is valid, otherwise a description of the problem.
        """
        if table_type.kind != WEIGHTED_SAMPLE_KIND:
            return f"expected a {WEIGHTED_SAMPLE_KIND} table, got {table_type.kind!r}"
        if table_type.param is None:
            return f"{WEIGHTED_SAMPLE_KIND} table requires a sample size parameter"
        if not isinstance(table_type.param, int) or isinstance(table_type.param, bool):
            return f"sample size must be an integer, got {table_type.param!r}"
        if table_type.param <= 0:
            return f"sample size must be positive, got {table_type.param}"
        if table_type.element is None:
            return f"{WEIGHTED_SAMPLE_KIND} table requires an element type"
        if table_type.weight is None:
            return f"{WEIGHTED_SAMPLE_KIND} table requires a weight"
        if table_type.weight.kind not in WEIGHT_KINDS:
            allowed = ", ".join(sorted(kind.value for kind in WEIGHT_KINDS))
            return (
                f"weight {table_type.weight.describe()} is not supported; "
                f"weight must be one of: {allowed}"
            )
        return None

    @property
    def weight_ops(self) -> WeightOps:
        return self._weight_ops

    @property
    def random(self) -> RandomHandle:
        return self._random

    def add_elem(self, value: bytes | str) -> int:
        """Add an element with the default weight of 1.

        Returns:
            Change in stored value bytes caused by this offer.

        Raises:
            TypeError: If value is neither bytes nor str.
        """
        return self._add_weighted_elem_internal(_as_bytes(value), 1.0)

    def add_weighted_elem(self, value: bytes | str, weight: object) -> int:
        """Add an element with a typed weight.

        Weights that convert to zero or less are counted but never sampled.

        Returns:
            Change in stored value bytes caused by this offer.

        Raises:
            TypeError: If value is neither bytes nor str, or weight does not
                match the adapter's weight ops.
        """
        return self._add_weighted_elem_internal(_as_bytes(value), self._weight_ops.to_float(weight))

    def _add_weighted_elem_internal(self, value: bytes, weight: float) -> int:
        self._tot_elems += 1
        admission = self._sampler.consider_candidate(weight, value, self._random.source)
        if not admission.admitted:
            return 0
        evicted = admission.evicted if admission.evicted is not None else b""
        return len(value) - len(evicted)

    @property
    def n_elems(self) -> int:
        """Number of elements currently held."""
        return self._sampler.current_sample_size

    @property
    def max_elems(self) -> int:
        """Maximum number of elements ever held."""
        return self._sampler.max_sample_size

    @property
    def tot_elems(self) -> int:
        """Total elements offered, including ones never sampled."""
        return self._tot_elems

    def element(self, i: int) -> bytes:
        """Return an unordered element. Requires 0 <= i < n_elems."""
        return self._sampler.sample_at(i)

    def element_tag(self, i: int) -> float:
        """Return the selection key of an unordered element."""
        return self._sampler.key_at(i)

    def value_bytes(self) -> int:
        """Bytes of the values currently held."""
        return sum(len(value) for value in self._sampler)

    def extra_memory(self) -> int:
        """Estimated bytes in use beyond the adapter object itself."""
        return self._sampler.extra_memory + self.value_bytes()

    def clear(self) -> None:
        """Drop all samples, as if nothing had been offered."""
        logger.debug("Clearing weighted sample: %d elems, %d total", self.n_elems, self._tot_elems)
        self._sampler.clear()
        self._tot_elems = 0

    def encode(self) -> bytes:
        """Encode all samples, their keys and the total count for merging."""
        return encode_samples(self.max_elems, self._tot_elems, self._sampler.entries())

    def encode_for_display(self) -> list[bytes]:
        """One display string per sample, in the same order ``encode`` uses."""
        return [value for _, value in self._sampler.entries()]

    def merge(self, encoded: bytes) -> bool:
        """Fold an encoded sample into this one.

        The input is validated in full before anything changes; on failure
        this adapter is left untouched.

        Args:
            encoded: Bytes produced by ``encode`` of an adapter with the same
                capacity.

        Returns:
            True iff encoded was valid and has been merged.
        """
        try:
            decoded = decode_samples(encoded, expected_max_elems=self.max_elems)
        except MalformedEncodingError as e:
            logger.warning("Rejected weighted sample merge: %s", e)
            return False

        for entry in decoded.entries:
            self._sampler.consider_keyed(entry.key, entry.value)
        self._tot_elems += decoded.total_elems

        logger.debug(
            "Merged %d samples (%d offered) into weighted sample: now %d elems, %d total",
            len(decoded.entries),
            decoded.total_elems,
            self.n_elems,
            self._tot_elems,
        )
        return True

    @staticmethod
    def split_encoded_str(encoded: bytes, max_elems: int) -> tuple[list[bytes], int] | None:
        """Split an encoded sample into display strings without an adapter.

        Equivalent to ``encode_for_display()`` and ``tot_elems`` on the
        adapter that produced ``encoded``.

        Args:
            encoded: Bytes produced by ``encode``.
            max_elems: Capacity of the adapter that produced them.

        Returns:
            (display strings, total elements), or None if encoded is invalid.
        """
        try:
            decoded = decode_samples(encoded, expected_max_elems=max_elems)
        except MalformedEncodingError as e:
            logger.warning("Rejected weighted sample split: %s", e)
            return None
        return decoded.values, decoded.total_elems

    def is_valid(self) -> bool:
        """Structural sanity check.

        n_elems may fall below both max_elems and tot_elems, because values
        with non-positive weights count towards tot_elems but are never held.
        """
        return self.n_elems <= self.max_elems and self.n_elems <= self._tot_elems

    def __repr__(self) -> str:
        return (
            f"WeightedSampleAdapter(max_elems={self.max_elems}, "
            f"n_elems={self.n_elems}, tot_elems={self._tot_elems})"
        )
