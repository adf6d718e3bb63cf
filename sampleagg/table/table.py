"""Keyed weighted-sample table.

Every key gets its own WeightedSampleEntry, and all entries draw selection
keys through one shared RandomProxy. Reseeding the table points that proxy
at a fresh generator; the entries keep their handle and never notice.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterator

from sampleagg.adapter import WeightedSampleAdapter
from sampleagg.randomness.handle import RandomHandle
from sampleagg.randomness.seeded import SeededRandom
from sampleagg.table.config import TableConfig
from sampleagg.table.entry import WeightedSampleEntry
from sampleagg.weights import weight_ops_for

logger = logging.getLogger(__name__)


class WeightedSampleTable:
    """Collection of weighted samples indexed by key.

    Args:
        config: Table configuration.

    Raises:
        ValueError: If the configured table type cannot be sampled.

    Example:
        table = WeightedSampleTable(TableConfig(capacity=5, seed=1))
        for user, url, hits in log:
            table.add(user, url, hits)
        encoded = table.flush()  # {user: bytes}
    """

    def __init__(self, config: TableConfig):
        error = WeightedSampleAdapter.table_type_valid(config.table_type())
        if error is not None:
            raise ValueError(f"invalid table type {config.table_type().describe()}: {error}")

        self._config = config
        self._weight_ops = weight_ops_for(config.weight_kind)
        self._random = RandomHandle.owning(SeededRandom(config.seed))
        self._entries: dict[Hashable, WeightedSampleEntry] = {}
        self._memory = 0

    @property
    def config(self) -> TableConfig:
        return self._config

    @property
    def random(self) -> RandomHandle:
        """Handle all entries draw through."""
        return self._random

    def reseed(self, seed: int | None) -> None:
        """Replace the shared generator with a freshly seeded one."""
        logger.info("Reseeding weighted sample table (%d entries) with seed %s", len(self), seed)
        self._random.swap(SeededRandom(seed))

    def entry(self, key: Hashable) -> WeightedSampleEntry:
        """Return the entry for key, creating it if needed."""
        entry = self._entries.get(key)
        if entry is None:
            entry = WeightedSampleEntry(self._weight_ops, self._config.capacity, self._random)
            self._entries[key] = entry
        return entry

    def add(self, key: Hashable, value: bytes | str, weight: object | None = None) -> int:
        """Offer a value to the entry for key.

        Returns:
            Memory delta of this offer.
        """
        delta = self.entry(key).add(value, weight)
        self._memory += delta
        if delta > 0 and self.over_budget:
            logger.warning(
                "Weighted sample table over memory budget: %d > %d bytes",
                self.memory,
                self._config.memory_budget,
            )
        return delta

    def merge(self, key: Hashable, encoded: bytes) -> bool:
        """Merge an encoded sample into the entry for key.

        A malformed encoding leaves the table unchanged, and does not create
        the entry.
        """
        if key in self._entries:
            entry = self._entries[key]
            before = entry.memory
            if not entry.merge(encoded):
                return False
            self._memory += entry.memory - before
            return True
        entry = WeightedSampleEntry(self._weight_ops, self._config.capacity, self._random)
        if not entry.merge(encoded):
            return False
        self._entries[key] = entry
        self._memory += entry.memory
        return True

    def keys(self) -> list[Hashable]:
        return list(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def memory(self) -> int:
        """Bytes of values held across all entries.

        Tracks offers and merges made through the table.
        """
        return self._memory

    @property
    def over_budget(self) -> bool:
        """Whether held values exceed the configured memory budget."""
        budget = self._config.memory_budget
        return budget is not None and self.memory > budget

    def flush(self) -> dict[Hashable, bytes]:
        """Encode and clear every entry.

        Returns:
            Encoded sample per key.
        """
        encoded = {key: entry.flush() for key, entry in self._entries.items()}
        self._entries.clear()
        self._memory = 0
        logger.debug("Flushed %d weighted sample entries", len(encoded))
        return encoded

    def __repr__(self) -> str:
        return (
            f"WeightedSampleTable(capacity={self._config.capacity}, "
            f"entries={len(self._entries)}, memory={self.memory})"
        )
