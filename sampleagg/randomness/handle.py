"""Ownership-tagged binding between a sampler and its random source.

A reservoir either borrows a source the caller keeps alive (shared) or owns a
RandomProxy whose target it may swap (owned). Swapping is a capability of the
handle, not something inferred from the source's type.
"""

from __future__ import annotations

from enum import Enum

from sampleagg.randomness.base import RandomSource
from sampleagg.randomness.proxy import RandomProxy


class Ownership(Enum):
    """How a handle relates to the source it wraps."""

    SHARED = "shared"
    OWNED = "owned"


class RandomHandle:
    """A random source plus the ownership it is held under.

    Use the constructors rather than ``__init__``:
    - ``RandomHandle.shared(source)``: borrow a caller-managed source.
    - ``RandomHandle.owned(proxy)``: take an existing proxy, swappable.
    - ``RandomHandle.owning(real)``: wrap a real source in a new proxy.
    """

    __slots__ = ("_ownership", "_source")

    def __init__(self, source: RandomSource, ownership: Ownership):
        if not isinstance(source, RandomSource):
            raise TypeError(f"source must be a RandomSource, got {type(source).__name__}")
        if ownership is Ownership.OWNED and not isinstance(source, RandomProxy):
            raise TypeError("an owned handle must wrap a RandomProxy")
        self._source = source
        self._ownership = ownership

    @classmethod
    def shared(cls, source: RandomSource) -> RandomHandle:
        return cls(source, Ownership.SHARED)

    @classmethod
    def owned(cls, proxy: RandomProxy) -> RandomHandle:
        return cls(proxy, Ownership.OWNED)

    @classmethod
    def owning(cls, real: RandomSource) -> RandomHandle:
        return cls(RandomProxy(real), Ownership.OWNED)

    @property
    def source(self) -> RandomSource:
        """The source draws are taken from. Stable for the handle's lifetime."""
        return self._source

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def is_swappable(self) -> bool:
        return self._ownership is Ownership.OWNED

    def swap(self, real: RandomSource) -> None:
        """Point the owned proxy at a new real source.

        Raises:
            TypeError: If the handle is shared.
        """
        if not self.is_swappable:
            raise TypeError("cannot swap the source of a shared RandomHandle")
        self._source.reset(real)  # type: ignore[union-attr]

    def __repr__(self) -> str:
        return f"RandomHandle({self._ownership.value}, {self._source!r})"
