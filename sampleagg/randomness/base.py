"""Base protocol for random number sources.

Every random source exposes the same capability set:
- Fixed-width unsigned draws (8, 16, 32 and 64 bits)
- Fixed-length random byte strings
- Unbiased uniform draws over [0, n) for 32-bit and 64-bit bounds
- Uniform doubles over the open interval (0, 1)
- Cloning

Implementations only have to provide ``rand64()`` and ``clone()``. Every
other draw is derived from ``rand64()`` here, so all sources build narrower
and wider values the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

_UINT32_RANGE = 1 << 32
_UINT64_RANGE = 1 << 64
_INT32_MAX = (1 << 31) - 1

# 52 random mantissa bits, offset by half a step so 0 and 1 are unreachable.
_DOUBLE_BITS = 52
_DOUBLE_SCALE = 2.0**-_DOUBLE_BITS


class RandomSource(ABC):
    """Abstract random number source.

    Sources are deterministic given their construction parameters and are not
    thread-safe. Callers that share one source across several consumers must
    serialize access themselves.
    """

    @abstractmethod
    def rand64(self) -> int:
        """Return a uniform unsigned 64-bit integer."""

    @abstractmethod
    def clone(self) -> RandomSource | None:
        """Return an independent copy that continues the same sequence.

        Returns:
            The copy, or None if this source cannot be cloned.
        """

    def rand8(self) -> int:
        """Return a uniform unsigned 8-bit integer."""
        return self.rand64() >> 56

    def rand16(self) -> int:
        """Return a uniform unsigned 16-bit integer."""
        return self.rand64() >> 48

    def rand32(self) -> int:
        """Return a uniform unsigned 32-bit integer."""
        return self.rand64() >> 32

    def rand_string(self, desired_len: int) -> bytes:
        """Return ``desired_len`` random bytes.

        Raises:
            ValueError: If desired_len is negative.
        """
        if desired_len < 0:
            raise ValueError(f"desired_len must be non-negative, got {desired_len}")

        chunks = bytearray()
        while len(chunks) < desired_len:
            chunks += self.rand64().to_bytes(8, "little")
        return bytes(chunks[:desired_len])

    def unbiased_uniform(self, n: int) -> int:
        """Return a uniform integer in [0, n) for a 32-bit bound.

        Uses rejection sampling on 32-bit draws so small and large bounds are
        equally unbiased.

        Raises:
            ValueError: If n is not in [1, 2**31 - 1].
        """
        if not 0 < n <= _INT32_MAX:
            raise ValueError(f"n must be in [1, {_INT32_MAX}], got {n}")

        limit = _UINT32_RANGE - (_UINT32_RANGE % n)
        while True:
            r = self.rand32()
            if r < limit:
                return r % n

    def unbiased_uniform64(self, n: int) -> int:
        """Return a uniform integer in [0, n) for a 64-bit bound.

        Raises:
            ValueError: If n is not in [1, 2**64 - 1].
        """
        if not 0 < n < _UINT64_RANGE:
            raise ValueError(f"n must be in [1, {_UINT64_RANGE - 1}], got {n}")

        limit = _UINT64_RANGE - (_UINT64_RANGE % n)
        while True:
            r = self.rand64()
            if r < limit:
                return r % n

    def rand_double(self) -> float:
        """Return a uniform float in the open interval (0, 1)."""
        return ((self.rand64() >> (64 - _DOUBLE_BITS)) + 0.5) * _DOUBLE_SCALE
