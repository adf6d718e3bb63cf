"""Forwarding random source whose target can be swapped in place.

Many reservoirs can share one logical generator through a single
RandomProxy. When the generator has to be replaced or reseeded, the owner
calls ``reset()`` on the proxy and every reservoir keeps drawing through the
same object, without any of them holding a stale reference to the old
generator.
"""

from __future__ import annotations

import logging

from sampleagg.randomness.base import RandomSource

logger = logging.getLogger(__name__)


class RandomProxy(RandomSource):
    """Random source that forwards every draw to an owned real source.

    Args:
        real: The source to forward to. The proxy takes ownership of it.

    Example:
        proxy = RandomProxy(SeededRandom(seed=1))
        adapter = WeightedSampleAdapter(FloatWeightOps(), 10, proxy)
        proxy.reset(SeededRandom(seed=2))  # adapter now draws from seed 2
    """

    def __init__(self, real: RandomSource):
        self._check_no_loop(real)
        self._real = real

    @property
    def real(self) -> RandomSource:
        """The source draws are currently forwarded to."""
        return self._real

    def reset(self, real: RandomSource) -> None:
        """Replace the owned source, releasing the old one.

        Raises:
            ValueError: If real is this proxy or forwards back to it.
        """
        self._check_no_loop(real)
        logger.debug("RandomProxy target replaced: %r -> %r", self._real, real)
        self._real = real

    def _check_no_loop(self, real: RandomSource) -> None:
        target = real
        while isinstance(target, RandomProxy):
            if target is self:
                raise ValueError("RandomProxy cannot forward to itself")
            target = target._real

    def clone(self) -> RandomProxy | None:
        real_copy = self._real.clone()
        return None if real_copy is None else RandomProxy(real_copy)

    def rand8(self) -> int:
        return self._real.rand8()

    def rand16(self) -> int:
        return self._real.rand16()

    def rand32(self) -> int:
        return self._real.rand32()

    def rand64(self) -> int:
        return self._real.rand64()

    def rand_string(self, desired_len: int) -> bytes:
        return self._real.rand_string(desired_len)

    def unbiased_uniform(self, n: int) -> int:
        return self._real.unbiased_uniform(n)

    def unbiased_uniform64(self, n: int) -> int:
        return self._real.unbiased_uniform64(n)

    def rand_double(self) -> float:
        return self._real.rand_double()

    def __repr__(self) -> str:
        return f"RandomProxy({self._real!r})"
