"""Random number sources used by the samplers.

Quick Reference:
    RandomSource: Abstract capability set (fixed-width draws, byte strings,
        unbiased uniform draws, cloning)
    SeededRandom: Deterministic, reseedable source
    RandomProxy: Forwarding source whose target can be swapped
    RandomHandle: Shared or owned binding of a source into a sampler
"""

from sampleagg.randomness.base import RandomSource
from sampleagg.randomness.handle import Ownership, RandomHandle
from sampleagg.randomness.proxy import RandomProxy
from sampleagg.randomness.seeded import SeededRandom

__all__ = [
    "Ownership",
    "RandomHandle",
    "RandomProxy",
    "RandomSource",
    "SeededRandom",
]
