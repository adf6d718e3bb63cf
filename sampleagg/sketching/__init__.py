"""Streaming sampling algorithms.

Sampling sketches keep a bounded, mergeable subset of a data stream.

All algorithms share common properties:
- Bounded memory usage (configurable)
- Single-pass processing (offer items one at a time)
- Mergeable (combine samples from parallel streams)
- Reproducible (given a deterministic random source)

Quick Reference:
    WeightedReservoir: Weighted random sampling from streams

Example:
    from sampleagg.randomness import SeededRandom
    from sampleagg.sketching import WeightedReservoir

    rng = SeededRandom(seed=42)
    reservoir = WeightedReservoir[str](capacity=10)
    for name, weight in stream:
        reservoir.consider_candidate(weight, name, rng)
    print(reservoir.sample())
"""

# Base protocols
from sampleagg.sketching.base import SamplingSketch, Sketch

# Sampling
from sampleagg.sketching.weighted_reservoir import Admission, WeightedReservoir

__all__ = [
    "Admission",
    "SamplingSketch",
    # Protocols
    "Sketch",
    # Sampling
    "WeightedReservoir",
]
