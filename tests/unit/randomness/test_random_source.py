"""Tests for RandomSource draws and SeededRandom."""

import pytest

from sampleagg.randomness import RandomSource, SeededRandom


class CountingRandom(RandomSource):
    """Returns 0, 1, 2, ... shifted into the high bits."""

    def __init__(self, start: int = 0):
        self._next = start

    def rand64(self) -> int:
        value = self._next
        self._next += 1
        return value

    def clone(self) -> "CountingRandom":
        return CountingRandom(self._next)


class TestFixedWidthDraws:
    """Tests for the draws derived from rand64."""

    def test_narrow_draws_take_high_bits(self):
        """rand8/16/32 keep the top bits of a 64-bit draw."""
        rng = CountingRandom(start=0xFEDCBA9876543210)

        assert rng.rand8() == 0xFE
        assert rng.rand16() == 0xFEDC
        assert rng.rand32() == 0xFEDCBA98

    def test_draws_stay_in_range(self):
        """Every fixed-width draw fits its width."""
        rng = SeededRandom(seed=3)
        for _ in range(200):
            assert 0 <= rng.rand8() < 1 << 8
            assert 0 <= rng.rand16() < 1 << 16
            assert 0 <= rng.rand32() < 1 << 32
            assert 0 <= rng.rand64() < 1 << 64


class TestRandString:
    """Tests for rand_string."""

    def test_returns_requested_length(self):
        """Byte strings have exactly the requested length."""
        for rng in (SeededRandom(seed=1), CountingRandom()):
            assert len(rng.rand_string(0)) == 0
            assert len(rng.rand_string(5)) == 5
            assert len(rng.rand_string(17)) == 17

    def test_rejects_negative_length(self):
        """Negative lengths are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            CountingRandom().rand_string(-1)
        with pytest.raises(ValueError, match="non-negative"):
            SeededRandom(seed=1).rand_string(-1)

    def test_base_builds_from_little_endian_words(self):
        """The base implementation packs rand64 words little-endian."""
        rng = CountingRandom(start=0x0807060504030201)

        assert rng.rand_string(4) == b"\x01\x02\x03\x04"


class TestUnbiasedUniform:
    """Tests for bounded uniform draws."""

    def test_stays_below_bound(self):
        """Draws fall in [0, n)."""
        rng = SeededRandom(seed=11)
        for n in (1, 2, 7, 1000, (1 << 31) - 1):
            for _ in range(50):
                assert 0 <= rng.unbiased_uniform(n) < n

    def test_64_bit_stays_below_bound(self):
        """64-bit draws fall in [0, n)."""
        rng = SeededRandom(seed=11)
        for n in (1, 3, 1 << 40, (1 << 64) - 1):
            for _ in range(50):
                assert 0 <= rng.unbiased_uniform64(n) < n

    @pytest.mark.parametrize("n", [0, -5, 1 << 31])
    def test_rejects_bad_32_bit_bound(self, n):
        """Bounds outside [1, 2**31 - 1] are rejected."""
        with pytest.raises(ValueError, match="n must be in"):
            SeededRandom(seed=1).unbiased_uniform(n)

    @pytest.mark.parametrize("n", [0, 1 << 64])
    def test_rejects_bad_64_bit_bound(self, n):
        """Bounds outside [1, 2**64 - 1] are rejected."""
        with pytest.raises(ValueError, match="n must be in"):
            SeededRandom(seed=1).unbiased_uniform64(n)

    def test_roughly_uniform(self):
        """Each outcome of a small range shows up about equally often."""
        rng = SeededRandom(seed=5)
        counts = [0] * 6
        for _ in range(6000):
            counts[rng.unbiased_uniform(6)] += 1

        for count in counts:
            assert 800 < count < 1200


class TestRandDouble:
    """Tests for rand_double."""

    def test_extremes_are_excluded(self):
        """The smallest and largest 64-bit draws still map inside (0, 1)."""
        assert 0.0 < CountingRandom(start=0).rand_double() < 1.0
        assert 0.0 < CountingRandom(start=(1 << 64) - 1).rand_double() < 1.0

    def test_mean_is_about_half(self):
        """Doubles average out near 0.5."""
        rng = SeededRandom(seed=9)
        values = [rng.rand_double() for _ in range(10000)]

        assert all(0.0 < v < 1.0 for v in values)
        assert 0.48 < sum(values) / len(values) < 0.52


class TestSeededRandom:
    """Tests for SeededRandom."""

    def test_same_seed_same_sequence(self):
        """Equal seeds give equal sequences."""
        a = SeededRandom(seed=42)
        b = SeededRandom(seed=42)

        assert [a.rand64() for _ in range(10)] == [b.rand64() for _ in range(10)]

    def test_reseed_restarts_sequence(self):
        """reseed() restarts from the new seed."""
        rng = SeededRandom(seed=1)
        first = [rng.rand32() for _ in range(5)]
        rng.reseed(1)

        assert [rng.rand32() for _ in range(5)] == first
        assert rng.seed == 1

    def test_clone_continues_sequence(self):
        """A clone continues from the same point, independently."""
        rng = SeededRandom(seed=8)
        rng.rand64()
        copy = rng.clone()

        assert [copy.rand64() for _ in range(5)] == [rng.rand64() for _ in range(5)]
        assert copy is not rng

    def test_repr_includes_seed(self):
        """repr shows the seed."""
        assert "seed=3" in repr(SeededRandom(seed=3))
