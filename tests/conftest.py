"""
Shared pytest fixtures for sampleagg tests.
"""

import logging
from collections.abc import Iterable

import pytest

from sampleagg.randomness import RandomSource


class ScriptedRandom(RandomSource):
    """Random source replaying a fixed list of uniform doubles.

    Lets tests pick the exact selection keys a reservoir computes:
    key = log(u) / weight.
    """

    def __init__(self, doubles: Iterable[float]):
        self._doubles = list(doubles)
        self._index = 0

    def rand64(self) -> int:
        return int(self.rand_double() * (1 << 64)) & ((1 << 64) - 1)

    def rand_double(self) -> float:
        if self._index >= len(self._doubles):
            raise AssertionError("ScriptedRandom ran out of doubles")
        value = self._doubles[self._index]
        self._index += 1
        return value

    @property
    def draws(self) -> int:
        """Number of doubles consumed so far."""
        return self._index

    def clone(self) -> "ScriptedRandom":
        copy = ScriptedRandom(self._doubles)
        copy._index = self._index
        return copy


class UncloneableRandom(RandomSource):
    """Random source that refuses to be cloned."""

    def rand64(self) -> int:
        return 0x0123456789ABCDEF

    def clone(self) -> None:
        return None


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture(autouse=True)
def reset_sampleagg_logging():
    """Reset logging state before each test.

    Ensures tests start with a clean logging configuration:
    - Removes all handlers except NullHandler
    - Resets level to NOTSET (inherit from parent)
    - Re-enables propagation so caplog sees library records
    """
    logger = logging.getLogger("sampleagg")

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()

    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

    yield

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        if not isinstance(handler, logging.NullHandler):
            handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def uncloneable_random():
    """A RandomSource whose clone() yields None."""
    return UncloneableRandom()
