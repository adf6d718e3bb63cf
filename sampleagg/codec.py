"""Binary encoding of weighted-sample state.

An encoded sample carries everything a merge needs: the encoder's capacity,
the number of items ever offered, and every retained item together with its
original selection key. Keys are stored as raw IEEE-754 doubles so they
round-trip bit for bit; recomputing them on the receiving side would bias
the merged sample.

Layout (version 1, little-endian):

    magic        4 bytes   b"WSA1"
    max_elems    uint32    capacity of the encoding reservoir
    total_elems  uint64    items ever offered, admitted or not
    count        uint32    number of entries that follow
    entries      count x { key: float64, length: uint32, value: length bytes }

Entries are written largest key first, so equal sample sets encode to equal
bytes.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from dataclasses import dataclass

MAGIC = b"WSA1"

_HEADER = struct.Struct("<4sIQI")
_ENTRY = struct.Struct("<dI")

HEADER_SIZE = _HEADER.size
ENTRY_OVERHEAD = _ENTRY.size


class MalformedEncodingError(ValueError):
    """Raised when bytes do not decode to a valid weighted sample."""


@dataclass(frozen=True, slots=True)
class EncodedEntry:
    """One retained item and its selection key."""

    key: float
    value: bytes


@dataclass(frozen=True, slots=True)
class DecodedSamples:
    """Result of decoding an encoded sample.

    Attributes:
        max_elems: Capacity of the reservoir that produced the encoding.
        total_elems: Items that reservoir was offered over its lifetime.
        entries: Retained items with their keys, largest key first.
    """

    max_elems: int
    total_elems: int
    entries: tuple[EncodedEntry, ...]

    @property
    def values(self) -> list[bytes]:
        return [entry.value for entry in self.entries]


def encode_samples(
    max_elems: int,
    total_elems: int,
    entries: Iterable[tuple[float, bytes]],
) -> bytes:
    """Encode a sample.

    Args:
        max_elems: Capacity of the reservoir being encoded.
        total_elems: Items offered to it so far.
        entries: (key, value) pairs currently retained.

    Returns:
        The encoded bytes.
    """
    ordered = sorted(entries, key=lambda entry: entry[0], reverse=True)
    parts = [_HEADER.pack(MAGIC, max_elems, total_elems, len(ordered))]
    for key, value in ordered:
        parts.append(_ENTRY.pack(key, len(value)))
        parts.append(value)
    return b"".join(parts)


def decode_samples(encoded: bytes, expected_max_elems: int | None = None) -> DecodedSamples:
    """Decode and validate an encoded sample.

    The whole input is checked before anything is returned, so callers can
    apply the result without ever seeing a partial decode.

    Args:
        encoded: Bytes produced by ``encode_samples``.
        expected_max_elems: If given, the capacity the encoding must declare.

    Returns:
        The decoded sample.

    Raises:
        MalformedEncodingError: If the bytes are truncated, have trailing
            data, carry an unknown magic, declare more entries than their
            capacity or total allows, hold an invalid key, or declare a
            capacity other than expected_max_elems.
    """
    if len(encoded) < HEADER_SIZE:
        raise MalformedEncodingError(
            f"encoding too short: {len(encoded)} bytes, header needs {HEADER_SIZE}"
        )

    magic, max_elems, total_elems, count = _HEADER.unpack_from(encoded, 0)
    if magic != MAGIC:
        raise MalformedEncodingError(f"unknown magic {magic!r}")
    if expected_max_elems is not None and max_elems != expected_max_elems:
        raise MalformedEncodingError(
            f"capacity mismatch: encoded {max_elems}, expected {expected_max_elems}"
        )
    if count > max_elems:
        raise MalformedEncodingError(f"{count} entries exceed capacity {max_elems}")
    if count > total_elems:
        raise MalformedEncodingError(f"{count} entries exceed total offered {total_elems}")

    entries = []
    offset = HEADER_SIZE
    for i in range(count):
        if offset + ENTRY_OVERHEAD > len(encoded):
            raise MalformedEncodingError(f"entry {i} truncated")
        key, length = _ENTRY.unpack_from(encoded, offset)
        offset += ENTRY_OVERHEAD
        if math.isnan(key) or key > 0:
            raise MalformedEncodingError(f"entry {i} has invalid key {key!r}")
        if offset + length > len(encoded):
            raise MalformedEncodingError(f"entry {i} value truncated")
        entries.append(EncodedEntry(key=key, value=bytes(encoded[offset : offset + length])))
        offset += length

    if offset != len(encoded):
        raise MalformedEncodingError(f"{len(encoded) - offset} trailing bytes")

    return DecodedSamples(max_elems=max_elems, total_elems=total_elems, entries=tuple(entries))
