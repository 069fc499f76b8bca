"""Small numeric helpers shared by the codec parts."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")

_MIN_RELATION = 0.00048828125
_MAX_RELATION = 16.0


def swap_array(values: Iterable[T]) -> list[T]:
    """Return the values in reverse order."""
    return list(values)[::-1]


def invert_spectrum(values: Iterable[float]) -> list[float]:
    """Negate every even-indexed value (spectrum inversion of a QMF band)."""
    return [-v if i % 2 == 0 else v for i, v in enumerate(values)]


def first_set_bit(x: int) -> int:
    """Return the position of the highest set bit of a 32-bit value (0 for 0)."""
    x &= 0xFFFFFFFF
    return max(x.bit_length() - 1, 0)


def div8_ceil(value: int) -> int:
    """Return the number of whole bytes needed to hold ``value`` bits."""
    if value < 0:
        raise ValueError("bit count must not be negative")
    return -(-value // 8)


def median(values: Sequence[T]) -> T:
    """Return the lower median of the values."""
    if not values:
        raise ValueError("median of an empty sequence")
    ordered = sorted(values)
    return ordered[(len(ordered) - 1) // 2]


def energy(values: Iterable[float]) -> float:
    """Return the sum of squares of the values."""
    return sum((v * v for v in values), 0.0)


def to_int(x: float) -> int:
    """Round to the nearest integer, ties to even."""
    return int(round(x))


def swap32(value: int) -> int:
    """Reverse the byte order of a 32-bit unsigned value."""
    return int.from_bytes((value & 0xFFFFFFFF).to_bytes(4, "little"), "big")


def swap16(value: int) -> int:
    """Reverse the byte order of a 16-bit unsigned value."""
    return int.from_bytes((value & 0xFFFF).to_bytes(2, "little"), "big")


def relation_to_idx(x: float) -> int:
    """Map a gain relation to a gain-control level index (4 means unity)."""
    if x <= 0.5:
        inverse = 1.0 / max(x, _MIN_RELATION)
        return 4 + first_set_bit(math.trunc(inverse))
    return 4 - first_set_bit(math.trunc(min(x, _MAX_RELATION)))