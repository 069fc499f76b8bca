"""MSB-first bit writer and reader."""

from __future__ import annotations

_MAX_BITS = 23


def make_sign(value: int, bits: int) -> int:
    """Interpret the low ``bits`` bits of ``value`` as a two's complement number."""
    mask = (1 << bits) - 1
    value &= mask
    if value & (1 << (bits - 1)):
        value -= 1 << bits
    return value


def _check_width(n: int) -> None:
    if not 0 <= n <= _MAX_BITS:
        raise ValueError(f"bit field width must be between 0 and {_MAX_BITS}, got {n}")


class BitStream:
    """A byte buffer written and read as a sequence of big-endian bit fields."""

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        self._buf = bytearray(data or b"")
        self._bits_used = 0
        self._read_pos = 0

    def write(self, value: int, n: int) -> None:
        """Append the low ``n`` bits of ``value`` (at most 23 bits)."""
        _check_width(n)
        if n == 0:
            return
        value &= (1 << n) - 1
        start = self._bits_used // 8
        end = -(-(self._bits_used + n) // 8)
        if len(self._buf) < end:
            self._buf.extend(bytes(end - len(self._buf)))
        width = end - start
        shift = width * 8 - (self._bits_used % 8) - n
        chunk = int.from_bytes(self._buf[start:end], "big") | (value << shift)
        self._buf[start:end] = chunk.to_bytes(width, "big")
        self._bits_used += n

    def read(self, n: int) -> int:
        """Read the next ``n`` bits (at most 23) as an unsigned value."""
        _check_width(n)
        if self._read_pos + n > len(self._buf) * 8:
            raise EOFError("not enough bits left in the stream")
        if n == 0:
            return 0
        start = self._read_pos // 8
        end = -(-(self._read_pos + n) // 8)
        shift = (end - start) * 8 - (self._read_pos % 8) - n
        chunk = int.from_bytes(self._buf[start:end], "big")
        self._read_pos += n
        return (chunk >> shift) & ((1 << n) - 1)

    def size_in_bits(self) -> int:
        """Return the number of bits written so far."""
        return self._bits_used

    def to_bytes(self) -> bytes:
        """Return the underlying buffer."""
        return bytes(self._buf)

    def __len__(self) -> int:
        return len(self._buf)