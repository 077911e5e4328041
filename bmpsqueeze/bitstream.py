"""Bit-level writing and reading on top of binary streams."""

from __future__ import annotations

from typing import BinaryIO


class BitWriter:
    """Packs bits most-significant first into bytes written to ``stream``."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._buffer = 0
        self._count = 0

    def write_bit(self, bit: int) -> None:
        """Append the lowest bit of ``bit``; emit a byte once eight are held."""
        self._buffer = ((self._buffer << 1) | (bit & 1)) & 0xFF
        self._count += 1
        if self._count == 8:
            self.stream.write(bytes((self._buffer,)))
            self._buffer = 0
            self._count = 0

    def write_code(self, code: str) -> None:
        """Append every bit of a string made of '0' and '1' characters."""
        for char in code:
            if char not in "01":
                raise ValueError(f"invalid bit character {char!r}")
            self.write_bit(char == "1")

    def write_int(self, value: int) -> None:
        """Append ``value`` as a 32-bit two's complement integer, MSB first."""
        value &= 0xFFFFFFFF
        for shift in range(31, -1, -1):
            self.write_bit(value >> shift)

    def flush(self) -> None:
        """Emit any pending bits, padded with zeros on the right."""
        if self._count:
            self.stream.write(bytes(((self._buffer << (8 - self._count)) & 0xFF,)))
            self._buffer = 0
            self._count = 0


class BitReader:
    """Reads bits most-significant first from bytes of ``stream``."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._buffer = 0
        self._count = 0

    def read_bit(self) -> int:
        """Return the next bit; raise EOFError when the stream is exhausted."""
        if self._count == 0:
            data = self.stream.read(1)
            if not data:
                raise EOFError("no more bits to read")
            self._buffer = data[0]
            self._count = 8
        self._count -= 1
        return (self._buffer >> self._count) & 1

    def read_int(self) -> int:
        """Read a 32-bit two's complement integer, MSB first."""
        value = 0
        for _ in range(32):
            value = (value << 1) | self.read_bit()
        if value & 0x80000000:
            value -= 1 << 32
        return value