"""Reading and writing the headers and pixel data of 24-bit BMP files."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import BinaryIO, ClassVar, NamedTuple

from bmpsqueeze.blocks import BLOCK_SIZE, ceil_div

HEADERS_SIZE = 54
"""Combined size of the file header and the info header."""


class Pixel(NamedTuple):
    """An RGB pixel; components may also hold signed differences."""

    r: int
    g: int
    b: int


@dataclass
class FileHeader:
    """The 14-byte BMP file header."""

    type: int = 0x4D42
    size: int = 0
    reserved1: int = 0
    reserved2: int = 0
    off_bits: int = HEADERS_SIZE

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<HIHHI")

    @classmethod
    def from_bytes(cls, data: bytes) -> "FileHeader":
        """Parse the header from the first 14 bytes of ``data``."""
        size = cls._FORMAT.size
        if len(data) < size:
            raise ValueError(f"file header needs {size} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack(data[:size]))

    def to_bytes(self) -> bytes:
        """Pack the header into its 14-byte little-endian form."""
        return self._FORMAT.pack(*astuple(self))

    def format(self) -> str:
        """Describe every field, one per line."""
        return (
            "File Header:\n"
            f"bfType: 0x{self.type:X}\n"
            f"bfSize: {self.size} bytes\n"
            f"bfReserved1: {self.reserved1}\n"
            f"bfReserved2: {self.reserved2}\n"
            f"bfOffBits: {self.off_bits} bytes\n"
        )


@dataclass
class InfoHeader:
    """The 40-byte BMP info header."""

    size: int = 40
    width: int = 0
    height: int = 0
    planes: int = 1
    bit_count: int = 24
    compression: int = 0
    size_image: int = 0
    x_pels_per_meter: int = 0
    y_pels_per_meter: int = 0
    clr_used: int = 0
    clr_important: int = 0

    _FORMAT: ClassVar[struct.Struct] = struct.Struct("<IiiHHIIiiII")

    @classmethod
    def from_bytes(cls, data: bytes) -> "InfoHeader":
        """Parse the header from the first 40 bytes of ``data``."""
        size = cls._FORMAT.size
        if len(data) < size:
            raise ValueError(f"info header needs {size} bytes, got {len(data)}")
        return cls(*cls._FORMAT.unpack(data[:size]))

    def to_bytes(self) -> bytes:
        """Pack the header into its 40-byte little-endian form."""
        return self._FORMAT.pack(*astuple(self))

    def format(self) -> str:
        """Describe every field, one per line."""
        return (
            "\nInfo Header:\n"
            f"biSize: {self.size}\n"
            f"biWidth: {self.width}\n"
            f"biHeight: {self.height}\n"
            f"biPlanes: {self.planes}\n"
            f"biBitCount: {self.bit_count}\n"
            f"biCompression: {self.compression}\n"
            f"biSizeImage: {self.size_image}\n"
            f"biXPelsPerMeter: {self.x_pels_per_meter}\n"
            f"biYPelsPerMeter: {self.y_pels_per_meter}\n"
            f"biClrUsed: {self.clr_used}\n"
            f"biClrImportant: {self.clr_important}\n"
        )


def read_headers(stream: BinaryIO) -> tuple[FileHeader, InfoHeader]:
    """Read the file header and info header from the current position."""
    file_header = FileHeader.from_bytes(stream.read(14))
    info_header = InfoHeader.from_bytes(stream.read(40))
    return file_header, info_header


def _pixel_at(data: bytes, offset: int) -> Pixel:
    b, g, r = data[offset:offset + 3]
    return Pixel(r, g, b)


def load_pixels(stream: BinaryIO, info: InfoHeader, padded: bool) -> list[Pixel]:
    """Read the pixel data that follows the 54 header bytes.

    Without ``padded`` the data is read as ``width * height`` consecutive
    BGR triples, ignoring row alignment. With ``padded`` each row's
    four-byte alignment is skipped and the image is extended with black
    pixels to dimensions that are multiples of 8.
    Raises ValueError when the stream holds too little pixel data.
    """
    stream.seek(HEADERS_SIZE)
    data = stream.read()
    width, height = info.width, info.height

    if not padded:
        count = max(width * height, 0)
        if len(data) < count * 3:
            raise ValueError("pixel data is truncated")
        return [_pixel_at(data, index * 3) for index in range(count)]

    new_width = ceil_div(width, BLOCK_SIZE) * BLOCK_SIZE
    new_height = ceil_div(height, BLOCK_SIZE) * BLOCK_SIZE
    row_size = width * 3
    stride = (row_size + 3) // 4 * 4
    if height > 0 and width > 0 and len(data) < (height - 1) * stride + row_size:
        raise ValueError("pixel data is truncated")

    black = Pixel(0, 0, 0)
    pixels: list[Pixel] = []
    for y in range(new_height):
        for x in range(new_width):
            if x < width and y < height:
                pixels.append(_pixel_at(data, y * stride + x * 3))
            else:
                pixels.append(black)
    return pixels