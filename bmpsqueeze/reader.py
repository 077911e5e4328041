"""Decoding compressed images back into 24-bit BMP files."""

from __future__ import annotations

import os
import struct
from typing import BinaryIO, Optional

from bmpsqueeze.bitstream import BitReader
from bmpsqueeze.blocks import (
    BLOCK_SIZE,
    CBCR_QUANTIZATION,
    Y_QUANTIZATION,
    IntBlock,
    ceil_div,
    dequantize_blocks,
    idct_blocks,
)
from bmpsqueeze.bmp import HEADERS_SIZE, FileHeader, InfoHeader
from bmpsqueeze.color import ycbcr_to_bgr
from bmpsqueeze.huffman import HuffmanNode
from bmpsqueeze.writer import LOSSLESS, LOSSY


def _read_ints(stream: BinaryIO, count: int) -> tuple[int, ...]:
    size = 4 * count
    data = stream.read(size)
    if len(data) < size:
        raise EOFError("header is truncated")
    return struct.unpack(f"<{count}i", data)


def read_huffman_tree(reader: BitReader) -> Optional[HuffmanNode]:
    """Read a tree written in pre-order by the writer.

    A 0 bit stands for a missing node. Otherwise a leaf flag and a 32-bit
    value follow; internal nodes continue with their left and right
    subtrees. Decoded nodes carry a frequency of 0.
    """
    if reader.read_bit() == 0:
        return None
    leaf = reader.read_bit() == 1
    node = HuffmanNode(reader.read_int(), 0)
    if not leaf:
        node.left = read_huffman_tree(reader)
        node.right = read_huffman_tree(reader)
    return node


def _decode_symbol(reader: BitReader, root: Optional[HuffmanNode]) -> int:
    if root is None:
        raise ValueError("no Huffman tree to decode with")
    node = root
    while not node.is_leaf():
        node = node.right if reader.read_bit() else node.left
        if node is None:
            raise ValueError("bit sequence matches no code")
    return node.value


def _write_bmp(
    output_path: str | os.PathLike[str],
    file_header: FileHeader,
    info_header: InfoHeader,
    pixel_data: bytes,
) -> None:
    with open(output_path, "wb") as out:
        out.write(file_header.to_bytes())
        out.write(info_header.to_bytes())
        out.write(pixel_data)


def decompress_lossless(stream: BinaryIO, output_path: str | os.PathLike[str]) -> None:
    """Decode a lossless body (everything after the mode word) into a BMP.

    Rows are written without four-byte alignment, exactly as many pixels
    as the stored dimensions give.
    """
    height, width = _read_ints(stream, 2)
    reader = BitReader(stream)
    root = read_huffman_tree(reader)

    count = max(width * height, 0)
    data = bytearray()
    if count:
        previous = [reader.read_int() for _ in range(3)]
        data += bytes(component & 0xFF for component in previous)
        for _ in range(count - 1):
            previous = [value + _decode_symbol(reader, root) for value in previous]
            data += bytes(component & 0xFF for component in previous)

    file_header = FileHeader(size=HEADERS_SIZE + width * height * 3)
    info_header = InfoHeader(width=width, height=height)
    _write_bmp(output_path, file_header, info_header, bytes(data))


def _read_block(reader: BitReader, root: Optional[HuffmanNode]) -> IntBlock:
    values = [_decode_symbol(reader, root) for _ in range(BLOCK_SIZE * BLOCK_SIZE)]
    return [values[start:start + BLOCK_SIZE] for start in range(0, len(values), BLOCK_SIZE)]


def decompress_lossy(stream: BinaryIO, output_path: str | os.PathLike[str]) -> None:
    """Decode a lossy body (everything after the mode word) into a BMP.

    Each channel's blocks are dequantised and inverse transformed, then
    converted back to RGB and cropped to the original dimensions, with
    every row padded to four bytes.
    """
    width, height, original_width, original_height = _read_ints(stream, 4)
    horizontal = ceil_div(width, BLOCK_SIZE)
    total = horizontal * ceil_div(height, BLOCK_SIZE)

    reader = BitReader(stream)
    planes = []
    for table in (Y_QUANTIZATION, CBCR_QUANTIZATION, CBCR_QUANTIZATION):
        root = read_huffman_tree(reader)
        blocks = [_read_block(reader, root) for _ in range(total)]
        planes.append(idct_blocks(dequantize_blocks(blocks, table)))
    y_plane, cb_plane, cr_plane = planes

    row_size = (original_width * 3 + 3) & ~3
    padding = bytes(row_size - original_width * 3)
    image_size = row_size * original_height

    data = bytearray()
    for row in range(original_height):
        block_row, local_y = divmod(row, BLOCK_SIZE)
        for x in range(original_width):
            block_col, local_x = divmod(x, BLOCK_SIZE)
            index = block_row * horizontal + block_col
            data += bytes(
                ycbcr_to_bgr(
                    y_plane[index][local_y][local_x],
                    cb_plane[index][local_y][local_x],
                    cr_plane[index][local_y][local_x],
                )
            )
        data += padding

    file_header = FileHeader(size=HEADERS_SIZE + image_size)
    info_header = InfoHeader(
        width=original_width, height=original_height, size_image=image_size
    )
    _write_bmp(output_path, file_header, info_header, bytes(data))


def decompress(
    input_path: str | os.PathLike[str], output_path: str | os.PathLike[str]
) -> int:
    """Decompress a file of either format into a BMP and return its mode word.

    Raises ValueError when the mode word names no known format.
    """
    with open(input_path, "rb") as stream:
        (mode,) = _read_ints(stream, 1)
        if mode == LOSSLESS:
            decompress_lossless(stream, output_path)
        elif mode == LOSSY:
            decompress_lossy(stream, output_path)
        else:
            raise ValueError(f"invalid compression type {mode}")
    return mode