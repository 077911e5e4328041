"""Writing compressed images in the lossless and lossy binary formats."""

from __future__ import annotations

import os
import struct
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional

from bmpsqueeze.bitstream import BitWriter
from bmpsqueeze.bmp import Pixel
from bmpsqueeze.huffman import HuffmanNode

LOSSLESS = 0
LOSSY = 1


@dataclass
class ChannelData:
    """Everything written for one colour channel of a lossy image."""

    tree: Optional[HuffmanNode]
    codes: Mapping[int, str]
    blocks: Sequence[Sequence[Sequence[int]]] = field(default_factory=list)


def write_huffman_tree(writer: BitWriter, node: Optional[HuffmanNode]) -> None:
    """Write a tree in pre-order.

    A missing node is a single 0 bit. A present node is a 1 bit, then 1 for
    a leaf or 0 for an internal node, then its value as 32 bits; internal
    nodes continue with their left and right subtrees.
    """
    stack: list[Optional[HuffmanNode]] = [node]
    while stack:
        current = stack.pop()
        if current is None:
            writer.write_bit(0)
            continue
        writer.write_bit(1)
        leaf = current.is_leaf()
        writer.write_bit(1 if leaf else 0)
        writer.write_int(current.value)
        if not leaf:
            stack.append(current.right)
            stack.append(current.left)


def write_lossless(
    path: str | os.PathLike[str],
    width: int,
    height: int,
    tree: Optional[HuffmanNode],
    differences: Sequence[Pixel],
    codes: Mapping[int, str],
) -> None:
    """Write a lossless file: header, tree, first pixel, then coded differences.

    The first pixel is stored raw as three 32-bit integers (B, G, R); every
    following pixel's B, G and R differences are written with ``codes``.
    """
    if not differences:
        raise ValueError("no pixel differences to write")
    with open(path, "wb") as stream:
        stream.write(struct.pack("<iii", LOSSLESS, height, width))
        writer = BitWriter(stream)
        write_huffman_tree(writer, tree)

        first = differences[0]
        for component in (first.b, first.g, first.r):
            writer.write_int(component)

        for pixel in differences[1:width * height]:
            for component in (pixel.b, pixel.g, pixel.r):
                writer.write_code(codes[component])
        writer.flush()


def write_lossy(
    path: str | os.PathLike[str],
    width: int,
    height: int,
    original_width: int,
    original_height: int,
    channels: Sequence[ChannelData],
) -> None:
    """Write a lossy file: header, then each channel's tree and coded blocks.

    Coefficients of each block are written row by row.
    """
    with open(path, "wb") as stream:
        stream.write(
            struct.pack("<iiiii", LOSSY, width, height, original_width, original_height)
        )
        writer = BitWriter(stream)
        for channel in channels:
            write_huffman_tree(writer, channel.tree)
            codes = channel.codes
            for block in channel.blocks:
                for row in block:
                    for value in row:
                        writer.write_code(codes[value])
        writer.flush()


def file_size(path: str | os.PathLike[str]) -> int:
    """Return the size of a file in bytes."""
    return os.path.getsize(path)


def compression_ratio(original_size: int, compressed_size: int) -> float:
    """Return the size reduction as a percentage, or -1.0 for an empty original."""
    if original_size == 0:
        return -1.0
    return (1.0 - compressed_size / original_size) * 100.0