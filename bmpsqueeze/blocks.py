"""8x8 block handling: splitting, DCT/IDCT and quantisation."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

BLOCK_SIZE = 8

Block = list[list[float]]
IntBlock = list[list[int]]
Table = Sequence[Sequence[int]]

Y_QUANTIZATION: tuple[tuple[int, ...], ...] = (
    (16, 11, 10, 16, 24, 40, 51, 61),
    (12, 12, 14, 19, 26, 58, 60, 55),
    (14, 13, 16, 24, 40, 57, 69, 56),
    (14, 17, 22, 29, 51, 87, 80, 62),
    (18, 22, 37, 56, 68, 109, 103, 77),
    (24, 35, 55, 64, 81, 104, 113, 92),
    (49, 64, 78, 87, 103, 121, 120, 101),
    (72, 92, 95, 98, 112, 100, 103, 99),
)
"""Standard luminance quantisation table."""

CBCR_QUANTIZATION: tuple[tuple[int, ...], ...] = (
    (17, 18, 24, 47, 99, 99, 99, 99),
    (18, 21, 26, 66, 99, 99, 99, 99),
    (24, 26, 56, 99, 99, 99, 99, 99),
    (47, 66, 99, 99, 99, 99, 99, 99),
    (99, 99, 99, 99, 99, 99, 99, 99),
    (99, 99, 99, 99, 99, 99, 99, 99),
    (99, 99, 99, 99, 99, 99, 99, 99),
    (99, 99, 99, 99, 99, 99, 99, 99),
)
"""Standard chrominance quantisation table."""

ZIGZAG: tuple[int, ...] = (
    0, 1, 8, 16, 9, 2, 3, 10,
    17, 24, 32, 25, 18, 11, 4, 5,
    12, 19, 26, 33, 40, 48, 41, 34,
    27, 20, 13, 6, 7, 14, 21, 28,
    35, 42, 49, 56, 57, 50, 43, 36,
    29, 22, 15, 23, 30, 37, 44, 51,
    58, 59, 52, 45, 38, 31, 39, 46,
    53, 60, 61, 54, 47, 55, 62, 63,
)
"""Zig-zag reading order of the 64 coefficients of a block."""

_RANGE = range(BLOCK_SIZE)
_NORM = tuple(math.sqrt(0.5) if i == 0 else 1.0 for i in _RANGE)
_COS = tuple(
    tuple(math.cos((2 * x + 1) * i * math.pi / 16.0) for i in _RANGE)
    for x in _RANGE
)


def ceil_div(a: int, b: int) -> int:
    """Integer division rounding up, for non-negative ``a`` and positive ``b``."""
    return (a + b - 1) // b


def c_round(value: float) -> int:
    """Round to the nearest integer with halves going away from zero."""
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


def split_into_blocks(channel: Sequence[int], width: int, height: int) -> list[Block]:
    """Cut a row-major channel into 8x8 float blocks, left to right, top to bottom.

    Only whole blocks are produced; trailing rows or columns that do not
    fill a block are ignored.
    """
    if len(channel) < width * height:
        raise ValueError("channel holds fewer values than width * height")
    blocks: list[Block] = []
    for top in range(0, height - BLOCK_SIZE + 1, BLOCK_SIZE):
        for left in range(0, width - BLOCK_SIZE + 1, BLOCK_SIZE):
            blocks.append([
                [float(channel[(top + row) * width + left + col]) for col in _RANGE]
                for row in _RANGE
            ])
    return blocks


def dct_block(block: Sequence[Sequence[float]]) -> Block:
    """Return the 2-D discrete cosine transform of an 8x8 block."""
    output: Block = []
    for i in _RANGE:
        row: list[float] = []
        for j in _RANGE:
            total = 0.0
            for x in _RANGE:
                cos_i = _COS[x][i]
                line = block[x]
                for y in _RANGE:
                    total += line[y] * cos_i * _COS[y][j]
            row.append(0.25 * _NORM[i] * _NORM[j] * total)
        output.append(row)
    return output


def idct_block(block: Sequence[Sequence[float]]) -> Block:
    """Return the inverse 2-D discrete cosine transform of an 8x8 block."""
    output: Block = []
    for x in _RANGE:
        row: list[float] = []
        for y in _RANGE:
            total = 0.0
            for i in _RANGE:
                ci = _NORM[i]
                cos_xi = _COS[x][i]
                line = block[i]
                for j in _RANGE:
                    total += ci * _NORM[j] * line[j] * cos_xi * _COS[y][j]
            row.append(0.25 * total)
        output.append(row)
    return output


def dct_blocks(blocks: Iterable[Sequence[Sequence[float]]]) -> list[Block]:
    """Apply :func:`dct_block` to every block."""
    return [dct_block(block) for block in blocks]


def idct_blocks(blocks: Iterable[Sequence[Sequence[float]]]) -> list[Block]:
    """Apply :func:`idct_block` to every block."""
    return [idct_block(block) for block in blocks]


def quantize_block(block: Sequence[Sequence[float]], table: Table) -> IntBlock:
    """Divide each coefficient by its table entry and round to an integer."""
    return [
        [c_round(value / divisor) for value, divisor in zip(row, table_row)]
        for row, table_row in zip(block, table)
    ]


def quantize_blocks(blocks: Iterable[Sequence[Sequence[float]]], table: Table) -> list[IntBlock]:
    """Quantise every block with the same table."""
    return [quantize_block(block, table) for block in blocks]


def dequantize_block(block: Sequence[Sequence[int]], table: Table) -> Block:
    """Multiply each quantised coefficient back by its table entry."""
    return [
        [float(value * factor) for value, factor in zip(row, table_row)]
        for row, table_row in zip(block, table)
    ]


def dequantize_blocks(blocks: Iterable[Sequence[Sequence[int]]], table: Table) -> list[Block]:
    """Dequantise every block with the same table."""
    return [dequantize_block(block, table) for block in blocks]