"""Command and functions that compress a 24-bit BMP image."""

from __future__ import annotations

import argparse
import os
from collections.abc import Iterable, Sequence
from typing import Optional

from bmpsqueeze.blocks import (
    BLOCK_SIZE,
    CBCR_QUANTIZATION,
    Y_QUANTIZATION,
    IntBlock,
    ceil_div,
    dct_blocks,
    quantize_blocks,
    split_into_blocks,
)
from bmpsqueeze.bmp import Pixel, load_pixels, read_headers
from bmpsqueeze.color import rgb_to_ycbcr
from bmpsqueeze.frequencies import FrequencyTable
from bmpsqueeze.huffman import build_tree, generate_codes
from bmpsqueeze.writer import (
    ChannelData,
    compression_ratio,
    file_size,
    write_lossless,
    write_lossy,
)

LOSSLESS_CHOICE = 1
LOSSY_CHOICE = 2


def pixel_differences(pixels: Iterable[Pixel]) -> list[Pixel]:
    """Keep the first pixel and replace every other by its difference to the previous one."""
    differences: list[Pixel] = []
    previous: Optional[Pixel] = None
    for pixel in pixels:
        if previous is None:
            differences.append(Pixel(pixel.r, pixel.g, pixel.b))
        else:
            differences.append(
                Pixel(pixel.r - previous.r, pixel.g - previous.g, pixel.b - previous.b)
            )
        previous = pixel
    return differences


def compress_lossless(
    input_path: str | os.PathLike[str], output_path: str | os.PathLike[str]
) -> float:
    """Compress a BMP with pixel differences and Huffman coding.

    Returns the size reduction as a percentage of the original file size.
    """
    with open(input_path, "rb") as stream:
        file_header, info = read_headers(stream)
        pixels = load_pixels(stream, info, padded=False)

    differences = pixel_differences(pixels)
    table = FrequencyTable()
    for pixel in differences[1:]:
        table.update((pixel.b, pixel.g, pixel.r))

    items = table.items()
    tree = build_tree(items)
    codes = generate_codes(tree, items)
    write_lossless(output_path, info.width, info.height, tree, differences, codes)
    return compression_ratio(file_header.size, file_size(output_path))


def _channel_data(blocks: list[IntBlock]) -> ChannelData:
    table = FrequencyTable()
    table.update(value for block in blocks for row in block for value in row)
    items = table.items()
    tree = build_tree(items)
    return ChannelData(tree, generate_codes(tree, items), blocks)


def compress_lossy(
    input_path: str | os.PathLike[str], output_path: str | os.PathLike[str]
) -> float:
    """Compress a BMP through YCbCr, 8x8 DCT, quantisation and Huffman coding.

    Returns the size reduction as a percentage of the original file size.
    """
    with open(input_path, "rb") as stream:
        file_header, info = read_headers(stream)
        pixels = load_pixels(stream, info, padded=True)

    new_width = ceil_div(info.width, BLOCK_SIZE) * BLOCK_SIZE
    new_height = ceil_div(info.height, BLOCK_SIZE) * BLOCK_SIZE

    planes = rgb_to_ycbcr(pixels)
    channels = [
        _channel_data(
            quantize_blocks(
                dct_blocks(split_into_blocks(plane, new_width, new_height)), table
            )
        )
        for plane, table in (
            (planes.y, Y_QUANTIZATION),
            (planes.cb, CBCR_QUANTIZATION),
            (planes.cr, CBCR_QUANTIZATION),
        )
    ]

    write_lossy(output_path, new_width, new_height, info.width, info.height, channels)
    return compression_ratio(file_header.size, file_size(output_path))


def _parse_choice(text: Optional[str]) -> Optional[int]:
    try:
        return int(text) if text is not None else None
    except ValueError:
        return None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the compressor; values not given as arguments are prompted for."""
    parser = argparse.ArgumentParser(
        prog="bmpsqueeze-compress",
        description="Compress a 24-bit BMP image losslessly (1) or lossily (2).",
    )
    parser.add_argument("mode", nargs="?", help="1 for lossless, 2 for lossy")
    parser.add_argument("input", nargs="?", help="BMP file to compress")
    parser.add_argument("output", nargs="?", help="compressed file to create")
    args = parser.parse_args(argv)

    mode_text = args.mode
    if mode_text is None:
        print("Enter the compression type:")
        print("1 - Lossless (Differences + Huffmann)")
        print("2 - Lossy (JPEG pipeline)")
        mode_text = input("Enter your choice (1 or 2): ").strip()
    choice = _parse_choice(mode_text)
    if choice not in (LOSSLESS_CHOICE, LOSSY_CHOICE):
        print("Invalid compression type. Please enter 1 or 2.")
        return 1

    input_path = args.input or input("\nEnter the input BMP file path: ").strip()
    if not input_path:
        print("Invalid file path.")
        return 1

    output_path = args.output or input("\nEnter the output binary file path: ").strip()
    if not output_path:
        print("Invalid output file path.")
        return 1

    print(f"\nProcessing file {input_path}...")
    try:
        with open(input_path, "rb"):
            pass
    except OSError:
        print(f"Error opening file {input_path}")
        return 1

    compress = compress_lossless if choice == LOSSLESS_CHOICE else compress_lossy
    try:
        ratio = compress(input_path, output_path)
    except ValueError as exc:
        print(f"Error compressing {input_path}: {exc}")
        return 1
    except OSError:
        print("Error opening output file.")
        return 1

    kind = "lossless" if choice == LOSSLESS_CHOICE else "lossy"
    print(f"\nFile {input_path} processed successfully with {kind} compression")
    print(f"Output written to {output_path}")
    print(f"Compression ratio: {ratio:.2f}%")
    return 0