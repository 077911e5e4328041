"""Command that turns a compressed file back into a BMP image."""

from __future__ import annotations

import argparse
import struct
from collections.abc import Sequence
from typing import Optional

from bmpsqueeze.reader import decompress_lossless, decompress_lossy
from bmpsqueeze.writer import LOSSLESS, LOSSY


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the decompressor; paths not given as arguments are prompted for."""
    parser = argparse.ArgumentParser(
        prog="bmpsqueeze-decompress",
        description="Decompress a file produced by the compressor into a BMP image.",
    )
    parser.add_argument("input", nargs="?", help="compressed input file")
    parser.add_argument("output", nargs="?", help="BMP file to create")
    args = parser.parse_args(argv)

    input_path = args.input or input("\nEnter the binary file path: ").strip()
    try:
        stream = open(input_path, "rb")
    except OSError:
        print("Error opening binary input file.")
        return 1

    with stream:
        output_path = args.output or input(
            "\nEnter the output BMP file path (SHOULD END WITH .bmp): "
        ).strip()

        header = stream.read(4)
        mode = struct.unpack("<i", header)[0] if len(header) == 4 else None
        if mode == LOSSLESS:
            decode = decompress_lossless
        elif mode == LOSSY:
            decode = decompress_lossy
        else:
            print("Invalid compression type in input file.")
            return 1

        try:
            decode(stream, output_path)
        except (EOFError, ValueError, IndexError) as exc:
            print(f"Error decoding input file: {exc}")
            return 1
        except OSError:
            print("Error opening output file.")
            return 1

    print("\nDecompression completed successfully.")
    print(f"Output BMP file created at: {output_path}")
    return 0