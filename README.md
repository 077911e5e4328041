# bmpsqueeze

Compress uncompressed 24-bit BMP images into a compact binary format and
turn them back into BMP files.

Two modes are available:

1. **Lossless** – every colour component after the first pixel is replaced by
   its difference from the previous pixel, and the differences are
   Huffman-coded with one shared tree.
2. **Lossy** – RGB is converted to YCbCr, the image is extended with black
   pixels to a multiple of 8 in both directions and split into 8x8 blocks,
   each block goes through a 2D DCT and is quantised with the standard
   luminance and chrominance tables, and the quantised coefficients are
   Huffman-coded with one tree per channel.

The compressed file starts with a word naming the mode, so one decompressor
handles both.

## Installation

```
pip install .
```

Only the Python standard library is needed (Python 3.10 or later).

## Compressing

```
bmpsqueeze-compress [MODE] [INPUT] [OUTPUT]
```

`MODE` is `1` for lossless or `2` for lossy. Any value not given on the
command line is asked for interactively. On success the command prints the
compression ratio: the percentage by which the output is smaller than the
size recorded in the BMP file header. It exits with status 1 and a message
when the mode is invalid, a path is empty, the input cannot be opened or the
pixel data is truncated.

## Decompressing

```
bmpsqueeze-decompress [INPUT] [OUTPUT]
```

Missing paths are asked for interactively; the output path should end in
`.bmp`. The command exits with status 1 when the input cannot be opened, its
mode word is unknown, or its contents cannot be decoded.

## Using it from Python

```python
from bmpsqueeze.compressor import compress_lossless, compress_lossy
from bmpsqueeze.reader import decompress

ratio = compress_lossy("photo.bmp", "photo.bin")   # percentage reduction
print(f"{ratio:.2f}%")

mode = decompress("photo.bin", "photo-restored.bmp")  # 0 lossless, 1 lossy
```

`decompress` raises `ValueError` for an unknown mode word and `EOFError` for
a truncated file.

The building blocks can be used on their own:

- `bmpsqueeze.frequencies.FrequencyTable` counts symbols in [-255, 255] and
  lists them in ascending order.
- `bmpsqueeze.minheap.MinHeap` is a bounded min-heap (512 entries by default)
  ordered by `frequency`; it raises `HeapFullError` when full.
- `bmpsqueeze.huffman` has `HuffmanNode`, `build_tree`, `merge_trees`,
  `generate_codes` (symbol to bit-string map), `format_tree` and
  `serialize_tree`.
- `bmpsqueeze.blocks` has `split_into_blocks`, `dct_block`/`idct_block`,
  `quantize_block`/`dequantize_block` (and their list versions), `ceil_div`,
  `c_round`, the quantisation tables `Y_QUANTIZATION` and
  `CBCR_QUANTIZATION`, and the `ZIGZAG` order.
- `bmpsqueeze.color` has `rgb_to_ycbcr` and `ycbcr_to_bgr`.
- `bmpsqueeze.bmp` has `FileHeader`, `InfoHeader`, `Pixel`, `read_headers`
  and `load_pixels`.
- `bmpsqueeze.bitstream` has `BitWriter` and `BitReader`, which pack bits
  most-significant first.
- `bmpsqueeze.writer` has `write_lossless`, `write_lossy`, `ChannelData`,
  `write_huffman_tree`, `file_size` and `compression_ratio`.
- `bmpsqueeze.reader` has `read_huffman_tree`, `decompress_lossless`,
  `decompress_lossy` and `decompress`.

## File format

All header integers are 32-bit little-endian.

- Lossless: mode `0`, height, width; then a bit stream holding the Huffman
  tree, the first pixel's B, G and R as 32-bit integers, and the coded B, G
  and R differences of every following pixel.
- Lossy: mode `1`, padded width, padded height, original width, original
  height; then, for Y, Cb and Cr in turn, the channel's Huffman tree followed
  by the 64 coded coefficients of every block, row by row.

A tree is written in pre-order: a missing node is a single `0` bit; a present
node is a `1` bit, then `1` for a leaf or `0` for an internal node, then its
value as 32 bits, and internal nodes continue with their left and right
subtrees. The bit stream ends padded with zero bits to a whole byte.

## Limits

- Input is expected to be a 24-bit uncompressed BMP; the bit depth is not
  checked.
- Lossless mode reads `width * height` pixels as stored, without skipping row
  padding, and writes the restored BMP without row padding either, so it is
  exact only for images whose width times three is a multiple of four.
- Lossy output rows are padded to four bytes and cropped to the original
  dimensions.
- Values placed in a frequency table must lie between -255 and 255.

## Running the tests

```
pip install ".[test]"
pytest
```