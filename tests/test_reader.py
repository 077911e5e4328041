import io
import struct

import pytest

from bmpsqueeze.bitstream import BitReader, BitWriter
from bmpsqueeze.blocks import (
    CBCR_QUANTIZATION,
    Y_QUANTIZATION,
    dct_blocks,
    quantize_blocks,
    split_into_blocks,
)
from bmpsqueeze.bmp import FileHeader, InfoHeader, Pixel
from bmpsqueeze.color import rgb_to_ycbcr
from bmpsqueeze.frequencies import FrequencyTable
from bmpsqueeze.huffman import build_tree, generate_codes
from bmpsqueeze.reader import (
    decompress,
    decompress_lossless,
    decompress_lossy,
    read_huffman_tree,
)
from bmpsqueeze.writer import ChannelData, write_huffman_tree, write_lossless, write_lossy


def _write_lossless_file(path, pixels, width, height):
    diffs = [pixels[0]] + [
        Pixel(cur.r - prev.r, cur.g - prev.g, cur.b - prev.b)
        for prev, cur in zip(pixels, pixels[1:])
    ]
    table = FrequencyTable()
    for diff in diffs[1:]:
        table.update((diff.b, diff.g, diff.r))
    items = table.items()
    tree = build_tree(items)
    codes = generate_codes(tree, items)
    write_lossless(path, width, height, tree, diffs, codes)


def _expected_lossless(pixels, width, height):
    return (
        FileHeader(size=54 + width * height * 3).to_bytes()
        + InfoHeader(width=width, height=height).to_bytes()
        + bytes(v for p in pixels for v in (p.b, p.g, p.r))
    )


def _write_lossy_file(path, pixels, width, height, original_width, original_height):
    planes = rgb_to_ycbcr(pixels)
    channels = []
    for plane, table in (
        (planes.y, Y_QUANTIZATION),
        (planes.cb, CBCR_QUANTIZATION),
        (planes.cr, CBCR_QUANTIZATION),
    ):
        blocks = quantize_blocks(dct_blocks(split_into_blocks(plane, width, height)), table)
        freq = FrequencyTable()
        for block in blocks:
            for row in block:
                freq.update(row)
        items = freq.items()
        tree = build_tree(items)
        channels.append(ChannelData(tree, generate_codes(tree, items), blocks))
    write_lossy(path, width, height, original_width, original_height, channels)


def _varied_pixels(count):
    return [Pixel((i * 37) % 256, (i * 91) % 256, (i * 13) % 256) for i in range(count)]


def _shape(node):
    if node is None:
        return None
    return (node.value, node.is_leaf(), _shape(node.left), _shape(node.right))


def test_read_tree_round_trip():
    tree = build_tree([(-3, 5), (0, 9), (4, 1), (7, 2)])
    buffer = io.BytesIO()
    writer = BitWriter(buffer)
    write_huffman_tree(writer, tree)
    writer.flush()
    buffer.seek(0)
    decoded = read_huffman_tree(BitReader(buffer))
    assert _shape(decoded) == _shape(tree)
    assert decoded.frequency == 0


def test_read_single_leaf():
    buffer = io.BytesIO()
    writer = BitWriter(buffer)
    writer.write_bit(1)
    writer.write_bit(1)
    writer.write_int(-7)
    writer.flush()
    buffer.seek(0)
    node = read_huffman_tree(BitReader(buffer))
    assert node.value == -7
    assert node.is_leaf()


def test_read_null_tree():
    assert read_huffman_tree(BitReader(io.BytesIO(b"\x00"))) is None


def test_read_truncated_tree():
    with pytest.raises(EOFError):
        read_huffman_tree(BitReader(io.BytesIO(b"\xc0")))


def test_lossless_round_trip(tmp_path):
    pixels = _varied_pixels(16)
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossless_file(src, pixels, 4, 4)
    assert decompress(src, out) == 0
    assert out.read_bytes() == _expected_lossless(pixels, 4, 4)


def test_lossless_uniform_image(tmp_path):
    pixels = [Pixel(10, 20, 30)] * 6
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossless_file(src, pixels, 3, 2)
    decompress(src, out)
    assert out.read_bytes() == _expected_lossless(pixels, 3, 2)


def test_lossless_single_pixel(tmp_path):
    pixels = [Pixel(200, 100, 50)]
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossless_file(src, pixels, 1, 1)
    decompress(src, out)
    assert out.read_bytes() == _expected_lossless(pixels, 1, 1)


def test_lossless_stream_function(tmp_path):
    pixels = _varied_pixels(6)
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossless_file(src, pixels, 3, 2)
    with open(src, "rb") as stream:
        stream.read(4)
        decompress_lossless(stream, out)
    assert out.read_bytes() == _expected_lossless(pixels, 3, 2)


def test_lossless_truncated_raises(tmp_path):
    src = tmp_path / "in.bin"
    _write_lossless_file(src, _varied_pixels(16), 4, 4)
    data = src.read_bytes()
    src.write_bytes(data[:-5])
    with pytest.raises(EOFError):
        decompress(src, tmp_path / "out.bmp")


def test_lossy_flat_gray(tmp_path):
    pixels = [Pixel(128, 128, 128)] * (16 * 8)
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossy_file(src, pixels, 16, 8, 10, 5)
    assert decompress(src, out) == 1
    data = out.read_bytes()
    file_header = FileHeader.from_bytes(data[:14])
    info = InfoHeader.from_bytes(data[14:54])
    assert file_header.size == len(data)
    assert (info.width, info.height) == (10, 5)
    assert info.size_image == 160
    assert info.size_image == len(data) - 54
    for row in range(5):
        start = 54 + row * 32
        assert data[start + 30:start + 32] == b"\x00\x00"
        assert all(abs(v - 128) <= 3 for v in data[start:start + 30])


def test_lossy_two_flat_blocks(tmp_path):
    pixels = [
        Pixel(50, 50, 50) if x < 8 else Pixel(200, 200, 200)
        for _ in range(8)
        for x in range(16)
    ]
    src = tmp_path / "in.bin"
    out = tmp_path / "out.bmp"
    _write_lossy_file(src, pixels, 16, 8, 16, 8)
    with open(src, "rb") as stream:
        stream.read(4)
        decompress_lossy(stream, out)
    body = out.read_bytes()[54:]
    assert len(body) == 16 * 8 * 3
    for row in range(8):
        for x in range(16):
            expected = 50 if x < 8 else 200
            offset = (row * 16 + x) * 3
            assert all(abs(v - expected) <= 4 for v in body[offset:offset + 3])


def test_invalid_mode(tmp_path):
    src = tmp_path / "in.bin"
    src.write_bytes(struct.pack("<i", 7))
    with pytest.raises(ValueError):
        decompress(src, tmp_path / "out.bmp")


def test_empty_file(tmp_path):
    src = tmp_path / "in.bin"
    src.write_bytes(b"")
    with pytest.raises(EOFError):
        decompress(src, tmp_path / "out.bmp")