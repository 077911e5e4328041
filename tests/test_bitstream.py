import io

import pytest

from bmpsqueeze.bitstream import BitReader, BitWriter


def test_bits_round_trip():
    bits = [1, 0, 1, 1, 0, 0, 1, 0, 1, 1, 1]
    out = io.BytesIO()
    writer = BitWriter(out)
    for bit in bits:
        writer.write_bit(bit)
    writer.flush()
    reader = BitReader(io.BytesIO(out.getvalue()))
    assert [reader.read_bit() for _ in bits] == bits


def test_flush_pads_with_zeros_on_the_right():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_code("101")
    writer.flush()
    assert out.getvalue() == b"\xa0"


def test_flush_without_pending_bits_writes_nothing():
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_code("10101010")
    before = out.getvalue()
    writer.flush()
    assert out.getvalue() == before
    assert len(before) == 1


def test_write_int_is_big_endian():
    out = io.BytesIO()
    BitWriter(out).write_int(1)
    assert out.getvalue() == b"\x00\x00\x00\x01"


@pytest.mark.parametrize("value", [0, 1, -1, 999, -255, 2**31 - 1, -(2**31)])
def test_int_round_trip(value):
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_bit(1)
    writer.write_int(value)
    writer.flush()
    reader = BitReader(io.BytesIO(out.getvalue()))
    assert reader.read_bit() == 1
    assert reader.read_int() == value


def test_code_round_trip():
    code = "0110100111"
    out = io.BytesIO()
    writer = BitWriter(out)
    writer.write_code(code)
    writer.flush()
    reader = BitReader(io.BytesIO(out.getvalue()))
    assert "".join(str(reader.read_bit()) for _ in code) == code


def test_invalid_code_character_raises():
    with pytest.raises(ValueError):
        BitWriter(io.BytesIO()).write_code("012")


def test_read_past_end_raises():
    reader = BitReader(io.BytesIO(b"\xff"))
    assert [reader.read_bit() for _ in range(8)] == [1] * 8
    with pytest.raises(EOFError):
        reader.read_bit()