import pytest

from bmpsqueeze.blocks import (
    BLOCK_SIZE,
    CBCR_QUANTIZATION,
    Y_QUANTIZATION,
    ZIGZAG,
    c_round,
    ceil_div,
    dct_block,
    dct_blocks,
    dequantize_block,
    dequantize_blocks,
    idct_block,
    idct_blocks,
    quantize_block,
    quantize_blocks,
    split_into_blocks,
)


def _sample_block(seed=0):
    return [[float((r * 31 + c * 17 + seed) % 256) for c in range(8)] for r in range(8)]


@pytest.mark.parametrize("a", range(0, 40))
@pytest.mark.parametrize("b", [1, 3, 8])
def test_ceil_div_bounds(a, b):
    q = ceil_div(a, b)
    assert q * b >= a
    assert (q - 1) * b < a or q == 0


def test_c_round_halves_away_from_zero():
    assert c_round(2.5) == 3
    assert c_round(-2.5) == -3


@pytest.mark.parametrize("x", [0.0, 0.49, 1.2, 7.5, 10.51, 123.999])
def test_c_round_symmetric(x):
    assert c_round(-x) == -c_round(x)
    assert abs(c_round(x) - x) <= 0.5


def test_split_into_blocks_layout():
    width, height = 16, 16
    channel = list(range(width * height))
    blocks = split_into_blocks(channel, width, height)
    assert len(blocks) == 4
    assert blocks[0][0][0] == channel[0]
    assert blocks[1][0][0] == channel[8]
    assert blocks[2][0][0] == channel[8 * width]
    assert blocks[3][7][7] == channel[width * height - 1]
    assert all(len(b) == BLOCK_SIZE and all(len(r) == BLOCK_SIZE for r in b) for b in blocks)


def test_split_ignores_partial_blocks():
    width, height = 12, 9
    blocks = split_into_blocks([1] * (width * height), width, height)
    assert len(blocks) == 1


def test_split_rejects_short_channel():
    with pytest.raises(ValueError):
        split_into_blocks([0] * 10, 8, 8)


def test_dct_idct_round_trip():
    block = _sample_block()
    restored = idct_block(dct_block(block))
    for row, back in zip(block, restored):
        for v, w in zip(row, back):
            assert w == pytest.approx(v, abs=1e-9)


def test_dct_of_constant_block_has_only_dc():
    block = [[50.0] * 8 for _ in range(8)]
    coeffs = dct_block(block)
    for i in range(8):
        for j in range(8):
            if (i, j) != (0, 0):
                assert coeffs[i][j] == pytest.approx(0.0, abs=1e-9)
    assert coeffs[0][0] > 50.0


def test_dct_is_linear():
    a = _sample_block(1)
    b = _sample_block(5)
    summed = [[x + y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]
    da, db, ds = dct_block(a), dct_block(b), dct_block(summed)
    for i in range(8):
        for j in range(8):
            assert ds[i][j] == pytest.approx(da[i][j] + db[i][j], abs=1e-9)


def test_many_blocks_helpers_match_single():
    blocks = [_sample_block(s) for s in range(3)]
    assert dct_blocks(blocks) == [dct_block(b) for b in blocks]
    assert idct_blocks(blocks) == [idct_block(b) for b in blocks]


def test_quantize_exact_multiples():
    block = [[float(v * 3) for v in row] for row in Y_QUANTIZATION]
    quant = quantize_block(block, Y_QUANTIZATION)
    assert all(v == 3 for row in quant for v in row)
    assert dequantize_block(quant, Y_QUANTIZATION) == block


def test_quantize_round_trip_error_bounded():
    coeffs = dct_block(_sample_block(7))
    quant = quantize_block(coeffs, CBCR_QUANTIZATION)
    back = dequantize_block(quant, CBCR_QUANTIZATION)
    for i in range(8):
        for j in range(8):
            assert abs(back[i][j] - coeffs[i][j]) <= CBCR_QUANTIZATION[i][j] / 2 + 1e-9


def test_quantize_many_helpers():
    blocks = [_sample_block(s) for s in range(2)]
    quant = quantize_blocks(blocks, Y_QUANTIZATION)
    assert quant == [quantize_block(b, Y_QUANTIZATION) for b in blocks]
    assert dequantize_blocks(quant, Y_QUANTIZATION) == [
        dequantize_block(q, Y_QUANTIZATION) for q in quant
    ]


def test_zigzag_reads_split_block_in_diagonal_order():
    blocks = split_into_blocks(list(range(64)), 8, 8)
    flat = [value for row in blocks[0] for value in row]
    ordered = [flat[index] for index in ZIGZAG]
    assert ordered[:10] == [0, 1, 8, 16, 9, 2, 3, 10, 17, 24]
    assert ordered[-3:] == [55, 62, 63]
    assert sorted(ordered) == list(range(64))