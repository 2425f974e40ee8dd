import pytest

from adtsrds.bitstream import BitStream

SAMPLE = bytes([0x12, 0x34, 0x56, 0x78, 0x9A, 0xBC, 0xDE, 0xF0, 0x0F, 0x1E, 0x2D, 0x3C])


def test_adts_syncword():
    stream = BitStream(bytes([0xFF, 0xF1, 0x50, 0x80]))
    assert stream.read_bits(12) == 0xFFF


def test_len_is_data_length():
    assert len(BitStream(SAMPLE)) == len(SAMPLE)


def test_bit_by_bit_round_trip():
    stream = BitStream(SAMPLE)
    bits = [stream.read_bit() for _ in range(8 * len(SAMPLE))]
    rebuilt = bytes(
        int("".join(str(b) for b in bits[i:i + 8]), 2) for i in range(0, len(bits), 8)
    )
    assert rebuilt == SAMPLE


@pytest.mark.parametrize(
    "widths",
    [
        [3, 13, 7, 32, 1, 20, 12, 8],
        [32, 32, 32],
        [1] * 40 + [31, 25],
        [17, 17, 17, 17, 17, 11],
    ],
)
def test_chunked_reads_concatenate_to_data(widths):
    assert sum(widths) == 8 * len(SAMPLE)
    stream = BitStream(SAMPLE)
    value = 0
    for width in widths:
        value = (value << width) | stream.read_bits(width)
    assert value == int.from_bytes(SAMPLE, "big")


@pytest.mark.parametrize("count", [0, 1, 5, 31, 32, 33, 40, 64, 70])
def test_skip_matches_read(count):
    skipped = BitStream(SAMPLE)
    read = BitStream(SAMPLE)
    skipped.skip_bits(count)
    remaining = count
    while remaining > 0:
        step = min(remaining, 32)
        read.read_bits(step)
        remaining -= step
    assert skipped.bits_left() == read.bits_left()
    assert skipped.read_bits(8) == read.read_bits(8)


def test_skip_bit_matches_read_bit():
    skipped = BitStream(SAMPLE)
    read = BitStream(SAMPLE)
    for _ in range(35):
        skipped.skip_bit()
        read.read_bit()
    assert skipped.read_bits(16) == read.read_bits(16)


def test_bits_left_decreases_with_consumption():
    stream = BitStream(SAMPLE)
    total = 8 * len(SAMPLE)
    assert stream.bits_left() == total
    consumed = 0
    for width in (5, 27, 1, 32, 9):
        stream.read_bits(width)
        consumed += width
        assert stream.bits_left() == total - consumed


def test_byte_align_moves_to_next_byte():
    stream = BitStream(SAMPLE)
    stream.read_bits(3)
    stream.byte_align()
    assert stream.bits_left() % 8 == 0
    assert stream.read_bits(8) == SAMPLE[1]


def test_byte_align_when_aligned_is_noop():
    stream = BitStream(SAMPLE)
    stream.read_bits(8)
    before = stream.bits_left()
    stream.byte_align()
    assert stream.bits_left() == before
    assert stream.read_bits(8) == SAMPLE[1]


def test_read_bool():
    stream = BitStream(bytes([0x80, 0, 0, 0]))
    assert stream.read_bool() is True
    assert stream.read_bool() is False


def test_short_tail_is_zero_padded():
    stream = BitStream(bytes([0xAB]))
    assert stream.read_bits(8) == 0xAB
    assert stream.read_bits(8) == 0


def test_tail_of_odd_length_buffer():
    data = SAMPLE[:6]
    stream = BitStream(data)
    assert stream.read_bits(32) == int.from_bytes(data[:4], "big")
    assert stream.read_bits(16) == int.from_bytes(data[4:6], "big")


def test_full_32_bit_read():
    stream = BitStream(b"\xff" * 4)
    assert stream.read_bits(32) == int.from_bytes(b"\xff" * 4, "big")


def test_read_empty_raises_eof():
    with pytest.raises(EOFError):
        BitStream(b"").read_bit()


def test_read_past_end_raises_eof():
    stream = BitStream(b"\x00" * 4)
    stream.read_bits(32)
    with pytest.raises(EOFError):
        stream.read_bit()


def test_skip_past_end_raises_eof():
    stream = BitStream(SAMPLE)
    with pytest.raises(EOFError):
        stream.skip_bits(8 * len(SAMPLE) + 64)


def test_read_more_than_32_bits_rejected():
    with pytest.raises(ValueError):
        BitStream(SAMPLE).read_bits(33)