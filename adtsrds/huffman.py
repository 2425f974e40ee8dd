"""Huffman decoding of AAC scale factors and spectral values."""

from __future__ import annotations

from collections.abc import Sequence

from .bitstream import BitStream
from .codebooks_pair import spectral_codebook
from .codebooks_quad import CodebookEntry

ZERO_HCB = 0
NOISE_HCB = 13
INTENSITY_HCB2 = 14
INTENSITY_HCB = 15

ESCAPE_HCB = 11
FIRST_PAIR_HCB = 5

_QUAD_LEN = 4
_PAIR_LEN = 2
_ESCAPE_VALUE = 16

# Whether each spectral codebook (1 to 11) carries separate sign bits.
_UNSIGNED = (False, False, True, True, False, False, True, True, True, True, True)


def _build(rows: tuple[tuple[int, int, int], ...]) -> tuple[CodebookEntry, ...]:
    return tuple(CodebookEntry(length, codeword, (value,)) for length, codeword, value in rows)


HCB_SF = _build((
    (1, 0, 60), (3, 4, 59), (4, 10, 61), (4, 11, 58), (4, 12, 62),
    (5, 26, 57), (5, 27, 63), (6, 56, 56), (6, 57, 64), (6, 58, 55),
    (6, 59, 65), (7, 120, 66), (7, 121, 54), (7, 122, 67), (8, 246, 53),
    (8, 247, 68), (8, 248, 52), (8, 249, 69), (8, 250, 51), (9, 502, 70),
    (9, 503, 50), (9, 504, 49), (9, 505, 71), (10, 1012, 72), (10, 1013, 48),
    (10, 1014, 73), (10, 1015, 47), (10, 1016, 74), (10, 1017, 46), (11, 2036, 76),
    (11, 2037, 75), (11, 2038, 77), (11, 2039, 78), (11, 2040, 45), (11, 2041, 43),
    (12, 4084, 44), (12, 4085, 79), (12, 4086, 42), (12, 4087, 41), (12, 4088, 80),
    (12, 4089, 40), (13, 8180, 81), (13, 8181, 39), (13, 8182, 82), (13, 8183, 38),
    (13, 8184, 83), (14, 16370, 37), (14, 16371, 35), (14, 16372, 85), (14, 16373, 33),
    (14, 16374, 36), (14, 16375, 34), (14, 16376, 84), (14, 16377, 32), (15, 32756, 87),
    (15, 32757, 89), (15, 32758, 30), (15, 32759, 31), (16, 65520, 86), (16, 65521, 29),
    (16, 65522, 26), (16, 65523, 27), (16, 65524, 28), (16, 65525, 24), (16, 65526, 88),
    (17, 131054, 25), (17, 131055, 22), (17, 131056, 23), (18, 262114, 90), (18, 262115, 21),
    (18, 262116, 19), (18, 262117, 3), (18, 262118, 1), (18, 262119, 2), (18, 262120, 0),
    (19, 524242, 98), (19, 524243, 99), (19, 524244, 100), (19, 524245, 101), (19, 524246, 102),
    (19, 524247, 117), (19, 524248, 97), (19, 524249, 91), (19, 524250, 92), (19, 524251, 93),
    (19, 524252, 94), (19, 524253, 95), (19, 524254, 96), (19, 524255, 104), (19, 524256, 111),
    (19, 524257, 112), (19, 524258, 113), (19, 524259, 114), (19, 524260, 115), (19, 524261, 116),
    (19, 524262, 110), (19, 524263, 105), (19, 524264, 106), (19, 524265, 107), (19, 524266, 108),
    (19, 524267, 109), (19, 524268, 118), (19, 524269, 6), (19, 524270, 8), (19, 524271, 9),
    (19, 524272, 10), (19, 524273, 5), (19, 524274, 103), (19, 524275, 120), (19, 524276, 119),
    (19, 524277, 4), (19, 524278, 7), (19, 524279, 15), (19, 524280, 16), (19, 524281, 18),
    (19, 524282, 20), (19, 524283, 17), (19, 524284, 11), (19, 524285, 12), (19, 524286, 14),
    (19, 524287, 13),
))


def _find_entry(stream: BitStream, table: Sequence[CodebookEntry]) -> CodebookEntry:
    """Read a codeword from ``stream`` and return its entry in ``table``.

    The table is ordered by code length, so bits are read incrementally as
    longer codes are tried.
    """
    length = table[0].length
    codeword = stream.read_bits(length)
    for entry in table:
        if entry.length > length:
            extra = entry.length - length
            codeword = (codeword << extra) | stream.read_bits(extra)
            length = entry.length
        if codeword == entry.codeword:
            return entry
    raise ValueError("invalid huffman codeword")


def decode_scale_factor(stream: BitStream) -> int:
    """Decode one Huffman-coded scale factor and return its index value."""
    return _find_entry(stream, HCB_SF).values[0]


def _sign_values(stream: BitStream, data: list[int]) -> None:
    for i, value in enumerate(data):
        if value != 0 and stream.read_bool():
            data[i] = -value


def _escape(stream: BitStream, value: int) -> int:
    prefix = 4
    while stream.read_bool():
        prefix += 1
    magnitude = stream.read_bits(prefix) | (1 << prefix)
    return -magnitude if value < 0 else magnitude


def decode_spectral_data(stream: BitStream, cb: int) -> list[int]:
    """Decode one codeword of spectral codebook ``cb``.

    Returns four values for codebooks 1 to 4 and two for codebooks 5 to 11.
    """
    table = spectral_codebook(cb)
    entry = _find_entry(stream, table)
    count = _QUAD_LEN if cb < FIRST_PAIR_HCB else _PAIR_LEN
    data = list(entry.values[:count])

    if cb < ESCAPE_HCB:
        if _UNSIGNED[cb - 1]:
            _sign_values(stream, data)
    elif cb == ESCAPE_HCB:
        _sign_values(stream, data)
        data = [_escape(stream, v) if abs(v) == _ESCAPE_VALUE else v for v in data]
    else:
        raise ValueError(f"unknown spectral codebook: {cb}")
    return data