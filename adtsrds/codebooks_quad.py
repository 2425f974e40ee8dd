"""Huffman codebooks 1 to 4 (quadruple spectral values) and the entry type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodebookEntry:
    """One Huffman code: bit length, codeword, and the values it decodes to."""

    length: int
    codeword: int
    values: tuple[int, ...]


def _build(rows: tuple[tuple[int, ...], ...]) -> tuple[CodebookEntry, ...]:
    return tuple(CodebookEntry(row[0], row[1], tuple(row[2:])) for row in rows)


HCB1 = _build((
    (1, 0, 0, 0, 0, 0), (5, 16, 1, 0, 0, 0), (5, 17, -1, 0, 0, 0),
    (5, 18, 0, 0, 0, -1), (5, 19, 0, 1, 0, 0), (5, 20, 0, 0, 0, 1),
    (5, 21, 0, 0, -1, 0), (5, 22, 0, 0, 1, 0), (5, 23, 0, -1, 0, 0),
    (7, 96, 1, -1, 0, 0), (7, 97, -1, 1, 0, 0), (7, 98, 0, 0, -1, 1),
    (7, 99, 0, 1, -1, 0), (7, 100, 0, -1, 1, 0), (7, 101, 0, 0, 1, -1),
    (7, 102, 1, 1, 0, 0), (7, 103, 0, 0, -1, -1), (7, 104, -1, -1, 0, 0),
    (7, 105, 0, -1, -1, 0), (7, 106, 1, 0, -1, 0), (7, 107, 0, 1, 0, -1),
    (7, 108, -1, 0, 1, 0), (7, 109, 0, 0, 1, 1), (7, 110, 1, 0, 1, 0),
    (7, 111, 0, -1, 0, 1), (7, 112, 0, 1, 1, 0), (7, 113, 0, 1, 0, 1),
    (7, 114, -1, 0, -1, 0), (7, 115, 1, 0, 0, 1), (7, 116, -1, 0, 0, -1),
    (7, 117, 1, 0, 0, -1), (7, 118, -1, 0, 0, 1), (7, 119, 0, -1, 0, -1),
    (9, 480, 1, 1, -1, 0), (9, 481, -1, 1, -1, 0), (9, 482, 1, -1, 1, 0),
    (9, 483, 0, 1, 1, -1), (9, 484, 0, 1, -1, 1), (9, 485, 0, -1, 1, 1),
    (9, 486, 0, -1, 1, -1), (9, 487, 1, -1, -1, 0), (9, 488, 1, 0, -1, 1),
    (9, 489, 0, 1, -1, -1), (9, 490, -1, 1, 1, 0), (9, 491, -1, 0, 1, -1),
    (9, 492, -1, -1, 1, 0), (9, 493, 0, -1, -1, 1), (9, 494, 1, -1, 0, 1),
    (9, 495, 1, -1, 0, -1), (9, 496, -1, 1, 0, -1), (9, 497, -1, -1, -1, 0),
    (9, 498, 0, -1, -1, -1), (9, 499, 0, 1, 1, 1), (9, 500, 1, 0, 1, -1),
    (9, 501, 1, 1, 0, 1), (9, 502, -1, 1, 0, 1), (9, 503, 1, 1, 1, 0),
    (10, 1008, -1, -1, 0, 1), (10, 1009, -1, 0, -1, -1), (10, 1010, 1, 1, 0, -1),
    (10, 1011, 1, 0, -1, -1), (10, 1012, -1, 0, -1, 1), (10, 1013, -1, -1, 0, -1),
    (10, 1014, -1, 0, 1, 1), (10, 1015, 1, 0, 1, 1), (11, 2032, 1, -1, 1, -1),
    (11, 2033, -1, 1, -1, 1), (11, 2034, -1, 1, 1, -1), (11, 2035, 1, -1, -1, 1),
    (11, 2036, 1, 1, 1, 1), (11, 2037, -1, -1, 1, 1), (11, 2038, 1, 1, -1, -1),
    (11, 2039, -1, -1, 1, -1), (11, 2040, -1, -1, -1, -1), (11, 2041, 1, 1, -1, 1),
    (11, 2042, 1, -1, 1, 1), (11, 2043, -1, 1, 1, 1), (11, 2044, -1, 1, -1, -1),
    (11, 2045, -1, -1, -1, 1), (11, 2046, 1, -1, -1, -1), (11, 2047, 1, 1, 1, -1),
))

HCB2 = _build((
    (3, 0, 0, 0, 0, 0), (4, 2, 1, 0, 0, 0), (5, 6, -1, 0, 0, 0),
    (5, 7, 0, 0, 0, 1), (5, 8, 0, 0, -1, 0), (5, 9, 0, 0, 0, -1),
    (5, 10, 0, -1, 0, 0), (5, 11, 0, 0, 1, 0), (5, 12, 0, 1, 0, 0),
    (6, 26, 0, -1, 1, 0), (6, 27, -1, 1, 0, 0), (6, 28, 0, 1, -1, 0),
    (6, 29, 0, 0, 1, -1), (6, 30, 0, 1, 0, -1), (6, 31, 0, 0, -1, 1),
    (6, 32, -1, 0, 0, -1), (6, 33, 1, -1, 0, 0), (6, 34, 1, 0, -1, 0),
    (6, 35, -1, -1, 0, 0), (6, 36, 0, 0, -1, -1), (6, 37, 1, 0, 1, 0),
    (6, 38, 1, 0, 0, 1), (6, 39, 0, -1, 0, 1), (6, 40, -1, 0, 1, 0),
    (6, 41, 0, 1, 0, 1), (6, 42, 0, -1, -1, 0), (6, 43, -1, 0, 0, 1),
    (6, 44, 0, -1, 0, -1), (6, 45, -1, 0, -1, 0), (6, 46, 1, 1, 0, 0),
    (6, 47, 0, 1, 1, 0), (6, 48, 0, 0, 1, 1), (6, 49, 1, 0, 0, -1),
    (7, 100, 0, 1, -1, 1), (7, 101, 1, 0, -1, 1), (7, 102, -1, 1, -1, 0),
    (7, 103, 0, -1, 1, -1), (7, 104, 1, -1, 1, 0), (7, 105, 1, 1, 0, -1),
    (7, 106, 1, 0, 1, 1), (7, 107, -1, 1, 1, 0), (7, 108, 0, -1, -1, 1),
    (7, 109, 1, 1, 1, 0), (7, 110, -1, 0, 1, -1), (7, 111, -1, -1, -1, 0),
    (7, 112, -1, 0, -1, 1), (7, 113, 1, -1, -1, 0), (7, 114, 1, 1, -1, 0),
    (8, 230, 1, -1, 0, 1), (8, 231, -1, 1, 0, -1), (8, 232, -1, -1, 1, 0),
    (8, 233, -1, 0, 1, 1), (8, 234, -1, -1, 0, 1), (8, 235, -1, -1, 0, -1),
    (8, 236, 0, -1, -1, -1), (8, 237, 1, 0, 1, -1), (8, 238, 1, 0, -1, -1),
    (8, 239, 0, 1, -1, -1), (8, 240, 0, 1, 1, 1), (8, 241, -1, 1, 0, 1),
    (8, 242, -1, 0, -1, -1), (8, 243, 0, 1, 1, -1), (8, 244, 1, -1, 0, -1),
    (8, 245, 0, -1, 1, 1), (8, 246, 1, 1, 0, 1), (8, 247, 1, -1, 1, -1),
    (8, 248, -1, 1, -1, 1), (9, 498, 1, -1, -1, 1), (9, 499, -1, -1, -1, -1),
    (9, 500, -1, 1, 1, -1), (9, 501, -1, 1, 1, 1), (9, 502, 1, 1, 1, 1),
    (9, 503, -1, -1, 1, -1), (9, 504, 1, -1, 1, 1), (9, 505, -1, 1, -1, -1),
    (9, 506, -1, -1, 1, 1), (9, 507, 1, 1, -1, -1), (9, 508, 1, -1, -1, -1),
    (9, 509, -1, -1, -1, 1), (9, 510, 1, 1, -1, 1), (9, 511, 1, 1, 1, -1),
))

HCB3 = _build((
    (1, 0, 0, 0, 0, 0), (4, 8, 1, 0, 0, 0), (4, 9, 0, 0, 0, 1),
    (4, 10, 0, 1, 0, 0), (4, 11, 0, 0, 1, 0), (5, 24, 1, 1, 0, 0),
    (5, 25, 0, 0, 1, 1), (6, 52, 0, 1, 1, 0), (6, 53, 0, 1, 0, 1),
    (6, 54, 1, 0, 1, 0), (6, 55, 0, 1, 1, 1), (6, 56, 1, 0, 0, 1),
    (6, 57, 1, 1, 1, 0), (7, 116, 1, 1, 1, 1), (7, 117, 1, 0, 1, 1),
    (7, 118, 1, 1, 0, 1), (8, 238, 2, 0, 0, 0), (8, 239, 0, 0, 0, 2),
    (8, 240, 0, 0, 1, 2), (8, 241, 2, 1, 0, 0), (8, 242, 1, 2, 1, 0),
    (9, 486, 0, 0, 2, 1), (9, 487, 0, 1, 2, 1), (9, 488, 1, 2, 0, 0),
    (9, 489, 0, 1, 1, 2), (9, 490, 2, 1, 1, 0), (9, 491, 0, 0, 2, 0),
    (9, 492, 0, 2, 1, 0), (9, 493, 0, 1, 2, 0), (9, 494, 0, 2, 0, 0),
    (9, 495, 0, 1, 0, 2), (9, 496, 2, 0, 1, 0), (9, 497, 1, 2, 1, 1),
    (9, 498, 0, 2, 1, 1), (9, 499, 1, 1, 2, 0), (9, 500, 1, 1, 2, 1),
    (10, 1002, 1, 2, 0, 1), (10, 1003, 1, 0, 2, 0), (10, 1004, 1, 0, 2, 1),
    (10, 1005, 0, 2, 0, 1), (10, 1006, 2, 1, 1, 1), (10, 1007, 1, 1, 1, 2),
    (10, 1008, 2, 1, 0, 1), (10, 1009, 1, 0, 1, 2), (10, 1010, 0, 0, 2, 2),
    (10, 1011, 0, 1, 2, 2), (10, 1012, 2, 2, 1, 0), (10, 1013, 1, 2, 2, 0),
    (10, 1014, 1, 0, 0, 2), (10, 1015, 2, 0, 0, 1), (10, 1016, 0, 2, 2, 1),
    (11, 2034, 2, 2, 0, 0), (11, 2035, 1, 2, 2, 1), (11, 2036, 1, 1, 0, 2),
    (11, 2037, 2, 0, 1, 1), (11, 2038, 1, 1, 2, 2), (11, 2039, 2, 2, 1, 1),
    (11, 2040, 0, 2, 2, 0), (11, 2041, 0, 2, 1, 2), (12, 4084, 1, 0, 2, 2),
    (12, 4085, 2, 2, 0, 1), (12, 4086, 2, 1, 2, 0), (12, 4087, 2, 2, 2, 0),
    (12, 4088, 0, 2, 2, 2), (12, 4089, 2, 2, 2, 1), (12, 4090, 2, 1, 2, 1),
    (12, 4091, 1, 2, 1, 2), (12, 4092, 1, 2, 2, 2), (13, 8186, 0, 2, 0, 2),
    (13, 8187, 2, 0, 2, 0), (13, 8188, 1, 2, 0, 2), (14, 16378, 2, 0, 2, 1),
    (14, 16379, 2, 1, 1, 2), (14, 16380, 2, 1, 0, 2), (15, 32762, 2, 2, 2, 2),
    (15, 32763, 2, 2, 1, 2), (15, 32764, 2, 1, 2, 2), (15, 32765, 2, 0, 1, 2),
    (15, 32766, 2, 0, 0, 2), (16, 65534, 2, 2, 0, 2), (16, 65535, 2, 0, 2, 2),
))

HCB4 = _build((
    (4, 0, 1, 1, 1, 1), (4, 1, 0, 1, 1, 1), (4, 2, 1, 1, 0, 1), (4, 3, 1, 1, 1, 0),
    (4, 4, 1, 0, 1, 1), (4, 5, 1, 0, 0, 0), (4, 6, 1, 1, 0, 0), (4, 7, 0, 0, 0, 0),
    (4, 8, 0, 0, 1, 1), (4, 9, 1, 0, 1, 0), (5, 20, 1, 0, 0, 1), (5, 21, 0, 1, 1, 0),
    (5, 22, 0, 0, 0, 1), (5, 23, 0, 1, 0, 1), (5, 24, 0, 0, 1, 0), (5, 25, 0, 1, 0, 0),
    (7, 104, 2, 1, 1, 1), (7, 105, 1, 1, 2, 1), (7, 106, 1, 2, 1, 1), (7, 107, 1, 1, 1, 2),
    (7, 108, 2, 1, 1, 0), (7, 109, 2, 1, 0, 1), (7, 110, 1, 2, 1, 0), (7, 111, 2, 0, 1, 1),
    (7, 112, 0, 1, 2, 1), (8, 226, 0, 1, 1, 2), (8, 227, 1, 1, 2, 0), (8, 228, 0, 2, 1, 1),
    (8, 229, 1, 0, 1, 2), (8, 230, 1, 2, 0, 1), (8, 231, 1, 1, 0, 2), (8, 232, 1, 0, 2, 1),
    (8, 233, 2, 1, 0, 0), (8, 234, 2, 0, 1, 0), (8, 235, 1, 2, 0, 0), (8, 236, 2, 0, 0, 1),
    (8, 237, 0, 1, 0, 2), (8, 238, 0, 2, 1, 0), (8, 239, 0, 0, 1, 2), (8, 240, 0, 1, 2, 0),
    (8, 241, 0, 2, 0, 1), (8, 242, 1, 0, 0, 2), (8, 243, 0, 0, 2, 1), (8, 244, 1, 0, 2, 0),
    (8, 245, 2, 0, 0, 0), (8, 246, 0, 0, 0, 2), (9, 494, 0, 2, 0, 0), (9, 495, 0, 0, 2, 0),
    (9, 496, 1, 2, 2, 1), (9, 497, 2, 2, 1, 1), (9, 498, 2, 1, 2, 1), (9, 499, 1, 1, 2, 2),
    (9, 500, 1, 2, 1, 2), (9, 501, 2, 1, 1, 2), (10, 1004, 1, 2, 2, 0), (10, 1005, 2, 2, 1, 0),
    (10, 1006, 2, 1, 2, 0), (10, 1007, 0, 2, 2, 1), (10, 1008, 0, 1, 2, 2), (10, 1009, 2, 2, 0, 1),
    (10, 1010, 0, 2, 1, 2), (10, 1011, 2, 0, 2, 1), (10, 1012, 1, 0, 2, 2), (10, 1013, 2, 2, 2, 1),
    (10, 1014, 1, 2, 0, 2), (10, 1015, 2, 0, 1, 2), (10, 1016, 2, 1, 0, 2), (10, 1017, 1, 2, 2, 2),
    (11, 2036, 2, 1, 2, 2), (11, 2037, 2, 2, 1, 2), (11, 2038, 0, 2, 2, 0), (11, 2039, 2, 2, 0, 0),
    (11, 2040, 0, 0, 2, 2), (11, 2041, 2, 0, 2, 0), (11, 2042, 0, 2, 0, 2), (11, 2043, 2, 0, 0, 2),
    (11, 2044, 2, 2, 2, 2), (11, 2045, 0, 2, 2, 2), (11, 2046, 2, 2, 2, 0), (12, 4094, 2, 2, 0, 2),
    (12, 4095, 2, 0, 2, 2),
))

QUAD_CODEBOOKS = (HCB1, HCB2, HCB3, HCB4)