from itertools import product

import pytest

from adtsrds.codebooks_pair import HCB5, HCB11, spectral_codebook
from adtsrds.codebooks_quad import HCB1

ALL_BOOKS = range(1, 12)

# Largest absolute value per codebook and whether it is unsigned, as fixed
# by the AAC format.
LAV = {1: 1, 2: 1, 3: 2, 4: 2, 5: 4, 6: 4, 7: 7, 8: 7, 9: 12, 10: 12, 11: 16}
UNSIGNED = {1: False, 2: False, 3: True, 4: True, 5: False, 6: False,
            7: True, 8: True, 9: True, 10: True, 11: True}


def test_lookup_returns_tables():
    assert spectral_codebook(1) is HCB1
    assert spectral_codebook(5) is HCB5
    assert spectral_codebook(11) is HCB11


@pytest.mark.parametrize("cb", [0, -1, 12, 15])
def test_unknown_codebook_raises(cb):
    with pytest.raises(ValueError):
        spectral_codebook(cb)


@pytest.mark.parametrize("cb", ALL_BOOKS)
def test_value_arity(cb):
    width = 4 if cb < 5 else 2
    assert all(len(e.values) == width for e in spectral_codebook(cb))


@pytest.mark.parametrize("cb", ALL_BOOKS)
def test_values_cover_full_range_once(cb):
    book = spectral_codebook(cb)
    lav = LAV[cb]
    low = 0 if UNSIGNED[cb] else -lav
    width = len(book[0].values)
    values = [e.values for e in book]
    assert len(values) == len(set(values))
    assert set(values) == set(product(range(low, lav + 1), repeat=width))


@pytest.mark.parametrize("cb", ALL_BOOKS)
def test_codes_are_canonical_and_complete(cb):
    book = spectral_codebook(cb)
    assert book[0].codeword == 0
    for prev, cur in zip(book, book[1:]):
        assert cur.length >= prev.length
        assert cur.codeword == (prev.codeword + 1) << (cur.length - prev.length)
    last = book[-1]
    assert last.codeword == (1 << last.length) - 1


@pytest.mark.parametrize("cb", ALL_BOOKS)
def test_codewords_fit_their_length(cb):
    assert all(0 <= e.codeword < (1 << e.length) for e in spectral_codebook(cb))


def test_escape_entry_in_codebook_11():
    escapes = [e for e in spectral_codebook(11) if e.values == (16, 16)]
    assert len(escapes) == 1
    assert (escapes[0].length, escapes[0].codeword) == (5, 4)