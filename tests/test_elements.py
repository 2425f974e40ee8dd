import pytest

from adtsrds.bitstream import BitStream
from adtsrds.constants import Profile, SampleFrequency
from adtsrds.elements import (
    ProgramConfig,
    RDSCollector,
    decode_cce,
    decode_cpe,
    decode_dse,
    decode_fil,
    decode_lfe,
    decode_sce,
)

PROFILE = Profile.AAC_LC
SFI = SampleFrequency.HZ_44100
MARKER = 0x5A


def pack(*fields):
    value = 0
    nbits = 0
    for v, n in fields:
        value = (value << n) | (v & ((1 << n) - 1))
        nbits += n
    pad = (-nbits) % 8
    value <<= pad
    nbits += pad
    return value.to_bytes(nbits // 8, "big") + b"\x00" * 4


def stream_of(*fields):
    return BitStream(pack(*fields, (MARKER, 8)))


LONG_INFO = [(0, 1), (0, 2), (0, 1), (0, 6), (0, 1)]
FLAGS = [(0, 1), (0, 1), (0, 1)]
MIN_ICS = [(0, 8), *LONG_INFO, *FLAGS]


def dse(payload, align=False):
    return [(0, 4), (1 if align else 0, 1), (len(payload), 8)] + [(b, 8) for b in payload]


def test_fil_skips_payload():
    stream = stream_of((2, 4), (0xFFFF, 16))
    decode_fil(stream)
    assert stream.read_bits(8) == MARKER


def test_fil_escape_count():
    stream = stream_of((15, 4), (1, 8), *[(0xFF, 8)] * 15)
    decode_fil(stream)
    assert stream.read_bits(8) == MARKER


def test_dse_skips_payload():
    stream = stream_of(*dse([0x11, 0x22]))
    decode_dse(stream)
    assert stream.read_bits(8) == MARKER


def test_dse_byte_aligned_payload():
    stream = stream_of((0, 4), (1, 1), (1, 8), (0, 3), (0x77, 8))
    decode_dse(stream)
    assert stream.read_bits(8) == MARKER


def test_program_config():
    stream = stream_of(
        (0, 4), (1, 2), (3, 4),
        (1, 4), (0, 4), (0, 4), (0, 2), (0, 3), (0, 4),
        (0, 1), (0, 1), (0, 1),
        (0x1F, 5), (0, 1),
        (1, 8), (0x41, 8),
    )
    config = ProgramConfig.decode(stream)
    assert config == ProgramConfig(profile=1, sample_frequency_index=3)
    assert stream.read_bits(8) == MARKER


def test_sce_and_lfe():
    for decode in (decode_sce, decode_lfe):
        stream = stream_of((0, 4), *MIN_ICS)
        decode(stream, PROFILE, SFI)
        assert stream.read_bits(8) == MARKER


def test_cpe_separate_windows():
    stream = stream_of((0, 4), (0, 1), *MIN_ICS, *MIN_ICS)
    decode_cpe(stream, PROFILE, SFI)
    assert stream.read_bits(8) == MARKER


def test_cpe_common_window():
    stream = stream_of((0, 4), (1, 1), *LONG_INFO, (0, 2), (0, 8), *FLAGS, (0, 8), *FLAGS)
    decode_cpe(stream, PROFILE, SFI)
    assert stream.read_bits(8) == MARKER


def test_cpe_requires_sample_frequency():
    with pytest.raises(ValueError):
        decode_cpe(stream_of((0, 4)), PROFILE, SampleFrequency.NONE)


def test_cce_minimal():
    stream = stream_of((0, 4), (0, 1), (0, 3), (0, 1), (0, 4), (0, 1), (0, 3), *MIN_ICS)
    decode_cce(stream, PROFILE, SFI)
    assert stream.read_bits(8) == MARKER


def test_rds_complete_package():
    collector = RDSCollector()
    assert collector.decode(stream_of(*dse([0xFE, 0x01, 0xFF]))) == b"\xfe\x01\xff"


def test_rds_package_across_elements():
    collector = RDSCollector()
    assert collector.decode(stream_of(*dse([0xFE, 0x01]))) == b""
    assert collector.decode(stream_of(*dse([0xFF]))) == b"\xfe\x01\xff"


def test_rds_package_without_start_dropped():
    collector = RDSCollector()
    assert collector.decode(stream_of(*dse([0x01, 0xFF]))) == b""
    assert collector.decode(stream_of(*dse([0xFE, 0xFF]))) == b"\xfe\xff"


def test_rds_reset_drops_partial_package():
    collector = RDSCollector()
    collector.decode(stream_of(*dse([0xFE, 0x01])))
    collector.reset()
    assert collector.decode(stream_of(*dse([0xFF]))) == b""


def test_rds_truncated_element_raises_and_resets():
    collector = RDSCollector()
    collector.decode(stream_of(*dse([0xFE])))
    truncated = BitStream(pack((0, 4), (0, 1), (20, 8), (0x01, 8)))
    with pytest.raises(EOFError):
        collector.decode(truncated)
    assert collector.decode(stream_of(*dse([0xFF]))) == b""