import pytest

from adtsrds.bitstream import BitStream
from adtsrds.constants import Profile, SampleFrequency
from adtsrds.ics_info import ICSInfo, WindowSequence

SENTINEL = "1011"


def _stream(bits: str) -> BitStream:
    bits = bits.replace(" ", "")
    nbytes = max(4, -(-len(bits) // 32) * 4)
    value = (int(bits, 2) << (nbytes * 8 - len(bits))) if bits else 0
    return BitStream(value.to_bytes(nbytes, "big"))


def _long_header(max_sfb: int, predictor: bool) -> str:
    return "0" + "00" + "0" + format(max_sfb, "06b") + ("1" if predictor else "0")


def test_invalid_sample_frequency_none():
    stream = _stream("0" * 32)
    with pytest.raises(ValueError):
        ICSInfo().decode(False, stream, Profile.AAC_LC, SampleFrequency.NONE)
    assert stream.bits_left() == 32


def test_invalid_sample_frequency_out_of_range():
    with pytest.raises(ValueError):
        ICSInfo().decode(False, _stream("0" * 32), Profile.AAC_LC, 12)


def test_long_window_layout():
    info = ICSInfo()
    stream = _stream(_long_header(5, False) + SENTINEL)
    info.decode(False, stream, Profile.AAC_LC, SampleFrequency.HZ_48000)
    assert info.window_sequence is WindowSequence.ONLY_LONG_SEQUENCE
    assert info.max_sfb == 5
    assert info.window_count == 1
    assert info.window_group_count == 1
    assert info.window_group_lengths[0] == 1
    assert info.swb_offsets[:3] == (0, 4, 8)
    assert info.swb_offsets[-1] == 1024
    assert stream.read_bits(4) == 0b1011


def test_short_window_single_group():
    info = ICSInfo()
    stream = _stream("0" + "10" + "0" + "1111" + "1111111" + SENTINEL)
    info.decode(False, stream, Profile.AAC_LC, SampleFrequency.HZ_44100)
    assert info.window_sequence is WindowSequence.EIGHT_SHORT_SEQUENCE
    assert info.max_sfb == 15
    assert info.window_count == 8
    assert info.window_group_count == 1
    assert info.window_group_lengths[0] == info.window_count
    assert info.swb_offsets[-1] == 128
    assert stream.read_bits(4) == 0b1011


def test_short_window_all_groups():
    info = ICSInfo()
    info.decode(False, _stream("0" + "10" + "0" + "0001" + "0000000"), Profile.AAC_LC, 3)
    assert info.window_group_count == info.window_count
    assert info.window_group_lengths == [1] * 8


def test_short_window_grouping_sums_to_window_count():
    info = ICSInfo()
    info.decode(False, _stream("0" + "10" + "0" + "0001" + "1101001"), Profile.AAC_LC, 3)
    lengths = info.window_group_lengths[: info.window_group_count]
    assert sum(lengths) == info.window_count


@pytest.mark.parametrize(
    "ws, expected",
    [("01", WindowSequence.LONG_START_SEQUENCE), ("11", WindowSequence.LONG_STOP_SEQUENCE)],
)
def test_other_long_sequences(ws, expected):
    info = ICSInfo()
    info.decode(False, _stream("0" + ws + "0" + "000010" + "0"), Profile.AAC_LC, 3)
    assert info.window_sequence is expected
    assert info.window_count == 1


def test_main_profile_prediction_skips_bits():
    # reset present (5 bits) and min(5, 40) prediction-used bits
    bits = _long_header(5, True) + "1" + "0" * 5 + "0" * 5 + SENTINEL
    stream = _stream(bits)
    ICSInfo().decode(False, stream, Profile.AAC_MAIN, SampleFrequency.HZ_48000)
    assert stream.read_bits(4) == 0b1011


def test_main_profile_prediction_without_reset():
    bits = _long_header(3, True) + "0" + "000" + SENTINEL
    stream = _stream(bits)
    ICSInfo().decode(False, stream, Profile.AAC_MAIN, SampleFrequency.HZ_48000)
    assert stream.read_bits(4) == 0b1011


def test_ltp_profile_common_window_reads_second_block():
    ltp_block = "0" * 14 + "0" * 4  # lag/coef plus min(4, 40) long-used bits
    bits = _long_header(4, True) + "0" + "1" + ltp_block + SENTINEL
    stream = _stream(bits)
    ICSInfo().decode(True, stream, Profile.AAC_LTP, SampleFrequency.HZ_48000)
    assert stream.read_bits(4) == 0b1011


def test_ltp_profile_without_common_window():
    ltp_block = "0" * 14 + "0" * 4
    bits = _long_header(4, True) + "1" + ltp_block + SENTINEL
    stream = _stream(bits)
    ICSInfo().decode(False, stream, Profile.AAC_LTP, SampleFrequency.HZ_48000)
    assert stream.read_bits(4) == 0b1011


def test_er_ltp_common_window_reads_nothing():
    stream = _stream(_long_header(4, True) + SENTINEL)
    ICSInfo().decode(True, stream, Profile.ER_AAC_LTP, SampleFrequency.HZ_48000)
    assert stream.read_bits(4) == 0b1011


def test_unexpected_profile_with_prediction():
    with pytest.raises(ValueError):
        ICSInfo().decode(False, _stream(_long_header(4, True)), Profile.AAC_LC, 3)


def test_set_data_copies_layout():
    source = ICSInfo()
    source.decode(False, _stream("0" + "10" + "0" + "0111" + "1101001"), Profile.AAC_LC, 3)
    target = ICSInfo()
    target.set_data(source)
    assert target == source
    target.window_group_lengths[0] = 99
    assert source.window_group_lengths[0] != 99