"""AAC syntactic elements of a raw data block."""

from __future__ import annotations

from dataclasses import dataclass

from .bitstream import BitStream
from .constants import SampleFrequency
from .huffman import ZERO_HCB, decode_scale_factor
from .ics import ICS

_MS_MASK_USED = 1
_RDS_BUFFER_SIZE = 65536
_RDS_START = 0xFE
_RDS_END = 0xFF


def decode_sce(stream: BitStream, profile: int, sample_frequency_index: int) -> None:
    """Skip over a single channel element."""
    stream.skip_bits(4)  # element id
    ICS().decode(False, stream, profile, sample_frequency_index)


def decode_lfe(stream: BitStream, profile: int, sample_frequency_index: int) -> None:
    """Skip over a low frequency enhancement channel element."""
    stream.skip_bits(4)  # element id
    ICS().decode(False, stream, profile, sample_frequency_index)


def decode_cpe(stream: BitStream, profile: int, sample_frequency_index: int) -> None:
    """Skip over a channel pair element."""
    if sample_frequency_index == SampleFrequency.NONE:
        raise ValueError("invalid sample frequency")

    stream.skip_bits(4)  # element id

    ics_left = ICS()
    ics_right = ICS()

    common_window = stream.read_bool()
    if common_window:
        ics_left.info.decode(False, stream, profile, sample_frequency_index)
        ics_right.info.set_data(ics_left.info)

        if stream.read_bits(2) == _MS_MASK_USED:
            info = ics_left.info
            stream.skip_bits(info.window_group_count * info.max_sfb)  # ms used flags

    ics_left.decode(common_window, stream, profile, sample_frequency_index)
    ics_right.decode(common_window, stream, profile, sample_frequency_index)


def decode_cce(stream: BitStream, profile: int, sample_frequency_index: int) -> None:
    """Skip over a coupling channel element."""
    stream.skip_bits(4)  # element id

    coupling_point = 2 * stream.read_bit()  # ind sw cce flag
    coupled_count = stream.read_bits(3)

    gain_count = 0
    for _ in range(coupled_count + 1):
        gain_count += 1
        channel_pair = stream.read_bool()
        stream.skip_bits(4)  # target tag
        if channel_pair and stream.read_bits(2) == 3:
            gain_count += 1

    coupling_point += stream.read_bit()  # cc domain
    coupling_point |= coupling_point >> 1

    stream.skip_bits(3)  # gain element sign and scale

    ics = ICS()
    ics.decode(False, stream, profile, sample_frequency_index)

    group_count = ics.info.window_group_count
    max_sfb = ics.info.max_sfb

    for i in range(gain_count):
        cge = 1
        if i > 0:
            cge = 1 if coupling_point == 2 else stream.read_bit()
            if cge != 0:
                decode_scale_factor(stream)

        if coupling_point != 2:
            for _ in range(group_count):
                for sfb in range(max_sfb):
                    if ics.sfb_cb[sfb] != ZERO_HCB and cge == 0:
                        decode_scale_factor(stream)


def _read_dse_header(stream: BitStream) -> int:
    stream.skip_bits(4)  # element id
    byte_align = stream.read_bool()
    count = stream.read_bits(8)
    if count == 255:
        count += stream.read_bits(8)
    if byte_align:
        stream.byte_align()
    return count


def decode_dse(stream: BitStream) -> None:
    """Skip over a data stream element."""
    count = _read_dse_header(stream)
    stream.skip_bits(8 * count)


def decode_fil(stream: BitStream) -> None:
    """Skip over a fill element."""
    count = stream.read_bits(4)
    if count == 15:
        count += stream.read_bits(8) - 1
    if count > 0:
        stream.skip_bits(8 * count)


@dataclass(frozen=True)
class ProgramConfig:
    """Profile and sample frequency announced by a program config element."""

    profile: int = 0
    sample_frequency_index: int = 0

    @classmethod
    def decode(cls, stream: BitStream) -> ProgramConfig:
        """Read a program config element and return what it announces."""
        stream.skip_bits(4)  # element id

        profile = stream.read_bits(2)
        sample_frequency_index = stream.read_bits(4)

        front = stream.read_bits(4)
        side = stream.read_bits(4)
        back = stream.read_bits(4)
        lfe = stream.read_bits(2)
        assoc_data = stream.read_bits(3)
        valid_cc = stream.read_bits(4)

        if stream.read_bool():  # mono mixdown
            stream.skip_bits(4)
        if stream.read_bool():  # stereo mixdown
            stream.skip_bits(4)
        if stream.read_bool():  # matrix mixdown idx, pseudo surround
            stream.skip_bits(3)

        stream.skip_bits(
            5 * front + 5 * side + 5 * back + 4 * lfe + 4 * assoc_data + 5 * valid_cc
        )
        stream.byte_align()

        comment_bytes = stream.read_bits(8)
        stream.skip_bits(8 * comment_bytes)

        return cls(profile, sample_frequency_index)


class RDSCollector:
    """Collects RDS data carried in data stream elements across frames.

    A package starts with 0xFE and ends with 0xFF; it may be spread over
    several elements.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def reset(self) -> None:
        """Drop any partially collected package."""
        self._buffer.clear()

    def decode(self, stream: BitStream) -> bytes:
        """Read a data stream element; return a completed package or b""."""
        count = _read_dse_header(stream)

        if count > _RDS_BUFFER_SIZE:
            stream.skip_bits(8 * count)
            self.reset()
            return b""

        if len(self._buffer) + count > _RDS_BUFFER_SIZE:
            self.reset()

        try:
            chunk = bytes(stream.read_bits(8) for _ in range(count))
        except Exception:
            self.reset()
            raise
        self._buffer += chunk

        if self._buffer and self._buffer[-1] == _RDS_END:
            package = bytes(self._buffer) if self._buffer[0] == _RDS_START else b""
            self.reset()
            return package
        return b""