"""Individual channel stream info: window layout and prediction side data."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from .bitstream import BitStream
from .constants import Profile, SampleFrequency


class WindowSequence(IntEnum):
    """AAC window sequence."""

    ONLY_LONG_SEQUENCE = 0
    LONG_START_SEQUENCE = 1
    EIGHT_SHORT_SEQUENCE = 2
    LONG_STOP_SEQUENCE = 3


_PRED_SFB_MAX = (33, 33, 38, 40, 40, 40, 41, 41, 37, 37, 37, 34)
_MAX_LTP_SFB = 40

_SWB_OFFSET_128_96 = (0, 4, 8, 12, 16, 20, 24, 32, 40, 48, 64, 92, 128)
_SWB_OFFSET_128_64 = (0, 4, 8, 12, 16, 20, 24, 32, 40, 48, 64, 92, 128)
_SWB_OFFSET_128_48 = (0, 4, 8, 12, 16, 20, 28, 36, 44, 56, 68, 80, 96, 112, 128)
_SWB_OFFSET_128_24 = (0, 4, 8, 12, 16, 20, 24, 28, 36, 44, 52, 64, 76, 92, 108, 128)
_SWB_OFFSET_128_16 = (0, 4, 8, 12, 16, 20, 24, 28, 32, 40, 48, 60, 72, 88, 108, 128)
_SWB_OFFSET_128_8 = (0, 4, 8, 12, 16, 20, 24, 28, 36, 44, 52, 60, 72, 88, 108, 128)

SWB_OFFSET_128 = (
    _SWB_OFFSET_128_96, _SWB_OFFSET_128_96, _SWB_OFFSET_128_64,
    _SWB_OFFSET_128_48, _SWB_OFFSET_128_48, _SWB_OFFSET_128_48,
    _SWB_OFFSET_128_24, _SWB_OFFSET_128_24, _SWB_OFFSET_128_16,
    _SWB_OFFSET_128_16, _SWB_OFFSET_128_16, _SWB_OFFSET_128_8,
)

_SWB_OFFSET_1024_96 = (
    0, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 44, 48, 52, 56, 64, 72, 80, 88, 96, 108,
    120, 132, 144, 156, 172, 188, 212, 240, 276, 320, 384, 448, 512, 576, 640, 704,
    768, 832, 896, 960, 1024,
)

_SWB_OFFSET_1024_64 = (
    0, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 44, 48, 52, 56, 64,
    72, 80, 88, 100, 112, 124, 140, 156, 172, 192, 216, 240, 268, 304, 344, 384,
    424, 464, 504, 544, 584, 624, 664, 704, 744, 784, 824, 864, 904, 944, 984, 1024,
)

_SWB_OFFSET_1024_48 = (
    0, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 48, 56, 64, 72, 80, 88,
    96, 108, 120, 132, 144, 160, 176, 196, 216, 240, 264, 292, 320, 352, 384, 416, 448,
    480, 512, 544, 576, 608, 640, 672, 704, 736, 768, 800, 832, 864, 896, 928, 1024,
)

_SWB_OFFSET_1024_32 = (
    0, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 48, 56, 64, 72, 80, 88, 96,
    108, 120, 132, 144, 160, 176, 196, 216, 240, 264, 292, 320, 352, 384, 416, 448, 480, 512,
    544, 576, 608, 640, 672, 704, 736, 768, 800, 832, 864, 896, 928, 960, 992, 1024,
)

_SWB_OFFSET_1024_24 = (
    0, 4, 8, 12, 16, 20, 24, 28, 32, 36, 40, 44, 52, 60, 68, 76,
    84, 92, 100, 108, 116, 124, 136, 148, 160, 172, 188, 204, 220, 240, 260, 284,
    308, 336, 364, 396, 432, 468, 508, 552, 600, 652, 704, 768, 832, 896, 960, 1024,
)

_SWB_OFFSET_1024_16 = (
    0, 8, 16, 24, 32, 40, 48, 56, 64, 72, 80, 88, 100, 112, 124, 136, 148, 160, 172,
    184, 196, 212, 228, 244, 260, 280, 300, 320, 344, 368, 396, 424, 456, 492, 532,
    572, 616, 664, 716, 772, 832, 896, 960, 1024,
)

_SWB_OFFSET_1024_8 = (
    0, 12, 24, 36, 48, 60, 72, 84, 96, 108, 120, 132, 144, 156, 172, 188, 204, 220,
    236, 252, 268, 288, 308, 328, 348, 372, 396, 420, 448, 476, 508, 544, 580, 620,
    664, 712, 764, 820, 880, 944, 1024,
)

SWB_OFFSET_1024 = (
    _SWB_OFFSET_1024_96, _SWB_OFFSET_1024_96, _SWB_OFFSET_1024_64, _SWB_OFFSET_1024_48,
    _SWB_OFFSET_1024_48, _SWB_OFFSET_1024_32, _SWB_OFFSET_1024_24, _SWB_OFFSET_1024_24,
    _SWB_OFFSET_1024_16, _SWB_OFFSET_1024_16, _SWB_OFFSET_1024_16, _SWB_OFFSET_1024_8,
)


def _check_sample_frequency(index: int) -> None:
    if index == SampleFrequency.NONE or not 0 <= index < len(_PRED_SFB_MAX):
        raise ValueError(f"invalid sample frequency index: {index}")


@dataclass
class ICSInfo:
    """Window layout of one individual channel stream."""

    window_sequence: WindowSequence = WindowSequence.ONLY_LONG_SEQUENCE
    max_sfb: int = 0
    window_group_count: int = 0
    window_group_lengths: list[int] = field(default_factory=lambda: [0] * 8)
    swb_offsets: tuple[int, ...] = ()
    window_count: int = 0

    def set_data(self, info: ICSInfo) -> None:
        """Copy the layout of ``info`` into this instance."""
        self.window_sequence = info.window_sequence
        self.max_sfb = info.max_sfb
        self.window_group_count = info.window_group_count
        self.window_group_lengths = list(info.window_group_lengths)
        self.swb_offsets = info.swb_offsets
        self.window_count = info.window_count

    def decode(
        self,
        common_window: bool,
        stream: BitStream,
        profile: int,
        sample_frequency_index: int,
    ) -> None:
        """Read the ICS info fields from ``stream``."""
        _check_sample_frequency(sample_frequency_index)

        stream.skip_bit()  # reserved
        self.window_sequence = WindowSequence(stream.read_bits(2))
        stream.skip_bit()  # window shape

        self.window_group_count = 1
        self.window_group_lengths[0] = 1

        if self.window_sequence is WindowSequence.EIGHT_SHORT_SEQUENCE:
            self.max_sfb = stream.read_bits(4)
            for _ in range(7):  # scale factor grouping
                if stream.read_bool():
                    self.window_group_lengths[self.window_group_count - 1] += 1
                else:
                    self.window_group_count += 1
                    self.window_group_lengths[self.window_group_count - 1] = 1
            self.window_count = 8
            self.swb_offsets = SWB_OFFSET_128[sample_frequency_index]
        else:
            self.max_sfb = stream.read_bits(6)
            self.window_count = 1
            self.swb_offsets = SWB_OFFSET_1024[sample_frequency_index]
            if stream.read_bool():
                self._decode_prediction_data(
                    common_window, stream, profile, sample_frequency_index
                )

    def _decode_prediction_data(
        self,
        common_window: bool,
        stream: BitStream,
        profile: int,
        sample_frequency_index: int,
    ) -> None:
        if profile == Profile.AAC_MAIN:
            if stream.read_bool():  # predictor reset
                stream.skip_bits(5)
            stream.skip_bits(min(self.max_sfb, _PRED_SFB_MAX[sample_frequency_index]))
        elif profile == Profile.AAC_LTP:
            if stream.read_bool():
                self._decode_lt_prediction_data(stream)
            if common_window and stream.read_bool():
                self._decode_lt_prediction_data(stream)
        elif profile == Profile.ER_AAC_LTP:
            if not common_window and stream.read_bool():
                self._decode_lt_prediction_data(stream)
        else:
            raise ValueError(f"unexpected profile for prediction data: {profile}")

    def _decode_lt_prediction_data(self, stream: BitStream) -> None:
        stream.skip_bits(14)  # 11 bits lag, 3 bits coef
        if self.window_sequence is WindowSequence.EIGHT_SHORT_SEQUENCE:
            for _ in range(self.window_count):
                if stream.read_bool() and stream.read_bool():
                    stream.skip_bits(4)  # short lag
        else:
            stream.skip_bits(min(self.max_sfb, _MAX_LTP_SFB))