"""Individual channel stream: parsed only far enough to skip over it."""

from __future__ import annotations

from dataclasses import dataclass, field

from .bitstream import BitStream
from .huffman import (
    FIRST_PAIR_HCB,
    INTENSITY_HCB,
    INTENSITY_HCB2,
    NOISE_HCB,
    ZERO_HCB,
    decode_scale_factor,
    decode_spectral_data,
)
from .ics_info import ICSInfo, WindowSequence

_MAX_BANDS = 120
_RESERVED_HCB = 12
_SF_DELTA = 60
_NOISE_OFFSET_BITS = 9

_SKIPPED_SPECTRAL_HCBS = frozenset({ZERO_HCB, INTENSITY_HCB, INTENSITY_HCB2, NOISE_HCB})

# Gain control layout per window sequence: (windows, location bits, location bits after first).
_GAIN_CONTROL_LAYOUT = {
    WindowSequence.ONLY_LONG_SEQUENCE: (1, 5, 5),
    WindowSequence.EIGHT_SHORT_SEQUENCE: (8, 2, 2),
    WindowSequence.LONG_START_SEQUENCE: (2, 4, 2),
    WindowSequence.LONG_STOP_SEQUENCE: (2, 4, 5),
}


@dataclass
class ICS:
    """One individual channel stream with its section codebooks."""

    info: ICSInfo = field(default_factory=ICSInfo)
    sfb_cb: list[int] = field(default_factory=lambda: [0] * _MAX_BANDS)
    sect_end: list[int] = field(default_factory=lambda: [0] * _MAX_BANDS)

    @property
    def _is_short(self) -> bool:
        return self.info.window_sequence is WindowSequence.EIGHT_SHORT_SEQUENCE

    def decode(
        self,
        common_window: bool,
        stream: BitStream,
        profile: int,
        sample_frequency_index: int,
    ) -> None:
        """Read the channel stream from ``stream``."""
        stream.skip_bits(8)  # global gain

        if not common_window:
            self.info.decode(common_window, stream, profile, sample_frequency_index)

        self._decode_section_data(stream)
        self._decode_scale_factor_data(stream)

        if stream.read_bool():
            if self._is_short:
                raise ValueError("pulse data not allowed for short frames")
            self._decode_pulse_data(stream)

        if stream.read_bool():
            self._decode_tns_data(stream)

        if stream.read_bool():
            self._decode_gain_control_data(stream)

        self._decode_spectral_data(stream)

    def _decode_section_data(self, stream: BitStream) -> None:
        bits = 3 if self._is_short else 5
        escape = (1 << bits) - 1
        max_sfb = self.info.max_sfb

        idx = 0
        for _ in range(self.info.window_group_count):
            k = 0
            while k < max_sfb:
                end = k
                sect_cb = stream.read_bits(4)
                if sect_cb == _RESERVED_HCB:
                    raise ValueError(f"invalid huffman codebook: {_RESERVED_HCB}")

                while True:
                    incr = stream.read_bits(bits)
                    if incr != escape or stream.bits_left() < bits:
                        break
                    end += incr
                end += incr

                if stream.bits_left() < 0 or incr == escape:
                    raise EOFError("section data past end of stream")
                if end > max_sfb:
                    raise ValueError("too many bands")

                while k < end:
                    self.sfb_cb[idx] = sect_cb
                    self.sect_end[idx] = end
                    idx += 1
                    k += 1

    def _decode_scale_factor_data(self, stream: BitStream) -> None:
        noise_flag = True
        max_sfb = self.info.max_sfb

        idx = 0
        for _ in range(self.info.window_group_count):
            sfb = 0
            while sfb < max_sfb:
                end = self.sect_end[idx]
                cb = self.sfb_cb[idx]
                count = end - sfb

                if cb in (INTENSITY_HCB, INTENSITY_HCB2):
                    for _ in range(count):
                        if decode_scale_factor(stream) - _SF_DELTA > 255:
                            raise ValueError("scale factor out of range")
                elif cb == NOISE_HCB:
                    for _ in range(count):
                        if noise_flag:
                            stream.skip_bits(_NOISE_OFFSET_BITS)
                            noise_flag = False
                        else:
                            decode_scale_factor(stream)
                elif cb != ZERO_HCB:
                    for _ in range(count):
                        decode_scale_factor(stream)

                idx += count
                sfb = end

    @staticmethod
    def _decode_pulse_data(stream: BitStream) -> None:
        pulse_count = stream.read_bits(2)
        stream.skip_bits(6)  # pulse start sfb
        stream.skip_bits(9 * (pulse_count + 1))  # offset and amplitude per pulse

    def _decode_tns_data(self, stream: BitStream) -> None:
        n_filt_bits, length_bits, order_bits = (1, 4, 3) if self._is_short else (2, 6, 5)

        for _ in range(self.info.window_count):
            n_filt = stream.read_bits(n_filt_bits)
            if n_filt == 0:
                continue
            coef_res = stream.read_bit()
            for _ in range(n_filt):
                stream.skip_bits(length_bits)
                order = stream.read_bits(order_bits)
                if order != 0:
                    stream.skip_bit()  # direction
                    coef_compress = stream.read_bit()
                    stream.skip_bits(order * (coef_res + 3 - coef_compress))

    def _decode_gain_control_data(self, stream: BitStream) -> None:
        max_band = stream.read_bits(2) + 1
        layout = _GAIN_CONTROL_LAYOUT.get(self.info.window_sequence)
        if layout is None:
            return
        window_len, loc_bits, loc_bits2 = layout

        for _ in range(1, max_band):
            for wd in range(window_len):
                count = stream.read_bits(3)
                for _ in range(count):
                    stream.skip_bits(4)
                    stream.skip_bits(loc_bits if wd == 0 else loc_bits2)

    def _decode_spectral_data(self, stream: BitStream) -> None:
        offsets = self.info.swb_offsets
        max_sfb = self.info.max_sfb

        idx = 0
        for g in range(self.info.window_group_count):
            group_len = self.info.window_group_lengths[g]
            for sfb in range(max_sfb):
                hcb = self.sfb_cb[idx]
                idx += 1
                if hcb in _SKIPPED_SPECTRAL_HCBS:
                    continue
                width = offsets[sfb + 1] - offsets[sfb]
                step = 2 if hcb >= FIRST_PAIR_HCB else 4
                for _ in range(group_len):
                    for _ in range(0, width, step):
                        decode_spectral_data(stream, hcb)