"""ADTS frame decoder that extracts RDS data carried in AAC data stream elements."""

from __future__ import annotations

from enum import IntEnum

from .bitstream import BitStream
from .constants import Profile, SampleFrequency
from .elements import (
    ProgramConfig,
    RDSCollector,
    decode_cce,
    decode_cpe,
    decode_dse,
    decode_fil,
    decode_lfe,
    decode_sce,
)

_ADTS_SYNCWORD = 0xFFF


class ElementType(IntEnum):
    """Syntactic element identifiers of a raw data block."""

    SCE = 0
    CPE = 1
    CCE = 2
    LFE = 3
    DSE = 4
    PCE = 5
    FIL = 6
    END = 7


class Decoder:
    """Walks one ADTS frame, skipping audio and collecting RDS data.

    RDS packages may span frames; the ``rds_collector`` keeps partial data
    between decoders and should be reused for consecutive frames of a stream.
    """

    def __init__(self, data: bytes | bytearray | memoryview, rds_collector: RDSCollector | None = None) -> None:
        self._stream = BitStream(data)
        self._collector = rds_collector if rds_collector is not None else RDSCollector()
        self._profile: int = Profile.UNKNOWN
        self._sample_frequency_index: int = SampleFrequency.NONE
        self._raw_data_block_count = 0
        self._rds_data = b""

    def decode_rds(self) -> bytes:
        """Decode the frame and return a completed RDS package, or b"" if none."""
        self._decode_adts_header()
        for _ in range(self._raw_data_block_count):
            self._decode_raw_data_block()
        return self._rds_data

    def _decode_adts_header(self) -> None:
        stream = self._stream

        if stream.read_bits(12) != _ADTS_SYNCWORD:
            raise ValueError("invalid ADTS syncword")

        stream.skip_bits(3)  # id, layer
        protection_absent = stream.read_bool()
        self._profile = stream.read_bits(2)
        self._sample_frequency_index = stream.read_bits(4)
        stream.skip_bits(6)  # private bit, channel configuration, copy, home

        stream.skip_bits(2)  # copyright id bit, copyright id start
        frame_length = stream.read_bits(13)
        if frame_length != len(stream):
            raise ValueError("invalid ADTS frame length")

        stream.skip_bits(11)  # buffer fullness
        self._raw_data_block_count = stream.read_bits(2) + 1

        if not protection_absent:
            stream.skip_bits(16)  # CRC

    def _decode_raw_data_block(self) -> None:
        stream = self._stream
        while True:
            element = ElementType(stream.read_bits(3))
            if element is ElementType.END:
                break
            if element is ElementType.SCE:
                decode_sce(stream, self._profile, self._sample_frequency_index)
            elif element is ElementType.LFE:
                decode_lfe(stream, self._profile, self._sample_frequency_index)
            elif element is ElementType.CPE:
                decode_cpe(stream, self._profile, self._sample_frequency_index)
            elif element is ElementType.CCE:
                decode_cce(stream, self._profile, self._sample_frequency_index)
            elif element is ElementType.DSE:
                self._rds_data = self._collector.decode(stream)
            elif element is ElementType.PCE:
                config = ProgramConfig.decode(stream)
                self._profile = config.profile
                self._sample_frequency_index = config.sample_frequency_index
            elif element is ElementType.FIL:
                decode_fil(stream)
        stream.byte_align()


def decode_rds(data: bytes | bytearray | memoryview, rds_collector: RDSCollector | None = None) -> bytes:
    """Decode one ADTS frame and return any completed RDS package."""
    return Decoder(data, rds_collector).decode_rds()


__all__ = ["Decoder", "ElementType", "decode_rds", "decode_dse"]