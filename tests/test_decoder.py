import pytest

from adtsrds.decoder import Decoder, ElementType, decode_rds
from adtsrds.elements import RDSCollector


class _Bits:
    def __init__(self) -> None:
        self.bits: list[int] = []

    def add(self, value: int, n: int) -> "_Bits":
        self.bits.extend((value >> (n - 1 - i)) & 1 for i in range(n))
        return self

    def align(self) -> "_Bits":
        while len(self.bits) % 8:
            self.bits.append(0)
        return self

    def to_bytes(self) -> bytes:
        self.align()
        out = bytearray()
        for start in range(0, len(self.bits), 8):
            byte = 0
            for bit in self.bits[start:start + 8]:
                byte = (byte << 1) | bit
            out.append(byte)
        return bytes(out)


def _dse(bits: _Bits, payload: bytes, align: bool = True) -> None:
    bits.add(ElementType.DSE, 3).add(0, 4).add(1 if align else 0, 1).add(len(payload), 8)
    if align:
        bits.align()
    for b in payload:
        bits.add(b, 8)


def _frame(blocks, protection_absent=True, syncword=0xFFF, length_delta=0) -> bytes:
    payload = _Bits()
    if not protection_absent:
        payload.add(0, 16)
    for block in blocks:
        block(payload)
        payload.add(ElementType.END, 3)
        payload.align()
    body = payload.to_bytes()
    length = 7 + len(body) + length_delta
    header = _Bits()
    header.add(syncword, 12).add(0, 3).add(1 if protection_absent else 0, 1)
    header.add(1, 2).add(3, 4).add(0, 6).add(0, 2)
    header.add(length, 13).add(0x7FF, 11).add(len(blocks) - 1, 2)
    return header.to_bytes() + body


def test_single_complete_package():
    data = b"\xfe\x01\x02\xff"
    frame = _frame([lambda b: _dse(b, data)])
    assert decode_rds(frame, RDSCollector()) == data


def test_unaligned_dse():
    data = b"\xfe\x10\x20\x30\xff"
    frame = _frame([lambda b: _dse(b, data, align=False)])
    assert Decoder(frame, RDSCollector()).decode_rds() == data


def test_package_split_across_frames():
    collector = RDSCollector()
    first = _frame([lambda b: _dse(b, b"\xfe\x05")])
    second = _frame([lambda b: _dse(b, b"\x06\xff")])
    assert decode_rds(first, collector) == b""
    assert decode_rds(second, collector) == b"\xfe\x05\x06\xff"


def test_package_without_start_marker_is_dropped():
    frame = _frame([lambda b: _dse(b, b"\x01\x02\xff")])
    assert decode_rds(frame, RDSCollector()) == b""


def test_frame_without_dse():
    frame = _frame([lambda b: None])
    assert decode_rds(frame, RDSCollector()) == b""


def test_fill_element_before_dse():
    data = b"\xfe\x42\xff"

    def block(bits: _Bits) -> None:
        bits.add(ElementType.FIL, 3).add(2, 4).add(0xAA, 8).add(0xBB, 8)
        _dse(bits, data)

    assert decode_rds(_frame([block]), RDSCollector()) == data


def test_crc_present():
    data = b"\xfe\x07\xff"
    frame = _frame([lambda b: _dse(b, data)], protection_absent=False)
    assert decode_rds(frame, RDSCollector()) == data


def test_second_raw_data_block():
    data = b"\xfe\x09\xff"
    frame = _frame([lambda b: None, lambda b: _dse(b, data)])
    assert decode_rds(frame, RDSCollector()) == data


def test_invalid_syncword():
    frame = _frame([lambda b: None], syncword=0xABC)
    with pytest.raises(ValueError):
        decode_rds(frame, RDSCollector())


def test_frame_length_mismatch():
    frame = _frame([lambda b: None], length_delta=1)
    with pytest.raises(ValueError):
        decode_rds(frame, RDSCollector())


def test_truncated_frame_raises():
    with pytest.raises(EOFError):
        decode_rds(b"", RDSCollector())