"""Big-endian bit reader over a byte buffer, used by the ADTS/AAC parser."""

from __future__ import annotations


def _mask(n: int) -> int:
    return (1 << n) - 1


class BitStream:
    """Reads bits most-significant first from an immutable byte buffer.

    Data is fetched in 32-bit words. When fewer than four bytes remain, the
    last word is padded with zero bytes. Reading once the buffer is fully
    consumed raises :class:`EOFError`.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0
        self._cache = 0
        self._bits_cached = 0
        self._bits_read = 0

    def __len__(self) -> int:
        return len(self._data)

    def bits_left(self) -> int:
        """Return the number of bits not yet consumed, padding included."""
        return 8 * (len(self._data) - self._pos) + self._bits_cached

    def read_bit(self) -> int:
        """Read a single bit and return it as 0 or 1."""
        if self._bits_cached > 0:
            self._bits_cached -= 1
        else:
            self._cache = self._read_cache()
            self._bits_cached = 31
        self._bits_read += 1
        return (self._cache >> self._bits_cached) & 0x1

    def read_bits(self, n: int) -> int:
        """Read ``n`` bits (at most 32) and return them as an unsigned integer."""
        if n > 32:
            raise ValueError("attempt to read more than 32 bits")

        if self._bits_cached >= n:
            self._bits_cached -= n
            result = (self._cache >> self._bits_cached) & _mask(n)
        else:
            high = self._cache & _mask(self._bits_cached)
            left = n - self._bits_cached
            self._cache = self._read_cache()
            self._bits_cached = 32 - left
            result = ((self._cache >> self._bits_cached) & _mask(left)) | (high << left)

        self._bits_read += n
        return result

    def read_bool(self) -> bool:
        """Read a single bit as a boolean."""
        return self.read_bit() != 0

    def skip_bit(self) -> None:
        """Discard a single bit."""
        self._bits_read += 1
        if self._bits_cached > 0:
            self._bits_cached -= 1
        else:
            self._cache = self._read_cache()
            self._bits_cached = 31

    def skip_bits(self, n: int) -> None:
        """Discard ``n`` bits; any count is allowed."""
        self._bits_read += n
        if n <= self._bits_cached:
            self._bits_cached -= n
            return

        n -= self._bits_cached
        while n >= 32:
            n -= 32
            self._read_cache()

        if n > 0:
            self._cache = self._read_cache()
            self._bits_cached = 32 - n
        else:
            self._cache = 0
            self._bits_cached = 0

    def byte_align(self) -> None:
        """Skip forward to the next byte boundary."""
        to_flush = self._bits_cached & 0x7
        if to_flush > 0:
            self.skip_bits(to_flush)

    def _read_cache(self) -> int:
        remaining = len(self._data) - self._pos
        if remaining <= 0:
            raise EOFError("attempt to read past end of stream")
        chunk = self._data[self._pos:self._pos + 4]
        if remaining < 4:
            # Near the end: take the last one to three bytes, zero padded.
            chunk = chunk[:3].ljust(4, b"\x00")
            self._pos = len(self._data)
        else:
            self._pos += 4
        return int.from_bytes(chunk, "big")