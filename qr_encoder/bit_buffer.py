# -*- coding: utf-8 -*-
"""
Bit Buffer Module

An append-only sequence of bits used to assemble segment payloads and the
final data bitstream of a QR code. Bits are packed MSB-first into a
bytearray whose capacity doubles whenever it runs out of room.

Classes:
    BitBuffer: Growable bit sequence with big-endian byte packing
"""

from typing import Iterator


class BitBuffer:
    """
    Growable sequence of bits.

    Bit 0 of the sequence is the most significant bit of the first byte of
    the backing storage. Bits beyond the current length are always zero.

    Example:
        >>> bb = BitBuffer()
        >>> bb.append_bits(0b101, 3)
        >>> bb.append_bits(0b11111, 5)
        >>> bb.to_bytes()
        b'\\xbf'
    """

    _INITIAL_CAPACITY = 8

    def __init__(self) -> None:
        self._data = bytearray(self._INITIAL_CAPACITY)
        self._bit_length = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitBuffer":
        """Build a buffer holding every bit of ``data``, MSB first."""
        bb = cls()
        for b in data:
            bb.append_bits(b, 8)
        return bb

    def __len__(self) -> int:
        return self._bit_length

    def __iter__(self) -> Iterator[int]:
        for i in range(self._bit_length):
            yield (self._data[i >> 3] >> (7 - (i & 7))) & 1

    def __repr__(self) -> str:
        return f"BitBuffer({self.to_bit_string()!r})"

    @property
    def bit_length(self) -> int:
        return self._bit_length

    def get_bit(self, index: int) -> int:
        """
        Return the bit at ``index`` as 0 or 1.

        Raises:
            IndexError: If index is outside [0, len(self))
        """
        if index < 0 or index >= self._bit_length:
            raise IndexError("Bit index out of range")
        return (self._data[index >> 3] >> (7 - (index & 7))) & 1

    def to_bytes(self) -> bytes:
        """
        Pack the bits into a new byte string, big endian.

        Raises:
            ValueError: If the length is not a whole number of bytes
        """
        if self._bit_length % 8 != 0:
            raise ValueError("Data is not a whole number of bytes")
        return bytes(self._data[:self._bit_length >> 3])

    def to_bit_string(self) -> str:
        return "".join(str(bit) for bit in self)

    def copy(self) -> "BitBuffer":
        other = BitBuffer()
        other._data = bytearray(self._data)
        other._bit_length = self._bit_length
        return other

    def _ensure_capacity(self, extra_bits: int) -> None:
        needed = (self._bit_length + extra_bits + 7) >> 3
        capacity = len(self._data)
        if needed <= capacity:
            return
        while capacity < needed:
            capacity *= 2
        self._data.extend(bytes(capacity - len(self._data)))

    def append_bits(self, value: int, length: int) -> None:
        """
        Append the low ``length`` bits of ``value``.

        Args:
            value (int): Non-negative value with no set bits at or above ``length``
            length (int): Number of bits to append, 0 to 31

        Raises:
            ValueError: If length is out of range or value has stray high bits
        """
        if length < 0 or length > 31 or value < 0 or value >> length != 0:
            raise ValueError("Value out of range")
        self._ensure_capacity(length)
        while length > 0:
            free = 8 - (self._bit_length & 7)
            take = min(free, length)
            chunk = (value >> (length - take)) & ((1 << take) - 1)
            self._data[self._bit_length >> 3] |= chunk << (free - take)
            self._bit_length += take
            length -= take

    def append_data(self, other: "BitBuffer") -> None:
        """
        Append every bit of another buffer.

        Whole bytes are copied directly when this buffer is byte aligned,
        otherwise each source byte is split across two destination bytes.
        """
        length = len(other)
        if length == 0:
            return
        src = other._data
        self._ensure_capacity(length)
        shift = self._bit_length & 7
        if shift == 0:
            start = self._bit_length >> 3
            count = (length + 7) >> 3
            self._data[start:start + count] = src[:count]
            self._bit_length += length
            return

        whole_bytes, tail_bits = divmod(length, 8)
        for byte in src[:whole_bytes]:
            self._data[self._bit_length >> 3] |= byte >> shift
            self._bit_length += 8
            self._data[self._bit_length >> 3] = (byte << (8 - shift)) & 0xFF
        if tail_bits:
            self.append_bits(src[whole_bytes] >> (8 - tail_bits), tail_bits)
