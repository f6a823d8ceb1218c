"""Unsigned LEB128 varints.

The payload length field is written as an unsigned LEB128 integer: seven
value bits per byte, least significant group first, with the high bit set on
every byte except the last.
"""

from __future__ import annotations

from tps_uid.exceptions import RangeViolationError, TruncationError, VarintTooLongError

MAX_UVARINT = 0xFFFFFFFF
MAX_GROUPS = 10


def encode_uvarint(n: int) -> bytes:
    """Encode an unsigned 32-bit integer as a LEB128 varint.

    Args:
        n: The value to encode.

    Returns:
        The encoded bytes (one to five bytes).

    Raises:
        RangeViolationError: If n is not an integer in [0, 2**32 - 1].
    """
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise RangeViolationError("uvarint must be a non-negative int")
    if n > MAX_UVARINT:
        raise RangeViolationError("uvarint exceeds 32-bit range")

    out = bytearray()
    while n >= 0x80:
        out.append((n & 0x7F) | 0x80)
        n >>= 7
    out.append(n)

    return bytes(out)


def decode_uvarint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a LEB128 varint starting at offset.

    Args:
        data: The buffer to read from.
        offset: Index of the first varint byte.

    Returns:
        A tuple of (value, bytes_read).

    Raises:
        TruncationError: If the buffer ends before the final group.
        VarintTooLongError: If more than 10 groups are present or the value
            does not fit in 32 bits.
    """
    value = 0
    shift = 0

    for i in range(MAX_GROUPS):
        if offset + i >= len(data):
            raise TruncationError("uvarint runs past end of buffer")

        b = data[offset + i]
        value |= (b & 0x7F) << shift

        if b < 0x80:
            if value > MAX_UVARINT:
                raise VarintTooLongError("uvarint overflows 32 bits")
            return value, i + 1

        shift += 7

    raise VarintTooLongError("uvarint too long")
