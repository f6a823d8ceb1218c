"""Tests for LEB128 varint encoding."""

from __future__ import annotations

import pytest

from tps_uid.encoding.varint import decode_uvarint, encode_uvarint
from tps_uid.exceptions import RangeViolationError, TruncationError, VarintTooLongError


def test_single_byte_values() -> None:
    """Values below 128 take one byte with no continuation bit."""
    assert encode_uvarint(0) == b"\x00"
    assert encode_uvarint(1) == b"\x01"
    assert encode_uvarint(127) == b"\x7f"


def test_multi_byte_values() -> None:
    """Larger values are split into 7-bit groups, least significant first."""
    assert encode_uvarint(128) == b"\x80\x01"
    assert encode_uvarint(300) == b"\xac\x02"
    assert encode_uvarint(0xFFFFFFFF) == b"\xff\xff\xff\xff\x0f"


def test_decode_reports_bytes_read() -> None:
    """Decoding returns the value and the number of bytes consumed."""
    assert decode_uvarint(b"\xac\x02\xff", 0) == (300, 2)
    assert decode_uvarint(b"\x00\x00\x7f", 2) == (127, 1)


def test_decode_accepts_padded_groups() -> None:
    """Redundant zero groups are accepted as long as the value fits."""
    assert decode_uvarint(b"\x81\x80\x80\x00") == (1, 4)


def test_encode_rejects_bad_input() -> None:
    """Negative, non-integer and oversized values are rejected."""
    for value in (-1, 1.5, "3", True, 0x100000000):
        with pytest.raises(RangeViolationError):
            encode_uvarint(value)  # type: ignore[arg-type]


def test_decode_rejects_overflow() -> None:
    """A value that does not fit in 32 bits is rejected."""
    with pytest.raises(VarintTooLongError):
        decode_uvarint(b"\xff\xff\xff\xff\x1f")


def test_decode_rejects_too_many_groups() -> None:
    """More than ten groups is rejected even if the buffer continues."""
    with pytest.raises(VarintTooLongError):
        decode_uvarint(b"\x80" * 10 + b"\x00")


def test_decode_rejects_unterminated_varint() -> None:
    """Running out of bytes mid-varint is a truncation."""
    with pytest.raises(TruncationError):
        decode_uvarint(b"\x80\x80")

    with pytest.raises(TruncationError):
        decode_uvarint(b"", 0)
