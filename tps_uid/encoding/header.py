"""Binary layout of a TPS-UID token.

All integers are big-endian:

    MAGIC    4 bytes   "TPU7"
    VER      1 byte    0x01
    FLAGS    1 byte    bit0 = compressed, bit1 = sealed
    TIME     6 bytes   epoch milliseconds (48-bit unsigned)
    NONCE    4 bytes   random
    LEN      varint    payload byte length
    PAYLOAD  LEN bytes UTF-8, raw or compressed

A sealed token continues with a one-byte seal type and a fixed-length
signature over every byte from MAGIC through the end of PAYLOAD.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tps_uid.exceptions import (
    MalformedInputError,
    RangeViolationError,
    TruncationError,
    UnsupportedVersionError,
)

from .flags import TokenFlags
from .varint import decode_uvarint, encode_uvarint

MAGIC = b"TPU7"
VERSION = 0x01

# magic + version + flags + time + nonce
HEADER_SIZE = 4 + 1 + 1 + 6 + 4
# header plus at least one varint byte
MIN_TOKEN_SIZE = HEADER_SIZE + 1

MAX_EPOCH_MS = (1 << 48) - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class Header:
    """Parsed fixed-width header fields.

    Attributes:
        version: The format version byte.
        flags: The decoded flags byte.
        epoch_ms: Milliseconds since the Unix epoch.
        nonce: The 32-bit nonce as an unsigned integer.
    """

    version: int
    flags: TokenFlags
    epoch_ms: int
    nonce: int


@dataclass(frozen=True)
class DecodedToken:
    """A decoded TPS-UID.

    Attributes:
        version: The format version byte.
        epoch_ms: Milliseconds since the Unix epoch, from the header.
        compressed: Whether the payload block was compressed.
        sealed: Whether the seal flag was set.
        nonce: The 32-bit nonce. Informational only.
        payload: The exact original payload string.
    """

    version: int
    epoch_ms: int
    compressed: bool
    sealed: bool
    nonce: int
    payload: str

    @property
    def timestamp(self) -> datetime:
        """The header time as a UTC datetime."""
        return _EPOCH + timedelta(milliseconds=self.epoch_ms)


def validate_epoch(epoch_ms: object) -> int:
    """Check that an epoch fits the 48-bit time field.

    Raises:
        RangeViolationError: If epoch_ms is not an int in [0, 2**48 - 1].
    """
    if isinstance(epoch_ms, bool) or not isinstance(epoch_ms, int):
        raise RangeViolationError("epoch_ms must be a non-negative integer")
    if epoch_ms < 0:
        raise RangeViolationError("epoch_ms must be a non-negative integer")
    if epoch_ms > MAX_EPOCH_MS:
        raise RangeViolationError("epoch_ms exceeds 48-bit range")
    return epoch_ms


def write_u48(value: int) -> bytes:
    return value.to_bytes(6, byteorder="big")


def read_u48(data: bytes, offset: int) -> int:
    return int.from_bytes(data[offset : offset + 6], byteorder="big")


def pack_content(flags: TokenFlags, epoch_ms: int, nonce: bytes, payload: bytes) -> bytes:
    """Assemble header, length and payload block.

    Args:
        flags: Flags to write; the seal bit must already be set for content
            that is about to be signed.
        epoch_ms: A validated epoch.
        nonce: Exactly four nonce bytes.
        payload: The payload block, already compressed if flagged.

    Returns:
        The token content, everything a seal would cover.
    """
    if len(nonce) != 4:
        raise ValueError(f"nonce must be 4 bytes, got {len(nonce)}")

    return b"".join(
        [
            MAGIC,
            bytes([VERSION, flags.to_byte()]),
            write_u48(epoch_ms),
            nonce,
            encode_uvarint(len(payload)),
            payload,
        ]
    )


def unpack_header(data: bytes) -> Header:
    """Parse the fixed-width header.

    Raises:
        MalformedInputError: If data is too short or the magic is wrong.
        UnsupportedVersionError: If the version byte is unknown.
    """
    if len(data) < MIN_TOKEN_SIZE:
        raise MalformedInputError("token too short")

    if data[0:4] != MAGIC:
        raise MalformedInputError("bad magic")

    version = data[4]
    if version != VERSION:
        raise UnsupportedVersionError(f"unsupported version {version}")

    return Header(
        version=version,
        flags=TokenFlags.from_byte(data[5]),
        epoch_ms=read_u48(data, 6),
        nonce=int.from_bytes(data[12:16], byteorder="big"),
    )


def locate_payload(data: bytes) -> tuple[int, int]:
    """Read the length varint and return the payload block bounds.

    Returns:
        A tuple of (payload_start, payload_end); a seal, if present, covers
        exactly data[:payload_end].

    Raises:
        TruncationError: If the declared length runs past the buffer.
        VarintTooLongError: If the length varint is oversized.
    """
    length, bytes_read = decode_uvarint(data, HEADER_SIZE)
    payload_start = HEADER_SIZE + bytes_read
    payload_end = payload_start + length

    if payload_end > len(data):
        raise TruncationError("payload length exceeds buffer")

    return payload_start, payload_end
