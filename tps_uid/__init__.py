"""TPS-UID Python implementation.

This package mints and reads TPS-UIDs: compact, reversible, time-sortable
binary identifiers that bind an opaque payload string (usually a TPS
space-time coordinate) to a millisecond instant, optionally sealed with an
Ed25519 signature.

Main Components:
    - TpsUidCodec: Encode, decode, seal, verify and generate tokens
    - Encoding: Binary layout, varints and the text transport form
    - Interfaces: Protocol definitions for crypto, compression and clocks
    - Implementation: Reference providers (Ed25519, raw deflate, UTC clock)

Example:
    >>> from tps_uid import TpsUidCodec
    >>> codec = TpsUidCodec.default()
    >>> token = codec.encode("tps://unknown@T:greg.m3.c1.y26.M01.d09", epoch_ms=1700000000000)
    >>> codec.decode(token).payload
    'tps://unknown@T:greg.m3.c1.y26.M01.d09'
"""

from tps_uid.api import (
    CryptoConfig,
    EncodingConfig,
    TpsUidCodec,
    TpsUidCodecConfig,
)
from tps_uid.encoding import DecodedToken, TokenFlags, decode_text, encode_text, validate_shape
from tps_uid.exceptions import (
    CompressionError,
    CompressionFailureError,
    CompressionUnavailableError,
    KeyFormatError,
    MalformedInputError,
    MissingPrefixError,
    MissingSignatureDataError,
    MissingTimeError,
    NotSealedError,
    RangeViolationError,
    SignatureInvalidError,
    TpsUidError,
    TruncationError,
    UnsupportedSealTypeError,
    UnsupportedVersionError,
    VarintTooLongError,
)

__version__ = "0.5.0"

__all__ = [
    # API
    "TpsUidCodec",
    "TpsUidCodecConfig",
    "CryptoConfig",
    "EncodingConfig",
    # Encoding
    "DecodedToken",
    "TokenFlags",
    "decode_text",
    "encode_text",
    "validate_shape",
    # Exceptions
    "TpsUidError",
    "MalformedInputError",
    "MissingPrefixError",
    "UnsupportedSealTypeError",
    "UnsupportedVersionError",
    "RangeViolationError",
    "TruncationError",
    "VarintTooLongError",
    "MissingTimeError",
    "CompressionError",
    "CompressionUnavailableError",
    "CompressionFailureError",
    "NotSealedError",
    "MissingSignatureDataError",
    "SignatureInvalidError",
    "KeyFormatError",
]
