"""Exception classes for tps-uid.

This module defines the error taxonomy raised by the TPS-UID codec. Every
error is terminal for the call that raised it.
"""


class TpsUidError(Exception):
    """Base exception class for all tps-uid errors."""

    pass


class MalformedInputError(TpsUidError):
    """Exception raised when bytes or text are not a well-formed token."""

    pass


class MissingPrefixError(MalformedInputError):
    """Exception raised when a text token lacks the transport prefix."""

    pass


class UnsupportedSealTypeError(MalformedInputError):
    """Exception raised when a sealed token names an unknown signature scheme."""

    pass


class UnsupportedVersionError(TpsUidError):
    """Exception raised when the version byte is not recognized."""

    pass


class RangeViolationError(TpsUidError):
    """Exception raised when an epoch or length is out of bounds."""

    pass


class TruncationError(TpsUidError):
    """Exception raised when a declared length runs past the end of the buffer."""

    pass


class VarintTooLongError(TpsUidError):
    """Exception raised when a varint exceeds 10 groups or 32 bits."""

    pass


class MissingTimeError(TpsUidError):
    """Exception raised when no epoch was supplied and none could be derived."""

    pass


class CompressionError(TpsUidError):
    """Base exception class for compression errors."""

    pass


class CompressionUnavailableError(CompressionError):
    """Exception raised when compression is requested but no compressor exists."""

    pass


class CompressionFailureError(CompressionError):
    """Exception raised when compressed data cannot be inflated."""

    pass


class NotSealedError(TpsUidError):
    """Exception raised when verifying a token whose seal flag is clear."""

    pass


class MissingSignatureDataError(TpsUidError):
    """Exception raised when a sealed token ends before its signature block."""

    pass


class SignatureInvalidError(TpsUidError):
    """Exception raised when seal verification fails for any reason."""

    pass


class KeyFormatError(TpsUidError):
    """Exception raised when signing key material cannot be used."""

    pass
