"""Raw deflate compression.

This module provides the payload compressor. Streams are raw deflate with no
zlib header or checksum, so they interoperate with other raw-deflate codecs.
"""

from __future__ import annotations

from tps_uid.exceptions import CompressionUnavailableError
from tps_uid.interfaces.encoding import ICompressor

try:
    import zlib
except ImportError:  # pragma: no cover - interpreters built without zlib
    zlib = None  # type: ignore[assignment]

# negative window bits select a raw stream
RAW_WBITS = -15


class Deflate(ICompressor):
    """Compressor that implements ICompressor with raw deflate.

    Raises CompressionUnavailableError from every call when the interpreter
    has no zlib module.
    """

    def __init__(self, level: int = 9) -> None:
        """Initialize the compressor.

        Args:
            level: zlib compression level, 0-9.
        """
        self.level = level

    @staticmethod
    def available() -> bool:
        """Report whether this interpreter can compress at all."""
        return zlib is not None

    def compress(self, data: bytes) -> bytes:
        """Compress bytes into a raw deflate stream.

        Raises:
            CompressionUnavailableError: If zlib is missing.
        """
        if zlib is None:
            raise CompressionUnavailableError("compression not available")

        compressor = zlib.compressobj(self.level, zlib.DEFLATED, RAW_WBITS)
        return compressor.compress(data) + compressor.flush()

    def decompress(self, data: bytes) -> bytes:
        """Inflate a raw deflate stream.

        Raises:
            CompressionUnavailableError: If zlib is missing.
            ValueError: If the stream is corrupt or incomplete.
        """
        if zlib is None:
            raise CompressionUnavailableError("compression not available")

        decompressor = zlib.decompressobj(RAW_WBITS)
        try:
            out = decompressor.decompress(data) + decompressor.flush()
        except zlib.error as e:
            raise ValueError("invalid deflate stream") from e

        if not decompressor.eof:
            raise ValueError("truncated deflate stream")

        return out
