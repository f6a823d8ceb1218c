"""Base64 encoding utilities.

This module provides URL-safe base64 encoding/decoding utilities.
"""

import base64
import binascii
import re

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


class Base64:
    """Base64 encoding utilities for URL-safe base64 operations.

    This class provides static methods to encode bytes to unpadded base64url
    strings and decode base64url strings, with or without padding, back to
    bytes. The encoding uses URL-safe characters (replacing + with - and /
    with _).
    """

    @staticmethod
    def encode(data: bytes) -> str:
        """Encode bytes to an unpadded URL-safe base64 string.

        Args:
            data: The bytes to encode.

        Returns:
            A URL-safe base64 encoded string without '=' padding.
        """
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")

    @staticmethod
    def decode(base64_str: str) -> bytes:
        """Decode a URL-safe base64 string to bytes.

        Padding is optional. Characters outside the URL-safe alphabet are
        rejected rather than skipped.

        Args:
            base64_str: The base64url string to decode.

        Returns:
            The decoded bytes.

        Raises:
            ValueError: If the string is not valid base64url or is padded
                incorrectly.
        """
        token = base64_str.rstrip("=")
        if not _ALPHABET.fullmatch(token):
            raise ValueError("invalid base64url")

        # padding, when present, must complete the last quantum exactly
        padding = len(base64_str) - len(token)
        if padding and (padding > 2 or len(base64_str) % 4 != 0):
            raise ValueError("invalid base64url padding")

        # Restore padding (base64 strings must have length divisible by 4)
        while len(token) % 4 != 0:
            token += "="

        try:
            return base64.b64decode(token, altchars=b"-_", validate=True)
        except binascii.Error as e:
            raise ValueError("invalid base64url") from e
