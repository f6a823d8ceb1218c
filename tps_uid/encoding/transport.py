"""Text transport form of a token.

A token travels as text by prefixing its unpadded base64url encoding with a
fixed ASCII literal, e.g. ``tpsuid7rb_VFBVNwEA...``.
"""

from __future__ import annotations

import re

from tps_uid.exceptions import MalformedInputError, MissingPrefixError

from .base64 import Base64

PREFIX = "tpsuid7rb_"
SHAPE = re.compile(r"^tpsuid7rb_[A-Za-z0-9_-]+$")


def encode_text(data: bytes) -> str:
    """Wrap token bytes in the text transport form.

    Args:
        data: Binary token.

    Returns:
        The prefix followed by unpadded base64url.
    """
    return f"{PREFIX}{Base64.encode(data)}"


def decode_text(text: str) -> bytes:
    """Unwrap the text transport form.

    Surrounding whitespace is ignored and base64 padding is optional.

    Args:
        text: A prefixed base64url string.

    Returns:
        The binary token. Nothing about its contents is checked here.

    Raises:
        MissingPrefixError: If the text does not start with the prefix.
        MalformedInputError: If the remainder is not valid base64url.
    """
    s = text.strip()
    if not s.startswith(PREFIX):
        raise MissingPrefixError("missing prefix")

    try:
        return Base64.decode(s[len(PREFIX) :])
    except ValueError as e:
        raise MalformedInputError("invalid base64url body") from e


def validate_shape(text: str) -> bool:
    """Check that text looks like a transport-form token.

    This validates shape only; a string that passes may still fail to
    decode. Binary decoding is authoritative.
    """
    return SHAPE.match(text.strip()) is not None
