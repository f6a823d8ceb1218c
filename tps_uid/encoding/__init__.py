"""Wire-level encoding for tps-uid.

This package provides the token binary layout, the flags byte, LEB128
varints, base64url, and the prefixed text transport form.
"""

from .base64 import Base64
from .flags import TokenFlags
from .header import (
    MAGIC,
    MAX_EPOCH_MS,
    MIN_TOKEN_SIZE,
    VERSION,
    DecodedToken,
    Header,
    locate_payload,
    pack_content,
    unpack_header,
    validate_epoch,
)
from .transport import PREFIX, decode_text, encode_text, validate_shape
from .varint import decode_uvarint, encode_uvarint

__all__ = [
    "Base64",
    "TokenFlags",
    # header
    "MAGIC",
    "MAX_EPOCH_MS",
    "MIN_TOKEN_SIZE",
    "VERSION",
    "DecodedToken",
    "Header",
    "locate_payload",
    "pack_content",
    "unpack_header",
    "validate_epoch",
    # transport
    "PREFIX",
    "decode_text",
    "encode_text",
    "validate_shape",
    # varint
    "decode_uvarint",
    "encode_uvarint",
]
