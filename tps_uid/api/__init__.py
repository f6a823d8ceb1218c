"""tps-uid API package.

This package provides the TPS-UID codec and its configuration types.
"""

from tps_uid.api.codec import (
    CryptoConfig,
    EncodingConfig,
    TpsUidCodec,
    TpsUidCodecConfig,
)

__all__ = [
    # Codec
    "TpsUidCodec",
    # Configuration types
    "TpsUidCodecConfig",
    "CryptoConfig",
    "EncodingConfig",
]
