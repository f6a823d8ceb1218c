"""tps-uid interfaces package.

This package provides protocol definitions for cryptographic operations,
compression, clocks, and payload collaborators.
"""

from .crypto import (
    IHasher,
    INoncer,
    ISigningKey,
    ISigningKeyLoader,
    IVerificationKey,
    IVerifier,
)
from .encoding import (
    ICompressor,
    IPayloadFormatter,
    ITimeExtractor,
    ITimestamper,
)

__all__ = [
    # crypto
    "IHasher",
    "INoncer",
    "ISigningKey",
    "ISigningKeyLoader",
    "IVerificationKey",
    "IVerifier",
    # encoding
    "ICompressor",
    "IPayloadFormatter",
    "ITimeExtractor",
    "ITimestamper",
]
