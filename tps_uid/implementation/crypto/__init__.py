"""Crypto reference implementation package.

This package provides reference implementations of the cryptographic
primitives used by tps-uid.
"""

from .ed25519 import Ed25519, Ed25519KeyLoader, Ed25519Verifier
from .entropy import get_entropy
from .hash import Hasher
from .nonce import Noncer

__all__ = [
    "Ed25519",
    "Ed25519KeyLoader",
    "Ed25519Verifier",
    "get_entropy",
    "Hasher",
    "Noncer",
]
