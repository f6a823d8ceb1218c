"""Ed25519 implementation.

This module provides verifier, signing key, and key loader implementations
for Ed25519 seals. Signatures are always 64 bytes and need no randomness
beyond the key itself.
"""

from __future__ import annotations

from typing import Any, Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from tps_uid.interfaces.crypto import ISigningKey, ISigningKeyLoader, IVerifier

SEAL_TYPE_ED25519 = 0x01

_KEY_ERRORS = (ValueError, TypeError, UnsupportedAlgorithm)


def load_private_key(material: Any) -> Ed25519PrivateKey:
    """Load an Ed25519 private key from caller-supplied material.

    Accepted forms: an Ed25519PrivateKey, a 32-byte raw seed, a 64-byte
    seed followed by its public key, a hex string of either, or PKCS#8
    PEM/DER as bytes or str.

    Raises:
        ValueError: If the material is not a usable Ed25519 private key.
    """
    if isinstance(material, Ed25519PrivateKey):
        return material

    try:
        if isinstance(material, str):
            if "PRIVATE KEY" in material:
                key = serialization.load_pem_private_key(material.encode("ascii"), password=None)
                return _expect_private(key)
            material = bytes.fromhex(material.strip())

        if not isinstance(material, (bytes, bytearray, memoryview)):
            raise TypeError(f"unsupported private key type {type(material).__name__}")

        raw = bytes(material)
        if raw.startswith(b"-----BEGIN"):
            return _expect_private(serialization.load_pem_private_key(raw, password=None))
        if len(raw) == 32:
            return Ed25519PrivateKey.from_private_bytes(raw)
        if len(raw) == 64:
            key = Ed25519PrivateKey.from_private_bytes(raw[:32])
            if _raw_public(key.public_key()) != raw[32:]:
                raise ValueError("public half does not match seed")
            return key
        return _expect_private(serialization.load_der_private_key(raw, password=None))
    except _KEY_ERRORS as e:
        raise ValueError("invalid private key") from e


def load_public_key(material: Any) -> Ed25519PublicKey:
    """Load an Ed25519 public key from caller-supplied material.

    Accepted forms: an object with a ``public()`` method returning raw bytes
    (an IVerificationKey), an Ed25519PublicKey, 32 raw bytes, a hex string,
    or SubjectPublicKeyInfo PEM/DER as bytes or str.

    Raises:
        ValueError: If the material is not a usable Ed25519 public key.
    """
    if isinstance(material, Ed25519PublicKey):
        return material

    try:
        if callable(getattr(material, "public", None)):
            material = material.public()

        if isinstance(material, str):
            if "PUBLIC KEY" in material:
                key = serialization.load_pem_public_key(material.encode("ascii"))
                return _expect_public(key)
            material = bytes.fromhex(material.strip())

        if not isinstance(material, (bytes, bytearray, memoryview)):
            raise TypeError(f"unsupported public key type {type(material).__name__}")

        raw = bytes(material)
        if raw.startswith(b"-----BEGIN"):
            return _expect_public(serialization.load_pem_public_key(raw))
        if len(raw) == 32:
            return Ed25519PublicKey.from_public_bytes(raw)
        return _expect_public(serialization.load_der_public_key(raw))
    except _KEY_ERRORS as e:
        raise ValueError("invalid public key") from e


def _expect_private(key: Any) -> Ed25519PrivateKey:
    if not isinstance(key, Ed25519PrivateKey):
        raise ValueError("not an Ed25519 private key")
    return key


def _expect_public(key: Any) -> Ed25519PublicKey:
    if not isinstance(key, Ed25519PublicKey):
        raise ValueError("not an Ed25519 public key")
    return key


def _raw_public(key: Ed25519PublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class Ed25519Verifier(IVerifier):
    """Ed25519 signature verifier."""

    @property
    def seal_type(self) -> int:
        return SEAL_TYPE_ED25519

    @property
    def signature_length(self) -> int:
        """The expected length of raw signatures.

        Returns:
            The signature length (64 bytes).
        """
        return 64

    def verify(self, message: bytes, signature: bytes, public_key: Any) -> None:
        """Verify a signature against a message using a public key.

        Args:
            message: The bytes that were signed.
            signature: The raw 64-byte signature.
            public_key: Public key material, see load_public_key.

        Raises:
            ValueError: When verification fails or inputs are invalid. The
                cause is chained but never named in the message.
        """
        try:
            key = load_public_key(public_key)

            if len(signature) != self.signature_length:
                raise ValueError(
                    f"invalid signature length: expected 64 bytes, got {len(signature)}"
                )

            key.verify(bytes(signature), bytes(message))
        except (InvalidSignature, ValueError) as e:
            raise ValueError("invalid signature") from e


class Ed25519(ISigningKey):
    """Ed25519 signing key.

    Wraps an Ed25519 private key, generating one on demand.
    """

    def __init__(self, private_key: Optional[Ed25519PrivateKey] = None) -> None:
        """Initialize the signing key.

        Args:
            private_key: An existing key, or None to call generate() later.
        """
        self._key_pair = private_key
        self._verifier = Ed25519Verifier()

    def generate(self) -> None:
        """Generate a new Ed25519 key pair."""
        self._key_pair = Ed25519PrivateKey.generate()

    def sign(self, message: bytes) -> bytes:
        """Sign a message with the private key.

        Args:
            message: The bytes to sign.

        Returns:
            The raw 64-byte signature.

        Raises:
            ValueError: If the key pair has not been generated.
        """
        if self._key_pair is None:
            raise ValueError("keypair not generated")

        return self._key_pair.sign(bytes(message))

    def public(self) -> bytes:
        """Get the raw 32-byte public key.

        Raises:
            ValueError: If the key pair has not been generated.
        """
        if self._key_pair is None:
            raise ValueError("keypair not generated")

        return _raw_public(self._key_pair.public_key())

    def seed(self) -> bytes:
        """Get the raw 32-byte private seed.

        Raises:
            ValueError: If the key pair has not been generated.
        """
        if self._key_pair is None:
            raise ValueError("keypair not generated")

        return self._key_pair.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def verifier(self) -> IVerifier:
        return self._verifier

    def verify(self, message: bytes, signature: bytes) -> None:
        """Verify a signature using the verifier and public key.

        Raises:
            ValueError: When verification fails.
        """
        self._verifier.verify(message, signature, self.public())


class Ed25519KeyLoader(ISigningKeyLoader):
    """Loads Ed25519 signing keys from caller-supplied material."""

    def load(self, private_key: Any) -> ISigningKey:
        """Load a signing key.

        Objects that already sign (any ISigningKey) are returned unchanged;
        everything else goes through load_private_key.

        Raises:
            ValueError: If the material is not a usable private key.
        """
        if not isinstance(private_key, Ed25519PrivateKey) and callable(
            getattr(private_key, "sign", None)
        ):
            return private_key

        return Ed25519(load_private_key(private_key))
