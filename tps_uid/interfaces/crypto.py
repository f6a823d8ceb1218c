"""Cryptographic interfaces for tps-uid.

This module defines protocols for hashing, nonce generation, verification,
and signing operations.
"""

from __future__ import annotations

from typing import Any, Protocol


class IHasher(Protocol):
    """Interface for cryptographic hashing operations."""

    def sum(self, message: bytes) -> str:
        """Compute the hash of a message.

        Args:
            message: The bytes to hash.

        Returns:
            The hash as a string.
        """
        ...


class INoncer(Protocol):
    """Interface for nonce generation."""

    def generate32(self) -> bytes:
        """Generate a nonce with 32 bits of entropy.

        Returns:
            Four bytes from a cryptographically secure source.
        """
        ...


class IVerifier(Protocol):
    """Interface for signature verification."""

    @property
    def seal_type(self) -> int:
        """The one-byte identifier written ahead of the signature."""
        ...

    @property
    def signature_length(self) -> int:
        """The fixed length of a raw signature in bytes."""
        ...

    def verify(self, message: bytes, signature: bytes, public_key: Any) -> None:
        """Verify a signature against a message using a public key.

        Args:
            message: The bytes that were signed.
            signature: The raw signature.
            public_key: The public key, in any form the verifier accepts.

        Raises:
            Exception: When verification fails.
        """
        ...


class IVerificationKey(Protocol):
    """Interface for verification key operations."""

    def public(self) -> bytes:
        """Fetch the raw public key.

        Returns:
            The public key bytes.
        """
        ...

    def verifier(self) -> IVerifier:
        """Return the algorithm verifier.

        Returns:
            The verifier instance.
        """
        ...

    def verify(self, message: bytes, signature: bytes) -> None:
        """Verify a signature using the verifier and public key.

        This is a convenience method.

        Args:
            message: The bytes that were signed.
            signature: The raw signature.

        Raises:
            Exception: When verification fails.
        """
        ...


class ISigningKey(IVerificationKey, Protocol):
    """Interface for signing key operations.

    Extends IVerificationKey with signing capabilities.
    """

    def sign(self, message: bytes) -> bytes:
        """Sign a message with the key it represents.

        The key could be backed by an HSM for instance.

        Args:
            message: The bytes to sign.

        Returns:
            The raw signature.
        """
        ...


class ISigningKeyLoader(Protocol):
    """Interface for turning caller-supplied key material into a signing key."""

    def load(self, private_key: Any) -> ISigningKey:
        """Load a signing key.

        Args:
            private_key: Key material in any form the loader accepts.

        Returns:
            A signing key.

        Raises:
            ValueError: If the material is not a usable private key.
        """
        ...
