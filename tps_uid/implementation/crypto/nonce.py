"""Nonce generator implementation.

This module provides the Noncer class for generating token nonces.
"""

from tps_uid.interfaces.crypto import INoncer

from .entropy import get_entropy


class Noncer(INoncer):
    """Nonce generator that implements INoncer.

    Generates 32-bit nonces. They spread tokens minted in the same
    millisecond; they are neither ordered nor a security control.
    """

    def generate32(self) -> bytes:
        """Generate a nonce with 32 bits of entropy.

        Returns:
            Four random bytes.
        """
        return get_entropy(4)
