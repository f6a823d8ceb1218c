"""Token digest implementation.

This module provides the Hasher class for digesting binary tokens.
"""

import base64

import blake3

from tps_uid.interfaces.crypto import IHasher

# CESR code for a Blake3-256 digest
BLAKE3_256_CODE = "E"


class Hasher(IHasher):
    """Hasher that uses Blake3-256 and implements IHasher.

    Digests are CESR-encoded: one code character followed by 43 base64url
    characters.
    """

    def sum(self, message: bytes) -> str:
        """Digest the exact bytes of a token.

        Args:
            message: The token's binary form.

        Returns:
            A 44-character string starting with "E".
        """
        digest = blake3.blake3(message).digest()

        # one lead byte aligns 32 bytes to 44 base64 chars; its char is the code slot
        encoded = base64.urlsafe_b64encode(bytes([0]) + digest).decode("ascii")

        return f"{BLAKE3_256_CODE}{encoded[1:]}"
