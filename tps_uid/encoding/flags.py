"""The token flags byte."""

from __future__ import annotations

from dataclasses import dataclass

COMPRESSED_BIT = 0x01
SEALED_BIT = 0x02


@dataclass(frozen=True)
class TokenFlags:
    """Flags carried in the sixth byte of every token.

    Attributes:
        compressed: The payload block is raw-deflate compressed.
        sealed: A seal type and signature follow the payload.
    """

    compressed: bool = False
    sealed: bool = False

    def is_compressed(self) -> bool:
        return self.compressed

    def is_sealed(self) -> bool:
        return self.sealed

    def to_byte(self) -> int:
        """Pack the flags into a byte; reserved bits are written as zero."""
        value = 0
        if self.compressed:
            value |= COMPRESSED_BIT
        if self.sealed:
            value |= SEALED_BIT
        return value

    @classmethod
    def from_byte(cls, value: int) -> TokenFlags:
        """Unpack a flags byte, ignoring reserved bits."""
        return cls(
            compressed=bool(value & COMPRESSED_BIT),
            sealed=bool(value & SEALED_BIT),
        )
