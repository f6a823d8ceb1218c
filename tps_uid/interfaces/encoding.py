"""Encoding and timestamp interfaces for tps-uid.

This module defines protocols for payload compression, clock access, and the
payload-string collaborators used to derive and produce TPS strings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ICompressor(Protocol):
    """Interface for payload compression."""

    def compress(self, data: bytes) -> bytes:
        """Compress a payload block.

        Args:
            data: The bytes to compress.

        Returns:
            The compressed bytes.
        """
        ...

    def decompress(self, data: bytes) -> bytes:
        """Decompress a payload block.

        Args:
            data: The compressed bytes.

        Returns:
            The original bytes.

        Raises:
            Exception: If the data is not a valid compressed stream.
        """
        ...


class ITimestamper(Protocol):
    """Interface for timestamp operations."""

    def now(self) -> datetime:
        """Get the current datetime.

        Returns:
            The current timezone-aware datetime.
        """
        ...

    def epoch_ms(self, when: datetime) -> int:
        """Convert a datetime into milliseconds since the Unix epoch.

        Args:
            when: The datetime to convert.

        Returns:
            Whole milliseconds since 1970-01-01T00:00:00Z.
        """
        ...


class ITimeExtractor(Protocol):
    """Interface for deriving an epoch from a payload string."""

    def epoch_ms(self, payload: str) -> int:
        """Derive epoch milliseconds from a payload.

        Args:
            payload: The payload string.

        Returns:
            Milliseconds since the Unix epoch.

        Raises:
            ValueError: If the payload carries no usable time.
        """
        ...


class IPayloadFormatter(Protocol):
    """Interface for building a payload string for a moment and position."""

    def format(
        self,
        when: datetime,
        latitude: float | None = None,
        longitude: float | None = None,
        altitude: float | None = None,
    ) -> str:
        """Format a payload string.

        Args:
            when: The moment to describe.
            latitude: Optional latitude in degrees.
            longitude: Optional longitude in degrees.
            altitude: Optional altitude in metres.

        Returns:
            The payload string.
        """
        ...
