"""System clock timestamper.

This module provides the UTC wall clock used when minting tokens.
"""

from datetime import datetime, timedelta, timezone

from tps_uid.interfaces.encoding import ITimestamper

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class UtcTimestamper(ITimestamper):
    """Timestamper backed by the system clock, in UTC."""

    def now(self) -> datetime:
        """Get the current datetime in UTC.

        Example:
            >>> now = UtcTimestamper().now()
            >>> now.tzinfo == timezone.utc
            True
        """
        return datetime.now(timezone.utc)

    def epoch_ms(self, when: datetime) -> int:
        """Convert a datetime to whole milliseconds since the Unix epoch.

        Naive datetimes are taken to be UTC. Sub-millisecond precision is
        truncated.

        Example:
            >>> dt = datetime(2023, 11, 14, 22, 13, 20, 123456, tzinfo=timezone.utc)
            >>> UtcTimestamper().epoch_ms(dt)
            1700000000123
        """
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)

        return (when - _EPOCH) // timedelta(milliseconds=1)
