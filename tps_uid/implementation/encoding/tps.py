"""TPS string collaborators.

The codec treats payloads as opaque strings. These two helpers know just
enough of the TPS grammar to mint a payload for the current moment and to
recover a header time from a Gregorian TPS string when the caller does not
supply one:

    tps://31.95,35.91,800m@T:greg.m3.c1.y26.M01.d09.h14.n30.s25
    T:greg.m3.c1.y26.M01.d09

Only the ``greg`` calendar is understood.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone

from tps_uid.interfaces.encoding import IPayloadFormatter, ITimeExtractor

from .timestamper import UtcTimestamper

_MILLENNIUM = re.compile(r"\.m(-?\d+)")
_CENTURY = re.compile(r"\.c(\d+)")
_YEAR = re.compile(r"\.y(\d{1,4})")
_MONTH = re.compile(r"\.M(\d{1,2})")
_DAY = re.compile(r"\.d(\d{1,2})")
_HOUR = re.compile(r"\.h(\d{1,2})")
_MINUTE = re.compile(r"\.n(\d{1,2})")
_SECOND = re.compile(r"\.s(\d{1,2})")

# two-digit years at or below the pivot are 20xx, above it 19xx
_TWO_DIGIT_PIVOT = 69


def _field(pattern: re.Pattern[str], time: str, default: int) -> int:
    match = pattern.search(time)
    return int(match.group(1)) if match else default


class TpsTimeExtractor(ITimeExtractor):
    """Derives epoch milliseconds from the time part of a TPS string."""

    def __init__(self) -> None:
        self._timestamper = UtcTimestamper()

    def epoch_ms(self, payload: str) -> int:
        """Parse epoch milliseconds from a TPS string.

        Accepts the URI form (``tps://...@T:greg...``) and the time-only form
        (``T:greg...``). Missing month and day default to 1, missing hour,
        minute and second to 0.

        Raises:
            ValueError: If the string has no Gregorian time part or no year,
                or describes an impossible or unrepresentable date.
        """
        if "@" in payload:
            time = payload[payload.index("@") + 1 :].strip()
        elif payload.startswith("T:"):
            time = payload
        else:
            raise ValueError("unrecognized TPS format")

        if not time.startswith("T:greg."):
            raise ValueError("only T:greg.* parsing is supported")

        millennium = _MILLENNIUM.search(time)
        century = _CENTURY.search(time)
        year_match = _YEAR.search(time)

        if millennium and century and year_match:
            full_year = (
                (int(millennium.group(1)) - 1) * 1000
                + (int(century.group(1)) - 1) * 100
                + int(year_match.group(1))
            )
        elif year_match:
            full_year = int(year_match.group(1))
            if full_year < 100:
                full_year += 2000 if full_year <= _TWO_DIGIT_PIVOT else 1900
        else:
            raise ValueError("missing year component")

        try:
            when = datetime(
                full_year,
                _field(_MONTH, time, 1),
                _field(_DAY, time, 1),
                _field(_HOUR, time, 0),
                _field(_MINUTE, time, 0),
                _field(_SECOND, time, 0),
                tzinfo=timezone.utc,
            )
        except OverflowError as e:
            raise ValueError(f"year {full_year} out of range") from e

        return self._timestamper.epoch_ms(when)


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


class TpsFormatter(IPayloadFormatter):
    """Formats a moment and optional position as a Gregorian TPS URI.

    Time is written to whole seconds; anything finer is dropped.
    """

    def format(
        self,
        when: datetime,
        latitude: float | None = None,
        longitude: float | None = None,
        altitude: float | None = None,
    ) -> str:
        """Format a TPS URI.

        Example:
            >>> when = datetime(2026, 1, 9, 14, 30, 25, tzinfo=timezone.utc)
            >>> TpsFormatter().format(when, 31.95, 35.91, 800)
            'tps://31.95,35.91,800m@T:greg.m3.c1.y26.M01.d09.h14.n30.s25'
        """
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)

        year = when.year
        time_part = (
            f"T:greg.m{year // 1000 + 1}.c{(year % 1000) // 100 + 1}.y{year % 100}"
            f".M{when.month:02d}.d{when.day:02d}"
            f".h{when.hour:02d}.n{when.minute:02d}.s{when.second:02d}"
        )

        space_part = "unknown"
        if latitude is not None and longitude is not None:
            space_part = f"{_number(latitude)},{_number(longitude)}"
            if altitude is not None:
                space_part += f",{_number(altitude)}m"

        return f"tps://{space_part}@{time_part}"
