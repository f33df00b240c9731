"""RFC3339 timestamp formatting at UTC offset zero.

This module provides the time source used to stamp and check token
expirations. Timestamps are rendered with an explicit "+00:00" offset, and
parsing accepts RFC3339 text with any offset.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from envelope_auth.exceptions import InvalidDurationError, UTCParsingError
from envelope_auth.interfaces.encoding import Clock, ITimestamper

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))",
    re.ASCII,
)


def system_clock() -> datetime:
    """Read the wall clock in UTC."""
    return datetime.now(timezone.utc)


class Rfc3339Timestamper(ITimestamper):
    """RFC3339 timestamp formatter pinned to UTC.

    The wall clock is read through an injectable callable, so a caller can
    substitute a fixed or manually advanced time source. This is a wall
    clock, not a monotonic one: it is fine for expiration checks but not for
    measuring elapsed time.

    Attributes:
        clock: Callable returning the current datetime.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        """Initialize the timestamper.

        Args:
            clock: Time source; defaults to the system wall clock.
        """
        self.clock: Clock = clock or system_clock

    def format(self, when: datetime) -> str:
        """Format a datetime object as an RFC3339 string at offset zero.

        Aware datetimes are converted to UTC; naive ones are assumed to
        already be UTC.

        Args:
            when: The datetime to format.

        Returns:
            The formatted RFC3339 timestamp string.

        Example:
            >>> dt = datetime(2025, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
            >>> Rfc3339Timestamper().format(dt)
            '2025-01-01T12:00:00.123456+00:00'
        """
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        else:
            when = when.replace(tzinfo=timezone.utc)

        return when.isoformat()

    def parse(self, when: str) -> datetime:
        """Parse an RFC3339 timestamp string into a datetime object.

        Fractional seconds beyond microsecond precision are truncated, and a
        leap second is clamped to the last microsecond of the minute. Date
        only strings, missing offsets and out-of-range fields are rejected.

        Args:
            when: The timestamp string to parse.

        Returns:
            The parsed, timezone-aware datetime object.

        Raises:
            UTCParsingError: If the text is not an RFC3339 timestamp.

        Example:
            >>> Rfc3339Timestamper().parse('2025-01-01T12:00:00Z')
            datetime.datetime(2025, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
        """
        match = _RFC3339.fullmatch(when)
        if match is None:
            raise UTCParsingError(when)

        year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
        fraction, zulu, sign, offset_hours, offset_minutes = match.groups()[6:]
        microsecond = int((fraction or "0")[:6].ljust(6, "0"))
        if second == 60:
            # leap second, datetime has no :60
            second, microsecond = 59, 999999

        try:
            if zulu:
                tzinfo = timezone.utc
            else:
                offset = timedelta(hours=int(offset_hours), minutes=int(offset_minutes))
                if int(offset_minutes) >= 60:
                    raise ValueError("offset minutes out of range")
                tzinfo = timezone(-offset if sign == "-" else offset)

            return datetime(
                year, month, day, hour, minute, second, microsecond, tzinfo=tzinfo
            )
        except ValueError as e:
            raise UTCParsingError(when) from e

    def now(self) -> datetime:
        """Get the current datetime at UTC offset zero.

        Returns:
            The current datetime with UTC timezone.
        """
        return self.clock().astimezone(timezone.utc)

    def add_seconds_and_format(self, seconds: float) -> str:
        """Format the current time shifted by a number of seconds.

        The offset is truncated toward zero to whole seconds before it is
        added, so 0.9 adds nothing and -1.5 subtracts one second.

        Args:
            seconds: The offset from now.

        Returns:
            The formatted RFC3339 timestamp string.

        Raises:
            InvalidDurationError: If seconds is NaN, infinite, or moves the
                time outside the range datetime can represent.
        """
        try:
            if not math.isfinite(seconds):
                raise InvalidDurationError(f"duration must be finite, got {seconds!r}")

            when = self.now() + timedelta(seconds=int(seconds))
        except (OverflowError, ValueError) as e:
            raise InvalidDurationError(f"duration out of range, got {seconds!r}") from e

        return self.format(when)
