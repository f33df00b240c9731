"""Timestamp interfaces for envelope-auth.

This module defines the protocol for the UTC time source used to stamp and
check token expirations.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

Clock = Callable[[], datetime]


class ITimestamper(Protocol):
    """Interface for timestamp operations."""

    def format(self, when: datetime) -> str:
        """Format a datetime object as a string.

        Args:
            when: The datetime to format.

        Returns:
            The formatted timestamp string.
        """
        ...

    def parse(self, when: str) -> datetime:
        """Parse a timestamp string into a datetime object.

        Args:
            when: The timestamp string to parse.

        Returns:
            The parsed, timezone-aware datetime object.

        Raises:
            UTCParsingError: If the text is not in the interchange format.
        """
        ...

    def now(self) -> datetime:
        """Get the current datetime at UTC offset zero.

        Returns:
            The current datetime.
        """
        ...

    def add_seconds_and_format(self, seconds: float) -> str:
        """Format the current datetime shifted by a number of seconds.

        Args:
            seconds: The offset from now, truncated to whole seconds.

        Returns:
            The formatted timestamp string.
        """
        ...
