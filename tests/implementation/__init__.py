"""Test helper implementations package.

This package provides test doubles for envelope-auth collaborators.
"""

from .clock import ManualClock

__all__ = [
    "ManualClock",
]
