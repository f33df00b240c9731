"""Envelope-auth interfaces package.

This package provides protocol definitions for the keyed digest primitive
and the time source.
"""

from .crypto import IMac
from .encoding import Clock, ITimestamper

__all__ = [
    # crypto
    "IMac",
    # encoding
    "Clock",
    "ITimestamper",
]
