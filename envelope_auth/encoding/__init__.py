"""Encoding package.

This package provides the base64url codec and the RFC3339 timestamper.
"""

from .base64 import Base64
from .timestamper import Rfc3339Timestamper, system_clock

__all__ = [
    "Base64",
    "Rfc3339Timestamper",
    "system_clock",
]
