"""Crypto package.

This package provides the HMAC-SHA512 keyed digest and constant-time
comparison used by envelopes, passwords and tokens.
"""

from .compare import secure_compare
from .hmac_sha512 import HmacSha512

__all__ = [
    "HmacSha512",
    "secure_compare",
]
