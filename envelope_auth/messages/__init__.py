"""Envelope-auth messages package.

This package provides the signed envelope and the token types.
"""

from .envelope import Envelope
from .token import Token, compose_token_payload, sign_token_parts

__all__ = [
    "Envelope",
    "Token",
    "compose_token_payload",
    "sign_token_parts",
]
