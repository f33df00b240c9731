"""Envelope-auth Python implementation.

This package provides keyed, salt-bound password digests and compact,
tamper-evident expiring tokens, built on HMAC-SHA512 and padded base64url.

Main Components:
    - Envelope: The (content, salt) pair signed by the keyed digest
    - Token: Three-part signed credential with an RFC3339 expiration
    - TokenAuthority: Configured token issuer and verifier
    - PasswordVerifier: Configured password digester and checker
    - Interfaces: Protocol definitions for the MAC and the time source

Example:
    >>> from envelope_auth import Token
    >>> token = Token.generate("user", 3600, "session", b"key")
    >>> Token.parse(str(token)).verify("session", b"key")
"""

import logging

from envelope_auth.api import (
    PASSWORD_FORMAT_VERSION,
    PasswordVerifier,
    TokenAuthority,
    TokenAuthorityConfig,
    TokenAuthorityCryptoConfig,
    TokenAuthorityEncodingConfig,
    encrypt_password,
    generate_token,
    validate_password,
    validate_token_signature_and_expiration,
)
from envelope_auth.exceptions import (
    DecodingError,
    EncodingError,
    EnvelopeAuthError,
    ExpirationDecodeError,
    ExpirationNotIsoError,
    ExpiredTokenError,
    IdentifierDecodeError,
    InvalidDurationError,
    KeyMaterialError,
    PasswordMismatchError,
    SignatureMismatchError,
    TokenFormatError,
    UTCParsingError,
    VerificationError,
)
from envelope_auth.messages import Envelope, Token, sign_token_parts

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # API
    "PASSWORD_FORMAT_VERSION",
    "PasswordVerifier",
    "TokenAuthority",
    "TokenAuthorityConfig",
    "TokenAuthorityCryptoConfig",
    "TokenAuthorityEncodingConfig",
    "encrypt_password",
    "generate_token",
    "validate_password",
    "validate_token_signature_and_expiration",
    # Messages
    "Envelope",
    "Token",
    "sign_token_parts",
    # Exceptions
    "EnvelopeAuthError",
    "EncodingError",
    "DecodingError",
    "UTCParsingError",
    "KeyMaterialError",
    "InvalidDurationError",
    "VerificationError",
    "PasswordMismatchError",
    "SignatureMismatchError",
    "TokenFormatError",
    "IdentifierDecodeError",
    "ExpirationDecodeError",
    "ExpirationNotIsoError",
    "ExpiredTokenError",
]
