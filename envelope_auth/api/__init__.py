"""Envelope-auth API package.

This package provides the password and token functions along with the
configured PasswordVerifier and TokenAuthority classes.
"""

from envelope_auth.api.passwords import (
    PASSWORD_FORMAT_VERSION,
    PasswordVerifier,
    encrypt_password,
    validate_password,
)
from envelope_auth.api.tokens import (
    TokenAuthority,
    TokenAuthorityConfig,
    TokenAuthorityCryptoConfig,
    TokenAuthorityEncodingConfig,
    generate_token,
    validate_token_signature_and_expiration,
)

__all__ = [
    # Passwords
    "PASSWORD_FORMAT_VERSION",
    "PasswordVerifier",
    "encrypt_password",
    "validate_password",
    # Tokens
    "TokenAuthority",
    "generate_token",
    "validate_token_signature_and_expiration",
    # Configuration types
    "TokenAuthorityConfig",
    "TokenAuthorityCryptoConfig",
    "TokenAuthorityEncodingConfig",
]
