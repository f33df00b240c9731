"""Token issuance and verification for envelope-auth.

This module provides the module-level token functions and the TokenAuthority
class, which holds one key, salt and lifetime and issues and verifies
serialized tokens with them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from envelope_auth.crypto import HmacSha512
from envelope_auth.encoding import Rfc3339Timestamper
from envelope_auth.exceptions import EnvelopeAuthError
from envelope_auth.interfaces.crypto import IMac
from envelope_auth.interfaces.encoding import ITimestamper
from envelope_auth.messages import Token

logger = logging.getLogger(__name__)


def generate_token(
    identifier: str,
    duration_in_seconds: float,
    salt: str,
    key: bytes,
    timestamper: Optional[ITimestamper] = None,
) -> Token:
    """Create a signed token for an identifier.

    Args:
        identifier: The subject of the token.
        duration_in_seconds: Whole number of seconds until expiration.
        salt: The policy-defined salt.
        key: The token key.
        timestamper: Time source; defaults to the system UTC clock.

    Returns:
        A new signed Token.

    Raises:
        InvalidDurationError: If the duration is not a finite whole number.
        KeyMaterialError: If the key is rejected by the MAC primitive.
    """
    return Token.generate(identifier, duration_in_seconds, salt, key, timestamper)


def validate_token_signature_and_expiration(
    token: Token,
    salt: str,
    key: bytes,
    timestamper: Optional[ITimestamper] = None,
) -> None:
    """Check that a token is authentic and has not expired.

    Args:
        token: The parsed token.
        salt: The salt the token was signed with.
        key: The token key.
        timestamper: Time source; defaults to the system UTC clock.

    Raises:
        KeyMaterialError: If the key is rejected by the MAC primitive.
        SignatureMismatchError: If the signature does not match.
        ExpirationNotIsoError: If the signed expiration is not RFC3339.
        ExpiredTokenError: If the token has expired.
    """
    token.verify(salt, key, timestamper)


@dataclass
class TokenAuthorityCryptoConfig:
    """Configuration for token cryptographic operations.

    Attributes:
        key: Secret key material for signing tokens.
        mac: Keyed digest primitive.
    """

    key: bytes = field(repr=False)
    mac: IMac = field(default_factory=HmacSha512)


@dataclass
class TokenAuthorityEncodingConfig:
    """Configuration for token time operations.

    Attributes:
        timestamper: Provides the current time and timestamp formatting.
    """

    timestamper: ITimestamper = field(default_factory=Rfc3339Timestamper)


@dataclass
class TokenAuthorityConfig:
    """Configuration for TokenAuthority.

    Attributes:
        crypto: Cryptographic operation configuration.
        salt: Salt distinguishing this class of tokens from others.
        lifetime_in_seconds: Lifetime of issued tokens.
        encoding: Time operation configuration.
    """

    crypto: TokenAuthorityCryptoConfig
    salt: str
    lifetime_in_seconds: int
    encoding: TokenAuthorityEncodingConfig = field(default_factory=TokenAuthorityEncodingConfig)


class TokenAuthority:
    """Issuer and verifier for one class of tokens.

    Typically one authority exists per token class (session, password reset,
    and so on), each with its own salt.

    Attributes:
        _config: Authority configuration with key, salt, lifetime and clock.
    """

    def __init__(self, config: TokenAuthorityConfig) -> None:
        """Initialize the token authority.

        Args:
            config: Authority configuration.
        """
        self._config = config

    def generate(self, identifier: str) -> Token:
        """Create a signed token for an identifier.

        Args:
            identifier: The subject of the token.

        Returns:
            A new signed Token expiring after the configured lifetime.

        Raises:
            InvalidDurationError: If the configured lifetime is invalid.
            KeyMaterialError: If the configured key is rejected.
        """
        token = Token.generate(
            identifier,
            self._config.lifetime_in_seconds,
            self._config.salt,
            self._config.crypto.key,
            self._config.encoding.timestamper,
            self._config.crypto.mac,
        )
        logger.debug("issued token for %r expiring at %s", identifier, token.expiration)
        return token

    def issue(self, identifier: str) -> str:
        """Create and serialize a signed token for an identifier.

        Args:
            identifier: The subject of the token.

        Returns:
            The serialized token.
        """
        return self.generate(identifier).serialize()

    def verify(self, message: str) -> Token:
        """Parse a serialized token and check it.

        Args:
            message: The serialized token from the client.

        Returns:
            The verified Token.

        Raises:
            TokenFormatError: If the token is malformed.
            SignatureMismatchError: If the token was forged or tampered with.
            ExpirationNotIsoError: If the signed expiration is not RFC3339.
            ExpiredTokenError: If the token has expired.
        """
        try:
            token = Token.parse(message)
            token.verify(
                self._config.salt,
                self._config.crypto.key,
                self._config.encoding.timestamper,
                self._config.crypto.mac,
            )
        except EnvelopeAuthError as e:
            logger.debug("token rejected: %s", e.code)
            raise

        return token
