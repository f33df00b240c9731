"""Token message type for envelope-auth.

This module defines the Token, a three-part credential carrying an
identifier, an RFC3339 expiration and a keyed signature, together with the
helper that signs token parts.

The wire format is::

    <base64url(identifier)>.<base64url(expiration)>.<signature>

Life-cycle: a token is generated (signed), serialized for the caller, parsed
back without any authenticity check, and finally verified. Verification
checks the signature first and the expiration second, so a forged token
never reaches the clock comparison.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from envelope_auth.crypto import secure_compare
from envelope_auth.encoding import Base64, Rfc3339Timestamper
from envelope_auth.exceptions import (
    DecodingError,
    ExpirationDecodeError,
    ExpirationNotIsoError,
    ExpiredTokenError,
    IdentifierDecodeError,
    InvalidDurationError,
    SignatureMismatchError,
    TokenFormatError,
    UTCParsingError,
)
from envelope_auth.interfaces.crypto import IMac
from envelope_auth.interfaces.encoding import ITimestamper
from envelope_auth.messages.envelope import Envelope

SEPARATOR = "."


def compose_token_payload(identifier: str, expiration: str) -> str:
    """Join the encoded identifier and expiration with the field separator.

    Both fields are base64url-encoded first, so a literal "." inside either
    of them can never be mistaken for a field boundary.

    Args:
        identifier: The raw identifier text.
        expiration: The raw expiration text.

    Returns:
        The signed portion of the token.
    """
    return SEPARATOR.join(
        (
            Base64.encode(identifier.encode("utf-8")),
            Base64.encode(expiration.encode("utf-8")),
        )
    )


def sign_token_parts(
    identifier: str,
    expiration: str,
    salt: str,
    key: bytes,
    mac: Optional[IMac] = None,
) -> str:
    """Compute the signature over a token's identifier and expiration.

    Args:
        identifier: The raw identifier text.
        expiration: The raw expiration text.
        salt: The policy-defined salt.
        key: The secret key material.
        mac: The keyed digest primitive; defaults to HMAC-SHA512.

    Returns:
        The base64url-encoded signature.

    Raises:
        KeyMaterialError: If the key is rejected by the MAC primitive.
    """
    envelope = Envelope(content=compose_token_payload(identifier, expiration), salt=salt)
    return envelope.sign(key, mac)


@dataclass(frozen=True)
class Token:
    """Signed, time-bounded credential.

    Tokens are never mutated; verification reports pass or fail without
    producing an updated token. Revocation is not modelled here.

    Attributes:
        identifier: The subject the token was issued for.
        expiration: RFC3339 timestamp after which the token is invalid.
        signature: Base64url keyed digest of the encoded identifier and
            expiration, salted with the caller's salt.
    """

    identifier: str
    expiration: str
    signature: str

    @classmethod
    def generate(
        cls,
        identifier: str,
        duration_in_seconds: float,
        salt: str,
        key: bytes,
        timestamper: Optional[ITimestamper] = None,
        mac: Optional[IMac] = None,
    ) -> Token:
        """Create a signed token that expires after a whole number of seconds.

        Args:
            identifier: The subject of the token.
            duration_in_seconds: Lifetime of the token. Must be a finite whole
                number; fractional values are rejected rather than truncated.
            salt: The policy-defined salt.
            key: The secret key material.
            timestamper: Time source; defaults to the system UTC clock.
            mac: The keyed digest primitive; defaults to HMAC-SHA512.

        Returns:
            A new signed Token.

        Raises:
            InvalidDurationError: If the duration is fractional, NaN, infinite or
                too large to express as an expiration.
            KeyMaterialError: If the key is rejected by the MAC primitive.
        """
        try:
            whole = math.isfinite(duration_in_seconds) and float(duration_in_seconds).is_integer()
        except OverflowError as e:
            raise InvalidDurationError(
                f"duration out of range, got {duration_in_seconds!r}"
            ) from e
        if not whole:
            raise InvalidDurationError(
                f"duration must be a whole number of seconds, got {duration_in_seconds!r}"
            )

        timestamper = timestamper or Rfc3339Timestamper()
        expiration = timestamper.add_seconds_and_format(duration_in_seconds)
        signature = sign_token_parts(identifier, expiration, salt, key, mac)

        return cls(identifier=identifier, expiration=expiration, signature=signature)

    @staticmethod
    def parse(message: str) -> Token:
        """Parse a serialized token without checking its authenticity.

        Args:
            message: The serialized token string.

        Returns:
            A new Token holding the decoded identifier and expiration and the
            signature text verbatim.

        Raises:
            TokenFormatError: If there are not exactly three fields.
            IdentifierDecodeError: If the identifier field cannot be decoded.
            ExpirationDecodeError: If the expiration field cannot be decoded.
        """
        chunks = message.split(SEPARATOR)
        if len(chunks) != 3:
            raise TokenFormatError(f"expected 3 fields, got {len(chunks)}")

        try:
            identifier = Base64.decode(chunks[0])
        except DecodingError as e:
            raise IdentifierDecodeError("could not decode identifier") from e

        try:
            expiration = Base64.decode(chunks[1])
        except DecodingError as e:
            raise ExpirationDecodeError("could not decode expiration") from e

        return Token(identifier=identifier, expiration=expiration, signature=chunks[2])

    def compose_payload(self) -> str:
        """Compose the signed portion of the token.

        Returns:
            The encoded identifier and expiration joined by ".".
        """
        return compose_token_payload(self.identifier, self.expiration)

    def serialize(self) -> str:
        """Serialize the token for transmission.

        The signature is already base64url text and is appended as is.

        Returns:
            The serialized token string.

        Example:
            >>> Token("user", "expiration", "signature").serialize()
            'dXNlcg==.ZXhwaXJhdGlvbg==.signature'
        """
        return SEPARATOR.join((self.compose_payload(), self.signature))

    def __str__(self) -> str:
        return self.serialize()

    def verify(
        self,
        salt: str,
        key: bytes,
        timestamper: Optional[ITimestamper] = None,
        mac: Optional[IMac] = None,
    ) -> None:
        """Verify the token signature and then its expiration.

        A token whose expiration equals the current instant is still valid.

        Args:
            salt: The salt the token was signed with.
            key: The secret key material.
            timestamper: Time source; defaults to the system UTC clock.
            mac: The keyed digest primitive; defaults to HMAC-SHA512.

        Raises:
            KeyMaterialError: If the key is rejected by the MAC primitive.
            SignatureMismatchError: If the signature does not match.
            ExpirationNotIsoError: If the signed expiration is not RFC3339.
            ExpiredTokenError: If the expiration is in the past.
        """
        timestamper = timestamper or Rfc3339Timestamper()

        new_signature = sign_token_parts(self.identifier, self.expiration, salt, key, mac)
        if not secure_compare(new_signature, self.signature):
            raise SignatureMismatchError("invalid signature")

        try:
            expiry = timestamper.parse(self.expiration)
        except UTCParsingError as e:
            raise ExpirationNotIsoError("expiration is not an RFC3339 timestamp") from e

        if expiry < timestamper.now():
            raise ExpiredTokenError("token expired")
