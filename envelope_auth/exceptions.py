"""Exception classes for envelope-auth.

This module defines the closed set of failure kinds raised by the codec, the
timestamper, the keyed digest, password checks and the token life-cycle.
Every exception derives from EnvelopeAuthError so that callers can collapse
all of them into a single "unauthorized" response at the edge.
"""

from __future__ import annotations

from typing import Any, Dict


class EnvelopeAuthError(Exception):
    """Base exception class for all envelope-auth errors.

    Attributes:
        code: Stable identifier for the failure kind, suitable for audit logs.
    """

    code = "EnvelopeAuthError"

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly description of the error.

        Returns:
            Dictionary with the error code and its message.
        """
        return {"code": self.code, "message": str(self)}


class EncodingError(EnvelopeAuthError):
    """Exception raised for encoding/decoding errors."""

    code = "EncodingError"


class DecodingError(EncodingError):
    """Exception raised when text is not padded url-safe base64 of UTF-8."""

    code = "DecodingFailure"


class UTCParsingError(EncodingError):
    """Exception raised when a timestamp is not in RFC3339 format.

    Attributes:
        text: The offending timestamp text.
    """

    code = "UTCParsingFailure"

    def __init__(self, text: str) -> None:
        super().__init__(f"not an RFC3339 timestamp: {text!r}")
        self.text = text

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["text"] = self.text
        return result


class KeyMaterialError(EnvelopeAuthError):
    """Exception raised when key material is rejected by the MAC primitive."""

    code = "KeyFailure"


class InvalidDurationError(EnvelopeAuthError):
    """Exception raised when a token lifetime is not a whole number of seconds."""

    code = "InvalidDuration"


class VerificationError(EnvelopeAuthError):
    """Exception raised when a recomputed digest does not match."""

    code = "VerificationError"


class PasswordMismatchError(VerificationError):
    """Exception raised when a password digest differs from the stored reference."""

    code = "PasswordMismatch"


class SignatureMismatchError(VerificationError):
    """Exception raised when a token signature does not match its contents."""

    code = "SignatureMismatch"


class TokenFormatError(EnvelopeAuthError):
    """Exception raised when a token does not have exactly three fields."""

    code = "TokenFormatInvalid"


class IdentifierDecodeError(TokenFormatError):
    """Exception raised when the token identifier field cannot be decoded."""

    code = "IdentifierDecodeFailure"


class ExpirationDecodeError(TokenFormatError):
    """Exception raised when the token expiration field cannot be decoded."""

    code = "ExpirationDecodeFailure"


class ExpirationNotIsoError(EnvelopeAuthError):
    """Exception raised when a signed expiration is not an RFC3339 timestamp."""

    code = "ExpirationNotIso"


class ExpiredTokenError(EnvelopeAuthError):
    """Exception raised when a token has expired."""

    code = "TokenExpired"
