"""Tests for token parsing, generation and verification."""

from __future__ import annotations

import dataclasses
import math
from datetime import datetime, timezone

import pytest

from envelope_auth.encoding import Rfc3339Timestamper
from envelope_auth.exceptions import (
    EnvelopeAuthError,
    ExpirationDecodeError,
    ExpirationNotIsoError,
    ExpiredTokenError,
    IdentifierDecodeError,
    InvalidDurationError,
    KeyMaterialError,
    SignatureMismatchError,
    TokenFormatError,
)
from envelope_auth.messages import Envelope, Token, sign_token_parts
from tests.implementation import ManualClock

IDENTIFIER = "user"
KEY = b"key"
SALT = "salt"


@pytest.fixture
def clock() -> ManualClock:
    """Create a manually advanced clock.

    Returns:
        ManualClock starting at a fixed instant.
    """
    return ManualClock(datetime(2025, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc))


@pytest.fixture
def timestamper(clock: ManualClock) -> Rfc3339Timestamper:
    """Create a timestamper reading the manual clock.

    Args:
        clock: The manual clock fixture.

    Returns:
        Rfc3339Timestamper driven by the clock.
    """
    return Rfc3339Timestamper(clock)


def test_token_serialization() -> None:
    """Test that tokens serialize to the dot-delimited wire format."""
    token = Token(identifier=IDENTIFIER, expiration="expiration", signature="signature")

    assert token.serialize() == "dXNlcg==.ZXhwaXJhdGlvbg==.signature"
    assert str(token) == "dXNlcg==.ZXhwaXJhdGlvbg==.signature"


def test_token_parsing() -> None:
    """Test that tokens can be parsed correctly."""
    token = Token.parse("dXNlcg==.ZXhwaXJhdGlvbg==.signature")

    assert token == Token(identifier=IDENTIFIER, expiration="expiration", signature="signature")


@pytest.mark.parametrize(
    "identifier, expiration, signature",
    [
        ("user", "2025-01-01T12:00:00+00:00", "c2ln"),
        ("", "", ""),
        ("héllo wörld", "expiration", "sig-_=="),
        ("user@example.com", "2025-01-01T12:00:00.5Z", "x"),
    ],
)
def test_token_round_trip(identifier: str, expiration: str, signature: str) -> None:
    """Test that parse(serialize(token)) gives back the same fields."""
    token = Token(identifier=identifier, expiration=expiration, signature=signature)

    assert Token.parse(token.serialize()) == token


@pytest.mark.parametrize(
    "message",
    [
        "",
        "dXNlcg==",
        "dXNlcg==.ZXhwaXJhdGlvbg==",
        "dXNlcg==.ZXhwaXJhdGlvbg==.signature.extra",
        "....",
    ],
)
def test_token_parsing_rejects_wrong_field_count(message: str) -> None:
    """Test that anything but three fields is a format error."""
    with pytest.raises(TokenFormatError) as exc_info:
        Token.parse(message)

    assert type(exc_info.value) is TokenFormatError


def test_token_parsing_rejects_bad_identifier() -> None:
    """Test that an undecodable identifier is reported as such."""
    with pytest.raises(IdentifierDecodeError):
        Token.parse("dXNlcg.ZXhwaXJhdGlvbg==.signature")


def test_token_parsing_rejects_bad_expiration() -> None:
    """Test that an undecodable expiration is reported as such."""
    with pytest.raises(ExpirationDecodeError):
        Token.parse("dXNlcg==.__4=.signature")


def test_identifier_with_separator_is_unambiguous() -> None:
    """Test that a literal '.' in the identifier survives the wire format."""
    token = Token(identifier="a.b", expiration="c", signature="d")

    assert Token.parse(token.serialize()).identifier == "a.b"
    assert sign_token_parts("a.b", "c", SALT, KEY) != sign_token_parts("a", "b.c", SALT, KEY)


def test_sign_token_parts_signs_encoded_fields() -> None:
    """Test that the signature covers the base64url forms of the fields."""
    expected = Envelope(content="dXNlcg==.ZXhwaXJhdGlvbg==", salt=SALT).sign(KEY)

    assert sign_token_parts(IDENTIFIER, "expiration", SALT, KEY) == expected


def test_token_generation(timestamper: Rfc3339Timestamper) -> None:
    """Test that generated tokens carry the expiration and a valid signature."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)

    assert token.identifier == IDENTIFIER
    assert token.expiration == "2025-01-01T12:00:04.123456+00:00"
    assert token.signature == sign_token_parts(IDENTIFIER, token.expiration, SALT, KEY)


def test_validate_token(clock: ManualClock, timestamper: Rfc3339Timestamper) -> None:
    """Test that a fresh token is valid and stays valid up to its expiration."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)

    token.verify(SALT, KEY, timestamper)

    clock.advance(0.01)
    token.verify(SALT, KEY, timestamper)

    # expiration equal to now is still valid
    clock.advance(3.99)
    token.verify(SALT, KEY, timestamper)


def test_validate_token_expired(clock: ManualClock, timestamper: Rfc3339Timestamper) -> None:
    """Test that a token is rejected once its expiration has passed."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)

    clock.advance(4.000001)

    with pytest.raises(ExpiredTokenError):
        token.verify(SALT, KEY, timestamper)


def test_validate_token_with_system_clock() -> None:
    """Test generation and validation against the wall clock."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY)

    Token.parse(token.serialize()).verify(SALT, KEY)


def test_negative_duration_is_already_expired(timestamper: Rfc3339Timestamper) -> None:
    """Test that a negative lifetime produces an expired token."""
    token = Token.generate(IDENTIFIER, -1, SALT, KEY, timestamper)

    with pytest.raises(ExpiredTokenError):
        token.verify(SALT, KEY, timestamper)


@pytest.mark.parametrize("duration", [0.004, 4.5, math.nan, math.inf])
def test_generation_rejects_fractional_duration(
    timestamper: Rfc3339Timestamper, duration: float
) -> None:
    """Test that durations that are not whole seconds are refused."""
    with pytest.raises(InvalidDurationError):
        Token.generate(IDENTIFIER, duration, SALT, KEY, timestamper)


@pytest.mark.parametrize("duration", [1e12, 1e20, 10**400])
def test_generation_rejects_out_of_range_duration(
    timestamper: Rfc3339Timestamper, duration: float
) -> None:
    """Test that lifetimes past the representable date range are refused."""
    with pytest.raises(InvalidDurationError) as exc_info:
        Token.generate(IDENTIFIER, duration, SALT, KEY, timestamper)

    assert isinstance(exc_info.value, EnvelopeAuthError)


@pytest.mark.parametrize(
    "changes",
    [
        {"identifier": "usex"},
        {"identifier": "user "},
        {"expiration": "2025-01-01T12:00:05.123456+00:00"},
        {"signature": "A" * 86 + "=="},
        {"signature": ""},
    ],
)
def test_validate_token_rejects_tampering(
    timestamper: Rfc3339Timestamper, changes: dict[str, str]
) -> None:
    """Test that altering any field invalidates the signature."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)
    tampered = dataclasses.replace(token, **changes)

    with pytest.raises(SignatureMismatchError):
        tampered.verify(SALT, KEY, timestamper)


@pytest.mark.parametrize("salt, key", [("Salt", KEY), (SALT, b"other key")])
def test_validate_token_rejects_other_salt_or_key(
    timestamper: Rfc3339Timestamper, salt: str, key: bytes
) -> None:
    """Test that a token only verifies under the salt and key it was signed with."""
    token = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)

    with pytest.raises(SignatureMismatchError):
        token.verify(salt, key, timestamper)


def test_signature_is_checked_before_expiration(
    clock: ManualClock, timestamper: Rfc3339Timestamper
) -> None:
    """Test that forged tokens fail on the signature, whatever their expiration."""
    expired = Token.generate(IDENTIFIER, 4.0, SALT, KEY, timestamper)
    clock.advance(60)

    with pytest.raises(SignatureMismatchError):
        dataclasses.replace(expired, identifier="admin").verify(SALT, KEY, timestamper)

    garbage = Token(identifier=IDENTIFIER, expiration="expiration", signature="signature")
    with pytest.raises(SignatureMismatchError):
        garbage.verify(SALT, KEY, timestamper)


def test_validate_token_rejects_signed_non_timestamp(timestamper: Rfc3339Timestamper) -> None:
    """Test that a correctly signed but unparseable expiration is reported."""
    signature = sign_token_parts(IDENTIFIER, "expiration", SALT, KEY)
    token = Token(identifier=IDENTIFIER, expiration="expiration", signature=signature)

    with pytest.raises(ExpirationNotIsoError):
        token.verify(SALT, KEY, timestamper)


def test_validate_token_accepts_other_offsets(timestamper: Rfc3339Timestamper) -> None:
    """Test that a signed expiration in another offset is compared as an instant."""
    expiration = "2025-01-01T14:00:04+02:00"
    signature = sign_token_parts(IDENTIFIER, expiration, SALT, KEY)

    Token(identifier=IDENTIFIER, expiration=expiration, signature=signature).verify(
        SALT, KEY, timestamper
    )


def test_generation_propagates_key_failure(timestamper: Rfc3339Timestamper) -> None:
    """Test that a bad key fails generation."""
    with pytest.raises(KeyMaterialError):
        Token.generate(IDENTIFIER, 4.0, SALT, "key", timestamper)  # type: ignore[arg-type]
