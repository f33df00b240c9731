"""Password digest functions for envelope-auth.

Passwords are stored as a version tag followed by the keyed digest of the
plaintext password salted with a per-user salt. Verification recomputes the
digest and compares the full stored string in constant time.
"""

from __future__ import annotations

import logging
from typing import Optional

from envelope_auth.crypto import HmacSha512, secure_compare
from envelope_auth.exceptions import PasswordMismatchError
from envelope_auth.interfaces.crypto import IMac
from envelope_auth.messages import Envelope

logger = logging.getLogger(__name__)

PASSWORD_FORMAT_VERSION = "#01#"


def encrypt_password(envelope: Envelope, key: bytes, mac: Optional[IMac] = None) -> str:
    """Produce the versioned digest of a password envelope.

    Args:
        envelope: The plaintext password as content and the per-user salt.
        key: The password key.
        mac: The keyed digest primitive; defaults to HMAC-SHA512.

    Returns:
        The digest prefixed with the format version tag.

    Raises:
        KeyMaterialError: If the key is rejected by the MAC primitive.
    """
    return f"{PASSWORD_FORMAT_VERSION}{envelope.sign(key, mac)}"


def validate_password(
    envelope: Envelope,
    reference: str,
    key: bytes,
    mac: Optional[IMac] = None,
) -> None:
    """Check a password envelope against a stored digest.

    A reference written under a different format version fails the same way
    as a wrong password; telling the two apart is up to the caller.

    Args:
        envelope: The candidate password as content and the per-user salt.
        reference: The stored digest.
        key: The password key.
        mac: The keyed digest primitive; defaults to HMAC-SHA512.

    Raises:
        KeyMaterialError: If the key is rejected by the MAC primitive.
        PasswordMismatchError: If the recomputed digest differs from reference.
    """
    password = encrypt_password(envelope, key, mac)

    if not secure_compare(password, reference):
        raise PasswordMismatchError("password mismatch")


class PasswordVerifier:
    """Digests and checks passwords under a single password key.

    Attributes:
        _key: The password key.
        _mac: The keyed digest primitive.
    """

    def __init__(self, key: bytes, mac: Optional[IMac] = None) -> None:
        """Initialize the password verifier.

        Args:
            key: The password key, typically loaded from secret storage.
            mac: The keyed digest primitive; defaults to HMAC-SHA512.
        """
        self._key = key
        self._mac = mac or HmacSha512()

    def digest(self, password: str, salt: str) -> str:
        """Produce the stored form of a password.

        Args:
            password: The plaintext password.
            salt: The per-user salt.

        Returns:
            The versioned password digest.
        """
        return encrypt_password(Envelope(content=password, salt=salt), self._key, self._mac)

    def verify(self, password: str, salt: str, reference: str) -> None:
        """Check a plaintext password against its stored digest.

        Args:
            password: The candidate plaintext password.
            salt: The per-user salt.
            reference: The stored digest.

        Raises:
            PasswordMismatchError: If the password does not match.
        """
        try:
            validate_password(
                Envelope(content=password, salt=salt), reference, self._key, self._mac
            )
        except PasswordMismatchError as e:
            logger.debug("password rejected: %s", e.code)
            raise
