"""Envelope message type for envelope-auth.

This module defines the Envelope, the (content, salt) pair that is signed as a
unit by the keyed digest.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from envelope_auth.crypto import HmacSha512
from envelope_auth.encoding import Base64
from envelope_auth.interfaces.crypto import IMac


@dataclass(frozen=True)
class Envelope:
    """Content and salt to be signed with a keyed digest.

    Envelopes are built immediately before signing and discarded afterwards;
    nothing about them is persisted. For passwords the content is the
    plaintext password and the salt is the per-user salt. For tokens the
    content is the encoded identifier and expiration, and the salt is a
    policy-defined constant.

    Attributes:
        content: The text to authenticate.
        salt: Text mixed in after the content to bind the digest to a context.
    """

    content: str
    salt: str

    def sign(self, key: bytes, mac: Optional[IMac] = None) -> str:
        """Compute the base64url-encoded keyed digest of the envelope.

        The content bytes and then the salt bytes are fed to the MAC as two
        sequential updates. The same content, salt and key always give the
        same output, which is what verification relies on.

        Args:
            key: The secret key material. It is never retained.
            mac: The keyed digest primitive; defaults to HMAC-SHA512.

        Returns:
            The padded base64url encoding of the digest.

        Raises:
            KeyMaterialError: If the key is rejected by the MAC primitive.
        """
        mac = mac or HmacSha512()
        tag = mac.digest(key, (self.content.encode("utf-8"), self.salt.encode("utf-8")))
        return Base64.encode(tag)
