"""HMAC-SHA512 keyed digest implementation.

This module provides the default IMac implementation on top of the
cryptography package.
"""

from typing import Iterable

from cryptography.hazmat.primitives import hashes, hmac

from envelope_auth.exceptions import KeyMaterialError
from envelope_auth.interfaces.crypto import IMac


class HmacSha512(IMac):
    """HMAC with SHA-512, producing 64-byte tags.

    HMAC accepts keys of any length, so the only keys rejected here are those
    that are not bytes-like at all.
    """

    @property
    def digest_length(self) -> int:
        """The length of the raw tag in bytes.

        Returns:
            The digest length (64 bytes).
        """
        return hashes.SHA512.digest_size

    def digest(self, key: bytes, chunks: Iterable[bytes]) -> bytes:
        """Compute the HMAC-SHA512 tag of a sequence of chunks.

        Args:
            key: The secret key material.
            chunks: The message chunks, fed to the MAC in order.

        Returns:
            The 64-byte tag.

        Raises:
            KeyMaterialError: If the key is rejected.
        """
        try:
            mac = hmac.HMAC(key, hashes.SHA512())
        except (TypeError, ValueError) as e:
            raise KeyMaterialError("key rejected by HMAC-SHA512") from e

        for chunk in chunks:
            mac.update(chunk)

        return mac.finalize()
