"""Cryptographic interfaces for envelope-auth.

This module defines the protocol for the keyed message-authentication
primitive that envelopes are signed with.
"""

from __future__ import annotations

from typing import Iterable, Protocol


class IMac(Protocol):
    """Interface for keyed message-authentication operations."""

    def digest(self, key: bytes, chunks: Iterable[bytes]) -> bytes:
        """Compute the authentication tag of a sequence of chunks.

        The chunks are fed into the MAC state one after another, in order.
        Identical keys and chunks always produce identical tags.

        Args:
            key: The secret key material.
            chunks: The message chunks to authenticate.

        Returns:
            The raw authentication tag.

        Raises:
            KeyMaterialError: If the key is rejected by the primitive.
        """
        ...
