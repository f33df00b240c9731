"""Base64 encoding utilities.

This module provides the padded, URL-safe base64 codec used for every textual
field of a token and for digest output.
"""

import base64
import binascii

from envelope_auth.exceptions import DecodingError


class Base64:
    """Base64 encoding utilities for URL-safe base64 operations.

    This class provides static methods to encode bytes to padded base64url
    strings and decode base64url strings back to UTF-8 text. The encoding uses
    URL-safe characters (replacing + with - and / with _) and always keeps
    the trailing '=' padding.
    """

    @staticmethod
    def encode(data: bytes) -> str:
        """Encode bytes to a padded URL-safe base64 string.

        Encodes the input bytes using base64url encoding (RFC 4648 Section 5).
        The output length depends only on the input length.

        Args:
            data: The bytes to encode.

        Returns:
            A URL-safe base64 encoded string, padded with '='.

        Example:
            >>> Base64.encode(b"user")
            'dXNlcg=='
        """
        return base64.urlsafe_b64encode(data).decode("ascii")

    @staticmethod
    def decode(base64_str: str) -> str:
        """Decode a padded URL-safe base64 string to text.

        Only canonical padded base64url is accepted: standard-alphabet
        characters, missing padding, stray characters and non-zero trailing
        bits are all rejected. The decoded bytes must also be valid UTF-8.

        Args:
            base64_str: The base64 string to decode.

        Returns:
            The decoded text.

        Raises:
            DecodingError: If the input is malformed base64 or does not
                decode to valid UTF-8. The two causes are not distinguished.

        Example:
            >>> Base64.decode("ZXhwaXJhdGlvbg==")
            'expiration'
        """
        try:
            data = base64.b64decode(
                base64_str.encode("ascii"), altchars=b"-_", validate=True
            )
            # b64decode maps the altchars back, so '+' and '/' slip through
            if Base64.encode(data) != base64_str:
                raise DecodingError("non-canonical base64url")
            return data.decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise DecodingError("invalid base64url text") from e
