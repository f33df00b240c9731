"""Constant-time comparison of secret-derived text."""

from cryptography.hazmat.primitives import constant_time


def secure_compare(expected: str, actual: str) -> bool:
    """Compare two strings without leaking how many leading bytes match.

    Args:
        expected: The locally recomputed value.
        actual: The value supplied by the caller.

    Returns:
        True if the strings are equal.
    """
    return constant_time.bytes_eq(expected.encode("utf-8"), actual.encode("utf-8"))
