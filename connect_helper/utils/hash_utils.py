"""
Hash utilities for API key comparison and display.

API keys may be stored as ``"<label>|<secret>"``. Only the secret part is
hashed so the same secret produces the same digest regardless of its label.
"""

import hashlib

API_KEY_SEPARATOR = "|"


def sha256_hex(value: str) -> str:
    """Return the hex SHA-256 digest of a UTF-8 string."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def extract_api_key_secret(api_key: str) -> str:
    """
    Return the secret part of an API key.

    Args:
        api_key: Raw API key, optionally prefixed with a label and ``|``

    Returns:
        Substring after the first separator, or the whole key
    """
    if API_KEY_SEPARATOR in api_key:
        return api_key.split(API_KEY_SEPARATOR, 1)[1]
    return api_key


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key for comparison.

    An empty key yields an empty string rather than the digest of ``""``.
    A key ending in the separator hashes the empty secret.
    """
    if not api_key:
        return ""
    return sha256_hex(extract_api_key_secret(api_key))
