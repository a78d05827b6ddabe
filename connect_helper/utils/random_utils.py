"""
Random string generation with an explicit entropy source.

The primary source is the operating system CSPRNG. If the platform has no
such source, a SHA-256 digest of a uuid4 is used instead; that fallback is
weaker and callers can see which path produced a value.
"""

import hashlib
import math
import os
import uuid
from typing import NamedTuple

from ..constants import Limits, RandomSource
from .logger import get_logger

logger = get_logger()


class RandomString(NamedTuple):
    """A generated random string and the source that produced it."""

    value: str
    source: RandomSource


def _urandom_hex(length: int) -> str:
    byte_count = int(math.ceil(length / 2))
    return os.urandom(byte_count).hex()


def _uuid4_hex(length: int) -> str:
    return hashlib.sha256(str(uuid.uuid4()).encode("utf-8")).hexdigest()[:length]


def generate_random_string(length: int = Limits.DEFAULT_RANDOM_LENGTH) -> RandomString:
    """
    Generate a hex string of roughly ``length`` characters.

    The CSPRNG path reads ``ceil(|length| / 2)`` bytes, so odd lengths yield
    one extra character. The fallback path returns exactly ``|length|``
    characters, capped at 64.

    Args:
        length: Requested length; negative values use their absolute value

    Returns:
        RandomString with the value and the entropy source used
    """
    length = abs(int(length))

    try:
        return RandomString(_urandom_hex(length), RandomSource.URANDOM)
    except NotImplementedError:
        logger.warning(
            "OS entropy source unavailable, falling back to uuid4 digest",
            extra={"length": length},
        )
        return RandomString(_uuid4_hex(length), RandomSource.UUID4_SHA256)
