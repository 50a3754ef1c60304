"""Shortcode generation utility

This module provides a helper function for generating short, random,
base62-safe identifiers suitable for use as URL slugs.

Functions:
    generate_shortcode(length=7):
        Generate a random shortcode of exactly `length` characters.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> generate_shortcode()
    'q3ZbT0x'
"""

import string
import uuid

from linkshortener.constants import Shortcode


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = Shortcode.DEFAULT_LENGTH) -> str:
    """Generate a random base62 shortcode.

    A random 128-bit value (UUID4) is encoded into base62 and truncated to the
    requested length. UUID4 carries 122 random bits, so shortcodes of any
    allowed length are spread close to uniformly over the base62 space.

    Args:
        length (int, optional):
            Exact length of the resulting shortcode.
            Defaults to 7 (62**7 ~ 3.5 trillion candidates).
            Must be within [6, 22].

    Returns:
        str: A random alphanumeric shortcode.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is outside of [6, 22].

    Example:
        >>> len(generate_shortcode(length=10))
        10

    NOTE:
        - Collisions are possible; callers must check the shortcode is free
          before committing it (see ShortenerService).
        - The alphabet is Base62 safe: [a-zA-Z0-9].
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if not Shortcode.MIN_LENGTH <= length <= Shortcode.MAX_LENGTH:
        raise ValueError(
            f'Length must be between {Shortcode.MIN_LENGTH} and {Shortcode.MAX_LENGTH} (given value: {length}).'
        )

    value = uuid.uuid4().int

    # Base62 encode the lowest `length` digits, most significant digit first
    return ''.join(reversed([ALPHABET[(value // BASE**i) % BASE] for i in range(length)]))
