"""Shortcode generation utility

This module provides a helper function for generating short, random,
URL-safe identifiers for shortened links.

Functions:
    generate_shortcode(length=6):
        Generate a random Base62 string suitable for use as a URL slug.

Example:
    >>> from urlshort.utils import generate_shortcode
    >>> generate_shortcode()
    'aZ3k9Q'
"""

import random
import string
import time

from urlshort.utils.constants import SHORTCODE_LENGTH


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = SHORTCODE_LENGTH) -> str:
    """Generate a random shortcode from the Base62 alphabet.

    Characters are sampled uniformly with replacement. Every call builds its
    own random source seeded from the nanosecond clock, so no generator state
    is shared between concurrent requests.

    Args:
        length (int, optional):
            Exact length of the resulting shortcode.
            Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode.

    Example:
        >>> generate_shortcode(length=6)
        'Gh71WP'

    NOTE:
        - Output is NOT guaranteed to be unique. Callers rely on the
          set-if-absent semantics of the data store to detect collisions
          (see the shorten_url lambda).
        - The alphabet is Base62 safe: [a-zA-Z0-9].
    """
    if not isinstance(length, int):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length <= 0:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    rng = random.Random(time.time_ns())  # noqa: S311
    return ''.join(rng.choice(ALPHABET) for _ in range(length))
