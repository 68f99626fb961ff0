"""Short ID generation

Short IDs are drawn uniformly from a fixed Base62 alphabet. Generation is
not cryptographically secure; uniqueness against the backend is the
manager's concern.

Functions:
    generate_random_id(length=4) -> str
        Draw a single random short ID.
    generate_unique_ids(count, length) -> list[str]
        Draw up to `count` distinct short IDs.

Example:
    >>> from shortlinks.manager.id_generator import generate_unique_ids
    >>> ids = generate_unique_ids(50, 4)
    >>> len(ids), len(set(ids))
    (50, 50)
"""

import random
import string


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
ATTEMPTS_PER_ID = 100


def generate_random_id(length: int = 4) -> str:
    """Draw `length` characters independently and uniformly from ALPHABET

    Raises:
        ValueError: if length is not a positive integer.
    """
    if length < 1:
        raise ValueError(f'Short ID length must be a positive integer (given value: {length}).')
    return ''.join(random.choices(ALPHABET, k=length))


def generate_unique_ids(count: int, length: int) -> list[str]:
    """Draw distinct random short IDs of the given length

    Draws until `count` distinct IDs are collected or `count * 100` draws are
    spent, whichever comes first. The result keeps generation order and may
    hold fewer than `count` IDs when `length` is small relative to `count`.

    Args:
        count (int):
            Number of distinct IDs wanted.
        length (int):
            Length of each ID.

    Returns:
        list[str]: distinct IDs in generation order.
    """
    ids: dict[str, None] = {}  # insertion-ordered set
    draws = 0
    while len(ids) < count and draws < count * ATTEMPTS_PER_ID:
        ids[generate_random_id(length)] = None
        draws += 1
    return list(ids)
