"""Short identifier generation.

Identifiers are meant to be typed by hand (`workout-recovery remove aB3x`), so
they are short and drawn from ASCII letters and digits. With tens of entries
a collision is rare; we simply redraw until the id is unused.
"""

from __future__ import annotations

import random
import string
from collections.abc import Container

ID_ALPHABET = string.ascii_letters + string.digits
DEFAULT_ID_LENGTH = 4


def generate_id(
    used_ids: Container[str],
    rng: random.Random,
    *,
    length: int = DEFAULT_ID_LENGTH,
) -> str:
    """Return a random alphanumeric id not present in ``used_ids``.

    :param used_ids: Identifiers already taken.
    :param random.Random rng: Random source (inject a seeded one in tests).
    :param int length: Number of characters in the id.
    :raises ValueError: If length is not positive.
    :return str: A fresh identifier.
    """
    if length <= 0:
        raise ValueError(f"id length must be positive, got {length}")
    while True:
        candidate = "".join(rng.choice(ID_ALPHABET) for _ in range(length))
        if candidate not in used_ids:
            return candidate
