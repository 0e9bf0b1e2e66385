"""Random helpers shared by the generators.

Both take an explicit ``random.Random`` so callers control seeding.
"""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def pick(pool: Sequence[T], rng: random.Random) -> T:
    """Uniform draw (with replacement) of one element of *pool*."""
    if not pool:
        raise IndexError("cannot pick from an empty pool")
    return pool[rng.randrange(len(pool))]


def shuffle(seq: Sequence[T], rng: random.Random) -> list[T]:
    """Unbiased Fisher–Yates permutation of *seq* into a new list.

    *seq* itself is never modified.
    """
    out = list(seq)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out
