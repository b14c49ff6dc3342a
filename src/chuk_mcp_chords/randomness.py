"""
Injectable random source.

Every probabilistic decision in the engine (template pick, enrichment,
borrowed chord pick, strum jitter, melody choices) draws from one source
passed in by the caller. Anything with a ``random() -> float`` method works;
``random.Random`` is the usual choice, seeded for reproducible output.
"""

from __future__ import annotations

import random as _random
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Minimal random capability: uniform floats in [0, 1)."""

    def random(self) -> float: ...


# Used when a caller does not supply its own source
_default_source = _random.Random()


def resolve(rng: RandomSource | None) -> RandomSource:
    """Return the given source, or the shared unseeded default."""
    return rng if rng is not None else _default_source


def pick(rng: RandomSource, items: Sequence[T]) -> T:
    """Uniform choice from a non-empty sequence."""
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    index = min(int(rng.random() * len(items)), len(items) - 1)
    return items[index]


def sample(rng: RandomSource, items: Sequence[T], count: int) -> list[T]:
    """
    Pick up to ``count`` items without replacement.

    Partial Fisher-Yates shuffle driven by ``rng.random()``.
    """
    pool = list(items)
    count = min(count, len(pool))
    for i in range(count):
        j = i + min(int(rng.random() * (len(pool) - i)), len(pool) - i - 1)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:count]


def chance(rng: RandomSource, probability: float) -> bool:
    """True with the given probability."""
    return rng.random() < probability


def randint(rng: RandomSource, low: int, high: int) -> int:
    """Uniform integer in [low, high] inclusive."""
    return low + min(int(rng.random() * (high - low + 1)), high - low)
