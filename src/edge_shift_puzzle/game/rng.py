"""Seeded Mulberry32 stream with an explicit state-in/state-out interface.

Every call takes the current 32-bit state and returns the next state along
with the drawn value, so the caller owns the stream and can replay it from
the seed alone.
"""

from __future__ import annotations

from typing import Sequence, Tuple, TypeVar

import numpy as np

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_DIVISOR = 4294967296.0


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def seed_state(seed: int) -> int:
    """Reduce any integer seed to a 32-bit RNG state."""
    return int(seed) & MASK32


def random_seed() -> int:
    """Sample a fresh 32-bit seed from OS entropy."""
    return int(np.random.default_rng().integers(0, MASK32 + 1, dtype=np.uint64))


def mulberry32_step(state: int) -> Tuple[int, int]:
    t = (state + _INCREMENT) & MASK32
    r = _imul(t ^ (t >> 15), t | 1)
    r ^= (r + _imul(r ^ (r >> 7), r | 61)) & MASK32
    r = (r ^ (r >> 14)) & MASK32
    return t, r


def next_float(state: int) -> Tuple[int, float]:
    """Return (new_state, value) with value uniform in [0, 1)."""
    state, r = mulberry32_step(state)
    return state, r / _DIVISOR


def next_int(state: int, upper: int) -> Tuple[int, int]:
    """Return (new_state, value) with value uniform in [0, upper)."""
    if upper <= 0:
        raise ValueError(f"upper bound must be positive, got {upper}")
    state, value = next_float(state)
    return state, int(value * upper)


def choice(state: int, items: Sequence[T]) -> Tuple[int, T]:
    state, index = next_int(state, len(items))
    return state, items[index]
