"""Deterministic pseudo-random stream used for daily selection.

Mulberry32: a 32-bit state advanced by a fixed odd increment, then mixed
with xor/multiply/shift. Output depends only on (seed, call count), so
every device derives the same daily set for the same day.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0
_INCREMENT = 0x6D2B79F5

Rng = Callable[[], float]


class Mulberry32:
    """Callable generator returning floats in [0, 1)."""

    def __init__(self, seed: int) -> None:
        self._state = seed & UINT32_MASK

    def __call__(self) -> float:
        self._state = (self._state + _INCREMENT) & UINT32_MASK
        t = self._state
        t = ((t ^ (t >> 15)) * (t | 1)) & UINT32_MASK
        t ^= (t + ((t ^ (t >> 7)) * (t | 61))) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_SCALE


def create_rng(seed: int) -> Rng:
    return Mulberry32(seed)


def seeded_shuffle(items: Sequence[T], rng: Rng) -> list[T]:
    """Return a Fisher–Yates shuffled copy of items, driven by rng."""
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = int(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out
