"""Seeded, platform-independent pseudo-randomness for chart filler values.

The hash and generator are fixed so the same seed string produces the same
stream on every interpreter and machine. Do not swap in ``random``.
"""

from __future__ import annotations

from typing import Iterator, List

UINT32_MASK = 0xFFFFFFFF

LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223


def _utf16_units(value: str) -> Iterator[int]:
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def hash_string(value: str) -> int:
    """Polynomial rolling hash (x31) over UTF-16 code units, wrapped to uint32, never 0."""
    h = 0
    for unit in _utf16_units(value):
        h = (h * 31 + unit) & UINT32_MASK
    return h or 1


def lcg_stream(seed: int) -> Iterator[int]:
    state = seed & UINT32_MASK
    while True:
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & UINT32_MASK
        yield state


def seeded_values(seed: str, count: int, base: int = 35, spread: int = 60) -> List[int]:
    stream = lcg_stream(hash_string(seed))
    return [base + next(stream) % spread for _ in range(max(count, 0))]
