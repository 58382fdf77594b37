"""
Deterministic reward generator.

Purpose
-------
A seedable pseudo-random source for rewards that must be reproducible from
a stable identifier: the same opponent id always yields the same gold, and
the same boss id always yields the same boss level, on every client.

Design Notes
------------
- Seeds come from `stable_hash`, a 64-bit FNV-1a over the identifier's
  UTF-8 bytes. Python's built-in `hash()` is salted per process and cannot
  be used here.
- The generator is the classic LCG
  `state = (state * 1103515245 + 12345) mod 2**31`.
- This generator is only for reproducible rewards. Battle outcome rolls use
  a separate `random.Random`; the two never share state, otherwise results
  would be predictable from the opponent id.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from focusquest.modules.shared.constants import (
    FNV64_OFFSET_BASIS,
    FNV64_PRIME,
    LCG_INCREMENT,
    LCG_MODULUS,
    LCG_MULTIPLIER,
)

T = TypeVar("T")

_MASK_64 = (1 << 64) - 1


def stable_hash(identifier: str) -> int:
    """
    64-bit FNV-1a hash of `identifier` encoded as UTF-8.

    >>> stable_hash("")
    14695981039346656037
    >>> stable_hash("a")
    12638187200555641996
    """
    value = FNV64_OFFSET_BASIS
    for byte in identifier.encode("utf-8"):
        value ^= byte
        value = (value * FNV64_PRIME) & _MASK_64
    return value


class SeededRandom:
    """
    Linear congruential generator seeded from an integer.

    Each call to `next()` advances the state once; `randint` and `choice`
    consume exactly one step.
    """

    def __init__(self, seed: int) -> None:
        self._state = seed % LCG_MODULUS

    @classmethod
    def from_identifier(cls, identifier: str) -> "SeededRandom":
        return cls(stable_hash(identifier))

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> int:
        """Advance and return the new state in [0, 2**31)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state

    def random(self) -> float:
        """Float in [0, 1)."""
        return self.next() / LCG_MODULUS

    def randint(self, low: int, high: int) -> int:
        """Integer in the inclusive range [low, high]."""
        if high < low:
            raise ValueError(f"empty range for randint({low}, {high})")
        return low + self.next() % (high - low + 1)

    def choice(self, seq: Sequence[T]) -> T:
        if not seq:
            raise IndexError("cannot choose from an empty sequence")
        return seq[self.next() % len(seq)]
