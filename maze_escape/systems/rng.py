"""Domain-separated deterministic RNG using xxhash.

Every random draw in the game is a pure function of
(seed, domain, key, tick, salt), so two sessions started from the same seed
and fed the same inputs evolve identically.

Formula: RNG_Value = Hash(Seed, Domain, Key, Tick, Salt)
"""

from __future__ import annotations

import struct

import xxhash

from maze_escape.core.enums import Domain

_INV_2_53 = 1.0 / (1 << 53)


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    No internal mutable state: draws never depend on call order, only on the
    coordinates passed in.  ``key`` is usually a cell index or entity id,
    ``salt`` separates several draws made for the same key in the same tick.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed & self._MAX_UINT64

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, key: int, tick: int, salt: int) -> int:
        payload = struct.pack("<QiqqI", self._seed, int(domain), key, tick, salt)
        return xxhash.xxh64(payload).intdigest()

    def fork(self, stream: int) -> DeterministicRNG:
        """Return an independent generator for *stream* (e.g. one per level)."""
        return DeterministicRNG(xxhash.xxh64(struct.pack("<QQ", self._seed, stream)).intdigest())

    def next_float(self, domain: Domain, key: int, tick: int, salt: int = 0) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        # top 53 bits: every value is exact in a double, so 1.0 is unreachable
        return (self._hash(domain, key, tick, salt) >> 11) * _INV_2_53

    def next_int(self, domain: Domain, key: int, tick: int, low: int, high: int, salt: int = 0) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, key, tick, salt)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, key: int, tick: int, probability: float = 0.5, salt: int = 0) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, key, tick, salt) < probability
