"""Deterministic random sources.

Two streams exist and every random draw in the arcade uses one of them:

``LayoutRandom``
    The layout stream: a linear congruential generator whose recurrence
    ``state' = (state * 9301 + 49297) mod 233280`` must stay bit-exact so
    that a seed always produces the same parameters and the same layout.

``DeterministicRNG``
    The auxiliary stream: a stateless domain-separated hash
    ``Hash(seed, domain, entity, tick)`` used where a draw must not disturb
    the layout stream (flavour text, enemy fire, starfield, autopilot).
"""

from __future__ import annotations

import struct

import xxhash

from daily_arcade.core.enums import Domain

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280


def lcg_next(state: int) -> tuple[float, int]:
    """Advance the layout LCG once. Returns ``(value in [0, 1), new_state)``."""
    new_state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
    return new_state / LCG_MODULUS, new_state


class LayoutRandom:
    """Handle owning a running layout-LCG state.

    The initial seed is kept so ``restart()`` can replay the exact same
    sequence, which is how engines rebuild an identical layout on reset.
    """

    __slots__ = ("_seed", "_state", "_draws")

    def __init__(self, seed: int) -> None:
        self._seed = int(seed)
        self._state = self._seed
        self._draws = 0

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> int:
        """Current generator state (the last value written back by the source)."""
        return self._state

    @property
    def draws(self) -> int:
        return self._draws

    def next(self) -> float:
        """Return the next float in [0.0, 1.0)."""
        value, self._state = lcg_next(self._state)
        self._draws += 1
        return value

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return low + self.next() * (high - low)

    def below(self, count: int) -> int:
        """Return an index in ``range(count)``."""
        return int(self.next() * count)

    def restart(self) -> None:
        self._state = self._seed
        self._draws = 0


class DeterministicRNG:
    """Stateless domain-separated pseudo-random number generator.

    Each call is a pure function of (seed, domain, entity_id, tick) —
    no internal mutable state, so ``render`` may draw from it freely.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: int) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, domain: Domain, entity_id: int, tick: int) -> int:
        payload = struct.pack("<qiqi", self._seed, domain.value, entity_id, tick)
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain, entity_id: int, tick: int) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain, entity_id, tick) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, entity_id: int, tick: int, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        f = self.next_float(domain, entity_id, tick)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, entity_id: int, tick: int, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain, entity_id, tick) < probability

    def choice(self, domain: Domain, entity_id: int, tick: int, options: list | tuple):
        """Pick one element of a non-empty sequence."""
        return options[self.next_int(domain, entity_id, tick, 0, len(options) - 1)]
