"""Deterministic, platform-independent pseudo-random numbers.

`PseudoRandom` is a tiny counter-based generator: every draw increments the
seed and hashes it with integer-only arithmetic, so a given seed yields the
same sequence on every platform and Python version. Python integers never
overflow, so cubing the scaled seed is exact for any seed size.

Usage:
    from tilewave.util.rng import PseudoRandom

    rng = PseudoRandom(1234)
    rng.next_float()      # in [0, 1)
    rng.next_float(2.5)   # in [0, 2.5)
    rng.next_int(6)       # in {0, ..., 5}

System entropy is only consulted when no seed (or a falsy seed) is given, and
the drawn seed is kept on the instance so the run can be replayed.
"""

from __future__ import annotations

import logging
import math
from random import SystemRandom

from tilewave import config
from tilewave.types import RandomSeed

logger = logging.getLogger(__name__)

_system_random = SystemRandom()


class PseudoRandom:
    """Counter-based generator: `(seed * M)^3 mod N / N` per draw."""

    def __init__(self, seed: RandomSeed = None) -> None:
        self.seed: int = 0
        self.set_seed(seed)

    def set_seed(self, seed: RandomSeed = None) -> int:
        """Set the seed, drawing a fresh one from system entropy if falsy.

        Returns:
            The seed now in effect.
        """
        if not seed:
            seed = _system_random.randint(1, config.PRNG_MAX_SEED)
            logger.debug(f"No seed supplied, drew {seed} from system entropy")
        self.seed = int(seed)
        return self.seed

    def next_float(self, max: float | None = None) -> float:
        """Advance and return a float in [0, max), or [0, 1) without `max`."""
        self.seed += 1
        scaled = self.seed * config.PRNG_MULTIPLIER
        r = (scaled * scaled * scaled % config.PRNG_MODULUS) / config.PRNG_MODULUS
        if max is None:
            return r
        return r * max

    def next_int(self, max: int) -> int:
        """Advance and return an integer in [0, max)."""
        return math.floor(self.next_float(max))

    def __repr__(self) -> str:
        return f"PseudoRandom(seed={self.seed})"
