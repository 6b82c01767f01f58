"""
Seed sources for the sweep driver.

The sweep seed is drawn once per sweep and exported to every child through
the environment, so all runs of one sweep can be replayed against a known
value.
"""

import random
from abc import ABC, abstractmethod

# Same range as the shell's $RANDOM, so existing test programs see familiar
# values. Two sweeps share a seed with probability 1/32768; pass a larger
# upper bound to SystemSeedSource where that matters.
SEED_MAX = 32767
DEFAULT_SEED_ENV_VAR = "RAND_SEED"


class SeedSource(ABC):
    """Provides the sweep seed."""

    @abstractmethod
    def next_seed(self) -> int:
        """Return the seed for a new sweep"""
        pass


class SystemSeedSource(SeedSource):
    """Draws a fresh seed from the operating system's random source."""

    def __init__(self, upper=SEED_MAX):
        self._rng = random.SystemRandom()
        self._upper = upper

    def next_seed(self) -> int:
        return self._rng.randint(0, self._upper)


class FixedSeedSource(SeedSource):
    """Always returns the pinned seed."""

    def __init__(self, seed: int):
        if seed < 0:
            raise ValueError(f"seed must be >= 0, got {seed}")
        self.seed = seed

    def next_seed(self) -> int:
        return self.seed


def seed_source_for(seed=None) -> SeedSource:
    """Pick the fixed source when a seed is pinned, otherwise system randomness."""
    if seed is None:
        return SystemSeedSource()
    return FixedSeedSource(seed)
