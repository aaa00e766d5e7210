"""
Seedable randomness source for the turn transition.

All stochastic mechanics (environmental events, lifecycle advances and
exchange-rate jitter) draw through a RandomSource handed to the turn
processor, so a fixed seed reproduces a game exactly.
"""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class RandomSource:
    """
    Thin wrapper over a private ``random.Random`` instance.

    Subclass and override ``random``/``uniform``/``choice`` to script draws
    in tests.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return self._rng.random()

    def uniform(self, low: float, high: float) -> float:
        return self._rng.uniform(low, high)

    def choice(self, options: Sequence[T]) -> T:
        return self._rng.choice(options)

    def chance(self, probability: float) -> bool:
        """True with the given probability (one draw)."""
        return self.random() < probability

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state):
        self._rng.setstate(state)

