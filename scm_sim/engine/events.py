"""
Environmental event generator.

At most one event per turn; it scales realized demand for every product
and every player by the same factor and is gone the next turn.
"""
from typing import List, Optional

from scm_data.data_models import EventSpec
from scm_sim.utils.rng import RandomSource


class EnvironmentalEventGenerator:
    """Rolls the turn's shock from a fixed event table."""

    def __init__(self, events: List[EventSpec], probability: float = 0.1):
        self.events = list(events)
        self.probability = probability

    def roll(self, rng: RandomSource) -> Optional[EventSpec]:
        """
        One uniform draw decides whether an event fires; a second picks
        which one, uniformly.
        """
        if not self.events:
            return None
        if rng.chance(self.probability):
            return rng.choice(self.events)
        return None

    @staticmethod
    def demand_factor(event: Optional[EventSpec]) -> float:
        return event.demand_factor if event is not None else 1.0
