"""
Product lifecycle state machine.

Stages only move forward: introduction -> growth -> maturity -> decline.
Decline is terminal.
"""
from scm_sim.utils.constants import LIFECYCLE_FACTORS, LifecycleStage
from scm_sim.utils.rng import RandomSource


class LifecycleStateMachine:
    """Demand factors per stage and the stochastic stage advance."""

    def __init__(self, advance_probability: float = 0.1):
        self.advance_probability = advance_probability

    @staticmethod
    def demand_factor(stage: LifecycleStage) -> float:
        """growth - decline for the stage."""
        growth, decline = LIFECYCLE_FACTORS[stage]
        return growth - decline

    @staticmethod
    def next_stage(stage: LifecycleStage) -> LifecycleStage:
        if stage == LifecycleStage.DECLINE:
            return stage
        return LifecycleStage(stage + 1)

    def roll(self, stage: LifecycleStage, rng: RandomSource) -> LifecycleStage:
        """Draws once per call, including at decline."""
        if rng.chance(self.advance_probability):
            return self.next_stage(stage)
        return stage
