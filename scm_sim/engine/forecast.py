"""
Demand forecaster.

forecast = mean(history) * seasonal factor * (1 + lifecycle factor)

Environmental events are never forecast; they only hit realized demand.
"""
from typing import Sequence

import numpy as np

from scm_sim.engine.lifecycle import LifecycleStateMachine
from scm_sim.utils.constants import LifecycleStage


class DemandForecaster:
    """Planning forecast from a demand history, season and lifecycle stage."""

    @staticmethod
    def average_demand(history: Sequence[float]) -> float:
        """Mean of the history; 0 for an empty history."""
        if len(history) == 0:
            return 0.0
        return float(np.mean(history))

    def forecast(
        self,
        history: Sequence[float],
        seasonal_factor: float,
        stage: LifecycleStage,
    ) -> float:
        lifecycle_factor = LifecycleStateMachine.demand_factor(stage)
        return self.average_demand(history) * seasonal_factor * (1.0 + lifecycle_factor)
