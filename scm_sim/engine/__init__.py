"""
Game logic engine for the SCM simulator.

This package contains the turn-resolution logic:
- SeasonCycle / GlobalMarketModel: Season and country demand multipliers
- LifecycleStateMachine: Product stage factors and advances
- EnvironmentalEventGenerator: Single-turn demand shocks
- DemandForecaster / AIStrategyPolicy: The AI competitor's planning
- TradeSettlement: Player-to-player budget transfers
- TurnProcessor: Composes all of the above into one turn
"""

from scm_sim.engine.ai_policy import (
    AIStrategyPolicy,
    OrderingPolicy,
    PendingOrderPolicy,
    build_policy_registry,
    difficulty_coefficient,
)
from scm_sim.engine.events import EnvironmentalEventGenerator
from scm_sim.engine.forecast import DemandForecaster
from scm_sim.engine.lifecycle import LifecycleStateMachine
from scm_sim.engine.market import GlobalMarketModel, SeasonCycle, round_half_up
from scm_sim.engine.trade import TradeResult, settle_trades
from scm_sim.engine.turn import TurnProcessor, TurnReport, advance_turn

__all__ = [
    "AIStrategyPolicy",
    "OrderingPolicy",
    "PendingOrderPolicy",
    "build_policy_registry",
    "difficulty_coefficient",
    "EnvironmentalEventGenerator",
    "DemandForecaster",
    "LifecycleStateMachine",
    "GlobalMarketModel",
    "SeasonCycle",
    "round_half_up",
    "TradeResult",
    "settle_trades",
    "TurnProcessor",
    "TurnReport",
    "advance_turn",
]
