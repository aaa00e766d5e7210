"""
Ordering policies.

Every player carries a kind, and each kind maps to an ordering policy:
- HUMAN: the order submitted between turns (PendingOrderPolicy)
- AI:    an order derived from the demand forecast (AIStrategyPolicy)

The turn processor asks the policy registry for each player's order, so
the settlement loop is the same for both kinds.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Dict, Union

from scm_sim.config import SCMConfig
from scm_sim.engine.forecast import DemandForecaster
from scm_sim.engine.market import round_half_up
from scm_sim.utils.constants import DIFFICULTY_COEFFICIENTS, Difficulty, PlayerKind
from scm_sim.utils.errors import InvalidArgumentError, NotFoundError

if TYPE_CHECKING:
    from scm_sim.core.player import Player
    from scm_sim.core.product import Product
    from scm_sim.core.state import GameState


def difficulty_coefficient(mode: Union[Difficulty, str, float]) -> float:
    """
    Resolve a difficulty mode ('easy', 'normal', 'hard') or a raw
    coefficient to the AI safety-stock coefficient.
    """
    if isinstance(mode, (int, float)) and not isinstance(mode, bool):
        if mode < 0:
            raise InvalidArgumentError(f"Difficulty coefficient must be >= 0, got {mode}")
        return float(mode)
    try:
        return DIFFICULTY_COEFFICIENTS[Difficulty(mode)]
    except ValueError:
        raise InvalidArgumentError(f"Unknown difficulty mode: {mode!r}") from None


class OrderingPolicy:
    """Base class: decides how many units a player orders for a product."""

    def decide(
        self,
        state: "GameState",
        product: "Product",
        player: "Player",
        difficulty: float,
    ) -> int:
        raise NotImplementedError


class PendingOrderPolicy(OrderingPolicy):
    """Human players: whatever was submitted with place_order."""

    def decide(self, state, product, player, difficulty):
        return product.position(player.player_id).order


class AIStrategyPolicy(OrderingPolicy):
    """
    Forecast-driven replenishment for the AI competitor.

    The AI plans against the first seat's inventory, capacity, budget and
    demand history:

        desired = forecast * (1 + slope * difficulty)
        order   = max(0, desired - inventory)
        order   = min(order, capacity, floor(budget / divisor))
    """

    def __init__(self, config: SCMConfig, forecaster: DemandForecaster = None):
        self.safety_stock_slope = config.ai_safety_stock_slope
        self.budget_divisor = config.ai_budget_divisor
        self.forecaster = forecaster or DemandForecaster()

    def compute_order(self, state: "GameState", product_id: int, difficulty: float) -> int:
        """
        Args:
            state: Current game state
            product_id: Product to plan for
            difficulty: Safety-stock coefficient (0.5 easy, 1.0 normal, 2.0 hard)

        Returns:
            Non-negative integer order quantity

        Raises:
            NotFoundError: Unknown product, or no seated player to plan against
        """
        product = state.get_product(product_id)
        if not state.players:
            raise NotFoundError("Player", "seat 0")
        anchor = state.players[0]
        position = product.position(anchor.player_id)

        forecast = self.forecaster.forecast(
            position.demand_history, state.seasonal_factor, product.lifecycle
        )
        desired_inventory = forecast * (1 + self.safety_stock_slope * difficulty)

        order = max(0.0, desired_inventory - position.inventory)
        order = min(
            order,
            anchor.production_capacity,
            math.floor(anchor.budget / self.budget_divisor),
        )
        return max(0, round_half_up(order))

    def decide(self, state, product, player, difficulty):
        return self.compute_order(state, product.product_id, difficulty)


def build_policy_registry(config: SCMConfig) -> Dict[PlayerKind, OrderingPolicy]:
    """PlayerKind -> OrderingPolicy used by the turn processor."""
    return {
        PlayerKind.HUMAN: PendingOrderPolicy(),
        PlayerKind.AI: AIStrategyPolicy(config),
    }
