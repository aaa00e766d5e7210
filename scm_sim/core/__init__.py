"""
Core game components for the SCM simulator.

This package contains the state the engine transitions between turns:
- Player: Budget, ledger accumulators and pending investments
- Product: Lifecycle, supplier and per-player positions
- GameState: The aggregate handed from turn to turn
"""

from scm_sim.core.player import Player, Settlement, create_player
from scm_sim.core.product import Product, ProductPosition
from scm_sim.core.state import (
    EnvironmentalEvent,
    GameState,
    TradeOffer,
    create_initial_state,
    resize_players,
)

__all__ = [
    "Player",
    "Settlement",
    "create_player",
    "Product",
    "ProductPosition",
    "EnvironmentalEvent",
    "GameState",
    "TradeOffer",
    "create_initial_state",
    "resize_players",
]
