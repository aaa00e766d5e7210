"""
Observation encoder for the SCM simulator.

Translates a GameState snapshot into numpy arrays for charting and
reporting collaborators.

Output shapes (P = seated players, N = products, T = turns a player has
been settled):
  ledger        [P, 10]  per-player budget, score, capacity, accumulators
  inventory     [N, P]   current inventory per product and player
  demand series [T*P]    per product, every realized demand in order
  player demand [P, T]   per product, left-padded with NaN for late joiners
"""
from __future__ import annotations

from typing import Dict, List

import numpy as np

from scm_sim.core.state import GameState


class StateObservation:
    """
    Encodes snapshots into arrays. Stateless; one instance can serve every
    snapshot of a session.
    """

    LEDGER_FIELDS = (
        "budget",
        "score",
        "production_capacity",
        "revenue",
        "expenses",
        "holding_cost",
        "stockout_penalty",
        "order_cost",
        "foreign_exchange_gain",
        "net_profit",
    )
    LEDGER_DIM = len(LEDGER_FIELDS)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encode(self, state: GameState) -> Dict[str, np.ndarray]:
        """
        Returns:
            Dict with keys 'ledger' (P, 10), 'inventory' (N, P) and
            'scores' (P + 1,) where the last entry is the AI score.
        """
        return {
            "ledger": self.encode_ledger(state),
            "inventory": self.encode_inventory(state),
            "scores": self.encode_scores(state),
        }

    def encode_ledger(self, state: GameState) -> np.ndarray:
        ledger = np.zeros((len(state.players), self.LEDGER_DIM), dtype=np.float64)
        for row, player in enumerate(state.players):
            ledger[row] = [getattr(player, name) for name in self.LEDGER_FIELDS]
        return ledger

    def encode_inventory(self, state: GameState) -> np.ndarray:
        inventory = np.zeros((len(state.products), len(state.players)), dtype=np.float64)
        for row, product in enumerate(state.products):
            for col, player in enumerate(state.players):
                inventory[row, col] = product.position(player.player_id).inventory
        return inventory

    def encode_scores(self, state: GameState) -> np.ndarray:
        scores = [p.score for p in state.players] + [state.ai_score]
        return np.asarray(scores, dtype=np.float64)

    def demand_series(self, state: GameState) -> Dict[str, np.ndarray]:
        """Product name -> every realized demand, in settlement order."""
        return {
            product.name: np.asarray(product.demand_history, dtype=np.int64)
            for product in state.products
        }

    def player_demand_matrix(self, state: GameState, product_id: int) -> np.ndarray:
        """
        [P, T] demand per seated player; players seated after the first turn
        are left-padded with NaN so columns line up by turn.
        """
        product = state.get_product(product_id)
        histories: List[List[int]] = [
            product.position(p.player_id).demand_history for p in state.players
        ]
        width = max((len(h) for h in histories), default=0)
        matrix = np.full((len(histories), width), np.nan, dtype=np.float64)
        for row, history in enumerate(histories):
            if history:
                matrix[row, width - len(history):] = history
        return matrix

    def financial_report(self, state: GameState, player_id: int) -> Dict[str, float]:
        return state.get_player(player_id).get_financial_report()
