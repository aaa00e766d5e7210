"""
Player state and ledger operations for the SCM simulator.

Manages a single player's state including:
- Budget (ceiling only, may go negative)
- Operating accumulators (revenue, holding cost, stockout penalty, order cost)
- Long-term investments (R&D, facility) pending for the current turn
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any

from scm_sim.utils.constants import PlayerKind


@dataclass(frozen=True)
class Settlement:
    """
    Outcome of one product position for one turn.

    Produced by the turn processor for seated players and for the shadow
    AI alike; only seated players book it into their ledger.
    """
    demand: int
    order: float
    new_inventory: float
    revenue: float
    holding_cost: float
    stockout_penalty: float
    order_cost: float

    @property
    def operating_costs(self) -> float:
        return self.holding_cost + self.stockout_penalty + self.order_cost

    @property
    def net(self) -> float:
        """Operating result that feeds the score."""
        return self.revenue - self.operating_costs


@dataclass
class Player:
    """
    Represents one participant in the supply-chain game.

    Invariants upheld by the ledger methods:
    - expenses == holding_cost + stockout_penalty + order_cost
                  + every R&D and facility investment applied so far
    - score == revenue - holding_cost - stockout_penalty - order_cost
    """
    player_id: int
    kind: PlayerKind = PlayerKind.HUMAN

    # Economy
    budget: float = 0.0
    score: float = 0.0
    production_capacity: int = 0

    # Ledger accumulators
    revenue: float = 0.0
    expenses: float = 0.0
    holding_cost: float = 0.0
    stockout_penalty: float = 0.0
    order_cost: float = 0.0
    foreign_exchange_gain: float = 0.0

    # Pending this turn
    rd_investment: float = 0.0
    facility_investment: float = 0.0

    @property
    def is_ai(self) -> bool:
        return self.kind == PlayerKind.AI

    @property
    def net_profit(self) -> float:
        return self.revenue - self.expenses

    # ===== Ledger =====

    def book_settlement(self, settlement: Settlement, budget_ceiling: float):
        """
        Book one product position's outcome.

        The budget only sees cash flows (order cost out, revenue in); holding
        cost and stockout penalty hit the accumulators and the score.
        """
        self.budget = min(
            self.budget - settlement.order_cost + settlement.revenue,
            budget_ceiling,
        )
        self.revenue += settlement.revenue
        self.expenses += settlement.operating_costs
        self.holding_cost += settlement.holding_cost
        self.stockout_penalty += settlement.stockout_penalty
        self.order_cost += settlement.order_cost
        self.score += settlement.net

    def book_fx_gain(self, revenue: float, jitter: float):
        """Exchange-rate gain (or loss) on revenue; jitter is a signed fraction."""
        self.foreign_exchange_gain += revenue * jitter

    def apply_investments(self, investment_per_capacity: int) -> float:
        """
        Consume pending R&D and facility investment.

        Capacity grows by one per full ``investment_per_capacity`` of
        facility spend. Score is left untouched.

        Returns:
            Total amount spent
        """
        spent = self.rd_investment + self.facility_investment
        self.production_capacity += int(self.facility_investment // investment_per_capacity)
        self.budget -= spent
        self.expenses += spent
        self.rd_investment = 0.0
        self.facility_investment = 0.0
        return spent

    # ===== Utilities =====

    def get_financial_report(self) -> Dict[str, float]:
        """Financial statement as shown to the player."""
        return {
            "revenue": self.revenue,
            "expenses": self.expenses,
            "net_profit": self.net_profit,
            "holding_cost": self.holding_cost,
            "stockout_penalty": self.stockout_penalty,
            "order_cost": self.order_cost,
            "rd_investment": self.rd_investment,
            "facility_investment": self.facility_investment,
            "foreign_exchange_gain": self.foreign_exchange_gain,
        }

    def get_state_dict(self) -> Dict[str, Any]:
        """Get player state as dictionary."""
        state = asdict(self)
        state["kind"] = self.kind.value
        return state


def create_player(player_id: int, config, kind: PlayerKind = PlayerKind.HUMAN) -> Player:
    """
    Factory for a freshly seated player.

    Args:
        player_id: Stable player identity
        config: SCMConfig supplying starting budget and capacity
        kind: Human or AI

    Returns:
        Player with zeroed accumulators
    """
    return Player(
        player_id=player_id,
        kind=kind,
        budget=config.starting_budget,
        production_capacity=config.starting_capacity,
    )
