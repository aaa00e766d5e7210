"""
Turn Processor for the SCM simulator.

Resolves one turn, in this fixed order:
1. Advance the turn counter, set the season, roll the environmental event
2. Settle every product position of every seated player
3. Roll each product's lifecycle advance
4. Settle the shadow AI competitor against the first seat
5. Apply pending R&D and facility investments
6. Settle queued trade offers, then clear the queue

The processor works on a deep copy of the input state. Any error raised
along the way discards the copy, so the caller's state is never changed.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from scm_data import SCMDataLoader
from scm_data.data_models import EventSpec, Supplier
from scm_sim.config import SCMConfig
from scm_sim.core.player import Settlement
from scm_sim.core.product import Product
from scm_sim.core.state import GameState
from scm_sim.engine.ai_policy import OrderingPolicy, build_policy_registry, difficulty_coefficient
from scm_sim.engine.events import EnvironmentalEventGenerator
from scm_sim.engine.lifecycle import LifecycleStateMachine
from scm_sim.engine.market import GlobalMarketModel, SeasonCycle, round_half_up
from scm_sim.engine.trade import TradeResult, settle_trades
from scm_sim.utils.constants import Difficulty, LifecycleStage, PlayerKind, Season
from scm_sim.utils.errors import NotFoundError
from scm_sim.utils.rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class TurnReport:
    """What happened during one turn, for collaborators that display it."""
    turn: int
    season: Season
    event: Optional[EventSpec] = None
    settlements: Dict[Tuple[int, int], Settlement] = field(default_factory=dict)
    """(product_id, player_id) -> settlement of a seated player"""
    lifecycle_changes: Dict[int, Tuple[LifecycleStage, LifecycleStage]] = field(default_factory=dict)
    """product_id -> (old stage, new stage), only for products that advanced"""
    ai_settlements: Dict[int, Settlement] = field(default_factory=dict)
    """product_id -> shadow AI settlement"""
    investments: Dict[int, float] = field(default_factory=dict)
    """player_id -> R&D + facility spend applied"""
    trade_results: List[TradeResult] = field(default_factory=list)

    @property
    def dropped_trades(self) -> List[TradeResult]:
        return [r for r in self.trade_results if not r.accepted]


class TurnProcessor:
    """
    Composes the market, lifecycle, event, AI, ledger and trade models
    into one state transition per turn.
    """

    def __init__(
        self,
        config: Optional[SCMConfig] = None,
        data_loader: Optional[SCMDataLoader] = None,
        policies: Optional[Dict[PlayerKind, OrderingPolicy]] = None,
    ):
        """
        Initialize the turn processor.

        Args:
            config: Game configuration
            data_loader: Catalog source for suppliers, countries and events
            policies: PlayerKind -> OrderingPolicy override
        """
        self.config = config or SCMConfig()
        self.data_loader = data_loader or SCMDataLoader(self.config.data_dir)

        self.market = GlobalMarketModel(self.data_loader.get_all_countries())
        self.lifecycle = LifecycleStateMachine(self.config.lifecycle_advance_probability)
        self.event_generator = EnvironmentalEventGenerator(
            self.data_loader.get_all_events(), self.config.event_probability
        )
        self.policies = policies or build_policy_registry(self.config)

    # ===== Public API =====

    def process(
        self,
        state: GameState,
        rng: RandomSource,
        difficulty: Union[Difficulty, str, float] = Difficulty.NORMAL,
    ) -> Tuple[GameState, TurnReport]:
        """
        Resolve one turn.

        Args:
            state: Current state (not modified)
            rng: Source of every random draw made this turn
            difficulty: AI difficulty mode or raw coefficient

        Returns:
            (next state, turn report)

        Raises:
            NotFoundError: A product references an unknown supplier, or a
                           product is missing a seated player's position
        """
        coefficient = difficulty_coefficient(difficulty)
        work = state.copy()

        # 1. Turn, season, event
        work.turn += 1
        work.current_season = SeasonCycle.season_for_turn(work.turn)
        work.environmental_event = self.event_generator.roll(rng)

        report = TurnReport(
            turn=work.turn,
            season=work.current_season,
            event=work.environmental_event,
        )
        logger.info(
            "Turn %d (%s)%s", work.turn, work.current_season.value,
            f", event: {work.environmental_event.name}" if work.environmental_event else "",
        )

        suppliers = {p.product_id: self._resolve_supplier(p) for p in work.products}

        # 2. Seated players
        for product in work.products:
            self._settle_product(work, product, suppliers[product.product_id], rng, report)

        # 3. Lifecycle
        for product in work.products:
            new_stage = self.lifecycle.roll(product.lifecycle, rng)
            if new_stage != product.lifecycle:
                logger.info(
                    "%s moves from %s to %s",
                    product.name, product.lifecycle.label, new_stage.label,
                )
                report.lifecycle_changes[product.product_id] = (product.lifecycle, new_stage)
                product.lifecycle = new_stage

        # 4. Shadow AI
        for product in work.products:
            self._settle_ai(work, product, suppliers[product.product_id], coefficient, report)

        # 5. Investments
        for player in work.players:
            spent = player.apply_investments(self.config.facility_investment_per_capacity)
            if spent:
                report.investments[player.player_id] = spent

        # 6. Trades
        report.trade_results = settle_trades(
            work.players, work.trade_offers, self.config.budget_ceiling
        )
        work.trade_offers = []

        return work, report

    def settle_position(
        self, inventory: float, order: float, demand: int, supplier: Supplier
    ) -> Settlement:
        """
        Inventory flow and accounting for one position.

        Revenue and stockouts are measured against the opening inventory;
        ordered units arrive (scaled by reliability) within the turn.
        """
        config = self.config
        new_inventory = max(0.0, inventory + order * supplier.reliability - demand)
        revenue = min(demand, inventory) * config.unit_price * supplier.quality
        holding_cost = new_inventory * config.holding_cost_per_unit
        stockout_penalty = max(0.0, demand - inventory) * config.stockout_penalty_per_unit
        order_cost = order * config.unit_order_cost * supplier.cost

        return Settlement(
            demand=demand,
            order=order,
            new_inventory=new_inventory,
            revenue=revenue,
            holding_cost=holding_cost,
            stockout_penalty=stockout_penalty,
            order_cost=order_cost,
        )

    def realized_demand(self, state: GameState, product: Product, seat: int) -> int:
        """
        Demand a seat sees this turn: country-adjusted baseline scaled by
        season, lifecycle and the turn's environmental event.
        """
        global_demand = self.market.demand_for_seat(self.config.baseline_demand, seat)
        lifecycle_factor = self.lifecycle.demand_factor(product.lifecycle)
        event_factor = self.event_generator.demand_factor(state.environmental_event)
        return round_half_up(
            global_demand * state.seasonal_factor * (1 + lifecycle_factor) * event_factor
        )

    # ===== Steps =====

    def _resolve_supplier(self, product: Product) -> Supplier:
        supplier = self.data_loader.get_supplier_by_id(product.supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier", product.supplier_id)
        return supplier

    def _settle_product(
        self,
        state: GameState,
        product: Product,
        supplier: Supplier,
        rng: RandomSource,
        report: TurnReport,
    ):
        for seat, player in enumerate(state.players):
            position = product.position(player.player_id)
            demand = self.realized_demand(state, product, seat)
            product.demand_history.append(demand)
            position.demand_history.append(demand)

            order = self.policies[player.kind].decide(state, product, player, 0.0)
            settlement = self.settle_position(position.inventory, order, demand, supplier)

            player.book_settlement(settlement, self.config.budget_ceiling)
            jitter = rng.uniform(-self.config.fx_jitter, self.config.fx_jitter)
            player.book_fx_gain(settlement.revenue, jitter)

            position.inventory = settlement.new_inventory
            position.order = 0

            report.settlements[(product.product_id, player.player_id)] = settlement
            logger.debug(
                "%s / player %d: demand=%d order=%s inventory=%.2f net=%.2f",
                product.name, player.player_id, demand, order,
                settlement.new_inventory, settlement.net,
            )

    def _settle_ai(
        self,
        state: GameState,
        product: Product,
        supplier: Supplier,
        coefficient: float,
        report: TurnReport,
    ):
        """Mirror the first seat's position without touching it."""
        if not state.players:
            return
        anchor = product.position(state.players[0].player_id)

        order = self.policies[state.ai.kind].decide(state, product, state.ai, coefficient)
        # settles with the mirrored seat's supplier multipliers
        settlement = self.settle_position(
            anchor.inventory, order, anchor.last_demand, supplier
        )
        state.ai.score += settlement.net
        report.ai_settlements[product.product_id] = settlement


def advance_turn(
    state: GameState,
    rng: RandomSource,
    config: Optional[SCMConfig] = None,
    difficulty: Union[Difficulty, str, float] = Difficulty.NORMAL,
    data_loader: Optional[SCMDataLoader] = None,
) -> GameState:
    """
    Functional entry point: ``state`` in, next state out.

    Builds a TurnProcessor for the call; use TurnProcessor directly (or a
    GameSession) to reuse one across turns or to get the TurnReport.
    """
    processor = TurnProcessor(config, data_loader)
    new_state, _ = processor.process(state, rng, difficulty)
    return new_state
