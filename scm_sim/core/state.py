"""
Game state aggregate for the SCM simulator.

GameState is the single value handed between turns. Nothing in the engine
mutates a state it was given: every transition works on ``state.copy()``
and returns the copy.
"""
import copy
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from scm_data import SCMDataLoader
from scm_data.data_models import EventSpec as EnvironmentalEvent
from scm_sim.config import SCMConfig, GameConstants
from scm_sim.core.player import Player, create_player
from scm_sim.core.product import Product, ProductPosition
from scm_sim.utils.constants import AI_PLAYER_ID, LifecycleStage, PlayerKind, Season
from scm_sim.utils.errors import InvalidArgumentError, NotFoundError


@dataclass(frozen=True)
class TradeOffer:
    """A queued budget transfer between two seated players."""
    from_player: int
    to_player: int
    amount: float


@dataclass
class GameState:
    """
    Full state of one game session.

    Attributes:
        turn: Current turn number (starts at 1)
        current_season: Season of the current turn
        seasonal_factors: Season -> demand multiplier
        products: Product catalog, fixed for the session
        players: Seated players, in seat order
        ai: Shadow AI competitor (never seated)
        environmental_event: Event realized this turn, if any
        trade_offers: Offers queued for the next turn, in submission order
        next_player_id: Id handed to the next seated player
    """
    turn: int
    current_season: Season
    seasonal_factors: Dict[Season, float]
    products: List[Product]
    players: List[Player]
    ai: Player
    environmental_event: Optional[EnvironmentalEvent] = None
    trade_offers: List[TradeOffer] = field(default_factory=list)
    next_player_id: int = 1

    @property
    def ai_score(self) -> float:
        return self.ai.score

    @property
    def seasonal_factor(self) -> float:
        return self.seasonal_factors[self.current_season]

    # ===== Lookups =====

    def get_player(self, player_id: int) -> Player:
        for player in self.players:
            if player.player_id == player_id:
                return player
        raise NotFoundError("Player", player_id)

    def get_product(self, product_id: int) -> Product:
        for product in self.products:
            if product.product_id == product_id:
                return product
        raise NotFoundError("Product", product_id)

    @property
    def player_ids(self) -> List[int]:
        return [p.player_id for p in self.players]

    # ===== Utilities =====

    def copy(self) -> "GameState":
        """Deep working copy; the original is never touched."""
        return copy.deepcopy(self)

    def is_aligned(self) -> bool:
        """True when every product holds exactly one position per seated player."""
        ids = self.player_ids
        return all(list(p.positions.keys()) == ids for p in self.products)

    def get_state_dict(self) -> Dict[str, Any]:
        """Structured record of the whole state (plain Python values)."""
        return {
            "turn": self.turn,
            "current_season": self.current_season.value,
            "seasonal_factors": {s.value: f for s, f in self.seasonal_factors.items()},
            "products": [p.get_state_dict() for p in self.products],
            "players": [p.get_state_dict() for p in self.players],
            "ai": self.ai.get_state_dict(),
            "ai_score": self.ai_score,
            "environmental_event": (
                {"name": self.environmental_event.name,
                 "impact": self.environmental_event.impact}
                if self.environmental_event else None
            ),
            "trade_offers": [
                {"from": o.from_player, "to": o.to_player, "amount": o.amount}
                for o in self.trade_offers
            ],
            "next_player_id": self.next_player_id,
        }


# ===== Factories =====

def create_initial_state(
    config: Optional[SCMConfig] = None,
    data_loader: Optional[SCMDataLoader] = None,
) -> GameState:
    """
    Build the session-start state.

    Products come from the data loader's product catalog; ``config.num_players``
    players are seated with the configured starting budget, capacity and
    inventory.
    """
    config = config or SCMConfig()
    data_loader = data_loader or SCMDataLoader(config.data_dir)

    products = []
    for spec in data_loader.get_product_specs():
        if data_loader.get_supplier_by_id(spec.supplier_id) is None:
            raise NotFoundError("Supplier", spec.supplier_id)
        products.append(Product(
            product_id=spec.product_id,
            name=spec.name,
            lifecycle=LifecycleStage.from_label(spec.lifecycle),
            supplier_id=spec.supplier_id,
        ))

    state = GameState(
        turn=GameConstants.STARTING_TURN,
        current_season=GameConstants.STARTING_SEASON,
        seasonal_factors=dict(config.seasonal_factors),
        products=products,
        players=[],
        ai=create_player(AI_PLAYER_ID, config, kind=PlayerKind.AI),
    )
    _seat_players(state, config.num_players, config)
    return state


def resize_players(state: GameState, target_count: int, config: SCMConfig) -> GameState:
    """
    Grow or shrink the seated players, keeping every product aligned.

    Growing seats new players (fresh ids) with default inventory and zero
    orders on every product. Shrinking truncates from the last seat and
    drops those players' positions and queued trade offers.

    Returns:
        New GameState; ``state`` is left unchanged
    """
    if isinstance(target_count, bool) or not isinstance(target_count, int):
        raise InvalidArgumentError(f"Player count must be an integer, got {target_count!r}")
    if target_count < GameConstants.MIN_PLAYERS:
        raise InvalidArgumentError(
            f"At least {GameConstants.MIN_PLAYERS} player is required, got {target_count}"
        )

    new_state = state.copy()
    current = len(new_state.players)

    if target_count > current:
        _seat_players(new_state, target_count - current, config)
    elif target_count < current:
        removed = {p.player_id for p in new_state.players[target_count:]}
        new_state.players = new_state.players[:target_count]
        for product in new_state.products:
            for player_id in removed:
                del product.positions[player_id]
        new_state.trade_offers = [
            o for o in new_state.trade_offers
            if o.from_player not in removed and o.to_player not in removed
        ]

    return new_state


def _seat_players(state: GameState, count: int, config: SCMConfig):
    """Append ``count`` new players to ``state`` in place."""
    for _ in range(count):
        player = create_player(state.next_player_id, config)
        state.next_player_id += 1
        state.players.append(player)
        for product in state.products:
            product.positions[player.player_id] = ProductPosition(
                inventory=config.starting_inventory
            )
