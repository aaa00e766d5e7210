"""
Game session: the command surface of the SCM simulator.

Collaborators (UI, transport) submit decisions between turns and read
snapshots. A session serializes every command and turn advance behind one
lock, so a networked front end may call it from several threads.

Usage:
    session = GameSession(get_default_config(), rng=RandomSource(seed=7))
    session.place_order(player_id=1, product_id=1, quantity=10)
    session.set_investment(1, "facility", 200)
    state = session.advance_turn()
"""
import logging
import math
import numbers
import threading
from typing import Optional, Union

from scm_data import SCMDataLoader
from scm_sim.config import SCMConfig, GameConstants, configure_logging
from scm_sim.core.state import GameState, TradeOffer, create_initial_state, resize_players
from scm_sim.engine.ai_policy import difficulty_coefficient
from scm_sim.engine.turn import TurnProcessor, TurnReport
from scm_sim.utils.constants import Difficulty, InvestmentKind
from scm_sim.utils.errors import InvalidArgumentError, NotFoundError, TurnClosedError
from scm_sim.utils.rng import RandomSource

logger = logging.getLogger(__name__)


class GameSession:
    """
    One running game.

    Every command validates first and then swaps in a modified copy of the
    state, so a rejected command leaves the session exactly as it was.
    """

    def __init__(
        self,
        config: Optional[SCMConfig] = None,
        rng: Optional[RandomSource] = None,
        state: Optional[GameState] = None,
        data_loader: Optional[SCMDataLoader] = None,
    ):
        """
        Initialize a session.

        Args:
            config: Game configuration
            rng: Randomness source. If None, one is seeded from config.seed
            state: Starting state. If None, the catalog's initial state
            data_loader: Catalog source shared with the turn processor
        """
        self.config = config or SCMConfig()
        configure_logging(self.config)

        self.data_loader = data_loader or SCMDataLoader(self.config.data_dir)
        self.rng = rng or RandomSource(self.config.seed)
        self.processor = TurnProcessor(self.config, self.data_loader)

        self.difficulty = Difficulty(self.config.difficulty)
        self.last_report: Optional[TurnReport] = None

        self._lock = threading.RLock()
        self._state = state.copy() if state is not None else create_initial_state(
            self.config, self.data_loader
        )

    # ===== Snapshots =====

    @property
    def state(self) -> GameState:
        """Read-only view: a copy the caller may do anything with."""
        with self._lock:
            return self._state.copy()

    @property
    def turn(self) -> int:
        with self._lock:
            return self._state.turn

    @property
    def difficulty_coefficient(self) -> float:
        return difficulty_coefficient(self.difficulty)

    # ===== Decision commands =====

    def place_order(
        self, player_id: int, product_id: int, quantity: int, turn: Optional[int] = None
    ):
        """
        Set a player's pending order for a product (overwrites).

        Raises:
            NotFoundError: Unknown player or product
            InvalidArgumentError: Quantity is negative or not a whole number
        """
        quantity = self._whole_quantity(quantity)
        with self._lock:
            self._check_turn(turn)
            new_state = self._state.copy()
            new_state.get_player(player_id)
            new_state.get_product(product_id).position(player_id).order = quantity
            self._state = new_state

    def set_supplier_choice(self, product_id: int, supplier_id: int, turn: Optional[int] = None):
        """Reassign the supplier shared by every player for a product."""
        if self.data_loader.get_supplier_by_id(supplier_id) is None:
            raise NotFoundError("Supplier", supplier_id)
        with self._lock:
            self._check_turn(turn)
            new_state = self._state.copy()
            new_state.get_product(product_id).supplier_id = supplier_id
            self._state = new_state

    def set_investment(
        self,
        player_id: int,
        kind: Union[InvestmentKind, str],
        amount: float,
        turn: Optional[int] = None,
    ):
        """Overwrite a player's pending R&D or facility investment."""
        try:
            kind = InvestmentKind(kind)
        except ValueError:
            raise InvalidArgumentError(f"Unknown investment kind: {kind!r}") from None
        amount = self._non_negative_amount(amount, "Investment")

        with self._lock:
            self._check_turn(turn)
            new_state = self._state.copy()
            player = new_state.get_player(player_id)
            setattr(player, GameConstants.INVESTMENT_FIELDS[kind], amount)
            self._state = new_state

    def queue_trade_offer(
        self,
        from_player: int,
        to_player: int,
        amount: Optional[float] = None,
        turn: Optional[int] = None,
    ):
        """
        Queue a budget transfer for settlement at the end of the next turn.

        Whether the payer can afford it is only checked at settlement.
        """
        if amount is None:
            amount = self.config.default_trade_amount
        amount = self._non_negative_amount(amount, "Trade amount")
        if from_player == to_player:
            raise InvalidArgumentError("A player cannot trade with themselves")

        with self._lock:
            self._check_turn(turn)
            new_state = self._state.copy()
            new_state.get_player(from_player)
            new_state.get_player(to_player)
            new_state.trade_offers.append(TradeOffer(from_player, to_player, amount))
            self._state = new_state

    # ===== Session commands =====

    def resize_players(self, target_count: int):
        """Seat or remove players so exactly ``target_count`` remain."""
        with self._lock:
            self._state = resize_players(self._state, target_count, self.config)
            logger.info("Players resized to %d", target_count)

    def set_difficulty(self, mode: Union[Difficulty, str]):
        try:
            difficulty = Difficulty(mode)
        except ValueError:
            raise InvalidArgumentError(f"Unknown difficulty mode: {mode!r}") from None
        with self._lock:
            self.difficulty = difficulty

    def advance_turn(self) -> GameState:
        """
        Resolve the current turn and return a snapshot of the next state.

        On error the state and the randomness source are left as they were.
        """
        with self._lock:
            rng_state = self.rng.getstate()
            try:
                new_state, report = self.processor.process(
                    self._state, self.rng, self.difficulty
                )
            except Exception:
                self.rng.setstate(rng_state)
                raise
            self._state = new_state
            self.last_report = report
            return new_state.copy()

    # ===== Validation =====

    def _check_turn(self, turn: Optional[int]):
        if turn is not None and turn != self._state.turn:
            raise TurnClosedError(turn, self._state.turn)

    @staticmethod
    def _whole_quantity(quantity) -> int:
        if isinstance(quantity, bool):
            raise InvalidArgumentError(f"Order quantity must be a number, got {quantity!r}")
        if isinstance(quantity, numbers.Integral):
            quantity = int(quantity)
        elif isinstance(quantity, numbers.Real) and float(quantity).is_integer():
            quantity = int(quantity)
        else:
            raise InvalidArgumentError(f"Order quantity must be a whole number, got {quantity!r}")
        if quantity < 0:
            raise InvalidArgumentError(f"Order quantity must be >= 0, got {quantity}")
        return quantity

    @staticmethod
    def _non_negative_amount(amount, label: str) -> float:
        if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
            raise InvalidArgumentError(f"{label} must be a number, got {amount!r}")
        if not math.isfinite(amount) or amount < 0:
            raise InvalidArgumentError(f"{label} must be a finite number >= 0, got {amount}")
        return float(amount)
