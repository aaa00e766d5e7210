"""
SCM Simulator Configuration
Defines all configurable parameters for the turn-resolution engine
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict
from pathlib import Path

from scm_sim.utils.constants import Difficulty, InvestmentKind, Season


@dataclass
class SCMConfig:
    """
    Main configuration for the supply-chain game engine.

    Every economic constant used by the turn processor lives here so that
    alternative rule sets can be tried without touching the engine.
    """

    # ===== Session Settings =====
    num_players: int = 1
    """Number of seated human players at session start"""

    difficulty: Difficulty = Difficulty.NORMAL
    """AI difficulty mode (easy / normal / hard)"""

    # ===== Data Settings =====
    data_dir: Optional[Path] = None
    """Directory with catalog JSON overrides. If None, uses built-in tables"""

    # ===== Demand Settings =====
    baseline_demand: int = 20
    """Home-market demand per product per player before adjustments"""

    seasonal_factors: Dict[Season, float] = field(default_factory=lambda: {
        Season.SPRING: 1.0,
        Season.SUMMER: 1.2,
        Season.AUTUMN: 0.9,
        Season.WINTER: 0.7,
    })
    """Demand multiplier by season"""

    # ===== Pricing & Cost Settings =====
    unit_price: float = 20.0
    """Revenue per unit sold, before supplier quality"""

    unit_order_cost: float = 10.0
    """Cost per unit ordered, before supplier cost multiplier"""

    holding_cost_per_unit: float = 0.5
    """Cost per unit left in inventory at the end of a turn"""

    stockout_penalty_per_unit: float = 2.0
    """Penalty per unit of demand that could not be served"""

    # ===== Player Economy Settings =====
    starting_budget: float = 1000.0
    """Budget for every newly seated player"""

    budget_ceiling: float = 2000.0
    """Upper bound on any player's budget (no floor)"""

    starting_capacity: int = 100
    """Production capacity for every newly seated player"""

    starting_inventory: float = 50.0
    """Per-product inventory for every newly seated player"""

    facility_investment_per_capacity: int = 100
    """Facility investment needed for one unit of extra capacity"""

    fx_jitter: float = 0.05
    """Half-width of the uniform exchange-rate gain on revenue"""

    # ===== AI Settings =====
    ai_budget_divisor: int = 10
    """AI may order at most floor(budget / divisor) units"""

    ai_safety_stock_slope: float = 0.2
    """Safety stock = forecast * slope * difficulty coefficient"""

    # ===== Stochastic Mechanics =====
    event_probability: float = 0.1
    """Chance per turn that an environmental event occurs"""

    lifecycle_advance_probability: float = 0.1
    """Chance per product per turn of moving to the next lifecycle stage"""

    # ===== Trade Settings =====
    default_trade_amount: float = 100.0
    """Amount used when a trade offer is queued without one"""

    # ===== Debug Settings =====
    debug_mode: bool = False
    """Enable debug logging"""

    seed: Optional[int] = None
    """Random seed for reproducibility"""

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR"""


# ===== Preset Configurations =====

def get_default_config() -> SCMConfig:
    """Single player against a normal-difficulty AI."""
    return SCMConfig()


def get_easy_config() -> SCMConfig:
    """Lower AI safety stock, for onboarding games."""
    return SCMConfig(difficulty=Difficulty.EASY)


def get_hard_config() -> SCMConfig:
    """AI keeps twice the normal safety stock."""
    return SCMConfig(difficulty=Difficulty.HARD)


def get_multiplayer_config() -> SCMConfig:
    """
    Four seated players, one per country market.
    """
    return SCMConfig(num_players=4)


def configure_logging(config: SCMConfig):
    """Apply the config's log level to the simulator loggers."""
    level = logging.DEBUG if config.debug_mode else getattr(
        logging, config.log_level.upper(), logging.INFO
    )
    for name in ("scm_sim", "scm_data"):
        logging.getLogger(name).setLevel(level)


# ===== Game Constants =====

class GameConstants:
    """
    Hard-coded game constants that don't change.
    """

    # Session start
    STARTING_TURN = 1
    STARTING_SEASON = Season.SPRING

    # Player count bounds for resize
    MIN_PLAYERS = 1

    # Investment kinds accepted by set_investment
    INVESTMENT_FIELDS = {
        InvestmentKind.RD: "rd_investment",
        InvestmentKind.FACILITY: "facility_investment",
    }
