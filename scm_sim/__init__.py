"""
SCM Simulator Package

Turn-resolution engine for a multi-player supply-chain management game:
seasonal demand, global markets, supplier performance, product lifecycles,
environmental shocks, a forecasting AI competitor and player trades.
"""

from .config import (
    SCMConfig,
    get_default_config,
    get_easy_config,
    get_hard_config,
    get_multiplayer_config,
    configure_logging,
    GameConstants,
)

__version__ = "0.1.0"
__all__ = [
    "SCMConfig",
    "get_default_config",
    "get_easy_config",
    "get_hard_config",
    "get_multiplayer_config",
    "configure_logging",
    "GameConstants",
]
