"""
Trade settlement.

Offers are settled once, in submission order, with no rollback. An offer
the payer cannot cover is dropped; nothing is raised.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from scm_sim.core.player import Player
    from scm_sim.core.state import TradeOffer

logger = logging.getLogger(__name__)


@dataclass
class TradeResult:
    """
    Outcome of one offer.

    reason is None for an accepted offer, otherwise one of
    'insufficient_funds' or 'unknown_player'. ``forfeited`` is the part of
    an accepted transfer that the receiver's budget ceiling absorbed.
    """
    offer: "TradeOffer"
    accepted: bool
    reason: Optional[str] = None
    forfeited: float = 0.0


def settle_trades(
    players: List["Player"],
    offers: List["TradeOffer"],
    budget_ceiling: Optional[float] = None,
) -> List[TradeResult]:
    """
    Apply offers to ``players`` in place.

    Args:
        players: Seated players (mutated)
        offers: Offers in submission order
        budget_ceiling: If given, the receiver's budget is capped here

    Returns:
        One TradeResult per offer, in order
    """
    by_id = {p.player_id: p for p in players}
    results: List[TradeResult] = []

    for offer in offers:
        payer = by_id.get(offer.from_player)
        payee = by_id.get(offer.to_player)

        if payer is None or payee is None:
            logger.info("Dropping trade offer %s: unknown player", offer)
            results.append(TradeResult(offer, accepted=False, reason="unknown_player"))
            continue

        if payer.budget < offer.amount:
            logger.info(
                "Dropping trade offer %s: player %d has %.2f",
                offer, payer.player_id, payer.budget,
            )
            results.append(TradeResult(offer, accepted=False, reason="insufficient_funds"))
            continue

        payer.budget -= offer.amount
        credited = payee.budget + offer.amount
        forfeited = 0.0
        if budget_ceiling is not None and credited > budget_ceiling:
            forfeited = credited - budget_ceiling
            credited = budget_ceiling
        payee.budget = credited
        results.append(TradeResult(offer, accepted=True, forfeited=forfeited))

    return results
