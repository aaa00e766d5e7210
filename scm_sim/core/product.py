"""
Product and per-player product position state.

A product's per-player state is keyed by stable player id, never by seat
position, so inserting or removing players cannot misalign inventories.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Any

from scm_sim.utils.constants import LifecycleStage
from scm_sim.utils.errors import NotFoundError


@dataclass
class ProductPosition:
    """One player's holding of one product."""
    inventory: float = 0.0
    order: int = 0
    demand_history: List[int] = field(default_factory=list)

    @property
    def last_demand(self) -> int:
        return self.demand_history[-1] if self.demand_history else 0


@dataclass
class Product:
    """
    A product in the session catalog.

    Attributes:
        product_id: Stable identity
        name: Display name
        lifecycle: Current stage (only moves forward)
        supplier_id: Supplier shared by every player for this product
        positions: player_id -> ProductPosition, in seat order
        demand_history: Every realized demand, in settlement order
                        (append-only, chart series)
    """
    product_id: int
    name: str
    lifecycle: LifecycleStage = LifecycleStage.INTRODUCTION
    supplier_id: int = 1
    positions: Dict[int, ProductPosition] = field(default_factory=dict)
    demand_history: List[int] = field(default_factory=list)

    def position(self, player_id: int) -> ProductPosition:
        try:
            return self.positions[player_id]
        except KeyError:
            raise NotFoundError("Player", player_id) from None

    @property
    def inventory(self) -> List[float]:
        """Inventories in seat order."""
        return [p.inventory for p in self.positions.values()]

    @property
    def orders(self) -> List[int]:
        """Pending orders in seat order."""
        return [p.order for p in self.positions.values()]

    @property
    def last_demand(self) -> int:
        return self.demand_history[-1] if self.demand_history else 0

    def get_state_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "lifecycle": self.lifecycle.label,
            "supplier_id": self.supplier_id,
            "demand_history": list(self.demand_history),
            "positions": {
                player_id: {
                    "inventory": pos.inventory,
                    "order": pos.order,
                    "demand_history": list(pos.demand_history),
                }
                for player_id, pos in self.positions.items()
            },
        }
