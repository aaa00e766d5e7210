"""
Data models for the supply-chain catalogs
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True)
class Supplier:
    """Supplier reference data"""
    supplier_id: int
    name: str
    quality: float      # revenue multiplier
    cost: float         # order-cost multiplier
    reliability: float  # fraction of the ordered quantity that arrives

    def __repr__(self):
        return (f"Supplier(name='{self.name}', quality={self.quality}, "
                f"cost={self.cost}, reliability={self.reliability})")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CountryMarket:
    """Currency and logistics multipliers for one market"""
    name: str
    exchange_rate: float
    transport_cost: float

    @property
    def demand_multiplier(self) -> float:
        return self.exchange_rate * self.transport_cost


@dataclass(frozen=True)
class EventSpec:
    """An environmental shock that may hit a single turn"""
    name: str
    impact: float

    @property
    def demand_factor(self) -> float:
        """Multiplier applied to realized demand (1 + impact)."""
        return 1.0 + self.impact


@dataclass(frozen=True)
class ProductSpec:
    """Starting definition of a product in the session catalog"""
    product_id: int
    name: str
    lifecycle: str
    supplier_id: int

    def __repr__(self):
        return f"ProductSpec(name='{self.name}', lifecycle='{self.lifecycle}')"
