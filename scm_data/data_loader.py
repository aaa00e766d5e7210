"""
Data Loader for the supply-chain catalogs
Serves the built-in supplier, country, event and product tables and
optionally replaces any of them with JSON files from a data directory
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional
from .data_models import Supplier, CountryMarket, EventSpec, ProductSpec


logger = logging.getLogger(__name__)


DEFAULT_SUPPLIERS = [
    {"id": 1, "name": "Supplier A", "quality": 0.9, "cost": 1.1, "reliability": 0.95},
    {"id": 2, "name": "Supplier B", "quality": 0.8, "cost": 0.9, "reliability": 0.9},
    {"id": 3, "name": "Supplier C", "quality": 1.0, "cost": 1.2, "reliability": 0.98},
]

# Order matters: player seats cycle through this list
DEFAULT_COUNTRIES = [
    {"name": "USA", "exchange_rate": 1.0, "transport_cost": 1.0},
    {"name": "Japan", "exchange_rate": 110.0, "transport_cost": 1.2},
    {"name": "EU", "exchange_rate": 0.9, "transport_cost": 1.1},
    {"name": "China", "exchange_rate": 1.3, "transport_cost": 1.3},
]

DEFAULT_EVENTS = [
    {"name": "Natural disaster", "impact": -0.3},
    {"name": "Political unrest", "impact": -0.2},
    {"name": "Technological innovation", "impact": 0.2},
    {"name": "Economic boom", "impact": 0.3},
]

DEFAULT_PRODUCTS = [
    {"id": 1, "name": "Product A", "lifecycle": "introduction", "supplier": 1},
    {"id": 2, "name": "Product B", "lifecycle": "growth", "supplier": 2},
]


class SCMDataLoader:
    """
    Provides the static catalogs used by the simulation engine.

    Usage:
        loader = SCMDataLoader()
        supplier = loader.get_supplier_by_id(1)
        countries = loader.get_all_countries()

        # Override tables from JSON (any missing file keeps the default)
        loader = SCMDataLoader(data_dir=Path("./catalogs"))
    """

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the data loader.

        Args:
            data_dir: Directory holding suppliers.json, countries.json,
                      events.json and/or products.json. If None, only the
                      built-in tables are used.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else None

        # Storage for loaded data
        self.suppliers: Dict[int, Supplier] = {}
        self.countries: List[CountryMarket] = []
        self.events: List[EventSpec] = []
        self.products: List[ProductSpec] = []

        # Lookup indices
        self.suppliers_by_name: Dict[str, Supplier] = {}
        self.countries_by_name: Dict[str, CountryMarket] = {}

        self._load_all()

    def _load_json(self, filename: str, default: list) -> list:
        """Load a JSON list from the data directory, falling back to default"""
        if self.data_dir is None:
            return default

        filepath = self.data_dir / filename
        if not filepath.exists():
            return default

        logger.debug("Loading catalog override %s", filepath)
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"{filepath} must contain a JSON list")
        return data

    def _load_all(self):
        """Load all catalogs"""
        self._load_suppliers()
        self._load_countries()
        self._load_events()
        self._load_products()
        self._build_indices()

    def _load_suppliers(self):
        for entry in self._load_json("suppliers.json", DEFAULT_SUPPLIERS):
            supplier = Supplier(
                supplier_id=int(entry["id"]),
                name=entry.get("name", f"Supplier {entry['id']}"),
                quality=float(entry["quality"]),
                cost=float(entry["cost"]),
                reliability=float(entry["reliability"]),
            )
            self.suppliers[supplier.supplier_id] = supplier

    def _load_countries(self):
        self.countries = [
            CountryMarket(
                name=entry["name"],
                exchange_rate=float(entry["exchange_rate"]),
                transport_cost=float(entry["transport_cost"]),
            )
            for entry in self._load_json("countries.json", DEFAULT_COUNTRIES)
        ]
        if not self.countries:
            raise ValueError("At least one country market is required")

    def _load_events(self):
        self.events = [
            EventSpec(name=entry["name"], impact=float(entry["impact"]))
            for entry in self._load_json("events.json", DEFAULT_EVENTS)
        ]

    def _load_products(self):
        self.products = [
            ProductSpec(
                product_id=int(entry["id"]),
                name=entry["name"],
                lifecycle=entry.get("lifecycle", "introduction"),
                supplier_id=int(entry["supplier"]),
            )
            for entry in self._load_json("products.json", DEFAULT_PRODUCTS)
        ]

    def _build_indices(self):
        self.suppliers_by_name = {s.name: s for s in self.suppliers.values()}
        self.countries_by_name = {c.name: c for c in self.countries}

    # ===== Access methods =====

    def get_supplier_by_id(self, supplier_id: int) -> Optional[Supplier]:
        return self.suppliers.get(supplier_id)

    def get_supplier_by_name(self, name: str) -> Optional[Supplier]:
        return self.suppliers_by_name.get(name)

    def get_all_suppliers(self) -> List[Supplier]:
        return sorted(self.suppliers.values(), key=lambda s: s.supplier_id)

    def get_country_by_name(self, name: str) -> Optional[CountryMarket]:
        return self.countries_by_name.get(name)

    def get_all_countries(self) -> List[CountryMarket]:
        return list(self.countries)

    def get_all_events(self) -> List[EventSpec]:
        return list(self.events)

    def get_product_specs(self) -> List[ProductSpec]:
        return list(self.products)
