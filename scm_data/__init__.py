"""
Supply-chain reference data package
"""
from .data_loader import SCMDataLoader
from .data_models import Supplier, CountryMarket, EventSpec, ProductSpec

__all__ = [
    'SCMDataLoader',
    'Supplier', 'CountryMarket', 'EventSpec', 'ProductSpec',
]
