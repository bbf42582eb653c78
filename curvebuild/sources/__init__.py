"""
Resolution sources for configurations, conventions, securities and market data.
"""

from .base import BaseItemSource, BaseMarketDataSource, ItemSource, MarketDataSource
from .factory import create_market_data_source
from .market_data import CSVMarketDataSource, InMemoryMarketDataSource, JSONMarketDataSource
from .memory import InMemoryItemSource

__all__ = [
    # Base abstractions
    "ItemSource",
    "MarketDataSource",
    "BaseItemSource",
    "BaseMarketDataSource",
    # Concrete implementations
    "InMemoryItemSource",
    "InMemoryMarketDataSource",
    "JSONMarketDataSource",
    "CSVMarketDataSource",
    # Factory
    "create_market_data_source",
]
