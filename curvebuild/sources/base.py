"""
Base abstractions for the sources the core resolves names against.

Configuration, convention and security sources share one shape: a point-in-time
lookup of every item registered under a name. The core only ever reads from
them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol, Type, runtime_checkable


@runtime_checkable
class ItemSource(Protocol):
    """
    Protocol for configuration, convention and security sources.

    ``as_of`` selects which version of each item is visible; None means the
    latest version.
    """

    def get(self, item_type: Type, name: str, as_of: Optional[datetime] = None) -> List[Any]:
        """
        Get every visible item registered under a name.

        Args:
            item_type: Only items that are instances of this type are returned;
                pass ``object`` to get items of any kind
            name: Name or identifier
            as_of: Version instant, None for latest

        Returns:
            Zero, one or many matching items
        """
        ...

    def get_single(
        self, item_type: Type, name: str, as_of: Optional[datetime] = None
    ) -> Optional[Any]:
        """Get the most recent visible item under a name, or None."""
        ...


@runtime_checkable
class MarketDataSource(Protocol):
    """Protocol for market data sources keyed by data id."""

    def data_point(self, data_id: str) -> Optional[float]:
        """Get the quoted value for an id, None when absent."""
        ...


class BaseItemSource(ABC):
    """Abstract base class for item sources."""

    @abstractmethod
    def get(self, item_type: Type, name: str, as_of: Optional[datetime] = None) -> List[Any]:
        """Get items (to be implemented by subclasses)."""
        pass

    def get_single(
        self, item_type: Type, name: str, as_of: Optional[datetime] = None
    ) -> Optional[Any]:
        matches = self.get(item_type, name, as_of)
        return matches[-1] if matches else None


class BaseMarketDataSource(ABC):
    """Abstract base class for market data sources."""

    @abstractmethod
    def data_point(self, data_id: str) -> Optional[float]:
        """Get a data point (to be implemented by subclasses)."""
        pass

    def data_points(self, data_ids: Iterable[str]) -> Dict[str, Optional[float]]:
        """
        Get several data points at once.

        Args:
            data_ids: Ids to look up

        Returns:
            Mapping of id to value, None where absent
        """
        return {data_id: self.data_point(data_id) for data_id in data_ids}
