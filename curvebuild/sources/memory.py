"""
Versioned in-memory item source.

Stores configurations, conventions or securities under names with a validity
window so lookups can be made as of a point in time.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional, Type

from .base import BaseItemSource


@dataclass
class _ItemDocument:
    """Single stored version of an item."""

    name: str
    item: Any
    version_from: Optional[datetime] = None
    version_to: Optional[datetime] = None

    def visible_at(self, as_of: Optional[datetime]) -> bool:
        if as_of is None:
            return self.version_to is None
        if self.version_from is not None and as_of < self.version_from:
            return False
        if self.version_to is not None and as_of >= self.version_to:
            return False
        return True


class InMemoryItemSource(BaseItemSource):
    """
    In-memory item source.

    Several items may be stored under one name; lookups then return all of
    them, which validators report as duplicated.
    """

    def __init__(self):
        self._documents: List[_ItemDocument] = []

    def add(self, name: str, item: Any, version_from: Optional[datetime] = None) -> None:
        """
        Store an item under a name.

        Args:
            name: Name to store under
            item: Configuration, convention or security
            version_from: Instant from which the item is visible, None for always
        """
        if not name:
            raise ValueError("Item name must not be empty")
        if item is None:
            raise ValueError("Item must not be None")
        self._documents.append(_ItemDocument(name, item, version_from))

    def replace(self, name: str, item: Any, version_from: datetime) -> None:
        """Close every open version under a name at version_from and add item."""
        self.remove(name, version_from)
        self.add(name, item, version_from)

    def remove(self, name: str, version_to: datetime) -> None:
        """
        Close every open version under a name at version_to.

        Lookups as of an earlier instant still see the closed versions.
        """
        if version_to is None:
            raise ValueError("version_to must not be None")
        for document in self._documents:
            if document.name == name and document.version_to is None:
                document.version_to = version_to

    def names(self) -> List[str]:
        return sorted({d.name for d in self._documents})

    def get(self, item_type: Type, name: str, as_of: Optional[datetime] = None) -> List[Any]:
        visible = [
            d
            for d in self._documents
            if d.name == name and d.visible_at(as_of) and isinstance(d.item, item_type)
        ]
        visible.sort(key=lambda d: (d.version_from is not None, d.version_from or datetime.min))
        return [d.item for d in visible]

    def __len__(self) -> int:
        return len(self._documents)
