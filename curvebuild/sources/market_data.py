"""
Concrete market data source implementations.

Provides in-memory, JSON and CSV backed sources of curve market data points.
"""

import json
import logging
import math
from pathlib import Path
from typing import Dict, Mapping, Optional

import pandas as pd

from .base import BaseMarketDataSource

logger = logging.getLogger(__name__)


def _clean(value) -> Optional[float]:
    if value is None:
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


class InMemoryMarketDataSource(BaseMarketDataSource):
    """Market data held in a dictionary, mainly for tests and snapshots."""

    def __init__(self, data_points: Optional[Mapping[str, float]] = None):
        self._data_points: Dict[str, float] = dict(data_points or {})

    def add(self, data_id: str, value: float) -> None:
        self._data_points[data_id] = value

    def data_point(self, data_id: str) -> Optional[float]:
        return _clean(self._data_points.get(data_id))


class JSONMarketDataSource(BaseMarketDataSource):
    """
    Load market data points from a JSON file.

    The file holds ``{"data_points": {"<id>": <value>, ...}}``.
    """

    def __init__(self, path: Path):
        """
        Initialize JSON market data source.

        Args:
            path: Path to the JSON snapshot file
        """
        self.path = Path(path)
        self._data_points: Optional[Dict[str, float]] = None

    def _load(self) -> Dict[str, float]:
        if self._data_points is None:
            with open(self.path, "r") as f:
                data = json.load(f)
            self._data_points = dict(data.get("data_points", {}))
            logger.debug("Loaded %s data points from %s", len(self._data_points), self.path)
        return self._data_points

    def data_point(self, data_id: str) -> Optional[float]:
        return _clean(self._load().get(data_id))


class CSVMarketDataSource(BaseMarketDataSource):
    """Load market data points from a CSV file with id and value columns."""

    def __init__(self, path: Path, id_column: str = "id", value_column: str = "value"):
        self.path = Path(path)
        self.id_column = id_column
        self.value_column = value_column
        self._data_points: Optional[Dict[str, float]] = None

    def _load(self) -> Dict[str, float]:
        if self._data_points is None:
            df = pd.read_csv(self.path, dtype={self.id_column: str})
            missing = {self.id_column, self.value_column} - set(df.columns)
            if missing:
                raise ValueError(f"Market data file {self.path} is missing columns {sorted(missing)}")
            df = df.drop_duplicates(subset=self.id_column, keep="last")
            self._data_points = dict(zip(df[self.id_column], df[self.value_column]))
            logger.debug("Loaded %s data points from %s", len(self._data_points), self.path)
        return self._data_points

    def data_point(self, data_id: str) -> Optional[float]:
        return _clean(self._load().get(data_id))
