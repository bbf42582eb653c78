"""
Core enumeration types for the curve construction engine.
"""

from enum import Enum


class CurveTypeKind(Enum):
    """Tag of a curve type configuration variant."""

    DISCOUNTING = "DISCOUNTING"
    IBOR = "IBOR"
    OVERNIGHT = "OVERNIGHT"


class ValidationOutcome(Enum):
    """Classification of a single requested name."""

    VALIDATED = "VALIDATED"
    MISSING = "MISSING"
    DUPLICATED = "DUPLICATED"
    UNSUPPORTED = "UNSUPPORTED"


class DataSourceType(Enum):
    """Supported market data source types."""

    MEMORY = "memory"
    JSON = "json"
    CSV = "csv"
