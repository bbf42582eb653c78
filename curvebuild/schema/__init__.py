"""
Core schemas for the curve construction engine.
"""

from .enums import CurveTypeKind, DataSourceType, ValidationOutcome
from .identifiers import Currency, Tenor

__all__ = [
    # Enums
    "CurveTypeKind",
    "ValidationOutcome",
    "DataSourceType",
    # Identifiers
    "Currency",
    "Tenor",
]
