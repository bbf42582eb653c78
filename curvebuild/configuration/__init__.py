"""Curve construction configuration graph."""

from .construction import CurveConstructionConfiguration, CurveGroupConfiguration
from .curve_types import (
    CurveTypeConfiguration,
    DiscountingCurveType,
    IborCurveType,
    OvernightCurveType,
)
from .definitions import CurveDefinition, ExposureFunctions

__all__ = [
    "CurveConstructionConfiguration",
    "CurveGroupConfiguration",
    "CurveTypeConfiguration",
    "DiscountingCurveType",
    "IborCurveType",
    "OvernightCurveType",
    "CurveDefinition",
    "ExposureFunctions",
]
