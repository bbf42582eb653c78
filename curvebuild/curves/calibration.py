"""Curve calibrators used by the build engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Protocol

import numpy as np

from curvebuild.configuration.definitions import CurveDefinition
from curvebuild.exceptions import MissingMarketData

from .base import ConstantCurve, Curve


@dataclass(frozen=True)
class CalibratedCurve:
    """A calibrated curve and the Jacobian of its parameters to its quotes."""

    curve: Curve
    jacobian: np.ndarray

    @property
    def block_size(self) -> int:
        return int(np.shape(self.jacobian)[0])


class CurveCalibrator(Protocol):
    """Turns a curve definition and its market data into a calibrated curve."""

    def calibrate(
        self,
        curve_name: str,
        definition: CurveDefinition,
        market_data: Optional[float],
        as_of: Optional[datetime],
    ) -> CalibratedCurve:
        ...


class ConstantCurveCalibrator:
    """
    Calibrates every curve to its single quoted level.

    The calibrated zero rate equals the quote, so the Jacobian is the 1x1
    identity.
    """

    def calibrate(
        self,
        curve_name: str,
        definition: CurveDefinition,
        market_data: Optional[float],
        as_of: Optional[datetime] = None,
    ) -> CalibratedCurve:
        if market_data is None or not math.isfinite(market_data):
            raise MissingMarketData(curve_name, definition.data_id)
        reference_date = _reference_date(as_of)
        curve = ConstantCurve(reference_date, float(market_data), name=curve_name)
        return CalibratedCurve(curve=curve, jacobian=np.eye(1))


def _reference_date(as_of: Optional[datetime]) -> date:
    if as_of is None:
        return date.today()
    if isinstance(as_of, datetime):
        return as_of.date()
    return as_of
