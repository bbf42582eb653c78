"""
Curves, curve-type dispatch and the curve build engine.

Main APIs:
---------
    - CurveBuildEngine / build: Build a named curve construction configuration
    - resolve_curve_type: Resolve a curve type to its currency or index
    - MulticurveBundle: Discount and forward curves of a build
    - CurveBuildingBlockBundle: Jacobian block placement of every curve
"""

from .base import BaseCurve, ConstantCurve, Curve
from .blocks import CurveBuildingBlock, CurveBuildingBlockBundle, CurveBuildingBlockBundleBuilder
from .bundle import FXMatrix, MulticurveBundle, MulticurveBundleBuilder
from .calibration import CalibratedCurve, ConstantCurveCalibrator, CurveCalibrator
from .dispatch import CurveTarget, resolve_curve_type
from .engine import BuildResult, CurveBuildEngine, build

__all__ = [
    # Curves
    "Curve",
    "BaseCurve",
    "ConstantCurve",
    # Dispatch
    "CurveTarget",
    "resolve_curve_type",
    # Bundles
    "FXMatrix",
    "MulticurveBundle",
    "MulticurveBundleBuilder",
    "CurveBuildingBlock",
    "CurveBuildingBlockBundle",
    "CurveBuildingBlockBundleBuilder",
    # Calibration
    "CalibratedCurve",
    "CurveCalibrator",
    "ConstantCurveCalibrator",
    # Engine
    "BuildResult",
    "CurveBuildEngine",
    "build",
]
