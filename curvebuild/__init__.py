"""Curve Construction Configuration Engine.

This package resolves named curve construction configurations into validated
curve definitions and assembles them into a multi-curve bundle together with
the Jacobian building blocks needed for sensitivity propagation.

Key modules:
- configuration: Curve construction configuration graph
- validation: Classification of referenced configuration items
- curves: Curve-type dispatch, multicurve bundles and the build engine
- sources: Configuration, convention, security and market data sources
- conventions: Market conventions and day count conventions
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main modules are imported via subpackages
    "configuration",
    "validation",
    "curves",
    "sources",
    "instruments",
    "conventions",
    "exposure",
]
