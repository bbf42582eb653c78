"""
Fatal error taxonomy for curve construction.

Classification outcomes (missing, duplicated, unsupported) are never raised;
they are collected into a ValidationResult. Everything here aborts a build.
"""

from typing import Optional


class CurveBuildError(Exception):
    """Base class for failures that abort a curve build."""

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or name)


class ConfigurationNotFound(CurveBuildError):
    """The named curve construction configuration could not be resolved."""

    def __init__(self, name: str):
        super().__init__(name, f"Could not get curve construction configuration called {name}")


class UnsupportedConfigurationReference(CurveBuildError, ValueError):
    """A discounting reference could not be parsed as a currency."""

    def __init__(self, name: str):
        super().__init__(name, f"Could not parse discounting reference {name!r} as a currency")


class IndexResolutionFailure(CurveBuildError):
    """Neither a security nor a convention could be found for an index id."""

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(
            name, message or f"Could not find a security or an index convention with id {name}"
        )


class MissingMarketData(CurveBuildError):
    """No market data point was available to calibrate a curve."""

    def __init__(self, name: str, data_id: Optional[str] = None):
        self.data_id = data_id or name
        super().__init__(name, f"Could not get market value for curve {name} (id {self.data_id})")


class BlockCollisionError(CurveBuildError):
    """Two Jacobian blocks claim overlapping column ranges.

    Signals a malformed exogenous bundle, never a user input problem.
    """


class MissingExogenousBundle(CurveBuildError):
    """An exogenous configuration was named but no built bundle was supplied."""

    def __init__(self, name: str):
        super().__init__(name, f"No built bundle supplied for exogenous configuration {name}")


class CurveAttachmentConflict(CurveBuildError):
    """A currency or index already has a different curve attached."""


class ConfigurationValidationError(CurveBuildError):
    """Raised in strict mode when a configuration does not validate cleanly."""

    def __init__(self, name: str, report):
        self.report = report
        super().__init__(name, f"Curve construction configuration {name} failed validation")
