"""
Validation framework for curve construction configurations.

Main APIs:
---------
    - classify: Generic classification of names against a lookup
    - ValidationResult: Immutable partition of the requested names
    - validate_*: Validators for curve groups, exogenous configurations,
      exposure functions, discounting types, ibor securities and curve type
      references
    - validate_configuration: Runs all of the above for one configuration
"""

from .report import ConfigurationValidationReport, validate_configuration
from .result import ValidationResult, ValidationResultBuilder, classify
from .validators import (
    IborCurveReference,
    validate_curve_group,
    validate_discounting_types,
    validate_exogenous_configurations,
    validate_exposure_functions,
    validate_ibor_curve_types,
    validate_ibor_securities,
    validate_overnight_curve_types,
)

__all__ = [
    "classify",
    "ValidationResult",
    "ValidationResultBuilder",
    "IborCurveReference",
    "validate_curve_group",
    "validate_exogenous_configurations",
    "validate_exposure_functions",
    "validate_discounting_types",
    "validate_ibor_securities",
    "validate_ibor_curve_types",
    "validate_overnight_curve_types",
    "ConfigurationValidationReport",
    "validate_configuration",
]
