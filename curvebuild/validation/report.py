"""Aggregate validation of a curve construction configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Tuple

import pandas as pd

from curvebuild.configuration.construction import CurveConstructionConfiguration
from curvebuild.configuration.definitions import ExposureFunctions
from curvebuild.schema.enums import ValidationOutcome
from curvebuild.sources.base import ItemSource

from .result import ValidationResult
from .validators import (
    validate_curve_group,
    validate_discounting_types,
    validate_exogenous_configurations,
    validate_exposure_functions,
    validate_ibor_curve_types,
    validate_ibor_securities,
    validate_overnight_curve_types,
)

CURVE_DEFINITIONS = "curve_definitions"
EXOGENOUS_CONFIGURATIONS = "exogenous_configurations"
IBOR_CURVE_TYPES = "ibor_curve_types"
OVERNIGHT_CURVE_TYPES = "overnight_curve_types"
IBOR_SECURITIES = "ibor_securities"
EXPOSURE_FUNCTIONS = "exposure_functions"

# Ibor indices may be registered as conventions only; the dispatch falls back
# to them, so a missing security does not make a configuration invalid.
_MISSING_TOLERATED = frozenset({IBOR_SECURITIES})


def discounting_key(group_index: int) -> str:
    return f"discounting_types[{group_index}]"


@dataclass(frozen=True)
class ConfigurationValidationReport:
    """Validation results for one configuration, keyed by validator."""

    configuration_name: str
    results: Mapping[str, ValidationResult] = field(default_factory=dict)
    missing_tolerated: FrozenSet[str] = _MISSING_TOLERATED

    @property
    def is_valid(self) -> bool:
        for key, result in self.results.items():
            if result.duplicated_names or result.unsupported:
                return False
            if result.missing_names and key not in self.missing_tolerated:
                return False
        return True

    def problems(self) -> List[Tuple[str, str, ValidationOutcome]]:
        """(validator, name, outcome) for every name that did not validate."""
        rows = []
        for key, result in self.results.items():
            for name, outcome in result.outcomes.items():
                if outcome is ValidationOutcome.VALIDATED:
                    continue
                if outcome is ValidationOutcome.MISSING and key in self.missing_tolerated:
                    continue
                rows.append((key, str(name), outcome))
        return rows

    def to_frame(self) -> pd.DataFrame:
        frames = []
        for key, result in self.results.items():
            frame = result.to_frame()
            frame.insert(0, "validator", key)
            frames.append(frame)
        if not frames:
            return pd.DataFrame(columns=["validator", "name", "outcome"])
        return pd.concat(frames, ignore_index=True)


def validate_configuration(
    configuration: CurveConstructionConfiguration,
    config_source: ItemSource,
    as_of: Optional[datetime] = None,
    security_source: Optional[ItemSource] = None,
    exposure_functions: Optional[ExposureFunctions] = None,
) -> ConfigurationValidationReport:
    """
    Run every applicable validator against a configuration.

    Args:
        configuration: Configuration to validate
        config_source: Source of curve definitions and configurations
        as_of: Version instant, None for latest
        security_source: Source of index securities; ibor securities are only
            checked when given
        exposure_functions: Exposure-function configuration to check as well

    Returns:
        ConfigurationValidationReport
    """
    if configuration is None:
        raise ValueError("configuration must not be None")
    results = {
        CURVE_DEFINITIONS: validate_curve_group(configuration, as_of, config_source),
        EXOGENOUS_CONFIGURATIONS: validate_exogenous_configurations(
            configuration, as_of, config_source
        ),
    }
    for index, group in enumerate(configuration.curve_groups):
        results[discounting_key(index)] = validate_discounting_types(group)
    results[IBOR_CURVE_TYPES] = validate_ibor_curve_types(configuration, as_of, config_source)
    results[OVERNIGHT_CURVE_TYPES] = validate_overnight_curve_types(
        configuration, as_of, config_source
    )
    if security_source is not None:
        results[IBOR_SECURITIES] = validate_ibor_securities(configuration, as_of, security_source)
    if exposure_functions is not None:
        results[EXPOSURE_FUNCTIONS] = validate_exposure_functions(exposure_functions)
    return ConfigurationValidationReport(configuration.name, MappingProxyType(results))
