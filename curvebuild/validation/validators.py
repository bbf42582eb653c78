"""
Concrete validators.

Each validator is a plain function that gathers the names a configuration
references and hands them to :func:`classify` with a lookup bound to the right
source. Sources are only read.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime
from typing import Callable, Dict, Hashable, Iterable, List, NamedTuple, Optional, Union

from curvebuild.configuration.construction import (
    CurveConstructionConfiguration,
    CurveGroupConfiguration,
)
from curvebuild.configuration.curve_types import CurveTypeConfiguration
from curvebuild.configuration.definitions import CurveDefinition, ExposureFunctions
from curvebuild.exposure.factory import get_exposure_function
from curvebuild.exposure.functions import ExposureFunction
from curvebuild.instruments.securities import IborIndexSecurity
from curvebuild.schema.enums import CurveTypeKind
from curvebuild.schema.identifiers import Currency, Tenor
from curvebuild.sources.base import ItemSource

from .result import ValidationResult, ValidationResultBuilder, classify, unique_in_order

logger = logging.getLogger(__name__)


class IborCurveReference(NamedTuple):
    """An ibor index reference: convention id and tenor."""

    convention_id: str
    tenor: Tenor


def _require(value, name: str) -> None:
    if value is None:
        raise ValueError(f"{name} must not be None")


def validate_curve_group(
    group: Union[CurveGroupConfiguration, CurveConstructionConfiguration],
    as_of: Optional[datetime],
    config_source: ItemSource,
) -> ValidationResult[CurveDefinition]:
    """
    Resolve each curve name of a group (or of every group of a configuration)
    to its curve definition.
    """
    _require(group, "group")
    _require(config_source, "config_source")
    return classify(
        group.curve_names(),
        CurveDefinition,
        lambda name: config_source.get(object, name, as_of),
    )


def validate_exogenous_configurations(
    configuration: CurveConstructionConfiguration,
    as_of: Optional[datetime],
    config_source: ItemSource,
) -> ValidationResult[CurveConstructionConfiguration]:
    """Resolve each exogenous configuration name to a configuration."""
    _require(configuration, "configuration")
    _require(config_source, "config_source")
    return classify(
        configuration.exogenous_configurations,
        CurveConstructionConfiguration,
        lambda name: config_source.get(object, name, as_of),
    )


def validate_exposure_functions(
    names: Union[ExposureFunctions, Iterable[str]],
    factory: Callable[[str], ExposureFunction] = get_exposure_function,
) -> ValidationResult[ExposureFunction]:
    """
    Resolve exposure function names through the factory.

    Unknown names are reported as missing.
    """
    _require(names, "names")
    if isinstance(names, ExposureFunctions):
        names = names.exposure_functions
    return classify(names, ExposureFunction, lambda name: [factory(name)])


def validate_discounting_types(group: CurveGroupConfiguration) -> ValidationResult[Currency]:
    """
    Check the discounting references of a group.

    A reference that does not parse as a currency is unsupported. A currency
    discounted by more than one curve of the group is duplicated, under every
    reference that names it.
    """
    _require(group, "group")
    curves_by_currency: Dict[Currency, List[str]] = {}
    references_by_currency: Dict[Currency, List[str]] = {}
    builder: ValidationResultBuilder = ValidationResultBuilder(Currency)

    for curve_name, curve_type in group.types_of_kind(CurveTypeKind.DISCOUNTING):
        reference = curve_type.reference
        try:
            currency = Currency.parse(reference)
        except ValueError:
            if reference not in builder:
                builder.unsupported(reference, reference)
            continue
        curves = curves_by_currency.setdefault(currency, [])
        if curve_name not in curves:
            curves.append(curve_name)
        references = references_by_currency.setdefault(currency, [])
        if reference not in references:
            references.append(reference)

    for currency, references in references_by_currency.items():
        for reference in references:
            if len(curves_by_currency[currency]) > 1:
                builder.duplicated(reference)
            else:
                builder.validated(reference, currency)
    return builder.build()


def validate_ibor_securities(
    configuration: Union[CurveConstructionConfiguration, Iterable[str]],
    as_of: Optional[datetime],
    security_source: ItemSource,
) -> ValidationResult[IborIndexSecurity]:
    """
    Resolve ibor convention ids to ibor index securities.

    A security of another kind is reported as unsupported.
    """
    _require(configuration, "configuration")
    _require(security_source, "security_source")
    if isinstance(configuration, CurveConstructionConfiguration):
        convention_ids = [
            curve_type.convention_id
            for group in configuration.curve_groups
            for _, curve_type in group.types_of_kind(CurveTypeKind.IBOR)
        ]
    else:
        convention_ids = list(configuration)
    return classify(
        convention_ids,
        IborIndexSecurity,
        lambda convention_id: security_source.get(object, convention_id, as_of),
    )


def _reference_counts(
    configuration: CurveConstructionConfiguration,
    as_of: Optional[datetime],
    config_source: ItemSource,
    kind: CurveTypeKind,
    key: Callable[[CurveTypeConfiguration], Hashable],
):
    counts: Dict[Hashable, int] = {}
    missing: List[str] = []
    visited = {configuration.name}
    queue = deque([configuration])

    while queue:
        current = queue.popleft()
        for group in current.curve_groups:
            references_by_curve: Dict[str, set] = {}
            for curve_name, curve_type in group.types_of_kind(kind):
                references_by_curve.setdefault(curve_name, set()).add(key(curve_type))
            for references in references_by_curve.values():
                for reference in references:
                    counts[reference] = counts.get(reference, 0) + 1

        for name in current.exogenous_configurations:
            if name in visited:
                continue
            visited.add(name)
            matches = config_source.get(CurveConstructionConfiguration, name, as_of)
            if len(matches) != 1:
                missing.append(name)
                continue
            queue.append(matches[0])
    return counts, missing


def _validate_curve_type_references(
    configuration, as_of, config_source, kind, key, item_type
) -> ValidationResult:
    _require(configuration, "configuration")
    _require(config_source, "config_source")
    counts, missing = _reference_counts(configuration, as_of, config_source, kind, key)
    builder: ValidationResultBuilder = ValidationResultBuilder(item_type)
    for reference, count in counts.items():
        if count > 1:
            builder.duplicated(reference)
        else:
            builder.validated(reference, reference)
    for name in unique_in_order(missing):
        if name not in builder:
            builder.missing(name)
    return builder.build()


def validate_ibor_curve_types(
    configuration: CurveConstructionConfiguration,
    as_of: Optional[datetime],
    config_source: ItemSource,
) -> ValidationResult[IborCurveReference]:
    """
    Check that each ibor reference is used by one curve only, across the
    configuration and all exogenous configurations it reaches.

    Exogenous configurations that cannot be resolved are reported as missing.
    """
    return _validate_curve_type_references(
        configuration,
        as_of,
        config_source,
        CurveTypeKind.IBOR,
        lambda curve_type: IborCurveReference(curve_type.convention_id, curve_type.tenor),
        IborCurveReference,
    )


def validate_overnight_curve_types(
    configuration: CurveConstructionConfiguration,
    as_of: Optional[datetime],
    config_source: ItemSource,
) -> ValidationResult[str]:
    """Overnight counterpart of :func:`validate_ibor_curve_types`."""
    return _validate_curve_type_references(
        configuration,
        as_of,
        config_source,
        CurveTypeKind.OVERNIGHT,
        lambda curve_type: curve_type.convention_id,
        str,
    )
