"""
Curve-type dispatch.

Maps a curve type configuration to the currency or index a built curve is
attached to. Dispatch is on the variant's ``kind`` tag; every CurveTypeKind
has exactly one resolver in ``_RESOLVERS``.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Optional, Union

from curvebuild.configuration.curve_types import (
    CurveTypeConfiguration,
    DiscountingCurveType,
    IborCurveType,
    OvernightCurveType,
)
from curvebuild.exceptions import IndexResolutionFailure, UnsupportedConfigurationReference
from curvebuild.instruments.conventions import IborIndexConvention, OvernightIndexConvention
from curvebuild.instruments.indices import IborIndex, OvernightIndex
from curvebuild.instruments.securities import IborIndexSecurity, OvernightIndexSecurity
from curvebuild.schema.enums import CurveTypeKind
from curvebuild.schema.identifiers import Currency, Tenor
from curvebuild.sources.base import ItemSource

logger = logging.getLogger(__name__)

CurveTarget = Union[Currency, IborIndex, OvernightIndex]


def _single(source: ItemSource, item_type, name: str, as_of: Optional[datetime]):
    # Sources may raise when a value is not found
    try:
        return source.get_single(item_type, name, as_of)
    except (LookupError, ValueError) as exc:
        raise IndexResolutionFailure(name, f"Lookup of {name} failed: {exc}") from exc


def _ibor_index(convention: IborIndexConvention, tenor: Tenor) -> IborIndex:
    return IborIndex(
        name=convention.name,
        currency=convention.currency,
        tenor=tenor,
        day_count=convention.day_count,
        business_day_adjustment=convention.business_day_adjustment,
        settlement_days=convention.settlement_days,
        end_of_month=convention.end_of_month,
    )


def _overnight_index(convention: OvernightIndexConvention) -> OvernightIndex:
    return OvernightIndex(
        name=convention.name,
        currency=convention.currency,
        day_count=convention.day_count,
        publication_lag=convention.publication_lag,
    )


def _resolve_discounting(
    curve_type: DiscountingCurveType, as_of, security_source, convention_source
) -> Currency:
    try:
        return Currency.parse(curve_type.reference)
    except ValueError:
        raise UnsupportedConfigurationReference(curve_type.reference) from None


def _resolve_ibor(
    curve_type: IborCurveType, as_of, security_source, convention_source
) -> IborIndex:
    convention_id = curve_type.convention_id
    security = _single(security_source, IborIndexSecurity, convention_id, as_of)
    if security is None:
        logger.info("Cannot find ibor index security with id %s: using convention", convention_id)
        convention = _single(convention_source, IborIndexConvention, convention_id, as_of)
        if convention is None:
            raise IndexResolutionFailure(convention_id)
        return _ibor_index(convention, curve_type.tenor)

    convention = _single(convention_source, IborIndexConvention, security.convention_id, as_of)
    if convention is None:
        raise IndexResolutionFailure(
            security.convention_id,
            f"Could not find a convention with id {security.convention_id} "
            f"for ibor index security {convention_id}",
        )
    return _ibor_index(convention, security.tenor)


def _resolve_overnight(
    curve_type: OvernightCurveType, as_of, security_source, convention_source
) -> OvernightIndex:
    convention_id = curve_type.convention_id
    security = _single(security_source, OvernightIndexSecurity, convention_id, as_of)
    if security is None:
        logger.info(
            "Cannot find overnight index security with id %s: using convention", convention_id
        )
        convention = _single(convention_source, OvernightIndexConvention, convention_id, as_of)
        if convention is None:
            raise IndexResolutionFailure(convention_id)
        return _overnight_index(convention)

    convention = _single(
        convention_source, OvernightIndexConvention, security.convention_id, as_of
    )
    if convention is None:
        raise IndexResolutionFailure(
            security.convention_id,
            f"Could not find a convention with id {security.convention_id} "
            f"for overnight index security {convention_id}",
        )
    return _overnight_index(convention)


_RESOLVERS: Dict[CurveTypeKind, Callable[..., CurveTarget]] = {
    CurveTypeKind.DISCOUNTING: _resolve_discounting,
    CurveTypeKind.IBOR: _resolve_ibor,
    CurveTypeKind.OVERNIGHT: _resolve_overnight,
}


def resolve_curve_type(
    curve_type: CurveTypeConfiguration,
    as_of: Optional[datetime],
    security_source: ItemSource,
    convention_source: ItemSource,
) -> CurveTarget:
    """
    Resolve a curve type configuration to its currency or index.

    Ibor and overnight ids are looked up as securities first and as
    conventions second.

    Raises:
        UnsupportedConfigurationReference: Discounting reference is not a currency
        IndexResolutionFailure: Neither a security nor a convention was found
    """
    resolver = _RESOLVERS.get(getattr(curve_type, "kind", None))
    if resolver is None:
        raise TypeError(f"Unsupported curve type configuration: {curve_type!r}")
    return resolver(curve_type, as_of, security_source, convention_source)
