"""
Ibor and overnight index conventions.
"""

from dataclasses import dataclass

from curvebuild.conventions.daycount import ACT_360, DayCountConvention
from curvebuild.conventions.types import BusinessDayAdjustment
from curvebuild.schema.identifiers import Currency


@dataclass(frozen=True)
class IborIndexConvention:
    """Specification for an ibor index convention."""

    id: str
    name: str
    currency: Currency
    day_count: DayCountConvention = ACT_360
    business_day_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING
    settlement_days: int = 2
    end_of_month: bool = True

    def __post_init__(self):
        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency.parse(self.currency))


@dataclass(frozen=True)
class OvernightIndexConvention:
    """Specification for an overnight index convention."""

    id: str
    name: str
    currency: Currency
    day_count: DayCountConvention = ACT_360
    publication_lag: int = 0

    def __post_init__(self):
        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency.parse(self.currency))


USD_LIBOR_3M = IborIndexConvention(
    id="USD-LIBOR-3M",
    name="USD-LIBOR-3M",
    currency=Currency("USD"),
)

USD_FED_FUNDS = OvernightIndexConvention(
    id="USD-FEDFUNDS",
    name="USD-FEDFUNDS",
    currency=Currency("USD"),
    publication_lag=1,
)

EUR_EURIBOR_6M = IborIndexConvention(
    id="EUR-EURIBOR-6M",
    name="EUR-EURIBOR-6M",
    currency=Currency("EUR"),
)

EUR_ESTR = OvernightIndexConvention(
    id="EUR-ESTR",
    name="EUR-ESTR",
    currency=Currency("EUR"),
)
