"""Concrete indices that forward curves are attached to."""

from dataclasses import dataclass
from typing import Union

from curvebuild.conventions.daycount import DayCountConvention
from curvebuild.conventions.types import BusinessDayAdjustment
from curvebuild.schema.identifiers import Currency, Tenor


@dataclass(frozen=True)
class IborIndex:
    name: str
    currency: Currency
    tenor: Tenor
    day_count: DayCountConvention
    business_day_adjustment: BusinessDayAdjustment
    settlement_days: int
    end_of_month: bool

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class OvernightIndex:
    name: str
    currency: Currency
    day_count: DayCountConvention
    publication_lag: int

    def __str__(self) -> str:
        return self.name


Index = Union[IborIndex, OvernightIndex]
