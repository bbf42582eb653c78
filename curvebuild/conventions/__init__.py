"""Market conventions used by index definitions."""

from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
)
from .types import BusinessDayAdjustment

__all__ = [
    "DayCountConvention",
    "get_day_count_convention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
    "BusinessDayAdjustment",
]
