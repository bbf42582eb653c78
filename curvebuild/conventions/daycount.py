"""
Day count conventions carried by index conventions and curves.

Each convention is a name bound to a QuantLib day counter; lookups accept the
usual market aliases.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Tuple, Union

import QuantLib as ql

DateLike = Union[date, datetime]


def _ql_date(value: DateLike) -> ql.Date:
    if isinstance(value, datetime):
        value = value.date()
    return ql.Date(value.day, value.month, value.year)


@dataclass(frozen=True)
class DayCountConvention:
    """A named day count convention.

    Equality and hashing use the canonical name only, so conventions can key
    dictionaries and sit inside frozen index definitions.
    """

    name: str
    ql_daycount: ql.DayCounter = field(compare=False, repr=False)
    aliases: Tuple[str, ...] = field(default=(), compare=False, repr=False)

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        return self.ql_daycount.yearFraction(_ql_date(start), _ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        return self.ql_daycount.dayCount(_ql_date(start), _ql_date(end))

    def __str__(self) -> str:
        return self.name


ACT_360 = DayCountConvention("ACT/360", ql.Actual360(), ("ACTUAL/360",))
ACT_365F = DayCountConvention("ACT/365F", ql.Actual365Fixed(), ("ACT/365", "ACTUAL/365F"))
THIRTY_360E = DayCountConvention(
    "30E/360", ql.Thirty360(ql.Thirty360.European), ("30/360E", "30/360 EUROPEAN")
)
THIRTY_360U = DayCountConvention(
    "30U/360", ql.Thirty360(ql.Thirty360.BondBasis), ("30/360", "30/360 US")
)
ACT_ACT = DayCountConvention(
    "ACT/ACT", ql.ActualActual(ql.ActualActual.ISDA), ("ACTUAL/ACTUAL", "ACT/ACT ISDA")
)

DAY_COUNT_CONVENTIONS: Dict[str, DayCountConvention] = {}
for _convention in (ACT_360, ACT_365F, THIRTY_360E, THIRTY_360U, ACT_ACT):
    for _key in (_convention.name,) + _convention.aliases:
        DAY_COUNT_CONVENTIONS[_key] = _convention


def get_day_count_convention(name: Union[str, DayCountConvention]) -> DayCountConvention:
    """
    Look up a day count convention by name or alias, case-insensitively.

    Raises:
        ValueError: If the name is unknown
    """
    if isinstance(name, DayCountConvention):
        return name
    try:
        return DAY_COUNT_CONVENTIONS[name.strip().upper()]
    except KeyError:
        raise ValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {sorted(DAY_COUNT_CONVENTIONS)}"
        ) from None
