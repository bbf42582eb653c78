"""
Curves held by a multicurve bundle.

Calibration is pluggable, so the bundle only relies on the small ``Curve``
protocol. ``BaseCurve`` supplies the date handling shared by concrete curves.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta
from typing import List, Protocol, Union

from curvebuild.conventions.daycount import DayCountConvention, get_day_count_convention

TimeLike = Union[datetime, date, float]


class Curve(Protocol):
    """What a multicurve bundle needs from a curve."""

    name: str

    def df(self, t: TimeLike) -> float:
        ...

    def zero(self, t: TimeLike) -> float:
        ...


class BaseCurve(ABC):
    """Dated curve whose times are year fractions from the reference date."""

    def __init__(
        self,
        reference_date: date,
        name: str = "",
        time_day_count: Union[str, DayCountConvention] = "ACT/365F",
    ):
        """
        Args:
            reference_date: Curve reference date
            name: Curve name, the key a build reports it under
            time_day_count: Convention turning dates into curve times
        """
        self.reference_date = reference_date
        self.name = name
        self.time_day_count = get_day_count_convention(time_day_count)

    def time(self, t: TimeLike) -> float:
        """Curve time of a date; numbers are already times."""
        if isinstance(t, (int, float)):
            return float(t)
        return self.time_day_count.year_fraction(self.reference_date, t)

    def date_of(self, t: TimeLike) -> date:
        if isinstance(t, datetime):
            return t.date()
        if isinstance(t, date):
            return t
        return self.reference_date + timedelta(days=round(t * 365.25))

    @property
    @abstractmethod
    def parameters(self) -> List[float]:
        """Calibrated parameters, one Jacobian row each."""

    @abstractmethod
    def df(self, t: TimeLike) -> float:
        pass

    def zero(self, t: TimeLike) -> float:
        """Continuously compounded zero rate."""
        tau = self.time(t)
        if tau <= 0:
            return 0.0
        discount = self.df(t)
        if discount <= 0:
            raise ValueError(f"Non-positive discount factor: {discount}")
        return -math.log(discount) / tau

    def forward(self, u: TimeLike, v: TimeLike, dcc: str = "ACT/360") -> float:
        """Simply compounded forward rate between u and v."""
        accrual = get_day_count_convention(dcc).year_fraction(self.date_of(u), self.date_of(v))
        if accrual <= 0:
            raise ValueError("Forward period must be positive")
        return (self.df(u) / self.df(v) - 1.0) / accrual

    def __str__(self) -> str:
        if not self.name:
            return type(self).__name__
        return f"{type(self).__name__}({self.name})"


class ConstantCurve(BaseCurve):
    """Flat curve: one continuously compounded zero rate for every time."""

    def __init__(
        self,
        reference_date: date,
        rate: float,
        name: str = "",
        time_day_count: Union[str, DayCountConvention] = "ACT/365F",
    ):
        super().__init__(reference_date, name, time_day_count)
        if not math.isfinite(rate):
            raise ValueError(f"Curve rate must be finite: {rate}")
        self.rate = float(rate)

    @property
    def parameters(self) -> List[float]:
        return [self.rate]

    def df(self, t: TimeLike) -> float:
        return math.exp(-self.rate * self.time(t))

    def zero(self, t: TimeLike) -> float:
        return self.rate

    def _key(self):
        return (self.name, self.rate, self.reference_date)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ConstantCurve):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"ConstantCurve(name={self.name!r}, rate={self.rate})"
