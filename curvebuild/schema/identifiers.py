"""
Currency and tenor identifiers.
"""

import re
from dataclasses import dataclass
from typing import Optional

import QuantLib as ql

_CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
_TENOR_PATTERN = re.compile(r"^(\d+)([DWMY])$")

_PERIOD_UNITS = {
    "D": ql.Days,
    "W": ql.Weeks,
    "M": ql.Months,
    "Y": ql.Years,
}


@dataclass(frozen=True, order=True)
class Currency:
    """ISO-4217 style three letter currency code."""

    code: str

    def __post_init__(self):
        if not isinstance(self.code, str) or not _CURRENCY_PATTERN.match(self.code):
            raise ValueError(f"Invalid currency code: {self.code!r}")

    @classmethod
    def parse(cls, text: str) -> "Currency":
        """
        Parse a currency code, upper-casing it first.

        Raises:
            ValueError: If the text is not three ASCII letters
        """
        if not isinstance(text, str):
            raise ValueError(f"Invalid currency code: {text!r}")
        return cls(text.strip().upper())

    @property
    def ql_currency(self) -> Optional[ql.Currency]:
        """QuantLib currency object, None for codes QuantLib does not ship."""
        factory = getattr(ql, f"{self.code}Currency", None)
        return factory() if factory is not None else None

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class Tenor:
    """Period such as 3M or 1Y."""

    code: str

    def __post_init__(self):
        if not isinstance(self.code, str) or not _TENOR_PATTERN.match(self.code):
            raise ValueError(f"Invalid tenor: {self.code!r}")

    @classmethod
    def parse(cls, text: str) -> "Tenor":
        if isinstance(text, Tenor):
            return text
        if not isinstance(text, str):
            raise ValueError(f"Invalid tenor: {text!r}")
        return cls(text.strip().upper())

    @property
    def length(self) -> int:
        return int(_TENOR_PATTERN.match(self.code).group(1))

    @property
    def unit(self) -> str:
        return _TENOR_PATTERN.match(self.code).group(2)

    @property
    def period(self) -> ql.Period:
        """Equivalent QuantLib period."""
        return ql.Period(self.length, _PERIOD_UNITS[self.unit])

    def __str__(self) -> str:
        return self.code


THREE_MONTHS = Tenor("3M")
SIX_MONTHS = Tenor("6M")
