"""
Exposure functions.

An exposure function turns a trade into the ids that an ExposureFunctions
configuration maps to curve construction configuration names.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, List, Mapping, Optional

from curvebuild.schema.identifiers import Currency


@dataclass(frozen=True)
class Trade:
    """The trade fields exposure functions read."""

    security_id: str
    security_type: str
    currency: Currency
    counterparty: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.currency, str):
            object.__setattr__(self, "currency", Currency.parse(self.currency))

    def __hash__(self) -> int:
        return hash((self.security_id, self.security_type, self.currency, self.counterparty))


class ExposureFunction(ABC):
    """Maps a trade to exposure ids of the form ``scheme~value``."""

    name: ClassVar[str] = ""

    @abstractmethod
    def get_ids(self, trade: Trade) -> List[str]:
        pass

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CurrencyExposureFunction(ExposureFunction):
    name = "Currency"

    def get_ids(self, trade: Trade) -> List[str]:
        return [f"CurrencyISO~{trade.currency}"]


class SecurityExposureFunction(ExposureFunction):
    name = "Security"

    def get_ids(self, trade: Trade) -> List[str]:
        return [f"SecurityId~{trade.security_id}"]


class SecurityTypeExposureFunction(ExposureFunction):
    name = "Security Type"

    def get_ids(self, trade: Trade) -> List[str]:
        return [f"SecurityType~{trade.security_type}"]


class SecurityAndCurrencyExposureFunction(ExposureFunction):
    name = "Security / Currency"

    def get_ids(self, trade: Trade) -> List[str]:
        return [f"SecurityType~{trade.security_type}_{trade.currency}"]


class CounterpartyExposureFunction(ExposureFunction):
    name = "Counterparty"

    def get_ids(self, trade: Trade) -> List[str]:
        if trade.counterparty is None:
            return []
        return [f"Counterparty~{trade.counterparty}"]


class TradeAttributeExposureFunction(ExposureFunction):
    name = "Trade Attribute"

    def get_ids(self, trade: Trade) -> List[str]:
        return [f"TradeAttribute~{key}={value}" for key, value in sorted(trade.attributes.items())]
