"""Exposure functions mapping trades to curve construction configurations."""

from .factory import (
    EXPOSURE_FUNCTIONS,
    get_exposure_function,
    resolve_curve_configuration,
)
from .functions import (
    CounterpartyExposureFunction,
    CurrencyExposureFunction,
    ExposureFunction,
    SecurityAndCurrencyExposureFunction,
    SecurityExposureFunction,
    SecurityTypeExposureFunction,
    TradeAttributeExposureFunction,
    Trade,
)

__all__ = [
    "Trade",
    "ExposureFunction",
    "CurrencyExposureFunction",
    "SecurityExposureFunction",
    "SecurityTypeExposureFunction",
    "SecurityAndCurrencyExposureFunction",
    "CounterpartyExposureFunction",
    "TradeAttributeExposureFunction",
    "EXPOSURE_FUNCTIONS",
    "get_exposure_function",
    "resolve_curve_configuration",
]
