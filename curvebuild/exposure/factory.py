"""Name-based factory for exposure functions."""

import logging
from typing import Dict, Optional, Type

from curvebuild.configuration.definitions import ExposureFunctions

from .functions import (
    CounterpartyExposureFunction,
    CurrencyExposureFunction,
    ExposureFunction,
    SecurityAndCurrencyExposureFunction,
    SecurityExposureFunction,
    SecurityTypeExposureFunction,
    Trade,
    TradeAttributeExposureFunction,
)

logger = logging.getLogger(__name__)

EXPOSURE_FUNCTIONS: Dict[str, Type[ExposureFunction]] = {
    cls.name: cls
    for cls in (
        CurrencyExposureFunction,
        SecurityExposureFunction,
        SecurityTypeExposureFunction,
        SecurityAndCurrencyExposureFunction,
        CounterpartyExposureFunction,
        TradeAttributeExposureFunction,
    )
}


def get_exposure_function(name: str) -> ExposureFunction:
    """
    Create the exposure function registered under a name.

    Raises:
        KeyError: If no exposure function has that name
    """
    try:
        return EXPOSURE_FUNCTIONS[name]()
    except KeyError:
        raise KeyError(f"Unknown exposure function: {name}") from None


def resolve_curve_configuration(
    exposure_functions: ExposureFunctions, trade: Trade
) -> Optional[str]:
    """
    Find the curve construction configuration name for a trade.

    Exposure functions are tried in order; the first id with a mapping wins.

    Returns:
        Configuration name, or None if no id is mapped
    """
    for function_name in exposure_functions.exposure_functions:
        function = get_exposure_function(function_name)
        for exposure_id in function.get_ids(trade):
            if exposure_id in exposure_functions.ids_to_names:
                return exposure_functions.ids_to_names[exposure_id]
    logger.debug("No configuration for trade %s in %s", trade.security_id, exposure_functions.name)
    return None
