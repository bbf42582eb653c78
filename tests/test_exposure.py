import pytest

from curvebuild.configuration import ExposureFunctions
from curvebuild.exposure import (
    EXPOSURE_FUNCTIONS,
    CurrencyExposureFunction,
    Trade,
    get_exposure_function,
    resolve_curve_configuration,
)


@pytest.fixture(scope="module")
def trade():
    return Trade(
        security_id="SWAP-001",
        security_type="SWAP",
        currency="usd",
        counterparty="CPTY-A",
        attributes={"desk": "rates"},
    )


@pytest.fixture(scope="module")
def exposure_functions():
    return ExposureFunctions(
        "Default",
        ["Security", "Security / Currency", "Currency"],
        {
            "SecurityType~SWAP_USD": "USD-1",
            "CurrencyISO~USD": "USD-FALLBACK",
        },
    )


def test_factory_knows_every_registered_name():
    for name, cls in EXPOSURE_FUNCTIONS.items():
        assert isinstance(get_exposure_function(name), cls)


def test_factory_unknown_name():
    with pytest.raises(KeyError):
        get_exposure_function("Region")


def test_exposure_ids(trade):
    assert CurrencyExposureFunction().get_ids(trade) == ["CurrencyISO~USD"]
    assert get_exposure_function("Counterparty").get_ids(trade) == ["Counterparty~CPTY-A"]
    assert get_exposure_function("Trade Attribute").get_ids(trade) == ["TradeAttribute~desk=rates"]


def test_first_mapped_exposure_function_wins(trade, exposure_functions):
    assert resolve_curve_configuration(exposure_functions, trade) == "USD-1"


def test_unmapped_trade(exposure_functions):
    trade = Trade("BOND-1", "BOND", "EUR")
    assert resolve_curve_configuration(exposure_functions, trade) is None
