from datetime import datetime

import pytest

from curvebuild.configuration import (
    CurveConstructionConfiguration,
    CurveDefinition,
    CurveGroupConfiguration,
    DiscountingCurveType,
    IborCurveType,
    OvernightCurveType,
)
from curvebuild.instruments.conventions import EUR_ESTR, USD_FED_FUNDS, USD_LIBOR_3M
from curvebuild.sources import InMemoryItemSource, InMemoryMarketDataSource


@pytest.fixture
def as_of():
    return datetime(2026, 2, 13, 12, 0)


@pytest.fixture
def usd_config():
    return CurveConstructionConfiguration(
        name="USD-1",
        curve_groups=[
            CurveGroupConfiguration(
                {
                    "USD-OIS": [DiscountingCurveType("USD")],
                    "USD-3M": [IborCurveType("USD-LIBOR-3M", "3M")],
                }
            )
        ],
    )


@pytest.fixture
def config_source(usd_config):
    source = InMemoryItemSource()
    source.add(usd_config.name, usd_config)
    for name in ("USD-OIS", "USD-3M"):
        source.add(name, CurveDefinition(name))
    return source


@pytest.fixture
def convention_source():
    source = InMemoryItemSource()
    for convention in (USD_LIBOR_3M, USD_FED_FUNDS, EUR_ESTR):
        source.add(convention.id, convention)
    return source


@pytest.fixture
def security_source():
    return InMemoryItemSource()


@pytest.fixture
def market_data():
    return InMemoryMarketDataSource(
        {"USD-OIS": 0.0430, "USD-3M": 0.0455, "USD-FF": 0.0428, "EUR-OIS": 0.0210}
    )


@pytest.fixture
def overnight_type():
    return OvernightCurveType("USD-FEDFUNDS")
