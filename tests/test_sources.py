import json
from datetime import datetime

import pytest

from curvebuild.configuration import CurveDefinition
from curvebuild.instruments import IborIndexConvention
from curvebuild.instruments.conventions import USD_LIBOR_3M
from curvebuild.schema import DataSourceType
from curvebuild.sources import (
    CSVMarketDataSource,
    InMemoryItemSource,
    ItemSource,
    JSONMarketDataSource,
    MarketDataSource,
    create_market_data_source,
)


def test_in_memory_source_satisfies_protocol():
    assert isinstance(InMemoryItemSource(), ItemSource)


def test_get_filters_by_type():
    source = InMemoryItemSource()
    source.add("USD-LIBOR-3M", USD_LIBOR_3M)
    source.add("USD-LIBOR-3M", CurveDefinition("USD-LIBOR-3M"))

    assert source.get(IborIndexConvention, "USD-LIBOR-3M") == [USD_LIBOR_3M]
    assert len(source.get(object, "USD-LIBOR-3M")) == 2
    assert source.get_single(IborIndexConvention, "missing") is None


def test_replace_versions_items():
    source = InMemoryItemSource()
    old = CurveDefinition("USD-OIS", "USD-OIS-OLD")
    new = CurveDefinition("USD-OIS", "USD-OIS-NEW")
    source.add("USD-OIS", old, datetime(2025, 1, 1))
    source.replace("USD-OIS", new, datetime(2026, 1, 1))

    assert source.get_single(CurveDefinition, "USD-OIS") == new
    assert source.get_single(CurveDefinition, "USD-OIS", datetime(2025, 6, 1)) == old
    assert source.get(CurveDefinition, "USD-OIS", datetime(2024, 6, 1)) == []
    assert source.get(CurveDefinition, "USD-OIS", datetime(2026, 6, 1)) == [new]


def test_remove_closes_versions_at_instant():
    source = InMemoryItemSource()
    definition = CurveDefinition("USD-OIS")
    source.add("USD-OIS", definition, datetime(2020, 1, 1))
    source.remove("USD-OIS", datetime(2021, 1, 1))

    assert source.get(CurveDefinition, "USD-OIS", datetime(2020, 6, 1)) == [definition]
    assert source.get(CurveDefinition, "USD-OIS", datetime(2021, 1, 1)) == []
    assert source.get(CurveDefinition, "USD-OIS", datetime(2022, 1, 1)) == []
    assert source.get_single(CurveDefinition, "USD-OIS") is None
    # history is kept
    assert len(source) == 1
    assert source.names() == ["USD-OIS"]


def test_remove_requires_instant():
    with pytest.raises(ValueError):
        InMemoryItemSource().remove("USD-OIS", None)


def test_add_rejects_empty_name():
    with pytest.raises(ValueError):
        InMemoryItemSource().add("", CurveDefinition("x"))


def test_memory_market_data_treats_non_finite_as_missing():
    source = create_market_data_source(
        DataSourceType.MEMORY,
        data_points={"USD-OIS": 0.043, "USD-3M": float("nan"), "USD-6M": float("inf")},
    )
    assert isinstance(source, MarketDataSource)
    assert source.data_point("USD-OIS") == pytest.approx(0.043)
    assert source.data_point("USD-3M") is None
    assert source.data_point("USD-6M") is None
    assert source.data_points(["USD-OIS", "EUR-OIS"]) == {"USD-OIS": 0.043, "EUR-OIS": None}


def test_json_market_data(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"data_points": {"USD-OIS": 0.043}}))

    source = create_market_data_source(DataSourceType.JSON, path=str(path))
    assert isinstance(source, JSONMarketDataSource)
    assert source.data_point("USD-OIS") == pytest.approx(0.043)
    assert source.data_point("USD-3M") is None


def test_csv_market_data_keeps_last_duplicate(tmp_path):
    path = tmp_path / "snap.csv"
    path.write_text("id,value\nUSD-OIS,0.041\nUSD-3M,0.045\nUSD-OIS,0.043\n")

    source = CSVMarketDataSource(path)
    assert source.data_point("USD-OIS") == pytest.approx(0.043)
    assert source.data_point("USD-3M") == pytest.approx(0.045)


def test_csv_market_data_requires_columns(tmp_path):
    path = tmp_path / "snap.csv"
    path.write_text("ticker,px\nUSD-OIS,0.041\n")
    with pytest.raises(ValueError):
        CSVMarketDataSource(path).data_point("USD-OIS")


def test_file_source_defaults_to_environment_directory(tmp_path, monkeypatch):
    (tmp_path / "market_data.csv").write_text("id,value\nUSD-OIS,0.043\n")
    monkeypatch.setenv("CURVEBUILD_MARKET_DATA_DIR", str(tmp_path))

    source = create_market_data_source(DataSourceType.CSV)
    assert source.data_point("USD-OIS") == pytest.approx(0.043)


def test_file_source_without_path_or_environment(monkeypatch):
    monkeypatch.delenv("CURVEBUILD_MARKET_DATA_DIR", raising=False)
    with pytest.raises(ValueError):
        create_market_data_source(DataSourceType.JSON)
