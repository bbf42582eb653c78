"""
Factory for creating market data sources.
"""

from pathlib import Path

from curvebuild.schema.enums import DataSourceType
from curvebuild.settings import BuildSettings

from .base import MarketDataSource
from .market_data import CSVMarketDataSource, InMemoryMarketDataSource, JSONMarketDataSource

_DEFAULT_FILENAMES = {
    DataSourceType.JSON: "market_data.json",
    DataSourceType.CSV: "market_data.csv",
}


def create_market_data_source(source_type: DataSourceType, **kwargs) -> MarketDataSource:
    """
    Create market data source with appropriate configuration.

    Args:
        source_type: Type of data source to create
        **kwargs: Configuration parameters specific to source type

    Returns:
        Configured market data source

    Examples:
        >>> source = create_market_data_source(
        ...     DataSourceType.MEMORY, data_points={"USD-OIS": 0.05}
        ... )

        >>> # File sources fall back to CURVEBUILD_MARKET_DATA_DIR
        >>> source = create_market_data_source(DataSourceType.JSON, path="snap.json")
    """
    if source_type == DataSourceType.MEMORY:
        return InMemoryMarketDataSource(kwargs.get("data_points"))

    if source_type in (DataSourceType.JSON, DataSourceType.CSV):
        path = kwargs.get("path")
        if not path:
            directory = BuildSettings.from_env().market_data_directory
            if directory is None:
                raise ValueError(
                    f"path or CURVEBUILD_MARKET_DATA_DIR required for {source_type.value} data source"
                )
            path = Path(directory) / _DEFAULT_FILENAMES[source_type]
        if source_type == DataSourceType.JSON:
            return JSONMarketDataSource(path=Path(path))
        return CSVMarketDataSource(
            path=Path(path),
            id_column=kwargs.get("id_column", "id"),
            value_column=kwargs.get("value_column", "value"),
        )

    raise ValueError(f"Unsupported data source type: {source_type}")
