"""Items referenced by name from a curve construction configuration."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class CurveDefinition:
    """Definition of a single curve.

    The market data id is the key the calibrator asks the market data source
    for; it defaults to the curve name.
    """

    name: str
    market_data_id: Optional[str] = None

    @property
    def data_id(self) -> str:
        return self.market_data_id or self.name


@dataclass(frozen=True)
class ExposureFunctions:
    """Ordered exposure-function names and the id to configuration mapping."""

    name: str
    exposure_functions: Sequence[str]
    ids_to_names: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "exposure_functions", tuple(self.exposure_functions))
        object.__setattr__(self, "ids_to_names", MappingProxyType(dict(self.ids_to_names)))

    def __hash__(self) -> int:
        return hash((self.name, self.exposure_functions, tuple(self.ids_to_names.items())))
