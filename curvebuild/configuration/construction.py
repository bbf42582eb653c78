"""
Curve group and curve construction configurations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, List, Mapping, Sequence, Tuple

from curvebuild.schema.enums import CurveTypeKind

from .curve_types import CurveTypeConfiguration


@dataclass(frozen=True)
class CurveGroupConfiguration:
    """Curves that are calibrated together, with the types each curve fills.

    ``types_for_curves`` keeps declaration order, which is also build order.
    """

    types_for_curves: Mapping[str, Sequence[CurveTypeConfiguration]]
    order: int = 0

    def __post_init__(self):
        frozen = {
            str(curve_name): tuple(types)
            for curve_name, types in self.types_for_curves.items()
        }
        object.__setattr__(self, "types_for_curves", MappingProxyType(frozen))

    def __hash__(self) -> int:
        return hash((self.order, tuple(self.types_for_curves.items())))

    def curve_names(self) -> List[str]:
        return list(self.types_for_curves)

    def types_of_kind(self, kind: CurveTypeKind) -> Iterator[Tuple[str, CurveTypeConfiguration]]:
        """Yield (curve name, curve type) pairs whose type has the given tag."""
        for curve_name, types in self.types_for_curves.items():
            for curve_type in types:
                if curve_type.kind is kind:
                    yield curve_name, curve_type


@dataclass(frozen=True)
class CurveConstructionConfiguration:
    """Named recipe for a multicurve bundle.

    ``exogenous_configurations`` names other configurations whose built
    bundles are merged in before this one is built.
    """

    name: str
    curve_groups: Sequence[CurveGroupConfiguration]
    exogenous_configurations: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Curve construction configuration name must not be empty")
        object.__setattr__(self, "curve_groups", tuple(self.curve_groups))
        object.__setattr__(
            self, "exogenous_configurations", tuple(self.exogenous_configurations or ())
        )

    def __hash__(self) -> int:
        return hash((self.name, self.curve_groups, self.exogenous_configurations))

    def curve_names(self) -> List[str]:
        """All curve names, groups in list order and curves in declaration order."""
        names: List[str] = []
        for group in self.curve_groups:
            names.extend(group.curve_names())
        return names
