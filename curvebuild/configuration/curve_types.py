"""
Curve type configurations.

A curve type states what a built curve is attached to inside a multicurve
bundle: the discounting curve of a currency, or the forward curve of an ibor
or overnight index. Each variant carries a ``kind`` tag so consumers dispatch
on the tag rather than on the class.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from curvebuild.schema.enums import CurveTypeKind
from curvebuild.schema.identifiers import Tenor


@dataclass(frozen=True)
class DiscountingCurveType:
    """Discounting curve for the currency named by ``reference``."""

    reference: str
    kind: ClassVar[CurveTypeKind] = CurveTypeKind.DISCOUNTING


@dataclass(frozen=True)
class IborCurveType:
    """Forward curve for the ibor index identified by ``convention_id``."""

    convention_id: str
    tenor: Tenor
    kind: ClassVar[CurveTypeKind] = CurveTypeKind.IBOR

    def __post_init__(self):
        object.__setattr__(self, "tenor", Tenor.parse(self.tenor))


@dataclass(frozen=True)
class OvernightCurveType:
    """Forward curve for the overnight index identified by ``convention_id``."""

    convention_id: str
    kind: ClassVar[CurveTypeKind] = CurveTypeKind.OVERNIGHT


CurveTypeConfiguration = Union[DiscountingCurveType, IborCurveType, OvernightCurveType]
