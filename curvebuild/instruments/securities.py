"""Index securities as registered in a security source."""

from dataclasses import dataclass

from curvebuild.schema.identifiers import Tenor


@dataclass(frozen=True)
class IborIndexSecurity:
    """Ibor index security pointing at its index convention."""

    id: str
    name: str
    convention_id: str
    tenor: Tenor

    def __post_init__(self):
        object.__setattr__(self, "tenor", Tenor.parse(self.tenor))


@dataclass(frozen=True)
class OvernightIndexSecurity:
    """Overnight index security pointing at its index convention."""

    id: str
    name: str
    convention_id: str
