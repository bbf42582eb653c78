"""
Generic classification of referenced names.

Every validator in this package reduces to :func:`classify`: each requested
name is looked up once and lands in exactly one of validated, missing,
duplicated or unsupported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Generic,
    Hashable,
    Iterable,
    List,
    Mapping,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)

import pandas as pd

from curvebuild.schema.enums import ValidationOutcome

T = TypeVar("T")

logger = logging.getLogger(__name__)

Lookup = Callable[[Hashable], Sequence[Any]]


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Immutable outcome of classifying a set of requested names.

    ``outcomes`` maps every requested name to exactly one outcome, so the
    four collections partition the request. Resolved items are kept as
    tuples in request order; they need not be hashable.
    """

    item_type: Type
    validated: Tuple[T, ...] = ()
    missing_names: FrozenSet[Hashable] = frozenset()
    duplicated_names: FrozenSet[Hashable] = frozenset()
    unsupported: Tuple[Any, ...] = ()
    outcomes: Mapping[Hashable, ValidationOutcome] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not (self.missing_names or self.duplicated_names or self.unsupported)

    @property
    def requested_names(self) -> List[Hashable]:
        return list(self.outcomes)

    def names_for(self, outcome: ValidationOutcome) -> List[Hashable]:
        """Requested names classified with the given outcome, in request order."""
        return [name for name, o in self.outcomes.items() if o is outcome]

    def to_frame(self) -> pd.DataFrame:
        """One row per requested name with its outcome."""
        return pd.DataFrame(
            {
                "name": [str(name) for name in self.outcomes],
                "outcome": [o.value for o in self.outcomes.values()],
            },
            columns=["name", "outcome"],
        )


class ValidationResultBuilder(Generic[T]):
    """Accumulates classifications and freezes them into a ValidationResult."""

    def __init__(self, item_type: Type):
        self.item_type = item_type
        self._validated: List[T] = []
        self._unsupported: List[Any] = []
        self._outcomes: Dict[Hashable, ValidationOutcome] = {}

    def __contains__(self, name: Hashable) -> bool:
        return name in self._outcomes

    def _record(self, name: Hashable, outcome: ValidationOutcome) -> None:
        if name in self._outcomes:
            raise ValueError(
                f"{name!r} already classified as {self._outcomes[name].value}"
            )
        self._outcomes[name] = outcome

    def validated(self, name: Hashable, item: T) -> None:
        self._record(name, ValidationOutcome.VALIDATED)
        self._validated.append(item)

    def missing(self, name: Hashable) -> None:
        self._record(name, ValidationOutcome.MISSING)

    def duplicated(self, name: Hashable) -> None:
        self._record(name, ValidationOutcome.DUPLICATED)

    def unsupported(self, name: Hashable, item: Any) -> None:
        self._record(name, ValidationOutcome.UNSUPPORTED)
        self._unsupported.append(item)

    def build(self) -> ValidationResult[T]:
        outcomes = dict(self._outcomes)
        return ValidationResult(
            item_type=self.item_type,
            validated=tuple(self._validated),
            missing_names=frozenset(
                n for n, o in outcomes.items() if o is ValidationOutcome.MISSING
            ),
            duplicated_names=frozenset(
                n for n, o in outcomes.items() if o is ValidationOutcome.DUPLICATED
            ),
            unsupported=tuple(self._unsupported),
            outcomes=MappingProxyType(outcomes),
        )


def unique_in_order(names: Iterable[Hashable]) -> List[Hashable]:
    seen = set()
    ordered = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


def classify(
    names: Iterable[Hashable], expected_type: Type, lookup: Lookup
) -> ValidationResult:
    """
    Classify requested names against a lookup.

    Args:
        names: Requested names; repeats are classified once
        expected_type: Kind a uniquely resolved item must be an instance of
        lookup: Returns every item registered under a name. A LookupError or
            ValueError raised by it counts as no match.

    Returns:
        ValidationResult partitioning the requested names
    """
    builder: ValidationResultBuilder = ValidationResultBuilder(expected_type)
    for name in unique_in_order(names):
        try:
            matches = list(lookup(name))
        except (LookupError, ValueError) as exc:
            logger.debug("Lookup of %s failed: %s", name, exc)
            matches = []

        if not matches:
            builder.missing(name)
        elif len(matches) > 1:
            builder.duplicated(name)
        elif isinstance(matches[0], expected_type):
            builder.validated(name, matches[0])
        else:
            builder.unsupported(name, matches[0])
    return builder.build()
