"""Multicurve bundle: discount curves by currency, forward curves by index."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Union

import numpy as np

from curvebuild.exceptions import CurveAttachmentConflict
from curvebuild.instruments.indices import Index
from curvebuild.schema.enums import CurveTypeKind
from curvebuild.schema.identifiers import Currency

from .base import Curve

logger = logging.getLogger(__name__)


class FXMatrix:
    """Exchange rates between the currencies of a bundle.

    ``get_fx_rate(a, b)`` is the number of units of ``b`` for one unit of ``a``.
    """

    def __init__(self):
        self._currencies: Dict[Currency, int] = {}
        self._rates = np.zeros((0, 0))

    @property
    def currencies(self) -> List[Currency]:
        return list(self._currencies)

    def add_currency(self, currency: Currency, reference: Currency, fx_rate: float) -> None:
        """
        Add a currency through its rate against a reference currency.

        Args:
            currency: Currency to add
            reference: Currency already in the matrix; added first if the
                matrix is empty
            fx_rate: Units of ``reference`` for one unit of ``currency``
        """
        if fx_rate <= 0:
            raise ValueError(f"FX rate must be positive: {fx_rate}")
        if currency in self._currencies:
            raise ValueError(f"Currency {currency} is already in the FX matrix")
        if not self._currencies:
            self._currencies[reference] = 0
            self._rates = np.ones((1, 1))
        if reference not in self._currencies:
            raise ValueError(f"Reference currency {reference} is not in the FX matrix")

        n = len(self._currencies)
        rates = np.ones((n + 1, n + 1))
        rates[:n, :n] = self._rates
        row = fx_rate * self._rates[self._currencies[reference], :]
        rates[n, :n] = row
        rates[:n, n] = 1.0 / row
        self._rates = rates
        self._currencies[currency] = n

    def get_fx_rate(self, currency1: Currency, currency2: Currency) -> float:
        if currency1 == currency2:
            return 1.0
        try:
            return float(self._rates[self._currencies[currency1], self._currencies[currency2]])
        except KeyError as exc:
            raise KeyError(f"No FX rate between {currency1} and {currency2}") from exc

    def copy(self) -> "FXMatrix":
        other = FXMatrix()
        other._currencies = dict(self._currencies)
        other._rates = self._rates.copy()
        return other

    def __len__(self) -> int:
        return len(self._currencies)


class MulticurveBundle:
    """Immutable set of discount and forward curves."""

    def __init__(
        self,
        discount_curves: Mapping[Currency, Curve],
        forward_curves: Mapping[Index, Curve],
        fx_matrix: Optional[FXMatrix] = None,
    ):
        self._discount_curves = MappingProxyType(dict(discount_curves))
        self._forward_curves = MappingProxyType(dict(forward_curves))
        self._fx_matrix = fx_matrix.copy() if fx_matrix is not None else FXMatrix()

    @property
    def currency_to_discount_curve(self) -> Mapping[Currency, Curve]:
        return self._discount_curves

    @property
    def index_to_forward_curve(self) -> Mapping[Index, Curve]:
        return self._forward_curves

    @property
    def fx_matrix(self) -> FXMatrix:
        return self._fx_matrix.copy()

    def discount_curve(self, currency: Union[Currency, str]) -> Optional[Curve]:
        if isinstance(currency, str):
            currency = Currency.parse(currency)
        return self._discount_curves.get(currency)

    def forward_curve(self, index: Union[Index, str]) -> Optional[Curve]:
        """Forward curve for an index, or for the index with that name."""
        if isinstance(index, str):
            for candidate, curve in self._forward_curves.items():
                if candidate.name == index:
                    return curve
            return None
        return self._forward_curves.get(index)

    def curve(self, name: str) -> Optional[Curve]:
        """Curve stored under a curve name, whatever it is attached to."""
        for curve in list(self._discount_curves.values()) + list(self._forward_curves.values()):
            if curve.name == name:
                return curve
        return None

    def curve_names(self) -> List[str]:
        names: List[str] = []
        for curve in list(self._discount_curves.values()) + list(self._forward_curves.values()):
            if curve.name not in names:
                names.append(curve.name)
        return names

    def __repr__(self) -> str:
        return (
            f"MulticurveBundle(discount={[str(c) for c in self._discount_curves]}, "
            f"forward={[i.name for i in self._forward_curves]})"
        )


class MulticurveBundleBuilder:
    """Accumulates curve attachments for a single build."""

    def __init__(self, fx_matrix: Optional[FXMatrix] = None):
        self._discount_curves: Dict[Currency, Curve] = {}
        self._forward_curves: Dict[Index, Curve] = {}
        self._fx_matrix = fx_matrix.copy() if fx_matrix is not None else FXMatrix()

    @staticmethod
    def _put(store: dict, key, curve: Curve) -> None:
        existing = store.get(key)
        if existing is not None and existing is not curve and existing != curve:
            raise CurveAttachmentConflict(
                curve.name,
                f"Cannot attach curve {curve.name} to {key}: "
                f"curve {existing.name} is already attached",
            )
        store[key] = curve

    def set_discount_curve(self, currency: Currency, curve: Curve) -> None:
        self._put(self._discount_curves, currency, curve)

    def set_forward_curve(self, index: Index, curve: Curve) -> None:
        self._put(self._forward_curves, index, curve)

    def attach(self, kind: CurveTypeKind, target, curve: Curve) -> None:
        """Attach a curve to the currency or index a curve type resolved to."""
        if kind is CurveTypeKind.DISCOUNTING:
            self.set_discount_curve(target, curve)
        else:
            self.set_forward_curve(target, curve)

    def merge(self, bundle: MulticurveBundle) -> None:
        """Add every curve of an already built bundle."""
        for currency, curve in bundle.currency_to_discount_curve.items():
            self.set_discount_curve(currency, curve)
        for index, curve in bundle.index_to_forward_curve.items():
            self.set_forward_curve(index, curve)

    def build(self) -> MulticurveBundle:
        return MulticurveBundle(self._discount_curves, self._forward_curves, self._fx_matrix)
