"""
Distribution Interface
======================

The :class:`Distribution` protocol used throughout the package.

A distribution exposes a mapping of analytical computations and a
computation strategy that derives everything else. The convenience methods
(``pdf``, ``pmf``, ``cdf``, ``sf``, ``ppf``, ``mean``, ``var``, ``std``)
resolve the characteristic through :meth:`Distribution.query_method` and
evaluate it; concrete classes inheriting from the protocol get them for free.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import sqrt
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_probeval.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_probeval.distributions.computation import AnalyticalComputation, Method
    from pysatl_probeval.distributions.strategies import ComputationStrategy
    from pysatl_probeval.distributions.support import Support
    from pysatl_probeval.types import DistributionType, GenericCharacteristicName


@runtime_checkable
class Distribution(Protocol):
    """Public distribution interface used by strategies and fitters."""

    @property
    def distribution_type(self) -> DistributionType: ...

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]: ...

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]: ...

    @property
    def support(self) -> Support | None: ...

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> Method[Any, Any]:
        return self.computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name, **options)(value)

    def pdf(self, x: float, **options: Any) -> float:
        """Density at ``x``."""
        return float(self.calculate_characteristic(CharacteristicName.PDF, x, **options))

    def pmf(self, x: float, **options: Any) -> float:
        """Mass ``P[X = x]``."""
        return float(self.calculate_characteristic(CharacteristicName.PMF, x, **options))

    def cdf(self, x: float, **options: Any) -> float:
        """``P[X <= x]``."""
        return float(self.calculate_characteristic(CharacteristicName.CDF, x, **options))

    def sf(self, x: float, **options: Any) -> float:
        """``P[X >= x]``; equals ``P[X > x]`` for continuous distributions."""
        return float(self.calculate_characteristic(CharacteristicName.SF, x, **options))

    def ppf(self, u: float, **options: Any) -> float:
        """Smallest ``x`` with ``cdf(x) >= u``."""
        return float(self.calculate_characteristic(CharacteristicName.PPF, u, **options))

    def mean(self, **options: Any) -> float:
        return float(self.calculate_characteristic(CharacteristicName.MEAN, None, **options))

    def var(self, **options: Any) -> float:
        return float(self.calculate_characteristic(CharacteristicName.VAR, None, **options))

    def std(self, **options: Any) -> float:
        return sqrt(self.var(**options))


__all__ = [
    "Distribution",
]
