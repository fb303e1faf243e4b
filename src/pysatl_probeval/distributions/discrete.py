"""
Discrete Distributions
======================

- :class:`TabulatedDiscreteDistribution` — integer-valued distribution given
  by a mass function, backed by a precomputed
  :class:`~pysatl_probeval.tables.table.DiscreteTable`.
- :class:`FiniteDiscreteDistribution` — finitely many real points with
  explicit probabilities.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import ceil, floor, isnan, nan
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_probeval.config import engine_settings
from pysatl_probeval.distributions.support import ExplicitTableDiscreteSupport, IntegerSupport
from pysatl_probeval.distributions.univariate import UnivariateDistribution, analytical
from pysatl_probeval.tables.builder import build_table, tabulate_finite
from pysatl_probeval.types import CharacteristicName, UnivariateDiscrete

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pysatl_probeval.tables.table import DiscreteTable, FiniteTable
    from pysatl_probeval.types import MassFunction, Number, RatioFunction


class TabulatedDiscreteDistribution(UnivariateDistribution):
    """
    Integer-valued distribution backed by a truncated probability table.

    ``pmf``, ``cdf``, ``sf`` and ``ppf`` are answered from the table;
    ``mean`` and ``var`` are derived from it by the computation strategy.
    Outside ``xmin..xmax`` the mass comes from ``prob`` directly and the tail
    probabilities are summed from at most ``tail_terms + 1`` mass terms,
    which gives a few correct digits far in the tails.

    Parameters
    ----------
    prob : MassFunction
        ``prob(k) = P[X = k]``.
    mode : int, optional
        Mode of the distribution, located by hill-climbing if omitted.
    ratio_down, ratio_up : RatioFunction, optional
        Recurrences ``P[k-1]/P[k]`` and ``P[k+1]/P[k]``; the walks use them
        instead of calling ``prob`` for every term.
    support : IntegerSupport, optional
        Defaults to all integers.
    epsilon : float, optional
        Truncation threshold, defaults to the engine settings (``1e-16``).

    Raises
    ------
    InvalidArgumentError
        If the mode carries no mass or lies outside the support.

    Examples
    --------
    >>> from math import exp, factorial
    >>> lam = 10.0
    >>> dist = TabulatedDiscreteDistribution(
    ...     lambda k: exp(-lam) * lam**k / factorial(k),
    ...     mode=10,
    ...     ratio_down=lambda k: k / lam,
    ...     ratio_up=lambda k: lam / (k + 1),
    ...     support=IntegerSupport(0),
    ... )
    >>> dist.ppf(0.5)
    10.0
    """

    def __init__(
        self,
        prob: MassFunction,
        mode: int | None = None,
        ratio_down: RatioFunction | None = None,
        ratio_up: RatioFunction | None = None,
        support: IntegerSupport | None = None,
        epsilon: float | None = None,
    ) -> None:
        if support is None:
            support = IntegerSupport()
        self._prob = prob
        self._mode = mode
        self._ratio_down = ratio_down
        self._ratio_up = ratio_up
        self._epsilon = epsilon
        self._tail_terms = engine_settings().tail_terms
        self._table = build_table(
            prob,
            mode=mode,
            ratio_down=ratio_down,
            ratio_up=ratio_up,
            support=support,
            epsilon=epsilon,
        )

        computations = (
            analytical(CharacteristicName.PMF, self._pmf),
            analytical(CharacteristicName.CDF, self._cdf),
            analytical(CharacteristicName.SF, self._sf),
            analytical(CharacteristicName.PPF, self._ppf),
        )
        super().__init__(UnivariateDiscrete, support, computations)

    @property
    def table(self) -> DiscreteTable:
        return self._table

    def _pmf(self, x: float, **_: Any) -> float:
        if not self._support.contains(x):
            return 0.0
        k = int(x)
        if self._table.xmin <= k <= self._table.xmax:
            return self._table.prob(k)
        return float(self._prob(k))

    def _lower_tail(self, k: int) -> float:
        """``P[X <= k]`` for ``k`` below the table."""
        term = float(self._prob(k))
        total = term
        i = k
        while i > self._support.left and i > k - self._tail_terms:
            term = term * self._ratio_down(i) if self._ratio_down else float(self._prob(i - 1))
            i -= 1
            total += term
        return min(total, 1.0)

    def _upper_tail(self, k: int) -> float:
        """``P[X >= k]`` for ``k`` above the table."""
        term = float(self._prob(k))
        total = term
        i = k
        while i < self._support.right and i < k + self._tail_terms:
            term = term * self._ratio_up(i) if self._ratio_up else float(self._prob(i + 1))
            i += 1
            total += term
        return min(total, 1.0)

    def _cdf(self, x: float, **_: Any) -> float:
        if isnan(x):
            return nan
        if x < self._support.left:
            return 0.0
        if x < self._table.xmin:
            return self._lower_tail(floor(x))
        return self._table.cdf_at(x)

    def _sf(self, x: float, **_: Any) -> float:
        if isnan(x):
            return nan
        if x > self._support.right:
            return 0.0
        if x > self._table.xmax:
            return self._upper_tail(ceil(x))
        return self._table.sf_at(x)

    def _ppf(self, u: float, **_: Any) -> float:
        return float(self._table.inverse(u))

    def _constructor_args(self) -> dict[str, Any]:
        return {
            "prob": self._prob,
            "mode": self._mode,
            "ratio_down": self._ratio_down,
            "ratio_up": self._ratio_up,
            "support": self._support,
            "epsilon": self._epsilon,
        }


class FiniteDiscreteDistribution(UnivariateDistribution):
    """
    Distribution over finitely many real points.

    Every characteristic is read from a
    :class:`~pysatl_probeval.tables.table.FiniteTable`.

    Parameters
    ----------
    values : Sequence[Number]
        Distinct points, in any order.
    probabilities : Sequence[Number]
        Nonnegative weights, normalised by their sum.

    Raises
    ------
    InvalidArgumentError
        On empty, mismatched, duplicated or negative input.
    """

    def __init__(self, values: Sequence[Number], probabilities: Sequence[Number]) -> None:
        self._finite_table = tabulate_finite(values, probabilities)
        table = self._finite_table
        mean = table.mean()
        variance = table.variance()

        computations = (
            analytical(CharacteristicName.PMF, lambda x, **_: table.prob(x)),
            analytical(CharacteristicName.CDF, lambda x, **_: table.cdf_at(x)),
            analytical(CharacteristicName.SF, lambda x, **_: table.sf_at(x)),
            analytical(CharacteristicName.PPF, lambda u, **_: table.inverse(u)),
            analytical(CharacteristicName.MEAN, lambda _=None, **__: mean),
            analytical(CharacteristicName.VAR, lambda _=None, **__: variance),
        )
        support = ExplicitTableDiscreteSupport(table.values, assume_sorted=True)
        super().__init__(UnivariateDiscrete, support, computations)

    @property
    def finite_table(self) -> FiniteTable:
        return self._finite_table

    @property
    def values(self) -> np.ndarray:
        return self._finite_table.values

    @property
    def probabilities(self) -> np.ndarray:
        return self._finite_table.pmf

    def _constructor_args(self) -> dict[str, Any]:
        return {
            "values": self.values.tolist(),
            "probabilities": self.probabilities.tolist(),
        }


__all__ = [
    "TabulatedDiscreteDistribution",
    "FiniteDiscreteDistribution",
]
