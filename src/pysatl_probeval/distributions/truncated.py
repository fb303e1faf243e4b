"""
Truncated continuous distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

from pysatl_probeval.distributions.support import ContinuousSupport
from pysatl_probeval.distributions.univariate import UnivariateDistribution, analytical
from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.numerics.bracket import check_probability
from pysatl_probeval.types import CharacteristicName, Kind, UnivariateContinuous

if TYPE_CHECKING:
    from pysatl_probeval.distributions.computation import AnalyticalComputation
    from pysatl_probeval.distributions.distribution import Distribution


class TruncatedDistribution(UnivariateDistribution):
    """
    Continuous distribution ``base`` conditioned on ``a <= X <= b``.

    With ``F`` the distribution function of ``base``:

    - ``pdf(x) = f(x) / (F(b) - F(a))`` on ``[a, b]``;
    - ``cdf(x) = (F(x) - F(a)) / (F(b) - F(a))``;
    - ``sf(x) = (sf_base(x) - sf_base(b)) / (F(b) - F(a))``;
    - ``ppf(u) = ppf_base(F(a) + u (F(b) - F(a)))``, with ``0 -> a`` and ``1 -> b``.

    Mean and variance are those of ``base`` when nothing is cut off, and are
    otherwise integrated numerically from ``pdf``.

    Parameters
    ----------
    base : Distribution
        Continuous distribution to truncate.
    a, b : float, optional
        Truncation bounds, clipped to the support of ``base``; default to its
        edges.

    Raises
    ------
    InvalidArgumentError
        If ``base`` is not continuous, ``a >= b``, or ``[a, b]`` carries no
        probability.
    """

    def __init__(self, base: Distribution, a: float | None = None, b: float | None = None) -> None:
        if base.distribution_type.kind != Kind.CONTINUOUS:
            raise InvalidArgumentError("only continuous distributions can be truncated")
        base_support = base.support
        base_left = base_support.left if base_support is not None else float("-inf")
        base_right = base_support.right if base_support is not None else float("inf")
        if a is None:
            a = base_left
        if b is None:
            b = base_right
        if a >= b:
            raise InvalidArgumentError(f"a must be smaller than b, got a={a}, b={b}")

        self._base = base
        self._a_arg = a
        self._b_arg = b
        a = max(a, base_left)
        b = min(b, base_right)
        self._a = a
        self._b = b
        self._fa = base.cdf(a)
        self._fb = base.cdf(b)
        self._fbfa = self._fb - self._fa
        self._barfb = base.sf(b)
        if not self._fbfa > 0.0:
            raise InvalidArgumentError(f"no probability on [{a}, {b}]")

        computations: list[AnalyticalComputation[Any, Any]] = [
            analytical(CharacteristicName.PDF, self._pdf),
            analytical(CharacteristicName.CDF, self._cdf),
            analytical(CharacteristicName.SF, self._sf),
            analytical(CharacteristicName.PPF, self._ppf),
        ]
        if a <= base_left and b >= base_right:
            computations.append(analytical(CharacteristicName.MEAN, lambda _=None, **__: base.mean()))
            computations.append(analytical(CharacteristicName.VAR, lambda _=None, **__: base.var()))

        super().__init__(UnivariateContinuous, ContinuousSupport(a, b), tuple(computations))

    @property
    def base(self) -> Distribution:
        return self._base

    @property
    def area(self) -> float:
        """``F(b) - F(a)``, the probability of ``[a, b]`` under ``base``."""
        return self._fbfa

    def _pdf(self, x: float, **_: Any) -> float:
        if x < self._a or x > self._b:
            return 0.0
        return self._base.pdf(x) / self._fbfa

    def _cdf(self, x: float, **_: Any) -> float:
        if x <= self._a:
            return 0.0
        if x >= self._b:
            return 1.0
        return min(max((self._base.cdf(x) - self._fa) / self._fbfa, 0.0), 1.0)

    def _sf(self, x: float, **_: Any) -> float:
        if x <= self._a:
            return 1.0
        if x >= self._b:
            return 0.0
        return min(max((self._base.sf(x) - self._barfb) / self._fbfa, 0.0), 1.0)

    def _ppf(self, u: float, **_: Any) -> float:
        check_probability(u)
        if u == 0.0:
            return self._a
        if u == 1.0:
            return self._b
        return min(max(self._base.ppf(self._fa + self._fbfa * u), self._a), self._b)

    def _constructor_args(self) -> dict[str, Any]:
        return {"base": self._base, "a": self._a_arg, "b": self._b_arg}


__all__ = [
    "TruncatedDistribution",
]
