"""
Continuous distributions given by a numeric distribution function.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any

from pysatl_probeval.config import PrecisionBudget
from pysatl_probeval.distributions.support import ContinuousSupport
from pysatl_probeval.distributions.univariate import UnivariateDistribution, analytical
from pysatl_probeval.types import CharacteristicName, UnivariateContinuous

if TYPE_CHECKING:
    from pysatl_probeval.distributions.computation import AnalyticalComputation
    from pysatl_probeval.types import ScalarFunc


class NumericContinuousDistribution(UnivariateDistribution):
    """
    Continuous distribution defined by its ``cdf``.

    Whatever is not given is derived by the computation strategy: ``ppf`` by
    bracket search and Brent-Dekker inversion of ``cdf``, ``pdf`` by numerical
    differentiation, ``mean`` and ``var`` by quadrature of ``pdf``.

    Parameters
    ----------
    cdf : ScalarFunc
        Nondecreasing distribution function. It is only evaluated inside the
        support; outside, 0 and 1 are returned.
    pdf : ScalarFunc, optional
        Density, 0 outside the support.
    sf : ScalarFunc, optional
        Survival function ``1 - cdf`` computed without cancellation.
    support : ContinuousSupport, optional
        Defaults to the real line.
    precision : int, optional
        Decimal digits requested from the inversion; defaults to the engine
        settings.

    Raises
    ------
    InvalidArgumentError
        If ``precision`` is outside ``0..35``.

    Examples
    --------
    >>> dist = NumericContinuousDistribution(lambda x: x * x, support=ContinuousSupport(0.0, 1.0))
    >>> round(dist.ppf(0.25), 10)
    0.5
    """

    def __init__(
        self,
        cdf: ScalarFunc,
        pdf: ScalarFunc | None = None,
        sf: ScalarFunc | None = None,
        support: ContinuousSupport | None = None,
        precision: int | None = None,
    ) -> None:
        if support is None:
            support = ContinuousSupport()
        options: dict[str, Any] = {}
        if precision is not None:
            options["decimal_digits"] = PrecisionBudget(precision).digits
        self._cdf = cdf
        self._pdf = pdf
        self._sf = sf
        self._precision = precision

        left, right = support.left, support.right

        def _cdf(x: float, **_: Any) -> float:
            if x <= left:
                return 0.0
            if x >= right:
                return 1.0
            return float(cdf(x))

        computations: list[AnalyticalComputation[Any, Any]] = [
            analytical(CharacteristicName.CDF, _cdf)
        ]

        if pdf is not None:

            def _pdf(x: float, **_: Any) -> float:
                return float(pdf(x)) if support.contains(x) else 0.0

            computations.append(analytical(CharacteristicName.PDF, _pdf))

        if sf is not None:

            def _sf(x: float, **_: Any) -> float:
                if x <= left:
                    return 1.0
                if x >= right:
                    return 0.0
                return float(sf(x))

            computations.append(analytical(CharacteristicName.SF, _sf))

        super().__init__(UnivariateContinuous, support, tuple(computations), options)

    @property
    def precision(self) -> int | None:
        return self._precision

    def _constructor_args(self) -> dict[str, Any]:
        return {
            "cdf": self._cdf,
            "pdf": self._pdf,
            "sf": self._sf,
            "support": self._support,
            "precision": self._precision,
        }


__all__ = [
    "NumericContinuousDistribution",
]
