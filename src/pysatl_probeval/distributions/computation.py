"""
Computation Primitives
======================

Building blocks used to evaluate distribution characteristics:

- :class:`AnalyticalComputation` — a callable provided by a distribution
  directly (e.g. a closed-form ``cdf``).
- :class:`FittedComputationMethod` — a conversion fitted to one distribution
  (e.g. ``ppf`` obtained by inverting its ``cdf``), ready to be called.
- :class:`ComputationMethod` — a conversion factory: given a distribution it
  *fits* and returns a :class:`FittedComputationMethod`.

Notes
-----
- Univariate callables are scalar (``float -> float``); mean and variance
  take a dummy argument and ignore it so that every characteristic shares
  the same calling convention.
- ``**options`` are free-form: engine setting overrides (``decimal_digits``,
  ``brent_max_iter``...) and method selectors (``method="bisection"``).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mypy_extensions import KwArg

from pysatl_probeval.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_probeval.distributions.distribution import Distribution


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """
    Analytical computation provided directly by a distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g. ``"cdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class FittedComputationMethod[In, Out]:
    """
    Conversion fitted to a distribution.

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Characteristics the conversion was built from.
    func : Callable[[In, KwArg(Any)], Out]
        Callable implementing the conversion.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        return self.func(data, **options)


@dataclass(frozen=True, slots=True)
class ComputationMethod[In, Out]:
    """
    Conversion factory.

    Parameters
    ----------
    target : str
        Destination characteristic name.
    sources : Sequence[str]
        Characteristics that must be resolvable before fitting.
    fitter : Callable[[Distribution, KwArg(Any)], FittedComputationMethod]
        Prepares the conversion for a given distribution.
    """

    target: GenericCharacteristicName
    sources: Sequence[GenericCharacteristicName]
    fitter: Callable[[Distribution, KwArg(Any)], FittedComputationMethod[In, Out]]

    def fit(self, distribution: Distribution, **options: Any) -> FittedComputationMethod[In, Out]:
        """Fit and return a :class:`FittedComputationMethod`."""
        return self.fitter(distribution, **options)


type Method[In, Out] = AnalyticalComputation[In, Out] | FittedComputationMethod[In, Out]


__all__ = [
    "AnalyticalComputation",
    "FittedComputationMethod",
    "ComputationMethod",
    "Method",
]
