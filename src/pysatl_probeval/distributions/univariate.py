"""
Base class of the concrete univariate distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import abstractmethod
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Self, cast

from mypy_extensions import KwArg

from pysatl_probeval.distributions.computation import AnalyticalComputation
from pysatl_probeval.distributions.distribution import Distribution
from pysatl_probeval.distributions.strategies import DefaultComputationStrategy

if TYPE_CHECKING:
    from pysatl_probeval.distributions.strategies import ComputationStrategy
    from pysatl_probeval.distributions.support import Support
    from pysatl_probeval.types import DistributionType, GenericCharacteristicName


def analytical(
    target: GenericCharacteristicName, func: Callable[..., float]
) -> AnalyticalComputation[float, float]:
    """Wrap a scalar callable as an :class:`AnalyticalComputation`."""
    return AnalyticalComputation[float, float](
        target=target, func=cast(Callable[[float, KwArg(Any)], float], func)
    )


class UnivariateDistribution(Distribution):
    """
    Immutable univariate distribution with its own caching strategy.

    Subclasses pass their analytical computations to ``__init__`` and
    implement :meth:`_constructor_args` so that :meth:`evolve` can rebuild
    them.

    Parameters
    ----------
    distribution_type : DistributionType
        Kind and dimension.
    support : Support
        Support of the distribution.
    computations : Iterable of AnalyticalComputation
        Characteristics known in closed (or precomputed) form.
    options : Mapping[str, Any], optional
        Default options of every fitted conversion.
    """

    __slots__ = ("_analytical", "_distribution_type", "_strategy", "_support")

    def __init__(
        self,
        distribution_type: DistributionType,
        support: Support,
        computations: tuple[AnalyticalComputation[Any, Any], ...],
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self._distribution_type = distribution_type
        self._support = support
        self._analytical = {c.target: c for c in computations}
        self._strategy: DefaultComputationStrategy[Any, Any] = DefaultComputationStrategy(
            enable_caching=True, options=options
        )

    @property
    def distribution_type(self) -> DistributionType:
        return self._distribution_type

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        return self._analytical

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self._strategy

    @property
    def support(self) -> Support:
        return self._support

    @abstractmethod
    def _constructor_args(self) -> dict[str, Any]:
        """Keyword arguments that rebuild this instance through ``__init__``."""

    def evolve(self, **changes: Any) -> Self:
        """
        Return a new instance with selected constructor arguments replaced.

        Tables and caches are rebuilt; the current instance is unchanged.
        """
        return type(self)(**{**self._constructor_args(), **changes})

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in self._constructor_args().items())
        return f"{type(self).__name__}({args})"


__all__ = [
    "UnivariateDistribution",
    "analytical",
]
