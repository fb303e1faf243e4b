"""
Core Type Definitions
=====================

Fundamental types and data structures shared by the evaluation engines and
the distribution wrappers.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, Protocol, cast, overload, runtime_checkable

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution on the integers.
    CONTINUOUS : str
        Continuous probability distribution on the real line.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


@dataclass(frozen=True, slots=True)
class DistributionType:
    """
    Distribution type descriptor.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Spatial dimension (only 1 is supported by the engines).
    """

    kind: Kind
    dimension: int = 1


UnivariateContinuous = DistributionType(kind=Kind.CONTINUOUS)
"""Type for univariate continuous distributions."""

UnivariateDiscrete = DistributionType(kind=Kind.DISCRETE)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for the float arrays backing probability tables."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    Closed 1D interval ``[left, right]`` with possibly infinite endpoints.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    """

    left: float = -inf
    right: float = inf

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Infinite points are never contained, even on the real line.
        """
        arr = np.asarray(x, dtype=float)
        result = np.isfinite(arr) & (arr >= self.left) & (arr <= self.right)

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        """Check if a single point is in the interval."""
        return bool(self.contains(cast(Number, x)))

    def clip(self, x: float) -> float:
        """Clamp ``x`` to ``[left, right]``."""
        return min(max(x, self.left), self.right)

    @property
    def is_bounded(self) -> bool:
        """``True`` if both endpoints are finite."""
        return self.left > -inf and self.right < inf


ScalarFunc = Callable[[float], float]
"""Type alias for scalar functions (float -> float)."""


@runtime_checkable
class MonotoneFunction(Protocol):
    """
    Nondecreasing scalar function ``R -> R``.

    Any distribution's ``cdf`` (or ``cdf(x) - u``) is passed to the root
    solvers through this contract. Monotonicity is assumed, not checked.
    """

    def __call__(self, x: float, /) -> float: ...


MassFunction = Callable[[int], float]
"""Probability mass function ``p(k) = P[X = k]`` over the integers."""

RatioFunction = Callable[[int], float]
"""Recurrence ratio between neighbouring mass terms (see the table builder)."""

type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'pdf', 'cdf')."""


class CharacteristicName(StrEnum):
    """
    Enumeration of the characteristics the engine evaluates.

    Note
    ----------
    Users may register conversions for their own characteristic names as
    well; these are only the ones wired by default.
    """

    PDF = "pdf"
    PMF = "pmf"
    CDF = "cdf"
    SF = "sf"
    PPF = "ppf"
    MEAN = "mean"
    VAR = "var"


__all__ = [
    "Kind",
    "DistributionType",
    "UnivariateContinuous",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ScalarFunc",
    "MonotoneFunction",
    "MassFunction",
    "RatioFunction",
    "Interval1D",
    "BoolArray",
    "FloatArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
]
