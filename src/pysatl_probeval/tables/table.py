"""
Probability Tables
==================

Value objects holding a truncated probability mass table together with a
*two-sided* cumulative table:

- :class:`DiscreteTable` — integer support ``xmin..xmax``.
- :class:`FiniteTable` — an explicit, sorted finite set of real points.

Notes
-----
The cumulative array stores ``P[X <= i]`` for ``i <= xmed`` and the
complementary ``P[X >= i]`` for ``i > xmed``. Each tail is therefore a sum of
small terms instead of ``1 - (something close to 1)``, which keeps relative
precision near both 0 and 1.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from math import ceil, floor, inf, isinf, isnan, nan
from typing import TYPE_CHECKING

import numpy as np

from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.tables.inverter import invert_table

if TYPE_CHECKING:
    from pysatl_probeval.types import FloatArray


def _frozen_array(values: FloatArray) -> FloatArray:
    arr = np.array(values, dtype=np.float64)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, slots=True, eq=False)
class DiscreteTable:
    """
    Truncated probability table over the integers ``xmin..xmax``.

    Parameters
    ----------
    pmf : FloatArray
        ``pmf[i - xmin] = P[X = i]``.
    cdf : FloatArray
        ``cdf[i - xmin] = P[X <= i]`` for ``i <= xmed`` and ``P[X >= i]``
        for ``i > xmed``.
    xmin, xmax : int
        First and last tabulated points.
    xmed : int
        Smallest point whose lower cumulative probability is ``>= 0.5``.
    support_lower, support_upper : float
        Edges of the distribution's support, returned by the inverter for
        ``u = 0`` and ``u = 1``. They may be infinite.

    Raises
    ------
    InvalidArgumentError
        If the arrays do not match ``xmin..xmax`` or ``xmed`` lies outside it.
    """

    pmf: FloatArray
    cdf: FloatArray
    xmin: int
    xmax: int
    xmed: int
    support_lower: float = -inf
    support_upper: float = inf

    def __post_init__(self) -> None:
        if self.xmax < self.xmin:
            raise InvalidArgumentError(f"xmax < xmin: {self.xmax} < {self.xmin}")
        if not self.xmin <= self.xmed <= self.xmax:
            raise InvalidArgumentError(f"xmed={self.xmed} outside [{self.xmin}, {self.xmax}]")
        size = self.xmax - self.xmin + 1
        pmf = _frozen_array(self.pmf)
        cdf = _frozen_array(self.cdf)
        if pmf.shape != (size,) or cdf.shape != (size,):
            raise InvalidArgumentError(
                f"pmf and cdf must be 1D arrays of length {size}, "
                f"got {pmf.shape} and {cdf.shape}"
            )
        object.__setattr__(self, "pmf", pmf)
        object.__setattr__(self, "cdf", cdf)

    def __len__(self) -> int:
        return self.xmax - self.xmin + 1

    @property
    def points(self) -> FloatArray:
        """Tabulated points ``xmin..xmax`` as floats."""
        return np.arange(self.xmin, self.xmax + 1, dtype=np.float64)

    def prob(self, x: int) -> float:
        """``P[X = x]``, zero outside the table."""
        if x < self.xmin or x > self.xmax:
            return 0.0
        return float(self.pmf[x - self.xmin])

    def cdf_at(self, x: float) -> float:
        """``P[X <= x]`` read from the table; 0 below ``xmin`` and 1 from ``xmax`` on."""
        if isnan(x):
            return nan
        if isinf(x):
            return 1.0 if x > 0 else 0.0
        k = floor(x)
        if k < self.xmin:
            return 0.0
        if k >= self.xmax:
            return 1.0
        if k <= self.xmed:
            return float(self.cdf[k - self.xmin])
        return float(max(1.0 - self.cdf[k + 1 - self.xmin], 0.0))

    def sf_at(self, x: float) -> float:
        """``P[X >= x]`` read from the table; 1 up to ``xmin`` and 0 above ``xmax``."""
        if isnan(x):
            return nan
        if isinf(x):
            return 0.0 if x > 0 else 1.0
        k = ceil(x)
        if k <= self.xmin:
            return 1.0
        if k > self.xmax:
            return 0.0
        if k > self.xmed:
            return float(self.cdf[k - self.xmin])
        return float(max(1.0 - self.cdf[k - 1 - self.xmin], 0.0))

    def unfolded_cdf(self) -> FloatArray:
        """``P[X <= i]`` for every tabulated ``i``, unfolding the upper half."""
        med = self.xmed - self.xmin
        full = np.array(self.cdf, dtype=np.float64)
        full[med + 1 : -1] = 1.0 - self.cdf[med + 2 :]
        if med < len(self) - 1:
            full[-1] = 1.0
        return full

    def mean(self) -> float:
        """Mean of the tabulated mass."""
        return float(np.dot(self.points, self.pmf))

    def variance(self) -> float:
        """Variance of the tabulated mass."""
        centered = self.points - self.mean()
        return float(np.dot(centered * centered, self.pmf))

    def inverse(self, u: float) -> int | float:
        """Smallest tabulated ``x`` with ``P[X <= x] >= u`` (see :func:`invert_table`)."""
        return invert_table(self, u)


@dataclass(frozen=True, slots=True, eq=False)
class FiniteTable:
    """
    Probability table over an explicit sorted set of real points.

    The cumulative layout is the one of :class:`DiscreteTable` built over the
    point indices ``0..n-1``.

    Parameters
    ----------
    values : FloatArray
        Strictly increasing support points.
    table : DiscreteTable
        Index table with ``xmin = 0`` and ``xmax = n - 1``.
    """

    values: FloatArray
    table: DiscreteTable = field(repr=False)

    def __post_init__(self) -> None:
        values = _frozen_array(self.values)
        if values.shape != (len(self.table),) or self.table.xmin != 0:
            raise InvalidArgumentError("values must match the index table 0..n-1")
        if values.size > 1 and not np.all(np.diff(values) > 0.0):
            raise InvalidArgumentError("values must be strictly increasing")
        object.__setattr__(self, "values", values)

    def __len__(self) -> int:
        return int(self.values.size)

    @property
    def pmf(self) -> FloatArray:
        return self.table.pmf

    def prob(self, x: float) -> float:
        """``P[X = x]``, zero unless ``x`` is one of the points."""
        idx = int(np.searchsorted(self.values, x, side="left"))
        if idx < self.values.size and self.values[idx] == x:
            return self.table.prob(idx)
        return 0.0

    def cdf_at(self, x: float) -> float:
        """``P[X <= x]``."""
        idx = int(np.searchsorted(self.values, x, side="right")) - 1
        if idx < 0:
            return 0.0
        return self.table.cdf_at(idx)

    def sf_at(self, x: float) -> float:
        """``P[X >= x]``."""
        idx = int(np.searchsorted(self.values, x, side="left"))
        return self.table.sf_at(idx)

    def mean(self) -> float:
        return float(np.dot(self.values, self.table.pmf))

    def variance(self) -> float:
        centered = self.values - self.mean()
        return float(np.dot(centered * centered, self.table.pmf))

    def inverse(self, u: float) -> float:
        """Smallest point ``x`` with ``P[X <= x] >= u``."""
        return float(self.values[int(invert_table(self.table, u))])
