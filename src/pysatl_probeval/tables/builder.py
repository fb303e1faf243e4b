"""
Table Builders
==============

Construction of :class:`~pysatl_probeval.tables.table.DiscreteTable` from a
probability mass function, and of
:class:`~pysatl_probeval.tables.table.FiniteTable` from explicit points.

Notes
-----
``build_table`` starts at the mode with an unnormalised term ``P[mode] = 1``
and walks outward on each side while the terms exceed a local epsilon. The
terms are then renormalised by their sum, the lower cumulative sums are
accumulated up to the median and the complementary sums from the upper end
down to just above it. Finally the ends whose cumulative probability stays
below the truncation epsilon are trimmed off, since the renormalisation has
already left them without meaningful digits.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from math import inf, isfinite, sqrt
from typing import TYPE_CHECKING

import numpy as np

from pysatl_probeval.config import engine_settings
from pysatl_probeval.errors import InvalidArgumentError, TableSizeError
from pysatl_probeval.tables.table import DiscreteTable, FiniteTable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_probeval.types import FloatArray, Interval1D, MassFunction, Number, RatioFunction

logger = logging.getLogger(__name__)

MAX_TABLE_SIZE: int = 1 << 24
"""Upper bound on the number of terms one side of a table may hold."""


class _GrowableBuffer:
    """Float buffer whose capacity doubles whenever it fills up."""

    __slots__ = ("_data", "_size")

    def __init__(self, capacity: int) -> None:
        self._data = np.empty(max(capacity, 1), dtype=np.float64)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def append(self, value: float) -> None:
        if self._size == self._data.size:
            if self._size >= MAX_TABLE_SIZE:
                raise TableSizeError(
                    f"Probability table exceeds {MAX_TABLE_SIZE} terms; "
                    "the mass function does not seem to decay."
                )
            grown = np.empty(2 * self._data.size, dtype=np.float64)
            grown[: self._size] = self._data[: self._size]
            self._data = grown
            logger.debug("table buffer grown to %d terms", grown.size)
        self._data[self._size] = value
        self._size += 1

    def view(self) -> FloatArray:
        return self._data[: self._size]


def locate_mode(
    prob: MassFunction,
    start: int = 0,
    lower: float = -inf,
    upper: float = inf,
) -> int:
    """
    Hill-climb ``prob`` from ``start`` to a local maximum within ``[lower, upper]``.

    Exact for unimodal mass functions.
    """
    x = start
    px = prob(x)
    while x < upper:
        nxt = prob(x + 1)
        if nxt <= px:
            break
        x, px = x + 1, nxt
    while x > lower:
        prv = prob(x - 1)
        if prv <= px:
            break
        x, px = x - 1, prv
    return x


def _default_capacity(mode: int) -> int:
    return int(16 * (2 + sqrt(max(abs(mode), 1))))


def build_table(
    prob: MassFunction,
    *,
    mode: int | None = None,
    ratio_down: RatioFunction | None = None,
    ratio_up: RatioFunction | None = None,
    support: Interval1D | None = None,
    epsilon: float | None = None,
    eps_extra: float | None = None,
    capacity: int | None = None,
) -> DiscreteTable:
    """
    Precompute the truncated mass and two-sided cumulative tables.

    Parameters
    ----------
    prob : MassFunction
        ``prob(k) = P[X = k]``.
    mode : int, optional
        Mode (or any point near the bulk of the mass). Located by
        :func:`locate_mode` from the support's lower edge (or 0) if omitted.
    ratio_down : RatioFunction, optional
        ``ratio_down(i) = P[X = i - 1] / P[X = i]``. Without it each term is
        evaluated directly through ``prob``.
    ratio_up : RatioFunction, optional
        ``ratio_up(i) = P[X = i + 1] / P[X = i]``.
    support : Interval1D, optional
        Integer support; the walks never leave it and its edges are recorded
        for the inverter. Defaults to all integers.
    epsilon : float, optional
        Truncation threshold, defaults to ``engine_settings().discrete_epsilon``
        (``1e-16``).
    eps_extra : float, optional
        Factor applied to ``epsilon`` while walking, defaults to the engine
        settings (``1e-6``).
    capacity : int, optional
        Initial capacity of each side's buffer.

    Returns
    -------
    DiscreteTable
        Renormalised table; the retained mass sums to 1 within ``epsilon``.

    Raises
    ------
    InvalidArgumentError
        If the mode lies outside the support or carries no mass.
    """
    settings = engine_settings()
    if epsilon is None:
        epsilon = settings.discrete_epsilon
    if eps_extra is None:
        eps_extra = settings.eps_extra
    lower = -inf if support is None else support.left
    upper = inf if support is None else support.right

    if mode is None:
        start = int(lower) if isfinite(lower) else 0
        mode = locate_mode(prob, start, lower, upper)
    mode = int(mode)
    if not lower <= mode <= upper:
        raise InvalidArgumentError(f"mode {mode} outside the support [{lower}, {upper}]")

    p_mode = float(prob(mode))
    if not p_mode > 0.0:
        raise InvalidArgumentError(f"mass at the mode must be positive, got P[X = {mode}] = {p_mode}")
    local_eps = epsilon * eps_extra / p_mode

    if capacity is None:
        capacity = _default_capacity(mode)

    total = 1.0
    below = _GrowableBuffer(capacity)
    i, term = mode, 1.0
    while i > lower and term > local_eps:
        term = term * ratio_down(i) if ratio_down is not None else prob(i - 1) / p_mode
        i -= 1
        below.append(term)
        total += term
    imin = i

    above = _GrowableBuffer(capacity)
    i, term = mode, 1.0
    while i < upper and term > local_eps:
        term = term * ratio_up(i) if ratio_up is not None else prob(i + 1) / p_mode
        i += 1
        above.append(term)
        total += term

    pmf = np.concatenate((below.view()[::-1], [1.0], above.view())) / total
    lower_cdf = np.cumsum(pmf)
    med = min(int(np.searchsorted(lower_cdf, 0.5, side="left")), pmf.size - 1)

    cdf = lower_cdf
    cdf[med + 1 :] = np.cumsum(pmf[med + 1 :][::-1])[::-1]

    lo = 0
    while lo < med and cdf[lo] < epsilon:
        lo += 1
    hi = pmf.size - 1
    while hi > med and cdf[hi] < epsilon:
        hi -= 1

    logger.debug(
        "built table on [%d, %d] (median %d) from %d terms", imin + lo, imin + hi, imin + med,
        pmf.size,
    )
    return DiscreteTable(
        pmf=pmf[lo : hi + 1],
        cdf=cdf[lo : hi + 1],
        xmin=imin + lo,
        xmax=imin + hi,
        xmed=imin + med,
        support_lower=lower,
        support_upper=upper,
    )


def tabulate_finite(values: Iterable[Number], probabilities: Iterable[Number]) -> FiniteTable:
    """
    Build the two-sided cumulative table of a finite distribution.

    Parameters
    ----------
    values : Iterable[Number]
        Distinct support points, in any order.
    probabilities : Iterable[Number]
        Nonnegative weights matching ``values``; normalised by their sum.

    Raises
    ------
    InvalidArgumentError
        If the inputs are empty, of different lengths, contain duplicates,
        negative or non-finite entries, or the weights sum to zero.
    """
    xs = np.asarray(list(values), dtype=np.float64)
    ps = np.asarray(list(probabilities), dtype=np.float64)
    if xs.ndim != 1 or xs.size == 0:
        raise InvalidArgumentError("values must be a non-empty 1D sequence")
    if ps.shape != xs.shape:
        raise InvalidArgumentError(
            f"values and probabilities differ in length: {xs.size} != {ps.size}"
        )
    if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ps))):
        raise InvalidArgumentError("values and probabilities must be finite")
    if np.any(ps < 0.0):
        raise InvalidArgumentError("probabilities must be nonnegative")
    total = float(ps.sum())
    if total <= 0.0:
        raise InvalidArgumentError("probabilities must not all be zero")

    order = np.argsort(xs, kind="stable")
    xs, ps = xs[order], ps[order] / total
    if xs.size > 1 and np.any(np.diff(xs) == 0.0):
        raise InvalidArgumentError("values must be distinct")

    last = xs.size - 1
    cdf = np.cumsum(ps)
    med = min(int(np.searchsorted(cdf, 0.5, side="left")), last)
    cdf[med + 1 :] = np.cumsum(ps[med + 1 :][::-1])[::-1]

    table = DiscreteTable(
        pmf=ps, cdf=cdf, xmin=0, xmax=last, xmed=med, support_lower=0, support_upper=last
    )
    return FiniteTable(values=xs, table=table)


__all__ = [
    "MAX_TABLE_SIZE",
    "build_table",
    "locate_mode",
    "tabulate_finite",
]
