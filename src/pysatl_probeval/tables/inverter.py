"""
Inversion of two-sided cumulative tables by binary search.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

from pysatl_probeval.errors import InvalidArgumentError

if TYPE_CHECKING:
    from pysatl_probeval.tables.table import DiscreteTable


def _edge(value: float) -> int | float:
    return int(value) if np.isfinite(value) else value


def invert_table(table: DiscreteTable, u: float) -> int | float:
    """
    Smallest ``x`` with ``P[X <= x] >= u``.

    Parameters
    ----------
    table : DiscreteTable
        Table built by :func:`~pysatl_probeval.tables.builder.build_table`.
    u : float
        Probability in ``[0, 1]``.

    Returns
    -------
    int or float
        An integer point; ``u = 0`` and ``u = 1`` return the recorded support
        edges, which are floats only when infinite.

    Raises
    ------
    InvalidArgumentError
        If ``u`` is outside ``[0, 1]``.

    Notes
    -----
    If ``u <= cdf[xmed]`` the lower half is searched directly. Otherwise the
    upper half holds ``P[X >= i]`` in decreasing order: the search finds the
    first ``i`` with ``P[X >= i] <= 1 - u`` and returns ``i - 1``, because
    ``P[X <= i - 1] = 1 - P[X >= i] >= u``.
    """
    if not 0.0 <= u <= 1.0:
        raise InvalidArgumentError(f"u is not in [0, 1]: {u!r}")
    if u <= 0.0:
        return _edge(table.support_lower)
    if u >= 1.0:
        return _edge(table.support_upper)

    cdf = table.cdf
    med = table.xmed - table.xmin
    if u <= cdf[med]:
        idx = int(np.searchsorted(cdf[: med + 1], u, side="left"))
        return table.xmin + idx

    if table.xmed == table.xmax:
        return table.xmax
    tail = 1.0 - u
    if tail < cdf[-1]:
        return table.xmax
    # the upper half is nonincreasing, so search its negation
    idx = int(np.searchsorted(-cdf[med + 1 :], -tail, side="left"))
    return table.xmed + idx
