"""
Continuous inversion: bracket search followed by a root solver.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Literal

from pysatl_probeval.config import engine_settings
from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.numerics.bisection import inverse_bisection
from pysatl_probeval.numerics.bracket import check_probability, find_bracket
from pysatl_probeval.numerics.brent import inverse_brent

if TYPE_CHECKING:
    from pysatl_probeval.config import PrecisionBudget
    from pysatl_probeval.numerics.result import RootResult
    from pysatl_probeval.types import Interval1D, MonotoneFunction

type InversionMethod = Literal["brent", "bisection"]


def invert_monotone(
    cdf: MonotoneFunction,
    u: float,
    support: Interval1D | None = None,
    *,
    method: InversionMethod = "brent",
    precision: PrecisionBudget | None = None,
    tol: float | None = None,
    max_iter: int | None = None,
    half_width: float | None = None,
) -> RootResult:
    """
    Compute ``inverseF(u)`` for a nondecreasing ``cdf``.

    Parameters
    ----------
    cdf : MonotoneFunction
        Nondecreasing function with values in ``[0, 1]``.
    u : float
        Probability in ``[0, 1]``.
    support : Interval1D, optional
        Support of the distribution; ``u = 0`` and ``u = 1`` map to its edges.
    method : {"brent", "bisection"}, default "brent"
        Root solver used once the bracket is found.
    precision : PrecisionBudget, optional
        Requested decimal digits, defaults to the engine settings.
    tol : float, optional
        Absolute tolerance for Brent-Dekker, defaults to ``precision.epsilon``.
    max_iter : int, optional
        Solver iteration cap, defaults to the engine settings.
    half_width : float, optional
        Initial bracket half-width, defaults to the engine settings.

    Returns
    -------
    RootResult
        The solver outcome, with ``converged`` reporting the iteration cap.
    """
    check_probability(u)
    settings = engine_settings()
    if precision is None:
        precision = settings.precision
    if half_width is None:
        half_width = settings.bracket_half_width

    if method == "bisection":
        return inverse_bisection(
            cdf, u, support, precision=precision, max_iter=max_iter, half_width=half_width
        )
    if method != "brent":
        raise InvalidArgumentError(f"Unknown inversion method '{method}'")

    if u <= 0.0 or u >= 1.0:
        return inverse_brent(cdf, 0.0, 0.0, u, 0.0, support=support)

    a, b = find_bracket(cdf, u, support, half_width=half_width)
    return inverse_brent(
        cdf,
        a,
        b,
        u,
        precision.epsilon if tol is None else tol,
        support=support,
        precision=precision,
        max_iter=max_iter,
    )
