"""
Bisection root finding, the guaranteed-convergence fallback of the engine.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING

from pysatl_probeval.config import DBL_DIG, DBL_EPSILON, MINVAL, engine_settings
from pysatl_probeval.errors import InvalidArgumentError, InvalidBracketError
from pysatl_probeval.numerics.bracket import check_probability, find_bracket
from pysatl_probeval.numerics.result import RootResult

if TYPE_CHECKING:
    from pysatl_probeval.config import PrecisionBudget
    from pysatl_probeval.types import Interval1D, ScalarFunc

logger = logging.getLogger(__name__)


def bisect(
    f: ScalarFunc,
    a: float,
    b: float,
    u: float = 0.0,
    epsilon: float | None = None,
    *,
    max_iter: int | None = None,
) -> RootResult:
    """
    Solve ``f(x) = u`` on ``[a, b]`` by repeated halving.

    Stops when the residual is exactly zero or the relative bracket width
    ``|b - a| / |x|`` drops to ``epsilon``.

    Parameters
    ----------
    f : Callable[[float], float]
        Continuous function; ``f - u`` must change sign on ``[a, b]``.
    a, b : float
        Bracket endpoints; swapped if given in decreasing order.
    u : float, default 0.0
        Target value.
    epsilon : float, optional
        Relative precision, defaults to the engine precision epsilon.
    max_iter : int, optional
        Iteration cap, defaults to ``engine_settings().bisection_max_iter``.

    Returns
    -------
    RootResult
        Midpoint of the final bracket; ``converged`` is ``False`` if the cap
        was reached first.

    Raises
    ------
    InvalidBracketError
        If ``f(a) - u`` and ``f(b) - u`` have the same strict sign.
    """
    settings = engine_settings()
    if epsilon is None:
        epsilon = settings.precision.epsilon
    if max_iter is None:
        max_iter = settings.bisection_max_iter
    if b < a:
        a, b = b, a

    ya = f(a) - u
    if ya == 0.0:
        return RootResult(root=a, converged=True, iterations=0)
    yb = f(b) - u
    if yb == 0.0:
        return RootResult(root=b, converged=True, iterations=0)
    if (ya > 0.0) == (yb > 0.0):
        raise InvalidBracketError(f"no sign change of f - u on [{a!r}, {b!r}]")

    xa, xb = a, b
    x, y = a, ya
    for i in range(1, max_iter + 1):
        x = 0.5 * (xa + xb)
        y = f(x) - u
        logger.debug("bisect %3d: xa=%.17g xb=%.17g f-u=%.4g", i, xa, xb, y)
        width = xb - xa
        if y == 0.0 or width <= epsilon * (abs(x) + DBL_EPSILON) or width <= MINVAL:
            return RootResult(root=x, converged=True, iterations=i, residual=y)
        if (y > 0.0) != (ya > 0.0):
            xb = x
        else:
            xa, ya = x, y

    return RootResult(root=x, converged=False, iterations=max_iter, residual=y)


def inverse_bisection(
    cdf: ScalarFunc,
    u: float,
    support: Interval1D | None = None,
    *,
    precision: PrecisionBudget | None = None,
    max_iter: int | None = None,
    half_width: float | None = None,
) -> RootResult:
    """
    Compute ``x`` with ``cdf(x) = u`` by bracket search and bisection.

    Parameters
    ----------
    cdf : Callable[[float], float]
        Nondecreasing function.
    u : float
        Probability in ``[0, 1]``; ``0`` and ``1`` map to the support edges.
    support : Interval1D, optional
        Support of the distribution.
    precision : PrecisionBudget, optional
        At most ``DBL_DIG`` (15) digits; defaults to the engine settings.
    max_iter : int, optional
        Iteration cap, defaults to the engine settings.
    half_width : float, optional
        Initial bracket half-width, defaults to the engine settings.

    Raises
    ------
    InvalidArgumentError
        If ``u`` is outside ``[0, 1]`` or the precision is not in ``[1, 15]``.
    """
    check_probability(u)
    settings = engine_settings()
    if precision is None:
        precision = settings.precision
    if not 1 <= precision.digits <= DBL_DIG:
        raise InvalidArgumentError(
            f"bisection supports 1 to {DBL_DIG} decimal digits, got {precision.digits}"
        )

    left = float("-inf") if support is None else support.left
    right = float("inf") if support is None else support.right
    if u <= 0.0:
        return RootResult(root=left, converged=True, iterations=0)
    if u >= 1.0:
        return RootResult(root=right, converged=True, iterations=0)

    a, b = find_bracket(
        cdf,
        u,
        support,
        half_width=settings.bracket_half_width if half_width is None else half_width,
    )
    return bisect(cdf, a, b, u, precision.epsilon, max_iter=max_iter)
