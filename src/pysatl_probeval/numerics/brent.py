"""
Brent-Dekker root finding.

Derivative-free hybrid of bisection, secant and inverse quadratic
interpolation. Convergence is guaranteed once a sign change is bracketed and
is superlinear on smooth functions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from pysatl_probeval.config import DBL_EPSILON, MINVAL, engine_settings
from pysatl_probeval.errors import InvalidBracketError
from pysatl_probeval.numerics.bracket import check_probability
from pysatl_probeval.numerics.result import RootResult

if TYPE_CHECKING:
    from pysatl_probeval.config import PrecisionBudget
    from pysatl_probeval.types import Interval1D, MonotoneFunction, ScalarFunc

logger = logging.getLogger(__name__)

ROOT_EPS: float = 0.5e-15
"""Tolerance floor added by :func:`brent_dekker`."""

ROOT_MAX_ITER: int = 120


def _same_sign(x: float, y: float) -> bool:
    return (x > 0.0 and y > 0.0) or (x < 0.0 and y < 0.0)


def _zeroin(
    f: ScalarFunc,
    a: float,
    b: float,
    fa: float,
    fb: float,
    tol: float,
    max_iter: int,
    zero_tol: float,
) -> RootResult:
    """
    Core Brent-Dekker iteration on a bracket with ``fa``, ``fb`` of opposite signs.

    ``b`` is the current best point, ``a`` the previous one and ``c`` the
    point whose value has the sign opposite to ``f(b)``.
    """
    c, fc = a, fa
    d = e = b - a
    if abs(fc) < abs(fb):
        a, b, c = b, c, b
        fa, fb, fc = fb, fc, fb

    for i in range(max_iter):
        tol1 = tol + 4.0 * DBL_EPSILON * abs(b)
        xm = 0.5 * (c - b)
        logger.debug("brent %3d: b=%.17g c=%.17g f(b)=%.4g", i, b, c, fb)

        if abs(fb) <= zero_tol or abs(xm) <= tol1:
            return RootResult(root=b, converged=True, iterations=i, residual=fb)

        if abs(e) >= tol1 and abs(fa) > abs(fb):
            s = fb / fa
            if a == c:
                # secant
                p = 2.0 * xm * s
                q = 1.0 - s
            else:
                # inverse quadratic interpolation
                q = fa / fc
                r = fb / fc
                p = s * (2.0 * xm * q * (q - r) - (b - a) * (r - 1.0))
                q = (q - 1.0) * (r - 1.0) * (s - 1.0)
            if p > 0.0:
                q = -q
            p = abs(p)
            if 2.0 * p >= 3.0 * xm * q - abs(tol1 * q) or p >= abs(0.5 * e * q):
                d = e = xm
            else:
                e = d
                d = p / q
        else:
            d = e = xm

        a, fa = b, fb
        if abs(d) > tol1:
            b += d
        elif xm < 0.0:
            b -= tol1
        else:
            b += tol1
        fb = f(b)

        if _same_sign(fb, fc):
            c, fc = a, fa
            d = e = b - a
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

    return RootResult(root=b, converged=False, iterations=max_iter, residual=fb)


def inverse_brent(
    cdf: MonotoneFunction,
    a: float,
    b: float,
    u: float,
    tol: float,
    *,
    support: Interval1D | None = None,
    precision: PrecisionBudget | None = None,
    max_iter: int | None = None,
) -> RootResult:
    """
    Solve ``cdf(x) = u`` for ``x`` in ``[a, b]`` with Brent-Dekker.

    Parameters
    ----------
    cdf : MonotoneFunction
        Nondecreasing function.
    a, b : float
        Bracket endpoints; swapped if given in decreasing order.
    u : float
        Target value in ``[0, 1]``.
    tol : float
        Requested absolute tolerance on ``x``. The precision epsilon and the
        machine epsilon are added to it so that it is always attainable.
    support : Interval1D, optional
        Support used for ``u in {0, 1}`` and to clamp the result.
    precision : PrecisionBudget, optional
        Defaults to the engine settings.
    max_iter : int, optional
        Iteration cap, defaults to ``engine_settings().brent_max_iter``.

    Returns
    -------
    RootResult
        ``converged`` is ``False`` if the cap was reached; ``root`` is then
        the best point found.

    Raises
    ------
    InvalidArgumentError
        If ``u`` is outside ``[0, 1]``.
    InvalidBracketError
        If ``cdf(a) > u`` or ``cdf(b) < u``.
    """
    check_probability(u)
    if b < a:
        a, b = b, a

    left = float("-inf") if support is None else support.left
    right = float("inf") if support is None else support.right
    if u <= 0.0:
        return RootResult(root=left, converged=True, iterations=0)
    if u >= 1.0:
        return RootResult(root=right, converged=True, iterations=0)

    settings = engine_settings()
    if precision is None:
        precision = settings.precision
    if max_iter is None:
        max_iter = settings.brent_max_iter
    tol += precision.epsilon + DBL_EPSILON

    ua = cdf(a) - u
    if ua > 0.0:
        raise InvalidBracketError(f"u < cdf(a): u={u!r}, a={a!r}")
    ub = cdf(b) - u
    if ub < 0.0:
        raise InvalidBracketError(f"u > cdf(b): u={u!r}, b={b!r}")

    result = _zeroin(lambda x: cdf(x) - u, a, b, ua, ub, tol, max_iter, 0.0)
    if result.root <= left:
        return replace(result, root=left)
    if result.root >= right:
        return replace(result, root=right)
    return result


def brent_dekker(
    f: ScalarFunc,
    a: float,
    b: float,
    tol: float,
    *,
    max_iter: int = ROOT_MAX_ITER,
) -> RootResult:
    """
    Find a root of ``f`` in ``[a, b]`` with Brent-Dekker.

    Values with magnitude at most ``MINVAL`` count as exact zeros, both for
    ``f`` and for the returned root.

    Parameters
    ----------
    f : Callable[[float], float]
        Continuous function changing sign on ``[a, b]``.
    a, b : float
        Bracket endpoints, in any order.
    tol : float
        Absolute tolerance on the root.
    max_iter : int, default 120
        Iteration cap.

    Raises
    ------
    InvalidBracketError
        If ``f(a)`` and ``f(b)`` have the same sign.
    """
    if b < a:
        a, b = b, a

    fa = f(a)
    if abs(fa) <= MINVAL:
        return RootResult(root=a, converged=True, iterations=0, residual=fa)
    fb = f(b)
    if abs(fb) <= MINVAL:
        return RootResult(root=b, converged=True, iterations=0, residual=fb)
    if _same_sign(fa, fb):
        raise InvalidBracketError(f"f(a) and f(b) have the same sign on [{a!r}, {b!r}]")

    result = _zeroin(f, a, b, fa, fb, tol + ROOT_EPS + DBL_EPSILON, max_iter, MINVAL)
    if abs(result.root) <= MINVAL:
        return replace(result, root=0.0)
    return result
