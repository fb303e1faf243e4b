"""
Bracket search for monotone inversion.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING

from pysatl_probeval.config import XLIM
from pysatl_probeval.errors import InvalidArgumentError

if TYPE_CHECKING:
    from pysatl_probeval.types import Interval1D, MonotoneFunction

logger = logging.getLogger(__name__)

DEFAULT_HALF_WIDTH: float = 8.0


def check_probability(u: float) -> None:
    """Raise :class:`InvalidArgumentError` unless ``0 <= u <= 1``."""
    if not 0.0 <= u <= 1.0:
        raise InvalidArgumentError(f"u not in [0, 1]: {u!r}")


def find_bracket(
    cdf: MonotoneFunction,
    u: float,
    support: Interval1D | None = None,
    *,
    half_width: float = DEFAULT_HALF_WIDTH,
) -> tuple[float, float]:
    """
    Find ``[a, b]`` with ``cdf(a) <= u <= cdf(b)``.

    The window ``[-half_width, half_width]`` is doubled outward from 0 on the
    side that needs it: the upper bound grows while ``cdf(b) < u``, otherwise
    the lower bound grows while ``cdf(a) > u``. The half-interval found by the
    last doubling is returned, clipped to ``support``.

    Parameters
    ----------
    cdf : MonotoneFunction
        Nondecreasing function, typically a distribution's ``cdf``.
    u : float
        Target value in ``[0, 1]``.
    support : Interval1D, optional
        Interval where the density is nonzero; defaults to the real line.
    half_width : float, default 8.0
        Initial half-width of the search window.

    Returns
    -------
    tuple[float, float]
        Ordered bracket ``(a, b)``.

    Raises
    ------
    InvalidArgumentError
        If ``u`` is outside ``[0, 1]`` or ``half_width`` is not positive.

    Notes
    -----
    If the doubling reaches ``XLIM`` without bracketing ``u``, the widest
    interval found (clipped to the support) is returned and the solver's own
    checks and iteration cap take over.
    """
    check_probability(u)
    if half_width <= 0.0:
        raise InvalidArgumentError("half_width must be positive")

    left = float("-inf") if support is None else support.left
    right = float("inf") if support is None else support.right

    b = half_width
    while b < XLIM and u > cdf(b):
        b *= 2.0
    if b > half_width:
        if b >= XLIM:
            logger.debug("find_bracket: upper bound reached ceiling for u=%r", u)
        return _clip(b / 2.0, b, left, right)

    a = -half_width
    while a > -XLIM and u < cdf(a):
        a *= 2.0
    if a < -half_width:
        if a <= -XLIM:
            logger.debug("find_bracket: lower bound reached ceiling for u=%r", u)
        return _clip(a, a / 2.0, left, right)

    return _clip(a, b, left, right)


def _clip(a: float, b: float, left: float, right: float) -> tuple[float, float]:
    a = min(max(a, left), right)
    b = min(max(b, left), right)
    return a, b
