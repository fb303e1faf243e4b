"""
Conversions Between Characteristics
===================================

Fitters that derive a missing characteristic from one the distribution
already resolves, and the default conversion sets wired into
:class:`~pysatl_probeval.distributions.strategies.DefaultComputationStrategy`.

Continuous (``1C``):

- ``cdf -> ppf`` by bracket search and Brent-Dekker (or bisection);
- ``cdf -> sf`` and ``sf -> cdf`` by complement;
- ``cdf -> pdf`` by a 5-point central derivative;
- ``pdf -> cdf``, ``pdf -> mean``, ``pdf -> var`` by adaptive quadrature.

Discrete (``1D``): ``pmf -> cdf / sf / ppf / mean / var`` through a
:class:`~pysatl_probeval.tables.table.DiscreteTable`. Distributions that
already hold a table (see :class:`TableBacked`) reuse it.

Notes
-----
Fitters accept engine setting overrides as options (``decimal_digits``,
``brent_max_iter``, ``discrete_epsilon``...), plus ``method`` for the
inversion solver, ``h`` for the derivative step and ``mode`` for the table
builder.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Callable, Mapping
from math import isfinite, nan
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

import numpy as np
from mypy_extensions import KwArg
from scipy import integrate as _sp_integrate

from pysatl_probeval.config import engine_settings
from pysatl_probeval.distributions.computation import ComputationMethod, FittedComputationMethod
from pysatl_probeval.errors import CharacteristicResolutionError, InvalidArgumentError
from pysatl_probeval.numerics.inversion import invert_monotone
from pysatl_probeval.tables.builder import build_table
from pysatl_probeval.tables.table import DiscreteTable
from pysatl_probeval.types import CharacteristicName, Interval1D, Kind

if TYPE_CHECKING:
    from pysatl_probeval.config import EngineSettings
    from pysatl_probeval.distributions.distribution import Distribution
    from pysatl_probeval.types import GenericCharacteristicName, ScalarFunc

type ScalarMethod = Callable[[float, KwArg(Any)], float]


@runtime_checkable
class TableBacked(Protocol):
    """Distribution holding a precomputed probability table."""

    @property
    def table(self) -> DiscreteTable: ...


def _resolve(
    distribution: Distribution, name: GenericCharacteristicName, **options: Any
) -> ScalarFunc:
    """
    Resolve a scalar characteristic from the distribution.

    Raises
    ------
    CharacteristicResolutionError
        If the characteristic can be neither found nor derived.
    """
    method = distribution.query_method(name, **options)

    def _wrap(x: float) -> float:
        return float(method(x))

    return _wrap


def _settings(options: Mapping[str, Any]) -> EngineSettings:
    return engine_settings().override(options)


def _interval(distribution: Distribution) -> Interval1D:
    support = distribution.support
    if support is None:
        return Interval1D()
    return Interval1D(support.left, support.right)


def _fitted(
    target: GenericCharacteristicName, source: GenericCharacteristicName, func: Callable[..., float]
) -> FittedComputationMethod[float, float]:
    return FittedComputationMethod[float, float](
        target=target, sources=[source], func=cast(ScalarMethod, func)
    )


def _constant(value: float) -> Callable[..., float]:
    def _value(_: Any = None, **__: Any) -> float:
        return value

    return _value


def _num_derivative(f: ScalarFunc, x: float, h: float = 1e-5) -> float:
    """5-point central derivative ``f'(x)``."""
    if not isfinite(x):
        return nan
    f1 = f(x + h)
    f_1 = f(x - h)
    f2 = f(x + 2 * h)
    f_2 = f(x - 2 * h)
    return (-f2 + 8 * f1 - 8 * f_1 + f_2) / (12.0 * h)


# --- Continuous (1C) ----------------------------------------------------------


def fit_cdf_to_ppf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` by numerically inverting a resolvable ``cdf``.

    Parameters
    ----------
    distribution : Distribution
    **options
        ``method`` (``"brent"`` or ``"bisection"``) and engine setting
        overrides.

    Returns
    -------
    FittedComputationMethod[float, float]
        ``ppf``; ``0`` and ``1`` map to the support edges.

    Raises
    ------
    InvalidArgumentError
        At fit time for an unknown ``method``; at call time for a
        probability outside ``[0, 1]``.
    NonConvergenceError
        At call time, in strict mode, if the solver hits its iteration cap.
    """
    cdf = _resolve(distribution, CharacteristicName.CDF, **options)
    method = options.get("method", "brent")
    if method not in ("brent", "bisection"):
        raise InvalidArgumentError(f"Unknown inversion method '{method}'")
    support = _interval(distribution)

    def _ppf(q: float, **_: Any) -> float:
        # Read on every call: the fitted method outlives configure_engine().
        settings = _settings(options)
        max_iter = settings.brent_max_iter if method == "brent" else settings.bisection_max_iter
        result = invert_monotone(
            cdf,
            q,
            support,
            method=method,
            precision=settings.precision,
            max_iter=max_iter,
            half_width=settings.bracket_half_width,
        )
        return result.unwrap(strict=settings.strict_convergence, solver=f"{method} inversion")

    return _fitted(CharacteristicName.PPF, CharacteristicName.CDF, _ppf)


def fit_cdf_to_sf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``sf = 1 - cdf``."""
    cdf = _resolve(distribution, CharacteristicName.CDF, **options)

    def _sf(x: float, **_: Any) -> float:
        return float(np.clip(1.0 - cdf(x), 0.0, 1.0))

    return _fitted(CharacteristicName.SF, CharacteristicName.CDF, _sf)


def fit_sf_to_cdf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf = 1 - sf``."""
    sf = _resolve(distribution, CharacteristicName.SF, **options)

    def _cdf(x: float, **_: Any) -> float:
        return float(np.clip(1.0 - sf(x), 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.SF, _cdf)


def fit_cdf_to_pdf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``pdf`` as the clipped numerical derivative of ``cdf``.

    The density is 0 outside the support. ``h`` sets the stencil step
    (default ``1e-5``).
    """
    cdf = _resolve(distribution, CharacteristicName.CDF, **options)
    h = float(options.get("h", 1e-5))
    support = _interval(distribution)

    def _pdf(x: float, **_: Any) -> float:
        if not support.contains(x):
            return 0.0
        return max(_num_derivative(cdf, x, h), 0.0)

    return _fitted(CharacteristicName.PDF, CharacteristicName.CDF, _pdf)


def fit_pdf_to_cdf_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` by integrating ``pdf`` from the left edge of the support."""
    pdf = _resolve(distribution, CharacteristicName.PDF, **options)
    support = _interval(distribution)

    def _cdf(x: float, **_: Any) -> float:
        if x <= support.left:
            return 0.0
        if x >= support.right:
            return 1.0
        val, _err = _sp_integrate.quad(pdf, support.left, x, limit=200)
        return float(np.clip(val, 0.0, 1.0))

    return _fitted(CharacteristicName.CDF, CharacteristicName.PDF, _cdf)


def fit_pdf_to_mean_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit the mean as ``integral x pdf(x) dx`` over the support."""
    pdf = _resolve(distribution, CharacteristicName.PDF, **options)
    support = _interval(distribution)
    mean, _err = _sp_integrate.quad(lambda t: t * pdf(t), support.left, support.right, limit=200)
    return _fitted(CharacteristicName.MEAN, CharacteristicName.PDF, _constant(float(mean)))


def fit_pdf_to_var_1C(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit the variance as ``integral (x - mean)^2 pdf(x) dx`` over the support."""
    pdf = _resolve(distribution, CharacteristicName.PDF, **options)
    mean = float(distribution.query_method(CharacteristicName.MEAN, **options)(None))
    support = _interval(distribution)
    var, _err = _sp_integrate.quad(
        lambda t: (t - mean) ** 2 * pdf(t), support.left, support.right, limit=200
    )
    return _fitted(CharacteristicName.VAR, CharacteristicName.PDF, _constant(max(float(var), 0.0)))


# --- Discrete (1D) ------------------------------------------------------------


def discrete_table(distribution: Distribution, /, **options: Any) -> DiscreteTable:
    """
    Return the probability table of an integer-valued distribution.

    Reuses the table of a :class:`TableBacked` distribution, otherwise builds
    one from its resolvable ``pmf`` over its support (all integers when the
    distribution has none). ``mode`` may be given as an option.
    """
    if isinstance(distribution, TableBacked):
        return distribution.table

    support = distribution.support
    if support is not None and not isinstance(support, Interval1D):
        raise CharacteristicResolutionError(
            f"pmf conversions need an integer interval support, got {type(support).__name__}"
        )
    pmf = _resolve(distribution, CharacteristicName.PMF, **options)
    settings = _settings(options)
    mode = options.get("mode")
    return build_table(
        lambda k: pmf(float(k)),
        mode=None if mode is None else int(mode),
        support=support,
        epsilon=settings.discrete_epsilon,
        eps_extra=settings.eps_extra,
    )


def fit_pmf_to_cdf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``cdf`` from the table: ``P[X <= x]``."""
    table = discrete_table(distribution, **options)

    def _cdf(x: float, **_: Any) -> float:
        return table.cdf_at(x)

    return _fitted(CharacteristicName.CDF, CharacteristicName.PMF, _cdf)


def fit_pmf_to_sf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit ``sf`` from the table: ``P[X >= x]``."""
    table = discrete_table(distribution, **options)

    def _sf(x: float, **_: Any) -> float:
        return table.sf_at(x)

    return _fitted(CharacteristicName.SF, CharacteristicName.PMF, _sf)


def fit_pmf_to_ppf_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """
    Fit ``ppf`` by binary search in the table.

    Returns the smallest ``x`` with ``P[X <= x] >= q``; ``0`` and ``1`` map to
    the support edges.
    """
    table = discrete_table(distribution, **options)

    def _ppf(q: float, **_: Any) -> float:
        return float(table.inverse(q))

    return _fitted(CharacteristicName.PPF, CharacteristicName.PMF, _ppf)


def fit_pmf_to_mean_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit the mean of the tabulated mass."""
    table = discrete_table(distribution, **options)
    return _fitted(CharacteristicName.MEAN, CharacteristicName.PMF, _constant(table.mean()))


def fit_pmf_to_var_1D(
    distribution: Distribution, /, **options: Any
) -> FittedComputationMethod[float, float]:
    """Fit the variance of the tabulated mass."""
    table = discrete_table(distribution, **options)
    return _fitted(CharacteristicName.VAR, CharacteristicName.PMF, _constant(table.variance()))


def _method(
    target: GenericCharacteristicName,
    fitter: Callable[..., FittedComputationMethod[float, float]],
    *sources: GenericCharacteristicName,
) -> ComputationMethod[float, float]:
    return ComputationMethod[float, float](target=target, sources=sources, fitter=fitter)


_C = CharacteristicName

CONTINUOUS_CONVERSIONS: tuple[ComputationMethod[float, float], ...] = (
    _method(_C.PPF, fit_cdf_to_ppf_1C, _C.CDF),
    _method(_C.CDF, fit_pdf_to_cdf_1C, _C.PDF),
    _method(_C.CDF, fit_sf_to_cdf_1C, _C.SF),
    _method(_C.SF, fit_cdf_to_sf_1C, _C.CDF),
    _method(_C.PDF, fit_cdf_to_pdf_1C, _C.CDF),
    _method(_C.MEAN, fit_pdf_to_mean_1C, _C.PDF),
    _method(_C.VAR, fit_pdf_to_var_1C, _C.PDF, _C.MEAN),
)
"""Default conversions for univariate continuous distributions, in priority order."""

DISCRETE_CONVERSIONS: tuple[ComputationMethod[float, float], ...] = (
    _method(_C.CDF, fit_pmf_to_cdf_1D, _C.PMF),
    _method(_C.SF, fit_pmf_to_sf_1D, _C.PMF),
    _method(_C.PPF, fit_pmf_to_ppf_1D, _C.PMF),
    _method(_C.MEAN, fit_pmf_to_mean_1D, _C.PMF),
    _method(_C.VAR, fit_pmf_to_var_1D, _C.PMF),
)
"""Default conversions for univariate integer-valued distributions."""

DEFAULT_CONVERSIONS: Mapping[Kind, tuple[ComputationMethod[float, float], ...]] = {
    Kind.CONTINUOUS: CONTINUOUS_CONVERSIONS,
    Kind.DISCRETE: DISCRETE_CONVERSIONS,
}


__all__ = [
    "TableBacked",
    "discrete_table",
    "fit_cdf_to_ppf_1C",
    "fit_cdf_to_sf_1C",
    "fit_sf_to_cdf_1C",
    "fit_cdf_to_pdf_1C",
    "fit_pdf_to_cdf_1C",
    "fit_pdf_to_mean_1C",
    "fit_pdf_to_var_1C",
    "fit_pmf_to_cdf_1D",
    "fit_pmf_to_sf_1D",
    "fit_pmf_to_ppf_1D",
    "fit_pmf_to_mean_1D",
    "fit_pmf_to_var_1D",
    "CONTINUOUS_CONVERSIONS",
    "DISCRETE_CONVERSIONS",
    "DEFAULT_CONVERSIONS",
]
