"""
Engine Configuration
====================

Numeric constants, the decimal-precision epsilon table and the process-wide
engine settings shared by the continuous and discrete engines.

- :data:`EPSARRAY` — ``EPSARRAY[d] == 0.5 * 10**-d`` for ``d = 0..35``.
- :class:`PrecisionBudget` — requested number of decimal digits.
- :class:`EngineSettings` — iteration caps, truncation epsilons and the
  non-convergence policy.

Notes
-----
- Settings are immutable; :func:`configure_engine` swaps in a new instance.
- Every keyword accepted by :class:`EngineSettings` can also be passed as a
  per-call option to the fitters, which takes precedence over the global value.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import sys
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, ClassVar

from pysatl_probeval.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

DBL_EPSILON: float = sys.float_info.epsilon
"""Machine epsilon for doubles."""

DBL_DIG: int = sys.float_info.dig
"""Number of decimal digits a double represents exactly (15)."""

MINVAL: float = 5.0e-308
"""Magnitudes at or below this are treated as an exact zero by the root finders."""

XLIM: float = sys.float_info.max / 2.0
"""Ceiling for the exponential bracket search."""

EPSARRAY: tuple[float, ...] = tuple(0.5 * 10.0**-d for d in range(36))
"""Absolute tolerance required for ``d`` decimal digits of precision."""

MAX_DIGITS: int = len(EPSARRAY) - 1


@dataclass(frozen=True, slots=True)
class PrecisionBudget:
    """
    Requested number of exact decimal digits.

    Parameters
    ----------
    digits : int, default 15
        Decimal digits; must index :data:`EPSARRAY`.

    Raises
    ------
    InvalidArgumentError
        If ``digits`` is outside ``[0, 35]``.
    """

    digits: int = 15

    def __post_init__(self) -> None:
        if not 0 <= self.digits <= MAX_DIGITS:
            raise InvalidArgumentError(
                f"decimal digits must lie in [0, {MAX_DIGITS}], got {self.digits}"
            )

    @property
    def epsilon(self) -> float:
        """Absolute tolerance ``0.5 * 10**-digits``."""
        return EPSARRAY[self.digits]


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """
    Tunables of the evaluation engines.

    Parameters
    ----------
    decimal_digits : int, default 15
        Default precision budget for continuous inversion.
    bracket_half_width : float, default 8.0
        Initial half-width of the bracket search window.
    brent_max_iter : int, default 50
        Iteration cap of the Brent-Dekker inverter.
    bisection_max_iter : int, default 100
        Iteration cap of the bisection inverter.
    discrete_epsilon : float, default 1e-16
        Truncation threshold for probability tables.
    eps_extra : float, default 1e-6
        Extra factor applied to the truncation threshold while walking away
        from the mode, so that renormalisation does not lose digits.
    tail_terms : int, default 20
        Number of mass terms summed when a tail query falls outside a table.
    strict_convergence : bool, default False
        Raise :class:`~pysatl_probeval.errors.NonConvergenceError` instead of
        warning when a solver hits its iteration cap.
    """

    decimal_digits: int = 15
    bracket_half_width: float = 8.0
    brent_max_iter: int = 50
    bisection_max_iter: int = 100
    discrete_epsilon: float = 1.0e-16
    eps_extra: float = 1.0e-6
    tail_terms: int = 20
    strict_convergence: bool = False

    def __post_init__(self) -> None:
        PrecisionBudget(self.decimal_digits)
        if self.bracket_half_width <= 0.0:
            raise InvalidArgumentError("bracket_half_width must be positive")
        if self.brent_max_iter <= 0 or self.bisection_max_iter <= 0:
            raise InvalidArgumentError("iteration caps must be positive")
        if not 0.0 < self.discrete_epsilon < 1.0:
            raise InvalidArgumentError("discrete_epsilon must lie in (0, 1)")
        if self.eps_extra <= 0.0:
            raise InvalidArgumentError("eps_extra must be positive")
        if self.tail_terms < 0:
            raise InvalidArgumentError("tail_terms must be non-negative")

    @property
    def precision(self) -> PrecisionBudget:
        """Precision budget built from :attr:`decimal_digits`."""
        return PrecisionBudget(self.decimal_digits)

    def override(self, options: Mapping[str, Any]) -> EngineSettings:
        """
        Return settings with the known keys of ``options`` applied.

        Unknown keys are ignored so that free-form fitter options can be
        passed through unchanged.
        """
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in options.items() if k in known}
        if not changes:
            return self
        return replace(self, **changes)


class _EngineSettingsHolder:
    """Singleton holder of the process-wide :class:`EngineSettings`."""

    _instance: ClassVar[_EngineSettingsHolder | None] = None
    current: EngineSettings

    def __new__(cls) -> _EngineSettingsHolder:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.current = EngineSettings()
        return cls._instance


def engine_settings() -> EngineSettings:
    """Return the active engine settings."""
    return _EngineSettingsHolder().current


def configure_engine(**changes: Any) -> EngineSettings:
    """
    Replace selected fields of the active engine settings.

    Parameters
    ----------
    **changes
        Field values of :class:`EngineSettings`.

    Returns
    -------
    EngineSettings
        The new active settings.

    Raises
    ------
    TypeError
        If a keyword is not an :class:`EngineSettings` field.
    """
    holder = _EngineSettingsHolder()
    holder.current = replace(holder.current, **changes)
    return holder.current


def reset_engine_settings() -> None:
    """Restore the default engine settings."""
    _EngineSettingsHolder._instance = None


__all__ = [
    "DBL_DIG",
    "DBL_EPSILON",
    "EPSARRAY",
    "MAX_DIGITS",
    "MINVAL",
    "XLIM",
    "EngineSettings",
    "PrecisionBudget",
    "configure_engine",
    "engine_settings",
    "reset_engine_settings",
]
