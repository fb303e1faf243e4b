"""
Root-finding results and the non-convergence policy.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from dataclasses import dataclass

from pysatl_probeval.errors import NonConvergenceError, NonConvergenceWarning


@dataclass(frozen=True, slots=True)
class RootResult:
    """
    Outcome of a root search.

    Parameters
    ----------
    root : float
        Best estimate of the root (already clamped to the support for
        inversions).
    converged : bool
        ``False`` if the iteration cap was reached before the tolerance.
    iterations : int
        Number of function evaluations after the initial bracket ones.
    residual : float
        ``F(root) - u`` at the last evaluated point, ``0.0`` when the root is
        a support edge returned without evaluation.
    """

    root: float
    converged: bool
    iterations: int
    residual: float = 0.0

    def __float__(self) -> float:
        return self.root

    def unwrap(self, *, strict: bool = False, solver: str = "solver") -> float:
        """
        Return :attr:`root`, reporting non-convergence.

        Parameters
        ----------
        strict : bool, default False
            Raise instead of warning when the search did not converge.
        solver : str
            Name used in the message.

        Raises
        ------
        NonConvergenceError
            If ``strict`` and the search did not converge.

        Warns
        -----
        NonConvergenceWarning
            If not ``strict`` and the search did not converge.
        """
        if not self.converged:
            message = (
                f"{solver}: no convergence after {self.iterations} iterations, "
                f"returning best estimate {self.root!r} (residual {self.residual:.3g})"
            )
            if strict:
                raise NonConvergenceError(message, self)
            warnings.warn(message, NonConvergenceWarning, stacklevel=3)
        return self.root
