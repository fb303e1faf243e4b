"""
Continuous evaluation engine

Derivative-free inversion of monotone functions:

- bracket search (:mod:`.bracket`);
- Brent-Dekker root solver (:mod:`.brent`);
- bisection fallback (:mod:`.bisection`);
- bracket + solver composition (:mod:`.inversion`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .bisection import bisect, inverse_bisection
from .bracket import find_bracket
from .brent import brent_dekker, inverse_brent
from .inversion import InversionMethod, invert_monotone
from .result import RootResult

__all__ = [
    "RootResult",
    "InversionMethod",
    "find_bracket",
    "inverse_brent",
    "brent_dekker",
    "bisect",
    "inverse_bisection",
    "invert_monotone",
]
