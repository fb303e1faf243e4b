"""
Discrete evaluation engine

Precomputed probability tables with two-sided cumulative sums:

- table value objects (:mod:`.table`);
- construction from a mass function or explicit points (:mod:`.builder`);
- inversion by binary search (:mod:`.inverter`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .builder import MAX_TABLE_SIZE, build_table, locate_mode, tabulate_finite
from .inverter import invert_table
from .table import DiscreteTable, FiniteTable

__all__ = [
    "DiscreteTable",
    "FiniteTable",
    "MAX_TABLE_SIZE",
    "build_table",
    "locate_mode",
    "tabulate_finite",
    "invert_table",
]
