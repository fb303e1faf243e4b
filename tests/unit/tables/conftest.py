from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_probeval.tables.table import DiscreteTable


@pytest.fixture
def small_table() -> DiscreteTable:
    """
    Hand-built table on ``8..14`` with median 10.

    Masses are ``0.1, 0.2, 0.22, 0.18, 0.15, 0.1, 0.05``, so the lower
    cumulative half is ``0.1, 0.3, 0.52`` and the complementary upper half is
    ``0.48, 0.30, 0.15, 0.05``.
    """
    return DiscreteTable(
        pmf=[0.1, 0.2, 0.22, 0.18, 0.15, 0.1, 0.05],
        cdf=[0.1, 0.3, 0.52, 0.48, 0.30, 0.15, 0.05],
        xmin=8,
        xmax=14,
        xmed=10,
    )
