from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy import stats

from pysatl_probeval.config import PrecisionBudget, configure_engine
from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.numerics.inversion import invert_monotone
from pysatl_probeval.types import Interval1D


def square_cdf(x: float) -> float:
    return min(max(x, 0.0), 1.0) ** 2


class TestInvertMonotone:
    @pytest.mark.parametrize("method", ["brent", "bisection"])
    def test_square_cdf_quarter(self, method: str) -> None:
        result = invert_monotone(square_cdf, 0.25, Interval1D(0.0, 1.0), method=method)
        assert result.converged
        assert result.root == pytest.approx(0.5, abs=1e-10)

    @pytest.mark.parametrize(
        "dist, support",
        [
            (stats.norm(loc=1.5, scale=0.7), Interval1D()),
            (stats.expon(scale=2.0), Interval1D(0.0, math.inf)),
            (stats.logistic(loc=-3.0), Interval1D()),
            (stats.norm(loc=40.0, scale=5.0), Interval1D()),
        ],
        ids=["normal", "exponential", "logistic", "shifted_normal"],
    )
    @pytest.mark.parametrize("u", [0.01, 0.25, 0.5, 0.75, 0.99])
    def test_round_trip(self, dist, support: Interval1D, u: float) -> None:
        x = invert_monotone(dist.cdf, u, support).root
        assert x == pytest.approx(dist.ppf(u), abs=1e-8)
        assert dist.cdf(x) == pytest.approx(u, abs=1e-10)

    @pytest.mark.parametrize("u", [0.0, 1.0])
    @pytest.mark.parametrize("method", ["brent", "bisection"])
    def test_edges_map_to_support(self, u: float, method: str) -> None:
        support = Interval1D(-2.0, 3.0)
        result = invert_monotone(stats.uniform(-2.0, 5.0).cdf, u, support, method=method)
        assert result.root == (support.left if u == 0.0 else support.right)

    def test_explicit_tolerance(self) -> None:
        norm = stats.norm()
        result = invert_monotone(norm.cdf, 0.9, tol=1e-4)
        assert result.root == pytest.approx(norm.ppf(0.9), abs=1e-4)

    def test_precision_from_settings(self) -> None:
        norm = stats.norm()
        configure_engine(decimal_digits=3)
        coarse = invert_monotone(norm.cdf, 0.9, method="bisection")
        fine = invert_monotone(norm.cdf, 0.9, method="bisection", precision=PrecisionBudget(12))
        assert coarse.iterations < fine.iterations

    def test_unknown_method(self) -> None:
        with pytest.raises(InvalidArgumentError):
            invert_monotone(square_cdf, 0.5, method="newton")  # type: ignore[arg-type]

    @pytest.mark.parametrize("u", [-0.5, 2.0])
    def test_rejects_bad_probability(self, u: float) -> None:
        with pytest.raises(InvalidArgumentError):
            invert_monotone(square_cdf, u)
