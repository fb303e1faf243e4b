from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy import stats

from pysatl_probeval.config import PrecisionBudget
from pysatl_probeval.errors import InvalidArgumentError, InvalidBracketError
from pysatl_probeval.numerics.brent import brent_dekker, inverse_brent
from pysatl_probeval.types import Interval1D

UNIT = Interval1D(0.0, 1.0)


def square_cdf(x: float) -> float:
    return min(max(x, 0.0), 1.0) ** 2


class TestInverseBrent:
    def test_square_cdf_quarter(self) -> None:
        result = inverse_brent(square_cdf, 0.0, 1.0, 0.25, 1e-12, support=UNIT)
        assert result.converged
        assert result.root == pytest.approx(0.5, abs=1e-10)

    def test_reversed_bracket_is_reordered(self) -> None:
        result = inverse_brent(square_cdf, 1.0, 0.0, 0.25, 1e-12)
        assert result.root == pytest.approx(0.5, abs=1e-10)

    @pytest.mark.parametrize("u, expected", [(0.0, 0.0), (1.0, 1.0)], ids=["zero", "one"])
    def test_unit_edges_return_support(self, u: float, expected: float) -> None:
        result = inverse_brent(square_cdf, 0.0, 1.0, u, 0.0, support=UNIT)
        assert result.root == expected
        assert result.converged
        assert result.iterations == 0

    def test_unit_edges_without_support_are_infinite(self) -> None:
        assert inverse_brent(square_cdf, 0.0, 1.0, 0.0, 0.0).root == -math.inf
        assert inverse_brent(square_cdf, 0.0, 1.0, 1.0, 0.0).root == math.inf

    def test_exact_endpoint(self) -> None:
        result = inverse_brent(square_cdf, 0.5, 1.0, 0.25, 1e-12)
        assert result.root == 0.5

    @pytest.mark.parametrize(
        "a, b",
        [(0.6, 1.0), (0.0, 0.4)],
        ids=["cdf_a_above_u", "cdf_b_below_u"],
    )
    def test_invalid_bracket(self, a: float, b: float) -> None:
        with pytest.raises(InvalidBracketError):
            inverse_brent(square_cdf, a, b, 0.25, 1e-12)

    @pytest.mark.parametrize("u", [-1e-3, 1.5])
    def test_probability_outside_unit_interval(self, u: float) -> None:
        with pytest.raises(InvalidArgumentError):
            inverse_brent(square_cdf, 0.0, 1.0, u, 1e-12)

    def test_iteration_cap_reports_non_convergence(self) -> None:
        norm = stats.norm()
        result = inverse_brent(norm.cdf, -8.0, 8.0, 0.3, 0.0, max_iter=2)
        assert not result.converged
        assert result.iterations == 2
        assert -8.0 <= result.root <= 8.0

    def test_bracket_wider_than_support(self) -> None:
        expon = stats.expon()
        result = inverse_brent(expon.cdf, -8.0, 8.0, 0.5, 1e-12, support=Interval1D(0.0, math.inf))
        assert result.root == pytest.approx(math.log(2.0), abs=1e-10)

    @pytest.mark.parametrize("digits", [3, 6, 10])
    def test_precision_budget_bounds_error(self, digits: int) -> None:
        norm = stats.norm()
        budget = PrecisionBudget(digits)
        result = inverse_brent(norm.cdf, -8.0, 8.0, 0.8, 0.0, precision=budget)
        assert abs(result.root - norm.ppf(0.8)) <= 4.0 * budget.epsilon

    @pytest.mark.parametrize(
        "dist, support",
        [
            (stats.norm(), Interval1D()),
            (stats.norm(loc=1.5, scale=0.7), Interval1D()),
            (stats.expon(), Interval1D(0.0, math.inf)),
            (stats.gamma(a=3.0), Interval1D(0.0, math.inf)),
            (stats.beta(a=2.0, b=5.0), Interval1D(0.0, 1.0)),
        ],
        ids=["std_normal", "normal", "exponential", "gamma", "beta"],
    )
    @pytest.mark.parametrize("u", [0.01, 0.1, 0.5, 0.9, 0.99])
    def test_round_trip_against_closed_form(self, dist, support: Interval1D, u: float) -> None:
        x = dist.ppf(u)
        a, b = support.clip(x - 1.0), support.clip(x + 1.0)
        result = inverse_brent(dist.cdf, a, b, u, 1e-14, support=support)
        assert result.converged
        assert result.root == pytest.approx(x, abs=1e-9)
        assert dist.cdf(result.root) == pytest.approx(u, abs=1e-12)


class TestBrentDekker:
    def test_transcendental_root(self) -> None:
        result = brent_dekker(lambda x: math.cos(x) - x, 0.0, 1.0, 1e-14)
        assert result.converged
        assert result.root == pytest.approx(0.7390851332151607, abs=1e-12)

    def test_bracket_order_does_not_matter(self) -> None:
        left = brent_dekker(lambda x: x**3 - 2.0, 0.0, 2.0, 1e-14).root
        right = brent_dekker(lambda x: x**3 - 2.0, 2.0, 0.0, 1e-14).root
        assert left == pytest.approx(right, abs=1e-12)
        assert left == pytest.approx(2.0 ** (1.0 / 3.0), abs=1e-12)

    def test_same_sign_raises(self) -> None:
        with pytest.raises(InvalidBracketError):
            brent_dekker(lambda x: x * x + 1.0, -1.0, 1.0, 1e-12)

    def test_zero_at_endpoint(self) -> None:
        result = brent_dekker(lambda x: x - 1.0, 1.0, 3.0, 1e-12)
        assert result.root == 1.0
        assert result.iterations == 0

    def test_tiny_root_snaps_to_zero(self) -> None:
        result = brent_dekker(lambda x: x, -1.0, 2.0, 1e-12)
        assert result.root == pytest.approx(0.0, abs=1e-12)
