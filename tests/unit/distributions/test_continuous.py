from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import pytest
from scipy import stats

from pysatl_probeval.config import configure_engine
from pysatl_probeval.distributions import (
    ContinuousSupport,
    Distribution,
    NumericContinuousDistribution,
)
from pysatl_probeval.errors import InvalidArgumentError, NonConvergenceError, NonConvergenceWarning
from pysatl_probeval.types import CharacteristicName, Kind


@pytest.fixture
def square() -> NumericContinuousDistribution:
    return NumericContinuousDistribution(lambda x: x * x, support=ContinuousSupport(0.0, 1.0))


@pytest.fixture
def normal() -> NumericContinuousDistribution:
    return NumericContinuousDistribution(stats.norm.cdf, pdf=stats.norm.pdf, sf=stats.norm.sf)


class TestSquareCdf:
    def test_quantile(self, square: NumericContinuousDistribution) -> None:
        assert square.ppf(0.25) == pytest.approx(0.5, abs=1e-12)

    @pytest.mark.parametrize("u", [0.01, 0.3, 0.64, 0.99])
    def test_quantile_is_square_root(self, square: NumericContinuousDistribution, u: float) -> None:
        assert square.ppf(u) == pytest.approx(math.sqrt(u), abs=1e-12)

    def test_edges(self, square: NumericContinuousDistribution) -> None:
        assert square.ppf(0.0) == 0.0
        assert square.ppf(1.0) == 1.0

    def test_cdf_clamped_outside_support(self, square: NumericContinuousDistribution) -> None:
        assert square.cdf(-1.0) == 0.0
        assert square.cdf(2.0) == 1.0
        assert square.sf(2.0) == 0.0
        assert square.sf(0.5) == pytest.approx(0.75)

    def test_derived_density_and_moments(self, square: NumericContinuousDistribution) -> None:
        assert square.pdf(0.5) == pytest.approx(1.0, abs=1e-8)
        assert square.pdf(1.5) == 0.0
        assert square.mean() == pytest.approx(2.0 / 3.0, abs=1e-4)
        assert square.var() == pytest.approx(1.0 / 18.0, abs=1e-4)


class TestScipyBacked:
    @pytest.mark.parametrize("u", [1e-10, 0.001, 0.1, 0.5, 0.9, 0.999])
    def test_normal_quantile(self, normal: NumericContinuousDistribution, u: float) -> None:
        assert normal.ppf(u) == pytest.approx(stats.norm.ppf(u), abs=1e-9)

    def test_normal_edges(self, normal: NumericContinuousDistribution) -> None:
        assert normal.ppf(0.0) == -math.inf
        assert normal.ppf(1.0) == math.inf

    def test_normal_uses_given_characteristics(self, normal: NumericContinuousDistribution) -> None:
        assert set(normal.analytical_computations) == {
            CharacteristicName.CDF,
            CharacteristicName.PDF,
            CharacteristicName.SF,
        }
        assert normal.sf(8.0) == pytest.approx(stats.norm.sf(8.0), rel=1e-12)

    def test_normal_moments(self, normal: NumericContinuousDistribution) -> None:
        assert normal.mean() == pytest.approx(0.0, abs=1e-8)
        assert normal.var() == pytest.approx(1.0, rel=1e-7)
        assert normal.std() == pytest.approx(1.0, rel=1e-7)

    @pytest.mark.parametrize(
        "dist, support",
        [
            (stats.gamma(2.5), ContinuousSupport(0.0)),
            (stats.beta(2.0, 5.0), ContinuousSupport(0.0, 1.0)),
            (stats.lognorm(0.8), ContinuousSupport(0.0)),
        ],
        ids=["gamma", "beta", "lognormal"],
    )
    def test_cdf_only(self, dist, support: ContinuousSupport) -> None:
        distr = NumericContinuousDistribution(dist.cdf, support=support)
        for u in (0.05, 0.5, 0.95):
            assert distr.ppf(u) == pytest.approx(dist.ppf(u), abs=1e-9)
        x = dist.ppf(0.4)
        assert distr.pdf(x) == pytest.approx(dist.pdf(x), rel=1e-6)

    def test_protocol(self, normal: NumericContinuousDistribution) -> None:
        assert isinstance(normal, Distribution)
        assert normal.distribution_type.kind == Kind.CONTINUOUS


class TestEngineControls:
    def test_precision(self) -> None:
        coarse = NumericContinuousDistribution(stats.norm.cdf, precision=3)
        assert coarse.precision == 3
        assert coarse.ppf(0.9) == pytest.approx(stats.norm.ppf(0.9), abs=2e-3)

    @pytest.mark.parametrize("precision", [-1, 36])
    def test_invalid_precision(self, precision: int) -> None:
        with pytest.raises(InvalidArgumentError):
            NumericContinuousDistribution(stats.norm.cdf, precision=precision)

    def test_bisection_method(self, normal: NumericContinuousDistribution) -> None:
        assert normal.ppf(0.975, method="bisection") == pytest.approx(stats.norm.ppf(0.975), abs=1e-9)

    def test_iteration_cap_warns(self) -> None:
        configure_engine(brent_max_iter=2)
        distr = NumericContinuousDistribution(stats.norm.cdf)
        with pytest.warns(NonConvergenceWarning):
            distr.ppf(0.3)

    def test_iteration_cap_strict(self) -> None:
        configure_engine(brent_max_iter=2, strict_convergence=True)
        distr = NumericContinuousDistribution(stats.norm.cdf)
        with pytest.raises(NonConvergenceError):
            distr.ppf(0.3)

    def test_settings_changed_after_first_quantile(self) -> None:
        distr = NumericContinuousDistribution(stats.norm.cdf)
        assert distr.ppf(0.3) == pytest.approx(stats.norm.ppf(0.3), abs=1e-9)
        configure_engine(strict_convergence=True, brent_max_iter=1)
        with pytest.raises(NonConvergenceError):
            distr.ppf(0.3)

    def test_invalid_probability(self, normal: NumericContinuousDistribution) -> None:
        with pytest.raises(InvalidArgumentError):
            normal.ppf(-0.2)


class TestEvolve:
    def test_evolve_support(self) -> None:
        distr = NumericContinuousDistribution(lambda x: x / 2.0, support=ContinuousSupport(0.0, 2.0))
        narrow = distr.evolve(cdf=lambda x: x, support=ContinuousSupport(0.0, 1.0))
        assert narrow.ppf(0.5) == pytest.approx(0.5, abs=1e-12)
        assert distr.ppf(0.5) == pytest.approx(1.0, abs=1e-12)
        assert narrow is not distr

    def test_evolve_precision(self, normal: NumericContinuousDistribution) -> None:
        coarse = normal.evolve(precision=4)
        assert coarse.precision == 4
        assert normal.precision is None
        assert isinstance(coarse, NumericContinuousDistribution)

    def test_repr(self, square: NumericContinuousDistribution) -> None:
        assert repr(square).startswith("NumericContinuousDistribution(cdf=")
