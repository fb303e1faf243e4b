from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import stats

from pysatl_probeval.distributions import (
    ExplicitTableDiscreteSupport,
    FiniteDiscreteDistribution,
    IntegerSupport,
    TableBacked,
    TabulatedDiscreteDistribution,
)
from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.types import CharacteristicName, Kind


def make_poisson(lam: float, with_ratios: bool = True) -> TabulatedDiscreteDistribution:
    def prob(k: int) -> float:
        if k < 0:
            return 0.0
        return math.exp(-lam + k * math.log(lam) - math.lgamma(k + 1))

    if not with_ratios:
        return TabulatedDiscreteDistribution(prob, support=IntegerSupport(0))
    return TabulatedDiscreteDistribution(
        prob,
        mode=int(lam),
        ratio_down=lambda k: k / lam,
        ratio_up=lambda k: lam / (k + 1),
        support=IntegerSupport(0),
    )


@pytest.fixture
def poisson() -> TabulatedDiscreteDistribution:
    return make_poisson(10.0)


class TestTabulatedDiscreteDistribution:
    def test_kind_and_table(self, poisson: TabulatedDiscreteDistribution) -> None:
        assert poisson.distribution_type.kind == Kind.DISCRETE
        assert isinstance(poisson, TableBacked)
        assert poisson.table.xmin == 0
        assert poisson.table.xmed == 10

    def test_pmf(self, poisson: TabulatedDiscreteDistribution) -> None:
        ks = np.arange(0, 31)
        values = [poisson.pmf(float(k)) for k in ks]
        np.testing.assert_allclose(values, stats.poisson.pmf(ks, 10.0), rtol=1e-10)
        assert poisson.pmf(-1.0) == 0.0
        assert poisson.pmf(2.5) == 0.0

    def test_pmf_beyond_table(self, poisson: TabulatedDiscreteDistribution) -> None:
        k = poisson.table.xmax + 5
        assert poisson.pmf(float(k)) == pytest.approx(stats.poisson.pmf(k, 10.0), rel=1e-10)

    @pytest.mark.parametrize("k", [0, 3, 9, 10, 11, 15, 25])
    def test_cdf_and_sf(self, poisson: TabulatedDiscreteDistribution, k: int) -> None:
        assert poisson.cdf(k) == pytest.approx(stats.poisson.cdf(k, 10.0), rel=1e-10)
        assert poisson.sf(k) == pytest.approx(stats.poisson.sf(k - 1, 10.0), rel=1e-10)

    def test_cdf_between_points(self, poisson: TabulatedDiscreteDistribution) -> None:
        assert poisson.cdf(4.7) == poisson.cdf(4.0)
        assert poisson.sf(4.3) == poisson.sf(5.0)
        assert poisson.cdf(-0.5) == 0.0
        assert poisson.sf(-3.0) == 1.0

    def test_upper_tail_beyond_table(self, poisson: TabulatedDiscreteDistribution) -> None:
        k = 60
        assert k > poisson.table.xmax
        assert poisson.sf(k) == pytest.approx(stats.poisson.sf(k - 1, 10.0), rel=1e-6)
        assert poisson.cdf(k) == 1.0

    def test_lower_tail_beyond_table(self) -> None:
        distr = make_poisson(100.0)
        k = 25
        assert k < distr.table.xmin
        assert distr.cdf(k) == pytest.approx(stats.poisson.cdf(k, 100.0), rel=1e-6)
        assert distr.cdf(k) < 1e-16

    @pytest.mark.parametrize("u", [0.001, 0.05, 0.2, 0.5, 0.51, 0.8, 0.95, 0.999])
    def test_ppf(self, poisson: TabulatedDiscreteDistribution, u: float) -> None:
        assert poisson.ppf(u) == stats.poisson.ppf(u, 10.0)

    def test_ppf_edges(self, poisson: TabulatedDiscreteDistribution) -> None:
        assert poisson.ppf(0.0) == 0.0
        assert poisson.ppf(1.0) == math.inf

    def test_ppf_invalid(self, poisson: TabulatedDiscreteDistribution) -> None:
        with pytest.raises(InvalidArgumentError):
            poisson.ppf(1.01)

    def test_moments_from_table(self, poisson: TabulatedDiscreteDistribution) -> None:
        assert CharacteristicName.MEAN not in poisson.analytical_computations
        assert poisson.mean() == pytest.approx(10.0, abs=1e-10)
        assert poisson.var() == pytest.approx(10.0, abs=1e-9)
        assert poisson.std() == pytest.approx(math.sqrt(10.0), rel=1e-10)

    def test_without_ratios_or_mode(self) -> None:
        distr = make_poisson(7.5, with_ratios=False)
        for k in (0, 4, 7, 12):
            assert distr.cdf(k) == pytest.approx(stats.poisson.cdf(k, 7.5), rel=1e-10)
        assert distr.mean() == pytest.approx(7.5, abs=1e-10)

    def test_bounded_support(self) -> None:
        n, p = 20, 0.3
        distr = TabulatedDiscreteDistribution(
            lambda k: math.comb(n, k) * p**k * (1 - p) ** (n - k) if 0 <= k <= n else 0.0,
            support=IntegerSupport(0, n),
        )
        assert distr.ppf(1.0) == 20.0
        assert distr.cdf(20) == 1.0
        assert distr.sf(21) == 0.0
        assert distr.mean() == pytest.approx(n * p, abs=1e-12)
        assert distr.var() == pytest.approx(n * p * (1 - p), abs=1e-12)

    def test_mode_without_mass(self) -> None:
        with pytest.raises(InvalidArgumentError):
            TabulatedDiscreteDistribution(lambda k: 1.0 if k == 0 else 0.0, mode=3)

    def test_evolve_epsilon(self, poisson: TabulatedDiscreteDistribution) -> None:
        coarse = poisson.evolve(epsilon=1e-8)
        assert coarse.table.xmax < poisson.table.xmax
        assert coarse.ppf(0.5) == poisson.ppf(0.5)


class TestFiniteDiscreteDistribution:
    @pytest.fixture
    def finite(self) -> FiniteDiscreteDistribution:
        return FiniteDiscreteDistribution([3.0, -1.0, 0.5], [1.0, 2.0, 1.0])

    def test_values_sorted(self, finite: FiniteDiscreteDistribution) -> None:
        np.testing.assert_array_equal(finite.values, [-1.0, 0.5, 3.0])
        np.testing.assert_allclose(finite.probabilities, [0.5, 0.25, 0.25])
        assert isinstance(finite.support, ExplicitTableDiscreteSupport)
        assert list(finite.support) == [-1.0, 0.5, 3.0]

    def test_characteristics(self, finite: FiniteDiscreteDistribution) -> None:
        assert finite.pmf(0.5) == 0.25
        assert finite.pmf(0.0) == 0.0
        assert finite.cdf(-2.0) == 0.0
        assert finite.cdf(0.0) == 0.5
        assert finite.cdf(0.5) == pytest.approx(0.75)
        assert finite.cdf(10.0) == 1.0
        assert finite.sf(0.5) == pytest.approx(0.5)
        assert finite.sf(3.5) == 0.0

    @pytest.mark.parametrize(
        "u, expected", [(0.0, -1.0), (0.3, -1.0), (0.5, -1.0), (0.6, 0.5), (0.9, 3.0), (1.0, 3.0)]
    )
    def test_ppf(self, finite: FiniteDiscreteDistribution, u: float, expected: float) -> None:
        assert finite.ppf(u) == expected

    def test_moments(self, finite: FiniteDiscreteDistribution) -> None:
        mean = 0.5 * -1.0 + 0.25 * 0.5 + 0.25 * 3.0
        assert finite.mean() == pytest.approx(mean)
        expected_var = 0.5 * (-1.0 - mean) ** 2 + 0.25 * (0.5 - mean) ** 2 + 0.25 * (3.0 - mean) ** 2
        assert finite.var() == pytest.approx(expected_var)

    def test_evolve(self, finite: FiniteDiscreteDistribution) -> None:
        uniform = finite.evolve(probabilities=[1.0, 1.0, 1.0])
        assert uniform.mean() == pytest.approx(2.5 / 3.0)
        assert finite.mean() == pytest.approx(0.375)

    @pytest.mark.parametrize(
        "values, probabilities",
        [([], []), ([1.0, 1.0], [0.5, 0.5]), ([1.0], [-1.0]), ([1.0, 2.0], [1.0])],
    )
    def test_invalid(self, values, probabilities) -> None:
        with pytest.raises(InvalidArgumentError):
            FiniteDiscreteDistribution(values, probabilities)
