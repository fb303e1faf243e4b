"""
Distributions subpackage

Interfaces and concrete univariate distributions built on the evaluation
engines:

- distribution protocol (:mod:`.distribution`) and base class (:mod:`.univariate`);
- computation primitives (:mod:`.computation`);
- conversions between characteristics (:mod:`.fitters`);
- pluggable strategies (:mod:`.strategies`);
- supports (:mod:`.support`);
- continuous, discrete and truncated distributions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import (
    AnalyticalComputation,
    ComputationMethod,
    FittedComputationMethod,
    Method,
)
from .continuous import NumericContinuousDistribution
from .discrete import FiniteDiscreteDistribution, TabulatedDiscreteDistribution
from .distribution import Distribution
from .fitters import DEFAULT_CONVERSIONS, TableBacked, discrete_table
from .strategies import ComputationStrategy, DefaultComputationStrategy
from .support import (
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
    IntegerSupport,
    Support,
)
from .truncated import TruncatedDistribution
from .univariate import UnivariateDistribution, analytical

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "ComputationMethod",
    "FittedComputationMethod",
    "Method",
    # distribution
    "Distribution",
    "UnivariateDistribution",
    "analytical",
    "NumericContinuousDistribution",
    "TabulatedDiscreteDistribution",
    "FiniteDiscreteDistribution",
    "TruncatedDistribution",
    # conversions
    "DEFAULT_CONVERSIONS",
    "TableBacked",
    "discrete_table",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    # supports
    "Support",
    "ContinuousSupport",
    "IntegerSupport",
    "ExplicitTableDiscreteSupport",
]
