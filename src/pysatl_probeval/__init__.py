"""
PySATL ProbEval
===============

Numerical evaluation engines for univariate probability distributions:
derivative-free inversion of monotone distribution functions, precomputed
probability tables for discrete distributions, and distribution wrappers that
derive missing characteristics through a computation strategy.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .numerics import *
from .numerics import __all__ as _numerics_all
from .tables import *
from .tables import __all__ as _tables_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-probeval")
__all__ = [
    "__version__",
    *_config_all,
    *_distr_all,
    *_errors_all,
    *_numerics_all,
    *_tables_all,
    *_types_all,
]

del _config_all
del _distr_all
del _errors_all
del _numerics_all
del _tables_all
del _types_all
