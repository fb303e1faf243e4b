"""
Computation Strategies
======================

- :class:`ComputationStrategy` — protocol resolving characteristic methods.
- :class:`DefaultComputationStrategy` — resolves analytical computations,
  caches fitted conversions (optional) and otherwise fits the first
  registered conversion whose sources resolve.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from pysatl_probeval.distributions.fitters import DEFAULT_CONVERSIONS
from pysatl_probeval.errors import CharacteristicResolutionError

if TYPE_CHECKING:
    from pysatl_probeval.distributions.computation import (
        ComputationMethod,
        FittedComputationMethod,
        Method,
    )
    from pysatl_probeval.distributions.distribution import Distribution
    from pysatl_probeval.types import GenericCharacteristicName, Kind

logger = logging.getLogger(__name__)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Resolution order
    ----------------
    1. If the distribution provides an analytical implementation, return it.
    2. Else, if caching is enabled and the method is cached, return it.
    3. Else, walk the conversions registered for the distribution's kind
       that produce ``state``, in order, and fit the first one whose source
       characteristics all resolve (recursively, through this strategy).

    Parameters
    ----------
    enable_caching : bool, default False
        If ``True``, cache fitted conversions keyed by target characteristic.
        Calls passing per-call options are neither served from nor stored in
        the cache.
    conversions : Mapping[Kind, Sequence[ComputationMethod]], optional
        Conversions per distribution kind, defaults to
        :data:`~pysatl_probeval.distributions.fitters.DEFAULT_CONVERSIONS`.
    options : Mapping[str, Any], optional
        Default options passed to every fitter; per-call options win.

    Raises
    ------
    CharacteristicResolutionError
        If the distribution has no analytical base, no conversion resolves,
        or resolving ``state`` requires ``state`` itself.
    """

    def __init__(
        self,
        enable_caching: bool = False,
        conversions: Mapping[Kind, Sequence[ComputationMethod[In, Out]]] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        self.enable_caching = enable_caching
        self._conversions = DEFAULT_CONVERSIONS if conversions is None else conversions
        self._options: dict[str, Any] = dict(options or {})
        self._cache: dict[GenericCharacteristicName, FittedComputationMethod[In, Out]] = {}
        self._resolving: dict[int, set[GenericCharacteristicName]] = {}

    def _push_guard(self, distr: Distribution, state: GenericCharacteristicName) -> None:
        key = id(distr)
        seen = self._resolving.setdefault(key, set())
        if state in seen:
            raise CharacteristicResolutionError(
                f"Cycle detected while resolving '{state}'. "
                "Provide at least one analytical base characteristic in the distribution."
            )
        seen.add(state)

    def _pop_guard(self, distr: Distribution, state: GenericCharacteristicName) -> None:
        key = id(distr)
        seen = self._resolving.get(key)
        if seen is not None:
            seen.discard(state)
            if not seen:
                self._resolving.pop(key, None)

    def conversions_for(self, distr: Distribution) -> Sequence[ComputationMethod[In, Out]]:
        """Conversions registered for the kind of ``distr``."""
        return self._conversions.get(distr.distribution_type.kind, ())

    def query_method(
        self, state: GenericCharacteristicName, distr: Distribution, **options: Any
    ) -> Method[In, Out]:
        """
        Resolve an analytical or fitted method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name.
        distr : Distribution
            Distribution providing the analytical base and the kind.
        **options
            Passed to the fitter(s), on top of the strategy's default options.

        Returns
        -------
        Method
            Analytical or fitted callable implementing ``state``.
        """
        if state in distr.analytical_computations:
            return distr.analytical_computations[state]

        use_cache = self.enable_caching and not options
        if use_cache:
            cached = self._cache.get(state)
            if cached is not None:
                return cached

        if not distr.analytical_computations:
            raise CharacteristicResolutionError(
                "Distribution provides no analytical computations to ground conversions."
            )

        merged = {**self._options, **options}
        self._push_guard(distr, state)
        try:
            for method in self.conversions_for(distr):
                if method.target != state:
                    continue
                try:
                    for src in method.sources:
                        self.query_method(src, distr, **options)
                except CharacteristicResolutionError as exc:
                    logger.debug("skipping %s <- %s: %s", state, list(method.sources), exc)
                    continue

                fitted = method.fit(distr, **merged)
                logger.debug("fitted %s from %s", state, list(method.sources))
                if use_cache:
                    self._cache[state] = fitted
                return fitted

            raise CharacteristicResolutionError(
                f"No conversion from any analytical characteristic to '{state}'."
            )
        finally:
            self._pop_guard(distr, state)


__all__ = [
    "ComputationStrategy",
    "DefaultComputationStrategy",
]
