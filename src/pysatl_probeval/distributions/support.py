"""
Supports
========

Support descriptors of univariate distributions:

- :class:`ContinuousSupport` — closed real interval.
- :class:`IntegerSupport` — integers of a closed interval, possibly unbounded.
- :class:`ExplicitTableDiscreteSupport` — finite explicit set of real points.

The edges of a support are what the inverters return for ``u = 0`` and
``u = 1``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from math import isnan
from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_probeval.errors import InvalidArgumentError
from pysatl_probeval.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@runtime_checkable
class Support(Protocol):
    @property
    def left(self) -> float: ...
    @property
    def right(self) -> float: ...

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


def _check_edges(left: float, right: float) -> None:
    if isnan(left) or isnan(right):
        raise InvalidArgumentError("support edges must not be NaN")
    if left > right:
        raise InvalidArgumentError(f"inverted support: left={left} > right={right}")


@dataclass(frozen=True, slots=True)
class ContinuousSupport(Interval1D):
    """Closed interval ``[left, right]``; the whole real line by default."""

    def __post_init__(self) -> None:
        _check_edges(self.left, self.right)


@dataclass(frozen=True, slots=True)
class IntegerSupport(Interval1D):
    """
    Integers of ``[left, right]``.

    Either edge may be infinite; finite edges must be integers.
    """

    def __post_init__(self) -> None:
        _check_edges(self.left, self.right)
        for edge in (self.left, self.right):
            if np.isfinite(edge) and edge != int(edge):
                raise InvalidArgumentError(f"integer support edge expected, got {edge}")

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=float)
        finite = np.isfinite(arr)
        integral = np.equal(np.floor(np.where(finite, arr, 0.0)), arr)
        result = finite & integral & (arr >= self.left) & (arr <= self.right)
        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))


class ExplicitTableDiscreteSupport:
    """Finite sorted set of distinct real points."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number], assume_sorted: bool = False) -> None:
        arr = np.array(list(points), dtype=np.float64)
        if arr.size == 0:
            raise InvalidArgumentError("Points must be non-empty")
        if not assume_sorted:
            arr.sort()

        unique_mask = np.empty(arr.size, dtype=bool)
        unique_mask[0] = True
        unique_mask[1:] = arr[1:] != arr[:-1]
        self._points = arr[unique_mask]
        self._points.setflags(write=False)

    @property
    def left(self) -> float:
        return float(self._points[0])

    @property
    def right(self) -> float:
        return float(self._points[-1])

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=float)
        size = self._points.size
        idx = np.minimum(np.searchsorted(self._points, arr, side="left"), size - 1)
        result = self._points[idx] == arr
        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def __len__(self) -> int:
        return int(self._points.size)

    def __iter__(self) -> Iterator[float]:
        return (float(p) for p in self._points)


__all__ = [
    "Support",
    "ContinuousSupport",
    "IntegerSupport",
    "ExplicitTableDiscreteSupport",
]
