"""
Error and warning definitions for the evaluation engines.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class InvalidArgumentError(ValueError):
    """
    Raised when an argument is outside its admissible domain.

    Typical causes are a probability outside ``[0, 1]``, a precision digit
    count outside the epsilon table, or an inverted support interval.
    """


class InvalidBracketError(InvalidArgumentError):
    """
    Raised when ``[a, b]`` does not bracket the root.

    For an inversion this means ``F(a) > u`` or ``F(b) < u`` after the
    endpoints have been put in increasing order.
    """


class TableSizeError(InvalidArgumentError):
    """
    Raised when a probability table outgrows its size limit.

    The mass function does not decay fast enough for the truncation
    epsilon to be reached on one side of the mode.
    """


class NonConvergenceError(RuntimeError):
    """
    Raised in strict mode when a solver exhausts its iteration cap.

    Attributes
    ----------
    result : RootResult
        The best estimate found before giving up.
    """

    def __init__(self, message: str, result: object) -> None:
        super().__init__(message)
        self.result = result


class NonConvergenceWarning(UserWarning):
    """Emitted when a solver exhausts its iteration cap and a best-effort value is returned."""


class CharacteristicResolutionError(RuntimeError):
    """
    Raised when no analytical computation or conversion yields a characteristic.

    Also raised when resolving a characteristic would require itself.
    """


__all__ = [
    "CharacteristicResolutionError",
    "InvalidArgumentError",
    "InvalidBracketError",
    "NonConvergenceError",
    "NonConvergenceWarning",
    "TableSizeError",
]
