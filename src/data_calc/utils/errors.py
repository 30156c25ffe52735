from __future__ import annotations

__all__ = ["DataCalcError", "ShapeMismatchError", "RecursionBudgetError"]


class DataCalcError(Exception):
    """Base class for all errors raised by `data_calc`."""


class ShapeMismatchError(DataCalcError, ValueError):
    """
    Raised when the dimensions of two operands cannot be combined.

    Covers matrix products whose inner dimensions differ, strict vector
    products of unequal length, ragged rows in a jagged transpose, vectors
    of unequal length in a column-wise reduction and memo grids that are too
    small for the sequences they are meant to cache.
    """


class RecursionBudgetError(DataCalcError, RecursionError):
    """
    Raised before a recursive computation whose depth would exceed the
    configured `max_recursion_depth`.
    """

    def __init__(self, required: int, budget: int, what: str = "recursion"):
        self.required = required
        self.budget = budget
        super().__init__(f"{what} needs depth {required} but the budget is {budget}")
