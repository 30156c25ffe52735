from data_calc.utils.errors import DataCalcError, ShapeMismatchError, RecursionBudgetError
from data_calc.utils.logging_utils import setup_logger

__all__ = [
    "DataCalcError",
    "ShapeMismatchError",
    "RecursionBudgetError",
    "setup_logger",
]
