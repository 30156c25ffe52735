from __future__ import annotations
from typing import Any, Sequence, Tuple

import numpy as np

from data_calc.utils.errors import ShapeMismatchError

# Dtype kinds the product kernels accept, mapped to the dtype they compute in.
# Unsigned data only stays unsigned when every operand is unsigned; mixed
# signed/unsigned operands promote through numpy first.
_KERNEL_DTYPES = {
    "b": np.int64,
    "i": np.int64,
    "u": np.uint64,
    "f": np.float64,
    "c": np.complex128,
}

# Element types numba can compile the kernels for (no float16 or longdouble).
_NUMBA_DTYPES = frozenset(
    np.dtype(t)
    for t in (
        np.bool_,
        np.int8, np.int16, np.int32, np.int64,
        np.uint8, np.uint16, np.uint32, np.uint64,
        np.float32, np.float64,
        np.complex64, np.complex128,
    )
)


def is_dense(matrix: Any) -> bool:
    """True for numpy arrays, which take the dense (numba) code paths."""
    return isinstance(matrix, np.ndarray)


def is_numba_dtype(dtype: np.dtype) -> bool:
    return np.dtype(dtype) in _NUMBA_DTYPES


def kernel_dtype(*arrays: np.ndarray) -> np.dtype:
    """
    Common dtype in which a kernel over `arrays` computes.

    The promoted dtype of the operands is widened to the 64-bit (or 128-bit
    complex) type of its kind. The widening must be a safe cast, so values
    are never wrapped or truncated on the way into a kernel.

    Raises
    ------
    TypeError
        If the promoted dtype is not boolean, integer, float or complex, or
        cannot be widened without loss (e.g. `longdouble`).
    """
    promoted = np.result_type(*arrays)
    if promoted.kind not in _KERNEL_DTYPES:
        raise TypeError(f"Dense matrix kernels need numeric data, got dtype '{promoted}'.")

    target = np.dtype(_KERNEL_DTYPES[promoted.kind])
    if not np.can_cast(promoted, target, casting="safe"):
        raise TypeError(f"Dtype '{promoted}' cannot be computed as '{target}' without loss.")
    return target


def as_dense_matrix(matrix: Any, name: str = "matrix") -> np.ndarray:
    """
    Views `matrix` as a 2-D numpy array without copying when possible.

    Raises
    ------
    ShapeMismatchError
        If the array is not two-dimensional (including ragged row lists,
        which numpy cannot stack).
    """
    try:
        arr = np.asarray(matrix)
    except ValueError as err:
        raise ShapeMismatchError(f"{name} has rows of differing length.") from err
    if arr.ndim != 2:
        raise ShapeMismatchError(f"{name} must be two-dimensional, got {arr.ndim} dimension(s).")
    return arr


def check_rectangular(rows: Sequence[Sequence[Any]], name: str = "matrix") -> Tuple[int, int]:
    """
    Validates that every row of a list-of-rows matrix has the same length.

    Returns
    -------
    Tuple[int, int]
        `(n_rows, n_cols)`; `(0, 0)` for a matrix without rows.

    Raises
    ------
    ShapeMismatchError
        If a row's length differs from the first row's.
    """
    n_rows = len(rows)
    if n_rows == 0:
        return 0, 0

    n_cols = len(rows[0])
    for row_idx, row in enumerate(rows):
        if len(row) != n_cols:
            raise ShapeMismatchError(
                f"{name} row {row_idx} has length {len(row)}, expected {n_cols}."
            )
    return n_rows, n_cols
