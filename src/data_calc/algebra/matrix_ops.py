from __future__ import annotations
from typing import Any, Iterable, Iterator, List, Optional, Sequence
import logging
import time

import numpy as np

from data_calc.algebra.numba_kernels import matmul_parallel, matmul_serial, transpose_into
from data_calc.algebra.parallel import parallel_map
from data_calc.config import CalcConfig, resolve_config
from data_calc.utils.errors import ShapeMismatchError
from data_calc.utils.matrix_utils import (
    as_dense_matrix,
    check_rectangular,
    is_dense,
    is_numba_dtype,
    kernel_dtype,
)

logger = logging.getLogger(__name__)

__all__ = [
    "transpose",
    "transpose_dense",
    "transpose_jagged",
    "vector_product",
    "dot",
    "matrix_product",
    "matrix_product_parallel",
    "identity_matrix",
]

JaggedMatrix = Sequence[Sequence[Any]]


# ---------------------------------------------------------------------------
# Transpose
# ---------------------------------------------------------------------------
def transpose_dense(matrix: np.ndarray) -> np.ndarray:
    """
    Returns a new `(C, R)` array holding the transpose of an `(R, C)` array.

    Arrays of a dtype numba compiles for are copied by a parallel kernel;
    others (strings, objects, float16) fall back to a numpy copy of the
    transposed view. The input is never mutated.
    """
    src = as_dense_matrix(matrix)
    if not is_numba_dtype(src.dtype):
        return src.T.copy()

    out = np.empty((src.shape[1], src.shape[0]), dtype=src.dtype)
    transpose_into(np.ascontiguousarray(src), out)
    return out


def transpose_jagged(
    rows: JaggedMatrix,
    n_jobs: Optional[int] = None,
    config: Optional[CalcConfig] = None,
) -> List[List[Any]]:
    """
    Transposes a matrix stored as a list of rows.

    The column count is taken from the first row, so at least one row is
    required. Each output row is built from one input column by a separate
    `parallel_map` task.

    A matrix of rows without columns, such as `[[]]`, transposes to `[]`.
    That result has no rows, so it cannot be transposed back: the row count
    of the original is lost and `transpose_jagged([])` raises.

    Parameters
    ----------
    rows : Sequence[Sequence[Any]]
        The matrix. Every row must have the same length.
    n_jobs : Optional[int], optional
        Worker count; defaults to `config.n_jobs`.
    config : Optional[CalcConfig], optional
        Runtime settings.

    Raises
    ------
    ValueError
        If `rows` is empty.
    ShapeMismatchError
        If the rows are not all of the same length.
    """
    config = resolve_config(config)
    if len(rows) == 0:
        raise ValueError("Cannot transpose a jagged matrix without rows; the column count is undefined.")

    n_rows, n_cols = check_rectangular(rows, name="jagged matrix")

    def build_column(col: int) -> List[Any]:
        return [rows[row][col] for row in range(n_rows)]

    return parallel_map(
        build_column,
        n_cols,
        n_jobs=config.n_jobs if n_jobs is None else n_jobs,
        desc="Transpose",
        show_progress=config.verbose or logger.isEnabledFor(logging.INFO),
    )


def transpose(matrix: Any, config: Optional[CalcConfig] = None):
    """
    Swaps rows and columns, `R x C -> C x R`.

    numpy arrays take the dense path and return an array; any other row
    container is treated as jagged and returns a list of lists.
    """
    if is_dense(matrix):
        return transpose_dense(matrix)
    return transpose_jagged(matrix, config=config)


# ---------------------------------------------------------------------------
# Vector product
# ---------------------------------------------------------------------------
def vector_product(v1: Iterable[Any], v2: Iterable[Any], strict: bool = False) -> Iterator[Any]:
    """
    Lazily yields the pairwise products `v1[k] * v2[k]` (the unsummed terms
    of the dot product).

    Inputs of different length are truncated to the shorter one, following
    `zip`. Pass `strict=True` to raise instead.

    Raises
    ------
    ShapeMismatchError
        With `strict=True`, once the shorter input runs out before the longer.
    """
    pairs = zip(v1, v2, strict=strict)
    while True:
        try:
            x, y = next(pairs)
        except StopIteration:
            return
        except ValueError as err:
            raise ShapeMismatchError(f"Vector lengths differ: {err}") from err
        yield x * y


def dot(v1: Iterable[Any], v2: Iterable[Any], strict: bool = False) -> Any:
    """Sum of `vector_product(v1, v2, strict)`; 0 for empty inputs."""
    return sum(vector_product(v1, v2, strict=strict))


# ---------------------------------------------------------------------------
# Matrix product
# ---------------------------------------------------------------------------
def _check_inner(a_shape, b_shape) -> None:
    if a_shape[1] != b_shape[0]:
        logger.debug(f"Matrix product shape mismatch: {a_shape} x {b_shape}")
        raise ShapeMismatchError(
            f"Cannot multiply {a_shape[0]}x{a_shape[1]} by {b_shape[0]}x{b_shape[1]}: "
            f"inner dimensions {a_shape[1]} and {b_shape[0]} differ."
        )


def _dense_product(a: Any, b: Any, parallel: bool) -> np.ndarray:
    a_arr = as_dense_matrix(a, name="left matrix")
    b_arr = as_dense_matrix(b, name="right matrix")
    _check_inner(a_arr.shape, b_arr.shape)

    dtype = kernel_dtype(a_arr, b_arr)
    a_arr = np.ascontiguousarray(a_arr, dtype=dtype)
    b_arr = np.ascontiguousarray(b_arr, dtype=dtype)
    out = np.zeros((a_arr.shape[0], b_arr.shape[1]), dtype=dtype)

    start_time = time.perf_counter()
    if parallel:
        matmul_parallel(a_arr, b_arr, out)
    else:
        matmul_serial(a_arr, b_arr, out)
    elapsed = time.perf_counter() - start_time
    logger.debug(
        f"Dense product {a_arr.shape} x {b_arr.shape} ({'parallel' if parallel else 'serial'}) "
        f"in {elapsed * 1000:.2f}ms"
    )
    return out


def _jagged_rows_product(a: JaggedMatrix, b: JaggedMatrix):
    a_shape = check_rectangular(a, name="left matrix")
    b_shape = check_rectangular(b, name="right matrix")
    # A left operand without rows yields an empty product whatever `b` is.
    if a_shape[0]:
        _check_inner(a_shape, b_shape)

    n_inner, n_cols = b_shape

    def product_row(row: int) -> List[Any]:
        a_row = a[row]
        return [sum(a_row[k] * b[k][col] for k in range(n_inner)) for col in range(n_cols)]

    return a_shape[0], product_row


def matrix_product(a: Any, b: Any):
    """
    Sequential matrix product, `result[i][j] = sum_k a[i][k] * b[k][j]`.

    If either operand is a numpy array, both are treated as dense and the
    result is an array computed by a numba kernel. Otherwise both are lists
    of rows and the result is a list of lists.

    Raises
    ------
    ShapeMismatchError
        If the column count of `a` differs from the row count of `b`, or an
        operand is not rectangular.
    TypeError
        If dense operands are not numeric.
    """
    if is_dense(a) or is_dense(b):
        return _dense_product(a, b, parallel=False)

    n_rows, product_row = _jagged_rows_product(a, b)
    return [product_row(row) for row in range(n_rows)]


def matrix_product_parallel(
    a: Any,
    b: Any,
    n_jobs: Optional[int] = None,
    config: Optional[CalcConfig] = None,
):
    """
    Data-parallel matrix product, partitioned by output row.

    Dense operands use a numba `prange` kernel. Row lists are fanned out
    with `parallel_map`, one task per output row, into a pre-sized result.

    Parameters
    ----------
    a, b : Any
        Operands, as in `matrix_product`.
    n_jobs : Optional[int], optional
        Threads for the row-list path. Defaults to -1 (all cores).
    config : Optional[CalcConfig], optional
        Runtime settings; `verbose` (or INFO logging) enables a progress bar.
    """
    config = resolve_config(config)
    if is_dense(a) or is_dense(b):
        return _dense_product(a, b, parallel=True)

    n_rows, product_row = _jagged_rows_product(a, b)
    return parallel_map(
        product_row,
        n_rows,
        n_jobs=-1 if n_jobs is None else n_jobs,
        desc="Matrix product",
        show_progress=config.verbose or logger.isEnabledFor(logging.INFO),
    )


def identity_matrix(n: int) -> np.ndarray:
    """The `n x n` identity as an `int64` array."""
    if n < 0:
        raise ValueError(f"Identity size must be non-negative, got {n}.")
    return np.eye(n, dtype=np.int64)
