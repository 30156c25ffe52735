"""
Unit tests for dense and jagged matrix operations.

Covers transposition (numba kernel for arrays, thread fan-out for row
lists), the lazy vector product with its truncating and strict modes, and the
sequential and data-parallel matrix products, which must agree and must
reject operands whose inner dimensions differ.
"""
import importlib
import logging

import numpy as np
import pytest

from data_calc.algebra import (
    dot,
    identity_matrix,
    matrix_product,
    matrix_product_parallel,
    transpose,
    transpose_dense,
    transpose_jagged,
    vector_product,
)
from data_calc.config import CalcConfig
from data_calc.utils.errors import ShapeMismatchError

matrix_ops_module = importlib.import_module("data_calc.algebra.matrix_ops")


# ---------------------------------------------------------------------------
# Transpose
# ---------------------------------------------------------------------------
def test_transpose_dense_swaps_shape():
    matrix = np.arange(6).reshape(2, 3)
    out = transpose_dense(matrix)

    assert out.shape == (3, 2)
    assert np.array_equal(out, matrix.T)
    assert out.dtype == matrix.dtype


@pytest.mark.parametrize(
    "matrix",
    [
        np.arange(12, dtype=np.float64).reshape(3, 4),
        np.arange(5).reshape(1, 5),
        np.array([[True, False], [False, False]]),
        np.zeros((0, 3)),
    ],
)
def test_transpose_dense_involution(matrix):
    """Transposing twice returns the original array."""
    assert np.array_equal(transpose(transpose(matrix)), matrix)


def test_transpose_dense_does_not_mutate_input():
    matrix = np.arange(6).reshape(3, 2)
    before = matrix.copy()
    transpose(matrix)
    assert np.array_equal(matrix, before)


def test_transpose_dense_non_numeric_dtype():
    """Arrays the kernel cannot take are still transposed."""
    matrix = np.array([["a", "b", "c"], ["d", "e", "f"]])
    assert transpose(matrix).tolist() == [["a", "d"], ["b", "e"], ["c", "f"]]


def test_transpose_dense_dtype_without_kernel_support():
    """float16 has no compiled kernel and takes the numpy path."""
    matrix = np.array([[1.5, 2.0, 2.5], [3.0, 4.0, 4.5]], dtype=np.float16)
    out = transpose(matrix)

    assert out.dtype == np.float16
    assert np.array_equal(out, matrix.T)
    assert np.array_equal(transpose(out), matrix)


def test_transpose_dense_uint64_keeps_high_values():
    matrix = np.array([[2**64 - 1, 0], [2**63, 7]], dtype=np.uint64)
    assert np.array_equal(transpose(transpose(matrix)), matrix)


def test_transpose_jagged_rows():
    rows = [[1, 2, 3], [4, 5, 6]]
    assert transpose(rows) == [[1, 4], [2, 5], [3, 6]]


@pytest.mark.parametrize("n_jobs", [1, 2, -1])
def test_transpose_jagged_involution(n_jobs):
    """The result does not depend on how many threads build the columns."""
    rows = [[r * 10 + c for c in range(7)] for r in range(5)]
    once = transpose_jagged(rows, n_jobs=n_jobs)
    assert transpose_jagged(once, n_jobs=n_jobs) == rows


def test_transpose_jagged_uses_config_workers():
    rows = [["x", "y"], ["z", "w"]]
    assert transpose(rows, config=CalcConfig(n_jobs=2)) == [["x", "z"], ["y", "w"]]


def test_transpose_jagged_requires_a_row():
    with pytest.raises(ValueError):
        transpose_jagged([])


def test_transpose_jagged_rejects_ragged_rows():
    with pytest.raises(ShapeMismatchError):
        transpose_jagged([[1, 2, 3], [4, 5]])


def test_transpose_jagged_rows_without_columns():
    """`[[]]` has one row and no columns; its transpose has no rows."""
    assert transpose_jagged([[]]) == []
    with pytest.raises(ValueError):
        transpose_jagged(transpose_jagged([[]]))


# ---------------------------------------------------------------------------
# Vector product
# ---------------------------------------------------------------------------
def test_vector_product_is_lazy_pairwise():
    terms = vector_product([1, 2, 3], [4, 5, 6])
    assert iter(terms) is terms
    assert list(terms) == [4, 10, 18]


def test_vector_product_truncates_to_shorter():
    """Unequal lengths follow zip and stop at the shorter input."""
    assert list(vector_product([1, 2, 3, 4], [10, 20])) == [10, 40]
    assert dot([1, 2, 3, 4], [10, 20]) == 50


def test_vector_product_strict_raises_on_mismatch():
    with pytest.raises(ShapeMismatchError):
        list(vector_product([1, 2, 3], [1, 2], strict=True))
    with pytest.raises(ShapeMismatchError):
        dot([1], [1, 2], strict=True)


def test_dot_of_empty_vectors_is_zero():
    assert dot([], []) == 0


# ---------------------------------------------------------------------------
# Matrix product
# ---------------------------------------------------------------------------
def test_matrix_product_dense_identity():
    """Multiplying by the identity returns the original matrix."""
    matrix = np.array([[2, -1, 0], [4, 3, 7], [1, 1, 9]])
    assert np.array_equal(matrix_product(matrix, identity_matrix(3)), matrix)
    assert np.array_equal(matrix_product_parallel(identity_matrix(3), matrix), matrix)


def test_matrix_product_dense_matches_numpy():
    rng = np.random.default_rng(7)
    a = rng.normal(size=(5, 4))
    b = rng.normal(size=(4, 6))

    expected = a @ b
    assert np.allclose(matrix_product(a, b), expected)
    assert np.allclose(matrix_product_parallel(a, b), expected)


def test_matrix_product_dense_mixed_dtypes_promote():
    a = np.array([[1, 2], [3, 4]])
    b = np.array([[0.5, 0.0], [0.0, 0.5]])
    out = matrix_product(a, b)
    assert out.dtype == np.float64
    assert np.allclose(out, [[0.5, 1.0], [1.5, 2.0]])


def test_matrix_product_rows_identity():
    rows = [[1, 2], [3, 4]]
    identity = identity_matrix(2).tolist()
    assert matrix_product(rows, identity) == rows
    assert matrix_product_parallel(rows, identity, n_jobs=2) == rows


def test_matrix_product_rows_rectangular():
    a = [[1, 2, 3], [4, 5, 6]]
    b = [[7, 8], [9, 10], [11, 12]]
    expected = [[58, 64], [139, 154]]
    assert matrix_product(a, b) == expected
    assert matrix_product_parallel(a, b) == expected
    assert matrix_product_parallel(a, b, n_jobs=1, config=CalcConfig(verbose=True)) == expected


def test_matrix_product_mixed_kinds_takes_dense_path():
    out = matrix_product([[1, 2]], np.array([[3], [4]]))
    assert isinstance(out, np.ndarray)
    assert out.tolist() == [[11]]


@pytest.mark.parametrize("product", [matrix_product, matrix_product_parallel])
def test_matrix_product_uint64_beyond_signed_range(product):
    """Unsigned operands are multiplied as unsigned; nothing wraps negative."""
    matrix = np.array([[2**63 + 5, 1], [2, 3]], dtype=np.uint64)
    out = product(matrix, np.eye(2, dtype=np.uint64))

    assert out.dtype == np.uint64
    assert np.array_equal(out, matrix)
    assert int(out[0, 0]) == 2**63 + 5


def test_matrix_product_float16_promotes_to_float64():
    a = np.array([[1.5, 0.0], [0.0, 2.0]], dtype=np.float16)
    out = matrix_product(a, a)
    assert out.dtype == np.float64
    assert np.allclose(out, [[2.25, 0.0], [0.0, 4.0]])


def test_matrix_product_rejects_lossy_longdouble():
    """A dtype wider than the kernels compute in is refused, not truncated."""
    if np.dtype(np.longdouble).itemsize == np.dtype(np.float64).itemsize:
        pytest.skip("longdouble is float64 on this platform")
    a = np.eye(2, dtype=np.longdouble)
    with pytest.raises(TypeError):
        matrix_product(a, a)


@pytest.mark.parametrize("product", [matrix_product, matrix_product_parallel])
def test_matrix_product_shape_mismatch_raises(product):
    """Inner dimensions must agree; nothing is coerced."""
    with pytest.raises(ShapeMismatchError):
        product(np.ones((2, 3)), np.ones((2, 3)))
    with pytest.raises(ShapeMismatchError):
        product([[1, 2, 3]], [[1], [2]])


def test_matrix_product_rejects_ragged_rows():
    with pytest.raises(ShapeMismatchError):
        matrix_product([[1, 2], [3]], [[1], [2]])


def test_matrix_product_rejects_non_numeric_arrays():
    with pytest.raises(TypeError):
        matrix_product(np.array([["a"]]), np.array([["b"]]))


def test_matrix_product_empty_left_operand():
    assert matrix_product([], [[1, 2]]) == []


def test_identity_matrix():
    assert identity_matrix(2).tolist() == [[1, 0], [0, 1]]
    assert identity_matrix(0).shape == (0, 0)
    with pytest.raises(ValueError):
        identity_matrix(-1)


# ---------------------------------------------------------------------------
# Progress bars
# ---------------------------------------------------------------------------
@pytest.fixture
def recorded_progress(monkeypatch):
    """Records the `show_progress` flag each `parallel_map` call receives."""
    flags = []
    real_parallel_map = matrix_ops_module.parallel_map

    def recording_parallel_map(func, n_items, n_jobs=1, desc=None, show_progress=False):
        flags.append(show_progress)
        return real_parallel_map(func, n_items, n_jobs=n_jobs, desc=desc, show_progress=False)

    monkeypatch.setattr(matrix_ops_module, "parallel_map", recording_parallel_map)
    return flags


def test_progress_off_by_default(recorded_progress, caplog):
    caplog.set_level(logging.WARNING, logger="data_calc")
    transpose_jagged([[1, 2], [3, 4]])
    matrix_product_parallel([[1]], [[2]])
    assert recorded_progress == [False, False]


def test_progress_follows_verbose_flag(recorded_progress, caplog):
    caplog.set_level(logging.WARNING, logger="data_calc")
    transpose_jagged([[1, 2], [3, 4]], config=CalcConfig(verbose=True))
    assert recorded_progress == [True]


def test_progress_enabled_by_info_logging(recorded_progress, caplog):
    """INFO logging on the package turns the bars on without `verbose`."""
    caplog.set_level(logging.INFO, logger="data_calc")
    transpose_jagged([[1, 2], [3, 4]])
    matrix_product_parallel([[1]], [[2]])
    assert recorded_progress == [True, True]
