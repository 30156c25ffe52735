import numpy as np
import numba as nb


# -------------------------
# Transpose
# -------------------------
@nb.njit(parallel=True, cache=False)
def transpose_into(src: np.ndarray, out: np.ndarray) -> None:
    """
    Writes the transpose of `src` into the pre-allocated `out`.

    Output rows are distributed across threads with `prange`; each thread
    writes only its own rows of `out` and reads only from `src`.

    Parameters
    ----------
    src : np.ndarray
        Input matrix of shape `(R, C)`.
    out : np.ndarray
        Output buffer of shape `(C, R)` and the same dtype as `src`.
    """
    n_rows, n_cols = src.shape
    # Each thread owns whole output rows (input columns)
    for j in nb.prange(n_cols):
        for i in range(n_rows):
            out[j, i] = src[i, j]


# -------------------------
# Matrix product
# -------------------------
@nb.njit(cache=False)
def matmul_serial(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    """
    Accumulates `a @ b` into the zero-initialised `out` with a triple loop.

    `a` is `(R, K)`, `b` is `(K, C)` and `out` is `(R, C)`; all three share
    one dtype.
    """
    n_rows, n_inner = a.shape
    n_cols = b.shape[1]
    for i in range(n_rows):
        for j in range(n_cols):
            # Dot product of row i of a with column j of b
            for k in range(n_inner):
                out[i, j] += a[i, k] * b[k, j]


@nb.njit(parallel=True, cache=False)
def matmul_parallel(a: np.ndarray, b: np.ndarray, out: np.ndarray) -> None:
    """
    Parallel form of `matmul_serial`.

    The outer row index is split across threads with `prange`. Row `i` of
    `out` is written by exactly one thread and never read by another.
    """
    n_rows, n_inner = a.shape
    n_cols = b.shape[1]
    # Split output rows across threads; out is zero-initialised by the caller
    for i in nb.prange(n_rows):
        for j in range(n_cols):
            for k in range(n_inner):
                out[i, j] += a[i, k] * b[k, j]
