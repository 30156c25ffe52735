from __future__ import annotations
from typing import Optional, Sequence
import logging
import time

import numpy as np
from tqdm import tqdm

from data_calc.config import CalcConfig, resolve_config
from data_calc.structures.memo_matrix import EditDistanceMemo
from data_calc.utils.errors import RecursionBudgetError, ShapeMismatchError

logger = logging.getLogger(__name__)

__all__ = ["edit_distance", "edit_distance_matrix", "edit_distance_memoized"]


def edit_distance_matrix(a: Sequence, b: Sequence, config: Optional[CalcConfig] = None) -> np.ndarray:
    """
    Fills the full Levenshtein dynamic programming grid for `a` and `b`.

    Cell `[i, j]` holds the edit distance between the prefixes `a[:i]` and
    `b[:j]`. Row 0 and column 0 are the ramps `0..len(b)` and `0..len(a)`;
    every other cell is the cheapest of

    - deletion      : `grid[i-1, j] + 1`
    - insertion     : `grid[i, j-1] + 1`
    - substitution  : `grid[i-1, j-1] + (0 if a[i-1] == b[j-1] else 1)`

    Parameters
    ----------
    a, b : Sequence
        Sequences of comparable elements (strings, lists, tuples).
    config : Optional[CalcConfig], optional
        Runtime settings. A progress bar over rows is shown when `verbose`
        is set or this module's logger is enabled for INFO.

    Returns
    -------
    np.ndarray
        An `int64` array of shape `(len(a) + 1, len(b) + 1)`.
    """
    config = resolve_config(config)
    start_time = time.perf_counter()
    n, m = len(a), len(b)

    grid = np.zeros((n + 1, m + 1), dtype=np.int64)
    grid[0, :] = np.arange(m + 1)
    grid[:, 0] = np.arange(n + 1)

    show_progress = (config.verbose or logger.isEnabledFor(logging.INFO)) and n > 0
    row_iter = tqdm(range(1, n + 1), desc="Edit distance", leave=False, disable=not show_progress)

    # Work on Python lists row by row; numpy scalar access per cell is slow.
    prev_row = grid[0].tolist()
    for i in row_iter:
        a_elem = a[i - 1]
        row = [i] + [0] * m
        for j in range(1, m + 1):
            substitution_cost = 0 if a_elem == b[j - 1] else 1
            row[j] = min(
                prev_row[j] + 1,
                row[j - 1] + 1,
                prev_row[j - 1] + substitution_cost,
            )
        grid[i] = row
        prev_row = row

    elapsed = time.perf_counter() - start_time
    logger.debug(f"Edit distance grid {n + 1}x{m + 1} filled in {elapsed * 1000:.2f}ms")
    return grid


def edit_distance(a: Sequence, b: Sequence, config: Optional[CalcConfig] = None) -> int:
    """
    Minimum number of single-element insertions, deletions and
    substitutions turning `a` into `b`, computed bottom-up.

    Examples
    --------
    >>> edit_distance("Paints", "ants")
    2
    """
    return int(edit_distance_matrix(a, b, config)[len(a), len(b)])


def edit_distance_memoized(
    a: Sequence,
    b: Sequence,
    cache: Optional[EditDistanceMemo] = None,
    config: Optional[CalcConfig] = None,
) -> int:
    """
    Top-down edit distance over suffixes with memoization.

    The recursion walks index positions `(i, j)` into `a` and `b` rather than
    slicing, and caches each result under the remaining suffix lengths
    `(len(a) - i, len(b) - j)`. When one suffix is exhausted the distance is
    the remaining length of the other.

    Parameters
    ----------
    a, b : Sequence
        Sequences of comparable elements.
    cache : Optional[EditDistanceMemo], optional
        Memo grid to fill. A fresh one is allocated when None. A supplied
        grid may be reused for the same pair of sequences; results cached for
        a different pair would be wrong.
    config : Optional[CalcConfig], optional
        Runtime settings; `max_recursion_depth` bounds `len(a) + len(b)`.

    Returns
    -------
    int
        The edit distance, identical to `edit_distance(a, b)`.

    Raises
    ------
    ShapeMismatchError
        If `cache` is too small for the two sequences.
    RecursionBudgetError
        If the recursion could exceed `config.max_recursion_depth` frames.
    """
    config = resolve_config(config)
    n, m = len(a), len(b)

    if cache is None:
        cache = EditDistanceMemo.for_sequences(n, m)
    elif not cache.fits(n, m):
        raise ShapeMismatchError(
            f"Memo grid of shape {cache.shape} cannot hold sequences of length ({n}, {m})."
        )

    # Each frame advances at least one index, so the deepest chain is n + m.
    if n + m > config.max_recursion_depth:
        logger.warning(f"Memoized edit distance refused: depth {n + m} > {config.max_recursion_depth}")
        raise RecursionBudgetError(n + m, config.max_recursion_depth, what="edit_distance_memoized")

    def distance_from(i: int, j: int) -> int:
        remaining_a = n - i
        remaining_b = m - j
        if remaining_a == 0:
            return remaining_b
        if remaining_b == 0:
            return remaining_a

        cached = cache.get(remaining_a, remaining_b)
        if cached is not None:
            return cached

        substitution_cost = 0 if a[i] == b[j] else 1
        best = min(
            distance_from(i + 1, j) + 1,
            distance_from(i, j + 1) + 1,
            distance_from(i + 1, j + 1) + substitution_cost,
        )
        cache.set(remaining_a, remaining_b, best)
        return best

    result = distance_from(0, 0)
    logger.debug(f"Memoized edit distance: {cache.stores} cells stored, {cache.hits} cache hits")
    return result
