"""Fan-out/fan-in over independent output partitions."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, List, Optional, TypeVar

from tqdm import tqdm

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resolve_workers(n_jobs: int) -> int:
    """Maps an `n_jobs` setting (-1 = all cores) to a thread count."""
    if n_jobs == -1:
        return os.cpu_count() or 1
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be -1 or a positive integer, got {n_jobs}.")
    return n_jobs


def parallel_map(
    func: Callable[[int], T],
    n_items: int,
    n_jobs: int = 1,
    desc: Optional[str] = None,
    show_progress: bool = False,
) -> List[T]:
    """
    Compute `func(index)` for every index in `range(n_items)`.

    Each task's result lands in its own slot of a list allocated up front,
    so no two tasks write the same location and no locking is needed.
    The call returns only after every task has finished; if a task raises,
    the first exception observed is re-raised once the pool has shut down.

    Parameters
    ----------
    func : callable
        Computes the partition at the given index. It must only read shared
        inputs.
    n_items : int
        Number of partitions.
    n_jobs : int
        1 = sequential (default), -1 = all cores, >1 = that many threads.
    desc : str, optional
        Label of the progress bar.
    show_progress : bool
        If True, display a tqdm bar advancing as partitions complete.

    Returns
    -------
    list
        Results ordered by index.
    """
    if n_items < 0:
        raise ValueError(f"n_items must be non-negative, got {n_items}.")

    max_workers = resolve_workers(n_jobs)
    progress = tqdm(total=n_items, desc=desc, leave=False, disable=not show_progress)

    if max_workers == 1 or n_items <= 1:
        try:
            results = []
            for index in range(n_items):
                results.append(func(index))
                progress.update(1)
            return results
        finally:
            progress.close()

    logger.debug(f"parallel_map: {n_items} partitions on {max_workers} threads")
    results: List[Optional[T]] = [None] * n_items
    try:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_idx = {executor.submit(func, index): index for index in range(n_items)}
            for future in as_completed(future_to_idx):
                results[future_to_idx[future]] = future.result()
                progress.update(1)
    finally:
        progress.close()
    return results  # type: ignore[return-value]
