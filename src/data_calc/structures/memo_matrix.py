from __future__ import annotations
from typing import Iterator, Optional, Tuple

import numpy as np

# Reserved marker for cells that have not been computed. Edit distances are
# never negative, so it cannot collide with a stored result (including 0).
UNSET = -1


class EditDistanceMemo:
    """
    Memoization grid for the top-down edit distance recursion.

    Cells are addressed by `(remaining_a, remaining_b)`, the lengths of the
    two suffixes still to be compared. Every cell starts at `UNSET`, which
    keeps a legitimately computed distance of 0 apart from a cell that was
    never filled.
    """
    __slots__ = ("_grid", "_hits", "_stores")

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"Memo grid needs at least one row and column, got ({rows}, {cols}).")
        self._grid = np.full((rows, cols), UNSET, dtype=np.int64)
        self._hits = 0
        self._stores = 0

    @classmethod
    def for_sequences(cls, len_a: int, len_b: int) -> EditDistanceMemo:
        """Allocates a grid large enough for sequences of the given lengths."""
        return cls(len_a + 1, len_b + 1)

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns `(rows, cols)` of the grid."""
        return self._grid.shape[0], self._grid.shape[1]

    @property
    def hits(self) -> int:
        """Number of lookups answered from the grid."""
        return self._hits

    @property
    def stores(self) -> int:
        """Number of cells written."""
        return self._stores

    def fits(self, len_a: int, len_b: int) -> bool:
        """True if every `(remaining_a, remaining_b)` key of the two lengths is addressable."""
        rows, cols = self.shape
        return len_a < rows and len_b < cols

    def _check(self, remaining_a: int, remaining_b: int) -> None:
        rows, cols = self.shape
        if not (0 <= remaining_a < rows and 0 <= remaining_b < cols):
            raise IndexError(
                f"EditDistanceMemo invalid key: ({remaining_a}, {remaining_b}) for shape {self.shape}"
            )

    def get(self, remaining_a: int, remaining_b: int) -> Optional[int]:
        """
        Retrieves a cached distance.

        Returns
        -------
        Optional[int]
            The stored distance, or None if the cell is still `UNSET`.
        """
        self._check(remaining_a, remaining_b)
        value = int(self._grid[remaining_a, remaining_b])
        if value == UNSET:
            return None
        self._hits += 1
        return value

    def set(self, remaining_a: int, remaining_b: int, value: int) -> None:
        """Stores a computed distance. Negative values are rejected."""
        self._check(remaining_a, remaining_b)
        if value < 0:
            raise ValueError(f"Edit distances are non-negative, got {value}.")
        self._grid[remaining_a, remaining_b] = value
        self._stores += 1

    def is_set(self, remaining_a: int, remaining_b: int) -> bool:
        self._check(remaining_a, remaining_b)
        return bool(self._grid[remaining_a, remaining_b] != UNSET)

    def iter_set_cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yields `(remaining_a, remaining_b, distance)` for every filled cell."""
        for remaining_a, remaining_b in zip(*np.nonzero(self._grid != UNSET)):
            yield int(remaining_a), int(remaining_b), int(self._grid[remaining_a, remaining_b])

    def clear(self) -> None:
        """Resets every cell to `UNSET` and zeroes the counters."""
        self._grid.fill(UNSET)
        self._hits = 0
        self._stores = 0

    def as_array(self) -> np.ndarray:
        """Returns a read-only view of the grid."""
        view = self._grid.view()
        view.flags.writeable = False
        return view
