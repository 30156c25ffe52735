from __future__ import annotations
from enum import IntEnum
from functools import lru_cache
from typing import Iterable, Optional, Sequence
import logging
import operator
import sys

import numpy as np

from data_calc.config import CalcConfig, resolve_config
from data_calc.distance.numba_kernels import SLICE_BITS, SLICE_MASK, build_popcount_table
from data_calc.utils.errors import RecursionBudgetError

logger = logging.getLogger(__name__)

__all__ = [
    "HAMMING_INCOMPARABLE",
    "UNKNOWN_STRATEGY",
    "HammingStrategy",
    "PopcountTable",
    "get_popcount_table",
    "hamming_weight",
    "hamming_weight32",
    "hamming_weight64",
    "hamming_weights",
    "hamming_dist",
    "hamming_dist_algo",
]

# Returned by `hamming_dist` when the two sequences have different lengths.
HAMMING_INCOMPARABLE = sys.maxsize

# Returned by `hamming_dist_algo` for a strategy tag it does not know.
UNKNOWN_STRATEGY = -1

SUPPORTED_WIDTHS = (32, 64)


class HammingStrategy(IntEnum):
    """
    Control-flow variants of the integer Hamming distance.

    All three XOR the operands and count the set bits of the result; they
    return identical values for every pair.

    ITERATIVE         : Loop, testing and shifting out the low bit.
    RECURSIVE_SHIFT   : Recursion on the shifted remainder, adding the low bit on return.
    RECURSIVE_COUNTER : Recursion carrying the running count into each frame.
    """
    ITERATIVE = 1
    RECURSIVE_SHIFT = 2
    RECURSIVE_COUNTER = 3


class PopcountTable:
    """
    Population counts of every 16-bit pattern.

    A wider word is weighed by splitting it into 16-bit slices and summing
    the table entries of each slice. The table is immutable once built; use
    `get_popcount_table()` to share a single instance across calls.
    """
    __slots__ = ("_table",)

    def __init__(self, slice_bits: int = SLICE_BITS):
        table = build_popcount_table(slice_bits)
        table.flags.writeable = False
        self._table = table

    def __len__(self) -> int:
        return self._table.shape[0]

    def __getitem__(self, pattern: int) -> int:
        return int(self._table[pattern])

    @property
    def table(self) -> np.ndarray:
        return self._table

    def weight(self, value: int, width: int) -> int:
        """Sums the table entries of the `width // 16` slices of `value`."""
        total = 0
        for shift in range(0, width, SLICE_BITS):
            total += int(self._table[(value >> shift) & SLICE_MASK])
        return total


@lru_cache(maxsize=1)
def get_popcount_table() -> PopcountTable:
    """Returns the process-wide popcount table, building it on first use."""
    logger.debug(f"Building {1 << SLICE_BITS}-entry popcount table")
    return PopcountTable()


def _check_word(value: int, width: int) -> int:
    if width not in SUPPORTED_WIDTHS:
        raise ValueError(f"Unsupported bit width {width}; expected one of {SUPPORTED_WIDTHS}.")
    value = operator.index(value)
    if value < 0 or value >> width:
        raise ValueError(f"{value} does not fit in an unsigned {width}-bit word.")
    return value


def hamming_weight(value: int, width: int = 32, table: Optional[PopcountTable] = None) -> int:
    """
    Number of set bits in an unsigned `width`-bit word.

    Parameters
    ----------
    value : int
        The word, in `[0, 2**width)`.
    width : int, optional
        32 or 64, by default 32.
    table : Optional[PopcountTable], optional
        Lookup table to use. Defaults to the shared table.

    Raises
    ------
    ValueError
        If `width` is not supported or `value` is out of range.
    TypeError
        If `value` is not an integer.
    """
    value = _check_word(value, width)
    if table is None:
        table = get_popcount_table()
    return table.weight(value, width)


def hamming_weight32(value: int) -> int:
    """Set-bit count of an unsigned 32-bit word (two table lookups)."""
    return hamming_weight(value, 32)


def hamming_weight64(value: int) -> int:
    """Set-bit count of an unsigned 64-bit word (four table lookups)."""
    return hamming_weight(value, 64)


def hamming_weights(values: Iterable[int], width: int = 64) -> np.ndarray:
    """
    Vectorised `hamming_weight` over many words.

    Returns
    -------
    np.ndarray
        An `int64` vector with the weight of each input word.
    """
    words = [_check_word(v, width) for v in values]
    if not words:
        return np.zeros(0, dtype=np.int64)

    lookup = get_popcount_table().table
    arr = np.array(words, dtype=np.uint64)
    total = np.zeros(arr.shape[0], dtype=np.int64)
    for shift in range(0, width, SLICE_BITS):
        total += lookup[(arr >> np.uint64(shift)) & np.uint64(SLICE_MASK)]
    return total


def hamming_dist(left: Sequence, right: Sequence) -> int:
    """
    Number of positions at which two equal-length sequences differ.

    Sequences of different length are not comparable; rather than raising,
    `HAMMING_INCOMPARABLE` (`sys.maxsize`) is returned.
    """
    if len(left) != len(right):
        logger.debug(f"hamming_dist: lengths {len(left)} and {len(right)} differ")
        return HAMMING_INCOMPARABLE
    return sum(1 for x, y in zip(left, right) if x != y)


def _xor_pattern(left: int, right: int, bit_width: int) -> int:
    """
    XOR of the operands as a `bit_width`-bit word.

    Operands of opposite sign give a negative XOR, which is read as its
    two's complement word so that shifting terminates. Bits above the word
    are dropped for positive patterns as well.
    """
    pattern = operator.index(left) ^ operator.index(right)
    return pattern & ((1 << bit_width) - 1)


def _dist_iterative(pattern: int) -> int:
    count = 0
    while pattern != 0:
        count += pattern & 1
        pattern >>= 1
    return count


def _dist_recursive_shift(pattern: int) -> int:
    if pattern == 0:
        return 0
    return (pattern & 1) + _dist_recursive_shift(pattern >> 1)


def _dist_recursive_counter(pattern: int, count: int = 0) -> int:
    if pattern == 0:
        return count
    count += pattern & 1
    return _dist_recursive_counter(pattern >> 1, count)


_STRATEGIES = {
    HammingStrategy.ITERATIVE: _dist_iterative,
    HammingStrategy.RECURSIVE_SHIFT: _dist_recursive_shift,
    HammingStrategy.RECURSIVE_COUNTER: _dist_recursive_counter,
}


def hamming_dist_algo(
    left: int,
    right: int,
    algorithm: HammingStrategy | int,
    bit_width: Optional[int] = None,
    config: Optional[CalcConfig] = None,
) -> int:
    """
    Bitwise Hamming distance between two integers.

    Parameters
    ----------
    left, right : int
        The operands.
    algorithm : HammingStrategy | int
        Strategy tag, as an enum member or its integer value (1, 2 or 3).
    bit_width : Optional[int], optional
        Width of the word the operands are compared in; only the low
        `bit_width` bits of the XOR are counted. Defaults to
        `config.hamming_bit_width`.
    config : Optional[CalcConfig], optional
        Runtime settings; `DEFAULT_CONFIG` when None.

    Returns
    -------
    int
        The number of differing bits, or `UNKNOWN_STRATEGY` (-1) if
        `algorithm` is not a recognised tag.

    Raises
    ------
    RecursionBudgetError
        If a recursive strategy would recurse deeper than
        `config.max_recursion_depth`.
    """
    config = resolve_config(config)
    try:
        strategy = HammingStrategy(algorithm)
    except ValueError:
        logger.warning(f"hamming_dist_algo: unknown strategy tag {algorithm!r}")
        return UNKNOWN_STRATEGY

    width = config.hamming_bit_width if bit_width is None else bit_width
    if width not in SUPPORTED_WIDTHS:
        raise ValueError(f"Unsupported bit width {width}; expected one of {SUPPORTED_WIDTHS}.")

    pattern = _xor_pattern(left, right, width)
    if strategy is not HammingStrategy.ITERATIVE and pattern.bit_length() > config.max_recursion_depth:
        raise RecursionBudgetError(pattern.bit_length(), config.max_recursion_depth, what=strategy.name)

    return _STRATEGIES[strategy](pattern)
