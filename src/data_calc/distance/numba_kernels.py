import numpy as np
import numba as nb

# Width of one lookup slice; the table covers every pattern of this many bits.
SLICE_BITS = 16
SLICE_MASK = (1 << SLICE_BITS) - 1


@nb.njit(cache=False)
def count_set_bits(value: int) -> int:
    """
    Counts the set bits of a non-negative integer by test-and-shift.

    The low bit is added to the count and the value shifted right until no
    bits remain.
    """
    count = 0
    while value != 0:
        # Add the low bit, then drop it
        count += value & 1
        value >>= 1
    return count


@nb.njit(cache=False)
def build_popcount_table(slice_bits: int) -> np.ndarray:
    """
    Builds the population-count lookup table for every `slice_bits`-bit pattern.

    Parameters
    ----------
    slice_bits : int
        Width of the patterns covered by the table (16 for the standard table).

    Returns
    -------
    np.ndarray
        A `uint8` vector of length `2**slice_bits` where entry `p` holds the
        number of set bits in `p`.
    """
    size = 1 << slice_bits
    # Weights never exceed slice_bits, so uint8 is wide enough
    table = np.empty(size, dtype=np.uint8)
    for pattern in range(size):
        table[pattern] = np.uint8(count_set_bits(pattern))
    return table
