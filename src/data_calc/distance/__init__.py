from data_calc.distance.edit_distance import edit_distance, edit_distance_matrix, edit_distance_memoized
from data_calc.distance.hamming import (
    HAMMING_INCOMPARABLE,
    UNKNOWN_STRATEGY,
    HammingStrategy,
    PopcountTable,
    get_popcount_table,
    hamming_weight,
    hamming_weight32,
    hamming_weight64,
    hamming_weights,
    hamming_dist,
    hamming_dist_algo,
)

__all__ = [
    "edit_distance",
    "edit_distance_matrix",
    "edit_distance_memoized",
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
