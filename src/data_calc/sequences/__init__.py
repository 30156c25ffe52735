from data_calc.sequences.iter_ops import (
    chunk_of,
    iterate_at,
    letter_combinations_of,
    reorder_elements,
    get_random_elements,
)

__all__ = [
    "chunk_of",
    "iterate_at",
    "letter_combinations_of",
    "reorder_elements",
    "get_random_elements",
]
