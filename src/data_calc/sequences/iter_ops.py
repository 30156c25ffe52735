from __future__ import annotations
from itertools import islice
from typing import Iterable, Iterator, List, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")

__all__ = [
    "chunk_of",
    "iterate_at",
    "letter_combinations_of",
    "reorder_elements",
    "get_random_elements",
]


def chunk_of(elements: Iterable[T], size: int) -> Iterator[List[T]]:
    """
    Splits `elements` into consecutive chunks of `size` items.

    The last chunk holds whatever remains and may be shorter.

    Parameters
    ----------
    elements : Iterable[T]
        The input; consumed lazily.
    size : int
        Items per chunk, at least 1.

    Yields
    ------
    Iterator[List[T]]
        The chunks in input order.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}.")

    iterator = iter(elements)
    while chunk := list(islice(iterator, size)):
        yield chunk


def iterate_at(elements: Sequence[T], size: int) -> Iterator[List[T]]:
    """
    Yields the growing prefixes `elements[:1]`, `elements[:2]`, ... `elements[:size]`.

    Once `size` exceeds the input length the full sequence is repeated,
    so exactly `size` prefixes are produced.
    """
    for length in range(1, size + 1):
        yield list(elements[:length])


def letter_combinations_of(text: str) -> List[str]:
    """
    Every subset of the characters of `text`, as masks over the positions.

    For each mask `0 .. 2**len(text) - 1`, the character at position `k` is
    kept when bit `k` of the mask is set and replaced by `-` otherwise.

    Examples
    --------
    >>> letter_combinations_of("ab")
    ['--', 'a-', '-b', 'ab']
    """
    n = len(text)
    return [
        "".join(ch if mask & (1 << pos) else "-" for pos, ch in enumerate(text))
        for mask in range(1 << n)
    ]


def reorder_elements(elements: Iterable[T], rng: Optional[np.random.Generator] = None) -> Iterator[T]:
    """
    Lazily yields the elements in a random order.

    At each step an index is drawn among the not yet yielded elements, that
    element is yielded, and its slot is refilled with the last remaining
    element (Fisher-Yates from the tail).

    Parameters
    ----------
    elements : Iterable[T]
        The input, materialised once.
    rng : Optional[np.random.Generator], optional
        Source of the draws; a fresh generator when None.
    """
    if rng is None:
        rng = np.random.default_rng()

    pool = list(elements)
    remaining = len(pool)
    while remaining >= 1:
        pick = int(rng.integers(remaining))
        yield pool[pick]
        pool[pick] = pool[remaining - 1]
        remaining -= 1


def get_random_elements(
    elements: Iterable[T],
    count: int,
    rng: Optional[np.random.Generator] = None,
) -> List[T]:
    """
    Up to `count` distinct positions of `elements`, in random order.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}.")
    return list(islice(reorder_elements(elements, rng), count))
