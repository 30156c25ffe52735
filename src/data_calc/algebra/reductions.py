from __future__ import annotations
from functools import reduce
from typing import Any, Iterable, List, Sequence
import logging

from data_calc.utils.errors import ShapeMismatchError

logger = logging.getLogger(__name__)

__all__ = ["columnwise_extreme", "columnwise_max", "columnwise_min"]


def columnwise_extreme(vectors: Iterable[Sequence[Any]], is_max: bool = True) -> List[Any]:
    """
    Element-wise maximum (or minimum) across a set of equal-length vectors.

    The vectors are folded pairwise: the running result is combined with
    each next vector position by position, keeping the larger (or smaller)
    value.

    Parameters
    ----------
    vectors : Iterable[Sequence[Any]]
        Vectors of mutually comparable values, all of the same length.
    is_max : bool, optional
        Keep maxima if True (default), minima otherwise.

    Returns
    -------
    List[Any]
        The reduced vector; an empty list when no vectors are given.

    Raises
    ------
    ShapeMismatchError
        If the vectors do not all share one length.
    """
    vectors = list(vectors)
    if not vectors:
        return []

    width = len(vectors[0])
    for idx, vector in enumerate(vectors):
        if len(vector) != width:
            raise ShapeMismatchError(f"Vector {idx} has length {len(vector)}, expected {width}.")

    pick = max if is_max else min
    result = reduce(
        lambda acc, vector: [pick(x, y) for x, y in zip(acc, vector)],
        vectors[1:],
        list(vectors[0]),
    )
    logger.debug(f"Column-wise {'max' if is_max else 'min'} over {len(vectors)} vectors of width {width}")
    return result


def columnwise_max(vectors: Iterable[Sequence[Any]]) -> List[Any]:
    return columnwise_extreme(vectors, is_max=True)


def columnwise_min(vectors: Iterable[Sequence[Any]]) -> List[Any]:
    return columnwise_extreme(vectors, is_max=False)
