from __future__ import annotations
from collections import deque
from typing import Iterator, List, Optional
import logging

import numpy as np

from data_calc.config import CalcConfig, resolve_config
from data_calc.structures.binary_tree import BinaryTreeNode
from data_calc.utils.errors import RecursionBudgetError

logger = logging.getLogger(__name__)

__all__ = ["make_rng", "generate_random_tree", "iter_levels", "tree_height", "count_nodes"]


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Creates a generator for the random routines.

    A concurrent caller should hold its own generator; a single
    `np.random.Generator` must not be drawn from by two threads at once.
    """
    return np.random.default_rng(seed)


def generate_random_tree(
    density: float,
    depth: int,
    rng: Optional[np.random.Generator] = None,
    config: Optional[CalcConfig] = None,
) -> Optional[BinaryTreeNode]:
    """
    Grows a random binary tree.

    Every branch draws once from `rng.random()` (uniform on `[0, 1)`). A
    draw of at least `density` leaves the branch empty; otherwise a node is
    created and both of its children are grown with one less unit of depth.
    A branch whose remaining depth has dropped below zero is empty.

    `depth` counts edges: with `density=1` the result is the complete binary
    tree of height `depth`, with `density=0` it is always empty.

    Parameters
    ----------
    density : float
        Branching probability per edge, in `[0, 1]`.
    depth : int
        Maximum height of the tree.
    rng : Optional[np.random.Generator], optional
        Source of the draws. A fresh unseeded generator is created if None.
    config : Optional[CalcConfig], optional
        Runtime settings; `max_recursion_depth` bounds `depth`.

    Returns
    -------
    Optional[BinaryTreeNode]
        The root, or None for an empty tree.

    Raises
    ------
    ValueError
        If `density` lies outside `[0, 1]`.
    RecursionBudgetError
        If `depth` exceeds `config.max_recursion_depth`.
    """
    config = resolve_config(config)
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must lie in [0, 1], got {density}.")
    if depth > config.max_recursion_depth:
        raise RecursionBudgetError(depth, config.max_recursion_depth, what="generate_random_tree")
    if rng is None:
        rng = make_rng()

    def grow(remaining: int) -> Optional[BinaryTreeNode]:
        # Past the depth bound, or the draw declined this branch
        if remaining < 0 or rng.random() >= density:
            return None
        node = BinaryTreeNode()
        # Left subtree is drawn before the right, so a seed fixes the shape
        node.left = grow(remaining - 1)
        node.right = grow(remaining - 1)
        return node

    root = grow(depth)
    logger.debug(f"Generated random tree: density={density}, depth={depth}, nodes={count_nodes(root)}")
    return root


def iter_levels(root: Optional[BinaryTreeNode]) -> Iterator[List[BinaryTreeNode]]:
    """
    Level-order traversal, yielding the nodes of one depth at a time.

    The queue is drained one level at a time; children of the drained nodes
    form the next level.
    """
    if root is None:
        return

    queue = deque([root])
    while queue:
        # Everything in the queue now is exactly one level
        level = [queue.popleft() for _ in range(len(queue))]
        for node in level:
            queue.extend(node.children())
        yield level


def tree_height(root: Optional[BinaryTreeNode]) -> int:
    """
    Number of edges on the longest root-to-leaf path.

    Counts the levels of a breadth-first traversal and subtracts one. An
    empty tree and a single node both have height 0.
    """
    levels = sum(1 for _ in iter_levels(root))
    return max(levels - 1, 0)


def count_nodes(root: Optional[BinaryTreeNode]) -> int:
    return sum(len(level) for level in iter_levels(root))
