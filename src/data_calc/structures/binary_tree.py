from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, eq=False)
class BinaryTreeNode:
    """
    A node of a binary tree.

    Each node owns its two subtrees; there is no parent reference. A node
    with neither child is a leaf.

    Attributes
    ----------
    left : Optional[BinaryTreeNode]
        Root of the left subtree, or None.
    right : Optional[BinaryTreeNode]
        Root of the right subtree, or None.
    """
    left: Optional[BinaryTreeNode] = None
    right: Optional[BinaryTreeNode] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def children(self) -> tuple[BinaryTreeNode, ...]:
        """Returns the present children, left first."""
        return tuple(child for child in (self.left, self.right) if child is not None)
