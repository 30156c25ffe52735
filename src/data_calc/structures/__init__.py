from data_calc.structures.memo_matrix import EditDistanceMemo, UNSET
from data_calc.structures.binary_tree import BinaryTreeNode

__all__ = [
    "EditDistanceMemo",
    "UNSET",
    "BinaryTreeNode",
]
