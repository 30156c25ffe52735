from importlib.metadata import PackageNotFoundError, version

from data_calc.config import CalcConfig, DEFAULT_CONFIG, load_config, configure_logging
from data_calc.distance import (
    HAMMING_INCOMPARABLE,
    HammingStrategy,
    edit_distance,
    edit_distance_matrix,
    edit_distance_memoized,
    hamming_weight,
    hamming_weight32,
    hamming_weight64,
    hamming_dist,
    hamming_dist_algo,
)
from data_calc.algebra import (
    transpose,
    vector_product,
    dot,
    matrix_product,
    matrix_product_parallel,
    identity_matrix,
    columnwise_extreme,
)
from data_calc.trees import make_rng, generate_random_tree, tree_height
from data_calc.structures import BinaryTreeNode, EditDistanceMemo
from data_calc.utils.errors import DataCalcError, ShapeMismatchError, RecursionBudgetError

try:
    __version__ = version("data-calc")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "CalcConfig",
    "DEFAULT_CONFIG",
    "load_config",
    "configure_logging",
    "HAMMING_INCOMPARABLE",
    "HammingStrategy",
    "edit_distance",
    "edit_distance_matrix",
    "edit_distance_memoized",
    "hamming_weight",
    "hamming_weight32",
    "hamming_weight64",
    "hamming_dist",
    "hamming_dist_algo",
    "transpose",
    "vector_product",
    "dot",
    "matrix_product",
    "matrix_product_parallel",
    "identity_matrix",
    "columnwise_extreme",
    "make_rng",
    "generate_random_tree",
    "tree_height",
    "BinaryTreeNode",
    "EditDistanceMemo",
    "DataCalcError",
    "ShapeMismatchError",
    "RecursionBudgetError",
]
