from data_calc.algebra.matrix_ops import (
    transpose,
    transpose_dense,
    transpose_jagged,
    vector_product,
    dot,
    matrix_product,
    matrix_product_parallel,
    identity_matrix,
)
from data_calc.algebra.reductions import columnwise_extreme, columnwise_max, columnwise_min
from data_calc.algebra.parallel import parallel_map

__all__ = [
    "transpose",
    "transpose_dense",
    "transpose_jagged",
    "vector_product",
    "dot",
    "matrix_product",
    "matrix_product_parallel",
    "identity_matrix",
    "columnwise_extreme",
    "columnwise_max",
    "columnwise_min",
    "parallel_map",
]
