from data_calc.trees.random_tree import make_rng, generate_random_tree, iter_levels, tree_height, count_nodes

__all__ = [
    "make_rng",
    "generate_random_tree",
    "iter_levels",
    "tree_height",
    "count_nodes",
]
