"""
Solver Module - Exact Global Optima

Provides:
- calculate_global_optima: entry point, dispatches on o
- calculate_global_optimum_separable: per-clique maxima for o == 0
- calculate_global_optima_tree: max-sum elimination over the clique tree
- GlobalOptima / SolverConfig: result and options
"""

from .result import GlobalOptima, SolverConfig
from .separable import calculate_global_optimum_separable, count_separable_optima
from .elimination import calculate_global_optima_tree, child_separator_positions
from .global_optima import calculate_global_optima

__all__ = [
    'GlobalOptima',
    'SolverConfig',
    'calculate_global_optima',
    'calculate_global_optimum_separable',
    'calculate_global_optima_tree',
    'count_separable_optima',
    'child_separator_positions',
]
