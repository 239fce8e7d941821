"""
Separable Optimizer

With o == 0 every clique is variable-disjoint, so the optimum decomposes:
the global score is the sum of the per-clique maxima and the global optima
are the Cartesian product of each clique's tied maximizing assignments.

The product can grow combinatorially (t^M strings for t ties per clique).
Callers that only need the score or the count should use
count_separable_optima, which never materializes strings.
"""

import logging
from typing import List, Optional, Tuple
import numpy as np

from ..contract import InputParameters, index_to_bits
from ..errors import OptimaLimitError
from ..tie_safe import maximizing_indices
from .result import GlobalOptima

logger = logging.getLogger(__name__)


def _clique_optima(codomain_values: np.ndarray) -> Tuple[float, List[List[int]]]:
    glob_opt_score = 0.0
    clique_optima = []
    for clique_values in codomain_values:
        highest_score, highest_indices = maximizing_indices(clique_values.tolist())
        glob_opt_score += highest_score
        clique_optima.append(highest_indices)
    return glob_opt_score, clique_optima


def count_separable_optima(codomain_values: np.ndarray) -> Tuple[float, int]:
    """
    Score and number of global optima of a separable landscape.

    Args:
        codomain_values: Array of shape (M, 2^k)

    Returns:
        Tuple of (global optimum score, number of global optima)
    """
    glob_opt_score, clique_optima = _clique_optima(codomain_values)
    count = 1
    for optima in clique_optima:
        count *= len(optima)
    return glob_opt_score, count


def calculate_global_optimum_separable(
    input_parameters: InputParameters,
    codomain_values: np.ndarray,
    cliques: List[List[int]],
    max_optima: Optional[int] = None
) -> GlobalOptima:
    """
    Global optima of a separable (o == 0) landscape.

    Args:
        input_parameters: Parameters with o == 0
        codomain_values: Array of shape (M, 2^k)
        cliques: Variable indices of every clique
        max_optima: Upper bound on the number of strings to materialize

    Returns:
        GlobalOptima

    Raises:
        OptimaLimitError: If the number of optima exceeds max_optima
    """
    k = input_parameters.k
    glob_opt_score, clique_optima = _clique_optima(codomain_values)

    number_global_optima = 1
    for optima in clique_optima:
        number_global_optima *= len(optima)
    if max_optima is not None and number_global_optima > max_optima:
        raise OptimaLimitError(max_optima, number_global_optima)

    strings = [[0] * input_parameters.problem_size]
    for clique, optima in zip(cliques, clique_optima):
        expanded = []
        for optimum in optima:
            bits = index_to_bits(optimum, k)
            for string in strings:
                new_string = list(string)
                for position, variable in enumerate(clique):
                    new_string[variable] = bits[position]
                expanded.append(new_string)
        strings = expanded

    logger.debug(
        "Separable optimum %r with %d optimal strings", glob_opt_score, len(strings)
    )
    return GlobalOptima(score=glob_opt_score, strings=np.array(strings, dtype=np.uint8))
