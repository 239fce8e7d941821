"""
Global Optimum Calculation

Chooses the separable optimizer for o == 0 and tree elimination otherwise.
A single clique with o > 0 has no children to eliminate and reduces to
the root scan of tree elimination.
"""

import logging
from typing import Any, List, Optional

from ..contract import InputParameters, validate_codomain
from .elimination import calculate_global_optima_tree
from .result import GlobalOptima, SolverConfig
from .separable import calculate_global_optimum_separable

logger = logging.getLogger(__name__)


def calculate_global_optima(
    input_parameters: InputParameters,
    codomain_function: Any,
    codomain_values: Any,
    cliques: List[List[int]],
    separators: List[List[int]],
    config: Optional[SolverConfig] = None
) -> GlobalOptima:
    """
    Calculate the global optimum score and all optimal strings.

    Args:
        input_parameters: Parameters of the landscape
        codomain_function: Codomain function the tables came from (informational)
        codomain_values: Tables of shape (M, 2^k)
        cliques: Variable indices of every clique
        separators: Separator variable indices (empty for the root)
        config: Solver options

    Returns:
        GlobalOptima
    """
    config = config or SolverConfig()
    values = validate_codomain(input_parameters, codomain_values)
    logger.debug(
        "Calculating global optima for M=%d k=%d o=%d b=%d (%s)",
        input_parameters.m, input_parameters.k, input_parameters.o,
        input_parameters.b, codomain_function
    )

    if input_parameters.is_separable:
        return calculate_global_optimum_separable(
            input_parameters, values, cliques, max_optima=config.max_optima
        )
    return calculate_global_optima_tree(
        input_parameters, values, cliques, separators, max_optima=config.max_optima
    )
