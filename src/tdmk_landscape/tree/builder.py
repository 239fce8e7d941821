"""
Clique Tree Construction

Builds the cliques and separators of a TD Mk Landscape from a random
permutation of the variable indices. Draw order on the bit source:

1. one shuffle of all n variable indices
2. per child, in construction order, one shuffle of a copy of its
   parent clique (the first o entries become the separator)
"""

import logging
from typing import List, Tuple

from ..contract import InputParameters
from ..sampling import ChaChaRng, shuffle
from .topology import TreeLayout

logger = logging.getLogger(__name__)


Cliques = List[List[int]]
Separators = List[List[int]]


def construct(input_parameters: InputParameters, rng: ChaChaRng) -> Tuple[Cliques, Separators]:
    """
    Construct the clique tree.

    The root takes the first k permuted indices and has an empty separator.
    Parents are visited in construction order and each creates up to b
    children until M - 1 children exist. A child clique is its separator
    (o variables chosen from the parent) followed by the next k - o unused
    permuted indices. With o == 0 the branching factor is forced to 1 and
    every clique is variable-disjoint from the others.

    Args:
        input_parameters: Validated (M, k, o, b)
        rng: Bit source, advanced in place

    Returns:
        Tuple of (cliques, separators), both of length M
    """
    m, k, o = input_parameters.m, input_parameters.k, input_parameters.o
    b = input_parameters.branching
    if input_parameters.o == 0 and input_parameters.b != 1:
        logger.warning("o == 0: branching factor %d replaced by 1", input_parameters.b)

    indices = list(range(input_parameters.problem_size))
    shuffle(rng, indices)
    logger.debug("Permuted variable indices: %s", indices)

    cliques: Cliques = [indices[:k]]
    separators: Separators = [[]]

    count = 1
    num_parents = TreeLayout(m=m, b=b).num_parents
    for parent_index in range(num_parents):
        for j in range(b):
            if parent_index * b + j >= m - 1:
                break

            clique_copy = list(cliques[parent_index])
            shuffle(rng, clique_copy)
            new_separator = clique_copy[:o]

            start_index = (count - 1) * (k - o) + k
            variables_to_add = indices[start_index:start_index + (k - o)]

            cliques.append(new_separator + variables_to_add)
            separators.append(new_separator)
            count += 1

    logger.debug("Constructed cliques: %s", cliques)
    return cliques, separators


def verify_clique_tree(
    input_parameters: InputParameters,
    cliques: Cliques,
    separators: Separators
) -> Tuple[bool, List[str]]:
    """
    Verify the structural properties of a clique tree.

    Properties checked:
    1. Shape: M cliques of k distinct variables, M separators
    2. Separators: the root's is empty, every other one holds o variables
       that occupy the first o positions of the clique and appear in the
       parent clique
    3. Coverage: the cliques use exactly the variables 0..n-1

    Args:
        input_parameters: Parameters the tree was built for
        cliques: Clique variable lists
        separators: Separator variable lists

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []
    m, k, o = input_parameters.m, input_parameters.k, input_parameters.o
    layout = TreeLayout.from_parameters(input_parameters)

    if len(cliques) != m or len(separators) != m:
        errors.append(
            f"expected {m} cliques and separators, got {len(cliques)} and {len(separators)}"
        )
        return False, errors

    for index, clique in enumerate(cliques):
        if len(clique) != k or len(set(clique)) != k:
            errors.append(f"clique {index} does not hold {k} distinct variables: {clique}")

    if separators[0]:
        errors.append(f"root separator is not empty: {separators[0]}")

    for index in range(1, m):
        separator = separators[index]
        if len(separator) != o:
            errors.append(f"separator {index} does not hold {o} variables: {separator}")
            continue
        if list(cliques[index][:o]) != list(separator):
            errors.append(f"separator {index} is not the prefix of clique {index}")
        if o > 0:
            parent = cliques[layout.parent(index)]
            missing = [v for v in separator if v not in parent]
            if missing:
                errors.append(f"separator {index} variables {missing} not in parent clique")

    used = {v for clique in cliques for v in clique}
    if used != set(range(input_parameters.problem_size)):
        errors.append("cliques do not cover the variables 0..n-1 exactly")

    return len(errors) == 0, errors
