"""
Tree Elimination Optimizer

Exact max-sum variable elimination over the clique tree (o > 0).

Bottom-up, cliques M-1 .. 1: the table index of clique i is split into a
separator part s (first o bits) and a free part f (last k - o bits). For
every s the solver records the best value of

    h_i(s) = max_f  table_i[s, f] + sum_{children c} h_c(sep_c(s, f))

and every f attaining it. sep_c(s, f) reads, for each separator variable
of child c, the bit at that variable's position inside clique i.

The root is maximized over all of its k bits. Optimal strings are then
rebuilt top-down, cloning partial strings wherever a child has several
tied free assignments for the separator value fixed by its parent.
"""

import logging
from typing import List, Optional, Tuple
import numpy as np

from ..contract import InputParameters, index_to_bits
from ..errors import OptimaLimitError, TreeInvariantError
from ..tie_safe import TieTracker
from ..tree import TreeLayout
from .result import GlobalOptima

logger = logging.getLogger(__name__)


def child_separator_positions(
    clique: List[int],
    separator: List[int]
) -> List[int]:
    """
    Positions, inside a parent clique, of a child's separator variables.

    Raises:
        TreeInvariantError: If a separator variable is not in the clique
    """
    positions = []
    for variable in separator:
        try:
            positions.append(clique.index(variable))
        except ValueError:
            raise TreeInvariantError(
                f"separator variable {variable} not found in parent clique {clique}"
            ) from None
    return positions


def _separator_index(clique_index: int, positions: List[int], k: int) -> int:
    value = 0
    for position in positions:
        value = (value << 1) | ((clique_index >> (k - 1 - position)) & 1)
    return value


def _children_with_positions(
    layout: TreeLayout,
    cliques: List[List[int]],
    separators: List[List[int]],
    index: int
) -> List[Tuple[int, List[int]]]:
    return [
        (child, child_separator_positions(cliques[index], separators[child]))
        for child in layout.children(index)
    ]


def _check_limit(max_optima: Optional[int], required: int) -> None:
    if max_optima is not None and required > max_optima:
        raise OptimaLimitError(max_optima, required)


def calculate_global_optima_tree(
    input_parameters: InputParameters,
    codomain_values: np.ndarray,
    cliques: List[List[int]],
    separators: List[List[int]],
    max_optima: Optional[int] = None
) -> GlobalOptima:
    """
    Global optima of a landscape with overlapping cliques.

    Args:
        input_parameters: Parameters (any o; meant for o > 0)
        codomain_values: Array of shape (M, 2^k)
        cliques: Variable indices of every clique
        separators: Separator variable indices (empty for the root)
        max_optima: Upper bound on the number of strings to materialize

    Returns:
        GlobalOptima

    Raises:
        TreeInvariantError: If a separator is inconsistent with its parent
        OptimaLimitError: If the number of optima exceeds max_optima
    """
    m, k, o = input_parameters.m, input_parameters.k, input_parameters.o
    free_bits = k - o
    num_free = 1 << free_bits
    layout = TreeLayout.from_parameters(input_parameters)

    # best_scores[i][s]: tied free assignments of clique i for separator value s
    best_scores: List[Optional[List[TieTracker]]] = [None] * m

    for i in range(m - 1, 0, -1):
        table = codomain_values[i].tolist()
        children = _children_with_positions(layout, cliques, separators, i)

        trackers = []
        for s in range(1 << o):
            tracker = TieTracker()
            for f in range(num_free):
                clique_index = s * num_free + f
                score = table[clique_index]
                for child, positions in children:
                    child_separator = _separator_index(clique_index, positions, k)
                    score += best_scores[child][child_separator].best_score
                tracker.offer(f, score)
            trackers.append(tracker)
        best_scores[i] = trackers

    # The root has no separator and is maximized over all k bits
    root_table = codomain_values[0].tolist()
    root_children = _children_with_positions(layout, cliques, separators, 0)
    root_tracker = TieTracker()
    for c in range(1 << k):
        score = root_table[c]
        for child, positions in root_children:
            score += best_scores[child][_separator_index(c, positions, k)].best_score
        root_tracker.offer(c, score)

    for c, score in root_tracker.entries:
        logger.debug("Best clique0: %s with score %r", index_to_bits(c, k), score)

    _check_limit(max_optima, len(root_tracker.entries))
    strings = []
    for c in root_tracker.candidates:
        string = [0] * input_parameters.problem_size
        for position, bit in enumerate(index_to_bits(c, k)):
            string[cliques[0][position]] = bit
        strings.append(string)

    for parent in range(layout.num_parents):
        for child in layout.children(parent):
            strings = _extend_with_child(
                strings, best_scores[child], cliques[child], separators[child],
                o, free_bits, max_optima
            )

    glob_opt_score = root_tracker.best_score
    for string in strings:
        logger.debug("Glob opt string: %s and glob opt score: %r", string, glob_opt_score)

    return GlobalOptima(score=glob_opt_score, strings=np.array(strings, dtype=np.uint8))


def _extend_with_child(
    strings: List[List[int]],
    child_scores: List[TieTracker],
    child_clique: List[int],
    child_separator: List[int],
    o: int,
    free_bits: int,
    max_optima: Optional[int]
) -> List[List[int]]:
    """
    Write a child's optimal free bits into every partial string.

    Strings with a single maximizing assignment keep their position; strings
    with several are replaced by one clone per assignment, appended after
    the others in order.
    """
    options_per_string = []
    for string in strings:
        separator_value = 0
        for variable in child_separator:
            separator_value = (separator_value << 1) | string[variable]
        options = child_scores[separator_value].candidates
        if not options:
            raise TreeInvariantError("there are 0 maximizing instances, which is impossible")
        options_per_string.append(options)

    _check_limit(max_optima, sum(len(options) for options in options_per_string))

    kept = []
    expanded = []
    free_variables = child_clique[o:]
    for string, options in zip(strings, options_per_string):
        if len(options) == 1:
            _write_bits(string, free_variables, options[0], free_bits)
            kept.append(string)
        else:
            for option in options:
                clone = list(string)
                _write_bits(clone, free_variables, option, free_bits)
                expanded.append(clone)
    return kept + expanded


def _write_bits(string: List[int], variables: List[int], value: int, length: int) -> None:
    for position, bit in enumerate(index_to_bits(value, length)):
        string[variables[position]] = bit
