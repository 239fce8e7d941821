"""
TD Mk Landscape Instance

CliqueTree is the evaluation surface of a landscape: it owns the cliques,
the codomain tables and the cached global optima, and evaluates candidate
solutions either from scratch or incrementally after a single bit flip.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np

from .codomain import CodomainFunction, generate_codomain
from .contract import InputParameters, SolutionFit, validate_codomain
from .errors import ParameterError
from .sampling import ChaChaRng
from .solver import GlobalOptima, SolverConfig, calculate_global_optima
from .tie_safe import FITNESS_EPSILON
from .tree import construct

logger = logging.getLogger(__name__)


class CliqueTree:
    """
    A TD Mk Landscape: clique tree, codomain tables and global optima.

    The global optima are computed once, at construction, and cached for
    constant-time membership queries.
    """

    def __init__(
        self,
        input_parameters: InputParameters,
        codomain_function: CodomainFunction,
        codomain_values: Any,
        cliques: List[List[int]],
        global_optima: GlobalOptima,
        separators: Optional[List[List[int]]] = None
    ):
        """
        Assemble an instance from already computed parts.

        Use CliqueTree.new, from_codomain or generate to build and solve a
        fresh landscape.

        Args:
            input_parameters: Parameters of the landscape
            codomain_function: Generator the tables came from
            codomain_values: Tables of shape (M, 2^k)
            cliques: Variable indices of every clique
            global_optima: Optimum score and strings
            separators: Separators, when known
        """
        self.input_parameters = input_parameters
        self.codomain_function = codomain_function
        self.codomain_values = validate_codomain(input_parameters, codomain_values).copy()
        self.codomain_values.setflags(write=False)
        self.cliques = [list(clique) for clique in cliques]
        self.separators = separators
        self.global_optima = global_optima
        self.number_evaluations = 0

        if len(self.cliques) != input_parameters.m or any(
            len(clique) != input_parameters.k for clique in self.cliques
        ):
            raise ParameterError(
                f"expected {input_parameters.m} cliques of size {input_parameters.k}"
            )

        self._clique_array = np.array(self.cliques, dtype=np.int64)
        self._bit_weights = 1 << np.arange(input_parameters.k - 1, -1, -1, dtype=np.int64)
        self._clique_rows = np.arange(input_parameters.m)

        # variable -> [(clique index, position in clique)]
        self._variable_cliques: Dict[int, List[Tuple[int, int]]] = {}
        for clique_index, clique in enumerate(self.cliques):
            for position, variable in enumerate(clique):
                self._variable_cliques.setdefault(variable, []).append((clique_index, position))

    @classmethod
    def new(
        cls,
        input_parameters: InputParameters,
        codomain_function: CodomainFunction,
        codomain_values: Any,
        rng: ChaChaRng,
        config: Optional[SolverConfig] = None
    ) -> 'CliqueTree':
        """
        Construct a random clique tree for given tables and solve it.

        Args:
            input_parameters: Parameters of the landscape
            codomain_function: Generator the tables came from
            codomain_values: Tables of shape (M, 2^k)
            rng: Bit source used for the tree construction
            config: Solver options

        Returns:
            CliqueTree with its global optima
        """
        values = validate_codomain(input_parameters, codomain_values)
        cliques, separators = construct(input_parameters, rng)
        global_optima = calculate_global_optima(
            input_parameters, codomain_function, values, cliques, separators, config
        )
        return cls(
            input_parameters, codomain_function, values, cliques, global_optima,
            separators=separators
        )

    @classmethod
    def generate(
        cls,
        input_parameters: InputParameters,
        codomain_function: CodomainFunction,
        rng: ChaChaRng,
        config: Optional[SolverConfig] = None
    ) -> 'CliqueTree':
        """Generate the codomain, then the clique tree, from the same stream."""
        codomain_values = generate_codomain(input_parameters, codomain_function, rng)
        return cls.new(input_parameters, codomain_function, codomain_values, rng, config)

    @classmethod
    def from_codomain(
        cls,
        input_parameters: InputParameters,
        codomain_values: Any,
        rng: ChaChaRng,
        config: Optional[SolverConfig] = None
    ) -> 'CliqueTree':
        """Build a landscape around caller-supplied tables."""
        return cls.new(input_parameters, CodomainFunction.unknown(), codomain_values, rng, config)

    @property
    def problem_size(self) -> int:
        return self.input_parameters.problem_size

    @property
    def glob_optima_score(self) -> float:
        return self.global_optima.score

    @property
    def glob_optima_strings(self) -> np.ndarray:
        return self.global_optima.strings

    @property
    def number_of_global_optima(self) -> int:
        return self.global_optima.count

    def _as_solution(self, solution: Sequence[int]) -> np.ndarray:
        array = np.asarray(solution)
        if array.shape != (self.problem_size,):
            raise ParameterError(
                f"solution must have {self.problem_size} variables, got shape {array.shape}"
            )
        if not np.isin(array, (0, 1)).all():
            raise ParameterError("solution values must be 0 or 1")
        return array.astype(np.int64)

    def clique_indices(self, solution: Sequence[int]) -> np.ndarray:
        """Table index of every clique for a solution."""
        array = self._as_solution(solution)
        return array[self._clique_array] @ self._bit_weights

    def calculate_fitness(self, solution: Sequence[int]) -> float:
        """
        Fitness of a solution: the sum of every clique's table value.

        Args:
            solution: One 0/1 value per variable

        Returns:
            Fitness
        """
        indices = self.clique_indices(solution)
        contributions = self.codomain_values[self._clique_rows, indices]
        self.number_evaluations += 1
        return float(np.sum(contributions))

    def calculate_fitness_delta(self, current_solutionfit: SolutionFit, index_mutation: int) -> float:
        """
        Fitness after flipping one bit, from the current fitness.

        Only the cliques containing the flipped variable are re-evaluated:
        their old contribution is subtracted and the contribution with the
        bit flipped is added.

        Args:
            current_solutionfit: Solution before the flip and its fitness
            index_mutation: Variable to flip

        Returns:
            Fitness of the mutated solution
        """
        if not 0 <= index_mutation < self.problem_size:
            raise ParameterError(
                f"index_mutation must be in [0, {self.problem_size}), got {index_mutation}"
            )
        solution = self._as_solution(current_solutionfit.solution)
        k = self.input_parameters.k

        fitness = current_solutionfit.fitness
        for clique_index, position in self._variable_cliques[index_mutation]:
            clique_substring_as_index = 0
            for variable in self.cliques[clique_index]:
                clique_substring_as_index = (clique_substring_as_index << 1) | int(solution[variable])

            fitness -= self.codomain_values[clique_index, clique_substring_as_index]
            clique_substring_as_index ^= 1 << (k - position - 1)
            fitness += self.codomain_values[clique_index, clique_substring_as_index]

        self.number_evaluations += 1
        return float(fitness)

    def is_global_optimum(self, solution_fit: SolutionFit) -> bool:
        """
        Whether a solution is a global optimum.

        True for an exact score match, or for a score within epsilon whose
        string is one of the cached optimal strings.
        """
        if solution_fit.fitness == self.glob_optima_score:
            return True
        return (
            abs(self.glob_optima_score - solution_fit.fitness) < FITNESS_EPSILON
            and self.global_optima.contains(solution_fit.solution)
        )

    def evaluate(self, solution: Sequence[int]) -> SolutionFit:
        """Evaluate a solution and pair it with its fitness."""
        return SolutionFit(np.asarray(solution), self.calculate_fitness(solution))

    def __repr__(self) -> str:
        return (
            f"CliqueTree({self.input_parameters.to_line()}, {self.codomain_function}, "
            f"optimum={self.glob_optima_score!r}, optima={self.number_of_global_optima})"
        )
