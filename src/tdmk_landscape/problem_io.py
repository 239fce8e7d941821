"""
Problem Files

A problem file stores a generated landscape's structure and solution:

    M k o b
    <global optimum score>
    <number of global optima>
    <one 0/1 string per global optimum>
    <one line of space separated variable indices per clique>

Together with the codomain file it was generated from, a problem file is
enough to rebuild the evaluation surface without re-running the solver.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union
import numpy as np

from .codomain import CodomainFunction, format_float, read_codomain, read_codomain_file
from .contract import InputParameters, bits_to_string, string_to_bits
from .errors import ParameterError, ParseError
from .landscape import CliqueTree
from .sampling import ChaChaRng
from .solver import GlobalOptima, SolverConfig

logger = logging.getLogger(__name__)


PathLike = Union[str, Path]


@dataclass
class Problem:
    """
    Stored landscape structure.

    Attributes:
        input_parameters: Parameters of the landscape
        glob_optima_score: Global optimum score
        glob_optima_strings: Optimal strings, shape (count, n)
        cliques: Variable indices per clique
    """
    input_parameters: InputParameters
    glob_optima_score: float
    glob_optima_strings: np.ndarray
    cliques: List[List[int]]

    @classmethod
    def from_clique_tree(cls, clique_tree: CliqueTree) -> 'Problem':
        return cls(
            clique_tree.input_parameters,
            clique_tree.glob_optima_score,
            clique_tree.glob_optima_strings,
            [list(clique) for clique in clique_tree.cliques],
        )

    def to_clique_tree(
        self,
        codomain_values,
        codomain_function: Optional[CodomainFunction] = None
    ) -> CliqueTree:
        """Rebuild the evaluation surface from this problem and its codomain."""
        return CliqueTree(
            self.input_parameters,
            codomain_function or CodomainFunction.unknown(),
            codomain_values,
            self.cliques,
            GlobalOptima(self.glob_optima_score, self.glob_optima_strings),
        )


def format_problem(problem: Problem) -> str:
    lines = [
        problem.input_parameters.to_line(),
        format_float(problem.glob_optima_score),
        str(len(problem.glob_optima_strings)),
    ]
    lines.extend(bits_to_string(row) for row in problem.glob_optima_strings)
    lines.extend(" ".join(str(variable) for variable in clique) for clique in problem.cliques)
    return "\n".join(lines) + "\n"


def write_problem(file_path: PathLike, problem: Union[Problem, CliqueTree]) -> None:
    """Write a problem file, replacing any existing file."""
    if isinstance(problem, CliqueTree):
        problem = Problem.from_clique_tree(problem)
    with open(file_path, 'w') as f:
        f.write(format_problem(problem))
    logger.debug("Wrote problem file %s", file_path)


def _next_line(lines, field: str, path: Optional[PathLike]) -> Tuple[int, str]:
    entry = next(lines, None)
    if entry is None:
        raise ParseError("problem file does not contain enough entries", field=field, path=path)
    return entry


def parse_problem(text: str, path: Optional[PathLike] = None) -> Problem:
    """
    Parse the contents of a problem file.

    Raises:
        ParseError: Missing lines, non-numeric tokens or malformed strings
        ParameterError: Inconsistent sizes
    """
    lines = enumerate(text.splitlines(), start=1)

    line_number, line = _next_line(lines, "M k o b", path)
    input_parameters = InputParameters.from_line(line, line_number=line_number, path=path)
    n = input_parameters.problem_size

    line_number, line = _next_line(lines, "score", path)
    try:
        score = float(line)
    except ValueError:
        raise ParseError(
            f"could not parse {line!r} as a float",
            field="score", line_number=line_number, path=path
        ) from None

    line_number, line = _next_line(lines, "number of optima", path)
    try:
        count = int(line)
    except ValueError:
        count = -1
    if count < 1:
        raise ParseError(
            f"could not parse {line!r} as a positive integer",
            field="number of optima", line_number=line_number, path=path
        )

    strings = []
    for optimum in range(count):
        line_number, line = _next_line(lines, f"optimum[{optimum}]", path)
        try:
            bits = string_to_bits(line.strip())
        except ParseError as e:
            raise ParseError(
                str(e), field=f"optimum[{optimum}]", line_number=line_number, path=path
            ) from None
        if len(bits) != n:
            raise ParseError(
                f"expected {n} bits, got {len(bits)}",
                field=f"optimum[{optimum}]", line_number=line_number, path=path
            )
        strings.append(bits)

    cliques = []
    for clique_index in range(input_parameters.m):
        line_number, line = _next_line(lines, f"clique[{clique_index}]", path)
        clique = []
        for token in line.split():
            try:
                variable = int(token)
            except ValueError:
                variable = -1
            if not 0 <= variable < n:
                raise ParseError(
                    f"{token!r} is not a variable index below {n}",
                    field=f"clique[{clique_index}]", line_number=line_number, path=path
                )
            clique.append(variable)
        if len(clique) != input_parameters.k:
            raise ParameterError(
                f"clique {clique_index} has {len(clique)} variables, expected {input_parameters.k}"
            )
        cliques.append(clique)

    return Problem(input_parameters, score, np.array(strings, dtype=np.uint8), cliques)


def read_problem(file_path: PathLike) -> Problem:
    with open(file_path, 'r') as f:
        text = f.read()
    return parse_problem(text, path=file_path)


def get_clique_tree_from_codomain_file(
    codomain_file_path: PathLike,
    file_has_codomain_function: bool,
    rng: ChaChaRng,
    config: Optional[SolverConfig] = None
) -> CliqueTree:
    """
    Read a codomain file, construct a clique tree for it and solve it.

    Args:
        codomain_file_path: Codomain file
        file_has_codomain_function: Whether the file starts with the function line
        rng: Bit source for the tree construction
        config: Solver options

    Returns:
        CliqueTree
    """
    codomain_function, input_parameters, values = read_codomain_file(
        codomain_file_path, has_function_line=file_has_codomain_function
    )
    return CliqueTree.new(input_parameters, codomain_function, values, rng, config)


def get_clique_trees_paths_from_codomain_folder(
    folder_path: PathLike,
    files_have_codomain_function: bool,
    rng: ChaChaRng,
    config: Optional[SolverConfig] = None
) -> List[Tuple[CliqueTree, Path]]:
    """Clique tree for every file of a folder, in sorted path order."""
    paths = sorted(path for path in Path(folder_path).iterdir() if path.is_file())
    return [
        (get_clique_tree_from_codomain_file(path, files_have_codomain_function, rng, config), path)
        for path in paths
    ]


def load_clique_tree(
    problem_file_path: PathLike,
    codomain_file_path: PathLike,
    file_has_codomain_function: bool = True
) -> CliqueTree:
    """
    Rebuild a stored landscape from its problem and codomain files.

    No bit source is needed: the cliques and optima come from the problem
    file.
    """
    problem = read_problem(problem_file_path)
    skip_lines = 2 if file_has_codomain_function else 1
    values = read_codomain(codomain_file_path, problem.input_parameters, skip_number_lines=skip_lines)
    return problem.to_clique_tree(values)
