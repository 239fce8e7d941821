"""
Batch Generation

Drives codomain and problem generation over configuration files and
folders. A configuration folder is laid out as:

    <folder>/codomain_generation/*.txt   configurations for codomain-only runs
    <folder>/problem_generation/*.txt    configurations for problem runs
    <folder>/codomain_files/<stem>/      generated codomain files
    <folder>/problems/<stem>/            generated problem files

One bit source is advanced through every file in sorted order, so a seed
fixes the complete output of a run.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union
import numpy as np
from tqdm import tqdm

from .codomain import CodomainFunction, generate_codomain, write_codomain
from .configuration import ConfigurationParameters
from .contract import InputParameters
from .errors import ParameterError
from .landscape import CliqueTree
from .problem_io import get_clique_tree_from_codomain_file, write_problem
from .sampling import ChaChaRng
from .solver import SolverConfig

logger = logging.getLogger(__name__)


PathLike = Union[str, Path]

CODOMAIN_INSTANCES_PER_CONFIGURATION = 25


def get_output_folder_path_from_configuration_file(
    input_configuration_file_path: PathLike,
    output_directory_name: str
) -> Path:
    """
    Output folder for a configuration file, created if missing.

    "<root>/problem_generation/deceptive_trap.txt" with "problems" maps to
    "<root>/problems/deceptive_trap".
    """
    path = Path(input_configuration_file_path)
    output_folder_path = path.parent.parent / output_directory_name / path.stem
    output_folder_path.mkdir(parents=True, exist_ok=True)
    return output_folder_path


def instance_file_name(
    codomain_function: CodomainFunction,
    input_parameters: InputParameters,
    num: int
) -> str:
    p = input_parameters
    return f"{codomain_function.to_io_string()}_{p.m}_{p.k}_{p.o}_{p.b}_{num}.txt"


def _sorted_files(folder_path: Path) -> List[Path]:
    return sorted(path for path in folder_path.iterdir() if not path.is_dir())


def generate_and_write_codomain(
    input_parameters: InputParameters,
    codomain_function: CodomainFunction,
    output_file_path: PathLike,
    rng: ChaChaRng
) -> np.ndarray:
    """Generate a codomain, write it to a file and return the values."""
    values = generate_codomain(input_parameters, codomain_function, rng)
    write_codomain(output_file_path, input_parameters, codomain_function, values)
    logger.debug("Wrote codomain file %s", output_file_path)
    return values


def generate_codomains_from_configuration_file(
    input_configuration_file_path: PathLike,
    rng: ChaChaRng,
    instances: int = CODOMAIN_INSTANCES_PER_CONFIGURATION
) -> List[Path]:
    """
    Generate `instances` codomain files for every parameter tuple of a
    configuration file.

    Returns:
        Paths of the written files, in generation order
    """
    configuration = ConfigurationParameters.from_file(input_configuration_file_path)
    codomain_function = configuration.codomain_function
    output_folder = get_output_folder_path_from_configuration_file(
        input_configuration_file_path, "codomain_files"
    )

    written = []
    for input_parameters in configuration:
        for num in range(instances):
            output_file_path = output_folder / instance_file_name(codomain_function, input_parameters, num)
            generate_and_write_codomain(input_parameters, codomain_function, output_file_path, rng)
            written.append(output_file_path)

    logger.info(
        "Generated %d codomain files for %s in %s",
        len(written), input_configuration_file_path, output_folder
    )
    return written


def generate_codomains_from_folder(folder_path: PathLike, rng: ChaChaRng) -> List[Path]:
    """Handle every configuration file in `<folder>/codomain_generation`."""
    configuration_files = _sorted_files(Path(folder_path) / "codomain_generation")
    written = []
    for configuration_file in tqdm(configuration_files, desc="Codomain configurations"):
        written.extend(generate_codomains_from_configuration_file(configuration_file, rng))
    return written


def generate_problem_from_codomain_file(
    codomain_file_path: PathLike,
    output_file_path: PathLike,
    rng: ChaChaRng,
    file_has_codomain_function: bool = True,
    config: Optional[SolverConfig] = None
) -> CliqueTree:
    """Build and solve a clique tree for a codomain file and write its problem file."""
    clique_tree = get_clique_tree_from_codomain_file(
        codomain_file_path, file_has_codomain_function, rng, config
    )
    write_problem(output_file_path, clique_tree)
    logger.info(
        "Wrote problem %s: optimum %r with %d optima",
        output_file_path, clique_tree.glob_optima_score, clique_tree.number_of_global_optima
    )
    return clique_tree


def generate_problems_from_configuration_file(
    input_configuration_file_path: PathLike,
    number_of_problems: int,
    rng: ChaChaRng,
    config: Optional[SolverConfig] = None
) -> List[Path]:
    """
    Generate problems for every parameter tuple of a configuration file.

    Per instance the codomain is generated and written first, then the
    clique tree is built from the same stream and its problem file written
    under the same file name.

    Returns:
        Paths of the written problem files
    """
    configuration = ConfigurationParameters.from_file(input_configuration_file_path)
    codomain_function = configuration.codomain_function
    codomain_folder = get_output_folder_path_from_configuration_file(
        input_configuration_file_path, "codomain_files"
    )
    problem_folder = get_output_folder_path_from_configuration_file(
        input_configuration_file_path, "problems"
    )

    written = []
    for input_parameters in configuration:
        for num in range(number_of_problems):
            file_name = instance_file_name(codomain_function, input_parameters, num)
            values = generate_and_write_codomain(
                input_parameters, codomain_function, codomain_folder / file_name, rng
            )
            clique_tree = CliqueTree.new(input_parameters, codomain_function, values, rng, config)
            write_problem(problem_folder / file_name, clique_tree)
            written.append(problem_folder / file_name)

    logger.info(
        "Generated %d problems for %s in %s",
        len(written), input_configuration_file_path, problem_folder
    )
    return written


def generate_problems_from_configuration_folder(
    folder_path: PathLike,
    number_of_problems: int,
    rng: ChaChaRng,
    config: Optional[SolverConfig] = None
) -> List[Path]:
    """Handle every configuration file in `<folder>/problem_generation`."""
    if number_of_problems < 1:
        raise ParameterError(f"number_of_problems must be at least 1, got {number_of_problems}")

    configuration_files = _sorted_files(Path(folder_path) / "problem_generation")
    written = []
    for configuration_file in tqdm(configuration_files, desc="Problem configurations"):
        written.extend(
            generate_problems_from_configuration_file(configuration_file, number_of_problems, rng, config)
        )
    return written
