"""
TD Mk Landscape - Benchmark Generation with Known Global Optima

This package generates Tree-Decomposition Mk Landscapes: M subfunctions of
k bits each, arranged in a random clique tree where every clique shares o
variables with its parent and each parent has up to b children.

For every generated landscape the complete set of global optima is
computed exactly, so optimizers can be scored against ground truth.

Key Features:
- Reproducible ChaCha20 bit source seeded from a 64-bit integer
- Exact max-sum elimination over the clique tree, keeping all tied optima
- Full and single-bit-flip (delta) fitness evaluation
- Codomain and problem file formats, configuration ranges, batch generation
"""

from .errors import (
    LandscapeError,
    ParameterError,
    ParseError,
    TreeInvariantError,
    OptimaLimitError,
)
from .contract import (
    InputParameters,
    SolutionFit,
    MAX_CLIQUE_SIZE,
)
from .tie_safe import (
    FITNESS_EPSILON,
    is_better_fitness,
    is_worse_fitness,
    is_equal_fitness,
    is_better_or_equal_fitness,
    is_better_solutionfit,
    is_worse_solutionfit,
    is_equal_solutionfit,
    is_better_or_equal_solutionfit,
)
from .sampling import ChaChaRng
from .tree import TreeLayout, construct, verify_clique_tree
from .solver import (
    GlobalOptima,
    SolverConfig,
    calculate_global_optima,
)
from .codomain import (
    CodomainFunction,
    CodomainKind,
    generate_codomain,
    read_codomain_file,
    write_codomain,
)
from .landscape import CliqueTree
from .problem_io import (
    Problem,
    read_problem,
    write_problem,
    load_clique_tree,
    get_clique_tree_from_codomain_file,
)
from .configuration import ConfigurationParameters, get_rng

__version__ = "0.1.0"

__all__ = [
    # Errors
    'LandscapeError',
    'ParameterError',
    'ParseError',
    'TreeInvariantError',
    'OptimaLimitError',
    # Contract
    'InputParameters',
    'SolutionFit',
    'MAX_CLIQUE_SIZE',
    # Comparisons
    'FITNESS_EPSILON',
    'is_better_fitness',
    'is_worse_fitness',
    'is_equal_fitness',
    'is_better_or_equal_fitness',
    'is_better_solutionfit',
    'is_worse_solutionfit',
    'is_equal_solutionfit',
    'is_better_or_equal_solutionfit',
    # Sampling
    'ChaChaRng',
    # Tree
    'TreeLayout',
    'construct',
    'verify_clique_tree',
    # Solver
    'GlobalOptima',
    'SolverConfig',
    'calculate_global_optima',
    # Codomain
    'CodomainFunction',
    'CodomainKind',
    'generate_codomain',
    'read_codomain_file',
    'write_codomain',
    # Landscape
    'CliqueTree',
    'Problem',
    'read_problem',
    'write_problem',
    'load_clique_tree',
    'get_clique_tree_from_codomain_file',
    'ConfigurationParameters',
    'get_rng',
]
