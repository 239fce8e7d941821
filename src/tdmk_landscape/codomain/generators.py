"""
Codomain Generators

Each generator fills M tables of 2^k values, indexed by the clique's local
assignment (first clique variable = most significant bit). Generators that
draw randomness consume the shared bit source in clique order.
"""

import logging
import math
from typing import Callable, Dict, List
import numpy as np

from ..contract import InputParameters, index_to_bits
from ..errors import ParameterError
from ..sampling import ChaChaRng, UniformFloat, UniformInt, random_bits, shuffle
from .functions import CodomainFunction, CodomainKind

logger = logging.getLogger(__name__)


TRAP_DECEPTIVENESS = 2.5


def _deceptive_trap_values(k: int, local_deceptor: List[int]) -> List[float]:
    """
    Deceptive trap table around a local deceptive attractor.

    The complement of the deceptor (distance k) is the local optimum with
    value 1.0; every other string scores 0.9 - d * (0.9 / k), d being its
    Hamming distance to the deceptor.
    """
    values = []
    for index in range(1 << k):
        distance = sum(
            1 for a, b in zip(local_deceptor, index_to_bits(index, k)) if a != b
        )
        if distance == k:
            values.append(1.0)
        else:
            values.append(0.9 - distance * (0.9 / k))
    return values


def generate_random(input_parameters: InputParameters, rng: ChaChaRng) -> np.ndarray:
    """Uniform [0, 1) values."""
    die = UniformFloat(0.0, 1.0)
    m, size = input_parameters.m, input_parameters.clique_table_size
    values = [[die.sample(rng) for _ in range(size)] for _ in range(m)]
    return np.array(values, dtype=np.float64)


def generate_trap(input_parameters: InputParameters, d: float = TRAP_DECEPTIVENESS) -> np.ndarray:
    """
    Trap function with deceptiveness d, the same table for every clique.

    The all-ones string scores k; any other string with u ones scores
    k - d - u * (k - d) / (k - 1).
    """
    k = input_parameters.k
    if k < 2:
        raise ParameterError("trap codomain requires k >= 2")
    multiplication_factor = (k - d) / (k - 1)

    clique_values = []
    for index in range(1 << k):
        ones = bin(index).count("1")
        if ones == k:
            clique_values.append(float(k))
        else:
            clique_values.append(k - d - multiplication_factor * ones)

    return np.tile(np.array(clique_values, dtype=np.float64), (input_parameters.m, 1))


def generate_trap_general(input_parameters: InputParameters, rng: ChaChaRng) -> np.ndarray:
    """Deceptive trap with a random local deceptor per clique."""
    k = input_parameters.k
    values = []
    for _ in range(input_parameters.m):
        local_deceptor = random_bits(rng, k)
        values.append(_deceptive_trap_values(k, local_deceptor))
    return np.array(values, dtype=np.float64)


def generate_random_trap(
    input_parameters: InputParameters,
    p_deceptive: float,
    rng: ChaChaRng
) -> np.ndarray:
    """
    Mixture of random and deceptive trap subfunctions.

    Per clique one uniform draw decides: above p_deceptive the clique is
    random, otherwise it is a deceptive trap.
    """
    die = UniformFloat(0.0, 1.0)
    k, size = input_parameters.k, input_parameters.clique_table_size

    values = []
    for _ in range(input_parameters.m):
        if die.sample(rng) > p_deceptive:
            values.append([die.sample(rng) for _ in range(size)])
        else:
            values.append(_deceptive_trap_values(k, random_bits(rng, k)))
    return np.array(values, dtype=np.float64)


def generate_nk_q(input_parameters: InputParameters, q: int, rng: ChaChaRng) -> np.ndarray:
    """Values drawn uniformly from {0, 1/(q-1), ..., 1}."""
    die = UniformInt(0, q)
    m, size = input_parameters.m, input_parameters.clique_table_size
    values = [[die.sample(rng) / (q - 1) for _ in range(size)] for _ in range(m)]
    return np.array(values, dtype=np.float64)


def generate_nk_p(input_parameters: InputParameters, p: float, rng: ChaChaRng) -> np.ndarray:
    """
    A fraction p of each clique's values is 0, the rest uniform [0, 1).

    The zero positions are the first round(p * 2^k) entries of an index
    list that is reshuffled (not reset) for every clique.
    """
    size = input_parameters.clique_table_size
    num_zeroes = int(math.floor(p * size + 0.5))
    die = UniformFloat(0.0, 1.0)

    clique_indices = list(range(size))
    values = []
    for _ in range(input_parameters.m):
        shuffle(rng, clique_indices)
        no_contribution = set(clique_indices[:num_zeroes])
        values.append([
            0.0 if index in no_contribution else die.sample(rng)
            for index in range(size)
        ])
    return np.array(values, dtype=np.float64)


def _generate_unknown(input_parameters: InputParameters, function: CodomainFunction, rng: ChaChaRng):
    raise ParameterError("cannot generate a codomain for an unknown codomain function")


GENERATORS: Dict[CodomainKind, Callable[[InputParameters, CodomainFunction, ChaChaRng], np.ndarray]] = {
    CodomainKind.RANDOM: lambda params, function, rng: generate_random(params, rng),
    CodomainKind.TRAP: lambda params, function, rng: generate_trap(params),
    CodomainKind.DECEPTIVE_TRAP: lambda params, function, rng: generate_trap_general(params, rng),
    CodomainKind.NK_Q: lambda params, function, rng: generate_nk_q(params, function.parameter, rng),
    CodomainKind.NK_P: lambda params, function, rng: generate_nk_p(params, function.parameter, rng),
    CodomainKind.RANDOM_DECEPTIVE_TRAP:
        lambda params, function, rng: generate_random_trap(params, function.parameter, rng),
    CodomainKind.UNKNOWN: _generate_unknown,
}


def generate_codomain(
    input_parameters: InputParameters,
    codomain_function: CodomainFunction,
    rng: ChaChaRng
) -> np.ndarray:
    """
    Generate the codomain tables for a landscape.

    Args:
        input_parameters: Parameters of the landscape
        codomain_function: Generator to use
        rng: Bit source, advanced in place

    Returns:
        Array of shape (M, 2^k)
    """
    logger.debug("Generating %s codomain for %s", codomain_function, input_parameters.to_line())
    return GENERATORS[codomain_function.kind](input_parameters, codomain_function, rng)
