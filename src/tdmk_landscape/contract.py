"""
Landscape Contract Definition

Defines the parameters of a TD Mk Landscape:
- M: number of cliques (subfunctions)
- k: size of each clique
- o: number of variables shared between a clique and its parent
- b: branching factor of the clique tree

Also defines SolutionFit, a candidate solution paired with its fitness.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union
from pathlib import Path
import numpy as np

from .errors import ParameterError, ParseError


MAX_CLIQUE_SIZE = 31


@dataclass(frozen=True)
class InputParameters:
    """
    Input parameters (M, k, o, b) of a TD Mk Landscape.

    Attributes:
        m: Number of cliques, at least 1
        k: Clique size, 1 <= k < 32 so that 2^k fits a native integer
        o: Separator size, 0 <= o < k
        b: Branching factor, at least 1 (ignored when o == 0)
    """
    m: int
    k: int
    o: int
    b: int

    def __post_init__(self):
        for name in ("m", "k", "o", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ParameterError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if self.m < 1:
            raise ParameterError(f"M must be at least 1, got {self.m}")
        if not 1 <= self.k <= MAX_CLIQUE_SIZE:
            raise ParameterError(
                f"k must be between 1 and {MAX_CLIQUE_SIZE}, got {self.k}"
            )
        if not 0 <= self.o < self.k:
            raise ParameterError(
                f"o must satisfy 0 <= o < k (k={self.k}), got {self.o}"
            )
        if self.b < 1:
            raise ParameterError(f"b must be at least 1, got {self.b}")

    @property
    def problem_size(self) -> int:
        """Total number of variables n = (M - 1)(k - o) + k."""
        return (self.m - 1) * (self.k - self.o) + self.k

    @property
    def is_separable(self) -> bool:
        return self.o == 0

    @property
    def branching(self) -> int:
        """Branching factor used for the tree; a separable landscape is a chain of roots."""
        return 1 if self.o == 0 else self.b

    @property
    def clique_table_size(self) -> int:
        return 1 << self.k

    def to_line(self) -> str:
        return f"{self.m} {self.k} {self.o} {self.b}"

    @classmethod
    def from_line(
        cls,
        line: Optional[str],
        line_number: Optional[int] = None,
        path: Optional[Union[str, Path]] = None
    ) -> 'InputParameters':
        """
        Parse a `M k o b` line.

        Args:
            line: The text line (None when the input ended early)
            line_number: Line number, for error messages
            path: Source file, for error messages

        Returns:
            InputParameters

        Raises:
            ParseError: If the line is missing, has the wrong token count or
                a token is not an unsigned integer
            ParameterError: If the parsed values are out of range
        """
        if line is None:
            raise ParseError(
                "input does not contain enough entries",
                field="M k o b", line_number=line_number, path=path
            )
        tokens = line.split(' ')
        if len(tokens) != 4:
            raise ParseError(
                f"expected 4 input parameters, got {len(tokens)}",
                field="M k o b", line_number=line_number, path=path
            )

        values = []
        for name, token in zip(("M", "k", "o", "b"), tokens):
            values.append(_parse_unsigned(token, name, line_number, path))
        return cls(*values)

    @classmethod
    def from_sequence(cls, values: Sequence[int]) -> 'InputParameters':
        """Create from an (m, k, o, b) sequence."""
        if len(values) != 4:
            raise ParameterError(f"expected 4 input parameters, got {len(values)}")
        return cls(*values)


def _parse_unsigned(
    token: str,
    field: str,
    line_number: Optional[int],
    path: Optional[Union[str, Path]]
) -> int:
    try:
        value = int(token)
    except ValueError:
        value = -1
    if value < 0:
        raise ParseError(
            f"could not parse {token!r} as an unsigned integer",
            field=field, line_number=line_number, path=path
        )
    return value


@dataclass
class SolutionFit:
    """
    A solution together with its fitness.

    Attributes:
        solution: Bit string as an array of 0/1 values, one per variable
        fitness: Fitness of the solution
    """
    solution: np.ndarray
    fitness: float

    def __post_init__(self):
        self.solution = np.asarray(self.solution, dtype=np.uint8)
        self.fitness = float(self.fitness)

    def to_bit_string(self) -> str:
        return bits_to_string(self.solution)

    def copy(self) -> 'SolutionFit':
        return SolutionFit(self.solution.copy(), self.fitness)


def validate_codomain(input_parameters: InputParameters, codomain_values: Any) -> np.ndarray:
    """
    Convert codomain values to a float64 array of shape (M, 2^k).

    Raises:
        ParameterError: If the shape does not match the parameters
    """
    values = np.asarray(codomain_values, dtype=np.float64)
    expected = (input_parameters.m, input_parameters.clique_table_size)
    if values.shape != expected:
        raise ParameterError(
            f"codomain must have shape {expected}, got {values.shape}"
        )
    return values


def index_to_bits(index: int, length: int) -> List[int]:
    """Bits of `index`, most significant first."""
    return [(index >> (length - 1 - position)) & 1 for position in range(length)]


def bits_to_index(bits: Sequence[int]) -> int:
    """Inverse of index_to_bits: the first bit is the most significant."""
    index = 0
    for bit in bits:
        index = (index << 1) | int(bit)
    return index


def bits_to_string(bits: Sequence[int]) -> str:
    """Render a bit array as a string of '0'/'1' characters."""
    return "".join("1" if bit else "0" for bit in bits)


def string_to_bits(text: str) -> List[int]:
    """Parse a string of '0'/'1' characters into a list of bits."""
    bits = []
    for position, char in enumerate(text):
        if char not in "01":
            raise ParseError(
                f"unexpected character {char!r} at position {position}",
                field="bit string"
            )
        bits.append(1 if char == "1" else 0)
    return bits
