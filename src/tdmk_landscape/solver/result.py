"""
Solver Result Types

GlobalOptima holds the common optimum score and every tied optimal
bit string. SolverConfig carries the solver's options.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence
import numpy as np

from ..contract import bits_to_string
from ..errors import ParameterError


@dataclass
class SolverConfig:
    """
    Configuration for the global optimum solver.

    Attributes:
        max_optima: Maximum number of co-optimal strings to materialize;
            None leaves the expansion unbounded
    """
    max_optima: Optional[int] = None

    def __post_init__(self):
        if self.max_optima is not None and self.max_optima < 1:
            raise ParameterError(f"max_optima must be at least 1, got {self.max_optima}")


@dataclass
class GlobalOptima:
    """
    The global optimum score with all tied optimal strings.

    Attributes:
        score: Global optimum score
        strings: Array of shape (count, n) of 0/1 values
    """
    score: float
    strings: np.ndarray
    _keys: FrozenSet[bytes] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        self.score = float(self.score)
        self.strings = np.asarray(self.strings, dtype=np.uint8)
        if self.strings.ndim != 2:
            self.strings = self.strings.reshape(len(self.strings), -1)
        self._keys = frozenset(row.tobytes() for row in self.strings)

    @property
    def count(self) -> int:
        return len(self.strings)

    def contains(self, solution: Sequence[int]) -> bool:
        """Whether `solution` is one of the optimal strings."""
        return np.asarray(solution, dtype=np.uint8).tobytes() in self._keys

    def to_bit_strings(self) -> List[str]:
        return [bits_to_string(row) for row in self.strings]
