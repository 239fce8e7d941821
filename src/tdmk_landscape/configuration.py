"""
Configuration Ranges

A configuration file describes a grid of landscape parameters:

    M 5 6           (or: N <begin> <end> for problem sizes)
    k 3 4
    o 1 2
    b 2 3
    deceptive-trap

Ranges are half-open. Iteration varies b fastest, then o, then k, then M.
"""

import itertools
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .codomain import CodomainFunction
from .contract import InputParameters
from .errors import ParameterError, ParseError
from .sampling import ChaChaRng

logger = logging.getLogger(__name__)


PathLike = Union[str, Path]


def get_m_for_min_problem_size(min_problem_size: int, k: int, o: int) -> int:
    """Smallest M whose problem size reaches min_problem_size (at least 1)."""
    return max(math.ceil((min_problem_size + (k - o) - k) / (k - o)), 1)


def get_m_for_max_problem_size(max_problem_size: int, k: int, o: int) -> int:
    """Exclusive M bound for an exclusive problem size bound (at least 2)."""
    return max(math.ceil((max_problem_size + (k - o) - k) / (k - o)), 2)


def get_rng(seed: Optional[int] = None) -> ChaChaRng:
    """Seeded bit source, or one seeded from OS entropy when seed is None."""
    return ChaChaRng.from_optional_seed(seed)


@dataclass(frozen=True)
class ConfigurationParameters:
    """
    Half-open ranges of landscape parameters plus the codomain function.
    """
    m_begin: int
    m_end: int
    k_begin: int
    k_end: int
    o_begin: int
    o_end: int
    b_begin: int
    b_end: int
    codomain_function: CodomainFunction

    def __post_init__(self):
        for name in ("m", "k", "o", "b"):
            begin = getattr(self, f"{name}_begin")
            end = getattr(self, f"{name}_end")
            if begin >= end:
                raise ParameterError(
                    f"empty {name} range: begin {begin} must be below end {end}"
                )

    def __iter__(self) -> Iterator[InputParameters]:
        for m, k, o, b in itertools.product(
            range(self.m_begin, self.m_end),
            range(self.k_begin, self.k_end),
            range(self.o_begin, self.o_end),
            range(self.b_begin, self.b_end),
        ):
            yield InputParameters(m, k, o, b)

    def __len__(self) -> int:
        return (
            (self.m_end - self.m_begin)
            * (self.k_end - self.k_begin)
            * (self.o_end - self.o_begin)
            * (self.b_end - self.b_begin)
        )

    @classmethod
    def parse(cls, text: str, path: Optional[PathLike] = None) -> 'ConfigurationParameters':
        """
        Parse the contents of a configuration file.

        Raises:
            ParseError: Missing lines or non-numeric bounds
            ParameterError: Unknown range letter, empty ranges, or an N range
                combined with several k or o values
        """
        lines = text.splitlines()
        if len(lines) < 5:
            raise ParseError(
                f"configuration needs 5 lines, got {len(lines)}",
                field="configuration", path=path
            )

        ranges: List[Tuple[str, int, int]] = []
        for line_number, line in enumerate(lines[:4], start=1):
            tokens = line.split()
            if len(tokens) != 3:
                raise ParseError(
                    f"expected '<name> <begin> <end>', got {line!r}",
                    field="range", line_number=line_number, path=path
                )
            name = tokens[0]
            try:
                begin, end = int(tokens[1]), int(tokens[2])
            except ValueError:
                raise ParseError(
                    f"could not parse bounds in {line!r}",
                    field=name, line_number=line_number, path=path
                ) from None
            ranges.append((name, begin, end))

        (m_or_n, mn_begin, mn_end), (_, k_begin, k_end), (_, o_begin, o_end), (_, b_begin, b_end) = ranges

        if m_or_n == "M":
            m_begin, m_end = mn_begin, mn_end
        elif m_or_n == "N":
            if k_end - k_begin > 1 or o_end - o_begin > 1:
                raise ParameterError(
                    "can not use problem size in configuration when k and o are not one fixed value"
                )
            if k_begin <= o_begin:
                raise ParameterError(f"o must be below k, got k={k_begin} o={o_begin}")
            m_begin = get_m_for_min_problem_size(mn_begin, k_begin, o_begin)
            m_end = get_m_for_max_problem_size(mn_end, k_begin, o_begin)
            logger.debug("Problem sizes [%d, %d) map to M range [%d, %d)", mn_begin, mn_end, m_begin, m_end)
        else:
            raise ParameterError(f"first letter in configuration not recognized; not M or N: {m_or_n!r}")

        codomain_function = CodomainFunction.parse(lines[4])

        return cls(
            m_begin, m_end, k_begin, k_end, o_begin, o_end, b_begin, b_end, codomain_function
        )

    @classmethod
    def from_file(cls, input_file_path: PathLike) -> 'ConfigurationParameters':
        with open(input_file_path, 'r') as f:
            text = f.read()
        return cls.parse(text, path=input_file_path)
