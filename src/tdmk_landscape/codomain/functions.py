"""
Codomain Functions

The subfunction value generators are a tagged variant: a CodomainKind plus
the single parameter some kinds carry (q for NK-q, p for NK-p, p_deceptive
for the random/deceptive-trap mixture).

Text forms:
- display form, used on the first line of codomain files: "nk-q 4"
- io form, used in file names: "nk-q-4"
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union
import numpy as np

from ..errors import ParameterError, ParseError


class CodomainKind(Enum):
    """Available codomain generators."""
    RANDOM = "random"
    TRAP = "trap"
    DECEPTIVE_TRAP = "deceptive-trap"
    NK_Q = "nk-q"
    NK_P = "nk-p"
    RANDOM_DECEPTIVE_TRAP = "random-deceptive-trap"
    UNKNOWN = "unknown"


_PARAMETER_NAMES = {
    CodomainKind.NK_Q: "q",
    CodomainKind.NK_P: "p",
    CodomainKind.RANDOM_DECEPTIVE_TRAP: "p_deceptive",
}


def format_float(value: float) -> str:
    """
    Shortest round-trip decimal text of a float, without exponent.

    Integral values have no fractional part: 1.0 -> "1", 0.9 -> "0.9".
    """
    return np.format_float_positional(float(value), unique=True, trim='-')


@dataclass(frozen=True)
class CodomainFunction:
    """
    A codomain generator with its parameter.

    Attributes:
        kind: Generator kind
        parameter: q (int) for NK-q, p for NK-p, p_deceptive for the mixture
    """
    kind: CodomainKind
    parameter: Optional[Union[int, float]] = None

    def __post_init__(self):
        if self.kind in _PARAMETER_NAMES:
            if self.parameter is None:
                raise ParameterError(
                    f"{self.kind.value} requires parameter {_PARAMETER_NAMES[self.kind]}"
                )
            if self.kind is CodomainKind.NK_Q:
                q = int(self.parameter)
                if q != self.parameter or q < 2:
                    raise ParameterError(f"nk-q requires an integer q >= 2, got {self.parameter}")
                object.__setattr__(self, "parameter", q)
            else:
                p = float(self.parameter)
                if not 0.0 <= p <= 1.0:
                    raise ParameterError(
                        f"{self.kind.value} requires {_PARAMETER_NAMES[self.kind]} in [0, 1], got {p}"
                    )
                object.__setattr__(self, "parameter", p)
        elif self.parameter is not None:
            raise ParameterError(f"{self.kind.value} takes no parameter")

    @classmethod
    def random(cls) -> 'CodomainFunction':
        return cls(CodomainKind.RANDOM)

    @classmethod
    def trap(cls) -> 'CodomainFunction':
        return cls(CodomainKind.TRAP)

    @classmethod
    def deceptive_trap(cls) -> 'CodomainFunction':
        return cls(CodomainKind.DECEPTIVE_TRAP)

    @classmethod
    def nk_q(cls, q: int) -> 'CodomainFunction':
        return cls(CodomainKind.NK_Q, q)

    @classmethod
    def nk_p(cls, p: float) -> 'CodomainFunction':
        return cls(CodomainKind.NK_P, p)

    @classmethod
    def random_deceptive_trap(cls, p_deceptive: float) -> 'CodomainFunction':
        return cls(CodomainKind.RANDOM_DECEPTIVE_TRAP, p_deceptive)

    @classmethod
    def unknown(cls) -> 'CodomainFunction':
        return cls(CodomainKind.UNKNOWN)

    def _parameter_text(self) -> str:
        if self.kind is CodomainKind.NK_Q:
            return str(self.parameter)
        return format_float(self.parameter)

    def __str__(self) -> str:
        if self.parameter is None:
            return self.kind.value
        return f"{self.kind.value} {self._parameter_text()}"

    def to_io_string(self) -> str:
        if self.parameter is None:
            return self.kind.value
        return f"{self.kind.value}-{self._parameter_text()}"

    @classmethod
    def from_tokens(cls, tokens: Sequence[str]) -> 'CodomainFunction':
        """
        Parse a codomain function from its name and optional parameter.

        Raises:
            ParameterError: Unknown name or wrong number of tokens
            ParseError: Parameter is not a number
        """
        tokens = [token for token in tokens if token]
        if not tokens:
            raise ParameterError("no codomain function given")

        try:
            kind = CodomainKind(tokens[0])
        except ValueError:
            names = ", ".join(k.value for k in CodomainKind)
            raise ParameterError(
                f"unknown codomain function {tokens[0]!r} (available: {names})"
            ) from None

        expected = 2 if kind in _PARAMETER_NAMES else 1
        if len(tokens) != expected:
            raise ParameterError(
                f"{kind.value} expects {expected - 1} parameter(s), got {len(tokens) - 1}"
            )
        if expected == 1:
            return cls(kind)

        field = _PARAMETER_NAMES[kind]
        try:
            parameter = int(tokens[1]) if kind is CodomainKind.NK_Q else float(tokens[1])
        except ValueError:
            raise ParseError(
                f"could not parse {tokens[1]!r} as a number", field=field
            ) from None
        return cls(kind, parameter)

    @classmethod
    def parse(cls, line: str) -> 'CodomainFunction':
        """Parse the display form, e.g. "nk-p 0.5"."""
        return cls.from_tokens(line.strip().split(' '))
