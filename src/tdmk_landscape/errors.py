"""
Error Types

Every failure raised by the package derives from LandscapeError:

- ParameterError: precondition violations, rejected before any computation
- ParseError: malformed text input (non-numeric or missing tokens)
- TreeInvariantError: a corrupted clique tree discovered at runtime
- OptimaLimitError: the set of co-optimal strings outgrew its cap

I/O errors from the standard library propagate unchanged.
"""

from typing import Optional, Union
from pathlib import Path


class LandscapeError(Exception):
    """Base class for all TD Mk Landscape errors."""


class ParameterError(LandscapeError, ValueError):
    """Invalid parameters (M, k, o, b), table shapes or codomain choices."""


class ParseError(LandscapeError, ValueError):
    """
    A token in a text input could not be read.

    Attributes:
        field: Name of the field that was being read
        line_number: 1-based line number in the input, if known
        path: File the input came from, if any
    """

    def __init__(
        self,
        message: str,
        field: str,
        line_number: Optional[int] = None,
        path: Optional[Union[str, Path]] = None
    ):
        self.field = field
        self.line_number = line_number
        self.path = path

        location = ""
        if path is not None:
            location += f"{path}"
        if line_number is not None:
            location += f":{line_number}" if location else f"line {line_number}"
        prefix = f"{location}: " if location else ""
        super().__init__(f"{prefix}{message} (field: {field})")


class TreeInvariantError(LandscapeError, RuntimeError):
    """The clique tree violates a structural invariant."""


class OptimaLimitError(LandscapeError, RuntimeError):
    """Expanding tied optima would exceed the configured maximum."""

    def __init__(self, limit: int, required: int):
        self.limit = limit
        self.required = required
        super().__init__(
            f"number of global optima ({required}) exceeds max_optima ({limit})"
        )
