"""
Codomain Value Files

Format:
- line 1: codomain function display form (optional, see has_function_line)
- line 2: M k o b
- then M * 2^k values, one per line, clique-major then index-major

Values are written in shortest round-trip decimal form, so reading a
written file reproduces the identical table.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union
import numpy as np

from ..contract import InputParameters, validate_codomain
from ..errors import ParseError
from .functions import CodomainFunction, format_float


PathLike = Union[str, Path]


def format_codomain(
    input_parameters: InputParameters,
    codomain_function: CodomainFunction,
    codomain_values: np.ndarray
) -> str:
    values = validate_codomain(input_parameters, codomain_values)
    lines = [str(codomain_function), input_parameters.to_line()]
    lines.extend(format_float(value) for value in values.ravel().tolist())
    return "\n".join(lines) + "\n"


def write_codomain(
    file_path: PathLike,
    input_parameters: InputParameters,
    codomain_function: CodomainFunction,
    codomain_values: np.ndarray
) -> None:
    """Write a codomain file, replacing any existing file."""
    text = format_codomain(input_parameters, codomain_function, codomain_values)
    with open(file_path, 'w') as f:
        f.write(text)


def parse_codomain_values(
    lines: Iterator[Tuple[int, str]],
    input_parameters: InputParameters,
    path: Optional[PathLike] = None
) -> np.ndarray:
    """
    Read M * 2^k values from numbered lines.

    Args:
        lines: Iterator of (line number, line) pairs positioned at the first value
        input_parameters: Parameters fixing the number of values
        path: Source file, for error messages

    Returns:
        Array of shape (M, 2^k)
    """
    size = input_parameters.clique_table_size
    values = np.empty((input_parameters.m, size), dtype=np.float64)
    for clique in range(input_parameters.m):
        for index in range(size):
            entry = next(lines, None)
            if entry is None:
                raise ParseError(
                    "codomain file does not contain enough entries",
                    field=f"codomain[{clique}][{index}]", path=path
                )
            line_number, line = entry
            try:
                values[clique, index] = float(line)
            except ValueError:
                raise ParseError(
                    f"could not parse {line!r} as a float",
                    field=f"codomain[{clique}][{index}]",
                    line_number=line_number, path=path
                ) from None
    return values


def parse_codomain(
    text: str,
    has_function_line: bool = True,
    path: Optional[PathLike] = None
) -> Tuple[CodomainFunction, InputParameters, np.ndarray]:
    """
    Parse the contents of a codomain file.

    Returns:
        Tuple of (codomain function, input parameters, values); the function
        is Unknown when the text has no function line
    """
    lines = enumerate(text.splitlines(), start=1)

    if has_function_line:
        entry = next(lines, None)
        if entry is None:
            raise ParseError(
                "input file does not contain enough entries",
                field="codomain function", path=path
            )
        codomain_function = CodomainFunction.parse(entry[1])
    else:
        codomain_function = CodomainFunction.unknown()

    entry = next(lines, None)
    if entry is None:
        input_parameters = InputParameters.from_line(None, path=path)
    else:
        input_parameters = InputParameters.from_line(entry[1], line_number=entry[0], path=path)

    values = parse_codomain_values(lines, input_parameters, path=path)
    return codomain_function, input_parameters, values


def read_codomain_file(
    file_path: PathLike,
    has_function_line: bool = True
) -> Tuple[CodomainFunction, InputParameters, np.ndarray]:
    """Read a codomain file; see parse_codomain."""
    with open(file_path, 'r') as f:
        text = f.read()
    return parse_codomain(text, has_function_line=has_function_line, path=file_path)


def read_codomain(
    file_path: PathLike,
    input_parameters: InputParameters,
    skip_number_lines: int = 2
) -> np.ndarray:
    """Read only the values of a codomain file, skipping its header lines."""
    with open(file_path, 'r') as f:
        text = f.read()
    lines = enumerate(text.splitlines(), start=1)
    for _ in range(skip_number_lines):
        next(lines, None)
    return parse_codomain_values(lines, input_parameters, path=file_path)
