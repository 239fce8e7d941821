"""
Tests for Landscape Parameters and Solution Types
"""

import numpy as np
import pytest
from tdmk_landscape import (
    InputParameters,
    SolutionFit,
    ParameterError,
    ParseError,
    LandscapeError,
)
from tdmk_landscape.contract import (
    validate_codomain,
    index_to_bits,
    bits_to_index,
    bits_to_string,
    string_to_bits,
)


class TestInputParameters:
    """Test (M, k, o, b) validation and derived sizes."""

    def test_problem_size(self):
        """Test n = (M - 1)(k - o) + k."""
        assert InputParameters(5, 3, 1, 2).problem_size == 11
        assert InputParameters(1, 4, 0, 1).problem_size == 4
        assert InputParameters(3, 4, 0, 1).problem_size == 12

    def test_separable_forces_branching(self):
        """Test that b is replaced by 1 when o == 0."""
        params = InputParameters(4, 3, 0, 3)
        assert params.is_separable
        assert params.branching == 1
        assert params.b == 3

    def test_clique_table_size(self):
        """Test 2^k entries per table."""
        assert InputParameters(2, 5, 2, 2).clique_table_size == 32

    @pytest.mark.parametrize("m,k,o,b", [
        (0, 3, 1, 2),
        (5, 0, 0, 2),
        (5, 32, 1, 2),
        (5, 3, 3, 2),
        (5, 3, -1, 2),
        (5, 3, 1, 0),
    ])
    def test_invalid_parameters(self, m, k, o, b):
        """Test that out-of-range parameters are rejected."""
        with pytest.raises(ParameterError):
            InputParameters(m, k, o, b)

    def test_non_integer_rejected(self):
        """Test that floats and booleans are not accepted."""
        with pytest.raises(ParameterError):
            InputParameters(5.0, 3, 1, 2)
        with pytest.raises(ParameterError):
            InputParameters(True, 3, 1, 2)

    def test_largest_clique_size(self):
        """Test k = 31 is the largest accepted clique size."""
        assert InputParameters(1, 31, 0, 1).clique_table_size == 1 << 31

    def test_parameter_error_is_value_error(self):
        """Test the error taxonomy."""
        with pytest.raises(ValueError):
            InputParameters(0, 3, 1, 2)
        with pytest.raises(LandscapeError):
            InputParameters(0, 3, 1, 2)


class TestInputParametersParsing:
    """Test parsing of the M k o b line."""

    def test_from_line(self):
        """Test a well-formed line."""
        assert InputParameters.from_line("5 3 1 2") == InputParameters(5, 3, 1, 2)

    def test_round_trip_line(self):
        """Test to_line and from_line agree."""
        params = InputParameters(7, 4, 2, 3)
        assert InputParameters.from_line(params.to_line()) == params

    def test_missing_line(self):
        """Test a missing line."""
        with pytest.raises(ParseError) as excinfo:
            InputParameters.from_line(None)
        assert "not contain enough entries" in str(excinfo.value)

    def test_wrong_token_count(self):
        """Test lines with too few or too many tokens."""
        with pytest.raises(ParseError):
            InputParameters.from_line("5 3 1")
        with pytest.raises(ParseError):
            InputParameters.from_line("5 3 1 2 7")

    def test_non_numeric_token(self):
        """Test that the failing field is reported."""
        with pytest.raises(ParseError) as excinfo:
            InputParameters.from_line("5 x 1 2", line_number=2, path="codomain.txt")
        error = excinfo.value
        assert error.field == "k"
        assert error.line_number == 2
        assert "codomain.txt:2" in str(error)

    def test_negative_token(self):
        """Test that negative values are parse errors."""
        with pytest.raises(ParseError):
            InputParameters.from_line("5 3 -1 2")

    def test_out_of_range_after_parsing(self):
        """Test that parsed values are still validated."""
        with pytest.raises(ParameterError):
            InputParameters.from_line("5 3 3 2")

    def test_from_sequence(self):
        """Test construction from a sequence."""
        assert InputParameters.from_sequence([2, 3, 1, 1]) == InputParameters(2, 3, 1, 1)
        with pytest.raises(ParameterError):
            InputParameters.from_sequence([2, 3, 1])


class TestBitHelpers:
    """Test bit string and index conversions."""

    def test_index_to_bits_msb_first(self):
        """Test that the first bit is the most significant."""
        assert index_to_bits(5, 3) == [1, 0, 1]
        assert index_to_bits(1, 4) == [0, 0, 0, 1]

    def test_bits_to_index(self):
        """Test the inverse conversion."""
        assert bits_to_index([1, 0, 1]) == 5
        assert bits_to_index([0, 0, 0, 1]) == 1

    def test_bits_to_string(self):
        """Test rendering of bit arrays."""
        assert bits_to_string(np.array([0, 1, 1, 0], dtype=np.uint8)) == "0110"

    def test_string_to_bits(self):
        """Test parsing of bit strings."""
        assert string_to_bits("00010111100") == [0, 0, 0, 1, 0, 1, 1, 1, 1, 0, 0]

    def test_string_to_bits_rejects_other_characters(self):
        """Test that non-binary characters are parse errors."""
        with pytest.raises(ParseError) as excinfo:
            string_to_bits("0120")
        assert excinfo.value.field == "bit string"


class TestSolutionFit:
    """Test the solution/fitness pair."""

    def test_conversion(self):
        """Test that solutions are stored as uint8 arrays."""
        solution_fit = SolutionFit([1, 0, 1], 2)
        assert solution_fit.solution.dtype == np.uint8
        assert isinstance(solution_fit.fitness, float)
        assert solution_fit.to_bit_string() == "101"

    def test_copy_is_independent(self):
        """Test that copies do not share the solution array."""
        original = SolutionFit([1, 0, 1], 2.0)
        copy = original.copy()
        copy.solution[0] = 0
        assert original.solution[0] == 1


class TestValidateCodomain:
    """Test codomain shape validation."""

    def test_valid_shape(self):
        """Test a matching table."""
        params = InputParameters(2, 2, 1, 1)
        values = validate_codomain(params, [[0.0, 1.0, 2.0, 3.0], [1.0, 1.0, 1.0, 1.0]])
        assert values.shape == (2, 4)
        assert values.dtype == np.float64

    def test_wrong_shape(self):
        """Test that a mismatched table is rejected."""
        params = InputParameters(2, 2, 1, 1)
        with pytest.raises(ParameterError):
            validate_codomain(params, np.zeros((2, 8)))
        with pytest.raises(ParameterError):
            validate_codomain(params, np.zeros((3, 4)))
