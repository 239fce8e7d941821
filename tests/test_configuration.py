"""
Tests for Configuration Ranges
"""

import pytest
from tdmk_landscape import (
    ChaChaRng,
    CodomainFunction,
    ConfigurationParameters,
    InputParameters,
    ParameterError,
    ParseError,
    get_rng,
)
from tdmk_landscape.configuration import (
    get_m_for_max_problem_size,
    get_m_for_min_problem_size,
)


class TestConfigurationParsing:
    """Test configuration file parsing."""

    def test_single_tuple(self):
        """Test a configuration with one parameter tuple."""
        configuration = ConfigurationParameters.parse("M 5 6\nk 3 4\no 1 2\nb 2 3\ndeceptive-trap\n")
        assert list(configuration) == [InputParameters(5, 3, 1, 2)]
        assert configuration.codomain_function == CodomainFunction.deceptive_trap()

    def test_codomain_function_with_parameter(self):
        """Test the codomain line with a parameter."""
        configuration = ConfigurationParameters.parse("M 2 3\nk 3 4\no 1 2\nb 1 2\nnk-q 4\n")
        assert configuration.codomain_function == CodomainFunction.nk_q(4)

    def test_iteration_order(self):
        """Test that b varies fastest and M slowest."""
        configuration = ConfigurationParameters.parse("M 2 4\nk 3 4\no 1 3\nb 1 3\nrandom\n")
        tuples = [(p.m, p.k, p.o, p.b) for p in configuration]
        assert tuples == [
            (2, 3, 1, 1), (2, 3, 1, 2), (2, 3, 2, 1), (2, 3, 2, 2),
            (3, 3, 1, 1), (3, 3, 1, 2), (3, 3, 2, 1), (3, 3, 2, 2),
        ]
        assert len(configuration) == 8

    def test_problem_size_ranges(self):
        """Test conversion of an N range to an M range."""
        configuration = ConfigurationParameters.parse("N 10 20\nk 4 5\no 2 3\nb 2 3\nrandom\n")
        assert (configuration.m_begin, configuration.m_end) == (4, 9)
        sizes = [p.problem_size for p in configuration]
        assert min(sizes) == 10
        assert max(sizes) < 20

    def test_problem_size_needs_fixed_k_and_o(self):
        """Test that N ranges require a single k and o."""
        with pytest.raises(ParameterError):
            ConfigurationParameters.parse("N 10 20\nk 3 5\no 1 2\nb 2 3\nrandom\n")

    def test_unknown_range_letter(self):
        """Test a first line that is neither M nor N."""
        with pytest.raises(ParameterError):
            ConfigurationParameters.parse("X 1 2\nk 3 4\no 1 2\nb 2 3\nrandom\n")

    def test_empty_range(self):
        """Test that begin must be below end."""
        with pytest.raises(ParameterError):
            ConfigurationParameters.parse("M 5 5\nk 3 4\no 1 2\nb 2 3\nrandom\n")

    def test_missing_lines(self):
        """Test a file without a codomain line."""
        with pytest.raises(ParseError):
            ConfigurationParameters.parse("M 5 6\nk 3 4\no 1 2\nb 2 3\n")

    def test_non_numeric_bound(self):
        """Test a bound that is not an integer."""
        with pytest.raises(ParseError) as excinfo:
            ConfigurationParameters.parse("M 5 6\nk three 4\no 1 2\nb 2 3\nrandom\n")
        assert excinfo.value.line_number == 2

    def test_invalid_tuple_while_iterating(self):
        """Test that out-of-range tuples are reported when reached."""
        configuration = ConfigurationParameters.parse("M 2 3\nk 2 3\no 1 3\nb 1 2\nrandom\n")
        iterator = iter(configuration)
        assert next(iterator) == InputParameters(2, 2, 1, 1)
        with pytest.raises(ParameterError):
            next(iterator)

    def test_from_file(self, tmp_path):
        """Test reading from disk."""
        path = tmp_path / "config.txt"
        path.write_text("M 5 6\nk 3 4\no 1 2\nb 2 3\ndeceptive-trap\n")
        assert len(ConfigurationParameters.from_file(path)) == 1


class TestProblemSizeConversion:
    """Test the M bounds for problem size ranges."""

    def test_min_bound(self):
        """Test the smallest M reaching a problem size."""
        assert get_m_for_min_problem_size(10, 4, 2) == 4
        assert get_m_for_min_problem_size(11, 4, 2) == 5
        assert get_m_for_min_problem_size(1, 3, 1) == 1

    def test_max_bound(self):
        """Test the exclusive M bound."""
        assert get_m_for_max_problem_size(20, 4, 2) == 9
        assert get_m_for_max_problem_size(3, 3, 1) == 2


class TestGetRng:
    """Test bit source creation."""

    def test_seeded(self):
        """Test that a seed gives the seeded stream."""
        assert get_rng(5).next_u64() == ChaChaRng.seed_from_u64(5).next_u64()

    def test_unseeded(self):
        """Test that no seed still gives a working stream."""
        assert isinstance(get_rng(None), ChaChaRng)
