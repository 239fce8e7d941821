"""
Tests for Tie-Safe Fitness Comparisons
"""

import numpy as np
import pytest
from tdmk_landscape import (
    SolutionFit,
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
from tdmk_landscape.tie_safe import TieTracker, maximizing_indices


class TestFitnessComparisons:
    """Test epsilon comparisons on plain fitness values."""

    def test_epsilon_value(self):
        """Test the tolerance constant."""
        assert FITNESS_EPSILON == 1e-10

    def test_clearly_better(self):
        """Test values far apart."""
        assert is_better_fitness(1.0, 0.9)
        assert not is_better_fitness(0.9, 1.0)
        assert is_worse_fitness(0.9, 1.0)
        assert not is_equal_fitness(1.0, 0.9)

    def test_within_epsilon_is_equal(self):
        """Test that differences below epsilon are ties."""
        assert is_equal_fitness(1.0, 1.0 + 5e-11)
        assert not is_better_fitness(1.0 + 5e-11, 1.0)
        assert not is_worse_fitness(1.0, 1.0 + 5e-11)

    def test_better_or_equal(self):
        """Test better-or-equal accepts ties from both sides."""
        assert is_better_or_equal_fitness(1.0, 1.0)
        assert is_better_or_equal_fitness(1.0 - 5e-11, 1.0)
        assert is_better_or_equal_fitness(2.0, 1.0)
        assert not is_better_or_equal_fitness(0.5, 1.0)

    def test_point_three_sums(self):
        """Test that rounding noise from summation is a tie."""
        assert is_equal_fitness(0.1 + 0.2, 0.3)
        assert not is_better_fitness(0.1 + 0.2, 0.3)


class TestSolutionFitComparisons:
    """Test comparisons on solution/fitness pairs."""

    def test_better_and_worse(self):
        """Test the fitness-only comparisons."""
        a = SolutionFit([1, 1], 2.0)
        b = SolutionFit([0, 0], 1.0)
        assert is_better_solutionfit(a, b)
        assert is_worse_solutionfit(b, a)
        assert is_better_or_equal_solutionfit(a, b)
        assert not is_better_or_equal_solutionfit(b, a)

    def test_identical_fitness_is_equal(self):
        """Test that exact equal fitness is equal regardless of strings."""
        a = SolutionFit([1, 0], 1.5)
        b = SolutionFit([0, 1], 1.5)
        assert is_equal_solutionfit(a, b)

    def test_near_fitness_needs_same_string(self):
        """Test that near-equal fitness also requires equal strings."""
        a = SolutionFit([1, 0], 1.5)
        b = SolutionFit([1, 0], 1.5 + 5e-11)
        c = SolutionFit([0, 1], 1.5 + 5e-11)
        assert is_equal_solutionfit(a, b)
        assert not is_equal_solutionfit(a, c)


class TestMaximizingIndices:
    """Test the tied-maximum scan."""

    def test_single_maximum(self):
        """Test a unique maximum."""
        assert maximizing_indices([0.1, 0.7, 0.3]) == (0.7, [1])

    def test_ties(self):
        """Test that every tied index is returned in order."""
        assert maximizing_indices([0.5, 1.0, 1.0, 0.2, 1.0]) == (1.0, [1, 2, 4])

    def test_near_tie_keeps_running_maximum(self):
        """Test that a near tie is added without moving the maximum."""
        highest, indices = maximizing_indices([1.0, 1.0 + 5e-11])
        assert highest == 1.0
        assert indices == [0, 1]

    def test_better_restarts(self):
        """Test that a strictly better value resets the list."""
        assert maximizing_indices([1.0, 1.0, 2.0]) == (2.0, [2])

    def test_empty(self):
        """Test that an empty input is an error."""
        with pytest.raises(ValueError):
            maximizing_indices([])

    def test_numpy_input(self):
        """Test that numpy rows are accepted."""
        highest, indices = maximizing_indices(np.array([0.0, 3.0, 3.0]))
        assert highest == 3.0
        assert indices == [1, 2]


class TestTieTracker:
    """Test the running maximum used by the tree elimination."""

    def test_first_offer_always_recorded(self):
        """Test that the first candidate is recorded even when negative."""
        tracker = TieTracker()
        tracker.offer(0, -5.0)
        assert tracker.candidates == [0]
        assert tracker.best_score == -5.0

    def test_better_clears(self):
        """Test that a strictly better candidate replaces the list."""
        tracker = TieTracker()
        tracker.offer(0, 1.0)
        tracker.offer(1, 2.0)
        assert tracker.candidates == [1]
        assert tracker.best_score == 2.0

    def test_ties_are_kept(self):
        """Test that equal candidates are appended in offer order."""
        tracker = TieTracker()
        tracker.offer(0, 1.0)
        tracker.offer(1, 2.0)
        tracker.offer(2, 2.0)
        tracker.offer(3, 1.5)
        assert tracker.candidates == [1, 2]

    def test_best_score_is_first_entry(self):
        """Test that the lookup score stays at the first tied entry."""
        tracker = TieTracker()
        tracker.offer(0, 1.0)
        tracker.offer(1, 1.0 + 5e-11)
        assert tracker.candidates == [0, 1]
        assert tracker.best_score == 1.0
