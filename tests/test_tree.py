"""
Tests for Clique Tree Layout and Construction
"""

import pytest
from tdmk_landscape import (
    ChaChaRng,
    InputParameters,
    TreeLayout,
    construct,
    verify_clique_tree,
)


class TestTreeLayout:
    """Test the level-order b-ary layout."""

    def test_start_indices(self):
        """Test level starts sum_{i<l} b^i."""
        assert TreeLayout(m=7, b=2).start_indices == [0, 1, 3]
        assert TreeLayout(m=14, b=3).start_indices == [0, 1, 4, 13]
        assert TreeLayout(m=4, b=1).start_indices == [0, 1, 2, 3]

    def test_single_clique(self):
        """Test a tree with only a root."""
        layout = TreeLayout(m=1, b=2)
        assert layout.start_indices == [0]
        assert layout.num_parents == 0
        assert list(layout.children(0)) == []

    @pytest.mark.parametrize("m,b", [(2, 1), (5, 1), (5, 2), (7, 2), (8, 2), (10, 3), (13, 3), (20, 4)])
    def test_children_formula(self, m, b):
        """Test that children of i are 1 + b*i .. b*i + b, clipped at m."""
        layout = TreeLayout(m=m, b=b)
        for i in range(m):
            expected = list(range(min(1 + b * i, m), min(1 + b * i + b, m)))
            assert list(layout.children(i)) == expected

    @pytest.mark.parametrize("m,b", [(5, 2), (7, 2), (10, 3), (6, 1)])
    def test_parent_inverts_children(self, m, b):
        """Test parent(child) for every non-root clique."""
        layout = TreeLayout(m=m, b=b)
        for i in range(m):
            for child in layout.children(i):
                assert layout.parent(child) == i

    def test_root_has_no_parent(self):
        """Test the root."""
        with pytest.raises(ValueError):
            TreeLayout(m=3, b=2).parent(0)

    def test_num_parents(self):
        """Test ceil((M - 1) / b)."""
        assert TreeLayout(m=5, b=2).num_parents == 2
        assert TreeLayout(m=6, b=2).num_parents == 3
        assert TreeLayout(m=10, b=3).num_parents == 3
        assert TreeLayout(m=4, b=1).num_parents == 3

    def test_separable_layout_is_a_chain(self):
        """Test that o == 0 uses branching factor 1."""
        layout = TreeLayout.from_parameters(InputParameters(4, 3, 0, 3))
        assert layout.b == 1
        assert list(layout.children(0)) == [1]


class TestConstruct:
    """Test random clique tree construction."""

    @pytest.mark.parametrize("m,k,o,b", [
        (1, 3, 1, 2),
        (2, 2, 1, 1),
        (5, 3, 1, 2),
        (7, 4, 2, 2),
        (10, 5, 3, 3),
        (6, 3, 2, 1),
        (4, 3, 0, 2),
        (8, 1, 0, 1),
    ])
    def test_valid_structure(self, m, k, o, b):
        """Test that constructed trees satisfy every structural property."""
        params = InputParameters(m, k, o, b)
        cliques, separators = construct(params, ChaChaRng.seed_from_u64(123))
        valid, errors = verify_clique_tree(params, cliques, separators)
        assert valid, errors

    def test_root_is_first_permuted_block(self):
        """Test the root clique and its empty separator."""
        params = InputParameters(3, 3, 1, 2)
        cliques, separators = construct(params, ChaChaRng.seed_from_u64(5))
        assert separators[0] == []
        assert len(cliques[0]) == 3

    def test_separator_is_clique_prefix(self):
        """Test that every child starts with its separator."""
        params = InputParameters(6, 4, 2, 2)
        cliques, separators = construct(params, ChaChaRng.seed_from_u64(8))
        for clique, separator in zip(cliques[1:], separators[1:]):
            assert clique[:2] == separator

    def test_separable_cliques_are_disjoint(self):
        """Test that o == 0 gives variable-disjoint cliques."""
        params = InputParameters(5, 3, 0, 2)
        cliques, separators = construct(params, ChaChaRng.seed_from_u64(21))
        variables = [v for clique in cliques for v in clique]
        assert len(variables) == len(set(variables)) == 15
        assert all(separator == [] for separator in separators)

    def test_reproducible(self):
        """Test that the same seed gives the same tree."""
        params = InputParameters(9, 4, 2, 2)
        first = construct(params, ChaChaRng.seed_from_u64(2398))
        second = construct(params, ChaChaRng.seed_from_u64(2398))
        assert first == second

    def test_advances_stream(self):
        """Test that construction consumes the shared stream."""
        params = InputParameters(9, 4, 2, 2)
        rng = ChaChaRng.seed_from_u64(2398)
        first = construct(params, rng)
        second = construct(params, rng)
        assert first != second


class TestVerifyCliqueTree:
    """Test detection of corrupted trees."""

    def _tree(self):
        params = InputParameters(4, 3, 1, 2)
        cliques, separators = construct(params, ChaChaRng.seed_from_u64(31))
        return params, cliques, separators

    def test_non_empty_root_separator(self):
        """Test a root with a separator."""
        params, cliques, separators = self._tree()
        separators[0] = [cliques[0][0]]
        valid, errors = verify_clique_tree(params, cliques, separators)
        assert not valid
        assert any("root separator" in e for e in errors)

    def test_separator_outside_parent(self):
        """Test a separator variable that is not in the parent clique."""
        params, cliques, separators = self._tree()
        foreign = next(v for v in cliques[2] if v not in cliques[0] and v not in separators[2])
        separators[1] = [foreign]
        cliques[1] = [foreign] + cliques[1][1:]
        valid, errors = verify_clique_tree(params, cliques, separators)
        assert not valid
        assert any("not in parent clique" in e for e in errors)

    def test_wrong_number_of_cliques(self):
        """Test a tree with a missing clique."""
        params, cliques, separators = self._tree()
        valid, errors = verify_clique_tree(params, cliques[:-1], separators[:-1])
        assert not valid
