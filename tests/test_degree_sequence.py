"""Tests for the Havel–Hakimi reducer."""

import networkx as nx
import pytest
from hypothesis import given, strategies as st

from graph_invariants.degree_sequence import (
    degree_sequence,
    havel_hakimi_residue,
    havel_hakimi_step,
    is_graphical,
    reduce_sequence,
)
from graph_invariants.errors import GraphicalityError

from strategies import graphs


class TestHavelHakimiStep:
    def test_single_step_matches_documented_trace(self):
        sequence = [3, 3, 2, 2, 1, 1]
        eliminations = []

        assert havel_hakimi_step(sequence, eliminations) is True
        assert sequence == [2, 1, 1, 1, 1]
        assert eliminations == [3]

    def test_unsorted_input_is_sorted_first(self):
        sequence = [1, 3, 2, 1, 3, 2]

        assert havel_hakimi_step(sequence)
        assert sequence == [2, 1, 1, 1, 1]

    def test_all_zero_sequence_takes_no_step(self):
        sequence = [0, 0, 0]
        eliminations = [2, 1]

        assert havel_hakimi_step(sequence, eliminations) is False
        assert sequence == [0, 0, 0]
        assert eliminations == [2, 1, 0, 0, 0]

    def test_empty_sequence_is_terminal(self):
        sequence = []
        eliminations = []

        assert havel_hakimi_step(sequence, eliminations) is False
        assert eliminations == []

    def test_leading_degree_too_large(self):
        with pytest.raises(GraphicalityError) as excinfo:
            havel_hakimi_step([5, 1, 1])
        assert excinfo.value.value == 5

    def test_negative_leading_degree(self):
        with pytest.raises(GraphicalityError):
            havel_hakimi_step([-1, -2])

    def test_trace_untouched_on_failure(self):
        eliminations = []
        with pytest.raises(GraphicalityError):
            havel_hakimi_step([3, 1, 0, 0], eliminations)
        assert eliminations == []


class TestReduceSequence:
    def test_full_reduction(self):
        reduction = reduce_sequence([3, 3, 2, 2, 1, 1])

        assert reduction.steps == 3
        assert reduction.residue == 3
        assert reduction.remaining == (0, 0, 0)
        assert reduction.eliminations == (3, 2, 1, 0, 0, 0)

    def test_input_not_mutated(self):
        sequence = [2, 2, 2]
        reduce_sequence(sequence)
        assert sequence == [2, 2, 2]

    def test_non_graphical_sequence_raises(self):
        with pytest.raises(GraphicalityError):
            reduce_sequence([4, 4, 1, 1, 1])

    def test_empty_sequence_has_zero_residue(self):
        reduction = reduce_sequence([])
        assert reduction.residue == 0
        assert reduction.steps == 0

    def test_is_graphical(self):
        assert is_graphical([3, 3, 2, 2, 1, 1])
        assert is_graphical([])
        assert not is_graphical([4, 4, 1, 1, 1])
        assert not is_graphical([1])

    @given(st.lists(st.integers(min_value=0, max_value=6), max_size=8))
    def test_odd_sum_is_never_graphical(self, sequence):
        if sum(sequence) % 2 == 1:
            assert not is_graphical(sequence)

    @given(graphs(max_nodes=10))
    def test_graph_degree_sequences_reduce_to_zeros(self, G):
        reduction = reduce_sequence(degree_sequence(G))

        assert all(d == 0 for d in reduction.remaining)
        assert reduction.steps + reduction.residue == G.number_of_nodes()
        assert len(reduction.eliminations) == G.number_of_nodes()


class TestResidue:
    def test_empty_graph(self):
        assert havel_hakimi_residue(nx.Graph()) == 0

    def test_complete_graph(self):
        assert havel_hakimi_residue(nx.complete_graph(5)) == 1

    def test_star(self):
        assert havel_hakimi_residue(nx.star_graph(4)) == 4

    def test_edgeless_graph(self):
        assert havel_hakimi_residue(nx.empty_graph(3)) == 3

    @given(graphs(min_nodes=1, max_nodes=10))
    def test_residue_is_positive(self, G):
        assert 1 <= havel_hakimi_residue(G) <= G.number_of_nodes()
