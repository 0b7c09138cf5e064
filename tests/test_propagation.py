"""Tests for the propagation engine and zero forcing."""

import networkx as nx
import pytest
from hypothesis import given, settings

from graph_invariants.optimal_sets import NodeSet
from graph_invariants.propagation import (
    PROPAGATION_RULES,
    minimum_zero_forcing_set,
    propagate,
    resolve_rule,
    search_zero_forcing_set,
    zero_forcing_closure,
    zero_forcing_number,
    zero_forcing_rule,
)

from strategies import graphs, graphs_with_marking


def path(n):
    return nx.path_graph(range(1, n + 1))


class TestZeroForcingRule:
    def test_single_white_neighbour_is_forced(self):
        G = path(3)
        assert zero_forcing_rule(G, 1, {1}) == (2,)

    def test_two_white_neighbours_force_nothing(self):
        G = path(3)
        assert zero_forcing_rule(G, 2, {2}) == ()

    def test_registry(self):
        assert resolve_rule("zero_forcing") is zero_forcing_rule
        assert set(PROPAGATION_RULES) == {"zero_forcing"}
        with pytest.raises(ValueError):
            resolve_rule("psd_forcing")


class TestClosure:
    def test_path_from_endpoint(self):
        result = zero_forcing_closure(path(5), {1})

        assert result.marked == frozenset(range(1, 6))
        assert not result.limit_reached
        # The first pass sweeps the whole path, the second confirms the fixed point.
        assert result.passes == 2

    def test_star_centre_is_stuck(self):
        G = nx.star_graph(4)
        result = zero_forcing_closure(G, {0})
        assert result.marked == frozenset({0})
        assert result.passes == 1

    def test_star_with_three_leaves(self):
        G = nx.star_graph(4)
        result = zero_forcing_closure(G, {1, 2, 3})
        assert result.covers(G)

    def test_initial_marking_is_copied(self):
        initial = {1}
        zero_forcing_closure(path(4), initial)
        assert initial == {1}

    def test_unknown_vertex_rejected(self):
        with pytest.raises(ValueError):
            zero_forcing_closure(path(3), {42})

    def test_iteration_cap_is_not_an_error(self):
        G = path(6)
        result = zero_forcing_closure(G, {1}, max_iter=1, order=[6, 5, 4, 3, 2, 1])

        assert result.limit_reached
        assert result.passes == 1
        assert result.marked == frozenset({1, 2})
        assert result.marked <= zero_forcing_closure(G, {1}).marked

    def test_zero_cap_returns_initial_marking(self):
        result = zero_forcing_closure(path(4), {1}, max_iter=0)
        assert result.marked == frozenset({1})
        assert result.passes == 0

    def test_generic_engine_accepts_custom_rules(self):
        def mark_all_neighbours(G, v, marked):
            return G.neighbors(v)

        result = propagate(path(5), {3}, mark_all_neighbours)
        assert result.marked == frozenset(range(1, 6))

    def test_empty_graph(self):
        result = zero_forcing_closure(nx.Graph(), set())
        assert result.marked == frozenset()
        assert not result.limit_reached

    @given(graphs_with_marking())
    def test_closure_is_independent_of_visit_order(self, case):
        G, marking, order = case
        default = zero_forcing_closure(G, marking)
        reordered = zero_forcing_closure(G, marking, order=order)

        assert default.marked == reordered.marked

    @given(graphs_with_marking())
    def test_marking_grows_monotonically(self, case):
        G, marking, _ = case
        result = zero_forcing_closure(G, marking)

        sizes = [len(marking), *result.history]
        assert all(a <= b for a, b in zip(sizes, sizes[1:]))
        assert sizes[-1] <= G.number_of_nodes()
        assert frozenset(marking) <= result.marked


class TestZeroForcingNumber:
    @pytest.mark.parametrize(
        "G, expected",
        [
            (nx.Graph(), 0),
            (path(5), 1),
            (nx.cycle_graph(6), 2),
            (nx.complete_graph(4), 3),
            (nx.star_graph(4), 3),
        ],
    )
    def test_known_values(self, G, expected):
        assert zero_forcing_number(G) == expected

    def test_returns_node_set(self):
        result = minimum_zero_forcing_set(path(4))
        assert isinstance(result, NodeSet)
        assert len(result) == 1

    @settings(max_examples=30, deadline=None)
    @given(graphs(max_nodes=6))
    def test_minimum_set_forces_the_graph(self, G):
        forcing = minimum_zero_forcing_set(G)
        assert zero_forcing_closure(G, forcing).covers(G)


class TestZeroForcingSearchWithCap:
    @pytest.mark.parametrize("n", [2, 5])
    def test_covering_closure_counts_even_when_capped(self, n):
        G = path(n)
        assert zero_forcing_closure(G, {1}, max_iter=1).limit_reached

        nodes, truncated = search_zero_forcing_set(G, max_iter=1)
        assert len(nodes) == 1
        assert not truncated

    def test_rejected_capped_candidates_are_flagged(self):
        nodes, truncated = search_zero_forcing_set(path(4), max_iter=0)

        assert nodes == NodeSet([1, 2, 3, 4])
        assert truncated

    def test_uncapped_search_is_exact(self):
        nodes, truncated = search_zero_forcing_set(nx.cycle_graph(6))
        assert len(nodes) == 2
        assert not truncated
