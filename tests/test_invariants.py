"""Tests for the invariant dispatcher."""

import networkx as nx
import pytest

import graph_invariants.formulations as formulations
from graph_invariants import (
    InvariantKind,
    InvariantOptions,
    chromatic_number,
    compute,
    domination_number,
    edge_domination_number,
    independence_number,
    matching_number,
)
from graph_invariants.errors import (
    InvalidGraphError,
    SolverFailed,
    UnsupportedInvariantError,
)
from graph_invariants.invariants import ResultKind, resolve_invariant, supported_invariants
from graph_invariants.optimal_sets import Coloring, EdgeSet, NodeSet


def path(n):
    return nx.path_graph(range(1, n + 1))


class TestDispatch:
    def test_every_kind_is_registered(self):
        assert set(supported_invariants()) == set(InvariantKind)

    def test_enum_and_string_are_equivalent(self):
        G = nx.cycle_graph(5)
        by_enum = compute(InvariantKind.MATCHING_NUMBER, G)
        by_name = compute("matching_number", G)

        assert by_enum == by_name
        assert by_enum.kind is ResultKind.SCALAR
        assert by_enum.value == 2

    def test_unknown_invariant(self):
        with pytest.raises(UnsupportedInvariantError) as excinfo:
            compute("wiener_index", path(3))
        assert "wiener_index" in str(excinfo.value)
        assert isinstance(excinfo.value, KeyError)

    def test_resolve_passes_kinds_through(self):
        assert resolve_invariant(InvariantKind.DOMINATION_NUMBER) is InvariantKind.DOMINATION_NUMBER
        assert resolve_invariant("chromatic_number") is InvariantKind.CHROMATIC_NUMBER


class TestGraphValidation:
    def test_directed_graphs_are_rejected(self):
        with pytest.raises(nx.NetworkXNotImplemented):
            compute("havel_hakimi_residue", nx.DiGraph([(1, 2)]))

    def test_multigraphs_are_rejected(self):
        with pytest.raises(nx.NetworkXNotImplemented):
            compute("havel_hakimi_residue", nx.MultiGraph([(1, 2), (1, 2)]))

    def test_self_loops_are_rejected(self):
        G = path(3)
        G.add_edge(2, 2)
        with pytest.raises(InvalidGraphError):
            compute("matching_number", G)


class TestResultTags:
    def test_residue(self):
        result = compute("havel_hakimi_residue", nx.star_graph(4))
        assert result.kind is ResultKind.SCALAR
        assert result.scalar == 4
        assert not result.limit_reached

    def test_optimal_edge_set(self):
        result = compute("maximum_matching", path(4))
        assert result.kind is ResultKind.OPTIMAL_SET
        assert isinstance(result.optimal_set, EdgeSet)
        assert result.optimal_set == EdgeSet([(1, 2), (3, 4)])
        assert result.scalar == 2

    def test_optimal_node_set(self):
        result = compute("minimum_dominating_set", nx.star_graph(3))
        assert result.optimal_set == NodeSet([0])

    def test_coloring(self):
        result = compute("minimum_proper_coloring", nx.complete_graph(3))
        assert result.kind is ResultKind.COLORING
        assert isinstance(result.coloring, Coloring)
        assert result.scalar == 3

    def test_star_coloring_through_dispatch(self):
        G = nx.star_graph([1, 2, 3, 4, 5])
        result = compute("minimum_proper_coloring", G)

        assert result.scalar == 2
        assert all(result.coloring[1] != result.coloring[leaf] for leaf in range(2, 6))

    def test_returned_coloring_is_read_only(self):
        result = compute("minimum_proper_coloring", nx.star_graph([1, 2, 3, 4, 5]))
        with pytest.raises(TypeError):
            result.coloring.colors[1] = result.coloring[2]
        assert result.coloring[1] != result.coloring[2]

    def test_wrong_accessor(self):
        scalar = compute("havel_hakimi_residue", path(3))
        with pytest.raises(TypeError):
            scalar.optimal_set
        with pytest.raises(TypeError):
            scalar.coloring

    def test_zero_forcing_set(self):
        result = compute("minimum_zero_forcing_set", path(5))
        assert result.kind is ResultKind.OPTIMAL_SET
        assert len(result.optimal_set) == 1
        assert compute("zero_forcing_number", nx.cycle_graph(6)).value == 2


class TestZeroForcingClosure:
    def test_requires_initial_marking(self):
        with pytest.raises(ValueError):
            compute("zero_forcing_closure", path(3))

    def test_closure_size(self):
        options = InvariantOptions(initial_marking={1})
        result = compute("zero_forcing_closure", path(5), options)

        assert result.value == 5
        assert not result.limit_reached

    def test_limit_is_reported(self):
        options = InvariantOptions(initial_marking={1}, iteration_cap=0)
        result = compute("zero_forcing_closure", path(5), options)

        assert result.value == 1
        assert result.limit_reached


class TestZeroForcingNumberWithCap:
    @pytest.mark.parametrize("n", [2, 5])
    def test_single_capped_pass_still_finds_the_endpoint(self, n):
        result = compute("zero_forcing_number", path(n), InvariantOptions(iteration_cap=1))

        assert result.value == 1
        assert not result.limit_reached

    def test_upper_bound_is_flagged(self):
        options = InvariantOptions(iteration_cap=0)
        number = compute("zero_forcing_number", path(3), options)
        forcing = compute("minimum_zero_forcing_set", path(3), options)

        assert number.value == 3
        assert number.limit_reached
        assert forcing.optimal_set == NodeSet([1, 2, 3])
        assert forcing.limit_reached


class TestOptionsForwarding:
    def test_backend_reaches_the_solver(self):
        options = InvariantOptions(solver_backend="no_such_solver")
        with pytest.raises(ValueError):
            compute("independence_number", path(3), options)

    def test_propagation_ignores_solver_options(self):
        options = InvariantOptions(solver_backend="no_such_solver")
        assert compute("zero_forcing_number", path(3), options).value == 1

    def test_solver_failures_propagate(self, monkeypatch):
        def stopped(problem, options=None):
            raise SolverFailed("Not Solved", problem.name)

        monkeypatch.setattr(formulations, "solve", stopped)
        with pytest.raises(SolverFailed) as excinfo:
            compute("chromatic_number", nx.cycle_graph(5))
        assert excinfo.value.problem_name == "MinimumProperColoring"


class TestNamedHelpers:
    def test_petersen(self):
        G = nx.petersen_graph()
        assert matching_number(G) == 5
        assert independence_number(G) == 4
        assert chromatic_number(G) == 3
        assert domination_number(G) == 3

    def test_edge_domination(self):
        assert edge_domination_number(path(5)) == 2

    @pytest.mark.parametrize(
        "kind",
        [
            "matching_number",
            "independence_number",
            "chromatic_number",
            "edge_domination_number",
            "domination_number",
            "zero_forcing_number",
            "havel_hakimi_residue",
        ],
    )
    def test_empty_graph_gives_zero(self, kind):
        assert compute(kind, nx.Graph()).scalar == 0
