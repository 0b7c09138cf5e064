"""Exact NP-hard invariants through binary programs solved with PuLP.

Every invariant comes in two layers: a ``build_*_model`` function returning
the :class:`pulp.LpProblem` together with its decision variables, and a
public function that solves the model and decodes the assignment into a
:class:`NodeSet`, :class:`EdgeSet` or :class:`Coloring`.  Decoding relies on
:data:`graph_invariants.solver.SELECTION_THRESHOLD`.  Degenerate graphs (no
vertices, or no edges) are answered directly without calling the solver.

The models are exact and meant for small instances.
"""

from __future__ import annotations

from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx
import pulp

from .config import InvariantOptions
from .optimal_sets import Coloring, Edge, EdgeSet, NodeSet, normalize_edge
from .solver import selected, solve

VariableMap = Dict[Hashable, pulp.LpVariable]


def _edge_list(G: nx.Graph) -> List[Edge]:
    return [normalize_edge(edge) for edge in G.edges()]


def _vertex_variables(G: nx.Graph, prefix: str = "x") -> VariableMap:
    # Positional names keep PuLP happy whatever the node labels are.
    return {
        v: pulp.LpVariable(f"{prefix}_{i}", cat=pulp.LpBinary)
        for i, v in enumerate(G.nodes())
    }


def _edge_variables(edges: List[Edge], prefix: str = "x") -> VariableMap:
    return {
        edge: pulp.LpVariable(f"{prefix}_{i}", cat=pulp.LpBinary)
        for i, edge in enumerate(edges)
    }


#####################################
# Maximum matching                  #
#####################################


def build_matching_model(G: nx.Graph) -> Tuple[pulp.LpProblem, VariableMap]:
    """One binary per edge, at most one selected edge at every vertex."""

    edges = _edge_list(G)
    prob = pulp.LpProblem("MaximumMatching", pulp.LpMaximize)
    x = _edge_variables(edges)
    prob += pulp.lpSum(x.values())
    incident: Dict[Hashable, List[Edge]] = {v: [] for v in G.nodes()}
    for edge in edges:
        incident[edge[0]].append(edge)
        incident[edge[1]].append(edge)
    for v_edges in incident.values():
        if v_edges:
            prob += pulp.lpSum(x[e] for e in v_edges) <= 1
    return prob, x


def maximum_matching(G: nx.Graph, options: Optional[InvariantOptions] = None) -> EdgeSet:
    """Return a maximum matching of ``G``."""

    if G.number_of_edges() == 0:
        return EdgeSet()
    prob, x = build_matching_model(G)
    solve(prob, options)
    return EdgeSet(selected(x))


#####################################
# Maximum independent set           #
#####################################


def build_independent_set_model(G: nx.Graph) -> Tuple[pulp.LpProblem, VariableMap]:
    """One binary per vertex, never both endpoints of an edge."""

    prob = pulp.LpProblem("MaximumIndependentSet", pulp.LpMaximize)
    x = _vertex_variables(G)
    prob += pulp.lpSum(x.values())
    for u, v in G.edges():
        prob += x[u] + x[v] <= 1
    return prob, x


def maximum_independent_set(G: nx.Graph, options: Optional[InvariantOptions] = None) -> NodeSet:
    """Return a maximum independent set of ``G``."""

    if G.number_of_edges() == 0:
        return NodeSet(G.nodes())
    prob, x = build_independent_set_model(G)
    solve(prob, options)
    return NodeSet(selected(x))


#####################################
# Minimum proper colouring          #
#####################################


def build_coloring_model(
    G: nx.Graph,
) -> Tuple[pulp.LpProblem, Dict[Tuple[Hashable, int], pulp.LpVariable], Dict[int, pulp.LpVariable]]:
    """Assignment model with colour-usage indicators and symmetry breaking.

    ``Δ + 1`` colours always suffice, so colours are drawn from ``1..Δ+1``.
    Colour ``k`` may only be used when colour ``k - 1`` is, which makes the
    used colours a prefix ``1..χ`` of the palette.
    """

    nodes = list(G.nodes())
    index = {v: i for i, v in enumerate(nodes)}
    max_degree = max((degree for _, degree in G.degree()), default=0)
    colors = range(1, max_degree + 2)

    problem = pulp.LpProblem("MinimumProperColoring", pulp.LpMinimize)

    # x[v, k] = 1 if vertex v has colour k, y[k] toggles colour usage.
    x = {
        (v, k): pulp.LpVariable(f"x_{index[v]}_{k}", cat=pulp.LpBinary)
        for v in nodes
        for k in colors
    }
    y = {k: pulp.LpVariable(f"y_{k}", cat=pulp.LpBinary) for k in colors}

    problem += pulp.lpSum(y.values()), "MinimizeColorCount"

    for v in nodes:
        problem += pulp.lpSum(x[v, k] for k in colors) == 1, f"UniqueColor_{index[v]}"

    for u, v in G.edges():
        for k in colors:
            problem += x[u, k] + x[v, k] <= 1, f"Adjacency_{index[u]}_{index[v]}_color_{k}"

    for v in nodes:
        for k in colors:
            problem += x[v, k] <= y[k], f"UsageLink_{index[v]}_{k}"

    for k in colors:
        if k > 1:
            problem += y[k] <= y[k - 1], f"ColorOrder_{k}"

    return problem, x, y


def minimum_proper_coloring(G: nx.Graph, options: Optional[InvariantOptions] = None) -> Coloring:
    """Return a proper colouring of ``G`` with the fewest colours, numbered from 1."""

    if G.number_of_edges() == 0:
        return Coloring({v: 1 for v in G.nodes()})
    problem, x, _ = build_coloring_model(G)
    solve(problem, options)
    vertex_colors = {}
    for v, k in selected(x):
        vertex_colors.setdefault(v, k)
    return Coloring({v: vertex_colors[v] for v in G.nodes()})


#####################################
# Minimum edge dominating set       #
#####################################


def build_edge_dominating_set_model(G: nx.Graph) -> Tuple[pulp.LpProblem, VariableMap]:
    """Every edge is selected or shares an endpoint with a selected edge."""

    edges = _edge_list(G)
    prob = pulp.LpProblem("MinimumEdgeDominatingSet", pulp.LpMinimize)
    x = _edge_variables(edges)
    prob += pulp.lpSum(x.values())
    incident: Dict[Hashable, List[Edge]] = {v: [] for v in G.nodes()}
    for edge in edges:
        incident[edge[0]].append(edge)
        incident[edge[1]].append(edge)
    for u, v in edges:
        closed = set(incident[u]) | set(incident[v])
        prob += pulp.lpSum(x[e] for e in closed) >= 1
    return prob, x


def minimum_edge_dominating_set(G: nx.Graph, options: Optional[InvariantOptions] = None) -> EdgeSet:
    """Return a minimum edge dominating set of ``G``."""

    if G.number_of_edges() == 0:
        return EdgeSet()
    prob, x = build_edge_dominating_set_model(G)
    solve(prob, options)
    return EdgeSet(selected(x))


#####################################
# Minimum dominating set            #
#####################################


def build_dominating_set_model(G: nx.Graph) -> Tuple[pulp.LpProblem, VariableMap]:
    """Every closed neighbourhood holds a selected vertex."""

    prob = pulp.LpProblem("MinimumDominatingSet", pulp.LpMinimize)
    x = _vertex_variables(G)
    prob += pulp.lpSum(x.values())
    for u in G.nodes():
        neighbors = list(G.neighbors(u)) + [u]
        prob += pulp.lpSum(x[v] for v in neighbors) >= 1
    return prob, x


def minimum_dominating_set(G: nx.Graph, options: Optional[InvariantOptions] = None) -> NodeSet:
    """Return a minimum dominating set of ``G``."""

    if G.number_of_edges() == 0:
        return NodeSet(G.nodes())
    prob, x = build_dominating_set_model(G)
    solve(prob, options)
    return NodeSet(selected(x))


__all__ = [
    "build_coloring_model",
    "build_dominating_set_model",
    "build_edge_dominating_set_model",
    "build_independent_set_model",
    "build_matching_model",
    "maximum_independent_set",
    "maximum_matching",
    "minimum_dominating_set",
    "minimum_edge_dominating_set",
    "minimum_proper_coloring",
]
