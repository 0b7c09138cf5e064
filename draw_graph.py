"""Utility script to compute an invariant of one graph and render its optimal set.

Usage example::

    python draw_graph.py --graph6 "DQo" --invariant maximum_matching

Vertices of an optimal node set are drawn in light green, edges of an
optimal edge set in red, and colourings use one palette entry per colour.
Scalar invariants are printed and the plain graph is drawn.
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import networkx as nx
from matplotlib import pyplot as plt

from graph_invariants import InvariantOptions, compute
from graph_invariants.invariants import InvariantKind, InvariantResult, ResultKind
from graph_invariants.log import configure_cli_logging
from graph_invariants.optimal_sets import EdgeSet, normalize_edge


def describe(result: InvariantResult) -> str:
    """Return a one-line textual summary of ``result``."""

    name = result.invariant.value
    if result.kind is ResultKind.SCALAR:
        suffix = " (iteration cap reached)" if result.limit_reached else ""
        return f"{name} = {result.value}{suffix}"
    if result.kind is ResultKind.COLORING:
        return f"{name}: {result.scalar} colours {dict(result.coloring.items())}"
    members = list(result.optimal_set)
    return f"{name}: size {len(members)} {members}"


def draw_result(graph: nx.Graph, result: InvariantResult, ax=None) -> None:
    """Draw ``graph`` with the optimal set or colouring of ``result`` highlighted."""

    node_colors = ["lightblue"] * graph.number_of_nodes()
    edge_colors = ["grey"] * graph.number_of_edges()

    if result.kind is ResultKind.OPTIMAL_SET:
        optimal = result.optimal_set
        if isinstance(optimal, EdgeSet):
            chosen = optimal.as_set()
            edge_colors = [
                "red" if normalize_edge(edge) in chosen else "grey" for edge in graph.edges()
            ]
        else:
            members = optimal.as_set()
            node_colors = ["lightgreen" if v in members else "lightblue" for v in graph.nodes()]
    elif result.kind is ResultKind.COLORING:
        palette = plt.get_cmap("tab10")
        node_colors = [palette((result.coloring[v] - 1) % 10) for v in graph.nodes()]

    nx.draw(
        graph,
        ax=ax,
        with_labels=True,
        node_color=node_colors,
        edge_color=edge_colors,
        pos=nx.spring_layout(graph, seed=42),
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Draw a graph with an optimal set highlighted")
    parser.add_argument("--graph6", required=True, help="Graph encoded in graph6 format")
    parser.add_argument(
        "--invariant",
        default=InvariantKind.MAXIMUM_MATCHING.value,
        choices=[kind.value for kind in InvariantKind],
        help="Invariant to compute",
    )
    parser.add_argument("--marked", nargs="*", type=int, default=None, help="Initial marking for zero_forcing_closure")
    parser.add_argument("--solver", default="cbc", help="PuLP solver backend")
    parser.add_argument("--output", default=None, help="Save the figure to this path instead of showing it")
    args = parser.parse_args(argv)
    configure_cli_logging()

    graph = nx.from_graph6_bytes(args.graph6.encode("ascii"))
    options = InvariantOptions(solver_backend=args.solver)
    if args.marked is not None:
        options = options.with_marking(args.marked)

    result = compute(args.invariant, graph, options)
    print(describe(result))

    draw_result(graph, result)
    plt.title(describe(result))
    if args.output:
        plt.savefig(args.output)
    else:
        plt.show()
    plt.close()


if __name__ == "__main__":
    main()
