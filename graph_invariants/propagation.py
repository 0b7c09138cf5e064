"""Fixed-point propagation of vertex markings.

A propagation rule looks at one marked vertex and names the vertices it
forces.  :func:`propagate` applies a rule in full passes over the graph until
a pass forces nothing new.  The shipped rule is zero forcing: a marked
("blue") vertex with exactly one unmarked neighbour forces that neighbour.
Zero forcing is confluent, so the final closure does not depend on the order
in which vertices are visited, only the number of passes does.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Callable, Dict, FrozenSet, Hashable, Iterable, Optional, Sequence, Set, Tuple

import networkx as nx

from .log import get_logger
from .optimal_sets import NodeSet

logger = get_logger(__name__)

DEFAULT_MAX_ITER = 100_000

PropagationRule = Callable[[nx.Graph, Hashable, Set[Hashable]], Iterable[Hashable]]


@dataclass(frozen=True)
class PropagationResult:
    """Closure reached by :func:`propagate`.

    ``limit_reached`` is set when the pass cap stopped the run while passes
    were still making progress; ``marked`` is then a subset of the true
    closure.  ``history`` holds the number of marked vertices after each pass.
    """

    marked: FrozenSet[Hashable]
    passes: int
    limit_reached: bool
    history: Tuple[int, ...]

    def covers(self, G: nx.Graph) -> bool:
        return len(self.marked) == G.number_of_nodes()


def zero_forcing_rule(G: nx.Graph, vertex: Hashable, marked: Set[Hashable]) -> Tuple[Hashable, ...]:
    """Return the unique unmarked neighbour of ``vertex``, if there is one."""

    white_neighbors = [u for u in G.neighbors(vertex) if u not in marked]
    if len(white_neighbors) == 1:
        return (white_neighbors[0],)
    return ()


PROPAGATION_RULES: Dict[str, PropagationRule] = {
    "zero_forcing": zero_forcing_rule,
}


def resolve_rule(name: str) -> PropagationRule:
    try:
        return PROPAGATION_RULES[name]
    except KeyError as exc:
        raise ValueError(f"Unknown propagation rule '{name}'") from exc


def propagate(
    G: nx.Graph,
    initial: Iterable[Hashable],
    rule: PropagationRule,
    *,
    max_iter: int = DEFAULT_MAX_ITER,
    order: Optional[Sequence[Hashable]] = None,
) -> PropagationResult:
    """Compute the closure of ``initial`` under ``rule``.

    Vertices are visited in ``order`` (graph order by default); forced
    vertices are marked immediately, so later vertices of the same pass see
    them.  The run stops after the first pass that forces nothing, or after
    ``max_iter`` passes.
    """

    marked: Set[Hashable] = set(initial)
    unknown = [v for v in marked if v not in G]
    if unknown:
        raise ValueError(f"Initial marking contains vertices outside the graph: {unknown}")

    vertices = list(G.nodes()) if order is None else list(order)
    history = []
    changes_made = True
    passes = 0

    while changes_made and passes < max_iter:
        changes_made = False
        for v in vertices:
            if v not in marked:
                continue
            for forced in rule(G, v, marked):
                if forced not in marked:
                    marked.add(forced)
                    changes_made = True
        passes += 1
        history.append(len(marked))

    if changes_made:
        logger.debug("Propagation stopped at the %d pass cap with %d marked vertices", max_iter, len(marked))

    return PropagationResult(
        marked=frozenset(marked),
        passes=passes,
        limit_reached=changes_made,
        history=tuple(history),
    )


def zero_forcing_closure(
    G: nx.Graph,
    initial: Iterable[Hashable],
    *,
    max_iter: int = DEFAULT_MAX_ITER,
    order: Optional[Sequence[Hashable]] = None,
) -> PropagationResult:
    """Return the set of vertices turned blue by zero forcing from ``initial``."""

    return propagate(G, initial, zero_forcing_rule, max_iter=max_iter, order=order)


def search_zero_forcing_set(
    G: nx.Graph, *, max_iter: int = DEFAULT_MAX_ITER
) -> Tuple[NodeSet, bool]:
    """Brute-force search for a smallest zero forcing set of ``G``.

    Candidate sets are tried by increasing size, so the routine is exponential
    and only practical on small graphs.  A closure that already covers the
    graph is accepted even if the pass cap stopped it.  The returned flag is
    ``True`` when a smaller candidate was rejected after being cut short by
    ``max_iter``; the set found is then only an upper bound.
    """

    nodes = list(G.nodes())
    truncated = False
    for size in range(len(nodes) + 1):
        for candidate in combinations(nodes, size):
            result = zero_forcing_closure(G, candidate, max_iter=max_iter)
            if result.covers(G):
                if truncated:
                    logger.debug("Zero forcing search capped at %d passes", max_iter)
                return NodeSet(candidate), truncated
            truncated = truncated or result.limit_reached
    return NodeSet(nodes), truncated


def minimum_zero_forcing_set(G: nx.Graph, *, max_iter: int = DEFAULT_MAX_ITER) -> NodeSet:
    """Return a smallest zero forcing set of ``G`` (see :func:`search_zero_forcing_set`)."""

    return search_zero_forcing_set(G, max_iter=max_iter)[0]


def zero_forcing_number(G: nx.Graph, *, max_iter: int = DEFAULT_MAX_ITER) -> int:
    """Return the zero forcing number of ``G``."""

    return len(minimum_zero_forcing_set(G, max_iter=max_iter))


__all__ = [
    "DEFAULT_MAX_ITER",
    "PROPAGATION_RULES",
    "PropagationResult",
    "PropagationRule",
    "minimum_zero_forcing_set",
    "propagate",
    "resolve_rule",
    "search_zero_forcing_set",
    "zero_forcing_closure",
    "zero_forcing_number",
    "zero_forcing_rule",
]
