"""Single entry point routing invariant requests to their algorithm.

:func:`compute` looks the requested :class:`InvariantKind` up in a static
registry and wraps whatever the strategy returns into an
:class:`InvariantResult`:

* Havel–Hakimi residue comes from the degree-sequence reducer;
* zero forcing closure and number come from the propagation engine;
* matchings, independent sets, colourings and dominating sets come from the
  MILP formulations.

The named scalar helpers at the bottom of the module (``matching_number``,
``chromatic_number``, ...) are shortcuts over :func:`compute`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Union

import networkx as nx

from . import formulations, propagation
from .config import InvariantOptions
from .degree_sequence import havel_hakimi_residue
from .errors import InvalidGraphError, UnsupportedInvariantError
from .log import get_logger
from .optimal_sets import Coloring, EdgeSet, NodeSet, OptimalSet

logger = get_logger(__name__)


class InvariantKind(str, Enum):
    HAVEL_HAKIMI_RESIDUE = "havel_hakimi_residue"
    ZERO_FORCING_CLOSURE = "zero_forcing_closure"
    ZERO_FORCING_NUMBER = "zero_forcing_number"
    MINIMUM_ZERO_FORCING_SET = "minimum_zero_forcing_set"
    MAXIMUM_MATCHING = "maximum_matching"
    MATCHING_NUMBER = "matching_number"
    MAXIMUM_INDEPENDENT_SET = "maximum_independent_set"
    INDEPENDENCE_NUMBER = "independence_number"
    MINIMUM_PROPER_COLORING = "minimum_proper_coloring"
    CHROMATIC_NUMBER = "chromatic_number"
    MINIMUM_EDGE_DOMINATING_SET = "minimum_edge_dominating_set"
    EDGE_DOMINATION_NUMBER = "edge_domination_number"
    MINIMUM_DOMINATING_SET = "minimum_dominating_set"
    DOMINATION_NUMBER = "domination_number"


class ResultKind(Enum):
    SCALAR = "scalar"
    OPTIMAL_SET = "optimal_set"
    COLORING = "coloring"


ResultValue = Union[int, NodeSet, EdgeSet, Coloring]


@dataclass(frozen=True)
class InvariantResult:
    """Typed outcome of :func:`compute`.

    ``limit_reached`` is only ever ``True`` for propagation-based invariants
    whose pass cap stopped a run early.  A capped closure size is a lower
    bound; a capped zero forcing search result is an upper bound.
    """

    invariant: InvariantKind
    kind: ResultKind
    value: ResultValue
    limit_reached: bool = False

    @property
    def scalar(self) -> int:
        if self.kind is ResultKind.SCALAR:
            return self.value
        if self.kind is ResultKind.COLORING:
            return self.value.number_of_colors
        return len(self.value)

    @property
    def optimal_set(self) -> OptimalSet:
        if self.kind is not ResultKind.OPTIMAL_SET:
            raise TypeError(f"{self.invariant.value} does not produce an optimal set")
        return self.value

    @property
    def coloring(self) -> Coloring:
        if self.kind is not ResultKind.COLORING:
            raise TypeError(f"{self.invariant.value} does not produce a colouring")
        return self.value


Strategy = Callable[[nx.Graph, InvariantOptions], InvariantResult]


def _scalar(kind: InvariantKind, value: int, limit_reached: bool = False) -> InvariantResult:
    return InvariantResult(kind, ResultKind.SCALAR, int(value), limit_reached)


def _optimal_set(kind: InvariantKind, value: OptimalSet, limit_reached: bool = False) -> InvariantResult:
    return InvariantResult(kind, ResultKind.OPTIMAL_SET, value, limit_reached)


# Strategies


def _residue(G, options):
    return _scalar(InvariantKind.HAVEL_HAKIMI_RESIDUE, havel_hakimi_residue(G))


def _zero_forcing_closure(G, options):
    if options.initial_marking is None:
        raise ValueError("zero_forcing_closure needs options.initial_marking")
    result = propagation.zero_forcing_closure(
        G, options.initial_marking, max_iter=options.iteration_cap
    )
    return _scalar(InvariantKind.ZERO_FORCING_CLOSURE, len(result.marked), result.limit_reached)


def _minimum_zero_forcing_set(G, options):
    nodes, truncated = propagation.search_zero_forcing_set(G, max_iter=options.iteration_cap)
    return _optimal_set(InvariantKind.MINIMUM_ZERO_FORCING_SET, nodes, truncated)


def _zero_forcing_number(G, options):
    nodes, truncated = propagation.search_zero_forcing_set(G, max_iter=options.iteration_cap)
    return _scalar(InvariantKind.ZERO_FORCING_NUMBER, len(nodes), truncated)


def _set_strategy(kind: InvariantKind, solve_fn) -> Strategy:
    def strategy(G, options):
        return _optimal_set(kind, solve_fn(G, options))

    return strategy


def _size_strategy(kind: InvariantKind, solve_fn) -> Strategy:
    def strategy(G, options):
        return _scalar(kind, len(solve_fn(G, options)))

    return strategy


def _coloring(G, options):
    coloring = formulations.minimum_proper_coloring(G, options)
    return InvariantResult(InvariantKind.MINIMUM_PROPER_COLORING, ResultKind.COLORING, coloring)


def _chromatic_number(G, options):
    coloring = formulations.minimum_proper_coloring(G, options)
    return _scalar(InvariantKind.CHROMATIC_NUMBER, coloring.number_of_colors)


# Mapping invariant kinds to implementation strategies
_STRATEGIES: Dict[InvariantKind, Strategy] = {
    InvariantKind.HAVEL_HAKIMI_RESIDUE: _residue,
    InvariantKind.ZERO_FORCING_CLOSURE: _zero_forcing_closure,
    InvariantKind.ZERO_FORCING_NUMBER: _zero_forcing_number,
    InvariantKind.MINIMUM_ZERO_FORCING_SET: _minimum_zero_forcing_set,
    InvariantKind.MAXIMUM_MATCHING: _set_strategy(
        InvariantKind.MAXIMUM_MATCHING, formulations.maximum_matching
    ),
    InvariantKind.MATCHING_NUMBER: _size_strategy(
        InvariantKind.MATCHING_NUMBER, formulations.maximum_matching
    ),
    InvariantKind.MAXIMUM_INDEPENDENT_SET: _set_strategy(
        InvariantKind.MAXIMUM_INDEPENDENT_SET, formulations.maximum_independent_set
    ),
    InvariantKind.INDEPENDENCE_NUMBER: _size_strategy(
        InvariantKind.INDEPENDENCE_NUMBER, formulations.maximum_independent_set
    ),
    InvariantKind.MINIMUM_PROPER_COLORING: _coloring,
    InvariantKind.CHROMATIC_NUMBER: _chromatic_number,
    InvariantKind.MINIMUM_EDGE_DOMINATING_SET: _set_strategy(
        InvariantKind.MINIMUM_EDGE_DOMINATING_SET, formulations.minimum_edge_dominating_set
    ),
    InvariantKind.EDGE_DOMINATION_NUMBER: _size_strategy(
        InvariantKind.EDGE_DOMINATION_NUMBER, formulations.minimum_edge_dominating_set
    ),
    InvariantKind.MINIMUM_DOMINATING_SET: _set_strategy(
        InvariantKind.MINIMUM_DOMINATING_SET, formulations.minimum_dominating_set
    ),
    InvariantKind.DOMINATION_NUMBER: _size_strategy(
        InvariantKind.DOMINATION_NUMBER, formulations.minimum_dominating_set
    ),
}


def resolve_invariant(kind: Union[InvariantKind, str]) -> InvariantKind:
    """Return the :class:`InvariantKind` named by ``kind``."""

    if isinstance(kind, InvariantKind):
        return kind
    try:
        return InvariantKind(kind)
    except ValueError as exc:
        raise UnsupportedInvariantError(f"Unknown invariant '{kind}'") from exc


@nx.utils.not_implemented_for("directed")
@nx.utils.not_implemented_for("multigraph")
def validate_graph(G: nx.Graph) -> None:
    """Reject graphs that are not simple and undirected."""

    loops = nx.number_of_selfloops(G)
    if loops:
        raise InvalidGraphError(f"Graph has {loops} self-loop(s); only simple graphs are supported")


def compute(
    kind: Union[InvariantKind, str],
    G: nx.Graph,
    options: Optional[InvariantOptions] = None,
) -> InvariantResult:
    """Compute the invariant ``kind`` of ``G``.

    ``options`` are forwarded untouched to the selected strategy.  Raises
    :class:`UnsupportedInvariantError` for unknown kinds; errors raised by the
    strategy (:class:`GraphicalityError`, :class:`SolverError`, ...) propagate
    unchanged.
    """

    invariant = resolve_invariant(kind)
    try:
        strategy = _STRATEGIES[invariant]
    except KeyError as exc:
        raise UnsupportedInvariantError(f"No strategy registered for '{invariant.value}'") from exc
    validate_graph(G)
    logger.debug(
        "Computing %s on a graph with %d vertices and %d edges",
        invariant.value,
        G.number_of_nodes(),
        G.number_of_edges(),
    )
    return strategy(G, options or InvariantOptions())


def supported_invariants():
    return tuple(_STRATEGIES)


def matching_number(G: nx.Graph, options: Optional[InvariantOptions] = None) -> int:
    """Return the size of a maximum matching in ``G``."""

    return compute(InvariantKind.MATCHING_NUMBER, G, options).scalar


def independence_number(G: nx.Graph, options: Optional[InvariantOptions] = None) -> int:
    """Return the independence number of ``G`` via a PuLP MILP model."""

    return compute(InvariantKind.INDEPENDENCE_NUMBER, G, options).scalar


def chromatic_number(G: nx.Graph, options: Optional[InvariantOptions] = None) -> int:
    """Return the chromatic number of ``G`` using a MILP formulation in PuLP."""

    return compute(InvariantKind.CHROMATIC_NUMBER, G, options).scalar


def edge_domination_number(G: nx.Graph, options: Optional[InvariantOptions] = None) -> int:
    return compute(InvariantKind.EDGE_DOMINATION_NUMBER, G, options).scalar


def domination_number(G: nx.Graph, options: Optional[InvariantOptions] = None) -> int:
    """Return the domination number of ``G`` via a PuLP MILP model."""

    return compute(InvariantKind.DOMINATION_NUMBER, G, options).scalar


__all__ = [
    "InvariantKind",
    "InvariantResult",
    "ResultKind",
    "chromatic_number",
    "compute",
    "domination_number",
    "edge_domination_number",
    "independence_number",
    "matching_number",
    "resolve_invariant",
    "supported_invariants",
    "validate_graph",
]
