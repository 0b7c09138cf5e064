"""Result containers for set-valued and colouring invariants.

Exact algorithms return either a vertex subset (:class:`NodeSet`), an edge
subset (:class:`EdgeSet`) or a vertex colouring (:class:`Coloring`).  Storage
keeps the insertion order handed over by the producer, but equality ignores
it: two node sets are equal when they hold the same vertices and two edge
sets are equal when they hold the same undirected edges, whatever the
orientation of each pair.  Comparing a node set with an edge set is a
programming error and raises :class:`TypeMismatchError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Hashable, Iterable, Iterator, List, Mapping, Tuple, Union

from .errors import TypeMismatchError

Edge = Tuple[Hashable, Hashable]


def normalize_edge(edge: Iterable[Hashable]) -> Edge:
    """Return ``edge`` as a ``(smaller, larger)`` pair."""

    u, v = edge
    return (u, v) if u <= v else (v, u)


@dataclass(frozen=True, eq=False, init=False)
class NodeSet:
    """Optimal vertex subset (independent set, dominating set, ...)."""

    nodes: Tuple[Hashable, ...] = ()

    def __init__(self, nodes: Iterable[Hashable] = ()) -> None:
        object.__setattr__(self, "nodes", tuple(nodes))

    def as_set(self) -> FrozenSet[Hashable]:
        return frozenset(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (NodeSet, EdgeSet)):
            return optimal_sets_equal(self, other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("nodes", self.as_set()))


@dataclass(frozen=True, eq=False, init=False)
class EdgeSet:
    """Optimal edge subset (matching, edge dominating set, ...)."""

    edges: Tuple[Edge, ...] = ()

    def __init__(self, edges: Iterable[Iterable[Hashable]] = ()) -> None:
        object.__setattr__(self, "edges", tuple(tuple(edge) for edge in edges))

    def as_set(self) -> FrozenSet[Edge]:
        return frozenset(normalize_edge(edge) for edge in self.edges)

    def nodes(self) -> FrozenSet[Hashable]:
        """Return every endpoint touched by the edge subset."""

        return frozenset(node for edge in self.edges for node in edge)

    def __len__(self) -> int:
        return len(self.edges)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.edges)

    def __contains__(self, edge: object) -> bool:
        try:
            return normalize_edge(edge) in self.as_set()
        except (TypeError, ValueError):
            return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (NodeSet, EdgeSet)):
            return optimal_sets_equal(self, other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("edges", self.as_set()))


OptimalSet = Union[NodeSet, EdgeSet]


def optimal_sets_equal(a: OptimalSet, b: OptimalSet) -> bool:
    """Compare two optimal sets regardless of the algorithm that produced them."""

    if isinstance(a, NodeSet) and isinstance(b, NodeSet):
        return a.as_set() == b.as_set()
    if isinstance(a, EdgeSet) and isinstance(b, EdgeSet):
        return a.as_set() == b.as_set()
    raise TypeMismatchError(
        f"Cannot compare {type(a).__name__} with {type(b).__name__}"
    )


@dataclass(frozen=True, eq=False, init=False)
class Coloring:
    """Proper vertex colouring with colours numbered from 1."""

    colors: Mapping[Hashable, int]

    def __init__(self, colors: Mapping[Hashable, int]) -> None:
        object.__setattr__(self, "colors", MappingProxyType(dict(colors)))

    def __reduce__(self):
        return (Coloring, (dict(self.colors),))

    @property
    def number_of_colors(self) -> int:
        return len(set(self.colors.values()))

    def color_classes(self) -> Dict[int, NodeSet]:
        """Group vertices by colour, each class returned as a :class:`NodeSet`."""

        classes: Dict[int, List[Hashable]] = {}
        for node, color in self.colors.items():
            classes.setdefault(color, []).append(node)
        return {color: NodeSet(classes[color]) for color in sorted(classes)}

    def __getitem__(self, node: Hashable) -> int:
        return self.colors[node]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.colors)

    def items(self):
        return self.colors.items()

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Coloring):
            return dict(self.colors) == dict(other.colors)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.colors.items()))


__all__ = [
    "Coloring",
    "Edge",
    "EdgeSet",
    "NodeSet",
    "OptimalSet",
    "normalize_edge",
    "optimal_sets_equal",
]
