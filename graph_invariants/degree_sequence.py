"""Havel–Hakimi reduction of degree sequences.

One step of the rule removes the largest entry ``d1`` of a sequence sorted in
non-increasing order and subtracts one from the next ``d1`` entries.  A
sequence is graphical exactly when repeated steps reach a sequence of zeros;
the number of zeros left at that point is the Havel–Hakimi residue, an
invariant of any graph realising the sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import networkx as nx

from .errors import GraphicalityError


@dataclass(frozen=True)
class SequenceReduction:
    """Outcome of driving the Havel–Hakimi rule to termination."""

    residue: int
    steps: int
    eliminations: Tuple[int, ...]
    remaining: Tuple[int, ...]


def havel_hakimi_step(
    sequence: List[int],
    eliminations: Optional[List[int]] = None,
) -> bool:
    """Apply one Havel–Hakimi step to ``sequence`` in place.

    Returns ``True`` when a step was taken and ``False`` when the sequence is
    made of zeros only (the empty sequence included), in which case no further
    step applies.  When ``eliminations`` is given, the removed leading degree
    is appended to it; on termination one ``0`` is appended per remaining
    entry so that the trace accounts for every entry of the original sequence.

    Raises :class:`GraphicalityError` when the sequence cannot be realised by a
    simple graph.

    >>> D = [3, 3, 2, 2, 1, 1]
    >>> trace = []
    >>> havel_hakimi_step(D, trace)
    True
    >>> D, trace
    ([2, 1, 1, 1, 1], [3])
    """

    if all(d == 0 for d in sequence):
        if eliminations is not None:
            eliminations.extend(0 for _ in sequence)
        return False

    sequence.sort(reverse=True)

    delta = sequence[0]
    if delta < 0 or delta > len(sequence) - 1:
        raise GraphicalityError(delta)

    for i in range(1, delta + 1):
        sequence[i] -= 1
        if sequence[i] < 0:
            raise GraphicalityError(sequence[i])

    if eliminations is not None:
        eliminations.append(delta)
    del sequence[0]
    return True


def reduce_sequence(sequence: Sequence[int]) -> SequenceReduction:
    """Reduce a copy of ``sequence`` until no step applies.

    Terminates because every successful step shortens the sequence by one.
    """

    working = [int(d) for d in sequence]
    eliminations: List[int] = []
    steps = 0
    while havel_hakimi_step(working, eliminations):
        steps += 1
    return SequenceReduction(
        residue=len(working),
        steps=steps,
        eliminations=tuple(eliminations),
        remaining=tuple(working),
    )


def is_graphical(sequence: Sequence[int]) -> bool:
    """Return ``True`` when ``sequence`` is the degree sequence of a simple graph."""

    try:
        reduce_sequence(sequence)
    except GraphicalityError:
        return False
    return True


def degree_sequence(G: nx.Graph) -> List[int]:
    """Return the degrees of ``G`` in non-increasing order."""

    return sorted((degree for _, degree in G.degree()), reverse=True)


def havel_hakimi_residue(G: nx.Graph) -> int:
    """Return the Havel–Hakimi residue of ``G`` (``0`` for the empty graph)."""

    return reduce_sequence(degree_sequence(G)).residue


__all__ = [
    "SequenceReduction",
    "degree_sequence",
    "havel_hakimi_residue",
    "havel_hakimi_step",
    "is_graphical",
    "reduce_sequence",
]
