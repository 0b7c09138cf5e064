from . import degree_sequence, formulations, invariants, propagation
from .config import InvariantOptions
from .degree_sequence import havel_hakimi_residue, havel_hakimi_step, is_graphical, reduce_sequence
from .errors import (
    GraphicalityError,
    InvalidGraphError,
    InvariantComputationError,
    SolverError,
    SolverFailed,
    SolverInfeasible,
    TypeMismatchError,
    UnsupportedInvariantError,
)
from .invariants import (
    InvariantKind,
    InvariantResult,
    ResultKind,
    chromatic_number,
    compute,
    domination_number,
    edge_domination_number,
    independence_number,
    matching_number,
)
from .optimal_sets import Coloring, EdgeSet, NodeSet, optimal_sets_equal
from .propagation import zero_forcing_closure, zero_forcing_number
from .solver import set_cbc_solver_seed

__all__ = [
    "Coloring",
    "EdgeSet",
    "GraphicalityError",
    "InvalidGraphError",
    "InvariantComputationError",
    "InvariantKind",
    "InvariantOptions",
    "InvariantResult",
    "NodeSet",
    "ResultKind",
    "SolverError",
    "SolverFailed",
    "SolverInfeasible",
    "TypeMismatchError",
    "UnsupportedInvariantError",
    "chromatic_number",
    "compute",
    "degree_sequence",
    "domination_number",
    "edge_domination_number",
    "formulations",
    "havel_hakimi_residue",
    "havel_hakimi_step",
    "independence_number",
    "invariants",
    "is_graphical",
    "matching_number",
    "optimal_sets_equal",
    "propagation",
    "reduce_sequence",
    "set_cbc_solver_seed",
    "zero_forcing_closure",
    "zero_forcing_number",
]
