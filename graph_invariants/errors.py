"""Exception hierarchy shared by the reduction, propagation and solver layers."""

from typing import Any, Optional


class InvariantComputationError(Exception):
    """Base class for every failure raised while computing an invariant."""


class GraphicalityError(InvariantComputationError, ValueError):
    """Raised when a degree sequence cannot be realised by a simple graph."""

    def __init__(self, value: Any, message: str = "The sequence is not graphical") -> None:
        super().__init__(f"{message} (offending value: {value})")
        self.value = value


class InvalidGraphError(InvariantComputationError, ValueError):
    """Raised for inputs that are not simple undirected graphs."""


class SolverError(InvariantComputationError):
    """Raised when the MILP backend does not return an optimal assignment."""

    def __init__(self, status: str, problem_name: Optional[str] = None) -> None:
        label = f" for {problem_name}" if problem_name else ""
        super().__init__(f"Solver status{label}: {status}")
        self.status = status
        self.problem_name = problem_name


class SolverInfeasible(SolverError):
    """The formulation has no feasible assignment."""


class SolverFailed(SolverError):
    """The solver stopped without proving optimality (time limit, crash, ...)."""


class UnsupportedInvariantError(InvariantComputationError, KeyError):
    """Raised when an invariant tag has no registered strategy."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class TypeMismatchError(InvariantComputationError, TypeError):
    """Raised when a node set is compared with an edge set."""


__all__ = [
    "GraphicalityError",
    "InvalidGraphError",
    "InvariantComputationError",
    "SolverError",
    "SolverFailed",
    "SolverInfeasible",
    "TypeMismatchError",
    "UnsupportedInvariantError",
]
