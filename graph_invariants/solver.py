"""Thin adapter between the MILP formulations and PuLP's solver backends."""

from __future__ import annotations

from typing import Hashable, List, Mapping, Optional

import numpy as np
import pulp

from .config import InvariantOptions
from .errors import SolverFailed, SolverInfeasible
from .log import get_logger

logger = get_logger(__name__)

# A binary variable counts as selected above this value; solvers report
# integral values up to floating point noise (0.9999999, 1e-9, ...).
SELECTION_THRESHOLD = 0.5

_CBC_SEED = 42


def set_cbc_solver_seed(seed: Optional[int]) -> None:
    """Configure the seed used by all CBC solves (``None`` resets to default)."""

    global _CBC_SEED
    _CBC_SEED = 42 if seed is None else int(seed)


def _cbc_solver(options: InvariantOptions) -> pulp.PULP_CBC_CMD:
    seed = _CBC_SEED if options.seed is None else options.seed
    return pulp.PULP_CBC_CMD(
        msg=options.msg,
        threads=options.threads,
        timeLimit=options.time_limit,
        options=[f"randomSeed={seed}"],
    )


def make_solver(options: Optional[InvariantOptions] = None) -> pulp.LpSolver:
    """Return the PuLP solver selected by ``options.solver_backend``.

    ``"cbc"`` uses the CBC binary bundled with PuLP, ``"highs"`` the HiGHS
    Python bindings (``highspy``); any other name is handed to
    :func:`pulp.getSolver`.
    """

    options = options or InvariantOptions()
    backend = options.solver_backend.lower()
    if backend == "cbc":
        solver = _cbc_solver(options)
    elif backend == "highs":
        solver = pulp.HiGHS(msg=options.msg, timeLimit=options.time_limit, threads=options.threads)
    else:
        try:
            solver = pulp.getSolver(options.solver_backend, msg=options.msg, timeLimit=options.time_limit)
        except pulp.PulpSolverError as exc:
            raise ValueError(f"Unknown solver backend '{options.solver_backend}'") from exc
    if not solver.available():
        raise ValueError(f"Solver backend '{options.solver_backend}' is not available")
    return solver


def solve(problem: pulp.LpProblem, options: Optional[InvariantOptions] = None) -> str:
    """Solve ``problem`` in place and return the PuLP status text.

    Raises :class:`SolverInfeasible` for infeasible models and
    :class:`SolverFailed` whenever the backend does not prove optimality,
    including runs stopped by ``time_limit`` with a feasible incumbent.
    """

    solver = make_solver(options)
    logger.debug(
        "Solving %s: %d variables, %d constraints with %s",
        problem.name,
        len(problem.variables()),
        len(problem.constraints),
        solver.name,
    )
    try:
        status = problem.solve(solver)
    except pulp.PulpSolverError as exc:
        raise SolverFailed(f"Error: {exc}", problem.name) from exc

    status_text = pulp.LpStatus[status]
    logger.debug("%s finished with status %s", problem.name, status_text)
    if status == pulp.LpStatusInfeasible:
        raise SolverInfeasible(status_text, problem.name)
    if status != pulp.LpStatusOptimal:
        raise SolverFailed(status_text, problem.name)
    if problem.sol_status != pulp.LpSolutionOptimal:
        # Time-limited runs report "Optimal" with an integer-feasible solution.
        raise SolverFailed(pulp.LpSolution[problem.sol_status], problem.name)
    return status_text


def variable_values(variables: Mapping[Hashable, pulp.LpVariable]) -> np.ndarray:
    """Return the solved values of ``variables`` in mapping order (``None`` as 0)."""

    values = [var.value() for var in variables.values()]
    return np.array([0.0 if value is None else float(value) for value in values], dtype=float)


def selected(variables: Mapping[Hashable, pulp.LpVariable]) -> List[Hashable]:
    """Return the keys whose binary variable is set in the solution."""

    keys = list(variables.keys())
    mask = variable_values(variables) > SELECTION_THRESHOLD
    return [keys[i] for i in np.flatnonzero(mask)]


__all__ = [
    "SELECTION_THRESHOLD",
    "make_solver",
    "selected",
    "set_cbc_solver_seed",
    "solve",
    "variable_values",
]
