"""Per-call options forwarded by :func:`graph_invariants.invariants.compute`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Hashable, Iterable, Optional

from .propagation import DEFAULT_MAX_ITER

DEFAULT_SOLVER_BACKEND = "cbc"


@dataclass(frozen=True, slots=True)
class InvariantOptions:
    """Options understood by the invariant strategies.

    ``solver_backend``, ``time_limit``, ``threads``, ``seed`` and ``msg`` only
    matter for MILP-based invariants; ``iteration_cap`` and
    ``initial_marking`` only for propagation-based ones.  A ``seed`` of
    ``None`` falls back to the module-wide CBC seed.
    """

    solver_backend: str = DEFAULT_SOLVER_BACKEND
    time_limit: Optional[float] = None
    threads: int = 1
    seed: Optional[int] = None
    msg: bool = False
    iteration_cap: int = DEFAULT_MAX_ITER
    initial_marking: Optional[FrozenSet[Hashable]] = None

    def __post_init__(self) -> None:
        if self.iteration_cap < 0:
            raise ValueError("iteration_cap must be non-negative")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive when given")
        if self.threads < 1:
            raise ValueError("threads must be at least 1")
        if self.initial_marking is not None and not isinstance(self.initial_marking, frozenset):
            object.__setattr__(self, "initial_marking", frozenset(self.initial_marking))

    def with_marking(self, nodes: Iterable[Hashable]) -> "InvariantOptions":
        """Return a copy whose zero forcing closure starts from ``nodes``."""

        return InvariantOptions(
            solver_backend=self.solver_backend,
            time_limit=self.time_limit,
            threads=self.threads,
            seed=self.seed,
            msg=self.msg,
            iteration_cap=self.iteration_cap,
            initial_marking=frozenset(nodes),
        )


__all__ = ["DEFAULT_SOLVER_BACKEND", "InvariantOptions"]
