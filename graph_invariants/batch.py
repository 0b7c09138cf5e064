"""Batch evaluation of invariants over graph6-encoded graphs.

Graphs are independent, so the runner hands one graph per task to a
``multiprocessing`` pool when more than one CPU is requested.  Each finished
graph is appended to ``results.csv`` in a timestamped run directory and the
``summary.txt`` next to it is rewritten, so partial runs still leave usable
artefacts behind.
"""

from __future__ import annotations

import csv
import os
import time
from dataclasses import dataclass, field
from datetime import datetime
from multiprocessing import Pool, cpu_count
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

_BLAS_ENV_VARS = (
    "OMP_NUM_THREADS",
    "MKL_NUM_THREADS",
    "OPENBLAS_NUM_THREADS",
    "NUMEXPR_NUM_THREADS",
)

for _var in _BLAS_ENV_VARS:
    os.environ.setdefault(_var, "1")

import networkx as nx

from .config import InvariantOptions
from .errors import InvariantComputationError
from .invariants import InvariantKind, compute, resolve_invariant
from .log import get_logger

logger = get_logger(__name__)

DEFAULT_INVARIANTS: Tuple[str, ...] = (
    InvariantKind.HAVEL_HAKIMI_RESIDUE.value,
    InvariantKind.MATCHING_NUMBER.value,
    InvariantKind.INDEPENDENCE_NUMBER.value,
    InvariantKind.CHROMATIC_NUMBER.value,
)


@dataclass(slots=True)
class BatchConfig:
    """Configuration of a batch run."""

    invariants: Tuple[str, ...] = DEFAULT_INVARIANTS
    solver_backend: str = "cbc"
    time_limit: Optional[float] = None
    iteration_cap: int = 100_000
    seed: Optional[int] = None
    verbose: bool = False

    def options(self) -> InvariantOptions:
        return InvariantOptions(
            solver_backend=self.solver_backend,
            time_limit=self.time_limit,
            seed=self.seed,
            iteration_cap=self.iteration_cap,
        )


@dataclass(slots=True)
class GraphOutcome:
    """Invariant values computed for one graph."""

    index: int
    graph6: str
    order: int
    size: int
    values: Dict[str, Optional[int]] = field(default_factory=dict)
    limit_reached: bool = False
    elapsed: float = 0.0
    error: Optional[str] = None


def load_graph6_file(path: Path) -> List[str]:
    """Return the non-empty graph6 lines of ``path`` (``>>graph6<<`` headers stripped)."""

    if not path.exists():
        raise SystemExit(f"Graph file not found: {path}")
    graphs: List[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            value = line.strip()
            if value.startswith(">>graph6<<"):
                value = value[len(">>graph6<<"):]
            if value:
                graphs.append(value)
    if not graphs:
        raise SystemExit(f"Graph file {path} is empty")
    return graphs


def _graph_from_key(graph6: str) -> nx.Graph:
    return nx.from_graph6_bytes(graph6.encode("ascii"))


def prepare_output_directory(base: Path = Path("out")) -> Path:
    """Create (if necessary) the output directory for the current run."""

    base.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    suffix = 0
    while True:
        dirname = timestamp if suffix == 0 else f"{timestamp}_{suffix:02d}"
        candidate = base / dirname
        if not candidate.exists():
            candidate.mkdir(parents=True)
            return candidate
        suffix += 1


def csv_header(invariants: Sequence[str]) -> List[str]:
    return ["index", "graph6", "order", "size", *invariants, "limit_reached", "elapsed", "error"]


def _ensure_results_csv(path: Path, invariants: Sequence[str]) -> None:
    if not path.exists() or path.stat().st_size == 0:
        with path.open("w", newline="", encoding="utf-8") as handle:
            csv.writer(handle).writerow(csv_header(invariants))


def append_result_csv(path: Path, outcome: GraphOutcome, invariants: Sequence[str]) -> None:
    _ensure_results_csv(path, invariants)
    with path.open("a", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(
            [
                outcome.index,
                outcome.graph6,
                outcome.order,
                outcome.size,
                *("" if outcome.values.get(name) is None else outcome.values[name] for name in invariants),
                outcome.limit_reached,
                f"{outcome.elapsed:.3f}",
                outcome.error or "",
            ]
        )


def write_summary_txt(
    path: Path,
    outcomes: Sequence[GraphOutcome],
    config: BatchConfig,
    cpus: int,
    total_graphs: int,
) -> None:
    lines: list[str] = []
    lines.append("Invariant Batch Summary")
    lines.append("=" * 23)
    lines.append(f"Timestamp      : {datetime.now().isoformat(timespec='seconds')}")
    lines.append(f"Invariants     : {', '.join(config.invariants)}")
    lines.append(f"Solver backend : {config.solver_backend}")
    time_limit = f"{config.time_limit:.1f}s" if config.time_limit is not None else "none"
    lines.append(f"Time limit     : {time_limit}")
    lines.append(f"Iteration cap  : {config.iteration_cap}")
    lines.append(f"CPUs           : {cpus}")
    seed_label = config.seed if config.seed is not None else "default"
    lines.append(f"Seed           : {seed_label}")
    lines.append("")

    failures = [outcome for outcome in outcomes if outcome.error]
    lines.append(f"Graphs processed: {len(outcomes)}/{total_graphs}")
    lines.append(f"Failures        : {len(failures)}")
    elapsed = sum(outcome.elapsed for outcome in outcomes)
    lines.append(f"Total time (s)  : {elapsed:.3f}")
    lines.append("")

    for outcome in failures:
        lines.append(f"[#{outcome.index}] {outcome.graph6}")
        lines.append(f"  Error          : {outcome.error}")
        lines.append("")

    with path.open("w", encoding="utf-8") as handle:
        handle.write("\n".join(lines).strip() + "\n")


def process_graph(index: int, graph6: str, config: BatchConfig) -> GraphOutcome:
    """Compute every configured invariant for one graph."""

    graph = _graph_from_key(graph6)
    options = config.options()
    outcome = GraphOutcome(
        index=index,
        graph6=graph6,
        order=graph.number_of_nodes(),
        size=graph.number_of_edges(),
    )

    start_time = time.time()
    for name in config.invariants:
        try:
            result = compute(name, graph, options)
        except InvariantComputationError as exc:
            # One failing invariant (solver time limit, ...) does not sink the whole batch.
            logger.warning("Graph #%d (%s): %s failed: %s", index, graph6, name, exc)
            outcome.values[name] = None
            outcome.error = f"{name}: {exc}"
            continue
        outcome.values[name] = result.scalar
        outcome.limit_reached = outcome.limit_reached or result.limit_reached
    outcome.elapsed = round(time.time() - start_time, 3)
    return outcome


def _maybe_log_outcome(outcome: GraphOutcome, verbose: bool) -> None:
    if not verbose:
        return
    values = " ".join(f"{name}={value}" for name, value in outcome.values.items())
    print(
        f"#{outcome.index} graph6={outcome.graph6} n={outcome.order} m={outcome.size} "
        f"{values} time={outcome.elapsed:.3f}s"
    )


def process_all_graphs(
    graphs: Sequence[str],
    output_dir: Path,
    config: BatchConfig,
    *,
    cpus: int = 1,
) -> Tuple[Path, List[GraphOutcome]]:
    """Evaluate ``graphs`` (graph6 strings) and persist the outcomes.

    Returns the run directory and the outcomes in input order.
    """

    if not graphs:
        raise ValueError("No graphs provided.")
    for name in config.invariants:
        resolve_invariant(name)

    run_dir = prepare_output_directory(output_dir)
    results_csv_path = run_dir / "results.csv"
    summary_path = run_dir / "summary.txt"
    _ensure_results_csv(results_csv_path, config.invariants)

    effective_cpus = 1
    if cpus > 1:
        effective_cpus = min(cpus, cpu_count())
    elif cpus < 0:
        effective_cpus = cpu_count()

    outcomes_by_index: Dict[int, GraphOutcome] = {}

    def _handle_completion(outcome: GraphOutcome) -> None:
        outcomes_by_index[outcome.index] = outcome
        append_result_csv(results_csv_path, outcome, config.invariants)
        ordered = [outcomes_by_index[i] for i in sorted(outcomes_by_index)]
        write_summary_txt(summary_path, ordered, config, effective_cpus, len(graphs))
        _maybe_log_outcome(outcome, config.verbose)

    logger.info("Evaluating %d graph(s) on %d CPU(s)", len(graphs), effective_cpus)

    if effective_cpus == 1:
        for index, graph6 in enumerate(graphs):
            _handle_completion(process_graph(index, graph6, config))
    else:
        payloads = [(index, graph6, config) for index, graph6 in enumerate(graphs)]
        with Pool(processes=effective_cpus) as pool:
            for outcome in pool.imap_unordered(_worker_entry, payloads, chunksize=1):
                _handle_completion(outcome)

    logger.info("Results written to %s", run_dir)
    return run_dir, [outcomes_by_index[i] for i in sorted(outcomes_by_index)]


def _worker_entry(arguments: Tuple[int, str, BatchConfig]) -> GraphOutcome:
    """Entry point for multiprocessing workers."""

    index, graph6, config = arguments
    return process_graph(index, graph6, config)


__all__ = [
    "BatchConfig",
    "DEFAULT_INVARIANTS",
    "GraphOutcome",
    "append_result_csv",
    "load_graph6_file",
    "prepare_output_directory",
    "process_all_graphs",
    "process_graph",
    "write_summary_txt",
]
