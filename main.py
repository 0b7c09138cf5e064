import argparse
from multiprocessing import cpu_count
from pathlib import Path
from typing import List, Optional, Sequence

from graph_invariants.batch import DEFAULT_INVARIANTS, BatchConfig, load_graph6_file, process_all_graphs
from graph_invariants.invariants import InvariantKind
from graph_invariants.log import configure_cli_logging
from graph_invariants.solver import make_solver

# Needs an initial marking per graph, which a graph6 file cannot carry.
_BATCH_EXCLUDED = {InvariantKind.ZERO_FORCING_CLOSURE.value}
BATCH_INVARIANTS = tuple(kind.value for kind in InvariantKind if kind.value not in _BATCH_EXCLUDED)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the batch invariant runner."""

    parser = argparse.ArgumentParser(description="Compute graph invariants for graph6-encoded graphs")
    parser.add_argument("graphs", nargs="*", help="Graphs in graph6 format")
    parser.add_argument("--graphs-file", type=Path, default=None, help="Text file listing graph6 strings (one per line)")
    parser.add_argument(
        "-i",
        "--invariants",
        nargs="+",
        default=list(DEFAULT_INVARIANTS),
        choices=BATCH_INVARIANTS,
        metavar="INVARIANT",
        help="Invariants to compute (available: " + ", ".join(BATCH_INVARIANTS) + ")",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("out"),
        help="Base directory where run artefacts will be written",
    )
    parser.add_argument("--solver", default="cbc", help="PuLP solver backend (cbc, highs, or any pulp.getSolver name)")
    parser.add_argument("--time-limit", type=float, default=None, help="Wall-clock limit per solver call in seconds")
    parser.add_argument("--iteration-cap", type=int, default=100_000, help="Maximum number of propagation passes")
    parser.add_argument("--seed", type=int, default=None, help="CBC random seed for reproducibility")
    parser.add_argument("--cpus", type=int, default=1, help="Number of worker processes (<=1 disables multiprocessing, -1 uses all)")
    parser.add_argument("--verbose", action="store_true", help="Print per-graph summaries")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> Path:
    args = parse_arguments(argv)
    configure_cli_logging()

    graphs: List[str] = list(args.graphs)
    if args.graphs_file is not None:
        graphs.extend(load_graph6_file(args.graphs_file))
    if not graphs:
        raise SystemExit("No graphs provided (CLI graph6 strings or --graphs-file).")

    seen: set[str] = set()
    invariants: list[str] = []
    for name in args.invariants:
        if name not in seen:
            seen.add(name)
            invariants.append(name)

    config = BatchConfig(
        invariants=tuple(invariants),
        solver_backend=args.solver,
        time_limit=args.time_limit,
        iteration_cap=args.iteration_cap,
        seed=args.seed,
        verbose=args.verbose,
    )

    try:
        make_solver(config.options())
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    cpus = args.cpus if args.cpus >= 0 else max(1, cpu_count())
    run_dir, _ = process_all_graphs(graphs, args.output, config, cpus=cpus)
    print(f"Results written to {run_dir}")
    return run_dir


if __name__ == "__main__":
    main()
