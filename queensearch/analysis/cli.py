"""Command-line interface and high-level pipelines for N-Queens comparisons.

This module wires together configuration loading, the solver comparison over
a list of board sizes (sequential, parallel or raced), CSV export and charts.
It isolates I/O, argument parsing and progress reporting from the solver
modules so that the rest of the codebase remains easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import tempfile
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .config_manager import ConfigManager
from .experiments import race_restarts, run_comparison, run_single
from .reporting import format_run_line, save_raw_data_to_csv, save_results_to_csv
from .stats import ComparisonResults
from queensearch.solvers import SOLVER_NAMES, SOLVERS
from queensearch.utils import is_valid_solution

DEFAULT_CONFIG = "config.json"


# ------------- Utils --------------------------------------------------------

def parse_algorithm_filters(alg_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize algorithm filter CLI inputs into a list of solver labels.

    Accepts repeated flags and comma-separated lists. Valid values are the
    registry labels (exhaustive, greedy, sa, ga). Returns None when no filter
    is provided (meaning all are enabled).
    """
    if not alg_args:
        return None
    selected: List[str] = []
    for entry in alg_args:
        for token in entry.split(","):
            token = token.strip().lower()
            if token:
                if token not in SOLVERS:
                    raise ValueError(f"Unknown algorithm '{token}'. Allowed: " + ", ".join(SOLVERS))
                selected.append(token)
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def parse_sizes(size_args: Optional[List[str]]) -> Optional[List[int]]:
    """Parse board sizes given as repeated flags and/or comma-separated lists.

    Raises ``ValueError`` for non-integer or non-positive sizes.
    """
    if not size_args:
        return None
    sizes: List[int] = []
    for entry in size_args:
        for token in entry.split(","):
            token = token.strip()
            if not token:
                continue
            try:
                value = int(token)
            except ValueError as exc:
                raise ValueError(f"Invalid board size '{token}'") from exc
            if value < 1:
                raise ValueError(f"Board size must be >= 1, got {value}")
            sizes.append(value)
    return sizes or None


def apply_configuration(config_path: str) -> Tuple[ConfigManager, Dict[str, Dict[str, Any]]]:
    """Load configuration and apply it to the ``settings`` module in-place.

    Returns the ``ConfigManager`` used and the per-solver constructor
    overrides found under ``solver_parameters``.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.N_VALUES = [int(n) for n in experiment_settings.get("N_values", settings.N_VALUES)]
        settings.ALGORITHMS = parse_algorithm_filters(experiment_settings.get("algorithms")) or settings.ALGORITHMS
        settings.RUNS = int(experiment_settings.get("runs", settings.RUNS))
        seed = experiment_settings.get("seed", settings.SEED)
        settings.SEED = None if seed is None else int(seed)
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)

    timeout_settings = config_mgr.get_timeout_settings()
    if timeout_settings:
        settings.set_time_limit(timeout_settings.get("time_limit", settings.TIME_LIMIT))

    limits = config_mgr.get_solver_limits()
    if limits:
        settings.EXHAUSTIVE_MAX_N = int(limits.get("exhaustive_max_n", settings.EXHAUSTIVE_MAX_N))
        settings.GREEDY_MAX_N = int(limits.get("greedy_max_n", settings.GREEDY_MAX_N))
        settings.SHOW_SOLUTION_MAX_N = int(limits.get("show_solution_max_n", settings.SHOW_SOLUTION_MAX_N))

    solver_params: Dict[str, Dict[str, Any]] = {}
    for label, overrides in config_mgr.get_solver_parameters().items():
        if label not in SOLVERS:
            raise ValueError(f"Unknown solver in solver_parameters: {label}")
        solver_params[label] = dict(overrides)

    if any(n < 1 for n in settings.N_VALUES):
        raise ValueError(f"N_values must all be >= 1: {settings.N_VALUES}")
    return config_mgr, solver_params


# ------------- Pipelines ----------------------------------------------------

def main_compare(
    sizes: List[int],
    algorithms: List[str],
    runs: int,
    seed: Optional[int],
    time_limit: Optional[float],
    parallel: bool,
    out_dir: str,
    save_csv: bool = False,
    make_plots: bool = False,
    show_solutions: bool = True,
    validate: bool = False,
    params: Optional[Dict[str, Dict[str, Any]]] = None,
) -> ComparisonResults:
    """Run the comparison, then export CSVs and charts on request."""
    print("N-Queens Problem Solver - Basic Comparison")
    print("=" * 42)
    start = perf_counter()

    results = run_comparison(
        sizes,
        algorithms=algorithms,
        runs=runs,
        seed=seed,
        time_limit=time_limit,
        parallel=parallel,
        show_solutions=show_solutions,
        validate=validate,
        params=params,
    )

    if save_csv:
        save_results_to_csv(results, out_dir)
        save_raw_data_to_csv(results, out_dir)
    if make_plots:
        from .plots import plot_and_save

        plot_and_save(results, out_dir)

    total_time = perf_counter() - start
    print(f"\nTotal time: {total_time:.1f}s ({total_time/60:.1f} minutes)")
    return results


def main_race(
    sizes: List[int],
    algorithms: List[str],
    workers: int,
    seed: Optional[int],
    params: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Race independent attempts of each stochastic solver for every N."""
    params = params or {}
    labels = [label for label in algorithms if label != "exhaustive"]
    print(f"N-Queens Problem Solver - Restart Race ({workers} workers)")
    print("=" * 42)
    for N in sizes:
        print(f"\nTesting N = {N}")
        print("-" * 50)
        for label in labels:
            cap = settings.max_n_for(label)
            if cap is not None and N > cap:
                continue
            record = race_restarts(label, N, workers=workers, seed=seed, params=params.get(label))
            print(format_run_line(SOLVER_NAMES[label], record) + f", attempts: {record['runs']}")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast smoke test of every solver at N=8.

    Verifies that:
    - The exhaustive solver returns the lexicographically first solution.
    - Each stochastic solver finds a valid solution within a few seeds.
    - The comparison pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=8) across all solvers...")

    record = run_single("exhaustive", 8, measure_memory=False)
    if record["solution"] != [0, 4, 7, 5, 2, 6, 1, 3]:
        raise AssertionError(f"Exhaustive solver returned an unexpected solution for N=8: {record['solution']}")
    print(f"  [exhaustive] nodes={record['iterations']}, time={record['time']:.4f}s")

    for label in ("greedy", "sa", "ga"):
        for seed in range(10):
            record = run_single(label, 8, seed=seed, measure_memory=False)
            if record["success"]:
                break
        if not record["success"]:
            raise AssertionError(f"{SOLVER_NAMES[label]} failed to solve N=8 for seeds 0..9.")
        if record["solution"] is None or not is_valid_solution(record["solution"]):
            raise AssertionError(f"{SOLVER_NAMES[label]} returned an invalid solution: {record['solution']}")
        print(f"  [{label}] seed={record['seed']}, success in {record['time']:.4f}s")

    results = run_comparison([8], runs=2, seed=0, measure_memory=False, progress_label="Quick regression")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, tmpdir, "results_summary.csv"))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(description="Compare N-Queens solvers over a range of board sizes.")
    parser.add_argument("--sizes", "-n", action="append", help="Board sizes (comma-separated or multiple flags).")
    parser.add_argument(
        "--alg",
        "-a",
        action="append",
        help="Solvers to run: exhaustive, greedy, sa, ga (comma-separated or multiple flags). Default: all.",
    )
    parser.add_argument("--runs", "-r", type=int, help="Independent runs per solver and N.")
    parser.add_argument("--seed", "-s", type=int, help="Base seed; run k uses seed + k.")
    parser.add_argument("--time-limit", type=float, help="Wall-clock limit per run in seconds.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Run repeated runs sequentially (default) or across worker processes.",
    )
    parser.add_argument("--race", type=int, metavar="WORKERS", help="Race independent restarts on WORKERS processes instead of comparing.")
    parser.add_argument("--config", help=f"Path to configuration file (default: {DEFAULT_CONFIG} if present).")
    parser.add_argument("--out-dir", help="Directory for CSV files and charts.")
    parser.add_argument("--csv", action="store_true", help="Export summary and raw-run CSV files.")
    parser.add_argument("--plots", action="store_true", help="Save comparison charts.")
    parser.add_argument("--no-solutions", action="store_true", help="Do not print boards of successful runs.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=8) and exit.")
    parser.add_argument("--validate", action="store_true", help="Check every reported solution (extra assertions).")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen pipeline."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    params: Dict[str, Dict[str, Any]] = {}
    try:
        config_path = args.config
        if config_path is None and Path(DEFAULT_CONFIG).exists():
            config_path = DEFAULT_CONFIG
        if config_path is not None:
            _, params = apply_configuration(config_path)
        sizes = parse_sizes(args.sizes) or settings.N_VALUES
        algorithms = parse_algorithm_filters(args.alg) or settings.ALGORITHMS
        if args.runs is not None and args.runs < 1:
            raise ValueError(f"--runs must be >= 1, got {args.runs}")
    except FileNotFoundError as exc:
        print(f"Configuration file not found: {exc}")
        raise SystemExit(1) from exc
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc

    seed = args.seed if args.seed is not None else settings.SEED
    time_limit = args.time_limit if args.time_limit is not None else settings.TIME_LIMIT

    try:
        if args.race:
            main_race(sizes, algorithms, workers=args.race, seed=seed, params=params)
        else:
            main_compare(
                sizes,
                algorithms,
                runs=args.runs or settings.RUNS,
                seed=seed,
                time_limit=time_limit,
                parallel=args.mode == "parallel",
                out_dir=args.out_dir or settings.OUT_DIR,
                save_csv=args.csv,
                make_plots=args.plots,
                show_solutions=not args.no_solutions,
                validate=args.validate,
                params=params,
            )
    except KeyboardInterrupt:
        print("\nExecution interrupted by user. Cleaning up workers...")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Execution error: {exc}")
        raise SystemExit(1) from exc
