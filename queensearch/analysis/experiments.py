"""Experiment runners comparing the solvers (sequential, parallel and raced).

These routines execute repeatable batches of runs for every selected solver
over a set of board sizes and shape the outcomes into ``RunRecord`` entries
and per-N summaries suitable for console tables, CSV export and plotting.

Timing uses ``perf_counter``; memory is measured with ``tracemalloc`` as the
net allocation and the peak allocation during ``solve``. Wall-clock limits are
enforced by running the solver in a worker process that is terminated on
expiry; a timed out run is reported as a failure with ``timeout=True``.
"""
from __future__ import annotations

import multiprocessing
import queue
import tracemalloc
from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import settings
from .reporting import format_run_line, format_skipped_line
from .stats import ComparisonResults, ProgressPrinter, RunRecord, SolverSummary, compute_grouped_statistics
from queensearch.render import print_solution
from queensearch.solvers import SOLVER_NAMES, get_solver_class
from queensearch.utils import is_valid_solution


def derive_seed(base_seed: Optional[int], index: int) -> Optional[int]:
    """Return the seed of the ``index``-th run, or None for unseeded runs."""
    return None if base_seed is None else base_seed + index


def run_single(
    label: str,
    n: int,
    seed: Optional[int] = None,
    measure_memory: bool = True,
    params: Optional[Dict[str, Any]] = None,
) -> RunRecord:
    """Construct a solver, run ``solve`` once and return its run record.

    Parameters
    ----------
    label : str
        Solver registry label (``exhaustive``, ``greedy``, ``sa``, ``ga``).
    n : int
        Board dimension.
    seed : int | None
        Seed for the solver's random source.
    measure_memory : bool, default True
        Trace allocations with ``tracemalloc`` (slows the run down).
    params : dict | None
        Extra keyword arguments forwarded to the solver constructor.
    """
    solver = get_solver_class(label)(n, seed=seed, **(params or {}))

    started_tracing = False
    base_current = 0
    if measure_memory:
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            started_tracing = True
        tracemalloc.reset_peak()
        base_current, _ = tracemalloc.get_traced_memory()

    start = perf_counter()
    try:
        success = solver.solve()
        elapsed = perf_counter() - start
        memory_kb = peak_kb = 0.0
        if measure_memory:
            current, peak = tracemalloc.get_traced_memory()
            memory_kb = max(0, current - base_current) / 1024
            peak_kb = max(0, peak - base_current) / 1024
    finally:
        if started_tracing:
            tracemalloc.stop()

    return {
        "solver": label,
        "n": n,
        "seed": seed,
        "success": success,
        "time": elapsed,
        "memory_kb": memory_kb,
        "peak_kb": peak_kb,
        "iterations": solver.iterations,
        "evals": solver.evaluations,
        "runs": solver.runs,
        "best_conflicts": solver.best_cost,
        "timeout": bool(getattr(solver, "timed_out", False)),
        "solution": solver.get_solution(),
    }


def _timeout_record(label: str, n: int, seed: Optional[int], elapsed: float) -> RunRecord:
    return {
        "solver": label,
        "n": n,
        "seed": seed,
        "success": False,
        "time": elapsed,
        "memory_kb": 0.0,
        "peak_kb": 0.0,
        "iterations": 0,
        "evals": 0,
        "runs": 0,
        "best_conflicts": None,
        "timeout": True,
        "solution": None,
    }


def solve_with_timeout(
    label: str,
    n: int,
    seed: Optional[int] = None,
    time_limit: Optional[float] = None,
    measure_memory: bool = True,
    params: Optional[Dict[str, Any]] = None,
) -> RunRecord:
    """Run ``run_single`` under a wall-clock limit.

    Without a limit the run happens in-process. With a limit it happens in a
    single worker process which is terminated when the limit expires; the
    returned record then has ``success=False`` and ``timeout=True``.
    """
    if time_limit is None:
        return run_single(label, n, seed, measure_memory, params)

    start = perf_counter()
    with multiprocessing.Pool(processes=1) as pool:
        pending = pool.apply_async(run_single, (label, n, seed, measure_memory, params))
        try:
            return pending.get(timeout=time_limit)
        except multiprocessing.TimeoutError:
            return _timeout_record(label, n, seed, perf_counter() - start)


def _race_attempt(label: str, n: int, seed: Optional[int], params: Dict[str, Any]) -> RunRecord:
    return run_single(label, n, seed, measure_memory=False, params=params)


def race_restarts(
    label: str,
    n: int,
    workers: int = settings.NUM_PROCESSES,
    attempts: Optional[int] = None,
    seed: Optional[int] = None,
    params: Optional[Dict[str, Any]] = None,
    attempt: Callable[[str, int, Optional[int], Dict[str, Any]], RunRecord] = _race_attempt,
) -> RunRecord:
    """Run independent attempts of a stochastic solver in parallel, first success wins.

    Each attempt is a separate solver instance limited to a single run
    (``restarts=1`` for the restarting solvers) with its own derived seed, so
    attempts share no state. ``attempts`` defaults to the solver's restart
    budget (5). As soon as an attempt succeeds the worker pool is terminated,
    so attempts still running or queued never delay the result.

    ``attempt`` is the picklable callable executed in the workers; it receives
    ``(label, n, seed, params)`` and returns a ``RunRecord``.

    Returns
    -------
    RunRecord
        The winning attempt's record with ``time`` replaced by the time to the
        first success and ``runs``/``iterations``/``evals`` summed over the
        attempts finished by then; on failure the record aggregates every
        attempt.

    Raises
    ------
    ValueError
        For the deterministic exhaustive solver, which cannot be raced.
    """
    if label == "exhaustive":
        raise ValueError("The exhaustive solver is deterministic; racing it is pointless.")
    attempt_params = dict(params or {})
    if label in ("sa", "ga"):
        attempt_params["restarts"] = 1
    total_attempts = attempts if attempts is not None else 5

    start = perf_counter()
    finished: List[RunRecord] = []
    winner: Optional[RunRecord] = None
    outcomes: "queue.Queue[Any]" = queue.Queue()
    # Leaving the block terminates the pool, killing attempts still in flight
    with multiprocessing.Pool(processes=max(1, min(workers, total_attempts))) as pool:
        for index in range(total_attempts):
            pool.apply_async(
                attempt,
                (label, n, derive_seed(seed, index), attempt_params),
                callback=outcomes.put,
                error_callback=outcomes.put,
            )
        for _ in range(total_attempts):
            outcome = outcomes.get()
            if isinstance(outcome, BaseException):
                raise outcome
            finished.append(outcome)
            if outcome["success"]:
                winner = outcome
                break
        elapsed = perf_counter() - start

    best_costs = [r["best_conflicts"] for r in finished if r["best_conflicts"] is not None]
    summary: RunRecord = dict(winner) if winner is not None else _timeout_record(label, n, seed, elapsed)  # type: ignore[assignment]
    summary.update(
        {
            "time": elapsed,
            "timeout": False,
            "runs": len(finished),
            "iterations": sum(r["iterations"] for r in finished),
            "evals": sum(r["evals"] for r in finished),
            "best_conflicts": 0 if winner is not None else (min(best_costs) if best_costs else None),
        }
    )
    return summary


def _summarize(records: List[RunRecord]) -> SolverSummary:
    stats = compute_grouped_statistics(records)
    summary: Dict[str, Any] = {"skipped": False, **stats, "raw_runs": list(records)}
    return summary  # type: ignore[return-value]


def _skipped_summary() -> SolverSummary:
    return {
        "skipped": True,
        "success_rate": 0.0,
        "timeout_rate": 0.0,
        "failure_rate": 0.0,
        "total_runs": 0,
        "successes": 0,
        "failures": 0,
        "timeouts": 0,
        "raw_runs": [],
    }


def _validate(records: List[RunRecord]) -> None:
    for index, record in enumerate(records):
        if record["success"]:
            solution = record["solution"]
            if solution is None or len(solution) != record["n"] or not is_valid_solution(solution):
                raise AssertionError(
                    f"Invalid {record['solver']} solution for N={record['n']}, run {index}: {solution}"
                )


def _report(records: List[RunRecord], show_solutions: bool) -> None:
    for record in records:
        print(format_run_line(SOLVER_NAMES[record["solver"]], record))
        if show_solutions and record["success"] and record["n"] <= settings.SHOW_SOLUTION_MAX_N:
            title = f"{SOLVER_NAMES[record['solver']]} Solution for N={record['n']}:"
            print_solution(title, record["solution"])


def run_comparison(
    N_values: List[int],
    algorithms: Optional[List[str]] = None,
    runs: int = 1,
    seed: Optional[int] = None,
    time_limit: Optional[float] = None,
    parallel: bool = False,
    measure_memory: bool = True,
    show_solutions: bool = False,
    validate: bool = False,
    progress_label: Optional[str] = None,
    params: Optional[Dict[str, Dict[str, Any]]] = None,
) -> ComparisonResults:
    """Run every selected solver ``runs`` times for each N.

    For each N in ``N_values`` and each solver label, sizes above the solver's
    cap (``settings.max_n_for``) are reported as skipped. Otherwise the runs are
    executed sequentially (honouring ``time_limit``) or, when ``parallel`` is
    set, distributed over ``settings.NUM_PROCESSES`` processes; in parallel
    mode only the exhaustive solver's built-in time limit applies.

    Parameters
    ----------
    params : dict | None
        Optional mapping ``label -> constructor kwargs``.

    Returns
    -------
    ComparisonResults
        ``results[label][N]`` summaries including the raw run records.
    """
    labels = [get_solver_class(label).label for label in (algorithms or settings.ALGORITHMS)]
    params = params or {}
    results: ComparisonResults = {label: {} for label in labels}
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    for index, N in enumerate(N_values, start=1):
        if progress:
            progress.update(index, f"N={N}")
        try:
            print(f"\nTesting N = {N}")
            print("-" * 50)
            for label in labels:
                cap = settings.max_n_for(label)
                if cap is not None and N > cap:
                    print(format_skipped_line(SOLVER_NAMES[label]))
                    results[label][N] = _skipped_summary()
                    continue

                solver_params = dict(params.get(label, {}))
                if label == "exhaustive" and time_limit is not None:
                    solver_params.setdefault("time_limit", time_limit)
                jobs: List[Tuple[str, int, Optional[int], bool, Dict[str, Any]]] = [
                    (label, N, derive_seed(seed, k), measure_memory, solver_params) for k in range(runs)
                ]

                if parallel and runs > 1:
                    with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
                        records = list(executor.map(_run_job, jobs))
                else:
                    limit = None if label == "exhaustive" else time_limit
                    records = [
                        solve_with_timeout(lbl, n, s, limit, mem, prm) for lbl, n, s, mem, prm in jobs
                    ]

                if validate:
                    _validate(records)
                _report(records, show_solutions)
                results[label][N] = _summarize(records)
        except KeyboardInterrupt:
            print("\nInterrupted by user. Returning partial results...")
            break

    return results


def _run_job(job: Tuple[str, int, Optional[int], bool, Dict[str, Any]]) -> RunRecord:
    """Worker wrapper to invoke a single run (for parallel mapping)."""
    label, n, seed, measure_memory, params = job
    return run_single(label, n, seed, measure_memory, params)
