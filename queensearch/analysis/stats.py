"""Typed result shapes and statistics helpers for the comparison pipeline.

Defines ``TypedDict`` structures for run records and per-solver summaries and
provides utilities to compute aggregate statistics across repeated runs.
"""
from __future__ import annotations

import statistics
from typing import Any, Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class RunRecord(TypedDict):
    solver: str
    n: int
    seed: Optional[int]
    success: bool
    time: float
    memory_kb: float
    peak_kb: float
    iterations: int
    evals: int
    runs: int
    best_conflicts: Optional[int]
    timeout: bool
    solution: Optional[List[int]]


class SolverSummary(TypedDict, total=False):
    skipped: bool
    success_rate: float
    timeout_rate: float
    failure_rate: float
    total_runs: int
    successes: int
    failures: int
    timeouts: int
    all_time: StatsSummary
    all_memory_kb: StatsSummary
    all_iterations: StatsSummary
    all_evals: StatsSummary
    success_time: StatsSummary
    success_iterations: StatsSummary
    failure_best_conflicts: StatsSummary
    raw_runs: List[RunRecord]


# results[solver_label][N] -> SolverSummary
ComparisonResults = Dict[str, Dict[int, SolverSummary]]

METRICS = ["time", "memory_kb", "peak_kb", "iterations", "evals", "runs", "best_conflicts"]


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps expected. Values <= 0 are coerced to 1.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th/75th
    percentiles and range. On empty input every numeric field is ``None`` and
    ``count`` is 0 so CSV and plot generation stay consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)
    min_val = sorted_vals[0]
    max_val = sorted_vals[-1]

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def compute_grouped_statistics(records: List[RunRecord]) -> Dict[str, Any]:
    """Aggregate run records by outcome group (success, failure, timeout).

    Returns rates, counters and ``<group>_<metric>`` summaries for every
    metric in ``METRICS`` present in the records; ``None`` values (e.g. the
    best cost of a timed out run) are left out of the summaries.
    """
    successes = [r for r in records if r["success"]]
    timeouts = [r for r in records if r["timeout"]]
    failures = [r for r in records if not r["success"] and not r["timeout"]]
    total = len(records)

    stats: Dict[str, Any] = {
        "total_runs": total,
        "successes": len(successes),
        "failures": len(failures),
        "timeouts": len(timeouts),
        "success_rate": len(successes) / total if total else 0.0,
        "timeout_rate": len(timeouts) / total if total else 0.0,
        "failure_rate": len(failures) / total if total else 0.0,
    }

    for group, group_records in (("all", records), ("success", successes), ("timeout", timeouts), ("failure", failures)):
        for metric in METRICS:
            values = [r[metric] for r in group_records if r.get(metric) is not None]  # type: ignore[misc]
            if values:
                stats[f"{group}_{metric}"] = compute_detailed_statistics(values)

    return stats
