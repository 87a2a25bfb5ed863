"""Console formatting and CSV export for comparison results.

Console lines follow the layout of the comparison table::

    Simulated Annealing : Time:     12.41 ms, Memory:       38 KB (Peak: 51 KB), Success: True

CSV exports are built as ``pandas`` DataFrames: one compact row per
(solver, N) with aggregate metrics, and one row per raw run.
"""
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

import pandas as pd

from . import settings
from .stats import ComparisonResults, RunRecord

SUMMARY_METRICS = ["time", "memory_kb", "peak_kb", "iterations", "evals", "runs"]


def format_duration(seconds: float) -> str:
    """Return a compact human-readable duration (µs, ms or s)."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.1f} µs"
    if seconds < 1.0:
        return f"{seconds * 1e3:.2f} ms"
    return f"{seconds:.3f} s"


def format_run_line(name: str, record: RunRecord) -> str:
    """Format one run as a fixed-width console line."""
    line = (
        f"{name:<20}: Time: {format_duration(record['time']):>12}, "
        f"Memory: {record['memory_kb']:>8.0f} KB (Peak: {record['peak_kb']:.0f} KB), "
        f"Success: {record['success']}"
    )
    if record["timeout"]:
        line += " (timeout)"
    return line


def format_skipped_line(name: str) -> str:
    return f"{name:<20}: Time: {'SKIPPED':>12}, Memory: {'N/A':>8}, Success: N/A (too large)"


def _suffix() -> str:
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        return f"_{settings.RUN_ID}"
    return ""


def results_to_frame(results: ComparisonResults) -> pd.DataFrame:
    """Return one row per (solver, N) with rates and mean/median metrics."""
    rows: List[Dict[str, Any]] = []
    for label, per_n in results.items():
        for N, entry in sorted(per_n.items()):
            row: Dict[str, Any] = {
                "solver": label,
                "n": N,
                "skipped": entry.get("skipped", False),
                "total_runs": entry.get("total_runs", 0),
                "successes": entry.get("successes", 0),
                "failures": entry.get("failures", 0),
                "timeouts": entry.get("timeouts", 0),
                "success_rate": entry.get("success_rate", 0.0),
                "timeout_rate": entry.get("timeout_rate", 0.0),
            }
            for metric in SUMMARY_METRICS:
                summary = entry.get(f"all_{metric}", {}) or {}
                row[f"{metric}_mean"] = summary.get("mean")
                row[f"{metric}_median"] = summary.get("median")
            success_time = entry.get("success_time", {}) or {}
            row["success_time_mean"] = success_time.get("mean")
            failure_best = entry.get("failure_best_conflicts", {}) or {}
            row["failure_best_conflicts_min"] = failure_best.get("min")
            rows.append(row)
    return pd.DataFrame(rows)


def raw_runs_to_frame(results: ComparisonResults) -> pd.DataFrame:
    """Return one row per executed run; solutions are stored as space-separated rows."""
    rows: List[Dict[str, Any]] = []
    for per_n in results.values():
        for entry in per_n.values():
            for record in entry.get("raw_runs", []):
                row = dict(record)
                solution = record["solution"]
                row["solution"] = " ".join(str(v) for v in solution) if solution is not None else ""
                rows.append(row)
    columns = list(RunRecord.__annotations__)
    return pd.DataFrame(rows, columns=columns)


def save_results_to_csv(results: ComparisonResults, out_dir: str, filename: Optional[str] = None) -> str:
    """Write the per-(solver, N) summary to CSV and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, filename or f"results_summary{_suffix()}.csv")
    results_to_frame(results).to_csv(path, index=False)
    print(f"Saved summary CSV: {path}")
    return path


def save_raw_data_to_csv(results: ComparisonResults, out_dir: str, filename: Optional[str] = None) -> str:
    """Write every raw run record to CSV and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, filename or f"results_raw{_suffix()}.csv")
    raw_runs_to_frame(results).to_csv(path, index=False)
    print(f"Saved raw runs CSV: {path}")
    return path
