"""Charts for solver comparison results.

Files written to ``out_dir`` (suffix ``_<RUN_ID>`` when stamping is enabled):

- 01_success_rate_vs_N.png: success rate per solver as N grows.
    - X: N (board size). Y: success rate in [0, 1].
- 02_time_vs_N_log_scale.png: mean time of successful runs per solver.
    - X: N. Y: time [s] on a log scale; solvers without successes are omitted.
- 03_time_distribution.png: spread of run times per solver and N.
    - X: N. Y: time [s] (log scale), one box per solver (seaborn).
"""
from __future__ import annotations

import os
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from . import settings  # noqa: E402
from .reporting import raw_runs_to_frame  # noqa: E402
from .stats import ComparisonResults  # noqa: E402
from queensearch.solvers import SOLVER_NAMES  # noqa: E402

MARKERS = {"exhaustive": "o", "greedy": "D", "sa": "s", "ga": "^"}


def _suffix() -> str:
    if settings.DATE_IN_FILENAMES and settings.RUN_ID:
        return f"_{settings.RUN_ID}"
    return ""


def _ran_sizes(results: ComparisonResults, label: str) -> List[int]:
    return sorted(N for N, entry in results[label].items() if not entry.get("skipped") and entry.get("total_runs", 0) > 0)


def plot_success_rate(results: ComparisonResults, out_dir: str) -> str:
    """Plot success rate vs N for every solver and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    all_sizes: List[int] = []
    for label in results:
        sizes = _ran_sizes(results, label)
        if not sizes:
            continue
        all_sizes.extend(sizes)
        rates = [results[label][N].get("success_rate", 0.0) for N in sizes]
        plt.plot(sizes, rates, marker=MARKERS.get(label, "o"), linewidth=2, markersize=8, label=SOLVER_NAMES[label])
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Success rate", fontsize=12)
    plt.title("Success Rate vs Problem Size", fontsize=14)
    plt.ylim(-0.05, 1.05)
    if all_sizes:
        plt.xticks(np.unique(all_sizes))
        plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)

    fname = os.path.join(out_dir, f"01_success_rate_vs_N{_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved success-rate chart: {fname}")
    return fname


def plot_time_vs_n(results: ComparisonResults, out_dir: str) -> str:
    """Plot the mean time of successful runs vs N (log scale) and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    plt.figure(figsize=(12, 8))
    plotted = False
    for label in results:
        sizes = [N for N in _ran_sizes(results, label) if (results[label][N].get("success_time") or {}).get("mean") is not None]
        if not sizes:
            continue
        times = np.array([results[label][N]["success_time"]["mean"] for N in sizes], dtype=float)
        plt.semilogy(sizes, np.maximum(times, 1e-6), marker=MARKERS.get(label, "o"), linewidth=2, markersize=8, label=SOLVER_NAMES[label])
        plotted = True
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Average time [s] (log scale)", fontsize=12)
    plt.title("Execution Time vs Problem Size\n(Successful runs only)", fontsize=14)
    if plotted:
        plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)

    fname = os.path.join(out_dir, f"02_time_vs_N_log_scale{_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved execution-time chart (log scale): {fname}")
    return fname


def plot_time_distribution(results: ComparisonResults, out_dir: str) -> str:
    """Box plot of run times per solver and N and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    frame = raw_runs_to_frame(results)
    plt.figure(figsize=(12, 8))
    if not frame.empty:
        frame = frame.assign(
            algorithm=frame["solver"].map(SOLVER_NAMES),
            time=np.maximum(frame["time"].astype(float), 1e-6),
        )
        ax = sns.boxplot(data=frame, x="n", y="time", hue="algorithm")
        ax.set_yscale("log")
    plt.xlabel("N (board size)", fontsize=12)
    plt.ylabel("Time [s] (log scale)", fontsize=12)
    plt.title("Run Time Distribution", fontsize=14)

    fname = os.path.join(out_dir, f"03_time_distribution{_suffix()}.png")
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved time-distribution chart: {fname}")
    return fname


def plot_and_save(results: ComparisonResults, out_dir: str) -> List[str]:
    """Generate every chart and return the written file paths."""
    return [
        plot_success_rate(results, out_dir),
        plot_time_vs_n(results, out_dir),
        plot_time_distribution(results, out_dir),
    ]
