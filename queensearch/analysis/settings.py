"""Global settings for the N-Queens comparison pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`queensearch.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board sizes to compare (in ascending order)
N_VALUES: List[int] = [10, 15, 20, 30, 50, 100, 200]

# Solvers to run, by registry label
ALGORITHMS: List[str] = ["exhaustive", "greedy", "sa", "ga"]

# Independent runs per solver and N (stochastic solvers benefit from more)
RUNS: int = 1

# Base seed; run k of a solver uses SEED + k. None draws fresh entropy.
SEED: Optional[int] = None

# Size caps: larger boards are reported as skipped for these solvers
EXHAUSTIVE_MAX_N: int = 20
GREEDY_MAX_N: int = 50

# Boards are printed after a successful run only up to this size
SHOW_SOLUTION_MAX_N: int = 20

# Wall-clock limit per run in seconds (None = no limit). A run that hits the
# limit counts as a failure flagged with timeout=True.
TIME_LIMIT: Optional[float] = None

# Output directory for CSV and charts
OUT_DIR: str = "results_nqueens"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# When True, output filenames carry RUN_ID so successive runs do not collide
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")


def max_n_for(label: str) -> Optional[int]:
    """Return the size cap for a solver label, or None when uncapped."""
    if label == "exhaustive":
        return EXHAUSTIVE_MAX_N
    if label == "greedy":
        return GREEDY_MAX_N
    return None


def set_time_limit(time_limit: Optional[float]) -> None:
    """Configure the per-run wall-clock limit and print the active value."""
    global TIME_LIMIT
    TIME_LIMIT = time_limit
    print(f"Time limit per run: {TIME_LIMIT}s" if TIME_LIMIT else "Time limit per run: unlimited")
