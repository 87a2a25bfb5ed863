"""
Comparison and orchestration package for the N-Queens solvers.

This package contains:
- settings: global knobs, size caps and time limit
- stats: typed run records, summaries and aggregation helpers
- experiments: single, timed, raced and batched solver runs
- reporting: console lines and CSV exports
- plots: comparison charts
- config_manager: JSON configuration file access
- cli: top-level pipelines and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    ComparisonResults,
    ProgressPrinter,
    RunRecord,
    SolverSummary,
    StatsSummary,
    compute_detailed_statistics,
    compute_grouped_statistics,
)

__all__ = [
    # types
    "StatsSummary",
    "RunRecord",
    "SolverSummary",
    "ComparisonResults",
    # utils
    "compute_detailed_statistics",
    "compute_grouped_statistics",
    "ProgressPrinter",
    # settings module
    "settings",
]
