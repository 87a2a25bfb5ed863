"""Lookup of solver classes by short label.

Labels are the ones used on the command line and in result tables:
``exhaustive``, ``greedy``, ``sa`` and ``ga``.
"""

from __future__ import annotations

from typing import Dict, Type

from .backtracking import BacktrackingSolver
from .base import Solver
from .genetic import GeneticSolver
from .greedy import GreedySolver
from .simulated_annealing import SimulatedAnnealingSolver

SOLVERS: Dict[str, Type[Solver]] = {
    "exhaustive": BacktrackingSolver,
    "greedy": GreedySolver,
    "sa": SimulatedAnnealingSolver,
    "ga": GeneticSolver,
}

# Display names used in console tables and charts
SOLVER_NAMES: Dict[str, str] = {
    "exhaustive": "Exhaustive DFS",
    "greedy": "Greedy Hill Climbing",
    "sa": "Simulated Annealing",
    "ga": "Genetic Algorithm",
}


def get_solver_class(label: str) -> Type[Solver]:
    """Return the solver class registered under ``label`` (case-insensitive).

    Raises
    ------
    ValueError
        If the label is unknown.
    """
    try:
        return SOLVERS[label.strip().lower()]
    except KeyError as exc:
        raise ValueError(
            f"Unknown solver: {label}. Available: " + ", ".join(SOLVERS)
        ) from exc
