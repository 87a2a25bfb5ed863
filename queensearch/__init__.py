"""N-Queens local search, metaheuristic and baseline solvers."""

from .backtracking import BacktrackingSolver
from .base import RestartingSolver, Solver
from .genetic import GeneticSolver, Individual, mutate, order_crossover
from .greedy import GreedySolver
from .render import print_solution, render_board
from .simulated_annealing import SimulatedAnnealingSolver
from .solvers import SOLVER_NAMES, SOLVERS, get_solver_class
from .utils import (
    column_conflicts,
    conflicted_columns,
    conflicts,
    conflicts_by_lines,
    is_valid_solution,
)

__all__ = [
    "Solver",
    "RestartingSolver",
    "BacktrackingSolver",
    "GreedySolver",
    "SimulatedAnnealingSolver",
    "GeneticSolver",
    "Individual",
    "order_crossover",
    "mutate",
    "render_board",
    "print_solution",
    "SOLVERS",
    "SOLVER_NAMES",
    "get_solver_class",
    "conflicts",
    "conflicts_by_lines",
    "column_conflicts",
    "conflicted_columns",
    "is_valid_solution",
]
