"""Simulated Annealing solver for the N-Queens problem.

Each run starts from a uniform random permutation ``board[col] = row``, which
removes every row conflict up front and leaves only diagonal conflicts to
resolve. Neighbors are produced by one of three strategies and accepted with
the Metropolis criterion while the temperature cools geometrically.

Neighbor strategies
-------------------
- 60%: swap the rows of two distinct random columns (keeps the permutation).
- 20%: take a random column currently in conflict and move it to the row
  that minimizes its own conflicts.
- 20%: take a uniformly random column and move it to a row that strictly
  lowers its own conflicts, if any.

Drift recovery
--------------
Every 100 iterations, if the current cost exceeds twice the best cost of the
run, the working board is reset to the best board and the temperature is set
to half the initial temperature (instead of cooling on that iteration).

Contract (public API)
---------------------
- ``SimulatedAnnealingSolver(size, seed=None, rng=None, **params)``
- ``solve() -> bool`` runs up to ``restarts`` independent runs.
- ``get_solution()`` returns the conflict-free board or None.
"""

from __future__ import annotations

import math
import random
from typing import List, Optional

from .base import RestartingSolver
from .utils import column_conflicts, conflicted_columns, conflicts, random_permutation


SWAP_PROBABILITY = 0.6
CONFLICTED_MOVE_PROBABILITY = 0.2
DRIFT_CHECK_INTERVAL = 100


class SimulatedAnnealingSolver(RestartingSolver):
    """Simulated annealing with adaptive reheat and independent restarts.

    Parameters
    ----------
    size : int
        Board dimension N.
    seed, rng
        Random source configuration (see ``Solver``).
    initial_temp : float | None
        Starting temperature; defaults to ``N**2`` so it scales with the size.
    cooling_rate : float, default 0.99
        Geometric cooling factor applied once per iteration.
    min_temp : float, default 0.01
        The run ends when the temperature drops to this floor.
    max_iterations : int | None
        Iteration cap per run; defaults to ``N * 1000``.
    restarts : int, default 5
        Maximum number of independent runs.
    """

    label = "sa"
    title = "Simulated Annealing"

    def __init__(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        initial_temp: Optional[float] = None,
        cooling_rate: float = 0.99,
        min_temp: float = 0.01,
        max_iterations: Optional[int] = None,
        restarts: int = 5,
    ):
        super().__init__(size, seed=seed, rng=rng, restarts=restarts)
        self.initial_temp = float(size * size) if initial_temp is None else initial_temp
        self.cooling_rate = cooling_rate
        self.min_temp = min_temp
        self.max_iterations = size * 1000 if max_iterations is None else max_iterations
        self.board: List[int] = []

    def _single_run(self) -> bool:
        self.board = random_permutation(self.size, self.rng)

        temperature = self.initial_temp
        current_cost = conflicts(self.board)
        self.evaluations += 1
        self._note_cost(current_cost)
        best_cost = current_cost
        best_board = self.board[:]

        iteration = 0
        while iteration < self.max_iterations and temperature > self.min_temp:
            if current_cost == 0:
                self._store_solution(self.board)
                return True
            self.iterations += 1

            neighbor = self._neighbor()
            neighbor_cost = conflicts(neighbor)
            self.evaluations += 1
            delta = neighbor_cost - current_cost

            if delta <= 0 or math.exp(-delta / temperature) > self.rng.random():
                self.board = neighbor
                current_cost = neighbor_cost
                if current_cost < best_cost:
                    best_cost = current_cost
                    best_board = self.board[:]
                    self._note_cost(best_cost)

            if iteration % DRIFT_CHECK_INTERVAL == 0 and current_cost > best_cost * 2:
                # Drifted too far from the best board: anchor back and reheat
                self.board = best_board[:]
                current_cost = best_cost
                temperature = self.initial_temp * 0.5
            else:
                temperature *= self.cooling_rate
            iteration += 1

        self.board = best_board[:]
        if best_cost == 0:
            self._store_solution(self.board)
            return True
        return False

    def _neighbor(self) -> List[int]:
        """Return a modified copy of the working board."""
        neighbor = self.board[:]
        strategy = self.rng.random()

        if strategy < SWAP_PROBABILITY:
            if self.size > 1:
                first, second = self.rng.sample(range(self.size), 2)
                neighbor[first], neighbor[second] = neighbor[second], neighbor[first]
        elif strategy < SWAP_PROBABILITY + CONFLICTED_MOVE_PROBABILITY:
            candidates = conflicted_columns(self.board)
            if candidates:
                column = self.rng.choice(candidates)
                neighbor[column] = self._min_conflict_row(neighbor, column)
        else:
            column = self.rng.randrange(self.size)
            current_row = neighbor[column]
            best_row = current_row
            min_conflicts = column_conflicts(neighbor, column)
            for row in range(self.size):
                if row == current_row:
                    continue
                neighbor[column] = row
                row_conflicts = column_conflicts(neighbor, column)
                if row_conflicts < min_conflicts:
                    min_conflicts = row_conflicts
                    best_row = row
            neighbor[column] = best_row

        return neighbor

    def _min_conflict_row(self, board: List[int], column: int) -> int:
        """Return the row other than the current one with the fewest column conflicts.

        ``board`` is restored before returning. With a single row available the
        pick falls back to a random row.
        """
        current_row = board[column]
        best_row = self.rng.randrange(self.size)
        min_conflicts = None
        for row in range(self.size):
            if row == current_row:
                continue
            board[column] = row
            row_conflicts = column_conflicts(board, column)
            if min_conflicts is None or row_conflicts < min_conflicts:
                min_conflicts = row_conflicts
                best_row = row
        board[column] = current_row
        return best_row
