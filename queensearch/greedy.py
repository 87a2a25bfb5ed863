"""Greedy hill-climbing solver for the N-Queens problem.

The board starts as a free random assignment ``board[col] = row``. Every
iteration performs a best-improvement sweep: each column is tentatively moved
to every other row and the full-board conflict count is recomputed. The single
best move of the sweep is committed when it strictly improves the board;
otherwise the search is stuck in a local optimum and the board is redrawn at
random.

Complexity
----------
A sweep evaluates N*(N-1) candidate moves at O(N^2) each, i.e. O(N^3) per
iteration. Iteration counts reported by the solver depend on this exact
procedure, so incremental delta evaluation is intentionally not used.
"""

from __future__ import annotations

import random
from typing import Optional

from .base import Solver
from .utils import conflicts, random_assignment


class GreedySolver(Solver):
    """Hill climbing with random restarts on local optima.

    Parameters
    ----------
    size : int
        Board dimension N.
    seed, rng
        Random source configuration (see ``Solver``).
    max_iterations : int, default 10000
        Iteration cap; reaching it without a solution is a normal failure.
    """

    label = "greedy"
    title = "Greedy Search"

    def __init__(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        max_iterations: int = 10000,
    ):
        super().__init__(size, seed=seed, rng=rng)
        self.max_iterations = max_iterations
        self.board = [0] * size

    def solve(self) -> bool:
        self._solution = None
        self._reset_stats()
        self.runs = 1
        self.board = random_assignment(self.size, self.rng)

        for _ in range(self.max_iterations):
            self.iterations += 1
            current = conflicts(self.board)
            self.evaluations += 1
            self._note_cost(current)
            if current == 0:
                self._store_solution(self.board)
                return True

            best_move = None
            best_conflicts = current
            for column in range(self.size):
                original_row = self.board[column]
                for row in range(self.size):
                    if row == original_row:
                        continue
                    self.board[column] = row
                    candidate = conflicts(self.board)
                    self.evaluations += 1
                    if candidate < best_conflicts:
                        best_conflicts = candidate
                        best_move = (column, row)
                self.board[column] = original_row

            if best_move is None:
                # Local optimum: no single move improves the board
                self.board = random_assignment(self.size, self.rng)
            else:
                column, row = best_move
                self.board[column] = row

        return False
