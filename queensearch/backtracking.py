"""Exhaustive backtracking baseline for the N-Queens problem.

Depth-first placement column by column, rows tried top to bottom, so the first
solution found is the lexicographically smallest one (``[1, 3, 0, 2]`` for
N=4, ``[0, 4, 7, 5, 2, 6, 1, 3]`` for N=8). The solver is deterministic and is
used as a baseline and regression oracle for the stochastic solvers.

Implementation overview
-----------------------
- State: ``positions[c] = r`` for placed columns, ``-1`` otherwise.
- Constraint tracking: ``row_used[r]``, ``diag1_used[r-c+offset]`` and
  ``diag2_used[r+c]`` with ``offset = size - 1`` give O(1) safety checks.
- Search: iterative depth-first search with explicit backtracking, avoiding
  Python's recursion limit for larger boards.
- ``iterations`` counts candidate placements examined.
"""

from __future__ import annotations

import random
from time import perf_counter
from typing import Optional

from .base import Solver


class BacktrackingSolver(Solver):
    """Deterministic exhaustive search.

    Parameters
    ----------
    size : int
        Board dimension N.
    time_limit : float | None
        Optional wall-clock limit in seconds; on expiry ``solve`` reports
        failure and ``timed_out`` is set.
    seed, rng
        Accepted for interface parity with the stochastic solvers; unused.
    """

    label = "exhaustive"
    title = "Exhaustive Search"

    def __init__(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        time_limit: Optional[float] = None,
    ):
        super().__init__(size, seed=seed, rng=rng)
        self.time_limit = time_limit
        self.timed_out = False

    def solve(self) -> bool:
        self._solution = None
        self._reset_stats()
        self.runs = 1
        self.timed_out = False

        size = self.size
        offset = size - 1
        positions = [-1] * size
        row_used = [False] * size
        diag1_used = [False] * (2 * size - 1)
        diag2_used = [False] * (2 * size - 1)

        column = 0
        row = 0
        start = perf_counter()

        while 0 <= column < size:
            if self.time_limit is not None and (perf_counter() - start) > self.time_limit:
                self.timed_out = True
                return False

            placed = False
            while row < size:
                self.iterations += 1
                if not row_used[row] and not diag1_used[row - column + offset] and not diag2_used[row + column]:
                    positions[column] = row
                    row_used[row] = True
                    diag1_used[row - column + offset] = True
                    diag2_used[row + column] = True
                    placed = True
                    break
                row += 1

            if placed:
                if column == size - 1:
                    self._store_solution(positions)
                    return True
                column += 1
                row = 0
                continue

            # Exhausted all rows in this column; undo the previous decision
            column -= 1
            if column >= 0:
                previous_row = positions[column]
                positions[column] = -1
                row_used[previous_row] = False
                diag1_used[previous_row - column + offset] = False
                diag2_used[previous_row + column] = False
                row = previous_row + 1

        return False
