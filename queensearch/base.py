"""Common solver contract and restart policy.

Every solver in the package is constructed with the board dimension and an
optional random source, runs with ``solve()`` and exposes the winning board
through ``get_solution()``. Failure to find a zero-conflict board is a normal
outcome reported as ``False``, never an exception.

Determinism
-----------
Each instance owns a ``random.Random``. Pass ``seed`` (or a ready ``rng``)
to make a run reproducible; instances never touch the module-level ``random``
state, so independent solvers can run side by side or in worker processes.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .render import print_solution


class Solver:
    """Base class holding the shared state of a solver.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1).
    seed : int | None
        Seed for the owned random source. Ignored when ``rng`` is given.
    rng : random.Random | None
        Explicit random source, for callers that manage seeding themselves.

    Attributes
    ----------
    iterations : int
        Loop iterations (or generations, or nodes) spent by the last ``solve``.
    evaluations : int
        Objective evaluations performed by the last ``solve``.
    runs : int
        Independent attempts used by the last ``solve``.
    best_cost : int | None
        Lowest conflict count observed by the last ``solve`` (0 on success).

    Raises
    ------
    ValueError
        If ``size`` is not an integer >= 1.
    """

    label = "solver"
    title = "Solver"

    def __init__(self, size: int, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        if isinstance(size, bool) or not isinstance(size, int):
            raise ValueError(f"Board size must be an integer, got {size!r}")
        if size < 1:
            raise ValueError(f"Board size must be >= 1, got {size}")
        self.size = size
        self.rng = rng if rng is not None else random.Random(seed)
        self._solution: Optional[Tuple[int, ...]] = None
        self._reset_stats()

    def _reset_stats(self) -> None:
        self.iterations = 0
        self.evaluations = 0
        self.runs = 0
        self.best_cost: Optional[int] = None

    def _note_cost(self, cost: int) -> None:
        if self.best_cost is None or cost < self.best_cost:
            self.best_cost = cost

    def _store_solution(self, board: Sequence[int]) -> None:
        """Snapshot ``board`` as the solution; later changes to it do not leak in."""
        self._solution = tuple(board)
        self.best_cost = 0

    @property
    def solved(self) -> bool:
        return self._solution is not None

    def solve(self) -> bool:
        raise NotImplementedError

    def get_solution(self) -> Optional[List[int]]:
        """Return a copy of the solution found by ``solve``, or None."""
        if self._solution is None:
            return None
        return list(self._solution)

    def print_solution(self) -> None:
        print_solution(f"{self.title} Solution for N={self.size}:", self.get_solution())


class RestartingSolver(Solver):
    """Solver that performs up to ``restarts`` independent runs.

    Subclasses implement ``_single_run`` which initializes fresh state, runs
    one bounded search and returns True on success. The first successful run
    ends the search.
    """

    def __init__(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        restarts: int = 5,
    ):
        super().__init__(size, seed=seed, rng=rng)
        if restarts < 1:
            raise ValueError(f"restarts must be >= 1, got {restarts}")
        self.restarts = restarts

    def solve(self) -> bool:
        self._solution = None
        self._reset_stats()
        for _ in range(self.restarts):
            self.runs += 1
            if self._single_run():
                return True
        return False

    def _single_run(self) -> bool:
        raise NotImplementedError
