"""Tests for the exhaustive baseline and the heuristic cross-check."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensearch import (
    BacktrackingSolver,
    GeneticSolver,
    GreedySolver,
    SimulatedAnnealingSolver,
    is_valid_solution,
)


class BacktrackingSolverTests(unittest.TestCase):
    """Deterministic depth-first search."""

    def test_first_solutions(self):
        expected = {
            1: [0],
            4: [1, 3, 0, 2],
            5: [0, 2, 4, 1, 3],
            6: [1, 3, 5, 0, 2, 4],
            8: [0, 4, 7, 5, 2, 6, 1, 3],
        }
        for size, solution in expected.items():
            solver = BacktrackingSolver(size)
            self.assertTrue(solver.solve(), size)
            self.assertEqual(solver.get_solution(), solution)

    def test_no_solution_for_two_and_three(self):
        for size in (2, 3):
            solver = BacktrackingSolver(size)
            self.assertFalse(solver.solve())
            self.assertIsNone(solver.get_solution())
            self.assertFalse(solver.timed_out)
            self.assertGreater(solver.iterations, 0)

    def test_larger_board(self):
        solver = BacktrackingSolver(20)
        self.assertTrue(solver.solve())
        self.assertTrue(is_valid_solution(solver.get_solution()))

    def test_time_limit(self):
        solver = BacktrackingSolver(28, time_limit=0.0)
        self.assertFalse(solver.solve())
        self.assertTrue(solver.timed_out)

    def test_deterministic(self):
        first = BacktrackingSolver(10)
        second = BacktrackingSolver(10, seed=99)
        first.solve()
        second.solve()
        self.assertEqual(first.get_solution(), second.get_solution())
        self.assertEqual(first.iterations, second.iterations)


class CrossCheckTests(unittest.TestCase):
    """Where the exhaustive search succeeds, some heuristic succeeds too."""

    def test_heuristics_agree_with_exhaustive_search(self):
        for size in range(1, 9):
            exact = BacktrackingSolver(size).solve()
            heuristic = False
            for seed in range(5):
                for solver_cls in (SimulatedAnnealingSolver, GeneticSolver, GreedySolver):
                    solver = solver_cls(size, seed=seed)
                    if solver.solve():
                        self.assertTrue(is_valid_solution(solver.get_solution()))
                        heuristic = True
                        break
                if heuristic or not exact:
                    break
            self.assertEqual(heuristic, exact, f"N={size}")


if __name__ == "__main__":
    unittest.main()
