"""Quick regression tests for the N-Queens comparison pipeline."""

from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensearch.analysis import cli


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_solvers_and_csv_generation(self):
        """Ensure every solver and the CSV export succeed for N=8."""
        cli.run_quick_regression_tests()


if __name__ == "__main__":
    unittest.main()
