"""Utility helpers for the N-Queens project.

This module provides the low-level primitives every solver depends upon: the
objective function (pairwise conflict count), its column-scoped variant, and
board initializers that draw from an explicitly owned random source.

Representation
--------------
Boards are encoded as a 1D list where ``board[col] = row``. Rows may repeat
(free assignment) unless the caller maintains the permutation invariant.
"""

from __future__ import annotations

import random
from collections import Counter
from typing import List, Sequence


def conflicts(board: Sequence[int]) -> int:
    """Compute the number of conflicts in O(N^2).

    Every column pair ``(i, j)`` with ``i < j`` adds one for a shared row and
    one for a shared diagonal. This is the objective minimized by all local
    search solvers; zero means the board is a solution.
    """
    n = len(board)
    total = 0
    for i in range(n):
        for j in range(i + 1, n):
            if board[i] == board[j]:
                total += 1
            if abs(board[i] - board[j]) == j - i:
                total += 1
    return total


def conflicts_by_lines(board: Sequence[int]) -> int:
    """Compute the same conflict count in O(N) using line occupancy counts.

    Uses hash maps to count queens per row and per diagonal. It agrees with
    ``conflicts`` on every board and is used for validation and cross-checks.
    """
    row_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for column, row in enumerate(board):
        row_count[row] += 1
        diag1[row - column] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(row_count) + _pairs(diag1) + _pairs(diag2)


def column_conflicts(board: Sequence[int], column: int) -> int:
    """Return the conflicts of the queen in ``column`` against all others, in O(N).

    Each conflicting pair is seen from both of its endpoints, so summing this
    over all columns counts every pair twice.
    """
    row = board[column]
    total = 0
    for other, other_row in enumerate(board):
        if other == column:
            continue
        if other_row == row:
            total += 1
        if abs(other_row - row) == abs(other - column):
            total += 1
    return total


def conflicted_columns(board: Sequence[int]) -> List[int]:
    """Return the columns whose queen is attacked by at least one other queen."""
    return [column for column in range(len(board)) if column_conflicts(board, column) > 0]


def random_permutation(size: int, rng: random.Random) -> List[int]:
    """Return a uniform random permutation of ``range(size)`` (one queen per row)."""
    board = list(range(size))
    rng.shuffle(board)
    return board


def random_assignment(size: int, rng: random.Random) -> List[int]:
    """Return a free assignment where every column draws an independent row."""
    return [rng.randrange(size) for _ in range(size)]


def is_valid_solution(board: Sequence[int]) -> bool:
    """Return True if the board represents a valid N-Queens solution.

    Contract
    - Input: sequence of length N where board[col] = row (0-based indices)
    - Valid if: all 0 <= row < N and no pairs of queens attack each other
    - Implementation: range check + conflicts_by_lines(board) == 0
    """
    n = len(board)
    if n == 0:
        return False
    for row in board:
        if not isinstance(row, int):
            return False
        if row < 0 or row >= n:
            return False
    # Columns are unique by representation
    return conflicts_by_lines(board) == 0
