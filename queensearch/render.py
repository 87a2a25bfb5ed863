"""ASCII rendering of N-Queens boards."""

from __future__ import annotations

from typing import Optional, Sequence


def render_board(solution: Sequence[int], queen: str = "Q", empty: str = ".") -> str:
    """Return the board as text, one line per row.

    Line ``r`` holds ``queen`` in column ``c`` when ``solution[c] == r`` and
    ``empty`` elsewhere; cells are separated by a single space.
    """
    n = len(solution)
    lines = []
    for row in range(n):
        cells = [queen if solution[column] == row else empty for column in range(n)]
        lines.append(" ".join(cells))
    return "\n".join(lines)


def print_solution(title: str, solution: Optional[Sequence[int]]) -> None:
    """Print ``title`` followed by the rendered board, or a no-solution notice."""
    if solution is None:
        print("No solution found")
        return
    print(title)
    print(render_board(solution))
    print()
