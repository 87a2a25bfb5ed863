"""Shared helpers for the test suite."""

from collections import deque


class ScriptedRandom:
    """Random source replaying scripted values, for exercising exact branches."""

    def __init__(self, randoms=(), randranges=(), choices=()):
        self._randoms = deque(randoms)
        self._randranges = deque(randranges)
        self._choices = deque(choices)

    def random(self):
        return self._randoms.popleft()

    def randrange(self, stop):
        value = self._randranges.popleft()
        assert 0 <= value < stop, f"scripted randrange {value} outside [0, {stop})"
        return value

    def choice(self, seq):
        index = self._choices.popleft()
        return seq[index]


def attacks(solution):
    """Return the attacking column pairs of ``solution`` using the raw definition."""
    pairs = []
    for i in range(len(solution)):
        for j in range(len(solution)):
            if i == j:
                continue
            if solution[i] == solution[j] or abs(solution[i] - solution[j]) == abs(i - j):
                pairs.append((i, j))
    return pairs
