"""Genetic Algorithm solver for the N-Queens problem.

This module implements a permutation-oriented Genetic Algorithm (GA). The
representation is a length-N list where ``chromosome[col] = row`` and the
fitness is the number of conflicts (lower is better, zero is a solution).

Algorithm outline
-----------------
- Initial population: independent uniform random permutations.
- Every generation: evaluate and sort ascending; stop on fitness zero.
- Elitism: the best ``elite_size`` individuals are copied unchanged.
- Reproduction: tournament selection, order crossover (OX) with probability
  ``crossover_rate``, otherwise cloning; each child is mutated with the
  current mutation rate.
- Stagnation: after 20 generations without improvement of the best fitness
  the mutation rate doubles and the worst 20% of the population is replaced
  by fresh permutations; after 50 generations the run is abandoned.

Permutations are not an invariant of chromosomes: swap mutation preserves
them, but conflict-directed repair and random gene mutation may assign a row
already in use. This keeps diversity at the cost of reintroducing row
conflicts, which the objective penalizes.

Contract (public API)
---------------------
- ``GeneticSolver(size, seed=None, rng=None, **params)``
- ``solve() -> bool`` runs up to ``restarts`` independent runs.
- ``get_solution()`` returns the conflict-free board or None.
- ``order_crossover`` and ``mutate`` are exposed for reuse and testing.
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from .base import RestartingSolver
from .utils import column_conflicts, conflicted_columns, conflicts, random_permutation


class Individual:
    """A chromosome with its cached fitness.

    The fitness is ``None`` until evaluated and is invalidated every time the
    chromosome is replaced through ``set_chromosome``.
    """

    __slots__ = ("chromosome", "fitness")

    def __init__(self, chromosome: List[int], fitness: Optional[int] = None):
        self.chromosome = chromosome
        self.fitness = fitness

    def set_chromosome(self, chromosome: List[int]) -> None:
        self.chromosome = chromosome
        self.fitness = None

    def copy_from(self, other: "Individual") -> None:
        self.chromosome = other.chromosome[:]
        self.fitness = other.fitness

    def evaluate(self) -> int:
        self.fitness = conflicts(self.chromosome)
        return self.fitness

    def sort_key(self) -> int:
        if self.fitness is None:
            raise ValueError("Individual has not been evaluated")
        return self.fitness

    def __repr__(self) -> str:
        return f"Individual({self.chromosome!r}, fitness={self.fitness!r})"


def order_crossover(parent1: Sequence[int], parent2: Sequence[int], rng: random.Random) -> List[int]:
    """Return one child of ``parent1`` and ``parent2`` using Order Crossover (OX).

    A random inclusive segment ``[start, end]`` of ``parent1`` is copied to the
    same positions of the child. The remaining positions, starting right after
    ``end`` and wrapping around, receive the values of ``parent2`` read in
    cyclic order from ``end + 1`` that do not occur in the copied segment.

    For two permutations the child is a permutation. Non-permutation parents
    may repeat values outside the segment; positions that ``parent2`` cannot
    fill keep row 0.
    """
    n = len(parent1)
    start = rng.randrange(n)
    end = rng.randrange(n)
    if start > end:
        start, end = end, start

    child = [0] * n
    segment = set()
    for index in range(start, end + 1):
        child[index] = parent1[index]
        segment.add(parent1[index])

    free_slots = n - (end - start + 1)
    child_index = (end + 1) % n
    filled = 0
    for offset in range(n):
        if filled == free_slots:
            break
        value = parent2[(end + 1 + offset) % n]
        if value in segment:
            continue
        child[child_index] = value
        child_index = (child_index + 1) % n
        filled += 1

    return child


def _random_gene(chromosome: List[int], rng: random.Random) -> None:
    column = rng.randrange(len(chromosome))
    chromosome[column] = rng.randrange(len(chromosome))


def mutate(chromosome: List[int], rng: random.Random) -> None:
    """Mutate ``chromosome`` in place with one of three operators.

    - 50%: swap two random positions (permutation-preserving).
    - 30%: conflict-directed repair. A random conflicted column tries up to 3
      random rows and keeps the one strictly lowering its own conflicts. When
      no column is in conflict a random gene is reassigned instead.
    - 20%: assign a random row to a random column.
    """
    n = len(chromosome)
    strategy = rng.random()

    if strategy < 0.5:
        first = rng.randrange(n)
        second = rng.randrange(n)
        chromosome[first], chromosome[second] = chromosome[second], chromosome[first]
    elif strategy < 0.8:
        candidates = conflicted_columns(chromosome)
        if not candidates:
            _random_gene(chromosome, rng)
            return
        column = rng.choice(candidates)
        original_row = chromosome[column]
        best_row = original_row
        min_conflicts = column_conflicts(chromosome, column)
        for _ in range(3):
            row = rng.randrange(n)
            if row == original_row:
                continue
            chromosome[column] = row
            row_conflicts = column_conflicts(chromosome, column)
            if row_conflicts < min_conflicts:
                min_conflicts = row_conflicts
                best_row = row
        chromosome[column] = best_row
    else:
        _random_gene(chromosome, rng)


def default_population_size(size: int) -> int:
    """Population size used for a board of dimension ``size``."""
    if size > 40:
        return 150
    if size > 20:
        return 120
    return 80


class GeneticSolver(RestartingSolver):
    """Genetic Algorithm with elitism, OX crossover and adaptive mutation.

    Parameters
    ----------
    size : int
        Board dimension N.
    seed, rng
        Random source configuration (see ``Solver``).
    pop_size : int | None
        Population size; defaults to 80, 120 for N > 20 and 150 for N > 40.
    max_gen : int, default 200
        Generation cap per run.
    mutation_rate : float, default 0.15
        Base mutation probability per child.
    stagnation_mutation_rate : float, default 0.30
        Mutation probability while the run is stagnating.
    crossover_rate : float, default 0.85
        Probability of producing a child by crossover instead of cloning.
    tournament_size : int, default 5
        Tournament sample size, clamped to the population size.
    stagnation_limit : int, default 20
        Generations without improvement before diversity is injected.
    abandon_limit : int, default 50
        Generations without improvement before the run is abandoned.
    restarts : int, default 5
        Maximum number of independent runs.
    """

    label = "ga"
    title = "Genetic Algorithm"

    def __init__(
        self,
        size: int,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        pop_size: Optional[int] = None,
        max_gen: int = 200,
        mutation_rate: float = 0.15,
        stagnation_mutation_rate: float = 0.30,
        crossover_rate: float = 0.85,
        tournament_size: int = 5,
        stagnation_limit: int = 20,
        abandon_limit: int = 50,
        restarts: int = 5,
    ):
        super().__init__(size, seed=seed, rng=rng, restarts=restarts)
        self.pop_size = default_population_size(size) if pop_size is None else pop_size
        if self.pop_size < 1:
            raise ValueError(f"pop_size must be >= 1, got {self.pop_size}")
        self.max_gen = max_gen
        self.base_mutation_rate = mutation_rate
        self.stagnation_mutation_rate = stagnation_mutation_rate
        self.mutation_rate = mutation_rate
        self.crossover_rate = crossover_rate
        self.tournament_size = min(tournament_size, self.pop_size)
        self.elite_size = min(max(self.pop_size // 10, 2), 10, self.pop_size)
        self.stagnation_limit = stagnation_limit
        self.abandon_limit = abandon_limit
        self.population: List[Individual] = []
        self._next_population: List[Individual] = []

    def _single_run(self) -> bool:
        self.mutation_rate = self.base_mutation_rate
        self.population = [
            Individual(random_permutation(self.size, self.rng)) for _ in range(self.pop_size)
        ]
        self._next_population = [Individual([]) for _ in range(self.pop_size)]

        stagnation = 0
        best_fitness_ever = self.size * self.size

        for _ in range(self.max_gen):
            self.iterations += 1
            self._evaluate_population()

            best = self.population[0]
            if best.fitness == 0:
                self._store_solution(best.chromosome)
                return True

            if best.fitness < best_fitness_ever:
                best_fitness_ever = best.fitness
                stagnation = 0
            else:
                stagnation += 1

            if stagnation > self.abandon_limit:
                break

            if stagnation > self.stagnation_limit:
                self.mutation_rate = self.stagnation_mutation_rate
                self._inject_diversity()
            else:
                self.mutation_rate = self.base_mutation_rate

            self._breed_next_generation()

        self._evaluate_population()
        if self.population[0].fitness == 0:
            self._store_solution(self.population[0].chromosome)
            return True
        return False

    def _evaluate_population(self) -> None:
        """Evaluate every individual and sort the population, best first."""
        for individual in self.population:
            individual.evaluate()
        self.evaluations += len(self.population)
        self.population.sort(key=Individual.sort_key)
        self._note_cost(self.population[0].sort_key())

    def _inject_diversity(self) -> None:
        """Replace the worst 20% of the population with fresh permutations."""
        for individual in self.population[self.pop_size * 4 // 5:]:
            individual.set_chromosome(random_permutation(self.size, self.rng))
            individual.evaluate()
            self.evaluations += 1

    def _breed_next_generation(self) -> None:
        """Fill the next-generation buffer from the current one, then swap them."""
        current = self.population
        upcoming = self._next_population

        for index in range(self.elite_size):
            upcoming[index].copy_from(current[index])

        for index in range(self.elite_size, self.pop_size):
            if self.rng.random() < self.crossover_rate:
                parent1 = self._tournament()
                parent2 = self._tournament()
                child = order_crossover(parent1.chromosome, parent2.chromosome, self.rng)
            else:
                child = self._tournament().chromosome[:]
            if self.rng.random() < self.mutation_rate:
                mutate(child, self.rng)
            upcoming[index].set_chromosome(child)

        self.population, self._next_population = upcoming, current

    def _tournament(self) -> Individual:
        """Return the fittest of ``tournament_size`` individuals drawn at random."""
        best = self.population[self.rng.randrange(self.pop_size)]
        for _ in range(1, self.tournament_size):
            candidate = self.population[self.rng.randrange(self.pop_size)]
            if candidate.sort_key() < best.sort_key():
                best = candidate
        return best
