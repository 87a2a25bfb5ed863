"""Tests for the genetic algorithm solver and its operators."""

from pathlib import Path
import random
import sys
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from queensearch import GeneticSolver, Individual, is_valid_solution, mutate, order_crossover
from queensearch.genetic import default_population_size
from queensearch.utils import random_permutation
from tests.helpers import ScriptedRandom, attacks


class OrderCrossoverTests(unittest.TestCase):
    """OX child construction."""

    def test_segment_and_cyclic_fill(self):
        parent1 = [0, 1, 2, 3, 4, 5, 6, 7]
        parent2 = [7, 6, 5, 4, 3, 2, 1, 0]
        # Segment drawn reversed (end=4, start=2) and reordered to [2, 4]
        rng = ScriptedRandom(randranges=[4, 2])
        self.assertEqual(order_crossover(parent1, parent2, rng), [6, 5, 2, 3, 4, 1, 0, 7])

    def test_full_segment_copies_parent1(self):
        rng = ScriptedRandom(randranges=[0, 4])
        self.assertEqual(order_crossover([3, 1, 4, 0, 2], [0, 1, 2, 3, 4], rng), [3, 1, 4, 0, 2])

    def test_permutation_parents_give_permutation_child(self):
        rng = random.Random(17)
        for size in (1, 2, 5, 8, 13):
            for _ in range(100):
                parent1 = random_permutation(size, rng)
                parent2 = random_permutation(size, rng)
                child = order_crossover(parent1, parent2, rng)
                self.assertEqual(sorted(child), list(range(size)))

    def test_parents_are_not_modified(self):
        rng = random.Random(2)
        parent1 = [2, 0, 3, 1]
        parent2 = [1, 3, 0, 2]
        order_crossover(parent1, parent2, rng)
        self.assertEqual(parent1, [2, 0, 3, 1])
        self.assertEqual(parent2, [1, 3, 0, 2])

    def test_non_permutation_parents_skip_only_segment_values(self):
        rng = ScriptedRandom(randranges=[0, 1])
        self.assertEqual(order_crossover([0, 0, 0, 0], [1, 1, 1, 1], rng), [0, 0, 1, 1])

        # Segment holds row 0 only, so parent2's repeated rows are copied as they come
        rng = ScriptedRandom(randranges=[0, 0])
        self.assertEqual(order_crossover([0, 1, 2, 3], [2, 2, 1, 1], rng), [0, 2, 1, 1])

    def test_unfilled_positions_keep_row_zero(self):
        rng = ScriptedRandom(randranges=[0, 0])
        self.assertEqual(order_crossover([3, 1, 2, 0], [3, 3, 3, 3], rng), [3, 0, 0, 0])

    def test_non_permutation_parents_keep_length_and_range(self):
        rng = random.Random(8)
        for _ in range(200):
            parent1 = [rng.randrange(7) for _ in range(7)]
            parent2 = [rng.randrange(7) for _ in range(7)]
            child = order_crossover(parent1, parent2, rng)
            self.assertEqual(len(child), 7)
            self.assertTrue(all(0 <= row < 7 for row in child))


class MutationTests(unittest.TestCase):
    """The three mutation operators."""

    def test_swap_mutation(self):
        chromosome = [0, 1, 2, 3]
        mutate(chromosome, ScriptedRandom(randoms=[0.2], randranges=[0, 3]))
        self.assertEqual(chromosome, [3, 1, 2, 0])

    def test_conflict_directed_repair_keeps_best_trial_row(self):
        chromosome = [0, 1, 2, 3]
        # Column 0 tries rows 2 (2 conflicts), 0 (current, skipped), 3 (1 conflict)
        mutate(chromosome, ScriptedRandom(randoms=[0.6], choices=[0], randranges=[2, 0, 3]))
        self.assertEqual(chromosome, [3, 1, 2, 3])

    def test_repair_without_improvement_leaves_gene(self):
        chromosome = [1, 1, 3, 0]
        # Column 1 (row 1) conflicts; trial rows 1 (skipped) and 0, 0 are worse or equal
        mutate(chromosome, ScriptedRandom(randoms=[0.6], choices=[1], randranges=[1, 0, 0]))
        self.assertEqual(chromosome, [1, 1, 3, 0])

    def test_repair_on_solution_falls_back_to_random_gene(self):
        chromosome = [1, 3, 0, 2]
        mutate(chromosome, ScriptedRandom(randoms=[0.6], randranges=[2, 2]))
        self.assertEqual(chromosome, [1, 3, 2, 2])

    def test_random_gene_mutation(self):
        chromosome = [1, 3, 0, 2]
        mutate(chromosome, ScriptedRandom(randoms=[0.95], randranges=[1, 1]))
        self.assertEqual(chromosome, [1, 1, 0, 2])

    def test_mutation_keeps_length_and_range(self):
        rng = random.Random(21)
        chromosome = random_permutation(10, rng)
        for _ in range(500):
            mutate(chromosome, rng)
            self.assertEqual(len(chromosome), 10)
            self.assertTrue(all(0 <= row < 10 for row in chromosome))


class IndividualTests(unittest.TestCase):
    """Fitness caching and invalidation."""

    def test_fitness_invalidated_on_new_chromosome(self):
        individual = Individual([0, 1, 2, 3])
        self.assertIsNone(individual.fitness)
        self.assertEqual(individual.evaluate(), 6)
        individual.set_chromosome([1, 3, 0, 2])
        self.assertIsNone(individual.fitness)
        with self.assertRaises(ValueError):
            individual.sort_key()
        self.assertEqual(individual.evaluate(), 0)

    def test_copy_from_is_independent(self):
        source = Individual([2, 0, 3, 1])
        source.evaluate()
        target = Individual([])
        target.copy_from(source)
        source.chromosome[0] = 0
        self.assertEqual(target.chromosome, [2, 0, 3, 1])
        self.assertEqual(target.fitness, 0)


class GeneticParameterTests(unittest.TestCase):
    """Size-dependent defaults and clamping."""

    def test_population_size_by_board_size(self):
        self.assertEqual(default_population_size(8), 80)
        self.assertEqual(default_population_size(20), 80)
        self.assertEqual(default_population_size(21), 120)
        self.assertEqual(default_population_size(40), 120)
        self.assertEqual(default_population_size(41), 150)

    def test_elite_and_tournament_clamping(self):
        self.assertEqual(GeneticSolver(8).elite_size, 8)
        self.assertEqual(GeneticSolver(50).elite_size, 10)
        self.assertEqual(GeneticSolver(8, pop_size=12).elite_size, 2)
        self.assertEqual(GeneticSolver(8, pop_size=3).tournament_size, 3)
        self.assertEqual(GeneticSolver(8).tournament_size, 5)

    def test_rejects_empty_population(self):
        with self.assertRaises(ValueError):
            GeneticSolver(8, pop_size=0)


class GenerationTests(unittest.TestCase):
    """Elitism, diversity injection and buffer swapping."""

    def setUp(self):
        self.solver = GeneticSolver(8, seed=5, pop_size=20)
        rng = random.Random(6)
        self.solver.population = [Individual(random_permutation(8, rng)) for _ in range(20)]
        self.solver._next_population = [Individual([]) for _ in range(20)]
        self.solver._evaluate_population()

    def test_population_sorted_best_first(self):
        fitness = [individual.fitness for individual in self.solver.population]
        self.assertEqual(fitness, sorted(fitness))

    def test_elites_survive_and_children_are_unevaluated(self):
        elites = [individual.chromosome[:] for individual in self.solver.population[:self.solver.elite_size]]
        previous_buffer = self.solver._next_population
        self.solver._breed_next_generation()
        self.assertIs(self.solver.population, previous_buffer)
        new_elites = [individual.chromosome for individual in self.solver.population[:self.solver.elite_size]]
        self.assertEqual(new_elites, elites)
        for individual in self.solver.population[self.solver.elite_size:]:
            self.assertIsNone(individual.fitness)
            self.assertEqual(len(individual.chromosome), 8)

    def test_diversity_injection_replaces_worst_fifth(self):
        kept = [individual.chromosome[:] for individual in self.solver.population[:16]]
        self.solver._inject_diversity()
        self.assertEqual([individual.chromosome for individual in self.solver.population[:16]], kept)
        for individual in self.solver.population[16:]:
            self.assertEqual(sorted(individual.chromosome), list(range(8)))
            self.assertIsNotNone(individual.fitness)


class GeneticSearchTests(unittest.TestCase):
    """End-to-end runs and failure reporting."""

    def test_solves_eight_queens(self):
        for seed in range(20):
            solver = GeneticSolver(8, seed=seed)
            if solver.solve():
                break
        self.assertTrue(solver.solved)
        solution = solver.get_solution()
        self.assertTrue(is_valid_solution(solution))
        self.assertEqual(attacks(solution), [])

    def test_solution_survives_further_evolution(self):
        solver = GeneticSolver(6, seed=1)
        if solver.solve():
            solution = solver.get_solution()
            solver.population[0].chromosome[0] = (solution[0] + 1) % 6
            self.assertEqual(solver.get_solution(), solution)

    def test_unsolvable_sizes_fail_after_all_restarts(self):
        for size in (2, 3):
            solver = GeneticSolver(size, seed=0)
            self.assertFalse(solver.solve())
            self.assertEqual(solver.runs, 5)
            self.assertGreater(solver.best_cost, 0)
            # Stagnation abandons each run long before the generation cap
            self.assertLess(solver.iterations, 5 * solver.max_gen)

    def test_same_seed_same_outcome(self):
        first = GeneticSolver(10, seed=13)
        second = GeneticSolver(10, seed=13)
        self.assertEqual(first.solve(), second.solve())
        self.assertEqual(first.get_solution(), second.get_solution())
        self.assertEqual(first.iterations, second.iterations)
        self.assertEqual(first.evaluations, second.evaluations)


class AdaptiveMutationTests(unittest.TestCase):
    """Mutation rate under stagnation and the check after the last generation."""

    def test_rate_rises_under_stagnation_and_resets_per_run(self):
        # N=3 boards never go below one conflict, so every run stagnates
        solver = GeneticSolver(3, seed=0, pop_size=20, restarts=2)
        rates = []
        injections = []
        breed = solver._breed_next_generation
        inject = solver._inject_diversity

        def recording_breed():
            rates.append(solver.mutation_rate)
            breed()

        def recording_inject():
            injections.append(solver.mutation_rate)
            inject()

        solver._breed_next_generation = recording_breed
        solver._inject_diversity = recording_inject
        self.assertFalse(solver.solve())

        # Stagnation 0..20 breeds at the base rate, 21..50 at the raised rate,
        # and the run is abandoned at 51 without breeding
        one_run = [0.15] * 21 + [0.30] * 30
        self.assertEqual(rates, one_run + one_run)
        self.assertEqual(injections, [0.30] * 60)
        self.assertEqual(solver.iterations, 2 * 52)
        self.assertEqual(solver.mutation_rate, 0.30)
        self.assertEqual(solver.best_cost, 1)

    def test_solution_bred_in_last_generation_is_found(self):
        solver = GeneticSolver(4, seed=0, pop_size=4, max_gen=1, restarts=1)

        def breed_solution():
            solver.population[-1].set_chromosome([1, 3, 0, 2])

        solver._breed_next_generation = breed_solution
        with mock.patch("queensearch.genetic.random_permutation", side_effect=lambda size, rng: [0, 1, 2, 3]):
            self.assertTrue(solver.solve())
        self.assertEqual(solver.get_solution(), [1, 3, 0, 2])
        self.assertEqual(solver.iterations, 1)
        self.assertEqual(solver.evaluations, 8)


if __name__ == "__main__":
    unittest.main()
