#!/usr/bin/env python3
"""
Strategy Primitive Tests
========================

Distance model, acceptance rule, genetic operators and stats sampling.
Runs under pytest or directly as a script.
"""

import math
import os
import sys
import traceback

import numpy as np

# Make the package importable when run as a script from a checkout
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

from tsp_playground.config import Config, AnnealingConfig, GAConfig, StatsConfig
from tsp_playground.geometry import Point, DistanceMatrix, pairwise_distance, tour_length, random_points
from tsp_playground.metrics import StatsReporter
from tsp_playground.optimization import (
    Mode,
    acceptance_probability,
    decay_temperature,
    pick_swap_pair,
    TourIndividual,
    GeneticOperators,
    ordered_crossover,
)
from tsp_playground.optimization.ga import swap_mutation, reverse_mutation


def _square():
    return [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]


def _is_permutation(genes, n):
    return len(genes) == n and sorted(int(g) for g in genes) == list(range(n))


def test_config():
    """Configuration defaults and validation"""
    print("Testing configuration...")

    config = Config()
    assert config.annealing.initial_temperature == 1000.0
    assert config.ga.pop_size == 50
    assert config.ga.tournament_k == 5
    assert config.stats.interval <= 0.1

    config = Config.from_dict({'random_seed': 3, 'ga': {'pop_size': 20}})
    assert config.random_seed == 3
    assert config.ga.pop_size == 20
    assert config.to_dict()['ga']['pop_size'] == 20
    assert set(config.to_dict()) == {'annealing', 'ga', 'stats', 'random_seed'}

    for bad in (lambda: AnnealingConfig(decay_rate=-0.1),
                lambda: AnnealingConfig(initial_temperature=0.0),
                lambda: GAConfig(pop_size=1),
                lambda: GAConfig(mutation_rate=1.5),
                lambda: StatsConfig(interval=0.0)):
        try:
            bad()
        except ValueError:
            continue
        raise AssertionError("invalid configuration accepted")

    print("Configuration test passed!\n")


def test_distance_model():
    """Pairwise distance and closed tour length"""
    print("Testing distance model...")

    a, b = Point(0, 0), Point(3, 4)
    assert pairwise_distance(a, b) == 5.0
    assert pairwise_distance(b, a) == 5.0
    assert pairwise_distance(a, Point(0, 0)) == 0.0

    assert tour_length([]) == 0.0
    assert tour_length([a]) == 0.0
    assert tour_length([a, b]) == 10.0
    assert math.isclose(tour_length(_square()), 40.0)

    rng = np.random.default_rng(1)
    for _ in range(20):
        tour = random_points(int(rng.integers(2, 15)), rng=rng)
        length = tour_length(tour)
        assert length >= 0
        assert math.isclose(tour_length(tour[::-1]), length)

        i, j = pick_swap_pair(rng, len(tour))
        swapped = list(tour)
        swapped[i], swapped[j] = swapped[j], swapped[i]
        swapped[i], swapped[j] = swapped[j], swapped[i]
        assert tour_length(swapped) == length

    print("Distance model test passed!\n")


def test_distance_matrix():
    """Matrix scoring agrees with the live distance model"""
    print("Testing distance matrix...")

    rng = np.random.default_rng(2)
    points = random_points(12, rng=rng)
    matrix = DistanceMatrix(points)

    order = rng.permutation(12)
    expected = tour_length([points[i] for i in order])
    assert math.isclose(matrix.length(order), expected)

    population = np.stack([rng.permutation(12) for _ in range(5)])
    lengths = matrix.lengths(population)
    for row, length in zip(population, lengths):
        assert math.isclose(length, tour_length([points[i] for i in row]))

    assert DistanceMatrix([]).length(np.zeros(0, dtype=int)) == 0.0
    assert DistanceMatrix(points[:1]).length(np.array([0])) == 0.0

    print("Distance matrix test passed!\n")


def test_acceptance_probability():
    """Acceptance rule for both local search modes"""
    print("Testing acceptance probability...")

    for mode in (Mode.HILL_CLIMBING, Mode.SIMULATED_ANNEALING):
        assert acceptance_probability(10.0, 9.0, 100.0, mode) == 1.0
        assert acceptance_probability(10.0, 10.0, 100.0, mode) == 0.0

    assert acceptance_probability(10.0, 11.0, 100.0, Mode.HILL_CLIMBING) == 0.0
    assert acceptance_probability(10.0, 1e9, 1e9, Mode.HILL_CLIMBING) == 0.0

    p = acceptance_probability(10.0, 12.0, 4.0, Mode.SIMULATED_ANNEALING)
    assert math.isclose(p, math.exp(-0.5))
    assert 0.0 < p < 1.0

    # Exponent overflows to -inf: clamped, never NaN
    p = acceptance_probability(0.0, 1e300, 1e-300, Mode.SIMULATED_ANNEALING)
    assert p == 0.0

    assert acceptance_probability(10.0, 11.0, 0.0, Mode.SIMULATED_ANNEALING) == 0.0

    print("Acceptance probability test passed!\n")


def test_temperature_decay():
    """Wall-clock exponential cooling"""
    print("Testing temperature decay...")

    assert math.isclose(decay_temperature(1000.0, 0.1, 1.0, 1e-9), 900.0)
    assert decay_temperature(1000.0, 0.0, 5.0, 1e-9) == 1000.0
    # A huge step never reaches zero or below
    assert decay_temperature(1000.0, 1.0, 10.0, 1e-9) == 1e-9

    print("Temperature decay test passed!\n")


def test_ordered_crossover():
    """Crossover always yields a permutation of the parents' genes"""
    print("Testing ordered crossover...")

    p1 = np.array([0, 1, 2, 3, 4])
    p2 = np.array([4, 3, 2, 1, 0])
    assert list(ordered_crossover(p1, p2, 0)) == [4, 3, 2, 1, 0]
    assert list(ordered_crossover(p1, p2, 5)) == [0, 1, 2, 3, 4]
    # parent2's genes at 3 and 4 are already taken, so parent1 supplies them
    assert list(ordered_crossover(p1, p2, 2)) == [0, 1, 2, 3, 4]

    # Backward scan from the last position
    child = ordered_crossover(np.array([0, 1, 2, 3]), np.array([1, 2, 3, 0]), 1)
    assert list(child) == [0, 2, 3, 1]

    rng = np.random.default_rng(3)
    for _ in range(300):
        n = int(rng.integers(1, 25))
        a, b = rng.permutation(n), rng.permutation(n)
        cut = int(rng.integers(n + 1))
        child = ordered_crossover(a, b, cut)
        assert _is_permutation(child, n)
        assert list(child[:cut]) == list(a[:cut])

    print("Ordered crossover test passed!\n")


def test_mutation():
    """Swap and reversal keep the genome a permutation"""
    print("Testing mutation...")

    genes = np.array([0, 1, 2, 3, 4, 5])
    swap_mutation(genes, 1, 4)
    assert list(genes) == [0, 4, 2, 3, 1, 5]

    genes = np.array([0, 1, 2, 3, 4, 5])
    reverse_mutation(genes, 4, 1)
    assert list(genes) == [0, 4, 3, 2, 1, 5]

    operators = GeneticOperators(mutation_rate=1.0, rng=np.random.default_rng(4))
    ind = operators.create_random_individual(30)
    ind.fitness = 1.0
    for _ in range(200):
        assert operators.mutate(ind)
        assert _is_permutation(ind.genes, 30)
    assert ind.fitness == float('inf')

    never = GeneticOperators(mutation_rate=0.0, rng=np.random.default_rng(4))
    ind = never.create_random_individual(10)
    before = ind.genes.copy()
    assert not never.mutate(ind)
    assert np.array_equal(before, ind.genes)

    print("Mutation test passed!\n")


def test_tournament_selection():
    """Fittest of a pool drawn with replacement"""
    print("Testing tournament selection...")

    population = [TourIndividual(genes=np.arange(3), fitness=float(f))
                  for f in (5, 3, 8, 1, 9, 4)]

    operators = GeneticOperators(tournament_k=3, rng=np.random.default_rng(5))
    replay = np.random.default_rng(5)
    for _ in range(20):
        picks = replay.integers(len(population), size=3)
        expected = min((population[i] for i in picks), key=lambda x: x.fitness)
        assert operators.tournament_select(population) is expected

    # Pool larger than the population is fine with replacement
    big = GeneticOperators(tournament_k=50, rng=np.random.default_rng(6))
    assert big.tournament_select(population[:2]) in population[:2]

    print("Tournament selection test passed!\n")


def test_crossover_operator():
    """Operator-level crossover on individuals"""
    print("Testing crossover operator...")

    operators = GeneticOperators(rng=np.random.default_rng(7))
    p1 = operators.create_random_individual(40)
    p2 = operators.create_random_individual(40)
    for _ in range(50):
        child = operators.crossover(p1, p2)
        assert _is_permutation(child.genes, 40)
        assert child.fitness == float('inf')

    print("Crossover operator test passed!\n")


def test_stats_reporter():
    """Cadence-limited throughput sampling"""
    print("Testing stats reporter...")

    now = [0.0]
    reporter = StatsReporter(interval=0.1, clock=lambda: now[0])
    reporter.start()

    reporter.record(50, acceptance=1.0)
    reporter.record(50, acceptance=0.0)
    now[0] = 0.05
    assert reporter.tick(10.0) is None

    now[0] = 0.2
    snapshot = reporter.tick(9.0, temperature=500.0)
    assert snapshot is not None
    assert math.isclose(snapshot.throughput, 100 / 0.2)
    assert snapshot.average_acceptance_probability == 0.5
    assert snapshot.temperature == 500.0
    assert snapshot.best_length == 9.0
    assert snapshot.work_units == 100

    reporter.record(5)
    now[0] = 0.35
    snapshot = reporter.tick(8.0)
    assert math.isclose(snapshot.throughput, 5 / 0.15)
    assert snapshot.average_acceptance_probability is None
    assert snapshot.timestamp == 0.35

    print("Stats reporter test passed!\n")


def test_mode_names():
    """Mode parsing from CLI aliases"""
    assert Mode.from_name('hill') is Mode.HILL_CLIMBING
    assert Mode.from_name('SA') is Mode.SIMULATED_ANNEALING
    assert Mode.from_name('genetic') is Mode.GENETIC
    assert Mode.from_name('simulated-annealing') is Mode.SIMULATED_ANNEALING


def run_all_tests():
    """Run all tests"""
    print("=" * 60)
    print("STRATEGY PRIMITIVE TESTS")
    print("=" * 60 + "\n")

    tests = [
        ("Configuration", test_config),
        ("Distance Model", test_distance_model),
        ("Distance Matrix", test_distance_matrix),
        ("Acceptance Probability", test_acceptance_probability),
        ("Temperature Decay", test_temperature_decay),
        ("Ordered Crossover", test_ordered_crossover),
        ("Mutation", test_mutation),
        ("Tournament Selection", test_tournament_selection),
        ("Crossover Operator", test_crossover_operator),
        ("Stats Reporter", test_stats_reporter),
        ("Mode Names", test_mode_names),
    ]

    results = []
    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True, None))
        except Exception as e:
            print(f"  ✗ EXCEPTION: {e}")
            traceback.print_exc()
            results.append((name, False, str(e)))

    print("=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)

    passed = sum(1 for _, s, _ in results if s)
    for name, success, error in results:
        status = "✓ PASS" if success else "✗ FAIL"
        print(f"  {status}: {name}")
        if error:
            print(f"         Error: {error}")

    print(f"\nTotal: {passed}/{len(results)} tests passed")
    print("=" * 60)
    return passed == len(results)


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
