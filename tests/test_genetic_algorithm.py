"""Tests for genetic algorithm inputs selection."""

from __future__ import annotations

import numpy as np
import pytest

from conftest import ConstantEvaluator, FailingEvaluator, FakeClock, MaskEvaluator
from structure_search import (
    CrossoverMethod,
    FitnessAssignment,
    GeneticAlgorithm,
    GeneticConfig,
    InitializationMethod,
    StoppingCondition,
    VariableUse,
)


def _ga(evaluator, seed=0, clock=None, **options) -> GeneticAlgorithm:
    options.setdefault('display', False)
    options.setdefault('population_size', 6)
    options.setdefault('maximum_generalization_failures', 100)
    return GeneticAlgorithm(evaluator, GeneticConfig(**options), seed=seed, clock=clock or FakeClock())


class TestPopulation:

    def test_initialize(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, population_size=8)
        population = ga.initialize_population()
        assert population.shape == (8, 6)
        assert population.any(axis=1).all()

    def test_evaluate_fills_performance_matrix(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, population_size=8)
        ga.initialize_population()
        performance = ga.evaluate_population()
        assert len(mask_evaluator.calls) == 8
        expected = [mask_evaluator.generalization(m) for m in ga.population]
        assert np.allclose(performance[:, 1], expected)
        assert np.allclose(performance[:, 0], np.array(expected) / 2)

    def test_fitness_requires_evaluation(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator)
        ga.initialize_population()
        with pytest.raises(RuntimeError):
            ga.calculate_fitness()

    def test_generation_best_is_lowest_error(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, population_size=10)
        ga.initialize_population()
        ga.evaluate_population()
        assert ga.get_generation_best_index() == int(np.argmin(ga.performance[:, 1]))

    def test_optimal_index_needs_an_evaluated_generation(self, mask_evaluator: MaskEvaluator) -> None:
        with pytest.raises(RuntimeError):
            _ga(mask_evaluator).get_optimal_individual_index()

    def test_selection_sizes(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, population_size=5, elitism_size=2)
        ga.initialize_population()
        ga.evaluate_population()
        ga.calculate_fitness()
        elite, parents = ga.perform_selection()
        assert len(elite) == 2 and len(parents) == 4
        assert ga.perform_crossover().shape == (3, 6)
        assert ga.evolve_population().shape == (5, 6)
        assert np.isnan(ga.performance).all()

    def test_weighted_initialization_uses_importance(self) -> None:

        class Importance(MaskEvaluator):
            def calculate_input_importance(self):
                return np.array([0.0, 1.0, 0.0, 0.0])

        ga = _ga(Importance([True, True, False, False]),
                 initialization_method=InitializationMethod.WEIGHTED)
        population = ga.initialize_population()
        assert population[:, 1].all()
        assert not population[:, [0, 2, 3]].any()


class TestElitism:

    def test_elite_survives_unchanged(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, seed=3, population_size=4, elitism_size=2, mutation_rate=0.0)
        ga.initialize_population()
        ga.evaluate_population()
        fitness = ga.calculate_fitness()
        elite = ga.population[np.argsort(-fitness, kind='stable')[:2]].copy()
        population = ga.evolve_population()
        assert np.array_equal(population[:2], elite)

    def test_elite_of_first_generation_is_reevaluated_in_second(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, seed=3, population_size=4, elitism_size=2, mutation_rate=0.0,
                 maximum_iterations_number=1)
        results = ga.perform_inputs_selection()
        assert results.outcome.iterations_number == 2
        calls = mask_evaluator.calls
        first = [mask_evaluator.generalization(m) for m in calls[:4]]
        order = np.argsort(first, kind='stable')[:2]
        assert np.array_equal(calls[4], calls[order[0]])
        assert np.array_equal(calls[5], calls[order[1]])

    @pytest.mark.parametrize("fitness", list(FitnessAssignment))
    def test_best_never_degrades(self, mask_evaluator: MaskEvaluator, fitness) -> None:
        ga = _ga(mask_evaluator, seed=11, elitism_size=1, mutation_rate=0.3,
                 fitness_assignment_method=fitness, maximum_iterations_number=8)
        results = ga.perform_inputs_selection()
        minimum = results.extras.minimum_history
        assert len(minimum) == 9
        assert all(b <= a for a, b in zip(minimum, minimum[1:]))

    def test_best_fitness_never_decreases(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, seed=5, elitism_size=2, mutation_rate=0.2,
                 fitness_assignment_method=FitnessAssignment.OBJECTIVE_BASED)
        ga.initialize_population()
        best = []
        for _ in range(6):
            ga.evaluate_population()
            best.append(ga.calculate_fitness().max())
            ga.evolve_population()
        assert all(b >= a for a, b in zip(best, best[1:]))

    def test_reusing_elite_performance_skips_evaluations(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, population_size=4, elitism_size=2, maximum_iterations_number=1,
                 reuse_elite_performance=True)
        ga.perform_inputs_selection()
        assert len(mask_evaluator.calls) == 4 + 2 + 1


class TestNoEmptyIndividuals:

    @pytest.mark.parametrize("crossover", list(CrossoverMethod))
    def test_every_evaluated_mask_has_an_input(self, crossover) -> None:
        evaluator = MaskEvaluator([False, False, False, True])
        ga = _ga(evaluator, seed=2, population_size=10, mutation_rate=1.0, crossover_method=crossover,
                 maximum_iterations_number=6)
        ga.perform_inputs_selection()
        assert all(mask.any() for mask in evaluator.calls)


class TestStopping:

    def test_maximum_iterations(self, mask_evaluator: MaskEvaluator) -> None:
        results = _ga(mask_evaluator, maximum_iterations_number=3).perform_inputs_selection()
        assert results.stopping_condition == StoppingCondition.MAXIMUM_ITERATIONS
        assert results.outcome.iterations_number == 4
        assert len(mask_evaluator.calls) == 4 * 6 + 1

    def test_goal_reached(self, mask_evaluator: MaskEvaluator) -> None:
        results = _ga(mask_evaluator, generalization_performance_goal=10.0).perform_inputs_selection()
        assert results.stopping_condition == StoppingCondition.GOAL_REACHED
        assert results.outcome.iterations_number == 1
        assert len(mask_evaluator.calls) == 7

    def test_maximum_time(self, mask_evaluator: MaskEvaluator) -> None:
        results = _ga(mask_evaluator, clock=FakeClock(tick=10.0), maximum_time=5.0).perform_inputs_selection()
        assert results.stopping_condition == StoppingCondition.MAXIMUM_TIME
        assert results.outcome.iterations_number == 1

    def test_generations_without_improvement(self) -> None:
        evaluator = ConstantEvaluator([True, False, True])
        results = _ga(evaluator, maximum_generalization_failures=2).perform_inputs_selection()
        assert results.stopping_condition == StoppingCondition.MAXIMUM_FAILURES
        assert results.outcome.iterations_number == 3
        assert np.array_equal(results.optimal_structure, evaluator.calls[0])

    def test_improvement_within_tolerance_counts_as_failure(self) -> None:

        class SlowlyImproving(MaskEvaluator):
            # every generation of six is 0.01 better than the previous one
            def generalization(self, mask) -> float:
                return 0.5 - 0.01 * ((len(self.calls) - 1) // 6)

        evaluator = SlowlyImproving([True, False, True])
        results = _ga(evaluator, tolerance=0.05, maximum_generalization_failures=2).perform_inputs_selection()
        assert results.stopping_condition == StoppingCondition.MAXIMUM_FAILURES
        assert results.outcome.iterations_number == 3
        assert results.outcome.final_generalization_performance == pytest.approx(0.48)


class TestFinalization:

    def test_optimum_is_installed(self, mask_evaluator: MaskEvaluator) -> None:
        results = _ga(mask_evaluator, seed=4, maximum_iterations_number=5).perform_inputs_selection()
        optimal = results.optimal_structure
        history = results.history.generalization_performance_data
        assert results.outcome.final_generalization_performance == min(history)
        assert results.outcome.final_generalization_performance == mask_evaluator.generalization(optimal)
        assert results.outcome.final_training_performance == pytest.approx(mask_evaluator.generalization(optimal) / 2)
        installed_mask, parameters = mask_evaluator.installed
        assert np.array_equal(installed_mask, optimal)
        assert np.array_equal(parameters, optimal.astype(float))
        assert np.array_equal(results.outcome.minimal_parameters, parameters)

    def test_unselected_inputs_are_marked_unused(self, mask_evaluator: MaskEvaluator) -> None:
        original = mask_evaluator.get_variable_uses()
        ga = _ga(mask_evaluator, maximum_iterations_number=2)
        results = ga.perform_inputs_selection()
        assert ga.original_uses == original
        uses = mask_evaluator.get_variable_uses()
        for use, keep in zip(uses[:6], results.optimal_structure):
            assert use == (VariableUse.INPUT if keep else VariableUse.UNUSED)
        assert uses[6] == VariableUse.TARGET

    def test_history_holds_best_of_each_generation(self, mask_evaluator: MaskEvaluator) -> None:
        results = _ga(mask_evaluator, maximum_iterations_number=2, reserve_parameters_data=True,
                      reserve_generation_mean=False).perform_inputs_selection()
        h = results.history
        assert len(h.structure_data) == len(h.parameters_data) == 3
        assert results.extras.mean_history == []
        assert results.extras.minimum_history == h.generalization_performance_data

    def test_optimal_index_points_at_discovering_generation(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, seed=4, maximum_iterations_number=5)
        results = ga.perform_inputs_selection()
        history = results.history.generalization_performance_data
        index = ga.get_optimal_individual_index()
        assert index == int(np.argmin(history))
        assert np.array_equal(results.history.structure_data[index], results.optimal_structure)
        assert np.array_equal(ga.optimal_inputs, results.optimal_structure)

    def test_optimal_index_ties_keep_earliest_generation(self) -> None:
        ga = _ga(ConstantEvaluator([True, True, True]), maximum_iterations_number=3)
        ga.perform_inputs_selection()
        assert ga.generation == 4
        assert ga.get_optimal_individual_index() == 0

    def test_same_seed_same_run(self) -> None:
        a, b = MaskEvaluator([True, False, True, True]), MaskEvaluator([True, False, True, True])
        _ga(a, seed=7, maximum_iterations_number=4).perform_inputs_selection()
        _ga(b, seed=7, maximum_iterations_number=4).perform_inputs_selection()
        assert len(a.calls) == len(b.calls)
        assert all(np.array_equal(x, y) for x, y in zip(a.calls, b.calls))


class TestErrors:

    def test_crossover_point_outside_inputs(self, mask_evaluator: MaskEvaluator) -> None:
        ga = _ga(mask_evaluator, crossover_method=CrossoverMethod.ONE_POINT, crossover_first_point=6)
        with pytest.raises(ValueError):
            ga.perform_inputs_selection()

    def test_evaluator_failure_propagates_and_restores_uses(self) -> None:
        evaluator = FailingEvaluator([True, False])
        original = evaluator.get_variable_uses()
        with pytest.raises(RuntimeError, match="diverged"):
            _ga(evaluator).perform_inputs_selection()
        assert evaluator.get_variable_uses() == original
