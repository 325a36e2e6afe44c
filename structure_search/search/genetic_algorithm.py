"""
Genetic Algorithm Inputs Selection
"""

import time
from typing import Callable, Optional, Tuple

import numpy as np

from ..core import (
    GeneticConfig,
    InitializationMethod,
    SelectionOutcome,
    SelectionResults,
    StoppingCondition,
    VariableUse,
    HistoryRecorder,
    GenerationRecorder,
    is_improvement,
)
from ..core.stopping import STOPPING_MESSAGES
from ..algorithms import GeneticOperations, create_initialization, create_crossover, create_fitness
from ..evaluation import Evaluator
from .base import SelectionAlgorithm


class GeneticAlgorithm(SelectionAlgorithm):
    """Selects a subset of the inputs by evolving a population of boolean masks"""

    xml_name = 'GeneticAlgorithm'
    config_class = GeneticConfig

    def __init__(self, evaluator: Evaluator, config: Optional[GeneticConfig] = None,
                 seed: Optional[int] = None, clock: Callable[[], float] = time.time):
        super().__init__(evaluator, config, clock)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.genetic = GeneticOperations()
        self.population = np.zeros((0, 0), dtype=bool)
        self.performance = np.zeros((0, 2))
        self.fitness = np.zeros(0)
        self.original_uses = []
        self.generation = 0
        self._elite = np.zeros((0, 0), dtype=bool)
        self._elite_performance = np.zeros((0, 2))
        self._parents = np.zeros((0, 0), dtype=bool)
        self._offspring = np.zeros((0, 0), dtype=bool)
        self.optimal_inputs = None
        self.optimal_performance = np.full(2, np.nan)
        self.optimal_generation = -1

    @property
    def inputs_number(self) -> int:
        return self.evaluator.inputs_number

    def _crossover(self):
        return create_crossover(self.cfg.crossover_method, self.cfg.crossover_first_point,
                                self.cfg.crossover_second_point)

    def initialize_population(self) -> np.ndarray:
        n = self.inputs_number
        if n == 0:
            raise ValueError("There are no inputs to select from")
        weights = None
        if self.cfg.initialization_method == InitializationMethod.WEIGHTED:
            weights = self.evaluator.calculate_input_importance()
        initialization = create_initialization(self.cfg.initialization_method, weights)
        self.population = initialization.initialize(self.cfg.population_size, n, self.rng)
        self.performance = np.full((len(self.population), 2), np.nan)
        self.fitness = np.full(len(self.population), np.nan)
        return self.population

    def evaluate_population(self) -> np.ndarray:
        performance = np.full((len(self.population), 2), np.nan)
        reused = 0
        if self.cfg.reuse_elite_performance and len(self._elite_performance):
            reused = len(self._elite_performance)
            performance[:reused] = self._elite_performance
        for i in range(reused, len(self.population)):
            performance[i] = self.calculate_performances(self.population[i])
        self.performance = performance
        return self.performance

    def calculate_fitness(self) -> np.ndarray:
        if np.isnan(self.performance).any():
            raise RuntimeError("Population must be evaluated before assigning fitness")
        fitness = create_fitness(self.cfg.fitness_assignment_method, self.cfg.selective_pressure)
        self.fitness = fitness.assign(self.performance[:, 1])
        return self.fitness

    def perform_selection(self) -> Tuple[np.ndarray, np.ndarray]:
        """Copy the elite and draw parents by roulette wheel for the remaining slots"""
        elite_size = min(self.cfg.elitism_size, len(self.population))
        elite = self.genetic.select_elite(self.fitness, elite_size)
        self._elite = self.population[elite].copy()
        self._elite_performance = self.performance[elite].copy()

        remaining = len(self.population) - elite_size
        parents = self.genetic.roulette_wheel(self.fitness, remaining + remaining % 2, self.rng)
        self._parents = self.population[parents].copy()
        return self._elite, self._parents

    def perform_crossover(self) -> np.ndarray:
        crossover = self._crossover()
        remaining = len(self.population) - len(self._elite)
        offspring = []
        for i in range(0, len(self._parents) - 1, 2):
            offspring.extend(crossover.cross(self._parents[i], self._parents[i + 1], self.rng))
        self._offspring = np.array(offspring[:remaining], dtype=bool).reshape(remaining, self.inputs_number)
        return self._offspring

    def perform_mutation(self) -> np.ndarray:
        for i in range(len(self._offspring)):
            self._offspring[i] = self.genetic.mutate(self._offspring[i], self.cfg.mutation_rate, self.rng)
        return self._offspring

    def evolve_population(self) -> np.ndarray:
        self.perform_selection()
        self.perform_crossover()
        self.perform_mutation()
        self.population = np.vstack([self._elite, self._offspring])
        self.performance = np.full((len(self.population), 2), np.nan)
        self.fitness = np.full(len(self.population), np.nan)
        return self.population

    def get_generation_best_index(self) -> int:
        """Index in the current population of the lowest generalization performance, earliest on ties"""
        return int(np.argmin(self.performance[:, 1]))

    def update_optimum(self) -> bool:
        """Adopt the current generation's best individual if it beats every earlier generation"""
        best = self.get_generation_best_index()
        if self.optimal_inputs is not None and not self.performance[best, 1] < self.optimal_performance[1]:
            return False
        self.optimal_inputs = self.population[best].copy()
        self.optimal_performance = self.performance[best].copy()
        self.optimal_generation = self.generation - 1
        return True

    def get_optimal_individual_index(self) -> int:
        """Generation (0-based) that discovered the best individual seen so far.

        The history row with this index holds the optimal inputs; ties keep
        the earliest generation.
        """
        if self.optimal_inputs is None:
            raise RuntimeError("No generation has been evaluated yet")
        return self.optimal_generation

    def _restore_uses(self, optimal_inputs: Optional[np.ndarray]):
        uses = list(self.original_uses)
        if optimal_inputs is not None:
            inputs = [i for i, use in enumerate(uses) if use == VariableUse.INPUT]
            for index, keep in zip(inputs, optimal_inputs):
                if not keep:
                    uses[index] = VariableUse.UNUSED
        self.evaluator.set_variable_uses(uses)

    def perform_inputs_selection(self) -> SelectionResults:
        self._check_config()
        cfg = self.cfg
        n = self.inputs_number
        error = self._crossover().validate(n)
        if error:
            raise ValueError(error)

        self.rng = np.random.default_rng(self.seed)
        self.original_uses = self.evaluator.get_variable_uses()
        self._elite_performance = np.zeros((0, 2))
        criteria = self.stopping_criteria
        recorder = HistoryRecorder.from_config(cfg)
        generations = GenerationRecorder(cfg.reserve_generation_minimum, cfg.reserve_generation_mean,
                                         cfg.reserve_generation_standard_deviation)

        self._print(f"\n{'='*70}\nPerforming genetic inputs selection...\n{'='*70}")
        self._print(f"Inputs: {n} | Population: {cfg.population_size} | "
                    f"Fitness: {cfg.fitness_assignment_method.value} | Crossover: {cfg.crossover_method.value}")

        optimal_parameters = None
        self.optimal_inputs = None
        self.optimal_performance = np.full(2, np.nan)
        self.optimal_generation = -1
        failures = 0
        self.generation = 0
        condition = StoppingCondition.CONTINUE
        start = self.clock()

        try:
            self.initialize_population()
            while True:
                self.evaluate_population()
                self.calculate_fitness()
                self.generation += 1

                best = self.get_generation_best_index()
                best_inputs = self.population[best].copy()
                training, generalization = (float(v) for v in self.performance[best])

                improved = self.optimal_inputs is None or \
                    is_improvement(float(self.optimal_performance[1]), generalization, cfg.tolerance)
                if self.update_optimum():
                    optimal_parameters = self.evaluator.get_parameters(self.optimal_inputs)
                failures = 0 if improved else failures + 1

                parameters = None
                if cfg.reserve_parameters_data:
                    parameters = self.evaluator.get_parameters(best_inputs)
                recorder.record(best_inputs, training, generalization, parameters)
                generations.record(self.performance[:, 1])

                elapsed = self.clock() - start
                condition = criteria.check(elapsed, generalization, self.generation, failures)

                self._print(f"Generation: {self.generation}\n"
                            f"Selected inputs: {np.flatnonzero(best_inputs).tolist()}\n"
                            f"Training performance: {training}\n"
                            f"Generalization performance: {generalization}\n"
                            f"Generation mean: {np.mean(self.performance[:, 1])}\n"
                            f"Elapsed time: {elapsed:.2f}")

                if condition != StoppingCondition.CONTINUE:
                    self._print(STOPPING_MESSAGES[condition])
                    break
                self.evolve_population()

            optimal_inputs = self.optimal_inputs
            self._print(f"Optimal inputs: {np.flatnonzero(optimal_inputs).tolist()}")
            final_training, _ = self.calculate_performances(optimal_inputs)
            self.evaluator.install(optimal_inputs, optimal_parameters)
        except Exception:
            self._restore_uses(None)
            raise
        self._restore_uses(optimal_inputs)

        outcome = SelectionOutcome(
            stopping_condition=condition,
            optimal_structure=optimal_inputs,
            minimal_parameters=optimal_parameters if cfg.reserve_minimal_parameters else None,
            final_training_performance=final_training,
            final_generalization_performance=float(self.optimal_performance[1]),
            iterations_number=self.generation,
            elapsed_time=elapsed,
        )
        return SelectionResults(outcome=outcome, history=recorder.history, extras=generations.statistics)
