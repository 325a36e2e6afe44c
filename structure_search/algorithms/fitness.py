"""
Fitness assignment from generalization performance
"""

from abc import ABC, abstractmethod

import numpy as np

from ..core import FitnessAssignment


class Fitness(ABC):
    """Maps generalization performance (lower is better) to fitness (higher is better)"""

    @abstractmethod
    def assign(self, generalization_performance: np.ndarray) -> np.ndarray:
        ...


class ObjectiveBasedFitness(Fitness):

    def assign(self, generalization_performance):
        return 1.0 / (1.0 + np.asarray(generalization_performance, dtype=float))


class RankBasedFitness(Fitness):
    """Linear ranking.

    The best individual gets ``selective_pressure`` and the worst
    ``2 - selective_pressure``; only the ordering of the performances matters.
    """

    def __init__(self, selective_pressure: float = 1.5):
        if selective_pressure < 1:
            raise ValueError("Selective pressure must be equal or greater than 1")
        self.selective_pressure = selective_pressure

    def assign(self, generalization_performance):
        perf = np.asarray(generalization_performance, dtype=float)
        n = len(perf)
        if n == 1:
            return np.ones(1)
        sp = self.selective_pressure
        # position 0 is the best individual, i.e. the highest rank
        order = np.argsort(perf, kind='stable')
        rank = n - np.arange(n)
        fitness = np.empty(n)
        fitness[order] = 2 - sp + 2 * (sp - 1) * (rank - 1) / (n - 1)
        return fitness


def create_fitness(method: FitnessAssignment, selective_pressure: float = 1.5) -> Fitness:
    if method == FitnessAssignment.OBJECTIVE_BASED:
        return ObjectiveBasedFitness()
    return RankBasedFitness(selective_pressure)
