"""
Genetic Operations for Inputs Selection

Individuals are boolean masks over the available input variables. Every
operator that can produce a mask guarantees at least one input stays on.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np

from ..core import InitializationMethod, CrossoverMethod


class GeneticOperations:
    """Mask-level operations shared by the genetic strategies"""

    @staticmethod
    def repair(mask: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        if not mask.any():
            mask[rng.integers(len(mask))] = True
        return mask

    @staticmethod
    def mutate(mask: np.ndarray, rate: float, rng: np.random.Generator) -> np.ndarray:
        m = mask.copy()
        if rate > 0:
            flips = rng.random(len(m)) < rate
            m[flips] = ~m[flips]
        return GeneticOperations.repair(m, rng)

    @staticmethod
    def select_elite(fitness: np.ndarray, size: int) -> np.ndarray:
        """Indices of the ``size`` fittest individuals, earliest first on ties"""
        if size <= 0:
            return np.array([], dtype=int)
        order = np.argsort(-np.asarray(fitness, dtype=float), kind='stable')
        return order[:size]

    @staticmethod
    def roulette_wheel(fitness: np.ndarray, count: int, rng: np.random.Generator) -> np.ndarray:
        """Draw ``count`` indices with replacement, proportionally to fitness"""
        weights = np.clip(np.asarray(fitness, dtype=float), 0.0, None)
        total = weights.sum()
        if not np.isfinite(total) or total <= 0:
            return rng.integers(len(weights), size=count)
        cumulative = np.cumsum(weights / total)
        cumulative[-1] = 1.0
        return np.searchsorted(cumulative, rng.random(count), side='right')


# ==================== INITIALIZATION ====================

class Initialization(ABC):

    @abstractmethod
    def probabilities(self, inputs_number: int) -> np.ndarray:
        ...

    def initialize(self, size: int, inputs_number: int, rng: np.random.Generator) -> np.ndarray:
        p = self.probabilities(inputs_number)
        if not p.any():
            raise ValueError("Every input has zero probability of being selected")
        population = np.zeros((size, inputs_number), dtype=bool)
        for i in range(size):
            mask = rng.random(inputs_number) < p
            while not mask.any():
                mask = rng.random(inputs_number) < p
            population[i] = mask
        return population


class RandomInitialization(Initialization):

    def probabilities(self, inputs_number: int) -> np.ndarray:
        return np.full(inputs_number, 0.5)


class WeightedInitialization(Initialization):
    """Bits drawn with probabilities proportional to prior input importance.

    Probabilities are scaled so their mean is 0.5, then clipped to [0, 1].
    """

    def __init__(self, weights: Optional[np.ndarray] = None):
        self.weights = weights

    def probabilities(self, inputs_number: int) -> np.ndarray:
        if self.weights is None:
            return np.full(inputs_number, 0.5)
        w = np.abs(np.asarray(self.weights, dtype=float))
        if w.shape != (inputs_number,):
            raise ValueError(f"Expected {inputs_number} input weights, got {w.shape}")
        w = np.nan_to_num(w)
        if w.sum() <= 0:
            return np.full(inputs_number, 0.5)
        return np.clip(0.5 * inputs_number * w / w.sum(), 0.0, 1.0)


# ==================== CROSSOVER ====================

class Crossover(ABC):

    @abstractmethod
    def _cross(self, p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
        ...

    def cross(self, p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> Tuple[np.ndarray, np.ndarray]:
        c1, c2 = self._cross(p1, p2, rng)
        return GeneticOperations.repair(c1, rng), GeneticOperations.repair(c2, rng)

    def validate(self, inputs_number: int) -> Optional[str]:
        return None


class OnePointCrossover(Crossover):

    def __init__(self, first_point: int = 0):
        self.first_point = first_point

    def validate(self, inputs_number: int) -> Optional[str]:
        if self.first_point and not 1 <= self.first_point <= inputs_number - 1:
            return f"Crossover first point ({self.first_point}) must be between 1 and {inputs_number - 1}"
        return None

    def _cross(self, p1, p2, rng):
        n = len(p1)
        if n < 2:
            return p1.copy(), p2.copy()
        cut = self.first_point or int(rng.integers(1, n))
        c1 = np.concatenate([p1[:cut], p2[cut:]])
        c2 = np.concatenate([p2[:cut], p1[cut:]])
        return c1, c2


class TwoPointCrossover(Crossover):
    """Swaps the segment between two cuts; both cuts are drawn when either is 0"""

    def __init__(self, first_point: int = 0, second_point: int = 0):
        self.first_point = first_point
        self.second_point = second_point

    def validate(self, inputs_number: int) -> Optional[str]:
        if self.first_point and self.second_point:
            if not 1 <= self.first_point < self.second_point <= inputs_number - 1:
                return (f"Crossover points ({self.first_point}, {self.second_point}) must satisfy "
                        f"1 <= first < second <= {inputs_number - 1}")
        return None

    def _cross(self, p1, p2, rng):
        n = len(p1)
        if n < 3:
            return p1.copy(), p2.copy()
        if self.first_point and self.second_point:
            a, b = self.first_point, self.second_point
        else:
            a, b = sorted(rng.choice(np.arange(1, n), size=2, replace=False))
        c1, c2 = p1.copy(), p2.copy()
        c1[a:b], c2[a:b] = p2[a:b], p1[a:b]
        return c1, c2


class UniformCrossover(Crossover):

    def _cross(self, p1, p2, rng):
        take_first = rng.random(len(p1)) < 0.5
        return np.where(take_first, p1, p2), np.where(take_first, p2, p1)


def create_initialization(method: InitializationMethod, weights: Optional[np.ndarray] = None) -> Initialization:
    if method == InitializationMethod.WEIGHTED:
        return WeightedInitialization(weights)
    return RandomInitialization()


def create_crossover(method: CrossoverMethod, first_point: int = 0, second_point: int = 0) -> Crossover:
    strategies = {
        CrossoverMethod.ONE_POINT: lambda: OnePointCrossover(first_point),
        CrossoverMethod.TWO_POINT: lambda: TwoPointCrossover(first_point, second_point),
        CrossoverMethod.UNIFORM: UniformCrossover,
    }
    return strategies[method]()
