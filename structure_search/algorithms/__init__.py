"""
Algorithms module - Genetic operators and fitness assignment
"""

from .genetic_ops import (
    GeneticOperations,
    Initialization,
    RandomInitialization,
    WeightedInitialization,
    Crossover,
    OnePointCrossover,
    TwoPointCrossover,
    UniformCrossover,
    create_initialization,
    create_crossover,
)
from .fitness import Fitness, ObjectiveBasedFitness, RankBasedFitness, create_fitness

__all__ = [
    'GeneticOperations',
    'Initialization',
    'RandomInitialization',
    'WeightedInitialization',
    'Crossover',
    'OnePointCrossover',
    'TwoPointCrossover',
    'UniformCrossover',
    'create_initialization',
    'create_crossover',
    'Fitness',
    'ObjectiveBasedFitness',
    'RankBasedFitness',
    'create_fitness',
]
