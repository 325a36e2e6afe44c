"""
Search module - Selection algorithms
"""

from .base import SelectionAlgorithm
from .genetic_algorithm import GeneticAlgorithm
from .incremental_order import IncrementalOrder

__all__ = [
    'SelectionAlgorithm',
    'GeneticAlgorithm',
    'IncrementalOrder',
]
