"""
Core module - Configuration, stopping criteria and results
"""

from .config import (
    InitializationMethod,
    CrossoverMethod,
    FitnessAssignment,
    PerformanceCalculationMethod,
    VariableUse,
    SelectionConfig,
    GeneticConfig,
    IncrementalOrderConfig,
)
from .stopping import StoppingCondition, StoppingCriteria, is_improvement
from .results import SelectionOutcome, SelectionHistory, GenerationStatistics, SelectionResults
from .history import HistoryRecorder, GenerationRecorder

__all__ = [
    'InitializationMethod',
    'CrossoverMethod',
    'FitnessAssignment',
    'PerformanceCalculationMethod',
    'VariableUse',
    'SelectionConfig',
    'GeneticConfig',
    'IncrementalOrderConfig',
    'StoppingCondition',
    'StoppingCriteria',
    'is_improvement',
    'SelectionOutcome',
    'SelectionHistory',
    'GenerationStatistics',
    'SelectionResults',
    'HistoryRecorder',
    'GenerationRecorder',
]
