"""
Structure Search: Input and Order Selection for Neural Networks

Wrapper search that picks which inputs a network uses (genetic algorithm)
and how large its hidden layer is (incremental order) by training candidate
structures and comparing their generalization performance.
"""

# Core classes
from .core import (
    InitializationMethod,
    CrossoverMethod,
    FitnessAssignment,
    PerformanceCalculationMethod,
    VariableUse,
    SelectionConfig,
    GeneticConfig,
    IncrementalOrderConfig,
    StoppingCondition,
    StoppingCriteria,
    SelectionResults,
)

# Algorithms
from .algorithms import (
    GeneticOperations,
    create_initialization,
    create_crossover,
    create_fitness,
)

# Evaluation
from .evaluation import (
    Evaluator,
    CallableEvaluator,
    MLPTrainer,
)

# Search
from .search import (
    SelectionAlgorithm,
    GeneticAlgorithm,
    IncrementalOrder,
)

# Utils
from .utils import (
    ResultsAnalyzer,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    'InitializationMethod', 'CrossoverMethod', 'FitnessAssignment', 'PerformanceCalculationMethod',
    'VariableUse', 'SelectionConfig', 'GeneticConfig', 'IncrementalOrderConfig',
    'StoppingCondition', 'StoppingCriteria', 'SelectionResults',
    # Algorithms
    'GeneticOperations', 'create_initialization', 'create_crossover', 'create_fitness',
    # Evaluation
    'Evaluator', 'CallableEvaluator', 'MLPTrainer',
    # Search
    'SelectionAlgorithm', 'GeneticAlgorithm', 'IncrementalOrder',
    # Utils
    'ResultsAnalyzer',
]
