"""
Structure Search Configuration Classes
"""

import numbers
from dataclasses import dataclass, fields, asdict
from enum import Enum
from typing import Any, Dict, List, Optional


class InitializationMethod(Enum):
    RANDOM = 'Random'
    WEIGHTED = 'Weighted'


class CrossoverMethod(Enum):
    ONE_POINT = 'OnePoint'
    TWO_POINT = 'TwoPoint'
    UNIFORM = 'Uniform'


class FitnessAssignment(Enum):
    OBJECTIVE_BASED = 'ObjectiveBased'
    RANK_BASED = 'RankBased'


class PerformanceCalculationMethod(Enum):
    """How repeated trainings of the same structure are reduced to one value"""
    MINIMUM = 'Minimum'
    MAXIMUM = 'Maximum'
    MEAN = 'Mean'


class VariableUse(Enum):
    INPUT = 'Input'
    TARGET = 'Target'
    UNUSED = 'Unused'


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass
class SelectionConfig:
    """Options shared by every selection algorithm"""
    trials_number: int = 1
    performance_calculation_method: PerformanceCalculationMethod = PerformanceCalculationMethod.MINIMUM
    tolerance: float = 0.0
    generalization_performance_goal: float = 0.0
    maximum_iterations_number: int = 1000
    maximum_time: float = 3600.0
    reserve_performance_data: bool = True
    reserve_generalization_performance_data: bool = True
    reserve_parameters_data: bool = False
    reserve_minimal_parameters: bool = True
    display: bool = True

    def __post_init__(self):
        for f in fields(self):
            value = self._coerce_enum(f.name, getattr(self, f.name))
            error = self.check(f.name, value)
            if error:
                raise ValueError(error)
            setattr(self, f.name, self._normalize(f.name, value))

    def _normalize(self, name: str, value):
        # numpy scalars are stored as plain Python numbers
        default = getattr(type(self), name, None)
        if isinstance(default, float):
            return float(value)
        if _is_int(default):
            return int(value)
        return value

    def _coerce_enum(self, name: str, value):
        current = getattr(type(self), name, None)
        if isinstance(current, Enum) and isinstance(value, str):
            try:
                return type(current)(value)
            except ValueError:
                return value
        return value

    def check(self, name: str, value) -> Optional[str]:
        """Return an error message when ``value`` is not acceptable for ``name``"""
        if name not in {f.name for f in fields(self)}:
            return f"Unknown option: {name}"

        default = getattr(type(self), name, None)
        if isinstance(default, Enum):
            if not isinstance(value, type(default)):
                return f"Invalid {name}: {value!r}"
            return None
        if isinstance(default, bool):
            return None if isinstance(value, bool) else f"{name} must be a boolean"
        if _is_int(default) and not _is_int(value):
            return f"{name} must be an integer"
        if isinstance(default, float) and not _is_number(value):
            return f"{name} must be a number"

        if name == 'trials_number' and value <= 0:
            return "Trials number must be greater than 0"
        if name == 'tolerance' and value < 0:
            return "Tolerance must be equal or greater than 0"
        if name == 'maximum_iterations_number' and value <= 0:
            return "Maximum iterations number must be greater than 0"
        if name == 'maximum_time' and value < 0:
            return "Maximum time must be equal or greater than 0"
        return None

    def set(self, name: str, value) -> Optional[str]:
        """Assign one option, returning an error message instead of raising.

        On error the option keeps its previous value.
        """
        value = self._coerce_enum(name, value)
        error = self.check(name, value)
        if error is None:
            setattr(self, name, self._normalize(name, value))
        return error

    def validate(self) -> List[str]:
        return [e for e in (self.check(f.name, getattr(self, f.name)) for f in fields(self)) if e]

    def as_dict(self) -> Dict[str, Any]:
        return {k: (v.value if isinstance(v, Enum) else v) for k, v in asdict(self).items()}


@dataclass
class GeneticConfig(SelectionConfig):
    """Genetic algorithm inputs selection configuration"""
    population_size: int = 10
    mutation_rate: float = 0.1
    elitism_size: int = 2
    crossover_first_point: int = 0
    crossover_second_point: int = 0
    selective_pressure: float = 1.5
    initialization_method: InitializationMethod = InitializationMethod.RANDOM
    crossover_method: CrossoverMethod = CrossoverMethod.UNIFORM
    fitness_assignment_method: FitnessAssignment = FitnessAssignment.RANK_BASED
    maximum_generalization_failures: int = 10
    reserve_generation_mean: bool = True
    reserve_generation_standard_deviation: bool = True
    reserve_generation_minimum: bool = True
    reuse_elite_performance: bool = False

    def check(self, name: str, value) -> Optional[str]:
        error = super().check(name, value)
        if error:
            return error
        if name == 'population_size':
            if value <= 0:
                return "Population size must be greater than 0"
            if value < self.elitism_size:
                return "Population size must be equal or greater than elitism size"
        if name == 'mutation_rate' and not 0.0 <= value <= 1.0:
            return f"Mutation rate must be between 0 and 1 ({value})"
        if name == 'elitism_size':
            if value < 0:
                return "Elitism size must be equal or greater than 0"
            if value > self.population_size:
                return f"Elitism size ({value}) must be lower than the population size ({self.population_size})"
        if name in ('crossover_first_point', 'crossover_second_point') and value < 0:
            return f"{name} must be equal or greater than 0"
        if name == 'crossover_first_point' and self.crossover_second_point and value >= self.crossover_second_point:
            return "Crossover first point must be less than the second point"
        if name == 'crossover_second_point' and value and value <= self.crossover_first_point:
            return "Crossover second point must be greater than the first point"
        if name == 'selective_pressure' and value < 1:
            return "Selective pressure must be equal or greater than 1"
        if name == 'maximum_generalization_failures' and value <= 0:
            return "Maximum generalization failures must be greater than 0"
        return None


@dataclass
class IncrementalOrderConfig(SelectionConfig):
    """Incremental order selection configuration"""
    minimum_order: int = 1
    maximum_order: int = 10
    step: int = 1
    maximum_generalization_failures: int = 3

    def check(self, name: str, value) -> Optional[str]:
        error = super().check(name, value)
        if error:
            return error
        if name == 'minimum_order':
            if value <= 0:
                return "Minimum order must be greater than 0"
            if value > self.maximum_order:
                return "Minimum order must be equal or less than the maximum order"
            if 0 < self.maximum_order - value < self.step:
                return f"Minimum order leaves a range smaller than the step ({self.step})"
        if name == 'maximum_order':
            if value < self.minimum_order:
                return "Maximum order must be equal or greater than the minimum order"
            if 0 < value - self.minimum_order < self.step:
                return f"Maximum order leaves a range smaller than the step ({self.step})"
        if name == 'step':
            if value <= 0:
                return f"Step ({value}) must be greater than 0"
            span = self.maximum_order - self.minimum_order
            if 0 < span < value:
                return f"Step must be less than the distance between maximum_order and minimum_order ({span})"
        if name == 'maximum_generalization_failures' and value <= 0:
            return "Maximum generalization failures must be greater than 0"
        return None
