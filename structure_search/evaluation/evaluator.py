"""
Evaluator contract between the search engines and model training
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from ..core import VariableUse
from ..core.results import Structure


class Evaluator(ABC):
    """Trains a candidate structure and reports its performance.

    ``structure`` is either a boolean input mask or an int hidden-layer size.
    Performances are errors: lower is better.
    """

    def __init__(self, variable_uses: Optional[Sequence[VariableUse]] = None):
        self.variable_uses: List[VariableUse] = list(variable_uses or [])

    @abstractmethod
    def evaluate(self, structure: Structure) -> Tuple[float, float]:
        ...

    @abstractmethod
    def get_parameters(self, structure: Structure) -> np.ndarray:
        ...

    @abstractmethod
    def install(self, structure: Structure, parameters: np.ndarray):
        ...

    def get_variable_uses(self) -> List[VariableUse]:
        return list(self.variable_uses)

    def set_variable_uses(self, uses: Sequence[VariableUse]):
        self.variable_uses = list(uses)

    @property
    def input_indices(self) -> List[int]:
        return [i for i, use in enumerate(self.variable_uses) if use == VariableUse.INPUT]

    @property
    def inputs_number(self) -> int:
        return len(self.input_indices)

    def calculate_input_importance(self) -> np.ndarray:
        return np.ones(self.inputs_number)


class CallableEvaluator(Evaluator):
    """Adapts plain functions to the Evaluator contract"""

    def __init__(self, evaluate_fn: Callable[[Structure], Tuple[float, float]],
                 parameters_fn: Optional[Callable[[Structure], np.ndarray]] = None,
                 install_fn: Optional[Callable[[Structure, np.ndarray], None]] = None,
                 variable_uses: Optional[Sequence[VariableUse]] = None,
                 importance_fn: Optional[Callable[[], np.ndarray]] = None):
        super().__init__(variable_uses)
        self.evaluate_fn = evaluate_fn
        self.parameters_fn = parameters_fn
        self.install_fn = install_fn
        self.importance_fn = importance_fn
        self.installed = None

    def evaluate(self, structure):
        training, generalization = self.evaluate_fn(structure)
        return float(training), float(generalization)

    def get_parameters(self, structure):
        if self.parameters_fn is None:
            return np.array([])
        return np.asarray(self.parameters_fn(structure), dtype=float)

    def install(self, structure, parameters):
        self.installed = (structure, parameters)
        if self.install_fn is not None:
            self.install_fn(structure, parameters)

    def calculate_input_importance(self):
        if self.importance_fn is None:
            return super().calculate_input_importance()
        return np.asarray(self.importance_fn(), dtype=float)
