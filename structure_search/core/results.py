"""
Selection Results Record
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import numpy as np

from .stopping import StoppingCondition

Structure = Union[int, np.ndarray]


def _structure_to_list(structure):
    if isinstance(structure, np.ndarray):
        return [bool(b) for b in structure]
    return structure


@dataclass
class SelectionOutcome:
    """Terminal fields common to every selection algorithm"""
    stopping_condition: StoppingCondition = StoppingCondition.CONTINUE
    optimal_structure: Optional[Structure] = None
    minimal_parameters: Optional[np.ndarray] = None
    final_training_performance: float = float('nan')
    final_generalization_performance: float = float('nan')
    iterations_number: int = 0
    elapsed_time: float = 0.0


@dataclass
class SelectionHistory:
    """Per-iteration log, each list filled only when its reserve flag is on"""
    structure_data: List[Structure] = field(default_factory=list)
    performance_data: List[float] = field(default_factory=list)
    generalization_performance_data: List[float] = field(default_factory=list)
    parameters_data: List[np.ndarray] = field(default_factory=list)


@dataclass
class GenerationStatistics:
    minimum_history: List[float] = field(default_factory=list)
    mean_history: List[float] = field(default_factory=list)
    standard_deviation_history: List[float] = field(default_factory=list)


@dataclass
class SelectionResults:
    outcome: SelectionOutcome = field(default_factory=SelectionOutcome)
    history: SelectionHistory = field(default_factory=SelectionHistory)
    extras: Optional[GenerationStatistics] = None

    @property
    def stopping_condition(self) -> StoppingCondition:
        return self.outcome.stopping_condition

    @property
    def optimal_structure(self) -> Optional[Structure]:
        return self.outcome.optimal_structure

    def to_dict(self) -> Dict[str, Any]:
        o, h = self.outcome, self.history
        data = {
            'stopping_condition': o.stopping_condition.value,
            'optimal_structure': _structure_to_list(o.optimal_structure),
            'minimal_parameters': None if o.minimal_parameters is None else [float(p) for p in o.minimal_parameters],
            'final_training_performance': float(o.final_training_performance),
            'final_generalization_performance': float(o.final_generalization_performance),
            'iterations_number': int(o.iterations_number),
            'elapsed_time': float(o.elapsed_time),
            'history': {
                'structure_data': [_structure_to_list(s) for s in h.structure_data],
                'performance_data': [float(p) for p in h.performance_data],
                'generalization_performance_data': [float(p) for p in h.generalization_performance_data],
                'parameters_data': [[float(p) for p in row] for row in h.parameters_data],
            },
        }
        if self.extras is not None:
            data['generation_statistics'] = {
                'minimum_history': [float(v) for v in self.extras.minimum_history],
                'mean_history': [float(v) for v in self.extras.mean_history],
                'standard_deviation_history': [float(v) for v in self.extras.standard_deviation_history],
            }
        return data

    def to_string(self) -> str:
        o, h = self.outcome, self.history
        lines = []
        if h.structure_data:
            lines.append(f"Structure history: {[_structure_to_list(s) for s in h.structure_data]}")
        if h.performance_data:
            lines.append(f"Performance history: {[round(float(p), 6) for p in h.performance_data]}")
        if h.generalization_performance_data:
            lines.append("Generalization performance history: "
                         f"{[round(float(p), 6) for p in h.generalization_performance_data]}")
        if self.extras is not None:
            if self.extras.minimum_history:
                lines.append(f"Generation minimum history: {self.extras.minimum_history}")
            if self.extras.mean_history:
                lines.append(f"Generation mean history: {self.extras.mean_history}")
            if self.extras.standard_deviation_history:
                lines.append(f"Generation standard deviation history: {self.extras.standard_deviation_history}")
        lines.append(f"Stopping condition: {o.stopping_condition.value}")
        lines.append(f"Optimal structure: {_structure_to_list(o.optimal_structure)}")
        lines.append(f"Final performance: {o.final_training_performance}")
        lines.append(f"Final generalization performance: {o.final_generalization_performance}")
        lines.append(f"Iterations number: {o.iterations_number}")
        lines.append(f"Elapsed time: {o.elapsed_time}")
        return "\n".join(lines)
