"""
History recording gated by the reserve flags
"""

from typing import Optional

import numpy as np

from .results import SelectionHistory, GenerationStatistics, Structure


class HistoryRecorder:
    """Appends one row per iteration, keeping only the reserved fields"""

    def __init__(self, reserve_performance: bool = True, reserve_generalization_performance: bool = True,
                 reserve_parameters: bool = False):
        self.reserve_performance = reserve_performance
        self.reserve_generalization_performance = reserve_generalization_performance
        self.reserve_parameters = reserve_parameters
        self.history = SelectionHistory()

    @classmethod
    def from_config(cls, cfg) -> 'HistoryRecorder':
        return cls(cfg.reserve_performance_data, cfg.reserve_generalization_performance_data,
                   cfg.reserve_parameters_data)

    def record(self, structure: Structure, training_performance: float, generalization_performance: float,
               parameters: Optional[np.ndarray] = None):
        if isinstance(structure, np.ndarray):
            structure = structure.copy()
        self.history.structure_data.append(structure)
        if self.reserve_performance:
            self.history.performance_data.append(float(training_performance))
        if self.reserve_generalization_performance:
            self.history.generalization_performance_data.append(float(generalization_performance))
        if self.reserve_parameters and parameters is not None:
            self.history.parameters_data.append(np.asarray(parameters, dtype=float).copy())


class GenerationRecorder:
    """Summary statistics of generalization performance, one entry per generation"""

    def __init__(self, reserve_minimum: bool = True, reserve_mean: bool = True,
                 reserve_standard_deviation: bool = True):
        self.reserve_minimum = reserve_minimum
        self.reserve_mean = reserve_mean
        self.reserve_standard_deviation = reserve_standard_deviation
        self.statistics = GenerationStatistics()

    def record(self, generalization_performances):
        values = np.asarray(generalization_performances, dtype=float)
        if self.reserve_minimum:
            self.statistics.minimum_history.append(float(values.min()))
        if self.reserve_mean:
            self.statistics.mean_history.append(float(values.mean()))
        if self.reserve_standard_deviation:
            self.statistics.standard_deviation_history.append(float(values.std()))
