"""
Shared machinery of the selection algorithms
"""

import time
import xml.etree.ElementTree as ET
from typing import Callable, Optional, Tuple

import numpy as np

from ..core import (
    SelectionConfig,
    SelectionResults,
    PerformanceCalculationMethod,
    StoppingCriteria,
)
from ..evaluation import Evaluator
from ..utils.persistence import (
    config_to_element,
    config_from_element,
    results_to_element,
    read_document,
    write_document,
    find_root,
)


class SelectionAlgorithm:
    """Base class: evaluator access, trials, stopping criteria and XML persistence"""

    xml_name = 'SelectionAlgorithm'
    config_class = SelectionConfig

    def __init__(self, evaluator: Evaluator, config: Optional[SelectionConfig] = None,
                 clock: Callable[[], float] = time.time):
        self.evaluator = evaluator
        self.cfg = config if config is not None else self.config_class()
        self.clock = clock

    def _print(self, message: str):
        if self.cfg.display:
            print(message)

    def _check_config(self):
        errors = self.cfg.validate()
        if errors:
            raise ValueError("Invalid configuration: " + "; ".join(errors))

    @property
    def stopping_criteria(self) -> StoppingCriteria:
        return StoppingCriteria(
            maximum_time=self.cfg.maximum_time,
            generalization_performance_goal=self.cfg.generalization_performance_goal,
            maximum_iterations_number=self.cfg.maximum_iterations_number,
            maximum_generalization_failures=self.cfg.maximum_generalization_failures,
        )

    def calculate_performances(self, structure) -> Tuple[float, float]:
        """Train ``structure`` trials_number times and reduce the trials to one pair"""
        trials = np.array([self.evaluator.evaluate(structure) for _ in range(self.cfg.trials_number)],
                          dtype=float)
        method = self.cfg.performance_calculation_method
        if method == PerformanceCalculationMethod.MEAN:
            training, generalization = trials.mean(axis=0)
        elif method == PerformanceCalculationMethod.MAXIMUM:
            training, generalization = trials[np.argmax(trials[:, 1])]
        else:
            training, generalization = trials[np.argmin(trials[:, 1])]
        return float(training), float(generalization)

    # ==================== PERSISTENCE ====================

    def to_xml(self, results: Optional[SelectionResults] = None) -> ET.Element:
        root = config_to_element(self.cfg, self.xml_name)
        if results is not None:
            root.append(results_to_element(results))
        return root

    def from_xml(self, root: ET.Element):
        """Apply a document on top of the current settings, returning per-field errors"""
        return config_from_element(self.cfg, find_root(root, self.xml_name))

    def save(self, filepath: str, results: Optional[SelectionResults] = None):
        write_document(self.to_xml(results), filepath)

    def load(self, filepath: str):
        root = read_document(filepath, self.xml_name)
        self.cfg = self.config_class()
        return self.from_xml(root)
