"""
Incremental Order Selection

Grows the hidden layer from minimum_order to maximum_order by a fixed step,
keeping the order with the lowest generalization performance.
"""

from typing import Optional

from ..core import (
    IncrementalOrderConfig,
    SelectionOutcome,
    SelectionResults,
    StoppingCondition,
    HistoryRecorder,
    is_improvement,
)
from ..core.stopping import STOPPING_MESSAGES
from .base import SelectionAlgorithm


class IncrementalOrder(SelectionAlgorithm):
    """Hidden-layer size search by fixed increments"""

    xml_name = 'IncrementalOrder'
    config_class = IncrementalOrderConfig

    def perform_order_selection(self) -> SelectionResults:
        self._check_config()
        cfg = self.cfg
        criteria = self.stopping_criteria
        recorder = HistoryRecorder.from_config(cfg)

        self._print("Performing Incremental order selection...")

        order = cfg.minimum_order
        optimal_order: Optional[int] = None
        optimum_generalization = float('inf')
        optimum_parameters = None
        previous_generalization = float('inf')
        iterations, failures = 0, 0
        condition = StoppingCondition.CONTINUE
        start = self.clock()

        while condition == StoppingCondition.CONTINUE:
            training, generalization = self.calculate_performances(order)
            elapsed = self.clock() - start

            parameters = self.evaluator.get_parameters(order) if cfg.reserve_parameters_data else None
            recorder.record(order, training, generalization, parameters)

            if iterations == 0 or is_improvement(optimum_generalization, generalization, cfg.tolerance):
                optimal_order = order
                optimum_generalization = generalization
                optimum_parameters = parameters if parameters is not None else self.evaluator.get_parameters(order)
            elif previous_generalization < generalization:
                failures += 1

            previous_generalization = generalization
            iterations += 1

            condition = criteria.check(elapsed, generalization, iterations, failures,
                                       boundary_reached=order == cfg.maximum_order)
            if condition != StoppingCondition.CONTINUE:
                self._print(STOPPING_MESSAGES[condition])

            self._print(f"Iteration: {iterations}\n"
                        f"Hidden perceptron number: {order}\n"
                        f"Training performance: {training}\n"
                        f"Generalization performance: {generalization}\n"
                        f"Elapsed time: {elapsed:.2f}")

            if condition == StoppingCondition.CONTINUE:
                order = min(cfg.maximum_order, order + cfg.step)

        self._print(f"Optimal order: {optimal_order}")

        final_training, _ = self.calculate_performances(optimal_order)
        self.evaluator.install(optimal_order, optimum_parameters)

        outcome = SelectionOutcome(
            stopping_condition=condition,
            optimal_structure=optimal_order,
            minimal_parameters=optimum_parameters if cfg.reserve_minimal_parameters else None,
            final_training_performance=final_training,
            final_generalization_performance=optimum_generalization,
            iterations_number=iterations,
            elapsed_time=elapsed,
        )
        return SelectionResults(outcome=outcome, history=recorder.history)
