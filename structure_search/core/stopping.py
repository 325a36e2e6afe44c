"""
Stopping criteria shared by the selection algorithms
"""

from dataclasses import dataclass
from enum import Enum


class StoppingCondition(Enum):
    MAXIMUM_TIME = 'MaximumTime'
    GOAL_REACHED = 'GoalReached'
    MAXIMUM_ITERATIONS = 'MaximumIterations'
    MAXIMUM_FAILURES = 'MaximumFailures'
    BOUNDARY_REACHED = 'BoundaryReached'
    CONTINUE = 'Continue'


STOPPING_MESSAGES = {
    StoppingCondition.MAXIMUM_TIME: "Maximum time reached.",
    StoppingCondition.GOAL_REACHED: "Generalization performance goal reached.",
    StoppingCondition.MAXIMUM_ITERATIONS: "Maximum number of iterations reached.",
    StoppingCondition.MAXIMUM_FAILURES: "Maximum generalization performance failures reached.",
    StoppingCondition.BOUNDARY_REACHED: "Algorithm finished.",
}


def is_improvement(previous: float, current: float, tolerance: float) -> bool:
    """True when ``current`` beats ``previous`` by more than ``tolerance``"""
    return previous - current > tolerance


@dataclass(frozen=True)
class StoppingCriteria:
    """Thresholds checked after every iteration, in priority order"""
    maximum_time: float
    generalization_performance_goal: float
    maximum_iterations_number: int
    maximum_generalization_failures: int

    def check(self, elapsed_time: float, generalization_performance: float,
              iterations: int, failures: int, boundary_reached: bool = False) -> StoppingCondition:
        if elapsed_time > self.maximum_time:
            return StoppingCondition.MAXIMUM_TIME
        if generalization_performance < self.generalization_performance_goal:
            return StoppingCondition.GOAL_REACHED
        if iterations > self.maximum_iterations_number:
            return StoppingCondition.MAXIMUM_ITERATIONS
        if failures >= self.maximum_generalization_failures:
            return StoppingCondition.MAXIMUM_FAILURES
        if boundary_reached:
            return StoppingCondition.BOUNDARY_REACHED
        return StoppingCondition.CONTINUE
