"""Shared fakes for the selection algorithm tests."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
import pytest

from structure_search import Evaluator, VariableUse


class FakeClock:
    """Advances by ``tick`` seconds on every read."""

    def __init__(self, tick: float = 0.0) -> None:
        self.tick = tick
        self.now = 0.0

    def __call__(self) -> float:
        value = self.now
        self.now += self.tick
        return value


class ScriptedOrderEvaluator(Evaluator):
    """Returns queued (training, generalization) pairs in call order."""

    def __init__(self, generalization: Sequence[float], training: Sequence[float] | None = None) -> None:
        super().__init__([VariableUse.INPUT, VariableUse.INPUT, VariableUse.TARGET])
        if training is None:
            training = [g / 2 for g in generalization]
        self.script: List[Tuple[float, float]] = list(zip(training, generalization))
        self.calls: List[int] = []
        self.installed = None

    def evaluate(self, structure):
        if len(self.calls) >= len(self.script):
            raise AssertionError(f"Unexpected evaluation of {structure}")
        self.calls.append(structure)
        return self.script[len(self.calls) - 1]

    def get_parameters(self, structure):
        return np.full(structure, float(structure))

    def install(self, structure, parameters):
        self.installed = (structure, parameters)


class MaskEvaluator(Evaluator):
    """Error grows with the number of bits that differ from ``target``."""

    def __init__(self, target: Sequence[bool], noise: float = 0.0) -> None:
        self.target = np.asarray(target, dtype=bool)
        super().__init__([VariableUse.INPUT] * len(self.target) + [VariableUse.TARGET])
        self.noise = noise
        self.calls: List[np.ndarray] = []
        self.installed = None

    def generalization(self, mask) -> float:
        return 0.05 + 0.1 * float(np.sum(np.asarray(mask, dtype=bool) != self.target))

    def evaluate(self, structure):
        mask = np.asarray(structure, dtype=bool)
        self.calls.append(mask.copy())
        g = self.generalization(mask)
        return g / 2, g

    def get_parameters(self, structure):
        return np.asarray(structure, dtype=float)

    def install(self, structure, parameters):
        self.installed = (np.asarray(structure).copy(), np.asarray(parameters).copy())


class ConstantEvaluator(MaskEvaluator):

    def generalization(self, mask) -> float:
        return 0.5


class FailingEvaluator(MaskEvaluator):

    def evaluate(self, structure):
        raise RuntimeError("training diverged")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mask_evaluator() -> MaskEvaluator:
    return MaskEvaluator([True, False, True, False, True, False])
