"""
Evaluation module - Evaluator contract and training
"""

from .evaluator import Evaluator, CallableEvaluator
from .trainer import MLPTrainer

__all__ = [
    'Evaluator',
    'CallableEvaluator',
    'MLPTrainer',
]
