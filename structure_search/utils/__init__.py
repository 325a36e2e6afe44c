"""
Utils module - Persistence and results analysis
"""

from .analysis import ResultsAnalyzer
from .persistence import (
    config_to_element,
    config_from_element,
    results_to_element,
    read_document,
    write_document,
)

__all__ = [
    'ResultsAnalyzer',
    'config_to_element',
    'config_from_element',
    'results_to_element',
    'read_document',
    'write_document',
]
