"""
Results Analysis and Export
"""

import json
from pathlib import Path

import numpy as np

from ..core import SelectionResults


class ResultsAnalyzer:
    """Analyze and export selection results"""

    @staticmethod
    def print_results(results: SelectionResults, title: str = 'Selection'):
        o = results.outcome
        structure = o.optimal_structure
        if isinstance(structure, np.ndarray):
            structure = f"{int(structure.sum())}/{len(structure)} inputs {np.flatnonzero(structure).tolist()}"
        print(f"\n{'='*70}\n{title} Results\n{'='*70}")
        print(f"Stopping condition: {o.stopping_condition.value}")
        print(f"Optimal structure: {structure}")
        print(f"Final performance: {o.final_training_performance:.6f}")
        print(f"Final generalization performance: {o.final_generalization_performance:.6f}")
        print(f"Iterations: {o.iterations_number} | Elapsed time: {o.elapsed_time:.2f}s")
        print("="*70)

    @staticmethod
    def compute_statistics(results: SelectionResults):
        gen = results.history.generalization_performance_data
        if not gen:
            return None
        stats = {'min': float(np.min(gen)), 'max': float(np.max(gen)),
                 'mean': float(np.mean(gen)), 'std': float(np.std(gen))}
        print(f"\n{'='*60}\nStatistics\n{'='*60}")
        print(f"Iterations recorded: {len(gen)}")
        print(f"Generalization: Min={stats['min']:.4f}, Max={stats['max']:.4f}, "
              f"Mean={stats['mean']:.4f}, Std={stats['std']:.4f}")
        print("="*60)
        return stats

    @staticmethod
    def export_results(results: SelectionResults, filepath: str, verbose: bool = True):
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f: json.dump(results.to_dict(), f, indent=2)
        if verbose:
            print(f"✓ Results saved to {filepath}")
