"""
Performance testing and benchmarking utilities.
"""

import time
import numpy as np
from typing import Dict, List, Any
from tqdm import tqdm

from ..core.fast_ops import check_numba_availability
from ..core.parameters import Mode, LLGParameters, CurrentParameters, SimulationParameters
from ..dynamics.effective_field import (
    CompositeFieldProvider, ExchangeFieldProvider, UniformFieldProvider
)
from ..dynamics.llg_rhs import RHSEvaluator
from .random import random_unit_field


def _time_evaluations(evaluator, spins, rhs, mode, params, n_iterations) -> float:
    start_time = time.perf_counter()
    for step in range(n_iterations):
        evaluator.evaluate(step * params.llg.h_step, spins, rhs, mode, params)
    return time.perf_counter() - start_time


def benchmark_rhs(
    lattice_sizes: List[int] = [16, 32, 64, 128],
    n_iterations: int = 100,
    verbose: bool = True
) -> Dict[str, Any]:
    """
    Benchmark the Numba RHS kernels against the NumPy implementation.

    Args:
        lattice_sizes: Linear lattice sizes L (an L x L lattice is used)
        n_iterations: Number of RHS evaluations timed per size and mode
        verbose: Whether to show a progress bar

    Returns:
        Dictionary with benchmark results
    """
    numba_available, message = check_numba_availability()

    results = {
        'numba_available': numba_available,
        'numba_message': message,
        'lattice_sizes': list(lattice_sizes),
        'benchmarks': {}
    }

    if not numba_available:
        print(f"Numba not available: {message}")
        return results

    params = SimulationParameters(
        llg=LLGParameters(damping=0.1),
        current=CurrentParameters(jx=0.5, jy=0.25)
    )
    provider = CompositeFieldProvider([
        ExchangeFieldProvider(1.0),
        UniformFieldProvider([0.0, 0.0, 0.5])
    ])
    fast = RHSEvaluator(provider, use_fast=True)
    slow = RHSEvaluator(provider, use_fast=False)

    for size in tqdm(lattice_sizes, desc="RHS benchmark", disable=not verbose):
        spins = random_unit_field(size, size, seed=42)
        rhs_fast = np.empty_like(spins)
        rhs_slow = np.empty_like(spins)

        size_results = {}
        for mode in Mode:
            # Warm-up call triggers JIT compilation
            fast.evaluate(0.0, spins, rhs_fast, mode, params)

            time_fast = _time_evaluations(fast, spins, rhs_fast, mode, params, n_iterations)
            time_slow = _time_evaluations(slow, spins, rhs_slow, mode, params, n_iterations)

            size_results[mode.value] = {
                'time_fast': time_fast,
                'time_slow': time_slow,
                'speedup': time_slow / time_fast if time_fast > 0 else float('inf'),
                'max_deviation': float(np.max(np.abs(rhs_fast - rhs_slow))),
                'sites_per_second': size * size * n_iterations / time_fast if time_fast > 0 else float('inf')
            }

        results['benchmarks'][size] = size_results

    return results


def print_benchmark_summary(results: Dict[str, Any]):
    """
    Print a formatted summary of benchmark results.

    Args:
        results: Results from benchmark_rhs
    """
    print("\n" + "=" * 60)
    print("RHS BENCHMARK SUMMARY")
    print("=" * 60)

    if not results['numba_available']:
        print(f"Numba not available: {results['numba_message']}")
        return

    print(f"{'Lattice':>10}{'Mode':>14}{'Numba (s)':>12}{'NumPy (s)':>12}{'Speedup':>10}")
    print("-" * 58)

    for size in results['lattice_sizes']:
        for mode, entry in results['benchmarks'].get(size, {}).items():
            print(f"{f'{size}x{size}':>10}{mode:>14}"
                  f"{entry['time_fast']:>12.4f}{entry['time_slow']:>12.4f}"
                  f"{entry['speedup']:>9.1f}x")

    print()
    print("Note: Speedups are calculated as (NumPy time) / (Numba time)")
