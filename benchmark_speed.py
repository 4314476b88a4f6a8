#!/usr/bin/env python3
"""
Benchmark the Numba RHS kernels against the NumPy implementation.
"""

from spinrhs.core.fast_ops import check_numba_availability
from spinrhs.utils.performance import benchmark_rhs, print_benchmark_summary


def main():
    numba_available, message = check_numba_availability()
    print(f"Numba status: {message}")

    results = benchmark_rhs(lattice_sizes=[32, 64, 128, 256], n_iterations=50)
    print_benchmark_summary(results)

    if numba_available:
        largest = results['lattice_sizes'][-1]
        rate = results['benchmarks'][largest]['dynamics']['sites_per_second']
        print(f"\nDynamics throughput at {largest}x{largest}: {rate:.3e} site updates/s")


if __name__ == "__main__":
    main()
