"""
SpinRHS: Landau-Lifshitz-Gilbert right-hand side on a 2D periodic lattice.

Computes ds/dt for a unit spin field under precession, Gilbert damping and
an adiabatic current-induced spin-transfer torque, for use by an external
time integrator.
"""

import logging

__version__ = "0.1.0"

logging.getLogger('spinrhs').addHandler(logging.NullHandler())

from . import core
from . import dynamics
from . import utils

from .core import (
    Mode, LLGParameters, CurrentParameters, SimulationParameters,
    SpinRHSError, ShapeMismatchError, ConfigError
)
from .core.parameters import load_parameters, save_parameters
from .dynamics import (
    RHSEvaluator, EffectiveFieldProvider, UniformFieldProvider,
    ExchangeFieldProvider, UniaxialAnisotropyFieldProvider,
    CallableFieldProvider, CompositeFieldProvider
)

# Performance utilities
from .core.fast_ops import check_numba_availability
from .utils.performance import benchmark_rhs, print_benchmark_summary

__all__ = [
    "Mode",
    "LLGParameters",
    "CurrentParameters",
    "SimulationParameters",
    "SpinRHSError",
    "ShapeMismatchError",
    "ConfigError",
    "load_parameters",
    "save_parameters",
    "RHSEvaluator",
    "EffectiveFieldProvider",
    "UniformFieldProvider",
    "ExchangeFieldProvider",
    "UniaxialAnisotropyFieldProvider",
    "CallableFieldProvider",
    "CompositeFieldProvider",
    "check_numba_availability",
    "benchmark_rhs",
    "print_benchmark_summary",
    "core",
    "dynamics",
    "utils"
]
