"""Core data model, kernels and parameter handling."""

from .exceptions import SpinRHSError, ShapeMismatchError, ConfigError
from .parameters import Mode, LLGParameters, CurrentParameters, SimulationParameters

__all__ = [
    "SpinRHSError",
    "ShapeMismatchError",
    "ConfigError",
    "Mode",
    "LLGParameters",
    "CurrentParameters",
    "SimulationParameters",
]
