"""Utility functions and helpers."""

from .random import set_random_seed, random_unit_field, uniform_field

__all__ = [
    "set_random_seed",
    "random_unit_field",
    "uniform_field",
]
