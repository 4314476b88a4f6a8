"""LLG right-hand side evaluation and effective field providers."""

from .llg_rhs import RHSEvaluator
from .effective_field import (
    EffectiveFieldProvider,
    UniformFieldProvider,
    ExchangeFieldProvider,
    UniaxialAnisotropyFieldProvider,
    CallableFieldProvider,
    CompositeFieldProvider,
)

__all__ = [
    "RHSEvaluator",
    "EffectiveFieldProvider",
    "UniformFieldProvider",
    "ExchangeFieldProvider",
    "UniaxialAnisotropyFieldProvider",
    "CallableFieldProvider",
    "CompositeFieldProvider",
]
