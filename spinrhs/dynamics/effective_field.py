"""
Effective field providers.

The RHS evaluator does not compute physics fields itself; it asks an
``EffectiveFieldProvider`` for H_eff at every call. The providers in this
module cover simple cases (applied fields, nearest-neighbour exchange,
uniaxial anisotropy) and are mainly meant for tests and examples.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from ..core.exceptions import ShapeMismatchError
from ..core.fast_ops import exchange_field, periodic_neighbors
from ..core.fields import lattice_shape

logger = logging.getLogger('spinrhs')


class EffectiveFieldProvider(ABC):
    """Abstract base class for effective field calculations."""

    def update(self, t: float):
        """
        Hook called with the simulation time before every ``compute``.

        Time-independent providers ignore it.
        """
        pass

    @abstractmethod
    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        """
        Calculate the effective field.

        Args:
            spins: (3, M, N) spin field
            params: Parameter bundle

        Returns:
            (3, M, N) effective field
        """
        pass


class _BufferedProvider(EffectiveFieldProvider):
    """Provider that reuses one output buffer across calls."""

    def __init__(self):
        self._buffer = None

    def _output(self, spins: np.ndarray) -> np.ndarray:
        if self._buffer is None or self._buffer.shape != spins.shape:
            logger.debug("%s: allocating field buffer of shape %s",
                         self.__class__.__name__, spins.shape)
            self._buffer = np.zeros(spins.shape, dtype=np.float64)
        return self._buffer


class UniformFieldProvider(_BufferedProvider):
    """
    Spatially uniform applied field, optionally modulated in time.

    Args:
        field: (3,) field vector
        time_profile: Optional scalar function f(t); the field at time t
            is ``field * f(t)`` (e.g. for pulsed fields)
    """

    def __init__(self, field: Sequence[float], time_profile: Optional[Callable[[float], float]] = None):
        super().__init__()
        self.field = np.asarray(field, dtype=np.float64)
        if self.field.shape != (3,):
            raise ValueError(f"Field must be a 3-vector, got shape {self.field.shape}")
        self.time_profile = time_profile
        self._scale = 1.0 if time_profile is None else float(time_profile(0.0))

    def update(self, t: float):
        if self.time_profile is not None:
            self._scale = float(self.time_profile(t))

    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        lattice_shape(spins)
        out = self._output(spins)
        out[...] = (self._scale * self.field)[:, None, None]
        return out


class ExchangeFieldProvider(_BufferedProvider):
    """
    Nearest-neighbour exchange field on the periodic square lattice.

    Args:
        exchange: Exchange constant J (positive for ferromagnetic coupling)
    """

    def __init__(self, exchange: float):
        super().__init__()
        self.exchange = float(exchange)
        self._neighbors = None
        self._neighbors_shape = None

    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        m, n = lattice_shape(spins)
        if self._neighbors_shape != (m, n):
            self._neighbors = periodic_neighbors(m, n)
            self._neighbors_shape = (m, n)
        out = self._output(spins)
        exchange_field(np.asarray(spins, dtype=np.float64), self.exchange, *self._neighbors, out)
        return out


class UniaxialAnisotropyFieldProvider(_BufferedProvider):
    """
    Uniaxial anisotropy field H = 2 K (s · u) u.

    Args:
        anisotropy: Anisotropy constant K
        axis: (3,) easy axis, normalized on construction
    """

    def __init__(self, anisotropy: float, axis: Sequence[float] = (0.0, 0.0, 1.0)):
        super().__init__()
        self.anisotropy = float(anisotropy)
        axis = np.asarray(axis, dtype=np.float64)
        norm = np.linalg.norm(axis)
        if axis.shape != (3,) or norm == 0:
            raise ValueError("Anisotropy axis must be a nonzero 3-vector")
        self.axis = axis / norm

    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        lattice_shape(spins)
        out = self._output(spins)
        projection = np.einsum('c,cij->ij', self.axis, spins)
        out[...] = 2.0 * self.anisotropy * self.axis[:, None, None] * projection
        return out


class CallableFieldProvider(EffectiveFieldProvider):
    """
    Wrap a plain function ``func(spins, params) -> field`` as a provider.

    If ``time_dependent`` is True the function is called as
    ``func(spins, params, t)`` with the time passed to the last ``update``.
    """

    def __init__(self, func: Callable, time_dependent: bool = False):
        self.func = func
        self.time_dependent = time_dependent
        self.t = 0.0

    def update(self, t: float):
        self.t = t

    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        if self.time_dependent:
            return self.func(spins, params, self.t)
        return self.func(spins, params)


class CompositeFieldProvider(_BufferedProvider):
    """Sum of several field contributions."""

    def __init__(self, providers: Sequence[EffectiveFieldProvider]):
        super().__init__()
        self.providers = list(providers)
        if not self.providers:
            raise ValueError("CompositeFieldProvider needs at least one provider")

    def update(self, t: float):
        for provider in self.providers:
            provider.update(t)

    def compute(self, spins: np.ndarray, params) -> np.ndarray:
        lattice_shape(spins)
        out = self._output(spins)
        out.fill(0.0)
        for provider in self.providers:
            contribution = provider.compute(spins, params)
            if np.shape(contribution) != spins.shape:
                raise ShapeMismatchError(
                    f"field from {provider.__class__.__name__}", spins.shape, np.shape(contribution)
                )
            out += contribution
        return out
