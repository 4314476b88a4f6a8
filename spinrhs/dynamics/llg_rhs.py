"""
Right-hand side of the Landau-Lifshitz-Gilbert equation on a 2D lattice.
"""

import logging
import numpy as np
from typing import Callable, Mapping, Tuple, Union

from ..core.exceptions import ConfigError
from ..core.fast_ops import spin_dot_field, precession_damping, add_spin_torque, periodic_neighbors
from ..core.fields import (
    lattice_shape, check_same_shape, check_output_buffer,
    spin_dot_field_numpy, precession_damping_numpy, add_spin_torque_numpy
)
from ..core.parameters import Mode, SimulationParameters
from .effective_field import EffectiveFieldProvider

logger = logging.getLogger('spinrhs')


def _read_parameter(params, section: str, name: str) -> float:
    """Fetch ``params.<section>.<name>`` as a finite float or raise ConfigError."""
    dotted = f"{section}.{name}"
    try:
        value = getattr(getattr(params, section), name)
    except AttributeError:
        raise ConfigError(dotted) from None
    if isinstance(value, bool):
        raise ConfigError(dotted, "expected a real number, got bool")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigError(dotted, f"expected a real number, got {type(value).__name__}") from None
    if not np.isfinite(value):
        raise ConfigError(dotted, f"must be finite, got {value}")
    return value


class RHSEvaluator:
    """
    Evaluator of ds/dt for a spin field on a periodic square lattice.

    The LLG right-hand side evaluated here is

        ds/dt = s × H + λ (H - s (s · H))
                - jx s × (∂x s × s) - jy s × (∂y s × s)

    with H the effective field supplied by a provider, λ the damping and
    (jx, jy) the in-plane current. The Gilbert prefactor 1/(1+λ²) is not
    applied, and the spin torque is the adiabatic term only.

    In relaxation mode λ is forced to 1 and the current term is dropped.
    Spin normalization is left to the integrator.
    """

    def __init__(self, field_provider: EffectiveFieldProvider, use_fast: bool = True):
        """
        Initialize the evaluator.

        Args:
            field_provider: Source of the effective field
            use_fast: Whether to use the Numba kernels (NumPy otherwise)
        """
        if not isinstance(field_provider, EffectiveFieldProvider):
            raise TypeError(
                f"field_provider must be an EffectiveFieldProvider, got {type(field_provider).__name__}"
            )
        self.field_provider = field_provider
        self.use_fast = use_fast

        # Scratch data reused while the lattice shape is unchanged
        self._s_dot_h = None
        self._neighbors = None

        logger.debug("Creating RHSEvaluator (provider=%s, kernels=%s).",
                     field_provider.__class__.__name__, "numba" if use_fast else "numpy")

    def _prepare_lattice(self, m: int, n: int):
        """(Re)allocate the s · H buffer and neighbour tables for an m x n lattice."""
        if self._s_dot_h is None or self._s_dot_h.shape != (m, n):
            logger.debug("Allocating scratch buffers for a %dx%d lattice.", m, n)
            self._s_dot_h = np.empty((m, n), dtype=np.float64)
            self._neighbors = periodic_neighbors(m, n)

    @staticmethod
    def resolve_parameters(mode: Mode, params) -> Tuple[float, float, float]:
        """
        Extract the parameters used by the RHS.

        Args:
            mode: Evaluation mode
            params: Parameter bundle with ``llg.damping``, ``current.jx``
                and ``current.jy``

        Returns:
            Tuple (effective damping, jx, jy); jx and jy are zero in
            relaxation mode
        """
        damping = _read_parameter(params, "llg", "damping")
        if damping < 0:
            raise ConfigError("llg.damping", f"must be >= 0, got {damping}")
        jx = _read_parameter(params, "current", "jx")
        jy = _read_parameter(params, "current", "jy")

        if mode is Mode.RELAXATION:
            return 1.0, 0.0, 0.0
        return damping, jx, jy

    def evaluate(
        self,
        t: float,
        spins: np.ndarray,
        rhs: np.ndarray,
        mode: Union[Mode, str],
        params: Union[SimulationParameters, Mapping]
    ) -> np.ndarray:
        """
        Write ds/dt for the given spin field into ``rhs``.

        Args:
            t: Current simulation time (only forwarded to the field provider)
            spins: (3, M, N) spin field, read only
            rhs: (3, M, N) float64 output buffer, overwritten in place
            mode: Mode.RELAXATION or Mode.DYNAMICS
            params: Parameter bundle (a mapping is converted with
                SimulationParameters.from_dict)

        Returns:
            ``rhs``
        """
        m, n = lattice_shape(spins)
        check_output_buffer(rhs, np.shape(spins))
        mode = Mode.coerce(mode)
        if isinstance(params, Mapping):
            params = SimulationParameters.from_dict(params)
        damping, jx, jy = self.resolve_parameters(mode, params)

        spins = np.asarray(spins, dtype=np.float64)

        self.field_provider.update(t)
        fields = self.field_provider.compute(spins, params)
        check_same_shape("effective field", fields, spins.shape)
        fields = np.asarray(fields, dtype=np.float64)

        self._prepare_lattice(m, n)
        s_dot_h = self._s_dot_h
        has_current = jx != 0.0 or jy != 0.0

        if self.use_fast:
            spin_dot_field(spins, fields, s_dot_h)
            precession_damping(spins, fields, s_dot_h, damping, rhs)
            if has_current:
                add_spin_torque(spins, jx, jy, *self._neighbors, rhs)
        else:
            spin_dot_field_numpy(spins, fields, s_dot_h)
            precession_damping_numpy(spins, fields, s_dot_h, damping, rhs)
            if has_current:
                add_spin_torque_numpy(spins, jx, jy, rhs)

        return rhs

    def ode_function(
        self,
        shape: Tuple[int, int, int],
        mode: Union[Mode, str],
        params: Union[SimulationParameters, Mapping]
    ) -> Callable[[float, np.ndarray], np.ndarray]:
        """
        Adapt the evaluator to the ``f(t, y)`` convention of ODE steppers.

        Args:
            shape: (3, M, N) shape of the spin field
            mode: Evaluation mode
            params: Parameter bundle

        Returns:
            Function mapping (t, flattened spins) to a new flattened ds/dt
        """
        shape = tuple(shape)
        lattice_shape(np.broadcast_to(0.0, shape))
        mode = Mode.coerce(mode)
        if isinstance(params, Mapping):
            params = SimulationParameters.from_dict(params)
        size = int(np.prod(shape))

        def f(t, y):
            y = np.asarray(y, dtype=np.float64)
            if y.size != size:
                raise ValueError(f"State vector must have {size} entries, got {y.size}")
            rhs = np.empty(shape, dtype=np.float64)
            self.evaluate(t, y.reshape(shape), rhs, mode, params)
            return rhs.ravel()

        return f

    def __repr__(self) -> str:
        return (f"RHSEvaluator(provider={self.field_provider.__class__.__name__}, "
                f"use_fast={self.use_fast})")
