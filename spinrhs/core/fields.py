"""
Vector fields on a 2D periodic lattice.

A vector field is a float64 ``numpy.ndarray`` of shape (3, M, N): axis 0 is
the Cartesian component, axes 1 and 2 index lattice rows and columns. This
module holds shape validation, the vectorized NumPy versions of the RHS
terms and a few diagnostics on RHS arrays.
"""

import numpy as np
from typing import Tuple

from .exceptions import ShapeMismatchError


def lattice_shape(spins: np.ndarray) -> Tuple[int, int]:
    """
    Validate a spin field and return its lattice extent.

    Args:
        spins: Candidate (3, M, N) array

    Returns:
        Tuple (M, N)
    """
    shape = np.shape(spins)
    if len(shape) != 3 or shape[0] != 3 or shape[1] < 1 or shape[2] < 1:
        raise ShapeMismatchError("spin", None, shape)
    return shape[1], shape[2]


def check_same_shape(name: str, array: np.ndarray, reference_shape: Tuple[int, ...]):
    """Raise ShapeMismatchError unless ``array`` has ``reference_shape``."""
    if np.shape(array) != tuple(reference_shape):
        raise ShapeMismatchError(name, reference_shape, np.shape(array))


def check_output_buffer(out: np.ndarray, reference_shape: Tuple[int, ...]):
    """Validate a caller-owned RHS buffer."""
    if not isinstance(out, np.ndarray):
        raise TypeError(f"RHS output must be a numpy.ndarray, got {type(out).__name__}")
    check_same_shape("rhs", out, reference_shape)
    if out.dtype != np.float64:
        raise TypeError(f"RHS output must have dtype float64, got {out.dtype}")
    if not out.flags.writeable:
        raise ValueError("RHS output buffer is read-only")


def allocate_field(m: int, n: int) -> np.ndarray:
    """Allocate a zeroed (3, m, n) field."""
    if m < 1 or n < 1:
        raise ShapeMismatchError("field", None, (3, m, n))
    return np.zeros((3, m, n), dtype=np.float64)


def spin_dot_field_numpy(spins: np.ndarray, fields: np.ndarray, out: np.ndarray) -> np.ndarray:
    """NumPy version of :func:`spinrhs.core.fast_ops.spin_dot_field`."""
    np.einsum('cij,cij->ij', spins, fields, out=out)
    return out


def precession_damping_numpy(
    spins: np.ndarray,
    fields: np.ndarray,
    s_dot_h: np.ndarray,
    damping: float,
    rhs: np.ndarray
) -> np.ndarray:
    """NumPy version of :func:`spinrhs.core.fast_ops.precession_damping`."""
    rhs[...] = np.cross(spins, fields, axis=0)
    rhs += damping * (fields - spins * s_dot_h)
    return rhs


def add_spin_torque_numpy(spins: np.ndarray, jx: float, jy: float, rhs: np.ndarray) -> np.ndarray:
    """NumPy version of :func:`spinrhs.core.fast_ops.add_spin_torque`."""
    # np.roll wraps around, which gives the periodic neighbours
    delta_x = 0.5 * (np.roll(spins, -1, axis=1) - np.roll(spins, 1, axis=1))
    delta_y = 0.5 * (np.roll(spins, -1, axis=2) - np.roll(spins, 1, axis=2))

    torque_x = np.cross(spins, np.cross(delta_x, spins, axis=0), axis=0)
    torque_y = np.cross(spins, np.cross(delta_y, spins, axis=0), axis=0)

    rhs += -jx * torque_x - jy * torque_y
    return rhs


def check_unit_norm(spins: np.ndarray, atol: float = 1e-8) -> bool:
    """Return True if every lattice site carries a unit vector."""
    lattice_shape(spins)
    norms = np.sqrt(np.sum(spins**2, axis=0))
    return bool(np.allclose(norms, 1.0, atol=atol))


def mean_torque(rhs: np.ndarray) -> float:
    """Average magnitude of ds/dt over the lattice."""
    lattice_shape(rhs)
    return float(np.mean(np.linalg.norm(rhs, axis=0)))


def orthogonality_residual(spins: np.ndarray, rhs: np.ndarray) -> float:
    """
    Largest |s · ds/dt| over the lattice.

    For unit spins the LLG right-hand side is orthogonal to s, so this is
    zero up to rounding.
    """
    lattice_shape(spins)
    check_same_shape("rhs", rhs, spins.shape)
    return float(np.max(np.abs(np.sum(spins * rhs, axis=0))))
