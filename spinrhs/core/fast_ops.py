"""
High-performance Numba-accelerated kernels for the LLG right-hand side.

All kernels operate on (3, M, N) float64 arrays (component axis first) and
write into caller-provided buffers. Lattice rows are distributed over
threads with ``prange``; every thread writes only to its own rows.
"""

import numpy as np
from numba import njit, prange


@njit(parallel=True, fastmath=True)
def spin_dot_field(spins, fields, out):
    """
    Site-wise projection of the effective field onto the spin.

    Args:
        spins: (3, M, N) spin field
        fields: (3, M, N) effective field
        out: (M, N) buffer receiving s · H at every site
    """
    m = spins.shape[1]
    n = spins.shape[2]

    for i in prange(m):
        for j in range(n):
            out[i, j] = (spins[0, i, j] * fields[0, i, j] +
                         spins[1, i, j] * fields[1, i, j] +
                         spins[2, i, j] * fields[2, i, j])


@njit(parallel=True, fastmath=True)
def precession_damping(spins, fields, s_dot_h, damping, rhs):
    """
    Fill the RHS with the precession and Gilbert damping terms.

    rhs = s × H + λ (H - s (s · H))

    No 1/(1+λ²) prefactor is applied.

    Args:
        spins: (3, M, N) spin field
        fields: (3, M, N) effective field
        s_dot_h: (M, N) projection s · H
        damping: Damping coefficient λ
        rhs: (3, M, N) output buffer, overwritten
    """
    m = spins.shape[1]
    n = spins.shape[2]

    for i in prange(m):
        for j in range(n):
            sx = spins[0, i, j]
            sy = spins[1, i, j]
            sz = spins[2, i, j]
            hx = fields[0, i, j]
            hy = fields[1, i, j]
            hz = fields[2, i, j]
            d = s_dot_h[i, j]

            rhs[0, i, j] = sy * hz - sz * hy + damping * (hx - sx * d)
            rhs[1, i, j] = sz * hx - sx * hz + damping * (hy - sy * d)
            rhs[2, i, j] = sx * hy - sy * hx + damping * (hz - sz * d)


@njit(fastmath=True)
def _torque_component(sx, sy, sz, dx, dy, dz):
    """Return s × (Δ × s) for a single site."""
    # Δ × s
    cx = dy * sz - dz * sy
    cy = dz * sx - dx * sz
    cz = dx * sy - dy * sx

    # s × (Δ × s)
    return (sy * cz - sz * cy,
            sz * cx - sx * cz,
            sx * cy - sy * cx)


@njit(parallel=True, fastmath=True)
def add_spin_torque(spins, jx, jy, row_next, row_prev, col_next, col_prev, rhs):
    """
    Add the adiabatic spin-transfer torque to an already populated RHS.

    Central differences on a periodic lattice with unit spacing:
        ΔX = (s[i+1, j] - s[i-1, j]) / 2
        ΔY = (s[i, j+1] - s[i, j-1]) / 2
        rhs += -jx s × (ΔX × s) - jy s × (ΔY × s)

    Args:
        spins: (3, M, N) spin field (read only)
        jx: Current density along the row axis
        jy: Current density along the column axis
        row_next, row_prev: (M,) periodic row neighbour indices
        col_next, col_prev: (N,) periodic column neighbour indices
        rhs: (3, M, N) buffer, updated in place
    """
    m = spins.shape[1]
    n = spins.shape[2]

    for i in prange(m):
        i_next = row_next[i]
        i_prev = row_prev[i]

        for j in range(n):
            j_next = col_next[j]
            j_prev = col_prev[j]

            sx = spins[0, i, j]
            sy = spins[1, i, j]
            sz = spins[2, i, j]

            dxx = 0.5 * (spins[0, i_next, j] - spins[0, i_prev, j])
            dxy = 0.5 * (spins[1, i_next, j] - spins[1, i_prev, j])
            dxz = 0.5 * (spins[2, i_next, j] - spins[2, i_prev, j])

            dyx = 0.5 * (spins[0, i, j_next] - spins[0, i, j_prev])
            dyy = 0.5 * (spins[1, i, j_next] - spins[1, i, j_prev])
            dyz = 0.5 * (spins[2, i, j_next] - spins[2, i, j_prev])

            tx_x, tx_y, tx_z = _torque_component(sx, sy, sz, dxx, dxy, dxz)
            ty_x, ty_y, ty_z = _torque_component(sx, sy, sz, dyx, dyy, dyz)

            rhs[0, i, j] += -jx * tx_x - jy * ty_x
            rhs[1, i, j] += -jx * tx_y - jy * ty_y
            rhs[2, i, j] += -jx * tx_z - jy * ty_z


@njit(parallel=True, fastmath=True)
def exchange_field(spins, exchange, row_next, row_prev, col_next, col_prev, out):
    """
    Nearest-neighbour exchange field on the periodic 4-neighbour stencil.

    Args:
        spins: (3, M, N) spin field
        exchange: Exchange constant J
        row_next, row_prev: (M,) periodic row neighbour indices
        col_next, col_prev: (N,) periodic column neighbour indices
        out: (3, M, N) buffer receiving J Σ_nn s_nn
    """
    m = spins.shape[1]
    n = spins.shape[2]

    for i in prange(m):
        i_next = row_next[i]
        i_prev = row_prev[i]

        for j in range(n):
            j_next = col_next[j]
            j_prev = col_prev[j]

            for c in range(3):
                out[c, i, j] = exchange * (spins[c, i_next, j] + spins[c, i_prev, j] +
                                           spins[c, i, j_next] + spins[c, i, j_prev])


def periodic_neighbors(m: int, n: int):
    """
    Neighbour index tables of an m x n torus.

    On a lattice of extent 1 or 2 along an axis the next and previous
    neighbours coincide.

    Returns:
        Tuple (row_next, row_prev, col_next, col_prev) of int64 arrays
    """
    rows = np.arange(m, dtype=np.int64)
    cols = np.arange(n, dtype=np.int64)
    return (np.roll(rows, -1), np.roll(rows, 1),
            np.roll(cols, -1), np.roll(cols, 1))


def get_numba_operations():
    """
    Get dictionary of available Numba-accelerated operations.

    Returns:
        Dictionary mapping operation names to functions
    """
    return {
        'spin_dot_field': spin_dot_field,
        'precession_damping': precession_damping,
        'add_spin_torque': add_spin_torque,
        'exchange_field': exchange_field,
    }


def check_numba_availability():
    """Check that Numba compiles and runs the RHS kernels."""
    try:
        spins = np.zeros((3, 1, 1))
        spins[2] = 1.0
        rhs = np.zeros_like(spins)
        s_dot_h = np.zeros((1, 1))
        spin_dot_field(spins, spins, s_dot_h)
        precession_damping(spins, spins, s_dot_h, 0.0, rhs)
        return True, "Numba available and working"

    except Exception as e:
        return False, f"Numba installation issue: {e}"
