"""Construction of spin fields for tests, examples and benchmarks."""

import numpy as np
from typing import Optional, Sequence


def set_random_seed(seed: int):
    """
    Set random seed for reproducible results.

    Args:
        seed: Random seed value
    """
    np.random.seed(seed)


def random_unit_field(m: int, n: int, seed: Optional[int] = None) -> np.ndarray:
    """
    Generate a (3, m, n) field of unit vectors uniformly distributed on the sphere.

    Args:
        m: Number of lattice rows
        n: Number of lattice columns
        seed: Optional random seed

    Returns:
        Array of shape (3, m, n) with unit vectors
    """
    if seed is not None:
        np.random.seed(seed)

    # Archimedes: uniform z and azimuth give a uniform distribution on the sphere
    phi = np.random.uniform(0, 2*np.pi, (m, n))
    cos_theta = np.random.uniform(-1, 1, (m, n))
    sin_theta = np.sqrt(1 - cos_theta**2)

    x = sin_theta * np.cos(phi)
    y = sin_theta * np.sin(phi)
    z = cos_theta

    return np.stack((x, y, z))


def uniform_field(vector: Sequence[float], m: int, n: int) -> np.ndarray:
    """
    Field with the same vector at every site.

    Args:
        vector: (3,) vector
        m: Number of lattice rows
        n: Number of lattice columns

    Returns:
        Array of shape (3, m, n)
    """
    vector = np.asarray(vector, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Vector must have 3 components, got shape {vector.shape}")
    return np.repeat(np.repeat(vector[:, None, None], m, axis=1), n, axis=2)
