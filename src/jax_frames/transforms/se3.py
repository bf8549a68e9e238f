"""SE(3) homogeneous-matrix helpers in JAX.

Rigid transforms are (4, 4) arrays with the last row fixed to [0, 0, 0, 1].
These are the raw building blocks behind `Transform`; all of them are pure
and jit-friendly.
"""

import jax
import jax.numpy as jnp

from . import so3

Array = jax.Array


def from_position_and_rotation(p: Array, R: Array) -> Array:
    """
    Construct a homogeneous transform from a translation and a rotation.

    Args:
        p: (3,) translation
        R: (3, 3) rotation matrix

    Returns:
        (4, 4) homogeneous transformation matrix
    """
    p = jnp.asarray(p, dtype=jnp.float64)
    R = jnp.asarray(R, dtype=jnp.float64)
    T = jnp.eye(4, dtype=jnp.float64)
    T = T.at[:3, :3].set(R)
    T = T.at[:3, 3].set(p)
    return T


def multiply(T1: Array, T2: Array) -> Array:
    """T1 @ T2: apply T2 first, then T1."""
    return jnp.matmul(T1, T2)


def inverse(T: Array) -> Array:
    """
    Inverse using the block structure:
    T^-1 = [[R^T, -R^T @ t], [0, 1]]
    """
    R_inv = so3.inverse(T[:3, :3])
    t_inv = -R_inv @ T[:3, 3]
    return from_position_and_rotation(t_inv, R_inv)


def apply(T: Array, points: Array) -> Array:
    """
    Apply a transform to a point (3,) or a batch of points (N, 3).
    """
    return jnp.einsum("ij,...j->...i", T[:3, :3], points) + T[:3, 3]


def get_position(T: Array) -> Array:
    return T[:3, 3]


def get_rotation(T: Array) -> Array:
    return T[:3, :3]
