"""SO(3) rotation helpers in JAX.

Rotations are plain (3, 3) arrays. Every function here is pure and uses only
`jax.numpy` operations so it can be traced by `jax.jit`.
"""

import jax
import jax.numpy as jnp

Array = jax.Array


def skew_symmetric(v: Array) -> Array:
    """
    Convert a 3D vector to its cross-product matrix.

    Args:
        v: (3,) vector

    Returns:
        (3, 3) matrix K such that K @ u == cross(v, u)
    """
    x, y, z = v[0], v[1], v[2]
    zero = jnp.zeros((), dtype=v.dtype)
    return jnp.stack([
        jnp.stack([zero, -z, y]),
        jnp.stack([z, zero, -x]),
        jnp.stack([-y, x, zero]),
    ])


def from_axis_angle(axis: Array, angle) -> Array:
    """
    Rotation of `angle` radians about a unit `axis` (Rodrigues' formula).

    The axis is assumed to be normalized already; no check is made so the
    function stays traceable.
    """
    axis = jnp.asarray(axis, dtype=jnp.float64)
    angle = jnp.asarray(angle, dtype=jnp.float64)
    K = skew_symmetric(axis)
    I = jnp.eye(3, dtype=axis.dtype)
    return I + jnp.sin(angle) * K + (1.0 - jnp.cos(angle)) * (K @ K)


def exp(log_r: Array) -> Array:
    """
    SO(3) exponential map: axis-angle vector to rotation matrix.

    Args:
        log_r: (3,) axis scaled by the rotation angle

    Returns:
        (3, 3) rotation matrix
    """
    log_r = jnp.asarray(log_r, dtype=jnp.float64)
    angle = jnp.linalg.norm(log_r)
    # Near zero the axis is undefined; fall back to the first-order term.
    safe_angle = jnp.where(angle > 1e-12, angle, 1.0)
    axis = log_r / safe_angle
    R = from_axis_angle(axis, angle)
    return jnp.where(angle > 1e-12, R, jnp.eye(3) + skew_symmetric(log_r))


def log(R: Array) -> Array:
    """
    SO(3) logarithm map: rotation matrix to axis-angle vector.

    Handles the identity and the angle == pi case explicitly.
    """
    vee = jnp.stack([R[2, 1] - R[1, 2], R[0, 2] - R[2, 0], R[1, 0] - R[0, 1]])
    # atan2 keeps full precision near 0 where arccos of the trace does not.
    angle = jnp.arctan2(jnp.linalg.norm(vee) / 2.0, (jnp.trace(R) - 1.0) / 2.0)

    small = angle < 1e-8
    near_pi = jnp.abs(angle - jnp.pi) < 1e-6

    general = vee * angle / (2.0 * jnp.where(small, 1.0, jnp.sin(angle)))

    # At pi the skew part vanishes; read the axis off the symmetric part.
    B = (R + jnp.eye(3)) / 2.0
    col = B[:, jnp.argmax(jnp.diagonal(B))]
    axis_pi = col / jnp.linalg.norm(col)

    return jnp.where(small, vee / 2.0, jnp.where(near_pi, axis_pi * angle, general))


def from_rpy(rpy) -> Array:
    """
    Rotation from fixed-axis roll, pitch, yaw angles (URDF convention).

    Returns:
        (3, 3) matrix Rz(yaw) @ Ry(pitch) @ Rx(roll)
    """
    roll, pitch, yaw = (jnp.asarray(a, dtype=jnp.float64) for a in rpy)
    Rx = from_axis_angle(jnp.array([1.0, 0.0, 0.0]), roll)
    Ry = from_axis_angle(jnp.array([0.0, 1.0, 0.0]), pitch)
    Rz = from_axis_angle(jnp.array([0.0, 0.0, 1.0]), yaw)
    return Rz @ Ry @ Rx


def inverse(R: Array) -> Array:
    """Inverse of a rotation matrix, i.e. its transpose."""
    return jnp.swapaxes(R, -1, -2)


def to_quaternion(R: Array) -> Array:
    """
    Convert a rotation matrix to a unit quaternion (w, x, y, z).

    The branch with the largest diagonal term is used for stability and the
    result is returned with a non-negative scalar part.
    """
    m00, m01, m02 = R[0, 0], R[0, 1], R[0, 2]
    m10, m11, m12 = R[1, 0], R[1, 1], R[1, 2]
    m20, m21, m22 = R[2, 0], R[2, 1], R[2, 2]
    trace = m00 + m11 + m22

    candidates = jnp.stack([
        jnp.stack([1.0 + trace, m21 - m12, m02 - m20, m10 - m01]),
        jnp.stack([m21 - m12, 1.0 + m00 - m11 - m22, m01 + m10, m02 + m20]),
        jnp.stack([m02 - m20, m01 + m10, 1.0 - m00 + m11 - m22, m12 + m21]),
        jnp.stack([m10 - m01, m02 + m20, m12 + m21, 1.0 - m00 - m11 + m22]),
    ])
    pick = jnp.argmax(jnp.array([trace, m00, m11, m22]))
    q = candidates[pick]
    q = q / jnp.linalg.norm(q)
    return jnp.where(q[0] < 0, -q, q)
