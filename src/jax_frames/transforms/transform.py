"""Rigid-body transform value type implemented with JAX."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import jax
import jax.numpy as jnp
import numpy as np
from jax.tree_util import register_pytree_node_class

from . import se3, so3

Array = jax.Array
VectorLike = Union[Array, np.ndarray, Sequence[float]]


@register_pytree_node_class  # lets Transform flow through jit / vmap
@dataclass(frozen=True, eq=False)
class Transform:
    """Immutable rigid transform p -> R @ p + t, stored as a (4, 4) matrix."""
    matrix: Array

    # Constructors
    @classmethod
    def identity(cls) -> "Transform":
        return cls(jnp.eye(4, dtype=jnp.float64))

    @classmethod
    def from_matrix(cls, matrix: VectorLike) -> "Transform":
        matrix = jnp.asarray(matrix, dtype=jnp.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"matrix must have shape (4, 4), got {matrix.shape}")
        return cls(matrix)

    @classmethod
    def from_rigid(cls, rotation: VectorLike, translation: VectorLike) -> "Transform":
        return cls(se3.from_position_and_rotation(translation, rotation))

    @classmethod
    def from_axis_angle(cls, axis: VectorLike, angle) -> "Transform":
        """Pure rotation of `angle` radians about the unit `axis`."""
        R = so3.from_axis_angle(axis, angle)
        return cls(se3.from_position_and_rotation(jnp.zeros(3), R))

    @classmethod
    def from_translation(cls, axis: VectorLike, distance=1.0) -> "Transform":
        """Pure translation of `distance` along `axis`.

        With the default distance this is simply a translation by the vector.
        """
        offset = jnp.asarray(axis, dtype=jnp.float64) * distance
        return cls(se3.from_position_and_rotation(offset, jnp.eye(3)))

    @classmethod
    def from_xyz_rpy(cls, xyz: VectorLike = (0.0, 0.0, 0.0),
                     rpy: VectorLike = (0.0, 0.0, 0.0)) -> "Transform":
        """Translation plus fixed-axis roll/pitch/yaw, as in a URDF <origin>."""
        return cls(se3.from_position_and_rotation(xyz, so3.from_rpy(rpy)))

    # PyTree boiler-plate
    def tree_flatten(self):
        return (self.matrix,), None

    @classmethod
    def tree_unflatten(cls, aux, children):
        (matrix,) = children
        return cls(matrix)

    # Basic operations
    def compose(self, other: "Transform") -> "Transform":
        """Self ∘ other (apply *other* first, then self)."""
        return Transform(se3.multiply(self.matrix, other.matrix))

    def __matmul__(self, other: "Transform") -> "Transform":
        return self.compose(other)

    def inverse(self) -> "Transform":
        return Transform(se3.inverse(self.matrix))

    def transform_points(self, points: VectorLike) -> Array:
        """Apply the transform to a point (3,) or to many points (N, 3)."""
        points = jnp.asarray(points, dtype=jnp.float64)
        if points.shape[-1] != 3 or points.ndim > 2:
            raise ValueError("points must have shape (3,) or (N, 3)")
        return se3.apply(self.matrix, points)

    # Convenience helpers
    @property
    def position(self) -> Array:
        return se3.get_position(self.matrix)

    @property
    def rotation(self) -> Array:
        return se3.get_rotation(self.matrix)

    @property
    def quaternion(self) -> Array:
        """Rotation as a unit quaternion (w, x, y, z)."""
        return so3.to_quaternion(self.rotation)

    def allclose(self, other: "Transform", atol: float = 1e-9) -> bool:
        return bool(jnp.allclose(self.matrix, other.matrix, rtol=0.0, atol=atol))

    def __repr__(self) -> str:
        p = np.asarray(self.position)
        q = np.asarray(self.quaternion)
        return f"Transform(position={p.tolist()}, quaternion={q.tolist()})"


# Free-function forms of the primitive operations.

def identity() -> Transform:
    return Transform.identity()


def compose(a: Transform, b: Transform) -> Transform:
    return a.compose(b)


def inverse(a: Transform) -> Transform:
    return a.inverse()


def from_axis_angle(axis: VectorLike, angle) -> Transform:
    return Transform.from_axis_angle(axis, angle)


def from_translation(axis: VectorLike, distance=1.0) -> Transform:
    return Transform.from_translation(axis, distance)


def from_rigid(rotation: VectorLike, translation: VectorLike) -> Transform:
    return Transform.from_rigid(rotation, translation)
