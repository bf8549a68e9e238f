"""Joint descriptors.

A joint is either fixed or has a single degree of freedom along/about a unit
axis expressed in the joint frame. Every joint also carries a constant
`origin` offset that is applied before the joint motion.
"""

import enum
from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np
from flax import struct

from ..transforms import Transform

Array = jax.Array


class JointType(str, enum.Enum):
    FIXED = "fixed"
    REVOLUTE = "revolute"
    PRISMATIC = "prismatic"


def _unit_axis(axis) -> Array:
    axis = np.asarray(axis, dtype=np.float64).reshape(3)
    norm = np.linalg.norm(axis)
    if norm < 1e-12:
        raise ValueError(f"Joint axis must be non-zero, got {axis.tolist()}")
    return jnp.asarray(axis / norm)


@struct.dataclass
class Joint:
    """Immutable joint description.

    Attributes:
        name: Joint name. Non-fixed joint names are unique within a tree and
              are the keys used to look up joint positions.
        type: One of `JointType`. Static for JIT compilation.
        axis: (3,) unit axis of motion in the joint frame. Ignored for fixed
              joints.
        origin: Constant joint frame offset, applied before the motion.
    """
    name: str = struct.field(pytree_node=False)
    type: JointType = struct.field(pytree_node=False)
    axis: Array
    origin: Transform

    @classmethod
    def fixed(cls, name: str, origin: Optional[Transform] = None) -> "Joint":
        return cls(
            name=name,
            type=JointType.FIXED,
            axis=jnp.zeros(3),
            origin=origin if origin is not None else Transform.identity(),
        )

    @classmethod
    def revolute(cls, name: str, axis, origin: Optional[Transform] = None) -> "Joint":
        return cls(
            name=name,
            type=JointType.REVOLUTE,
            axis=_unit_axis(axis),
            origin=origin if origin is not None else Transform.identity(),
        )

    @classmethod
    def prismatic(cls, name: str, axis, origin: Optional[Transform] = None) -> "Joint":
        return cls(
            name=name,
            type=JointType.PRISMATIC,
            axis=_unit_axis(axis),
            origin=origin if origin is not None else Transform.identity(),
        )

    @property
    def is_fixed(self) -> bool:
        return self.type is JointType.FIXED

    def motion_at(self, q=0.0) -> Transform:
        """Motion of the joint at position `q` (radians or meters).

        Fixed joints ignore `q` and return the identity.
        """
        if self.type is JointType.REVOLUTE:
            return Transform.from_axis_angle(self.axis, q)
        if self.type is JointType.PRISMATIC:
            return Transform.from_translation(self.axis, q)
        return Transform.identity()

    def pose(self, q=0.0) -> Transform:
        """Joint offset followed by the joint motion: origin @ motion_at(q)."""
        if self.is_fixed:
            return self.origin
        return self.origin @ self.motion_at(q)
