"""
Rigid-body transform primitives for jax_frames.

This module provides:
- SO(3) rotation helpers (so3 module)
- SE(3) homogeneous-matrix helpers (se3 module)
- The immutable `Transform` value type used by the kinematics core

All functions are pure and designed to be traced by `jax.jit`.
"""

from . import so3
from . import se3
from .transform import (
    Transform,
    compose,
    from_axis_angle,
    from_rigid,
    from_translation,
    identity,
    inverse,
)

__all__ = [
    "so3",
    "se3",
    "Transform",
    "compose",
    "from_axis_angle",
    "from_rigid",
    "from_translation",
    "identity",
    "inverse",
]
