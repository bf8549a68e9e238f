"""
JAX Frames: rigid transforms between named frames of a kinematic tree.

Build (or load from URDF) a `Tree`, then ask it for the transform between any
two frames, optionally given joint positions.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .core import (
    Chain,
    ChainElement,
    Joint,
    JointType,
    KinematicsError,
    MalformedJointInput,
    MissingJointValue,
    ParseError,
    Segment,
    Tree,
    TreeStructureError,
    UnknownSegment,
    as_oracle,
    empty_oracle,
    oracle_from_joint_state,
    oracle_from_mapping,
    oracle_from_parallel_sequences,
)
from .kinematics import compile_chain, evaluate, jit_chain, transform_of_chain
from .transforms import Transform

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "Chain",
    "ChainElement",
    "Joint",
    "JointType",
    "KinematicsError",
    "MalformedJointInput",
    "MissingJointValue",
    "ParseError",
    "Segment",
    "Transform",
    "Tree",
    "TreeStructureError",
    "UnknownSegment",
    "as_oracle",
    "compile_chain",
    "empty_oracle",
    "evaluate",
    "jit_chain",
    "oracle_from_joint_state",
    "oracle_from_mapping",
    "oracle_from_parallel_sequences",
    "transform_of_chain",
]
