"""Core kinematic data model for jax_frames.

Joints, segments, chains, the kinematic tree, joint-value oracles and the
error types shared by all of them.
"""

from .errors import (
    KinematicsError,
    MalformedJointInput,
    MissingJointValue,
    ParseError,
    TreeStructureError,
    UnknownSegment,
)
from .joint import Joint, JointType
from .segment import Segment
from .chain import Chain, ChainElement
from .oracle import (
    CallableOracle,
    EmptyOracle,
    JointOracle,
    MappingOracle,
    SequenceOracle,
    as_oracle,
    empty_oracle,
    oracle_from_joint_state,
    oracle_from_mapping,
    oracle_from_parallel_sequences,
)
from .tree import Tree

__all__ = [
    "KinematicsError",
    "MalformedJointInput",
    "MissingJointValue",
    "ParseError",
    "TreeStructureError",
    "UnknownSegment",
    "Joint",
    "JointType",
    "Segment",
    "Chain",
    "ChainElement",
    "CallableOracle",
    "EmptyOracle",
    "JointOracle",
    "MappingOracle",
    "SequenceOracle",
    "as_oracle",
    "empty_oracle",
    "oracle_from_joint_state",
    "oracle_from_mapping",
    "oracle_from_parallel_sequences",
    "Tree",
]
