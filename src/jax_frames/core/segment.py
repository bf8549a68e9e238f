"""Segment: a named rigid body carrying one joint."""

from typing import Optional

from flax import struct

from ..transforms import Transform
from .joint import Joint


@struct.dataclass
class Segment:
    """A rigid body whose tip frame is named `name`.

    The transform across the segment, from its parent's tip frame to its own
    tip frame, is ``joint.pose(q) @ frame_to_tip``.
    """
    name: str = struct.field(pytree_node=False)
    joint: Joint
    frame_to_tip: Transform

    @classmethod
    def create(cls, name: str, joint: Optional[Joint] = None,
               frame_to_tip: Optional[Transform] = None) -> "Segment":
        return cls(
            name=name,
            joint=joint if joint is not None else Joint.fixed(f"{name}_fixed"),
            frame_to_tip=frame_to_tip if frame_to_tip is not None else Transform.identity(),
        )

    @classmethod
    def root(cls, name: str) -> "Segment":
        """The root marker: fixed joint, identity offsets."""
        return cls.create(name)

    def pose(self, q=0.0) -> Transform:
        return self.joint.pose(q) @ self.frame_to_tip
