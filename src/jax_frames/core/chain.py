"""Chains: ordered walks between two frames of a tree."""

from typing import Iterator, Tuple

from flax import struct

from ..transforms import Transform
from .segment import Segment


@struct.dataclass
class ChainElement:
    """One segment on a chain and the direction it is traversed in.

    A forward element goes from the segment's parent frame to its tip; a
    reversed one goes from the tip back to the parent frame.
    """
    segment: Segment
    forward: bool = struct.field(pytree_node=False, default=True)

    def pose(self, q=0.0) -> Transform:
        T = self.segment.pose(q)
        return T if self.forward else T.inverse()


@struct.dataclass
class Chain:
    """Ordered sequence of `ChainElement` from frame `start` to frame `end`."""
    start: str = struct.field(pytree_node=False)
    end: str = struct.field(pytree_node=False)
    elements: Tuple[ChainElement, ...] = ()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[ChainElement]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> ChainElement:
        return self.elements[index]

    @property
    def segment_names(self) -> Tuple[str, ...]:
        return tuple(e.segment.name for e in self.elements)

    @property
    def joint_names(self) -> Tuple[str, ...]:
        """Names of the non-fixed joints along the chain, without repeats."""
        names = []
        for element in self.elements:
            joint = element.segment.joint
            if not joint.is_fixed and joint.name not in names:
                names.append(joint.name)
        return tuple(names)

    @property
    def is_fixed(self) -> bool:
        return all(e.segment.joint.is_fixed for e in self.elements)
