"""Kinematic tree with chain extraction between named frames.

The tree is stored as an arena: segments live in a tuple ordered breadth-first
from the root, and parent/child links are integer indices into it. The tree
is immutable once built and can be shared freely between readers.
"""

from collections import deque
from typing import Dict, Iterable, List, Optional, Tuple

from ..kinematics import evaluate, segment_pose
from ..transforms import Transform
from .chain import Chain, ChainElement
from .errors import TreeStructureError, UnknownSegment
from .oracle import as_oracle
from .segment import Segment


class Tree:
    """Rooted tree of segments indexed by name.

    Args:
        root: Name of the root frame. A root segment with a fixed joint and
              identity offsets is created for it.
        segments: `(segment, parent_name)` pairs, in any order.

    Raises:
        TreeStructureError: duplicate names, a missing parent, a cycle, or a
            non-fixed joint name used twice.
    """

    def __init__(self, root: str, segments: Iterable[Tuple[Segment, str]] = ()):
        pairs = list(segments)

        by_name: Dict[str, Tuple[Segment, str]] = {}
        children_of: Dict[str, List[str]] = {root: []}
        for segment, parent in pairs:
            if segment.name == root or segment.name in by_name:
                raise TreeStructureError(f"Duplicate segment name '{segment.name}'")
            by_name[segment.name] = (segment, parent)
            children_of.setdefault(segment.name, [])
        for segment, parent in pairs:
            if parent not in children_of:
                raise TreeStructureError(
                    f"Segment '{segment.name}' has unknown parent '{parent}'"
                )
            children_of[parent].append(segment.name)

        # Breadth-first from the root; anything not reached sits on a cycle.
        order = [root]
        queue = deque([root])
        while queue:
            for child in children_of[queue.popleft()]:
                order.append(child)
                queue.append(child)
        if len(order) != len(pairs) + 1:
            unreachable = sorted(set(by_name) - set(order))
            raise TreeStructureError(f"Segments not connected to root '{root}': {unreachable}")

        index = {name: i for i, name in enumerate(order)}
        segs = [Segment.root(root)] + [by_name[name][0] for name in order[1:]]
        parents = [-1] + [index[by_name[name][1]] for name in order[1:]]
        depth = [0] * len(order)
        for i in range(1, len(order)):
            depth[i] = depth[parents[i]] + 1

        joint_owner: Dict[str, str] = {}
        for seg in segs:
            if seg.joint.is_fixed:
                continue
            other = joint_owner.setdefault(seg.joint.name, seg.name)
            if other != seg.name:
                raise TreeStructureError(
                    f"Joint name '{seg.joint.name}' used by both '{other}' and '{seg.name}'"
                )

        self._root = root
        self._segments: Tuple[Segment, ...] = tuple(segs)
        self._index = index
        self._parents: Tuple[int, ...] = tuple(parents)
        self._children: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(index[c] for c in children_of[name]) for name in order
        )
        self._depth: Tuple[int, ...] = tuple(depth)

    # Lookup
    @property
    def root(self) -> str:
        return self._root

    def has(self, name: str) -> bool:
        return name in self._index

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        return len(self._segments)

    def __repr__(self) -> str:
        return f"Tree(root={self._root!r}, segments={len(self._segments)})"

    @property
    def segment_names(self) -> Tuple[str, ...]:
        """All segment names, root first, breadth-first."""
        return tuple(s.name for s in self._segments)

    @property
    def joint_names(self) -> Tuple[str, ...]:
        """Names of all non-fixed joints, breadth-first."""
        return tuple(s.joint.name for s in self._segments if not s.joint.is_fixed)

    def _lookup(self, name: str) -> int:
        try:
            return self._index[name]
        except KeyError:
            raise UnknownSegment(name) from None

    def segment(self, name: str) -> Segment:
        return self._segments[self._lookup(name)]

    def parent(self, name: str) -> Optional[str]:
        """Name of the parent segment, or None for the root."""
        p = self._parents[self._lookup(name)]
        return None if p < 0 else self._segments[p].name

    def children(self, name: str) -> Tuple[str, ...]:
        return tuple(self._segments[c].name for c in self._children[self._lookup(name)])

    # Chains
    def get_chain(self, source: str, target: str) -> Chain:
        """Chain walking from frame `source` to frame `target`.

        Segments between `source` and the lowest common ancestor are
        traversed in reverse, then the segments from below the common
        ancestor down to `target` are traversed forward. The common ancestor
        itself contributes nothing.

        Raises:
            UnknownSegment: either name is not in the tree.
        """
        a = self._lookup(source)
        b = self._lookup(target)

        up: List[int] = []
        down: List[int] = []
        while self._depth[a] > self._depth[b]:
            up.append(a)
            a = self._parents[a]
        while self._depth[b] > self._depth[a]:
            down.append(b)
            b = self._parents[b]
        while a != b:
            up.append(a)
            a = self._parents[a]
            down.append(b)
            b = self._parents[b]

        elements = [ChainElement(self._segments[i], forward=False) for i in up]
        elements += [ChainElement(self._segments[i], forward=True) for i in reversed(down)]
        return Chain(start=source, end=target, elements=tuple(elements))

    # Kinematics
    def transform(self, source: str, target: str, joints=None, positions=None) -> Transform:
        """Transform from frame `source` to frame `target`.

        The result maps coordinates expressed in `target` into `source`.
        Joint positions may be omitted (fixed chains only), or given as a
        mapping, an oracle, a joint-state message, or names plus positions.

        Raises:
            UnknownSegment: either frame is not in the tree.
            MissingJointValue: a non-fixed joint on the chain has no position.
            MalformedJointInput: names and positions differ in length.
        """
        oracle = as_oracle(joints, positions)
        return evaluate(self.get_chain(source, target), oracle)

    def poses(self, joints=None, positions=None) -> Dict[str, Transform]:
        """Pose of every segment relative to the root frame."""
        oracle = as_oracle(joints, positions)
        world: List[Transform] = [Transform.identity()]
        for i in range(1, len(self._segments)):
            world.append(world[self._parents[i]] @ segment_pose(self._segments[i], oracle))
        return {seg.name: T for seg, T in zip(self._segments, world)}
