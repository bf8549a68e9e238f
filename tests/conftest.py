"""Shared trees and strategies for the jax_frames tests."""

from pathlib import Path

import hypothesis
import numpy as np
import pytest
from hypothesis import strategies as st

from jax_frames import Joint, Segment, Transform, Tree

hypothesis.settings.register_profile("ci", max_examples=10, deadline=None)

FIXTURES = Path(__file__).parent / "fixtures"


def offset(x=0.0, y=0.0, z=0.0) -> Transform:
    return Transform.from_translation([x, y, z])


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def fixed_two_link_tree() -> Tree:
    """root -> A -> B, both fixed, tips (1, 0, 0) and (0, 1, 0)."""
    return Tree("root", [
        (Segment.create("A", Joint.fixed("joint_A"), offset(1.0, 0.0, 0.0)), "root"),
        (Segment.create("B", Joint.fixed("joint_B"), offset(0.0, 1.0, 0.0)), "A"),
    ])


@pytest.fixture
def revolute_tree() -> Tree:
    """root -> A via a revolute joint about z, tip (1, 0, 0)."""
    return Tree("root", [
        (Segment.create("A", Joint.revolute("joint_A", [0, 0, 1]), offset(1.0, 0.0, 0.0)), "root"),
    ])


@pytest.fixture
def sibling_tree() -> Tree:
    """root with fixed children L at (1, 0, 0) and R at (-1, 0, 0)."""
    return Tree("root", [
        (Segment.create("L", Joint.fixed("joint_L"), offset(1.0, 0.0, 0.0)), "root"),
        (Segment.create("R", Joint.fixed("joint_R"), offset(-1.0, 0.0, 0.0)), "root"),
    ])


@pytest.fixture
def prismatic_tree() -> Tree:
    """root -> A prismatic along z, then A -> B fixed with tip (1, 0, 0)."""
    return Tree("root", [
        (Segment.create("A", Joint.prismatic("joint_A", [0, 0, 1])), "root"),
        (Segment.create("B", Joint.fixed("joint_B"), offset(1.0, 0.0, 0.0)), "A"),
    ])


@pytest.fixture
def mixed_tree() -> Tree:
    """A branching tree mixing all joint types and non-trivial offsets.

            root
           /    \\
         s1      f1 (fixed)
         |        |
         s2      p1 (prismatic)
        /  \\
      s3    f2 (fixed)
    """
    return Tree("root", [
        (Segment.create("s1", Joint.revolute("j1", [0, 0, 1], Transform.from_xyz_rpy([0, 0, 0.3])),
                        offset(0.1, 0.0, 0.0)), "root"),
        (Segment.create("s2", Joint.revolute("j2", [0, 1, 0], Transform.from_xyz_rpy([0.5, 0, 0], [0.2, 0, 0])),
                        offset(0.0, 0.0, 0.4)), "s1"),
        (Segment.create("s3", Joint.revolute("j3", [1, 1, 0], Transform.from_xyz_rpy([0, 0.2, 0.1])),
                        offset(0.3, 0.0, 0.0)), "s2"),
        (Segment.create("f2", Joint.fixed("f2_fixed", Transform.from_xyz_rpy([0, 0, 0.2], [0, 0.4, 1.0]))), "s2"),
        (Segment.create("f1", Joint.fixed("f1_fixed", Transform.from_xyz_rpy([-0.4, 0.1, 0], [0, 0, -0.7]))), "root"),
        (Segment.create("p1", Joint.prismatic("j4", [0, 1, 1]), offset(0.0, 0.0, 0.05)), "f1"),
    ])


MIXED_JOINTS = {"j1": 0.3, "j2": -1.1, "j3": 2.4, "j4": 0.25}


# Hypothesis strategies
coords = st.floats(min_value=-1.0, max_value=1.0, allow_nan=False, allow_infinity=False)
angles = st.floats(min_value=-np.pi, max_value=np.pi, allow_nan=False, allow_infinity=False)
vectors = st.tuples(coords, coords, coords)
axes = vectors.filter(lambda v: np.linalg.norm(v) > 0.1)


@st.composite
def transforms(draw) -> Transform:
    return Transform.from_xyz_rpy(draw(vectors), draw(st.tuples(angles, angles, angles)))


@st.composite
def random_trees(draw, max_segments: int = 6):
    """A random tree plus a joint mapping covering every movable joint."""
    n = draw(st.integers(min_value=1, max_value=max_segments))
    names = ["root"] + [f"seg{i}" for i in range(1, n + 1)]
    pairs = []
    joints = {}
    for i in range(1, n + 1):
        parent = names[draw(st.integers(min_value=0, max_value=i - 1))]
        kind = draw(st.sampled_from(["fixed", "revolute", "prismatic"]))
        origin = draw(transforms())
        joint_name = f"joint{i}"
        if kind == "fixed":
            joint = Joint.fixed(joint_name, origin)
        elif kind == "revolute":
            joint = Joint.revolute(joint_name, draw(axes), origin)
            joints[joint_name] = draw(angles)
        else:
            joint = Joint.prismatic(joint_name, draw(axes), origin)
            joints[joint_name] = draw(coords)
        pairs.append((Segment.create(names[i], joint, draw(transforms())), parent))
    return Tree("root", pairs), joints
