"""Forward kinematics along chains.

This module turns a `Chain` plus joint positions into a rigid transform. The
composition is a left-to-right fold:

    result = contrib(e1) @ contrib(e2) @ ... @ contrib(en)

where a forward element contributes its segment pose and a reversed element
contributes the inverse of it. The order is fixed so repeated evaluations
give bit-identical results.
"""

from typing import Callable, Tuple

import jax
import jax.numpy as jnp
from jax import Array

from .core.chain import Chain
from .core.errors import MissingJointValue
from .core.oracle import CallableOracle, JointOracle, as_oracle
from .core.segment import Segment
from .transforms import Transform


def segment_pose(segment: Segment, oracle: JointOracle) -> Transform:
    """Forward transform across one segment, reading its joint from `oracle`.

    Raises:
        MissingJointValue: the joint is not fixed and the oracle has no value.
    """
    joint = segment.joint
    if joint.is_fixed:
        return segment.pose()
    q = oracle(joint.name)
    if q is None:
        raise MissingJointValue(joint.name)
    return segment.pose(q)


def evaluate(chain: Chain, oracle: JointOracle) -> Transform:
    """Compose the chain into the transform from `chain.start` to `chain.end`.

    Evaluation stops at the first element whose joint the oracle cannot
    resolve.
    """
    result = Transform.identity()
    for element in chain:
        pose = segment_pose(element.segment, oracle)
        if not element.forward:
            pose = pose.inverse()
        result = result @ pose
    return result


def transform_of_chain(chain: Chain, joints=None, positions=None) -> Transform:
    """Transform from the start to the end of a chain.

    Args:
        chain: Chain to evaluate.
        joints: Omitted for chains of fixed joints, otherwise a mapping from
                joint name to position, a joint oracle, a joint-state message,
                or a sequence of joint names (together with `positions`).
        positions: Joint positions in the same order as the names in `joints`.

    Returns:
        The transform from the chain's start frame to its end frame.

    Raises:
        MissingJointValue: a non-fixed joint on the chain has no position.
        MalformedJointInput: names and positions differ in length.
    """
    return evaluate(chain, as_oracle(joints, positions))


def compile_chain(chain: Chain) -> Tuple[Tuple[str, ...], Callable[[Array], Transform]]:
    """Build a pure function of a joint vector for `chain`.

    Returns:
        joint_names: Non-fixed joint names on the chain; the order of `q`.
        fn: `fn(q) -> Transform`, suitable for `jax.jit` and `jax.vmap`.
    """
    joint_names = chain.joint_names
    index = {name: i for i, name in enumerate(joint_names)}

    def fn(q: Array) -> Transform:
        q = jnp.asarray(q, dtype=jnp.float64)
        if q.shape != (len(joint_names),):
            raise ValueError(
                f"Expected {len(joint_names)} joint positions for {joint_names}, got shape {q.shape}"
            )
        return evaluate(chain, CallableOracle(lambda name: q[index[name]]))

    return joint_names, fn


def jit_chain(chain: Chain) -> Tuple[Tuple[str, ...], Callable[[Array], Transform]]:
    """`compile_chain` followed by `jax.jit`."""
    joint_names, fn = compile_chain(chain)
    return joint_names, jax.jit(fn)
