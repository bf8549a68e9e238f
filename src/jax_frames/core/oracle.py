"""Joint-value oracles.

An oracle answers "what is the position of joint `name`?" with a float, or
with None when it has no value. The evaluator only ever talks to this one
interface; the constructors below adapt the input shapes callers usually
have at hand.
"""

import abc
from typing import Any, Callable, Mapping, Optional, Sequence

from .errors import MalformedJointInput


class JointOracle(abc.ABC):
    """Lookup from joint name to joint position."""

    @abc.abstractmethod
    def lookup(self, name: str) -> Optional[float]:
        ...

    def __call__(self, name: str) -> Optional[float]:
        return self.lookup(name)


class EmptyOracle(JointOracle):
    """Knows no joint; only chains made of fixed joints can be evaluated."""

    def lookup(self, name: str) -> Optional[float]:
        return None

    def __repr__(self) -> str:
        return "EmptyOracle()"


class MappingOracle(JointOracle):
    def __init__(self, mapping: Mapping[str, float]):
        self._mapping = mapping

    def lookup(self, name: str) -> Optional[float]:
        return self._mapping.get(name)

    def __repr__(self) -> str:
        return f"MappingOracle({sorted(self._mapping)})"


class SequenceOracle(JointOracle):
    """Backed by parallel name and value sequences.

    When a name appears more than once the first occurrence wins.
    """

    def __init__(self, names: Sequence[str], values: Sequence[float]):
        if len(names) != len(values):
            raise MalformedJointInput(
                f"Got {len(names)} joint names but {len(values)} joint positions"
            )
        self._index = {}
        for i, name in enumerate(names):
            self._index.setdefault(name, i)
        self._values = values

    def lookup(self, name: str) -> Optional[float]:
        i = self._index.get(name)
        if i is None:
            return None
        return self._values[i]

    def __repr__(self) -> str:
        return f"SequenceOracle({list(self._index)})"


class CallableOracle(JointOracle):
    """Wraps a plain `name -> value | None` function."""

    def __init__(self, fn: Callable[[str], Optional[float]]):
        self._fn = fn

    def lookup(self, name: str) -> Optional[float]:
        return self._fn(name)


def empty_oracle() -> JointOracle:
    return EmptyOracle()


def oracle_from_mapping(mapping: Mapping[str, float]) -> JointOracle:
    return MappingOracle(mapping)


def oracle_from_parallel_sequences(names: Sequence[str], values: Sequence[float]) -> JointOracle:
    return SequenceOracle(names, values)


def oracle_from_joint_state(msg: Any) -> JointOracle:
    """Adapter for joint-state messages exposing `.name` and `.position`.

    This matches `sensor_msgs/JointState` without depending on ROS.
    """
    return SequenceOracle(msg.name, msg.position)


def as_oracle(joints=None, positions=None) -> JointOracle:
    """Normalize the joint inputs accepted by the public API into an oracle.

    Accepted forms:
        * nothing: the empty oracle
        * a `JointOracle`, returned unchanged
        * a mapping from joint name to position
        * a joint-state message with `.name` and `.position`
        * a callable `name -> value | None`
        * a sequence of names together with a sequence of `positions`
    """
    if positions is not None:
        if joints is None or isinstance(joints, (str, Mapping)):
            raise MalformedJointInput("Joint positions given without a sequence of joint names")
        return oracle_from_parallel_sequences(joints, positions)
    if joints is None:
        return empty_oracle()
    if isinstance(joints, JointOracle):
        return joints
    if isinstance(joints, Mapping):
        return oracle_from_mapping(joints)
    if hasattr(joints, "name") and hasattr(joints, "position"):
        return oracle_from_joint_state(joints)
    if callable(joints):
        return CallableOracle(joints)
    raise MalformedJointInput(
        f"Cannot read joint positions from {type(joints).__name__}; "
        "pass a mapping, a joint state, or names together with positions"
    )
