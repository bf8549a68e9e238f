"""Exceptions raised by jax_frames.

Every error derives from `KinematicsError` and from the builtin exception that
matches its meaning, so callers may catch either.
"""


class KinematicsError(Exception):
    """Base class for all jax_frames errors."""


class UnknownSegment(KinematicsError, LookupError):
    """A segment name could not be found in the tree."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Segment '{name}' not found in tree")


class MissingJointValue(KinematicsError, LookupError):
    """A non-fixed joint on the chain has no value in the joint oracle."""

    def __init__(self, joint_name: str):
        self.joint_name = joint_name
        super().__init__(f"No position given for non-fixed joint '{joint_name}'")


class MalformedJointInput(KinematicsError, ValueError):
    """Joint positions were supplied in an unusable shape."""


class TreeStructureError(KinematicsError, ValueError):
    """The segments handed to `Tree` do not form a valid rooted tree."""


class ParseError(KinematicsError, ValueError):
    """A mechanism description could not be turned into a tree."""
