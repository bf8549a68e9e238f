"""URDF adapter producing a `Tree`.

Each URDF joint becomes a segment named after its child link. The joint's
<origin> becomes the joint offset, its <axis> is kept in the joint frame, and
the segment tip coincides with the child link frame.
"""

import logging
from typing import List, Tuple

import numpy as np
from lxml import etree

from jax_frames.core import Joint, ParseError, Segment, Tree, TreeStructureError
from jax_frames.transforms import Transform

logger = logging.getLogger(__name__)

# URDF joint types that have no single-axis counterpart are loaded as fixed.
_DEGRADED_TYPES = ("floating", "planar")


def load_urdf(urdf_path: str) -> Tree:
    """Load a URDF file into a Tree.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        Tree: The kinematic tree described by the file.

    Raises:
        ParseError: The file cannot be read or does not describe a valid tree.
    """
    try:
        document = etree.parse(str(urdf_path))
    except OSError as err:
        raise ParseError(f"Cannot read URDF file '{urdf_path}': {err}") from err
    except etree.XMLSyntaxError as err:
        raise ParseError(f"Malformed XML in '{urdf_path}': {err}") from err
    return _build_tree(document.getroot())


def tree_from_string(text) -> Tree:
    """Parse URDF text (str or bytes) into a Tree."""
    if isinstance(text, str):
        # lxml rejects str input that carries an encoding declaration.
        text = text.encode("utf-8")
    try:
        root = etree.fromstring(text)
    except etree.XMLSyntaxError as err:
        raise ParseError(f"Malformed XML: {err}") from err
    return _build_tree(root)


tree_from_description = tree_from_string


def _build_tree(robot) -> Tree:
    if robot.tag != "robot":
        raise ParseError(f"Expected a <robot> root element, got <{robot.tag}>")

    # First pass: topology
    all_links = []
    for link in robot.findall("link"):
        all_links.append(_required(link, "name"))
    if not all_links:
        raise ParseError("URDF does not define any links")

    pairs: List[Tuple[Segment, str]] = []
    child_links = set()
    for joint_elem in robot.findall("joint"):
        joint_name = _required(joint_elem, "name")
        parent_name = _required(_child(joint_elem, "parent"), "link")
        child_name = _required(_child(joint_elem, "child"), "link")
        if child_name in child_links:
            raise ParseError(f"Link '{child_name}' is the child of more than one joint")
        child_links.add(child_name)

        joint = _parse_joint(joint_elem, joint_name)
        pairs.append((Segment.create(child_name, joint), parent_name))

    # Find root link (not a child of any joint)
    root_links = [name for name in all_links if name not in child_links]
    if len(root_links) != 1:
        raise ParseError(f"Expected exactly one root link, found: {root_links}")
    root_link = root_links[0]

    try:
        tree = Tree(root_link, pairs)
    except TreeStructureError as err:
        raise ParseError(str(err)) from err

    logger.debug(
        "Loaded URDF '%s': %d segments, %d movable joints, root '%s'",
        robot.get("name", ""), len(tree), len(tree.joint_names), root_link,
    )
    return tree


def _parse_joint(joint_elem, joint_name: str) -> Joint:
    joint_type = _required(joint_elem, "type")
    origin = _parse_origin(joint_elem.find("origin"), joint_name)

    if joint_type == "fixed":
        return Joint.fixed(joint_name, origin)
    if joint_type in _DEGRADED_TYPES:
        logger.warning("Joint '%s' of type '%s' is treated as fixed", joint_name, joint_type)
        return Joint.fixed(joint_name, origin)

    axis_elem = joint_elem.find("axis")
    axis = _parse_vector(axis_elem.get("xyz", "1 0 0") if axis_elem is not None else "1 0 0",
                         f"axis of joint '{joint_name}'")
    try:
        if joint_type in ("revolute", "continuous"):
            return Joint.revolute(joint_name, axis, origin)
        if joint_type == "prismatic":
            return Joint.prismatic(joint_name, axis, origin)
    except ValueError as err:
        raise ParseError(f"Joint '{joint_name}': {err}") from err
    raise ParseError(f"Joint '{joint_name}' has unknown type '{joint_type}'")


def _parse_origin(origin_elem, joint_name: str) -> Transform:
    if origin_elem is None:
        return Transform.identity()
    where = f"origin of joint '{joint_name}'"
    xyz = _parse_vector(origin_elem.get("xyz", "0 0 0"), where)
    rpy = _parse_vector(origin_elem.get("rpy", "0 0 0"), where)
    return Transform.from_xyz_rpy(xyz, rpy)


def _parse_vector(text: str, where: str) -> np.ndarray:
    try:
        values = [float(x) for x in text.split()]
    except ValueError:
        raise ParseError(f"Invalid number in {where}: '{text}'") from None
    if len(values) != 3:
        raise ParseError(f"Expected 3 values in {where}, got '{text}'")
    return np.array(values)


def _child(elem, tag: str):
    found = elem.find(tag)
    if found is None:
        raise ParseError(f"<{elem.tag} name='{elem.get('name', '')}'> is missing <{tag}>")
    return found


def _required(elem, attribute: str) -> str:
    value = elem.get(attribute)
    if value is None:
        raise ParseError(f"<{elem.tag}> is missing the '{attribute}' attribute")
    return value
