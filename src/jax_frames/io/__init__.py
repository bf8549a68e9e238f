"""I/O adapters for building trees from mechanism descriptions.

This module provides functions for parsing URDF robot descriptions into
`Tree` instances.
"""

from .urdf_parser import load_urdf, tree_from_description, tree_from_string

__all__ = ["load_urdf", "tree_from_description", "tree_from_string"]
