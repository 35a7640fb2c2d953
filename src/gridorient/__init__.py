"""
gridorient

A Python package for giving quadrilateral and hexahedral meshes a consistent
local vertex numbering.
"""

from . import meshgen
from . import reorder

__all__ = [
    "meshgen",
    "reorder",
]
