# -*- coding: utf-8 -*-
"""
Exceptions raised by the cell reordering tools.

Input problems derive from ``ValueError`` and defects of the orientation
engine from ``RuntimeError``, so callers can tell a broken mesh from a bug.
"""


class GridReorderingError(Exception):
    """Base class of all reordering failures."""


class EmptyMeshError(GridReorderingError, ValueError):
    """No cells were supplied."""


class InvalidCellError(GridReorderingError, ValueError):
    """A cell has the wrong number of vertices or refers to invalid vertices."""


class NonManifoldError(GridReorderingError, ValueError):
    """A side (2D) or a face (3D) is shared by more than two cells."""

    def __init__(self, vertices, cells) -> None:
        self.vertices = tuple(int(v) for v in vertices)
        self.cells = tuple(int(c) for c in cells)
        super().__init__(
            f"Non-manifold mesh: entity with vertices {self.vertices} is shared "
            f"by cells {self.cells}; at most two cells may share it."
        )


class UnorientableMeshError(GridReorderingError, ValueError):
    """The edges of the mesh admit no consistent orientation."""


class MixedOrientationError(GridReorderingError, ValueError):
    """Some, but not all, cells have a negative volume."""


class InternalOrientationError(GridReorderingError, RuntimeError):
    """The orientation engine reached a state it should never produce."""
