# -*- coding: utf-8 -*-
"""
This package reorders the local vertex numbering of quadrilateral and
hexahedral cells so that every edge is seen in the same direction by all
cells sharing it.

Key modules:
- geometry_info:   Canonical vertex, edge and face numbering, rotation tables.
- connectivity:    Edge and cell records built from the input cells.
- planar:          Side orientation for 2D quadrilateral meshes.
- volumetric:      Edge orientation for 3D hexahedral meshes.
- permutation:     Turns edge orientations into vertex rotations.
- inversion:       Signed cell measures and flipping of inverted meshes.
- grid_reordering: The public entry points.
- summary:         Statistics of a reordering.
"""

from .errors import (
    EmptyMeshError,
    GridReorderingError,
    InternalOrientationError,
    InvalidCellError,
    MixedOrientationError,
    NonManifoldError,
    UnorientableMeshError,
)
from .grid_reordering import (
    cell_edge_directions,
    find_inconsistent_edges,
    is_consistently_oriented,
    reorder_cells,
)
from .inversion import cell_measure, cell_measures, invert_all_cells_of_negative_grid
from .summary import ReorderSummary

__all__ = [
    "reorder_cells",
    "cell_edge_directions",
    "find_inconsistent_edges",
    "is_consistently_oriented",
    "invert_all_cells_of_negative_grid",
    "cell_measure",
    "cell_measures",
    "ReorderSummary",
    "GridReorderingError",
    "EmptyMeshError",
    "InvalidCellError",
    "NonManifoldError",
    "UnorientableMeshError",
    "MixedOrientationError",
    "InternalOrientationError",
]
