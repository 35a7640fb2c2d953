# -*- coding: utf-8 -*-
"""
Reorders the vertices of quadrilateral and hexahedral cells.

Mesh generators hand over cells whose local vertex numbering is arbitrary:
a side shared by two quadrilaterals may run 3->7 in one of them and 7->3 in
the other. Many finite element codes require that every edge is seen in the
same direction by all cells sharing it, and that parallel edges of a cell
point the same way. `reorder_cells` establishes this by rotating the vertex
list of each cell, without moving any vertex.

The pipeline is:
    1. Validation and dimension inference.
    2. Optional inversion of all-negative hexahedral meshes (needs vertices).
    3. Building the edge and cell records.
    4. Orienting every edge (chains in 2D, sheets in 3D).
    5. Rotating every cell so its edges follow their default directions.
    6. Writing the new vertex lists back into the caller's cells.

Any failure aborts the call before step 6, leaving the input untouched.

Functions:
    reorder_cells: Reorders cells in-place and returns a summary.
    cell_edge_directions: Directed edges of one cell.
    find_inconsistent_edges: Edges traversed both ways by the cells.
    is_consistently_oriented: True when no such edge exists.
"""

import logging
from collections.abc import MutableSequence
from typing import Dict, List, Optional, Sequence, Set, Tuple, Type

import numpy as np

from . import geometry_info
from .base import OrientationStrategy
from .connectivity import MeshConnectivity
from .errors import EmptyMeshError, InvalidCellError
from .inversion import invert_all_cells_of_negative_grid
from .permutation import resolve_cell_permutations
from .planar import PlanarOrienter
from .summary import ReorderSummary
from .volumetric import VolumetricOrienter

logger = logging.getLogger(__name__)

_STRATEGY_MAP: Dict[int, Type[OrientationStrategy]] = {
    2: PlanarOrienter,
    3: VolumetricOrienter,
}


# =============================================================================
# Public API
# =============================================================================


def reorder_cells(
    cells,
    vertices: Optional[np.ndarray] = None,
    dimension: Optional[int] = None,
    invert: bool = True,
) -> ReorderSummary:
    """
    Reorders the vertices of every cell so that the mesh is consistently oriented.

    Args:
        cells: Mutable sequence of cells (a list of lists or a 2D integer
            numpy array), each listing 4 (quads) or 8 (hexes) vertex indices.
            Rewritten in-place, so an immutable outer container such as a
            tuple is rejected. Cells with 2 vertices (lines) are accepted and
            left as they are.
        vertices (np.ndarray, optional): Vertex coordinates. When given, all
            vertex indices are checked against it, and for hexahedra the
            inversion pass runs first.
        dimension (int, optional): Cell dimension. Inferred from the cell
            size when omitted; a mismatching value is an error.
        invert (bool): Whether to flip all-negative hexahedral meshes.

    Returns:
        ReorderSummary: Statistics of the reordering.

    Raises:
        EmptyMeshError: If `cells` is empty.
        InvalidCellError: If a cell is malformed or `cells` cannot be
            rewritten in-place.
        NonManifoldError: If a side (2D) or a face (3D) has more than two
            cells. In 3D the rule is per face only: an edge may be shared by
            any number of hexahedra, as interior edges of a hex grid are.
        UnorientableMeshError: If the mesh admits no consistent orientation.
        MixedOrientationError: If only some hexahedra have negative volume.
    """
    if len(cells) == 0:
        raise EmptyMeshError("Cannot reorder a mesh without cells.")
    if not isinstance(cells, (MutableSequence, np.ndarray)):
        raise InvalidCellError(
            f"Cells must be given in a mutable sequence, got {type(cells).__name__}."
        )

    dim = _resolve_dimension(cells, dimension)
    if dim == 1:
        logger.info("Reordered %d line cells: nothing to do in 1D", len(cells))
        return ReorderSummary.trivial(dim, len(cells))

    working: List[List[int]] = [[int(v) for v in cell] for cell in cells]
    if vertices is not None:
        _check_vertex_range(working, vertices)

    n_inverted = 0
    if invert and vertices is not None and dim == 3:
        n_inverted = invert_all_cells_of_negative_grid(vertices, working)

    mesh = MeshConnectivity.build(working, dim)
    n_sheets = _STRATEGY_MAP[dim]().orient(mesh)
    codes = resolve_cell_permutations(mesh)

    for cell_no, record in enumerate(mesh.cells):
        _write_cell(cells, cell_no, record.vertices)

    summary = ReorderSummary.from_connectivity(mesh, n_sheets, codes, n_inverted)
    logger.info(
        "Reordered %d cells (%dD): %d rotated, %d inverted, %d %s",
        summary.n_cells,
        dim,
        summary.n_rotated_cells,
        summary.n_inverted_cells,
        n_sheets,
        "chains" if dim == 2 else "sheets",
    )
    return summary


def cell_edge_directions(
    cell: Sequence[int], dimension: Optional[int] = None
) -> List[Tuple[int, int]]:
    """
    Lists the edges of a cell as directed vertex pairs.

    Args:
        cell: Vertex indices of the cell.
        dimension (int, optional): Inferred from the vertex count if omitted.

    Returns:
        List[Tuple[int, int]]: (start, end) for every local edge, following
            the local default directions of the canonical numbering.
    """
    dim = _resolve_dimension([cell], dimension)
    return [(int(cell[a]), int(cell[b])) for a, b in geometry_info.local_edges(dim)]


def find_inconsistent_edges(
    cells: Sequence[Sequence[int]], dimension: Optional[int] = None
) -> List[Tuple[int, int]]:
    """
    Finds edges that two cells traverse in opposite directions.

    Returns:
        List[Tuple[int, int]]: Sorted (low, high) vertex pairs of the
            offending edges; empty for a consistently oriented mesh.
    """
    if len(cells) == 0:
        return []
    dim = _resolve_dimension(cells, dimension)

    first_seen: Dict[Tuple[int, int], Tuple[int, int]] = {}
    inconsistent: Set[Tuple[int, int]] = set()
    for cell in cells:
        for directed in cell_edge_directions(cell, dim):
            key = (min(directed), max(directed))
            if first_seen.setdefault(key, directed) != directed:
                inconsistent.add(key)
    return sorted(inconsistent)


def is_consistently_oriented(
    cells: Sequence[Sequence[int]], dimension: Optional[int] = None
) -> bool:
    """Checks that every edge is traversed the same way by all of its cells."""
    return not find_inconsistent_edges(cells, dimension)


# =============================================================================
# Helpers
# =============================================================================


def _resolve_dimension(cells, dimension: Optional[int]) -> int:
    sizes = {len(cell) for cell in cells}
    if len(sizes) != 1:
        raise InvalidCellError(f"All cells must have the same size, got sizes {sorted(sizes)}.")

    n_vertices = sizes.pop()
    try:
        inferred = geometry_info.dimension_from_vertex_count(n_vertices)
    except KeyError:
        raise InvalidCellError(
            f"Cells with {n_vertices} vertices are not supported; expected 2, 4 or 8."
        ) from None

    if dimension is not None and dimension != inferred:
        raise InvalidCellError(
            f"Cells with {n_vertices} vertices are {inferred}D, but dimension "
            f"{dimension} was requested."
        )
    return inferred


def _check_vertex_range(cells: List[List[int]], vertices) -> None:
    n_vertices = np.asarray(vertices).shape[0]
    for cell_no, cell in enumerate(cells):
        if min(cell) < 0 or max(cell) >= n_vertices:
            raise InvalidCellError(
                f"Cell {cell_no} ({cell}) refers to vertices outside 0..{n_vertices - 1}."
            )


def _write_cell(cells, cell_no: int, conn: List[int]) -> None:
    """Stores a vertex list in the caller's container, keeping its row type."""
    row = cells[cell_no]
    if isinstance(cells, np.ndarray):
        cells[cell_no] = conn
    elif isinstance(row, (list, np.ndarray)):
        row[:] = conn
    else:
        cells[cell_no] = type(row)(conn)
