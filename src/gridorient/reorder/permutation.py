# -*- coding: utf-8 -*-
"""
Turns the edge orientations of a fully oriented mesh into vertex reorderings.

Once every edge is oriented, each cell sees all members of an edge group
pointing the same way, either along its local default direction or against
it. Bit ``g`` of a cell's rotation code is set when group ``g`` runs against
the default. The code selects a row of the rotation table of
:mod:`geometry_info`, and the cell's new vertex list is
``new[i] = old[table[code][i]]``. After this step every edge of every cell
runs along the cell's default direction, i.e. all codes become 0.
"""

import logging
from typing import List

import numpy as np

from . import geometry_info
from .connectivity import MeshConnectivity
from .errors import InternalOrientationError

logger = logging.getLogger(__name__)


def rotation_code(mesh: MeshConnectivity, cell_no: int) -> int:
    """
    Computes the rotation code of one cell.

    Args:
        mesh: A fully oriented connectivity.
        cell_no: Index of the cell.

    Returns:
        The code, in ``range(2 ** len(mesh.edge_groups))``.

    Raises:
        InternalOrientationError: If an edge of the cell is unoriented or the
            members of an edge group disagree.
    """
    code = 0
    for group_no, group in enumerate(mesh.edge_groups):
        directions = {mesh.local_direction(cell_no, local) for local in group}
        if 0 in directions:
            raise InternalOrientationError(
                f"Cell {cell_no} still has unoriented edges in group {group_no}."
            )
        if len(directions) != 1:
            raise InternalOrientationError(
                f"Edge group {group_no} of cell {cell_no} is not parallel after "
                f"orientation."
            )
        if directions.pop() < 0:
            code |= 1 << group_no
    return code


def resolve_cell_permutations(mesh: MeshConnectivity) -> np.ndarray:
    """
    Rewrites the vertex order of every cell according to its rotation code.

    All codes are computed before the first cell is changed, so a failure
    leaves the connectivity untouched.

    Args:
        mesh: A fully oriented connectivity; its cell records are updated.

    Returns:
        The rotation code applied to each cell.
    """
    table = geometry_info.rotation_table(mesh.dimension)
    codes = np.array(
        [rotation_code(mesh, cell_no) for cell_no in range(mesh.n_cells)], dtype=int
    )

    for cell_no in np.flatnonzero(codes):
        old: List[int] = mesh.cells[cell_no].vertices
        mesh.relabel_cell(cell_no, [old[i] for i in table[codes[cell_no]]])

    logger.debug(
        "Rotated %d of %d cells", int(np.count_nonzero(codes)), mesh.n_cells
    )
    return codes
