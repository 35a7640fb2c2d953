# -*- coding: utf-8 -*-
"""
Signed cell measures and the uniform inversion of negatively oriented meshes.

Some mesh generators produce hexahedra whose top and bottom faces are
swapped, i.e. every cell is a mirror image with negative volume. Such a mesh
is fixed by swapping the two vertex quartets of each cell. A mesh where only
some of the cells are mirrored is rejected: which half is "right" is a
physical decision this module does not make.
"""

import logging
from typing import List, Sequence

import numpy as np

from .errors import InternalOrientationError, InvalidCellError, MixedOrientationError
from .geometry_info import HEX_TOP_BOTTOM_SWAP

logger = logging.getLogger(__name__)

GEOMETRY_TOLERANCE = 1e-12

# Reference coordinates of the hexahedron vertices in local order.
_HEX_REFERENCE = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [1.0, 1.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
        [1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0],
        [0.0, 1.0, 1.0],
    ]
)
# 2-point Gauss rule on [0, 1], each point weighted 1/2.
_GAUSS_POINTS_1D = 0.5 + np.array([-0.5, 0.5]) / np.sqrt(3.0)
_HEX_QUADRATURE_WEIGHT = 0.125


def _hex_shape_gradients() -> np.ndarray:
    """
    Gradients of the trilinear shape functions at the 2x2x2 Gauss points.

    Returns:
        np.ndarray: Shape (8 points, 8 vertices, 3).
    """
    g = _GAUSS_POINTS_1D
    points = np.stack(np.meshgrid(g, g, g, indexing="ij"), axis=-1).reshape(-1, 3)

    ref = _HEX_REFERENCE[np.newaxis, :, :]
    x = points[:, np.newaxis, :]
    # N_i(x) = prod_d f_id(x_d) with f = x_d where the vertex sits at 1, 1 - x_d else
    factors = np.where(ref == 1.0, x, 1.0 - x)
    slopes = np.broadcast_to(2.0 * ref - 1.0, factors.shape)

    grads = np.empty_like(factors)
    grads[..., 0] = slopes[..., 0] * factors[..., 1] * factors[..., 2]
    grads[..., 1] = factors[..., 0] * slopes[..., 1] * factors[..., 2]
    grads[..., 2] = factors[..., 0] * factors[..., 1] * slopes[..., 2]
    return grads


_HEX_GRADIENTS = _hex_shape_gradients()


def cell_measures(vertices: np.ndarray, cells: Sequence[Sequence[int]]) -> np.ndarray:
    """
    Computes the signed area (quads) or signed volume (hexes) of each cell.

    Quadrilaterals are measured in the xy-plane with the shoelace formula and
    are positive when their vertices run counter-clockwise. Hexahedra are
    integrated exactly with a 2x2x2 Gauss rule over the Jacobian determinant
    of the trilinear map and are positive when the top quartet lies on the
    side the bottom quartet's counter-clockwise normal points to.

    Args:
        vertices (np.ndarray): Vertex coordinates, shape (N, 2) or (N, 3).
        cells: Cells of equal size (4 or 8 vertices).

    Returns:
        np.ndarray: One signed measure per cell.
    """
    coords = np.asarray(vertices, dtype=float)
    conn = np.asarray(cells, dtype=int)
    if conn.ndim != 2 or conn.shape[0] == 0:
        raise InvalidCellError("Cells must form a non-empty (n_cells, n_vertices) array.")
    if conn.min() < 0 or conn.max() >= coords.shape[0]:
        raise InvalidCellError(
            f"Cells refer to vertices outside the coordinate array "
            f"(0..{coords.shape[0] - 1})."
        )

    n_cell_vertices = conn.shape[1]
    if n_cell_vertices == 4:
        pts = coords[conn][:, :, :2]
        x, y = pts[..., 0], pts[..., 1]
        return 0.5 * np.sum(x * np.roll(y, -1, axis=1) - np.roll(x, -1, axis=1) * y, axis=1)

    if n_cell_vertices == 8:
        if coords.shape[1] < 3:
            raise InvalidCellError("Hexahedral cells need 3D vertex coordinates.")
        pts = coords[conn][:, :, :3]
        # J[c, q, d, e] = sum_n x[c, n, d] * dN_n/dxi_e at quadrature point q
        jac = np.einsum("cnd,qne->cqde", pts, _HEX_GRADIENTS)
        return np.linalg.det(jac).sum(axis=1) * _HEX_QUADRATURE_WEIGHT

    raise InvalidCellError(f"Cannot measure cells with {n_cell_vertices} vertices.")


def cell_measure(vertices: np.ndarray, cell: Sequence[int]) -> float:
    """Signed area or volume of a single cell."""
    return float(cell_measures(vertices, [cell])[0])


def invert_all_cells_of_negative_grid(
    vertices: np.ndarray, cells: List[List[int]]
) -> int:
    """
    Flips hexahedra with negative volume by swapping their top and bottom faces.

    Either all cells or none may have negative volume. Cells whose volume
    vanishes within `GEOMETRY_TOLERANCE` have no sign; they are logged, left
    out of that count and never flipped. The cells are changed only after
    every flipped cell was verified to be positive.

    Args:
        vertices (np.ndarray): Vertex coordinates, shape (N, 3).
        cells: Hexahedral cells, modified in-place.

    Returns:
        int: The number of flipped cells.

    Raises:
        MixedOrientationError: If only some of the cells are negative.
        InternalOrientationError: If a flipped cell is still not positive.
    """
    if len(cells) and len(cells[0]) != 8:
        raise InvalidCellError("Only hexahedral meshes can be inverted.")
    measures = cell_measures(vertices, cells)

    degenerate = np.flatnonzero(np.abs(measures) <= GEOMETRY_TOLERANCE)
    if degenerate.size:
        logger.warning(
            "%d cells have a (nearly) vanishing volume, e.g. cell %d",
            degenerate.size,
            degenerate[0],
        )

    negative = np.flatnonzero(measures < -GEOMETRY_TOLERANCE)
    if negative.size == 0:
        return 0
    n_regular = len(cells) - degenerate.size
    if negative.size != n_regular:
        raise MixedOrientationError(
            f"{negative.size} of {n_regular} non-degenerate cells have negative "
            f"volume (first: cells {negative[:5].tolist()}); only meshes where all "
            f"cells are inverted can be fixed. Degenerate cells: "
            f"{degenerate[:5].tolist()}."
        )

    flipped = [[int(cells[i][k]) for k in HEX_TOP_BOTTOM_SWAP] for i in negative]
    check = cell_measures(vertices, flipped)
    if np.any(check <= 0.0):
        bad = int(negative[np.flatnonzero(check <= 0.0)[0]])
        raise InternalOrientationError(
            f"Cell {bad} still has non-positive volume after swapping its faces."
        )

    for cell_no, conn in zip(negative, flipped):
        cells[cell_no] = conn

    logger.debug("Inverted all %d cells of a negatively oriented mesh", negative.size)
    return int(negative.size)
