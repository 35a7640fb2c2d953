# -*- coding: utf-8 -*-
"""
Generators for small quadrilateral and hexahedral test meshes.

All generators return ``(vertices, cells)``: an ``(N, 3)`` coordinate array
and a list of cells in the canonical local numbering. `scramble_cells` then
turns these into input as an external mesh generator might deliver it, with
every cell's vertex list rotated (and optionally mirrored) at random.
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..reorder.geometry_info import cell_symmetries, dimension_from_vertex_count

Cells = List[List[int]]


def create_structured_quad_cells(nx: int, ny: int) -> Tuple[np.ndarray, Cells]:
    """
    Creates a structured quadrilateral mesh of size nx x ny on the unit grid.

    Args:
        nx (int): Number of cells in the x-direction.
        ny (int): Number of cells in the y-direction.

    Returns:
        Tuple[np.ndarray, List[List[int]]]: Vertex coordinates and cells.
    """
    if nx < 1 or ny < 1:
        raise ValueError("A structured mesh needs at least one cell per direction.")

    num_nodes_x = nx + 1
    num_nodes_y = ny + 1

    node_coords = []
    for j in range(num_nodes_y):
        for i in range(num_nodes_x):
            node_coords.append([float(i), float(j), 0.0])

    cells = []
    for j in range(ny):
        for i in range(nx):
            n0 = j * num_nodes_x + i
            n1 = j * num_nodes_x + (i + 1)
            n2 = (j + 1) * num_nodes_x + (i + 1)
            n3 = (j + 1) * num_nodes_x + i
            cells.append([n0, n1, n2, n3])

    return np.array(node_coords), cells


def create_structured_hex_cells(nx: int, ny: int, nz: int) -> Tuple[np.ndarray, Cells]:
    """
    Creates a structured hexahedral mesh of size nx x ny x nz on the unit grid.

    Returns:
        Tuple[np.ndarray, List[List[int]]]: Vertex coordinates and cells, all
            with positive volume.
    """
    if min(nx, ny, nz) < 1:
        raise ValueError("A structured mesh needs at least one cell per direction.")

    num_nodes_x = nx + 1
    num_nodes_y = ny + 1

    def node(i: int, j: int, k: int) -> int:
        return i + num_nodes_x * (j + num_nodes_y * k)

    node_coords = [
        [float(i), float(j), float(k)]
        for k in range(nz + 1)
        for j in range(num_nodes_y)
        for i in range(num_nodes_x)
    ]

    cells = []
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                bottom = [node(i, j, k), node(i + 1, j, k), node(i + 1, j + 1, k), node(i, j + 1, k)]
                top = [node(i, j, k + 1), node(i + 1, j, k + 1), node(i + 1, j + 1, k + 1), node(i, j + 1, k + 1)]
                cells.append(bottom + top)

    return np.array(node_coords), cells


def create_annulus_quad_cells(
    n_theta: int, n_r: int, r_inner: float = 1.0, r_outer: float = 2.0
) -> Tuple[np.ndarray, Cells]:
    """
    Creates a planar ring of quadrilaterals, counter-clockwise oriented.

    The sides running around the ring form closed chains.
    """
    if n_theta < 3 or n_r < 1:
        raise ValueError("An annulus needs at least 3 cells around and 1 across.")

    theta = 2.0 * np.pi * np.arange(n_theta) / n_theta
    radii = np.linspace(r_inner, r_outer, n_r + 1)
    node_coords = np.array(
        [[r * np.cos(t), r * np.sin(t), 0.0] for r in radii for t in theta]
    )

    def node(i: int, j: int) -> int:
        return (i % n_theta) + n_theta * j

    cells = [
        [node(i, j), node(i, j + 1), node(i + 1, j + 1), node(i + 1, j)]
        for j in range(n_r)
        for i in range(n_theta)
    ]
    return node_coords, cells


def create_quad_band_cells(
    n_segments: int, twisted: bool = False, radius: float = 2.0, width: float = 1.0
) -> Tuple[np.ndarray, Cells]:
    """
    Creates a closed band of quadrilaterals in 3D space.

    Args:
        n_segments (int): Number of cells around the band (at least 3).
        twisted (bool): If True the band is closed with a half twist, which
            gives a Moebius strip.

    Returns:
        Tuple[np.ndarray, List[List[int]]]: Vertices ``0..n-1`` run along one
            rim, ``n..2n-1`` along the other.
    """
    if n_segments < 3:
        raise ValueError("A band needs at least 3 segments.")

    phi = 2.0 * np.pi * np.arange(n_segments) / n_segments
    tilt = phi / 2.0 if twisted else np.zeros_like(phi)
    node_coords = []
    for s in (-0.5 * width, 0.5 * width):
        r = radius + s * np.cos(tilt)
        node_coords.extend(np.column_stack([r * np.cos(phi), r * np.sin(phi), s * np.sin(tilt)]))

    bottom = list(range(n_segments))
    top = [n_segments + k for k in range(n_segments)]
    cells = [[bottom[k], bottom[k + 1], top[k + 1], top[k]] for k in range(n_segments - 1)]

    last = n_segments - 1
    if twisted:
        cells.append([bottom[last], top[0], bottom[0], top[last]])
    else:
        cells.append([bottom[last], bottom[0], top[0], top[last]])

    return np.array(node_coords), cells


def create_hex_ring_cells(
    n_segments: int,
    quarter_turns: int = 0,
    r_inner: float = 1.0,
    r_outer: float = 2.0,
    height: float = 1.0,
) -> Tuple[np.ndarray, Cells]:
    """
    Creates a closed ring of hexahedra around the z-axis.

    Args:
        n_segments (int): Number of cells around the ring (at least 3).
        quarter_turns (int): The last cell is glued to the first one after
            rotating the shared face by this many quarter turns. Any nonzero
            value makes the edge orientation contradictory; the coordinates of
            the closing cell are then only meaningful topologically.

    Returns:
        Tuple[np.ndarray, List[List[int]]]: Vertex coordinates and cells; the
            untwisted ring has positive volumes.
    """
    if n_segments < 3:
        raise ValueError("A ring needs at least 3 segments.")

    theta = 2.0 * np.pi * np.arange(n_segments) / n_segments
    # Face corners in the (r, z) half-plane.
    corners = [(r_inner, 0.0), (r_inner, height), (r_outer, height), (r_outer, 0.0)]
    node_coords = np.array(
        [[r * np.cos(t), r * np.sin(t), z] for t in theta for r, z in corners]
    )

    quartets = [[4 * k + c for c in range(4)] for k in range(n_segments)]
    cells = [quartets[k] + quartets[k + 1] for k in range(n_segments - 1)]

    shift = quarter_turns % 4
    closing = [quartets[0][(c + shift) % 4] for c in range(4)]
    cells.append(quartets[-1] + closing)

    return node_coords, cells


def scramble_cells(
    cells: Sequence[Sequence[int]],
    rng: Optional[Union[int, np.random.Generator]] = None,
    reflect: bool = False,
) -> Cells:
    """
    Replaces the vertex list of every cell by a random symmetry of itself.

    Args:
        cells: Cells of one dimension.
        rng: Seed or numpy random generator.
        reflect (bool): Also use mirror images. For hexahedra this makes the
            volume of the affected cells negative.

    Returns:
        List[List[int]]: New cells; the input is not modified.
    """
    if len(cells) == 0:
        return []

    rng = np.random.default_rng(rng)
    symmetries = cell_symmetries(dimension_from_vertex_count(len(cells[0])), reflect)
    choices = rng.integers(len(symmetries), size=len(cells))

    return [
        [int(cell[i]) for i in symmetries[choice]] for cell, choice in zip(cells, choices)
    ]
