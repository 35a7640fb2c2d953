# -*- coding: utf-8 -*-
"""
Canonical local numbering of the cells handled by the reordering tools.

A quadrilateral has its vertices in cyclic order and every side carries a
default direction such that opposite sides are parallel::

    3-->--2
    |     |
    ^     ^
    |     |
    0-->--1

A hexahedron stacks two such quadrilaterals, the bottom one (vertices 0-3)
and the top one (vertices 4-7), joined by four vertical edges pointing
upwards. Its twelve edges fall into three groups of four parallel edges.

The rotation tables map a pattern code to the vertex permutation that turns a
cell whose edges are oriented in a consistent but non-default way into one
whose edges all follow the default directions. Bit ``g`` of the code is set
when the edges of group ``g`` run against their default direction.
"""

from typing import Dict, List, Tuple

Permutation = Tuple[int, ...]

VERTICES_PER_CELL: Dict[int, int] = {1: 2, 2: 4, 3: 8}

# --- Lines ---
LINE_EDGES: Tuple[Tuple[int, int], ...] = ((0, 1),)
LINE_EDGE_GROUPS: Tuple[Tuple[int, ...], ...] = ((0,),)

# --- Quadrilaterals ---
QUAD_SIDES: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 2), (3, 2), (0, 3))
QUAD_SIDE_GROUPS: Tuple[Tuple[int, ...], ...] = ((0, 2), (1, 3))
QUAD_ROTATIONS: Tuple[Permutation, ...] = (
    (0, 1, 2, 3),  # source corner 0
    (1, 2, 3, 0),  # source corner 1
    (3, 0, 1, 2),  # source corner 3
    (2, 3, 0, 1),  # source corner 2
)

# --- Hexahedra ---
HEX_EDGES: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (3, 2), (0, 3),
    (4, 5), (5, 6), (7, 6), (4, 7),
    (0, 4), (1, 5), (2, 6), (3, 7),
)
HEX_EDGE_GROUPS: Tuple[Tuple[int, ...], ...] = (
    (0, 2, 4, 6),
    (1, 3, 5, 7),
    (8, 9, 10, 11),
)
HEX_FACES: Tuple[Tuple[int, ...], ...] = (
    (0, 1, 2, 3),
    (4, 5, 6, 7),
    (0, 1, 5, 4),
    (1, 2, 6, 5),
    (3, 2, 6, 7),
    (0, 4, 7, 3),
)
HEX_ROTATIONS: Tuple[Permutation, ...] = (
    (0, 1, 2, 3, 4, 5, 6, 7),  # source corner 0
    (1, 2, 3, 0, 5, 6, 7, 4),  # source corner 1
    (3, 0, 1, 2, 7, 4, 5, 6),  # source corner 3
    (2, 3, 0, 1, 6, 7, 4, 5),  # source corner 2
    (4, 7, 6, 5, 0, 3, 2, 1),  # source corner 4
    (5, 4, 7, 6, 1, 0, 3, 2),  # source corner 5
    (7, 6, 5, 4, 3, 2, 1, 0),  # source corner 7
    (6, 5, 4, 7, 2, 1, 0, 3),  # source corner 6
)
# Swapping the bottom and the top quartet mirrors the cell.
HEX_TOP_BOTTOM_SWAP: Permutation = (4, 5, 6, 7, 0, 1, 2, 3)

_LOCAL_EDGES = {1: LINE_EDGES, 2: QUAD_SIDES, 3: HEX_EDGES}
_EDGE_GROUPS = {1: LINE_EDGE_GROUPS, 2: QUAD_SIDE_GROUPS, 3: HEX_EDGE_GROUPS}
_ROTATIONS = {2: QUAD_ROTATIONS, 3: HEX_ROTATIONS}

# Generators of the symmetry groups of the reference cells.
_QUAD_GENERATORS = {
    "rotations": [(1, 2, 3, 0)],
    "symmetries": [(1, 2, 3, 0), (1, 0, 3, 2)],
}
_HEX_GENERATORS = {
    "rotations": [(1, 2, 3, 0, 5, 6, 7, 4), (4, 5, 1, 0, 7, 6, 2, 3)],
    "symmetries": [
        (1, 2, 3, 0, 5, 6, 7, 4),
        (4, 5, 1, 0, 7, 6, 2, 3),
        HEX_TOP_BOTTOM_SWAP,
    ],
}


def local_edges(dimension: int) -> Tuple[Tuple[int, int], ...]:
    """Returns the local (start, end) vertex positions of every cell edge."""
    return _LOCAL_EDGES[_check_dimension(dimension)]


def edge_groups(dimension: int) -> Tuple[Tuple[int, ...], ...]:
    """Returns the groups of mutually parallel local edges of a cell."""
    return _EDGE_GROUPS[_check_dimension(dimension)]


def rotation_table(dimension: int) -> Tuple[Permutation, ...]:
    """Returns the vertex permutations indexed by the orientation pattern code."""
    if _check_dimension(dimension) not in _ROTATIONS:
        raise ValueError(
            f"No rotation table for dimension {dimension}; line cells are never reordered."
        )
    return _ROTATIONS[dimension]


def dimension_from_vertex_count(n_vertices: int) -> int:
    """Returns the cell dimension for a cell with ``n_vertices`` corners."""
    for dim, count in VERTICES_PER_CELL.items():
        if count == n_vertices:
            return dim
    raise KeyError(n_vertices)


def cell_symmetries(dimension: int, reflect: bool = False) -> List[Permutation]:
    """
    Enumerates vertex permutations that map the reference cell onto itself.

    Args:
        dimension: Cell dimension (1, 2 or 3).
        reflect: If True, mirror images are included as well; otherwise only
            proper rotations are returned (4 for quads, 24 for hexes).

    Returns:
        The permutations, identity first, in a deterministic order.
    """
    dimension = _check_dimension(dimension)
    if dimension == 1:
        return [(0, 1), (1, 0)] if reflect else [(0, 1)]

    generators = _QUAD_GENERATORS if dimension == 2 else _HEX_GENERATORS
    gens = generators["symmetries" if reflect else "rotations"]

    identity = tuple(range(VERTICES_PER_CELL[dimension]))
    found = [identity]
    seen = {identity}
    frontier = [identity]
    while frontier:
        next_frontier = []
        for perm in frontier:
            for gen in gens:
                composed = tuple(perm[g] for g in gen)
                if composed not in seen:
                    seen.add(composed)
                    found.append(composed)
                    next_frontier.append(composed)
        frontier = next_frontier
    return found


def _check_dimension(dimension: int) -> int:
    if dimension not in VERTICES_PER_CELL:
        raise ValueError(f"Unsupported cell dimension {dimension}; expected 1, 2 or 3.")
    return dimension
