# -*- coding: utf-8 -*-
"""
Edge registry and cell record store used by the orientation engines.

Cells and edges live in two dense lists and refer to each other only by
their position in these lists. For a 2D mesh the "edges" are the sides of the
quadrilaterals; for a 3D mesh they are the twelve edges of every hexahedron.

Every edge remembers the direction in which its first owning cell traverses
it by default (``EdgeRecord.vertices``). A cell stores, for each of its local
edges, whether its own default direction agrees (+1) or disagrees (-1) with
that stored direction. Orienting an edge then means fixing it to FORWARD
(along the stored direction) or BACKWARD.

Classes:
    Orientation: Tri-state orientation of an edge.
    EdgeRecord: One unique edge (side) of the mesh.
    CellRecord: One input cell.
    MeshConnectivity: The two collections plus the builder filling them.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix

from . import geometry_info
from .errors import InternalOrientationError, InvalidCellError, NonManifoldError

logger = logging.getLogger(__name__)


class Orientation(enum.IntEnum):
    """Orientation of an edge relative to its stored default direction."""

    BACKWARD = -1
    UNORIENTED = 0
    FORWARD = 1


@dataclass
class EdgeRecord:
    """
    A unique edge of the mesh.

    Attributes:
        vertices (Tuple[int, int]): The default direction, i.e. the vertex
            pair as traversed by the first cell that referenced the edge.
        cells (List[Tuple[int, int]]): ``(cell index, local edge index)`` of
            every cell owning the edge, in the order the cells were added.
        orientation (Orientation): Current orientation state.
        sheet (int): Index of the propagation pass that oriented the edge,
            -1 while unoriented.
    """

    vertices: Tuple[int, int]
    cells: List[Tuple[int, int]] = field(default_factory=list)
    orientation: Orientation = Orientation.UNORIENTED
    sheet: int = -1

    @property
    def is_oriented(self) -> bool:
        return self.orientation is not Orientation.UNORIENTED

    @property
    def directed_vertices(self) -> Optional[Tuple[int, int]]:
        """The (start, end) vertices once oriented, None before."""
        if self.orientation is Orientation.FORWARD:
            return self.vertices
        if self.orientation is Orientation.BACKWARD:
            return (self.vertices[1], self.vertices[0])
        return None

    def orient(self, orientation: Orientation, sheet: int) -> None:
        """Fixes the orientation; an oriented edge never changes again."""
        if self.is_oriented:
            raise InternalOrientationError(
                f"Edge {self.vertices} is already oriented (sheet {self.sheet})."
            )
        if orientation is Orientation.UNORIENTED:
            raise InternalOrientationError(
                f"Edge {self.vertices} cannot be oriented to UNORIENTED."
            )
        self.orientation = orientation
        self.sheet = sheet


@dataclass
class CellRecord:
    """
    One input cell.

    Attributes:
        vertices (List[int]): Vertex indices in the current local order.
        edges (List[int]): Global edge index for every local edge position.
        local_flags (List[int]): +1 where the local default direction of an
            edge matches ``EdgeRecord.vertices``, -1 where it is reversed.
    """

    vertices: List[int]
    edges: List[int] = field(default_factory=list)
    local_flags: List[int] = field(default_factory=list)


class MeshConnectivity:
    """
    Cell and edge collections of a quadrilateral or hexahedral mesh.

    Use :meth:`build` to create an instance from a list of cells. Building
    rejects cells with a wrong vertex count or repeated vertices, and
    non-manifold meshes: a side shared by more than two quadrilaterals or a
    face shared by more than two hexahedra. Edges of hexahedra may be shared
    by any number of cells.
    """

    def __init__(self, dimension: int) -> None:
        if dimension not in (2, 3):
            raise ValueError(
                f"Connectivity is only built for 2D and 3D meshes, got {dimension}."
            )
        self.dimension: int = dimension
        self.vertices_per_cell: int = geometry_info.VERTICES_PER_CELL[dimension]
        self.local_edges = geometry_info.local_edges(dimension)
        self.edge_groups = geometry_info.edge_groups(dimension)

        self.cells: List[CellRecord] = []
        self.edges: List[EdgeRecord] = []

        self._edge_index: Dict[Tuple[int, int], int] = {}
        self._face_owners: Dict[Tuple[int, ...], List[int]] = {}

    # =========================================================================
    # Building
    # =========================================================================

    @classmethod
    def build(cls, cells: Sequence[Sequence[int]], dimension: int) -> "MeshConnectivity":
        """
        Creates the cell and edge records for the given cells in one pass.

        Args:
            cells: Cells as sequences of vertex indices.
            dimension: 2 for quadrilaterals, 3 for hexahedra.

        Returns:
            The populated connectivity.
        """
        mesh = cls(dimension)
        for conn in cells:
            mesh.add_cell(conn)
        logger.debug(
            "Built connectivity: %d cells, %d unique edges, %d boundary faces",
            mesh.n_cells,
            mesh.n_edges,
            mesh.n_boundary_faces,
        )
        return mesh

    def add_cell(self, vertices: Sequence[int]) -> int:
        """Registers a cell and its edges; returns the new cell index."""
        cell_no = len(self.cells)
        record = CellRecord(vertices=self._validate_cell(cell_no, vertices))

        if self.dimension == 3:
            self._register_faces(cell_no, record.vertices)

        for local, (a, b) in enumerate(self.local_edges):
            v0, v1 = record.vertices[a], record.vertices[b]
            key = (min(v0, v1), max(v0, v1))
            edge_no = self._edge_index.get(key)
            if edge_no is None:
                edge_no = len(self.edges)
                self._edge_index[key] = edge_no
                self.edges.append(EdgeRecord(vertices=(v0, v1)))

            edge = self.edges[edge_no]
            if self.dimension == 2 and len(edge.cells) == 2:
                owners = [c for c, _ in edge.cells] + [cell_no]
                raise NonManifoldError(key, owners)

            edge.cells.append((cell_no, local))
            record.edges.append(edge_no)
            record.local_flags.append(1 if edge.vertices[0] == v0 else -1)

        self.cells.append(record)
        return cell_no

    def _validate_cell(self, cell_no: int, vertices: Sequence[int]) -> List[int]:
        conn = [int(v) for v in vertices]
        if len(conn) != self.vertices_per_cell:
            raise InvalidCellError(
                f"Cell {cell_no} has {len(conn)} vertices; a {self.dimension}D cell "
                f"needs {self.vertices_per_cell}."
            )
        if min(conn) < 0:
            raise InvalidCellError(f"Cell {cell_no} has a negative vertex index: {conn}.")
        if len(set(conn)) != len(conn):
            raise InvalidCellError(f"Cell {cell_no} repeats a vertex: {conn}.")
        return conn

    def _register_faces(self, cell_no: int, conn: List[int]) -> None:
        for face in geometry_info.HEX_FACES:
            key = tuple(sorted(conn[i] for i in face))
            owners = self._face_owners.setdefault(key, [])
            if len(owners) == 2:
                raise NonManifoldError(key, owners + [cell_no])
            owners.append(cell_no)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def n_cells(self) -> int:
        return len(self.cells)

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    @property
    def n_boundary_faces(self) -> int:
        """Number of faces (sides in 2D) owned by a single cell."""
        if self.dimension == 2:
            return sum(1 for edge in self.edges if len(edge.cells) == 1)
        return sum(1 for owners in self._face_owners.values() if len(owners) == 1)

    def edge_of(self, cell_no: int, local: int) -> EdgeRecord:
        return self.edges[self.cells[cell_no].edges[local]]

    def local_direction(self, cell_no: int, local: int) -> int:
        """
        Direction of an edge as seen from a cell.

        Returns +1 if the oriented edge runs along the cell's local default
        direction, -1 if against it, and 0 while the edge is unoriented.
        """
        cell = self.cells[cell_no]
        return cell.local_flags[local] * int(self.edges[cell.edges[local]].orientation)

    def is_edge_oriented(self, cell_no: int, local: int) -> bool:
        return self.edge_of(cell_no, local).is_oriented

    def is_cell_oriented(self, cell_no: int) -> bool:
        """A cell is fully oriented when all of its edges are."""
        return all(self.edges[e].is_oriented for e in self.cells[cell_no].edges)

    def first_unoriented_edge(self, cell_no: int) -> Optional[int]:
        """Local index of the first unoriented edge of a cell, if any."""
        for local, edge_no in enumerate(self.cells[cell_no].edges):
            if not self.edges[edge_no].is_oriented:
                return local
        return None

    def orient_local(self, cell_no: int, local: int, direction: int, sheet: int) -> int:
        """
        Orients an edge so that the cell sees it in ``direction`` (+1 or -1).

        Returns:
            The global index of the edge.
        """
        cell = self.cells[cell_no]
        edge_no = cell.edges[local]
        self.edges[edge_no].orient(Orientation(cell.local_flags[local] * direction), sheet)
        return edge_no

    def neighbor_across(self, cell_no: int, local: int) -> Optional[Tuple[int, int]]:
        """
        The other owner of a 2D side.

        Returns:
            ``(neighbor cell, local side index in the neighbor)``, or None on
            the boundary.
        """
        for owner in self.edge_of(cell_no, local).cells:
            if owner != (cell_no, local):
                return owner
        return None

    def relabel_cell(self, cell_no: int, vertices: Sequence[int]) -> None:
        """
        Replaces the local vertex order of a cell by a symmetry of it.

        The cell keeps its edges; their local positions and flags are derived
        again from the new order.

        Raises:
            InternalOrientationError: If the new order does not map the cell's
                edges onto each other.
        """
        record = self.cells[cell_no]
        new_vertices = [int(v) for v in vertices]
        if sorted(new_vertices) != sorted(record.vertices):
            raise InternalOrientationError(
                f"Cell {cell_no} cannot be relabeled from {record.vertices} to "
                f"{new_vertices}."
            )

        for edge_no in record.edges:
            edge = self.edges[edge_no]
            edge.cells = [owner for owner in edge.cells if owner[0] != cell_no]

        record.vertices = new_vertices
        record.edges = []
        record.local_flags = []
        for local, (a, b) in enumerate(self.local_edges):
            v0, v1 = new_vertices[a], new_vertices[b]
            edge_no = self._edge_index.get((min(v0, v1), max(v0, v1)))
            if edge_no is None:
                raise InternalOrientationError(
                    f"Relabeling cell {cell_no} to {new_vertices} creates the "
                    f"unknown edge ({v0}, {v1})."
                )
            edge = self.edges[edge_no]
            edge.cells.append((cell_no, local))
            record.edges.append(edge_no)
            record.local_flags.append(1 if edge.vertices[0] == v0 else -1)

    def cell_edge_groups(self, cell_no: int) -> List[List[int]]:
        """Global edge indices of a cell, grouped into parallel edges."""
        edges = self.cells[cell_no].edges
        return [[edges[i] for i in group] for group in self.edge_groups]

    def cell_adjacency(self) -> csr_matrix:
        """
        Builds the cell-to-cell adjacency matrix.

        Two cells are adjacent when they share a side (2D) or a face (3D).
        """
        if self.dimension == 2:
            shared = [[c for c, _ in edge.cells] for edge in self.edges]
        else:
            shared = list(self._face_owners.values())

        row, col = [], []
        for owners in shared:
            if len(owners) == 2:
                row.extend(owners)
                col.extend(owners[::-1])

        return csr_matrix(
            (np.ones(len(row), dtype=int), (row, col)),
            shape=(self.n_cells, self.n_cells),
        )
