# -*- coding: utf-8 -*-
"""
Sheet-based edge orientation for hexahedral meshes.

In a hexahedron the four edges of each of its three edge groups are parallel
and must point the same way. Orienting one edge therefore fixes its whole
group, and through the cells sharing those edges the groups of the
neighbors. The set of edges reached this way from one freely chosen edge is
a "sheet".

The orienter seeds a sheet with the first unoriented edge of the first cell
that is not fully oriented, giving it that cell's local default direction.
Cells owning a freshly oriented edge are put on a FIFO work queue. For every
cell taken from the queue, each edge group is first checked for oriented
members pointing different ways; such a contradiction means the mesh cannot
be oriented at all (for example a ring of cells closed with a half twist).
Partially oriented groups are then completed, and the owners of the edges
oriented in the process are queued. Once the queue is empty the next sheet
is seeded, until every cell is fully oriented.

Every cell owning an edge is queued whenever that edge gets oriented, so every
group that ends up with disagreeing members is inspected after the second
member was set, and every contradiction is reported.
"""

import logging
from collections import deque
from typing import Deque, List, Set

from .base import OrientationStrategy
from .connectivity import MeshConnectivity
from .errors import UnorientableMeshError

logger = logging.getLogger(__name__)


class VolumetricOrienter(OrientationStrategy):
    """Orients the edges of a 3D hexahedral mesh sheet by sheet."""

    def orient(self, mesh: MeshConnectivity) -> int:
        sheet = 0
        marker = 0
        while True:
            while marker < mesh.n_cells and mesh.is_cell_oriented(marker):
                marker += 1
            if marker == mesh.n_cells:
                break

            seed = mesh.first_unoriented_edge(marker)
            self._grow_sheet(mesh, marker, seed, sheet)
            sheet += 1

        logger.debug("Oriented %d edges in %d sheets", mesh.n_edges, sheet)
        return sheet

    def _grow_sheet(
        self, mesh: MeshConnectivity, cell_no: int, local: int, sheet: int
    ) -> None:
        pending: Deque[int] = deque()
        queued: Set[int] = set()

        edge_no = mesh.orient_local(cell_no, local, 1, sheet)
        self._enqueue_owners(mesh, edge_no, pending, queued)
        n_oriented = 1
        n_visits = 0

        while pending:
            current = pending.popleft()
            queued.discard(current)
            n_visits += 1
            for edge_no in self._complete_groups(mesh, current, sheet):
                n_oriented += 1
                self._enqueue_owners(mesh, edge_no, pending, queued)

        logger.debug(
            "Sheet %d seeded at cell %d edge %d: %d edges, %d cell visits",
            sheet,
            cell_no,
            local,
            n_oriented,
            n_visits,
        )

    @staticmethod
    def _enqueue_owners(
        mesh: MeshConnectivity, edge_no: int, pending: Deque[int], queued: Set[int]
    ) -> None:
        for owner, _ in mesh.edges[edge_no].cells:
            if owner not in queued:
                queued.add(owner)
                pending.append(owner)

    @staticmethod
    def _complete_groups(mesh: MeshConnectivity, cell_no: int, sheet: int) -> List[int]:
        """
        Makes every partially oriented edge group of a cell fully oriented.

        Returns:
            Global indices of the edges oriented by this call.
        """
        fresh: List[int] = []
        for group_no, group in enumerate(mesh.edge_groups):
            directions = [mesh.local_direction(cell_no, local) for local in group]
            known = {d for d in directions if d != 0}

            if len(known) > 1:
                vertices = mesh.cells[cell_no].vertices
                raise UnorientableMeshError(
                    f"Mesh is unorientable: parallel edges of group {group_no} in "
                    f"cell {cell_no} (vertices {vertices}) received opposite "
                    f"orientations."
                )
            if not known or 0 not in directions:
                continue

            direction = known.pop()
            for local, current in zip(group, directions):
                if current == 0:
                    fresh.append(mesh.orient_local(cell_no, local, direction, sheet))
        return fresh
