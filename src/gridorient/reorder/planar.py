# -*- coding: utf-8 -*-
"""
Linear-time side orientation for quadrilateral meshes.

Opposite sides of a quadrilateral must be parallel. Orienting one side
therefore fixes the opposite one, which in turn fixes the opposite side of
the neighbor behind it, and so on. The sides linked this way form chains
that either end at the boundary or close up into a ring.

The orienter takes the first cell that still has an unoriented side, orients
that side (matching the opposite side if it is already oriented, otherwise
using the cell's default direction) and walks the chain across the mesh
until it reaches the boundary or an already oriented side. Then it picks the
next unoriented side and repeats. Each side is visited once.
"""

import logging
from typing import Optional

from .base import OrientationStrategy
from .connectivity import MeshConnectivity
from .errors import UnorientableMeshError

logger = logging.getLogger(__name__)


def _opposite(side: int) -> int:
    return (side + 2) % 4


class PlanarOrienter(OrientationStrategy):
    """Orients the sides of a 2D quadrilateral mesh chain by chain."""

    def orient(self, mesh: MeshConnectivity) -> int:
        n_chains = 0
        cursor: Optional[int] = 0
        while True:
            cursor = self._next_unoriented_cell(mesh, cursor)
            if cursor is None:
                break
            side = mesh.first_unoriented_edge(cursor)
            while side is not None:
                self._orient_chain(mesh, cursor, side, n_chains)
                n_chains += 1
                side = mesh.first_unoriented_edge(cursor)

        logger.debug("Oriented %d sides in %d chains", mesh.n_edges, n_chains)
        return n_chains

    @staticmethod
    def _next_unoriented_cell(mesh: MeshConnectivity, cursor: int) -> Optional[int]:
        while cursor < mesh.n_cells and mesh.is_cell_oriented(cursor):
            cursor += 1
        return cursor if cursor < mesh.n_cells else None

    @staticmethod
    def _orient_side(mesh: MeshConnectivity, cell_no: int, side: int, chain: int) -> None:
        """Orients a side parallel to its opposite side, or by default."""
        direction = mesh.local_direction(cell_no, _opposite(side)) or 1
        mesh.orient_local(cell_no, side, direction, chain)

    def _orient_chain(
        self, mesh: MeshConnectivity, cell_no: int, side: int, chain: int
    ) -> None:
        self._orient_side(mesh, cell_no, side, chain)
        length = 1

        hop = mesh.neighbor_across(cell_no, side)
        while hop is not None:
            entry_cell, entry_side = hop
            exit_side = _opposite(entry_side)

            if mesh.is_edge_oriented(entry_cell, exit_side):
                # The chain closed into a ring.
                if mesh.local_direction(entry_cell, exit_side) != mesh.local_direction(
                    entry_cell, entry_side
                ):
                    raise UnorientableMeshError(
                        f"Mesh is unorientable: the ring of sides through cell "
                        f"{entry_cell} closes with a reversed orientation "
                        f"(the surface is twisted)."
                    )
                break

            self._orient_side(mesh, entry_cell, exit_side, chain)
            length += 1
            hop = mesh.neighbor_across(entry_cell, exit_side)

        logger.debug(
            "Chain %d from cell %d side %d: %d sides, %s",
            chain,
            cell_no,
            side,
            length,
            "open" if hop is None else "closed",
        )
