# -*- coding: utf-8 -*-
"""
Statistics of a completed cell reordering.

Classes:
    ReorderSummary: Counts describing what `reorder_cells` found and changed.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.sparse.csgraph import connected_components

from .connectivity import MeshConnectivity
from .reporting import format_reorder_summary


@dataclass(frozen=True)
class ReorderSummary:
    """
    Stores the outcome of a cell reordering.

    Instances of this class are created via the `from_connectivity` class
    method, or `trivial` for meshes that need no work.

    Attributes:
        dimension (int): Dimension of the cells.
        n_cells (int): Number of cells.
        n_edges (int): Number of unique edges (sides in 2D).
        n_boundary_faces (int): Number of sides (2D) or faces (3D) owned by
            a single cell.
        n_sheets (int): Number of propagation passes, i.e. sheets in 3D and
            chains of opposite sides in 2D.
        n_rotated_cells (int): Number of cells whose vertex order changed.
        n_inverted_cells (int): Number of cells whose top and bottom faces
            were swapped.
        n_components (int): Number of connected components of the cell graph.
        rotation_counts (np.ndarray): How many cells received each rotation
            code.
    """

    dimension: int
    n_cells: int
    n_edges: int
    n_boundary_faces: int
    n_sheets: int
    n_rotated_cells: int
    n_inverted_cells: int
    n_components: int
    rotation_counts: np.ndarray

    @classmethod
    def from_connectivity(
        cls,
        mesh: MeshConnectivity,
        n_sheets: int,
        rotation_codes: np.ndarray,
        n_inverted_cells: int = 0,
    ) -> "ReorderSummary":
        """
        Collects the statistics of a reordered connectivity.

        Args:
            mesh: The oriented and resolved connectivity.
            n_sheets: Return value of the orientation strategy.
            rotation_codes: Return value of `resolve_cell_permutations`.
            n_inverted_cells: Return value of the inversion pass.
        """
        n_components, _ = connected_components(mesh.cell_adjacency(), directed=False)
        n_codes = 1 << len(mesh.edge_groups)
        codes = np.asarray(rotation_codes, dtype=int)

        return cls(
            dimension=mesh.dimension,
            n_cells=mesh.n_cells,
            n_edges=mesh.n_edges,
            n_boundary_faces=mesh.n_boundary_faces,
            n_sheets=int(n_sheets),
            n_rotated_cells=int(np.count_nonzero(codes)),
            n_inverted_cells=int(n_inverted_cells),
            n_components=int(n_components),
            rotation_counts=np.bincount(codes, minlength=n_codes),
        )

    @classmethod
    def trivial(cls, dimension: int, n_cells: int) -> "ReorderSummary":
        """Summary of a mesh left untouched, such as a 1D mesh of lines."""
        return cls(
            dimension=dimension,
            n_cells=n_cells,
            n_edges=n_cells,
            n_boundary_faces=0,
            n_sheets=0,
            n_rotated_cells=0,
            n_inverted_cells=0,
            n_components=0,
            rotation_counts=np.array([n_cells]),
        )

    def print_summary(self) -> None:
        """Prints a formatted report of the reordering."""
        print("\n" + "=" * 80)
        print(f"{'Cell Reordering Report':^80}")
        print("=" * 80)
        print(format_reorder_summary(self))
        print("\n" + "=" * 80)
