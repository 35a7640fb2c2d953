# -*- coding: utf-8 -*-
"""Common interface of the edge orientation strategies."""

from .connectivity import MeshConnectivity


class OrientationStrategy:
    """
    Abstract base class for edge orientation strategies.

    Subclasses must implement the `orient` method, which orients every edge of
    the given connectivity in place such that all cells sharing an edge see it
    in the same direction, and parallel edges of one cell point the same way.
    """

    def orient(self, mesh: MeshConnectivity) -> int:
        """
        Orients all edges of the mesh.

        Args:
            mesh: The connectivity to orient; modified in-place.

        Returns:
            The number of propagation passes that were needed.
        """
        raise NotImplementedError("Subclasses must implement this method.")
