import os
import tempfile
import unittest

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from gridorient.common.utility import (
    get_geometry_extent,
    plot_mesh,
    polygon_area,
    save_mesh_plot,
    side_arrows,
)
from gridorient.reorder import reorder_cells
from tests.common_meshes import create_scrambled_quad_mesh, create_two_squares_fixture


class TestGeometryHelpers(unittest.TestCase):

    def test_polygon_area(self):
        square = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 2.0], [0.0, 2.0]])
        self.assertAlmostEqual(polygon_area(square), 4.0)

    def test_geometry_extent(self):
        nodes = np.array([[0.0, 0.0], [3.0, 4.0]])
        self.assertAlmostEqual(get_geometry_extent(nodes), 5.0)
        self.assertEqual(get_geometry_extent(np.zeros((2, 2))), 1.0)


class TestSideArrows(unittest.TestCase):

    def test_one_arrow_per_side(self):
        vertices, cells = create_two_squares_fixture()
        starts, vectors = side_arrows(vertices[:, :2], cells)
        self.assertEqual(starts.shape, (8, 2))
        self.assertEqual(vectors.shape, (8, 2))

    def test_shared_side_arrows_agree_after_reordering(self):
        vertices, cells = create_two_squares_fixture()
        nodes = vertices[:, :2]

        _, before = side_arrows(nodes, cells)
        # Side 1 of A and side 2 of B lie on the shared side.
        self.assertLess(np.dot(before[1], before[4 + 2]), 0.0)

        reorder_cells(cells, vertices)
        _, after = side_arrows(nodes, cells)
        # B = [2, 1, 4, 5] now meets the shared side with its side 1.
        self.assertGreater(np.dot(after[1], after[4 + 1]), 0.0)


class TestPlotMesh(unittest.TestCase):
    """Smoke tests for plotting."""

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)

    def test_plot_mesh_draws_arrows(self):
        vertices, cells = create_scrambled_quad_mesh(3, 2, seed=0)
        fig, ax = plt.subplots()
        plot_mesh(ax, vertices, cells, show_nodes=True, show_cells=True)
        self.assertEqual(len(ax.collections), 2)
        self.assertEqual(len(ax.get_legend().get_texts()), 1)
        plt.close(fig)

    def test_plot_mesh_colored_by_codes(self):
        vertices, cells = create_scrambled_quad_mesh(3, 2, seed=0)
        fig, ax = plt.subplots()
        codes = np.array([0, 1, 1, 2, 3, 0])
        plot_mesh(ax, vertices, cells, show_sides=False, codes=codes)
        self.assertEqual(len(ax.collections), 1)
        self.assertEqual(len(ax.get_legend().get_texts()), 4)
        plt.close(fig)

    def test_save_mesh_plot(self):
        vertices, cells = create_scrambled_quad_mesh(4, 3, seed=2)
        reorder_cells(cells)
        filepath = os.path.join(self.tmp_dir.name, "oriented.png")
        save_mesh_plot(filepath, vertices, cells)
        self.assertTrue(os.path.exists(filepath))
        self.assertGreater(os.path.getsize(filepath), 0)


if __name__ == "__main__":
    unittest.main()
