import contextlib
import dataclasses
import io
import unittest

import numpy as np

from gridorient.meshgen import create_structured_hex_cells
from gridorient.reorder import ReorderSummary, reorder_cells
from gridorient.reorder.reporting import format_reorder_summary
from tests.common_meshes import create_scrambled_quad_mesh, create_two_squares_fixture


class TestReorderSummary(unittest.TestCase):
    """Statistics returned by reorder_cells."""

    @classmethod
    def setUpClass(cls):
        _, cells = create_structured_hex_cells(2, 2, 2)
        cls.summary = reorder_cells(cells)

    def test_counts(self):
        self.assertIsInstance(self.summary, ReorderSummary)
        self.assertEqual(self.summary.dimension, 3)
        self.assertEqual(self.summary.n_cells, 8)
        self.assertEqual(self.summary.n_edges, 54)
        self.assertEqual(self.summary.n_boundary_faces, 24)
        self.assertEqual(self.summary.n_sheets, 6)
        self.assertEqual(self.summary.n_rotated_cells, 0)
        self.assertEqual(self.summary.n_components, 1)
        np.testing.assert_array_equal(self.summary.rotation_counts, [8, 0, 0, 0, 0, 0, 0, 0])

    def test_is_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            self.summary.n_cells = 3

    def test_components(self):
        cells = [[0, 1, 2, 3], [4, 5, 6, 7]]
        self.assertEqual(reorder_cells(cells).n_components, 2)

    def test_rotation_histogram(self):
        _, cells = create_scrambled_quad_mesh(4, 4, seed=3)
        summary = reorder_cells(cells)
        self.assertEqual(len(summary.rotation_counts), 4)
        self.assertEqual(int(summary.rotation_counts.sum()), 16)
        self.assertEqual(16 - summary.rotation_counts[0], summary.n_rotated_cells)


class TestFormatReorderSummary(unittest.TestCase):
    """Text rendering of the summary."""

    def test_unrotated_mesh(self):
        _, cells = create_structured_hex_cells(1, 1, 1)
        report = format_reorder_summary(reorder_cells(cells))
        self.assertIn("Cell Reordering Summary", report)
        self.assertIn("Edge Sheets", report)
        self.assertIn("All cells kept their vertex order.", report)

    def test_rotated_mesh(self):
        vertices, cells = create_two_squares_fixture()
        report = format_reorder_summary(reorder_cells(cells, vertices))
        self.assertIn("Side Chains", report)
        self.assertIn("Share (%)", report)
        self.assertIn("50.00", report)

    def test_missing_summary(self):
        self.assertEqual(format_reorder_summary(None), "Reordering not performed.")

    def test_print_summary(self):
        _, cells = create_structured_hex_cells(1, 1, 1)
        summary = reorder_cells(cells)
        buffer = io.StringIO()
        with contextlib.redirect_stdout(buffer):
            summary.print_summary()
        self.assertIn("Cell Reordering Report", buffer.getvalue())
        self.assertIn("Inverted Cells", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
