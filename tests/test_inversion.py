import unittest

import numpy as np

from gridorient.meshgen import create_structured_hex_cells
from gridorient.reorder.errors import InvalidCellError, MixedOrientationError
from gridorient.reorder.inversion import (
    cell_measure,
    cell_measures,
    invert_all_cells_of_negative_grid,
)
from tests.common_meshes import UNIT_CUBE, create_inverted_cube_fixture, mirror_hex


class TestCellMeasures(unittest.TestCase):
    """Signed areas and volumes."""

    def test_quad_area_sign(self):
        square = np.array([[0.0, 0.0], [2.0, 0.0], [2.0, 1.0], [0.0, 1.0]])
        self.assertAlmostEqual(cell_measure(square, [0, 1, 2, 3]), 2.0)
        self.assertAlmostEqual(cell_measure(square, [0, 3, 2, 1]), -2.0)

    def test_unit_cube(self):
        self.assertAlmostEqual(cell_measure(UNIT_CUBE, list(range(8))), 1.0)
        self.assertAlmostEqual(cell_measure(UNIT_CUBE, mirror_hex(list(range(8)))), -1.0)

    def test_volume_is_exact_for_tapered_hex(self):
        """A hex widening from side 1 to side 2 has volume 7/3."""
        vertices = np.array(
            [
                [0.0, 0.0, 0.0],
                [1.0, 0.0, 0.0],
                [1.0, 1.0, 0.0],
                [0.0, 1.0, 0.0],
                [-0.5, -0.5, 1.0],
                [1.5, -0.5, 1.0],
                [1.5, 1.5, 1.0],
                [-0.5, 1.5, 1.0],
            ]
        )
        self.assertAlmostEqual(cell_measure(vertices, list(range(8))), 7.0 / 3.0)

    def test_structured_mesh_volumes(self):
        vertices, cells = create_structured_hex_cells(3, 2, 2)
        measures = cell_measures(vertices * 0.5, cells)
        np.testing.assert_allclose(measures, 0.125)

    def test_rejects_bad_input(self):
        with self.assertRaises(InvalidCellError):
            cell_measures(UNIT_CUBE, [[0, 1, 2, 3, 4, 5, 6, 99]])
        with self.assertRaises(InvalidCellError):
            cell_measures(UNIT_CUBE, [[0, 1, 2, 3, 4, 5]])
        with self.assertRaises(InvalidCellError):
            cell_measures(UNIT_CUBE[:, :2], [list(range(8))])


class TestInvertAllCellsOfNegativeGrid(unittest.TestCase):
    """Uniform flipping of mirrored hexahedral meshes."""

    def test_single_inverted_cube(self):
        vertices, cells = create_inverted_cube_fixture()
        original = [list(c) for c in cells]

        n_flipped = invert_all_cells_of_negative_grid(vertices, cells)

        self.assertEqual(n_flipped, 1)
        self.assertGreater(cell_measure(vertices, cells[0]), 0.0)
        self.assertEqual(cells[0][4:], original[0][:4])
        self.assertEqual(cells[0], list(range(8)))

    def test_positive_mesh_is_untouched(self):
        vertices, cells = create_structured_hex_cells(2, 2, 1)
        original = [list(c) for c in cells]
        self.assertEqual(invert_all_cells_of_negative_grid(vertices, cells), 0)
        self.assertEqual(cells, original)

    def test_fully_mirrored_mesh(self):
        vertices, cells = create_structured_hex_cells(2, 2, 2)
        mirrored = [mirror_hex(c) for c in cells]
        self.assertEqual(invert_all_cells_of_negative_grid(vertices, mirrored), 8)
        self.assertEqual(mirrored, cells)

    def test_mixed_mesh_is_rejected_unchanged(self):
        vertices, cells = create_structured_hex_cells(2, 1, 1)
        cells[0] = mirror_hex(cells[0])
        before = [list(c) for c in cells]

        with self.assertRaises(MixedOrientationError):
            invert_all_cells_of_negative_grid(vertices, cells)
        self.assertEqual(cells, before)

    def test_degenerate_cell_does_not_count_as_mixed(self):
        vertices, cells = create_structured_hex_cells(2, 1, 1)
        vertices = np.vstack([vertices, vertices[[0, 1, 4, 3]]])
        flat = [0, 1, 4, 3, 12, 13, 14, 15]
        mirrored = [mirror_hex(c) for c in cells] + [flat]

        with self.assertLogs("gridorient.reorder.inversion", level="WARNING"):
            n_flipped = invert_all_cells_of_negative_grid(vertices, mirrored)

        self.assertEqual(n_flipped, 2)
        self.assertEqual(mirrored[:2], cells)
        self.assertEqual(mirrored[2], flat)

    def test_mixed_error_names_degenerate_cells(self):
        vertices, cells = create_structured_hex_cells(2, 1, 1)
        vertices = np.vstack([vertices, vertices[[0, 1, 4, 3]]])
        cells[0] = mirror_hex(cells[0])
        cells.append([0, 1, 4, 3, 12, 13, 14, 15])

        with self.assertLogs("gridorient.reorder.inversion", level="WARNING"):
            with self.assertRaisesRegex(MixedOrientationError, r"Degenerate cells: \[2\]"):
                invert_all_cells_of_negative_grid(vertices, cells)

    def test_quads_are_rejected(self):
        square = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])
        with self.assertRaises(InvalidCellError):
            invert_all_cells_of_negative_grid(square, [[0, 3, 2, 1]])


if __name__ == "__main__":
    unittest.main()
