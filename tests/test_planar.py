import unittest

from gridorient.meshgen import (
    create_annulus_quad_cells,
    create_quad_band_cells,
    create_structured_quad_cells,
)
from gridorient.reorder.connectivity import MeshConnectivity
from gridorient.reorder.errors import UnorientableMeshError
from gridorient.reorder.permutation import rotation_code
from gridorient.reorder.planar import PlanarOrienter
from tests.common_meshes import create_moebius_strip_fixture, create_scrambled_quad_mesh


def assert_fully_oriented(test, mesh):
    """Every side is oriented and opposite sides of every cell agree."""
    test.assertTrue(all(edge.is_oriented for edge in mesh.edges))
    for cell_no in range(mesh.n_cells):
        # raises if a side group disagrees
        rotation_code(mesh, cell_no)


class TestPlanarOrienter(unittest.TestCase):
    """Chain-by-chain side orientation of quadrilateral meshes."""

    def test_structured_mesh_keeps_default_directions(self):
        _, cells = create_structured_quad_cells(3, 2)
        mesh = MeshConnectivity.build(cells, 2)
        n_chains = PlanarOrienter().orient(mesh)

        # Every row and column of sides is walked from both ends.
        self.assertEqual(n_chains, 2 * (3 + 2))
        for cell_no in range(mesh.n_cells):
            self.assertEqual(rotation_code(mesh, cell_no), 0)

    def test_scrambled_meshes(self):
        for seed in range(5):
            with self.subTest(seed=seed):
                _, cells = create_scrambled_quad_mesh(4, 3, seed=seed)
                mesh = MeshConnectivity.build(cells, 2)
                PlanarOrienter().orient(mesh)
                assert_fully_oriented(self, mesh)

    def test_chain_tags(self):
        _, cells = create_scrambled_quad_mesh(3, 3, seed=7)
        mesh = MeshConnectivity.build(cells, 2)
        n_chains = PlanarOrienter().orient(mesh)
        tags = {edge.sheet for edge in mesh.edges}
        self.assertEqual(tags, set(range(n_chains)))

    def test_closed_chains(self):
        """Sides around an annulus form rings that close consistently."""
        _, cells = create_annulus_quad_cells(8, 2)
        mesh = MeshConnectivity.build(cells, 2)
        PlanarOrienter().orient(mesh)
        assert_fully_oriented(self, mesh)

    def test_untwisted_band(self):
        _, cells = create_quad_band_cells(5)
        mesh = MeshConnectivity.build(cells, 2)
        PlanarOrienter().orient(mesh)
        assert_fully_oriented(self, mesh)

    def test_moebius_strip_is_unorientable(self):
        mesh = MeshConnectivity.build(create_moebius_strip_fixture(), 2)
        with self.assertRaises(UnorientableMeshError):
            PlanarOrienter().orient(mesh)

    def test_longer_moebius_strip_is_unorientable(self):
        _, cells = create_quad_band_cells(7, twisted=True)
        mesh = MeshConnectivity.build(cells, 2)
        with self.assertRaises(UnorientableMeshError):
            PlanarOrienter().orient(mesh)


if __name__ == "__main__":
    unittest.main()
