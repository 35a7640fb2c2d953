"""Small structured meshes and helpers that scramble their cell numbering."""

from .structured import (
    create_annulus_quad_cells,
    create_hex_ring_cells,
    create_quad_band_cells,
    create_structured_hex_cells,
    create_structured_quad_cells,
    scramble_cells,
)

__all__ = [
    "create_structured_quad_cells",
    "create_structured_hex_cells",
    "create_annulus_quad_cells",
    "create_quad_band_cells",
    "create_hex_ring_cells",
    "scramble_cells",
]
