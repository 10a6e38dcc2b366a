"""
Multi-cell placement tests.

Run with: python -m pytest tests/test_structures.py -v
"""

import pytest

from strata.config import TileId
from strata.errors import FootprintError
from strata.generation.structures import place_structure
from strata.models.tiles import Tile


class TestPlaceStructure:
    """Tests for stamping footprints into the middle layer"""

    def test_place_boulder(self, terrain):
        """Test sub-offsets count rows from the top of the structure"""
        assert place_structure(terrain, TileId.BOULDER, 3, 3)

        middle = terrain.middle
        assert middle.get(3, 3) == Tile(TileId.BOULDER, sub_offset=(0, 1))
        assert middle.get(4, 3) == Tile(TileId.BOULDER, sub_offset=(1, 1))
        assert middle.get(3, 4) == Tile(TileId.BOULDER, sub_offset=(0, 0))
        assert middle.get(4, 4) == Tile(TileId.BOULDER, sub_offset=(1, 0))
        assert middle.get(5, 3).is_empty

    def test_foreground_obstruction(self, terrain):
        """Test that solid ground under the footprint blocks placement"""
        terrain.foreground.set(4, 4, Tile(TileId.STONE))
        before = terrain.middle.copy()

        assert not place_structure(terrain, TileId.BOULDER, 3, 3)
        assert terrain.middle == before

    def test_middle_obstruction(self, terrain):
        """Test that overlapping structures are rejected"""
        assert place_structure(terrain, TileId.TREE_FOLIAGE, 0, 5)
        before = terrain.middle.copy()

        assert not place_structure(terrain, TileId.BOULDER, 4, 8)
        assert terrain.middle == before

    def test_out_of_range(self, terrain):
        """Test that footprints crossing the edge are obstructed"""
        assert not place_structure(terrain, TileId.BOULDER, 9, 0)
        assert not place_structure(terrain, TileId.TREE_FOLIAGE, 0, 7)
        assert not place_structure(terrain, TileId.BOULDER, -1, 0)

    def test_fits_exactly_at_edge(self, terrain):
        """Test that a footprint touching the last row and column fits"""
        assert place_structure(terrain, TileId.BOULDER, 8, 8)

    def test_single_cell_tile_is_rejected(self, terrain):
        """Test that tiles without a footprint raise"""
        with pytest.raises(FootprintError):
            place_structure(terrain, TileId.GRASS_SHORT, 1, 1)
