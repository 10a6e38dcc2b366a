"""
Terrain container and collaborator interface tests.

Run with: python -m pytest tests/test_interface.py -v
"""

from strata.config import LayerKind, TerrainStatus, TileId
from strata.interface import TerrainInterface
from strata.models.tiles import Tile

from conftest import blank_terrain


class TestTerrain:
    """Tests for the terrain container"""

    def test_new_terrain_is_pending(self):
        """Test initial metadata"""
        terrain = blank_terrain(4, 3)
        assert terrain.metadata.status == TerrainStatus.PENDING
        assert terrain.metadata.width == 4
        assert terrain.metadata.height == 3
        assert not terrain.is_generated

    def test_layer_extents(self):
        """Test that every grid shares the terrain size"""
        terrain = blank_terrain(7, 4)
        for layer in terrain.layers:
            assert layer.ids.shape == (7, 4)
        assert terrain.walkability.cells.shape == (7, 4)
        assert terrain.layer(LayerKind.MIDDLE) is terrain.middle

    def test_pass_streams_are_reproducible(self, terrain):
        """Test that a pass stream depends only on the seed"""
        a = terrain.rng("pass_07_trees").random(3)
        b = terrain.rng("pass_07_trees").random(3)
        c = terrain.rng("pass_08_decor").random(3)
        assert (a == b).all()
        assert not (a == c).all()

    def test_is_solid(self, terrain):
        """Test collision queries"""
        terrain.foreground.set(1, 1, Tile(TileId.STONE))
        assert terrain.is_solid(1, 1)
        assert not terrain.is_solid(2, 1)
        assert not terrain.is_solid(-5, 1)

    def test_to_ascii(self):
        """Test the text dump is drawn top row first"""
        terrain = blank_terrain(3, 2)
        terrain.foreground.set(0, 0, Tile(TileId.STONE))
        terrain.middle.set(1, 1, Tile(TileId.MUSHROOM))
        terrain.background.set(0, 1, Tile(TileId.BACKGROUND_STONE))
        terrain.background.set(0, 0, Tile(TileId.BACKGROUND_STONE))

        assert terrain.to_ascii() == ":m \n#  "
        assert terrain.to_ascii(LayerKind.BACKGROUND) == ":  \n:  "

    def test_to_ascii_generated(self, generated):
        """Test dump dimensions for a generated world"""
        rows = generated.to_ascii().split("\n")
        assert len(rows) == generated.height
        assert all(len(row) == generated.width for row in rows)


class TestTerrainInterface:
    """Tests for the collaborator query surface"""

    def test_query_cell(self, floored_terrain):
        """Test aggregated cell data"""
        interface = TerrainInterface(floored_terrain)
        cell = interface.query_cell(3, 0)

        assert cell.foreground == TileId.STONE
        assert cell.middle == TileId.EMPTY
        assert cell.solid
        assert cell.walkable
        assert cell.hardness == 3
        assert cell.foreground_texture is not None
        assert cell.middle_texture is None

    def test_query_out_of_range(self, floored_terrain):
        """Test that off-grid queries return None"""
        interface = TerrainInterface(floored_terrain)
        assert interface.query_cell(10, 0) is None
        assert interface.query_cell(0, -1) is None

    def test_query_radius(self, floored_terrain):
        """Test circular queries are clipped to the grid"""
        interface = TerrainInterface(floored_terrain)
        cells = interface.query_radius(0, 0, 1)
        assert {(c.x, c.y) for c in cells} == {(0, 0), (1, 0), (0, 1)}

    def test_find_path(self, floored_terrain):
        """Test successful path results"""
        result = TerrainInterface(floored_terrain).find_path((0, 0), (3, 0))
        assert result.success
        assert result.path == [(0, 0), (1, 0), (2, 0), (3, 0)]
        assert result.total_cost == 30

    def test_find_path_failure(self, floored_terrain):
        """Test failed path results"""
        result = TerrainInterface(floored_terrain).find_path((0, 0), (3, 5))
        assert not result.success
        assert result.path == []

    def test_sees_edits(self, floored_terrain):
        """Test that edits are visible through the interface"""
        interface = TerrainInterface(floored_terrain)
        floored_terrain.insert((2, 1), TileId.DIRT)

        assert not interface.query_cell(2, 0).walkable
        assert interface.query_cell(2, 1).walkable
        assert interface.find_path((0, 0), (4, 0)).success
