"""
Point edit tests: insert/remove and the texture and walkability upkeep
that follows them.

Run with: python -m pytest tests/test_editing.py -v
"""

import numpy as np

from strata import autotile
from strata.config import LayerKind, TileId
from strata.models.tiles import Tile
from strata.models.walkability import WalkabilityGrid


def changed_offsets(layer, before_col, before_row):
    """Cells whose texture offset differs from the given snapshot"""
    diff = (layer.tex_col != before_col) | (layer.tex_row != before_row)
    return {(int(x), int(y)) for x, y in np.argwhere(diff)}


class TestInsert:
    """Tests for insert_tile"""

    def test_insert_into_empty_cell(self, terrain):
        """Test a successful insert"""
        assert terrain.insert((2, 2), TileId.STONE)
        assert terrain.foreground.tile_id(2, 2) == TileId.STONE

    def test_insert_into_occupied_cell(self, terrain):
        """Test that occupied cells are left alone"""
        terrain.insert((2, 2), TileId.STONE)
        assert not terrain.insert((2, 2), TileId.DIRT)
        assert terrain.foreground.tile_id(2, 2) == TileId.STONE

    def test_insert_out_of_range(self, terrain):
        """Test that out-of-range inserts fail without changes"""
        before = terrain.tobytes()
        assert not terrain.insert((-1, 0), TileId.STONE)
        assert not terrain.insert((10, 10), TileId.STONE)
        assert terrain.tobytes() == before

    def test_insert_resolves_neighbourhood(self, terrain):
        """Test that the 3x3 neighbourhood gets new offsets"""
        terrain.insert((2, 2), TileId.STONE)
        assert terrain.foreground.get(2, 2).texture_offset == autotile.texture_offset(0)

        terrain.insert((2, 1), TileId.STONE)
        assert terrain.foreground.get(2, 2).texture_offset == autotile.texture_offset(autotile.BM)
        assert terrain.foreground.get(2, 1).texture_offset == autotile.texture_offset(autotile.TM)

    def test_insert_changes_only_neighbourhood(self, terrain):
        """Test that no offset outside the 3x3 window moves"""
        terrain.insert((2, 2), TileId.STONE)
        fg = terrain.foreground
        before_col, before_row = fg.tex_col.copy(), fg.tex_row.copy()

        terrain.insert((2, 1), TileId.STONE)

        assert changed_offsets(fg, before_col, before_row) == {(2, 1), (2, 2)}

    def test_insert_on_textured_floor(self, floored_terrain):
        """Test the window rule against a floor full of resolved offsets"""
        terrain = floored_terrain
        for pos in [(7, 3), (8, 3), (1, 5)]:
            terrain.insert(pos, TileId.STONE)
        fg = terrain.foreground
        before_col, before_row = fg.tex_col.copy(), fg.tex_row.copy()

        terrain.insert((4, 1), TileId.DIRT)

        window = {(x, y) for x in range(3, 6) for y in range(0, 3)}
        changed = changed_offsets(fg, before_col, before_row)
        assert (4, 1) in changed
        assert changed <= window

        for x, y in window:
            if fg.is_occupied(x, y):
                assert fg.get(x, y).texture_offset == autotile.texture_offset(fg.neighbor_mask(x, y))

    def test_insert_empty_or_null_rejected(self, floored_terrain):
        """Test that EMPTY and NULL are not placeable tiles"""
        terrain = floored_terrain
        before = terrain.tobytes()

        assert not terrain.insert((4, 1), TileId.EMPTY)
        assert not terrain.insert((4, 1), TileId.NULL)
        assert not terrain.insert((4, 1), TileId.NULL, LayerKind.MIDDLE)
        assert terrain.tobytes() == before

    def test_insert_into_background(self, terrain):
        """Test that background edits are auto-tiled too"""
        terrain.insert((4, 4), TileId.BACKGROUND_STONE, LayerKind.BACKGROUND)
        terrain.insert((5, 4), TileId.BACKGROUND_STONE, LayerKind.BACKGROUND)

        tile = terrain.background.get(4, 4)
        assert tile.texture_offset == autotile.texture_offset(autotile.MR)
        assert terrain.foreground.get(4, 4).is_empty

    def test_insert_with_sub_offset(self, terrain):
        """Test inserting a middle tile with a sub-offset"""
        assert terrain.insert((1, 1), TileId.TREE_WOOD, LayerKind.MIDDLE, sub_offset=(2, 0))
        assert terrain.middle.get(1, 1) == Tile(TileId.TREE_WOOD, sub_offset=(2, 0))


class TestRemove:
    """Tests for remove_tile"""

    def test_remove_returns_tile(self, terrain):
        """Test that the removed tile is handed back"""
        terrain.insert((3, 3), TileId.DIRT)
        removed = terrain.remove((3, 3))

        assert removed is not None
        assert removed.id == TileId.DIRT
        assert terrain.foreground.get(3, 3).is_empty

    def test_remove_empty_cell(self, terrain):
        """Test that removing nothing returns None"""
        assert terrain.remove((3, 3)) is None
        assert terrain.remove((30, 3)) is None

    def test_remove_clears_offset_and_updates_neighbours(self, terrain):
        """Test offsets after a removal"""
        terrain.insert((2, 2), TileId.STONE)
        terrain.insert((3, 2), TileId.STONE)
        terrain.remove((3, 2))

        assert terrain.foreground.get(3, 2).texture_offset is None
        assert terrain.foreground.get(2, 2).texture_offset == autotile.texture_offset(0)


class TestMiddleEdits:
    """Tests for edits that must not touch offsets"""

    def test_middle_insert_leaves_textures(self, floored_terrain):
        """Test that middle edits do not recompute anything"""
        terrain = floored_terrain
        fg_before = terrain.foreground.copy()
        walk_before = terrain.walkability.cells.copy()

        assert terrain.insert((4, 1), TileId.MUSHROOM, LayerKind.MIDDLE)
        assert terrain.middle.get(4, 1).texture_offset is None
        assert terrain.foreground == fg_before
        assert (terrain.walkability.cells == walk_before).all()

        assert terrain.remove((4, 1), LayerKind.MIDDLE).id == TileId.MUSHROOM


class TestWalkabilityUpkeep:
    """Tests for walkability after foreground edits"""

    def test_block_and_unblock_floor(self, floored_terrain):
        """Test that headroom changes propagate to the floor below"""
        terrain = floored_terrain
        assert terrain.is_walkable(2, 0)

        terrain.insert((2, 2), TileId.STONE)
        assert not terrain.is_walkable(2, 0)
        assert terrain.is_walkable(2, 2)
        assert terrain.is_walkable(1, 0)

        terrain.remove((2, 2))
        assert terrain.is_walkable(2, 0)
        assert not terrain.is_walkable(2, 2)

    def test_invariant_after_many_edits(self, floored_terrain):
        """Test that walkability matches a full rederivation"""
        terrain = floored_terrain
        edits = [(1, 1), (1, 2), (5, 4), (5, 3), (8, 1), (9, 9)]
        for pos in edits:
            terrain.insert(pos, TileId.DIRT)
        terrain.remove((1, 2))
        terrain.remove((5, 4))

        expected = WalkabilityGrid(terrain.width, terrain.height)
        expected.derive(terrain.foreground)
        assert (terrain.walkability.cells == expected.cells).all()

    def test_generated_world_edit(self, fresh_generated):
        """Test an edit on a generated world keeps every invariant"""
        terrain = fresh_generated
        x = terrain.width // 2
        floor = terrain.foreground.top_occupied(x)
        assert floor is not None

        removed = terrain.remove((x, floor))
        assert removed is not None

        expected = WalkabilityGrid(terrain.width, terrain.height)
        expected.derive(terrain.foreground)
        assert (terrain.walkability.cells == expected.cells).all()

        fg = terrain.foreground
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                cx, cy = x + dx, floor + dy
                tile = fg.get(cx, cy)
                if tile is None:
                    continue
                if tile.is_empty:
                    assert tile.texture_offset is None
                else:
                    assert tile.texture_offset == autotile.texture_offset(fg.neighbor_mask(cx, cy))
