"""
Strata - Multi-cell structure placement
Stamps a footprint-sized structure (tree foliage, boulders, ...) into the
middle layer.
"""

from typing import TYPE_CHECKING

from strata.catalog import descriptor
from strata.config import TileId
from strata.errors import FootprintError
from strata.models.tiles import Tile

if TYPE_CHECKING:
    from strata.models.terrain import Terrain


def place_structure(terrain: "Terrain", tile_id: TileId, x: int, y: int) -> bool:
    """
    Place a multi-cell structure with its bottom-left cell at (x, y).

    Every covered cell must be in range and empty in both the foreground
    and the middle layer, otherwise nothing is written.

    Args:
        terrain: Terrain to modify
        tile_id: Identity with a footprint
        x: Left column
        y: Bottom row

    Returns:
        True if the structure was placed, False if obstructed

    Raises:
        FootprintError: if tile_id has no footprint or a zero-size one
    """
    desc = descriptor(tile_id)
    if not desc.is_multi_tile:
        raise FootprintError(f"{desc.name} is not a multi-cell structure")

    width, height = desc.footprint
    if width <= 0 or height <= 0:
        raise FootprintError(f"{desc.name} has an empty footprint {desc.footprint}")

    foreground = terrain.foreground
    middle = terrain.middle

    for i in range(width):
        for j in range(height):
            cx, cy = x + i, y + j
            if not foreground.in_bounds(cx, cy):
                return False
            if foreground.is_occupied(cx, cy) or middle.is_occupied(cx, cy):
                return False

    # Sub-offsets count rows from the top of the structure
    for i in range(width):
        for j in range(height):
            middle.set(x + i, y + j, Tile(tile_id, sub_offset=(i, height - 1 - j)))

    return True
