"""
Strata - Point edits
Insert and remove single tiles while keeping auto-tile offsets and the
walkability grid consistent with the changed layer.
"""

import logging
from typing import TYPE_CHECKING, Optional, Tuple

from strata.config import LayerKind, TileId
from strata.models.tiles import EMPTY_TILE, Offset, Tile

if TYPE_CHECKING:
    from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)

GridPos = Tuple[int, int]


def insert_tile(
    terrain: "Terrain",
    pos: GridPos,
    identity: TileId,
    layer: LayerKind = LayerKind.FOREGROUND,
    sub_offset: Optional[Offset] = None,
) -> bool:
    """
    Place a tile into an empty cell.

    Returns:
        True if the tile was written. False (with nothing changed) when the
        cell is out of range or already occupied, or when identity is EMPTY
        or NULL.
    """
    if identity in (TileId.EMPTY, TileId.NULL):
        return False

    x, y = pos
    grid = terrain.layer(layer)

    current = grid.get(x, y)
    if current is None or not current.is_empty:
        return False

    grid.set(x, y, Tile(identity, sub_offset=sub_offset))
    _after_edit(terrain, layer, x, y)

    logger.debug(f"Inserted {identity.name} at ({x}, {y}) in {layer.name}")
    return True


def remove_tile(
    terrain: "Terrain",
    pos: GridPos,
    layer: LayerKind = LayerKind.FOREGROUND,
) -> Optional[Tile]:
    """
    Clear a cell.

    Returns:
        The removed tile, or None when the cell is out of range or already
        empty.
    """
    x, y = pos
    grid = terrain.layer(layer)

    current = grid.get(x, y)
    if current is None or current.is_empty:
        return None

    grid.set(x, y, EMPTY_TILE)
    _after_edit(terrain, layer, x, y)

    logger.debug(f"Removed {current.id.name} at ({x}, {y}) from {layer.name}")
    return current


def _after_edit(terrain: "Terrain", layer: LayerKind, x: int, y: int) -> None:
    if layer == LayerKind.MIDDLE:
        return

    # A changed cell alters the masks of its whole 3x3 neighbourhood
    grid = terrain.layer(layer)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if grid.in_bounds(x + dx, y + dy):
                grid.resolve_texture(x + dx, y + dy)

    if layer == LayerKind.FOREGROUND:
        terrain.walkability.refresh_below(grid, x, y)
