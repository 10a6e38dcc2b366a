"""
Strata - Tile value type
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from strata.config import TileId

Offset = Tuple[int, int]


@dataclass(frozen=True)
class Tile:
    """
    Contents of one grid cell.

    sub_offset locates the cell inside a multi-cell structure, (0, 0) being
    the structure's visual top-left. texture_offset is the auto-tile
    (col, row) resolved from the cell's neighbours.
    """
    id: TileId
    sub_offset: Optional[Offset] = None
    texture_offset: Optional[Offset] = None

    @property
    def is_empty(self) -> bool:
        return self.id == TileId.EMPTY


EMPTY_TILE = Tile(TileId.EMPTY)
