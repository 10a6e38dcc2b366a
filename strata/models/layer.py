"""
Strata - Layer storage
A width x height grid of tiles backed by NumPy arrays.

Arrays are indexed [x, y] with y growing upwards: row 0 is the bottom of
the world, so "above" a cell means y + 1.
"""

from typing import Optional, Tuple

import numpy as np
from scipy.ndimage import correlate

from strata import autotile
from strata.catalog import descriptor
from strata.config import ATLAS_WIDTH, LayerKind, TileId
from strata.models.tiles import Offset, Tile

NO_OFFSET = -1

# Bit weight of each neighbour, laid out as [dx + 1, dy + 1]
MASK_KERNEL = np.array(
    [
        [autotile.BL, autotile.ML, autotile.TL],
        [autotile.BM, 0, autotile.TM],
        [autotile.BR, autotile.MR, autotile.TR],
    ],
    dtype=np.int32,
)

# (dx, dy, bit) in mask bit order
NEIGHBOURS: Tuple[Tuple[int, int, int], ...] = (
    (-1, 1, autotile.TL),
    (0, 1, autotile.TM),
    (1, 1, autotile.TR),
    (-1, 0, autotile.ML),
    (1, 0, autotile.MR),
    (-1, -1, autotile.BL),
    (0, -1, autotile.BM),
    (1, -1, autotile.BR),
)


class Layer:
    """
    One tile layer.

    Each cell stores a tile id, an optional sub-offset and an optional
    texture offset. Offsets are kept as separate column/row arrays where
    -1 means "not set". New layers hold NULL tiles until a pass writes them.
    """

    def __init__(self, width: int, height: int, kind: LayerKind = LayerKind.FOREGROUND):
        self.width = width
        self.height = height
        self.kind = kind

        self.ids = np.full((width, height), int(TileId.NULL), dtype=np.uint16)
        self.sub_col = np.full((width, height), NO_OFFSET, dtype=np.int16)
        self.sub_row = np.full((width, height), NO_OFFSET, dtype=np.int16)
        self.tex_col = np.full((width, height), NO_OFFSET, dtype=np.int16)
        self.tex_row = np.full((width, height), NO_OFFSET, dtype=np.int16)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[Tile]:
        """Tile at (x, y), or None when out of range"""
        if not self.in_bounds(x, y):
            return None

        sub_offset = None
        if self.sub_col[x, y] != NO_OFFSET:
            sub_offset = (int(self.sub_col[x, y]), int(self.sub_row[x, y]))

        texture_offset = None
        if self.tex_col[x, y] != NO_OFFSET:
            texture_offset = (int(self.tex_col[x, y]), int(self.tex_row[x, y]))

        return Tile(TileId(int(self.ids[x, y])), sub_offset, texture_offset)

    def tile_id(self, x: int, y: int) -> Optional[TileId]:
        if not self.in_bounds(x, y):
            return None
        return TileId(int(self.ids[x, y]))

    def set(self, x: int, y: int, tile: Tile) -> None:
        """
        Write a tile. Callers are expected to have checked bounds; an
        out-of-range write raises IndexError rather than wrapping around.
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} layer")

        self.ids[x, y] = int(tile.id)
        self.sub_col[x, y], self.sub_row[x, y] = tile.sub_offset or (NO_OFFSET, NO_OFFSET)
        self.tex_col[x, y], self.tex_row[x, y] = tile.texture_offset or (NO_OFFSET, NO_OFFSET)

    def set_texture_offset(self, x: int, y: int, offset: Optional[Offset]) -> None:
        self.tex_col[x, y], self.tex_row[x, y] = offset or (NO_OFFSET, NO_OFFSET)

    def is_occupied(self, x: int, y: int) -> bool:
        """True when (x, y) is in range and holds anything but EMPTY"""
        return self.in_bounds(x, y) and bool(self.ids[x, y] != TileId.EMPTY)

    def is_empty_or_absent(self, x: int, y: int) -> bool:
        return not self.is_occupied(x, y)

    def fill(self, tile_id: TileId) -> None:
        """Reset every cell to tile_id with no offsets"""
        self.ids.fill(int(tile_id))
        for arr in (self.sub_col, self.sub_row, self.tex_col, self.tex_row):
            arr.fill(NO_OFFSET)

    def occupancy(self) -> np.ndarray:
        """Boolean array, True where a cell is non-empty"""
        return self.ids != int(TileId.EMPTY)

    def top_occupied(self, x: int) -> Optional[int]:
        """Highest non-empty row of column x, or None for an empty column"""
        rows = np.flatnonzero(self.ids[x] != int(TileId.EMPTY))
        return int(rows[-1]) if rows.size else None

    # -------------------------------------------------------------------------
    # Neighbour masks
    # -------------------------------------------------------------------------

    def neighbor_mask(self, x: int, y: int) -> int:
        """8-bit mask of the non-empty neighbours of (x, y); off-grid is empty"""
        mask = 0
        for dx, dy, bit in NEIGHBOURS:
            if self.is_occupied(x + dx, y + dy):
                mask |= bit
        return mask

    def neighbor_masks(self) -> np.ndarray:
        """Neighbour mask of every cell at once (uint8 array)"""
        masks = correlate(
            self.occupancy().astype(np.int32),
            MASK_KERNEL,
            mode="constant",
            cval=0,
        )
        return masks.astype(np.uint8)

    def resolve_texture(self, x: int, y: int) -> None:
        """Recompute the auto-tile offset of one cell (cleared if empty)"""
        if self.is_occupied(x, y):
            self.set_texture_offset(x, y, autotile.texture_offset(self.neighbor_mask(x, y)))
        else:
            self.set_texture_offset(x, y, None)

    def resolve_textures(self) -> None:
        """Recompute the auto-tile offset of every non-empty cell"""
        masks = self.neighbor_masks()
        occupied = self.occupancy()

        self.tex_col[...] = np.where(occupied, autotile.OFFSET_COLS[masks], NO_OFFSET)
        self.tex_row[...] = np.where(occupied, autotile.OFFSET_ROWS[masks], NO_OFFSET)

    # -------------------------------------------------------------------------
    # Rendering output
    # -------------------------------------------------------------------------

    def texture_index(self, x: int, y: int) -> Optional[int]:
        """
        Index into the layer's texture atlas, or None for empty/absent cells.

        Foreground and background cells use their auto-tile offset; middle
        cells use their sub-offset.
        """
        tile = self.get(x, y)
        if tile is None or tile.id in (TileId.EMPTY, TileId.NULL):
            return None

        if self.kind == LayerKind.MIDDLE:
            col, row = tile.sub_offset or (0, 0)
        else:
            col, row = tile.texture_offset or (0, 0)

        return descriptor(tile.id).tileset_position + row * ATLAS_WIDTH + col

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def copy(self) -> "Layer":
        clone = Layer(self.width, self.height, self.kind)
        for name in ("ids", "sub_col", "sub_row", "tex_col", "tex_row"):
            getattr(clone, name)[...] = getattr(self, name)
        return clone

    def tobytes(self) -> bytes:
        """Byte snapshot of the full layer contents"""
        return b"".join(
            arr.tobytes() for arr in (self.ids, self.sub_col, self.sub_row, self.tex_col, self.tex_row)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.tobytes() == other.tobytes()
        )

    def __repr__(self) -> str:
        return f"<Layer {self.kind.name} {self.width}x{self.height}>"
