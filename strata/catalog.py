"""
Strata - Tile Catalog
Static descriptor for every tile identity: where its textures start in the
atlas, how large it is, ore spawning rules and hardness.

Foreground and background tiles own a 22x3 block of their layer's atlas
(the auto-tile offsets reach column 21 and row 2). Middle layer tiles are
addressed by their sub-offset inside the middle atlas.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from strata.config import ATLAS_WIDTH, LayerKind, TileCategory, TileId
from strata.errors import TileCatalogError

AUTOTILE_BLOCK = ATLAS_WIDTH * 3


@dataclass(frozen=True)
class OreParams:
    """Ore spawning rules"""
    max_height: float  # Highest relative row the ore reaches, scaled by ore_height
    radius: int        # Scatter radius in cells


@dataclass(frozen=True)
class TileDescriptor:
    id: TileId
    category: TileCategory
    name: str
    layer: Optional[LayerKind]
    tileset_position: int
    footprint: Optional[Tuple[int, int]] = None
    ore: Optional[OreParams] = None
    hardness: int = 0
    glyph: str = "?"

    @property
    def is_multi_tile(self) -> bool:
        return self.footprint is not None


_DESCRIPTORS = (
    TileDescriptor(TileId.NULL, TileCategory.NULL, "null", None, 0, glyph="!"),
    TileDescriptor(TileId.EMPTY, TileCategory.EMPTY, "empty", None, 0, glyph=" "),

    # Ground
    TileDescriptor(TileId.GRASS, TileCategory.GROUND, "grass", LayerKind.FOREGROUND,
                   0 * AUTOTILE_BLOCK, hardness=1, glyph="w"),
    TileDescriptor(TileId.DIRT, TileCategory.GROUND, "dirt", LayerKind.FOREGROUND,
                   1 * AUTOTILE_BLOCK, hardness=1, glyph="x"),
    TileDescriptor(TileId.STONE, TileCategory.GROUND, "stone", LayerKind.FOREGROUND,
                   2 * AUTOTILE_BLOCK, hardness=3, glyph="#"),

    # Ore
    TileDescriptor(TileId.IRON_ORE, TileCategory.ORE, "iron_ore", LayerKind.FOREGROUND,
                   3 * AUTOTILE_BLOCK, ore=OreParams(max_height=1.0, radius=2),
                   hardness=4, glyph="i"),
    TileDescriptor(TileId.GOLD_ORE, TileCategory.ORE, "gold_ore", LayerKind.FOREGROUND,
                   4 * AUTOTILE_BLOCK, ore=OreParams(max_height=0.4, radius=1),
                   hardness=5, glyph="g"),

    # Background
    TileDescriptor(TileId.BACKGROUND_DIRT, TileCategory.BACKGROUND, "background_dirt",
                   LayerKind.BACKGROUND, 0 * AUTOTILE_BLOCK, glyph="."),
    TileDescriptor(TileId.BACKGROUND_STONE, TileCategory.BACKGROUND, "background_stone",
                   LayerKind.BACKGROUND, 1 * AUTOTILE_BLOCK, glyph=":"),

    # Surface decor
    TileDescriptor(TileId.GRASS_SHORT, TileCategory.SURFACE_DECOR, "grass_short",
                   LayerKind.MIDDLE, 8, glyph=","),
    TileDescriptor(TileId.GRASS_TALL, TileCategory.SURFACE_DECOR, "grass_tall",
                   LayerKind.MIDDLE, 9, footprint=(1, 2), glyph=";"),
    TileDescriptor(TileId.FLOWER_RED, TileCategory.SURFACE_DECOR, "flower_red",
                   LayerKind.MIDDLE, 10, glyph="*"),
    TileDescriptor(TileId.FLOWER_YELLOW, TileCategory.SURFACE_DECOR, "flower_yellow",
                   LayerKind.MIDDLE, 11, glyph="*"),
    TileDescriptor(TileId.MUSHROOM, TileCategory.SURFACE_DECOR, "mushroom",
                   LayerKind.MIDDLE, 12, glyph="m"),
    TileDescriptor(TileId.BUSH, TileCategory.SURFACE_DECOR, "bush",
                   LayerKind.MIDDLE, 13, footprint=(2, 1), hardness=1, glyph="b"),
    TileDescriptor(TileId.BOULDER, TileCategory.SURFACE_DECOR, "boulder",
                   LayerKind.MIDDLE, 15, footprint=(2, 2), hardness=3, glyph="o"),

    # Trees
    TileDescriptor(TileId.TREE_WOOD, TileCategory.TREE, "tree_wood",
                   LayerKind.MIDDLE, 5, hardness=2, glyph="|"),
    TileDescriptor(TileId.TREE_FOLIAGE, TileCategory.TREE, "tree_foliage",
                   LayerKind.MIDDLE, 0, footprint=(5, 4), glyph="@"),
)

TILE_CATALOG: Mapping[TileId, TileDescriptor] = MappingProxyType(
    {desc.id: desc for desc in _DESCRIPTORS}
)

# Random ore draws index into this tuple
ORE_TILES: Tuple[TileId, ...] = tuple(
    desc.id for desc in _DESCRIPTORS if desc.category == TileCategory.ORE
)

# DecorSettings.surface_range indexes into this tuple
SURFACE_DECOR: Tuple[TileId, ...] = tuple(
    desc.id for desc in _DESCRIPTORS if desc.category == TileCategory.SURFACE_DECOR
)


def descriptor(tile_id: TileId) -> TileDescriptor:
    """
    Look up the descriptor of a tile identity.

    Raises:
        TileCatalogError: if the identity is not registered
    """
    try:
        return TILE_CATALOG[tile_id]
    except KeyError:
        raise TileCatalogError(f"No descriptor registered for tile {tile_id!r}") from None
