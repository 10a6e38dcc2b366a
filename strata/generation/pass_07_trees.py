"""
Strata - Pass 07: Trees
Plants trees along the surface, left to right. A tree needs a floor with
solid ground on both sides and room above it for its foliage.
"""

import logging

from strata.catalog import descriptor
from strata.config import GenerationSettings, TileId
from strata.generation.structures import place_structure
from strata.models.terrain import Terrain
from strata.models.tiles import Tile

logger = logging.getLogger(__name__)

# Columns skipped after a tree so canopies do not crowd each other
TREE_SPACING = 5


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Place foliage structures and trunks in the middle layer.

    Args:
        terrain: Terrain to update
        settings: Generation settings
    """
    rng = terrain.rng("pass_07_trees")
    trees = settings.trees
    foreground = terrain.foreground
    middle = terrain.middle
    foliage_width = descriptor(TileId.TREE_FOLIAGE).footprint[0]

    planted = 0
    x = 4
    while x < terrain.width - 1:
        if rng.random() >= trees.spawn_rate:
            x += 1
            continue

        floor = foreground.top_occupied(x)
        if floor is None:
            x += 1
            continue

        # Trees only grow on level ground
        if not foreground.is_occupied(x - 1, floor) or not foreground.is_occupied(x + 1, floor):
            x += 1
            continue

        lo, hi = trees.trunk_height_range
        trunk = int(rng.integers(lo, hi))

        if not place_structure(terrain, TileId.TREE_FOLIAGE, x - foliage_width // 2, floor + 1 + trunk):
            x += 1
            continue

        for y in range(floor + 1, floor + 1 + trunk):
            variant = int(rng.integers(0, trees.trunk_variants))
            middle.set(x, y, Tile(TileId.TREE_WOOD, sub_offset=(variant, 0)))

        planted += 1
        x += TREE_SPACING

    logger.debug(f"{planted} trees planted")
