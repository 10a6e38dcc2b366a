"""
Strata - Pass 04: Ore Scatter
Drops round ore deposits into the ground. Each deposit is most likely at
its centre and thins out towards its radius.
"""

import logging
import math

from strata.catalog import ORE_TILES, descriptor
from strata.config import GenerationSettings, TileId
from strata.errors import ConfigurationError
from strata.models.terrain import Terrain
from strata.models.tiles import Tile

logger = logging.getLogger(__name__)


def ore_ceiling(tile_id: TileId, settings: GenerationSettings, height: int) -> int:
    """Highest row an ore may be centred on"""
    return int(descriptor(tile_id).ore.max_height * settings.ore_height * height)


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Scatter width // ore_rate deposit trials.

    Args:
        terrain: Terrain to update
        settings: Generation settings

    Raises:
        ConfigurationError: if a trial row is above every ore's ceiling
    """
    rng = terrain.rng("pass_04_ores")
    foreground = terrain.foreground
    width, height = terrain.width, terrain.height

    row_limit = int(height * settings.ore_height)
    best_ceiling = max(ore_ceiling(ore, settings, height) for ore in ORE_TILES)

    deposits = 0
    placed = 0
    for _ in range(width // settings.ore_rate):
        x = int(rng.integers(0, width))
        y = int(rng.integers(0, row_limit)) if row_limit > 0 else 0

        if not foreground.is_occupied(x, y):
            continue

        if best_ceiling < y:
            raise ConfigurationError(f"No ore can spawn at row {y}")

        # Redraw until the ore may sit this high
        ore = ORE_TILES[int(rng.integers(0, len(ORE_TILES)))]
        while ore_ceiling(ore, settings, height) < y:
            ore = ORE_TILES[int(rng.integers(0, len(ORE_TILES)))]

        radius = descriptor(ore).ore.radius
        deposits += 1

        for cx in range(x - radius, x + radius + 1):
            for cy in range(y - radius, y + radius + 1):
                if not foreground.is_occupied(cx, cy):
                    continue

                dist = math.sqrt((cx - x) ** 2 + (cy - y) ** 2)
                if dist > radius:
                    continue

                if rng.random() > dist / radius:
                    foreground.set(cx, cy, Tile(ore))
                    placed += 1

    logger.debug(f"{deposits} ore deposits, {placed} ore cells placed")
