"""
Strata - Pass 05: Grass
The topmost solid cell of every column becomes grass.
"""

import logging

import numpy as np

from strata.config import GenerationSettings, TileId
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


def surface_rows(occupancy: np.ndarray) -> np.ndarray:
    """Index of the highest occupied cell per column, -1 for empty columns"""
    height = occupancy.shape[1]
    from_top = np.argmax(occupancy[:, ::-1], axis=1)
    rows = height - 1 - from_top
    rows[~occupancy.any(axis=1)] = -1
    return rows


def execute(terrain: Terrain, settings: GenerationSettings):
    foreground = terrain.foreground
    rows = surface_rows(foreground.occupancy())

    columns = np.flatnonzero(rows >= 0)
    foreground.ids[columns, rows[columns]] = int(TileId.GRASS)

    logger.debug(f"Grass placed on {columns.size} of {terrain.width} columns")
