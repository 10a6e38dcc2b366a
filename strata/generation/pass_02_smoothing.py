"""
Strata - Pass 02: Cave Smoothing
Cellular automaton over the foreground: a cell is stone when at least
convert_min of its eight neighbours are solid, empty otherwise.

Each iteration reads a full snapshot and writes a fresh layer, so results
do not depend on scan order.
"""

import logging

import numpy as np

from strata import autotile
from strata.config import GenerationSettings, TileId
from strata.models.layer import Layer
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


def smooth(layer: Layer, convert_min: int) -> Layer:
    """One automaton step, returning a new layer"""
    counts = autotile.POPCOUNT[layer.neighbor_masks()]

    output = Layer(layer.width, layer.height, layer.kind)
    output.fill(TileId.EMPTY)
    output.ids[counts >= convert_min] = int(TileId.STONE)
    return output


def execute(terrain: Terrain, settings: GenerationSettings):
    """
    Smooth the cave layout.

    Args:
        terrain: Terrain to update
        settings: Generation settings
    """
    caves = settings.caves

    for _ in range(caves.smooth_iters):
        terrain.layers[terrain.foreground.kind] = smooth(terrain.foreground, caves.convert_min)

    solid = int(np.count_nonzero(terrain.foreground.occupancy()))
    logger.debug(f"{caves.smooth_iters} smoothing iterations, {solid} solid cells remain")
