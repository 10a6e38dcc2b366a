"""
Strata - Pass 06: Middle Layer Reset
"""

from strata.config import GenerationSettings, TileId
from strata.models.terrain import Terrain


def execute(terrain: Terrain, settings: GenerationSettings):
    terrain.middle.fill(TileId.EMPTY)
