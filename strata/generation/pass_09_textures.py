"""
Strata - Pass 09: Texture Resolution
Resolves the auto-tile offset of every non-empty foreground and background
cell from its neighbour mask.
"""

from strata.config import GenerationSettings
from strata.models.terrain import Terrain


def execute(terrain: Terrain, settings: GenerationSettings):
    terrain.foreground.resolve_textures()
    terrain.background.resolve_textures()
