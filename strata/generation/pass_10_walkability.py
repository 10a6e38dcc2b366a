"""
Strata - Pass 10: Walkability
Derives the walkability grid from the finished foreground.
"""

import logging

from strata.config import GenerationSettings
from strata.models.terrain import Terrain

logger = logging.getLogger(__name__)


def execute(terrain: Terrain, settings: GenerationSettings):
    terrain.walkability.derive(terrain.foreground)
    logger.debug(f"{terrain.walkability.count()} walkable cells")
