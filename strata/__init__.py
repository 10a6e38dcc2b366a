"""
Strata
Seeded 2D layered tile terrain: generation, auto-tiling, point edits and
A* path planning over the derived walkability grid.
"""

from strata.config import FOREST, GenerationSettings, LayerKind, TileId, get_preset
from strata.errors import (
    ConfigurationError,
    FootprintError,
    GenerationError,
    StrataError,
    TileCatalogError,
)
from strata.models.terrain import Terrain, TerrainMetadata

__version__ = "0.1.0"

__all__ = [
    "FOREST",
    "GenerationSettings",
    "LayerKind",
    "TileId",
    "get_preset",
    "ConfigurationError",
    "FootprintError",
    "GenerationError",
    "StrataError",
    "TileCatalogError",
    "Terrain",
    "TerrainMetadata",
]
