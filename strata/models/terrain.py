"""
Strata - Terrain Data Models
The terrain state container: three tile layers, the derived walkability
grid, the noise fields and generation metadata.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID, uuid4

import numpy as np
from pydantic import BaseModel, Field

from strata import editing, pathfinding
from strata.catalog import descriptor
from strata.config import (
    DEFAULT_SEED,
    DEFAULT_SIZE,
    FOREST,
    PASS_SEED_OFFSETS,
    GenerationSettings,
    LayerKind,
    TerrainStatus,
    TileId,
)
from strata.errors import ConfigurationError
from strata.models.layer import Layer
from strata.models.tiles import Offset, Tile
from strata.models.walkability import WalkabilityGrid
from strata.utils.noise import NoiseField, seed_to_int

GridPos = Tuple[int, int]


# =============================================================================
# TERRAIN METADATA
# =============================================================================

class TerrainMetadata(BaseModel):
    """
    Generation bookkeeping for one terrain.
    Tracks progress, per-pass timings and failure details.
    """
    terrain_id: UUID = Field(default_factory=uuid4)
    seed: str
    width: int
    height: int
    generation_params: Dict[str, Any]
    status: TerrainStatus = TerrainStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    completed_at: Optional[datetime] = None
    current_pass: Optional[str] = None
    progress_percent: float = 0.0
    pass_timings: Dict[str, float] = Field(default_factory=dict)
    error_message: Optional[str] = None

    class Config:
        use_enum_values = True


# =============================================================================
# TERRAIN
# =============================================================================

class Terrain:
    """
    Complete terrain state.

    Constructed once, populated by generate(), then changed only through
    insert() and remove(), which keep textures and walkability in step with
    the foreground layer.
    """

    def __init__(
        self,
        seed: Optional[str] = None,
        width: int = DEFAULT_SIZE[0],
        height: int = DEFAULT_SIZE[1],
        settings: Optional[GenerationSettings] = None,
    ):
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Terrain size must be positive, got {width}x{height}")

        self.seed = seed if seed is not None else DEFAULT_SEED
        self.seed_value = seed_to_int(self.seed)
        self.width = width
        self.height = height
        self.settings = settings if settings is not None else FOREST.model_copy(deep=True)

        surface = self.settings.surface
        self.noise = NoiseField(
            self.seed,
            octaves=surface.octaves,
            persistence=surface.persistence,
            lacunarity=surface.lacunarity,
        )

        self.layers: List[Layer] = [Layer(width, height, kind) for kind in LayerKind]
        self.walkability = WalkabilityGrid(width, height)

        self.metadata = TerrainMetadata(
            seed=self.seed,
            width=width,
            height=height,
            generation_params=self.settings.model_dump(),
        )

    # -------------------------------------------------------------------------
    # Layer access
    # -------------------------------------------------------------------------

    def layer(self, kind: LayerKind) -> Layer:
        return self.layers[kind]

    @property
    def foreground(self) -> Layer:
        return self.layers[LayerKind.FOREGROUND]

    @property
    def middle(self) -> Layer:
        return self.layers[LayerKind.MIDDLE]

    @property
    def background(self) -> Layer:
        return self.layers[LayerKind.BACKGROUND]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def rng(self, pass_name: str) -> np.random.Generator:
        """Random stream reserved for one generation pass"""
        return np.random.default_rng(self.seed_value + PASS_SEED_OFFSETS[pass_name])

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(
        self,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ) -> "Terrain":
        """Populate every layer and the walkability grid in one pass"""
        from strata.generation.pipeline import create_pipeline

        create_pipeline(self, progress_callback).generate()
        return self

    @property
    def is_generated(self) -> bool:
        return self.metadata.status == TerrainStatus.READY

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def insert(
        self,
        pos: GridPos,
        identity: TileId,
        layer: LayerKind = LayerKind.FOREGROUND,
        sub_offset: Optional[Offset] = None,
    ) -> bool:
        return editing.insert_tile(self, pos, identity, layer, sub_offset)

    def remove(self, pos: GridPos, layer: LayerKind = LayerKind.FOREGROUND) -> Optional[Tile]:
        return editing.remove_tile(self, pos, layer)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find_path(
        self,
        start: GridPos,
        goal: GridPos,
        max_expansions: Optional[int] = None,
    ) -> Optional[List[GridPos]]:
        return pathfinding.find_path(self.walkability, start, goal, max_expansions)

    def is_solid(self, x: int, y: int) -> bool:
        """Foreground occupancy, for collision hosts"""
        return self.foreground.is_occupied(x, y)

    def is_walkable(self, x: int, y: int) -> bool:
        return self.walkability.is_walkable(x, y)

    def texture_index(self, kind: LayerKind, x: int, y: int) -> Optional[int]:
        return self.layers[kind].texture_index(x, y)

    def tobytes(self) -> bytes:
        """Byte snapshot of all layers and the walkability grid"""
        return b"".join(layer.tobytes() for layer in self.layers) + self.walkability.cells.tobytes()

    def to_ascii(self, kind: Optional[LayerKind] = None) -> str:
        """
        Text dump of the terrain, top row first.

        Args:
            kind: Layer to draw. None draws the foreground over the middle
                  over the background.
        """
        kinds = [kind] if kind is not None else list(LayerKind)
        rows = []

        for y in range(self.height - 1, -1, -1):
            row = []
            for x in range(self.width):
                glyph = " "
                for layer_kind in kinds:
                    tile_id = self.layers[layer_kind].tile_id(x, y)
                    if tile_id != TileId.EMPTY:
                        glyph = descriptor(tile_id).glyph
                        break
                row.append(glyph)
            rows.append("".join(row))

        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"<Terrain seed={self.seed!r} {self.width}x{self.height} {self.metadata.status}>"
