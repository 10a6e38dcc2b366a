"""
Strata - Configuration and Constants
Contains tile identities, layer kinds, global constants and the generation
settings models (plus the FOREST preset).
"""

from enum import Enum, IntEnum
from typing import Dict, Tuple

from pydantic import BaseModel, Field, model_validator

# =============================================================================
# WORLD DEFAULTS
# =============================================================================

DEFAULT_SEED = "Delpha 7"
DEFAULT_SIZE = (128, 128)

# =============================================================================
# TEXTURE ATLAS
# =============================================================================

# Every tileset image is a grid of 22x16 cells
ATLAS_WIDTH = 22
ATLAS_HEIGHT = 16

# =============================================================================
# PATHFINDING
# =============================================================================

HEADROOM = 3  # Empty cells required above a walkable floor

STRAIGHT_COST = 10
DIAGONAL_COST = 14

# =============================================================================
# ENUMERATIONS
# =============================================================================


class TerrainStatus(str, Enum):
    """Terrain generation status"""
    PENDING = "pending"
    GENERATING = "generating"
    READY = "ready"
    FAILED = "failed"


class LayerKind(IntEnum):
    """Tile layers, front to back"""
    FOREGROUND = 0
    MIDDLE = 1
    BACKGROUND = 2


class TileCategory(IntEnum):
    """Variant group of a tile identity"""
    NULL = 0
    EMPTY = 1
    GROUND = 2
    ORE = 3
    BACKGROUND = 4
    SURFACE_DECOR = 5
    TREE = 6


class TileId(IntEnum):
    """Identity of a tile. Grouped by TileCategory (see catalog)"""
    NULL = 0    # Uninitialized, never present after generation
    EMPTY = 1

    # Ground
    GRASS = 10
    DIRT = 11
    STONE = 12

    # Ore
    IRON_ORE = 20
    GOLD_ORE = 21

    # Background
    BACKGROUND_DIRT = 30
    BACKGROUND_STONE = 31

    # Surface decor
    GRASS_SHORT = 40
    GRASS_TALL = 41
    FLOWER_RED = 42
    FLOWER_YELLOW = 43
    MUSHROOM = 44
    BUSH = 45
    BOULDER = 46

    # Trees
    TREE_WOOD = 50
    TREE_FOLIAGE = 51


# =============================================================================
# PASS CONFIGURATION
# =============================================================================

GENERATION_PASSES = [
    "pass_01_surface",
    "pass_02_smoothing",
    "pass_03_strata",
    "pass_04_ores",
    "pass_05_grass",
    "pass_06_middle",
    "pass_07_trees",
    "pass_08_decor",
    "pass_09_textures",
    "pass_10_walkability",
]

# Pass weights for progress calculation
PASS_WEIGHTS = {
    "pass_01_surface": 10,
    "pass_02_smoothing": 8,
    "pass_03_strata": 3,
    "pass_04_ores": 4,
    "pass_05_grass": 1,
    "pass_06_middle": 1,
    "pass_07_trees": 3,
    "pass_08_decor": 3,
    "pass_09_textures": 5,
    "pass_10_walkability": 2,
}

# Seeds for the per-pass random streams are offset from the world seed
PASS_SEED_OFFSETS = {
    "pass_03_strata": 3000,
    "pass_04_ores": 4000,
    "pass_07_trees": 7000,
    "pass_08_decor": 8000,
}

# Noise row sampled for stratification, kept apart from the surface row (0.0)
DIRT_NOISE_ROW = 5.0

# =============================================================================
# GENERATION PARAMETERS
# =============================================================================


def _check_range(value: Tuple[int, int], name: str) -> None:
    lo, hi = value
    if lo >= hi:
        raise ValueError(f"{name} must be a non-empty [lo, hi) range, got {value}")


class SurfaceSettings(BaseModel):
    """Fractal noise used for the surface line and the dirt line"""
    scale: float = Field(6.0, gt=0.0, description="Noise units spanned by the world width")
    amplitude: float = Field(24.0, ge=0.0, description="Height variation in cells")
    persistence: float = Field(0.5, gt=0.0, le=1.0, description="Amplitude multiplier per octave")
    lacunarity: float = Field(2.0, gt=0.0, description="Frequency multiplier per octave")
    octaves: int = Field(6, ge=1, le=12, description="Number of octaves")
    height_offset: float = Field(
        0.75, ge=0.0, le=1.0,
        description="Base surface height as a fraction of world height",
    )


class CaveSettings(BaseModel):
    """Cave carving and cellular automaton smoothing"""
    solid_density: float = Field(0.1, ge=-1.0, le=1.0, description="Value noise threshold for solid cells")
    smooth_iters: int = Field(4, ge=0, description="Smoothing passes")
    convert_min: int = Field(4, ge=0, le=9, description="Solid neighbours required to stay/become solid")
    falloff: float = Field(2.3, description="How fast the threshold drops towards the surface")


class TreeSettings(BaseModel):
    spawn_rate: float = Field(0.15, ge=0.0, le=1.0, description="Chance to attempt a tree per column")
    trunk_height_range: Tuple[int, int] = Field((3, 7), description="[lo, hi) trunk height")
    trunk_variants: int = Field(3, ge=1, description="Number of trunk textures")

    @model_validator(mode="after")
    def check_trunk_range(self) -> "TreeSettings":
        _check_range(self.trunk_height_range, "trunk_height_range")
        if self.trunk_height_range[0] < 1:
            raise ValueError("trunk_height_range must start at 1 or more")
        return self


class DecorSettings(BaseModel):
    surface_rate: float = Field(0.4, ge=0.0, le=1.0, description="Chance to attempt decor per column")
    surface_range: Tuple[int, int] = Field((0, 7), description="[lo, hi) index range into SURFACE_DECOR")

    @model_validator(mode="after")
    def check_surface_range(self) -> "DecorSettings":
        _check_range(self.surface_range, "surface_range")
        if self.surface_range[0] < 0:
            raise ValueError("surface_range cannot start below 0")
        return self


class GenerationSettings(BaseModel):
    """
    Input parameters for terrain generation.
    Values describe a single biome; FOREST is the only shipped preset.
    """
    surface: SurfaceSettings = Field(default_factory=SurfaceSettings)
    caves: CaveSettings = Field(default_factory=CaveSettings)
    trees: TreeSettings = Field(default_factory=TreeSettings)
    decor: DecorSettings = Field(default_factory=DecorSettings)

    dirt_height: float = Field(0.6, ge=0.0, le=1.0, description="Dirt line as a fraction of world height")
    stone_jitter: int = Field(3, ge=0, description="Random jitter added to the dirt line")
    background_offset: int = Field(4, ge=0, description="Cells the background sits below the surface")
    ore_height: float = Field(0.6, gt=0.0, le=1.0, description="Fraction of the world (from the bottom) ores can reach")
    ore_rate: int = Field(4, ge=1, description="One ore trial per this many columns")


FOREST = GenerationSettings(
    surface=SurfaceSettings(
        scale=6.0,
        amplitude=24.0,
        persistence=0.5,
        lacunarity=2.0,
        octaves=6,
        height_offset=0.75,
    ),
    caves=CaveSettings(
        solid_density=0.1,
        smooth_iters=4,
        convert_min=4,
        falloff=2.3,
    ),
    trees=TreeSettings(
        spawn_rate=0.15,
        trunk_height_range=(3, 7),
        trunk_variants=3,
    ),
    decor=DecorSettings(
        surface_rate=0.4,
        surface_range=(0, 7),
    ),
    dirt_height=0.6,
    stone_jitter=3,
    background_offset=4,
    ore_height=0.6,
    ore_rate=4,
)

PRESETS: Dict[str, GenerationSettings] = {
    "forest": FOREST,
}


def get_preset(name: str) -> GenerationSettings:
    """Return a copy of a named preset"""
    try:
        preset = PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown preset: {name}") from None
    return preset.model_copy(deep=True)
