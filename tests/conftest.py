"""
Shared fixtures for the Strata test suite.

Unit tests use hand-built terrains whose layers start out empty; pipeline
tests share one small generated world.
"""

import pytest

from strata.config import TileId
from strata.generation.pipeline import generate
from strata.models.terrain import Terrain
from strata.models.tiles import Tile

TEST_SEED = "strata test seed"


def blank_terrain(width: int = 10, height: int = 10, seed: str = "blank") -> Terrain:
    """Terrain with every layer filled with EMPTY and nothing generated"""
    terrain = Terrain(seed, width, height)
    for layer in terrain.layers:
        layer.fill(TileId.EMPTY)
    return terrain


def lay_floor(terrain: Terrain, y: int = 0, tile_id: TileId = TileId.STONE) -> None:
    """Fill row y of the foreground and rederive walkability"""
    for x in range(terrain.width):
        terrain.foreground.set(x, y, Tile(tile_id))
    terrain.foreground.resolve_textures()
    terrain.walkability.derive(terrain.foreground)


@pytest.fixture
def terrain():
    """Empty 10x10 terrain"""
    return blank_terrain()


@pytest.fixture
def floored_terrain():
    """Empty 10x10 terrain with a stone floor on row 0"""
    terrain = blank_terrain()
    lay_floor(terrain)
    return terrain


@pytest.fixture(scope="session")
def generated():
    """64x64 forest world, shared across tests (do not mutate)"""
    return generate(TEST_SEED, 64, 64)


@pytest.fixture
def fresh_generated():
    """64x64 forest world that tests may edit"""
    return generate(TEST_SEED, 64, 64)


