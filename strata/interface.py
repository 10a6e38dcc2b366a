"""
Terrain Interface
Bridge between a host application (renderer, physics, entities) and the
terrain data. Answers per-cell queries and path requests in grid space.
"""

from typing import Optional, List, Tuple
from dataclasses import dataclass

from strata.catalog import descriptor
from strata.config import LayerKind, TileId
from strata.models.terrain import Terrain
from strata.pathfinding import AStarPathfinder, path_cost


@dataclass
class CellData:
    """Everything the terrain knows about one cell"""
    x: int
    y: int

    # Tile identities per layer
    foreground: TileId
    middle: TileId
    background: TileId

    # Atlas indices, None for empty cells
    foreground_texture: Optional[int] = None
    middle_texture: Optional[int] = None
    background_texture: Optional[int] = None

    solid: bool = False
    walkable: bool = False
    hardness: int = 0


@dataclass
class PathResult:
    """Result of pathfinding between two cells"""
    success: bool
    path: List[Tuple[int, int]]  # List of (x, y) cells, empty on failure
    total_cost: int  # Sum of 10/14 step costs


class TerrainInterface:
    """
    Query surface over a generated terrain.
    """

    def __init__(self, terrain: Terrain):
        """
        Initialize terrain interface.

        Args:
            terrain: Terrain to query. Edits made through terrain.insert and
                     terrain.remove are visible immediately.
        """
        self.terrain = terrain
        self._pathfinder = AStarPathfinder(terrain.walkability)

    def query_cell(self, x: int, y: int) -> Optional[CellData]:
        """
        Get all layer data at a cell.

        Returns:
            CellData, or None if the cell is out of range
        """
        terrain = self.terrain
        if not terrain.in_bounds(x, y):
            return None

        fg_id = terrain.foreground.tile_id(x, y)

        return CellData(
            x=x,
            y=y,
            foreground=fg_id,
            middle=terrain.middle.tile_id(x, y),
            background=terrain.background.tile_id(x, y),
            foreground_texture=terrain.texture_index(LayerKind.FOREGROUND, x, y),
            middle_texture=terrain.texture_index(LayerKind.MIDDLE, x, y),
            background_texture=terrain.texture_index(LayerKind.BACKGROUND, x, y),
            solid=terrain.is_solid(x, y),
            walkable=terrain.is_walkable(x, y),
            hardness=descriptor(fg_id).hardness,
        )

    def query_radius(self, x: int, y: int, radius: int) -> List[CellData]:
        """
        Get the cells within a circular radius.

        Args:
            x: Center X cell
            y: Center Y cell
            radius: Radius in cells

        Returns:
            CellData for every in-range cell in the circle
        """
        cells = []
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                if dx*dx + dy*dy <= radius*radius:
                    cell = self.query_cell(x + dx, y + dy)
                    if cell:
                        cells.append(cell)
        return cells

    def find_path(
        self,
        start: Tuple[int, int],
        end: Tuple[int, int],
        max_expansions: Optional[int] = None,
    ) -> PathResult:
        """
        Plan a walking route between two cells.

        Args:
            start: Starting (x, y) cell
            end: Destination (x, y) cell
            max_expansions: Optional cap on search effort

        Returns:
            PathResult; success is False when no route was found
        """
        path = self._pathfinder.find_path(start, end, max_expansions)
        if path is None:
            return PathResult(success=False, path=[], total_cost=0)

        return PathResult(success=True, path=path, total_cost=path_cost(path))
