"""
Strata - Walkability grid
Derived from the foreground layer: a cell is walkable when it is a solid
floor with HEADROOM empty (or off-grid) cells directly above it.
"""

from enum import IntEnum
from typing import Optional

import numpy as np

from strata.config import HEADROOM
from strata.models.layer import Layer


class PathTile(IntEnum):
    NON_WALKABLE = 0
    WALKABLE = 1


class WalkabilityGrid:
    """Boolean walkability per cell, same extents as the layers"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.cells = np.zeros((width, height), dtype=bool)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[PathTile]:
        """PathTile at (x, y), or None when out of range"""
        if not self.in_bounds(x, y):
            return None
        return PathTile.WALKABLE if self.cells[x, y] else PathTile.NON_WALKABLE

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and bool(self.cells[x, y])

    def set(self, x: int, y: int, walkable: bool) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} grid")
        self.cells[x, y] = walkable

    @staticmethod
    def cell_walkable(foreground: Layer, x: int, y: int) -> bool:
        if not foreground.is_occupied(x, y):
            return False
        return all(
            foreground.is_empty_or_absent(x, y + h) for h in range(1, HEADROOM + 1)
        )

    def derive(self, foreground: Layer) -> None:
        """Recompute every cell from the foreground layer"""
        solid = foreground.occupancy()
        walkable = solid.copy()

        # Cells beyond the top edge are absent and count as clear
        for h in range(1, HEADROOM + 1):
            if h >= self.height:
                break
            walkable[:, : self.height - h] &= ~solid[:, h:]

        self.cells[...] = walkable

    def refresh_below(self, foreground: Layer, x: int, y: int) -> None:
        """
        Recompute (x, y) and the HEADROOM cells beneath it, i.e. every cell
        whose walkability can depend on the foreground cell at (x, y).
        """
        for y2 in range(y - HEADROOM, y + 1):
            if self.in_bounds(x, y2):
                self.cells[x, y2] = self.cell_walkable(foreground, x, y2)

    def count(self) -> int:
        return int(self.cells.sum())
