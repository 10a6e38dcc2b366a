"""
Pathfinding Module
A* path planning over the walkability grid
"""

from typing import Optional, List, Tuple, Dict, Set
from dataclasses import dataclass
import heapq
import itertools
import math
import logging

from strata.config import STRAIGHT_COST, DIAGONAL_COST
from strata.models.walkability import WalkabilityGrid

logger = logging.getLogger(__name__)

GridPos = Tuple[int, int]


@dataclass
class PathNode:
    """Node in the search graph, owned by a single query"""
    x: int
    y: int
    g_cost: int  # Cost from start
    h_cost: float  # Heuristic cost to goal
    parent: Optional['PathNode'] = None

    @property
    def f_cost(self) -> float:
        """Total cost (g + h)"""
        return self.g_cost + self.h_cost

    @property
    def pos(self) -> GridPos:
        return (self.x, self.y)


def step_cost(from_pos: GridPos, to_pos: GridPos) -> int:
    """Cost of one move between adjacent cells"""
    dx = abs(to_pos[0] - from_pos[0])
    dy = abs(to_pos[1] - from_pos[1])
    return DIAGONAL_COST if dx and dy else STRAIGHT_COST


def path_cost(path: List[GridPos]) -> int:
    """Sum of step costs along a path"""
    return sum(step_cost(a, b) for a, b in zip(path, path[1:]))


class AStarPathfinder:
    """
    A* over walkable cells with 8-directional movement.

    Ties on f are broken by insertion order: the open set is a heap keyed by
    (f, sequence), so the entry pushed first is expanded first.
    """

    def __init__(self, walkability: WalkabilityGrid):
        """
        Initialize pathfinder.

        Args:
            walkability: Grid queried for passable cells
        """
        self.walkability = walkability

    def find_path(
        self,
        start: GridPos,
        goal: GridPos,
        max_expansions: Optional[int] = None,
    ) -> Optional[List[GridPos]]:
        """
        Find a path from start to goal.

        Args:
            start: Starting (x, y) cell
            goal: Destination (x, y) cell
            max_expansions: Give up after expanding this many nodes

        Returns:
            List of (x, y) cells from start to goal inclusive, or None when
            an endpoint is not walkable, no route exists or the cap is hit
        """
        if not self.walkability.is_walkable(*start) or not self.walkability.is_walkable(*goal):
            return None

        sequence = itertools.count()
        start_node = PathNode(start[0], start[1], 0, self._heuristic(start, goal))

        open_set: List[Tuple[float, int, PathNode]] = [(start_node.f_cost, next(sequence), start_node)]
        closed_set: Set[GridPos] = set()
        best_g: Dict[GridPos, int] = {start: 0}

        expansions = 0
        while open_set:
            _, _, current = heapq.heappop(open_set)

            # Superseded by a cheaper entry for the same cell
            if current.pos in closed_set:
                continue

            if current.pos == goal:
                return self._reconstruct_path(current)

            if max_expansions is not None and expansions >= max_expansions:
                logger.debug(f"Path search {start} -> {goal} stopped after {expansions} expansions")
                return None
            expansions += 1

            closed_set.add(current.pos)

            for neighbor_pos in self._get_neighbors(current.x, current.y):
                if neighbor_pos in closed_set:
                    continue
                if not self.walkability.is_walkable(*neighbor_pos):
                    continue

                tentative_g = current.g_cost + step_cost(current.pos, neighbor_pos)
                if tentative_g >= best_g.get(neighbor_pos, math.inf):
                    continue

                best_g[neighbor_pos] = tentative_g
                neighbor = PathNode(
                    x=neighbor_pos[0],
                    y=neighbor_pos[1],
                    g_cost=tentative_g,
                    h_cost=self._heuristic(neighbor_pos, goal),
                    parent=current,
                )
                heapq.heappush(open_set, (neighbor.f_cost, next(sequence), neighbor))

        return None  # No path found

    def _heuristic(self, pos: GridPos, goal: GridPos) -> float:
        """Euclidean distance heuristic"""
        return math.sqrt((pos[0] - goal[0])**2 + (pos[1] - goal[1])**2)

    def _get_neighbors(self, x: int, y: int) -> List[GridPos]:
        """Neighbor positions in fixed order, dx outer and dy inner"""
        neighbors = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                neighbors.append((x + dx, y + dy))
        return neighbors

    def _reconstruct_path(self, end_node: PathNode) -> List[GridPos]:
        """Reconstruct path from end node back to start"""
        path = []
        current = end_node
        while current is not None:
            path.append(current.pos)
            current = current.parent
        path.reverse()
        return path


def find_path(
    walkability: WalkabilityGrid,
    start: GridPos,
    goal: GridPos,
    max_expansions: Optional[int] = None,
) -> Optional[List[GridPos]]:
    """Convenience wrapper around AStarPathfinder"""
    return AStarPathfinder(walkability).find_path(start, goal, max_expansions)
