"""Grid map management for the guard patrol simulation."""

from enum import Enum
from typing import List, Tuple

import numpy as np


class OutOfBoundsError(IndexError):
    """Raised when a cell outside the grid dimensions is read or written."""


class CellMarker(Enum):
    """Combined view of a cell, derived from the obstacle and visit layers."""
    OPEN = "."
    VISITED = "X"
    REVISITED = "0"
    OBSTACLE = "#"
    CANDIDATE = "@"

    @property
    def blocks(self) -> bool:
        return self in (CellMarker.OBSTACLE, CellMarker.CANDIDATE)


class VisitState(Enum):
    UNVISITED = 0
    VISITED = 1


# Obstacle layer values
NO_OBSTACLE = 0
PERMANENT = 1
HYPOTHETICAL = 2


class PatrolGrid:
    """
    Manages the 2D patrol area as two orthogonal data layers.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    y grows downwards, matching the row order of the layout text.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

        # 0 = open, 1 = permanent obstacle, 2 = hypothetical obstacle
        self.obstacles = np.zeros((height, width), dtype=np.uint8)

        # Visit count per cell, capped at 2 (revisits are for rendering only)
        self.visits = np.zeros((height, width), dtype=np.uint8)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.width, self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(
                f"Cell ({x}, {y}) outside {self.width}x{self.height} grid"
            )

    def contains(self, x: int, y: int, margin: int = 0) -> bool:
        """
        Check if a position lies inside the patrol area.

        ``margin`` reserves cells on the low side of both axes: with
        margin=1 the first row and column count as outside.
        """
        return margin <= x < self.width and margin <= y < self.height

    def read(self, x: int, y: int) -> CellMarker:
        """Return the combined marker of a cell."""
        self._check_bounds(x, y)
        obstacle = self.obstacles[y, x]
        if obstacle == PERMANENT:
            return CellMarker.OBSTACLE
        if obstacle == HYPOTHETICAL:
            return CellMarker.CANDIDATE
        visits = self.visits[y, x]
        if visits >= 2:
            return CellMarker.REVISITED
        if visits == 1:
            return CellMarker.VISITED
        return CellMarker.OPEN

    def write(self, x: int, y: int, marker: CellMarker) -> None:
        """Overwrite a cell with the given marker."""
        self._check_bounds(x, y)
        if marker is CellMarker.OBSTACLE:
            self.obstacles[y, x] = PERMANENT
            self.visits[y, x] = 0
        elif marker is CellMarker.CANDIDATE:
            self.obstacles[y, x] = HYPOTHETICAL
            self.visits[y, x] = 0
        else:
            self.obstacles[y, x] = NO_OBSTACLE
            self.visits[y, x] = {
                CellMarker.OPEN: 0,
                CellMarker.VISITED: 1,
                CellMarker.REVISITED: 2,
            }[marker]

    def is_blocked(self, x: int, y: int) -> bool:
        """Check if cell holds a permanent or hypothetical obstacle."""
        self._check_bounds(x, y)
        return self.obstacles[y, x] != NO_OBSTACLE

    def is_permanent_obstacle(self, x: int, y: int) -> bool:
        self._check_bounds(x, y)
        return self.obstacles[y, x] == PERMANENT

    def visit_state(self, x: int, y: int) -> VisitState:
        self._check_bounds(x, y)
        if self.visits[y, x]:
            return VisitState.VISITED
        return VisitState.UNVISITED

    def mark_visited(self, x: int, y: int) -> bool:
        """
        Promote a cell: open -> visited -> revisited.

        Returns True if the cell was previously unvisited.
        """
        self._check_bounds(x, y)
        first = self.visits[y, x] == 0
        if self.visits[y, x] < 2:
            self.visits[y, x] += 1
        return bool(first)

    def place_candidate(self, x: int, y: int) -> None:
        """Install the single hypothetical obstacle of a sweep iteration."""
        self.write(x, y, CellMarker.CANDIDATE)

    def visited_mask(self) -> np.ndarray:
        """Boolean mask of all cells the guard has stood on."""
        return self.visits > 0

    def unique_visited(self) -> int:
        return int(np.count_nonzero(self.visits))

    def clear_visits(self) -> None:
        self.visits[:] = 0

    def copy(self) -> "PatrolGrid":
        """Return an independent working copy of both layers."""
        clone = PatrolGrid(self.width, self.height)
        clone.obstacles = self.obstacles.copy()
        clone.visits = self.visits.copy()
        return clone

    def same_layout(self, other: "PatrolGrid") -> bool:
        """Check if two grids have identical obstacle layers."""
        return (self.shape == other.shape and
                bool(np.array_equal(self.obstacles, other.obstacles)))

    def to_rows(self) -> List[str]:
        """Render the combined markers as one string per row."""
        return [
            "".join(self.read(x, y).value for x in range(self.width))
            for y in range(self.height)
        ]
