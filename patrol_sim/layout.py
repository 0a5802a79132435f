"""Layout parsing for the guard patrol simulation."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .model.grid import CellMarker, PatrolGrid
from .model.guard import GUARD_CHARS, Direction
from .model.state import GuardState

OPEN_CHAR = "."
OBSTACLE_CHAR = "#"


class MalformedLayoutError(ValueError):
    """Raised when the layout text cannot describe a valid patrol."""


@dataclass
class Layout:
    """Parsed input: the pristine grid and the guard's start pose."""
    grid: PatrolGrid
    start: GuardState

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height


def _split_rows(text: str) -> List[str]:
    rows = text.splitlines()
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def parse_layout(text: str) -> Layout:
    """
    Parse layout text into a grid and start pose.

    Rows must have equal length and use only ``. # ^ v < >``; exactly one
    guard character is allowed. The guard's cell becomes open ground.
    """
    rows = _split_rows(text)
    if not rows:
        raise MalformedLayoutError("Layout is empty")

    width = len(rows[0])
    if width == 0:
        raise MalformedLayoutError("Layout rows are empty")
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedLayoutError(
                f"Row {y} has length {len(row)}, expected {width}"
            )

    grid = PatrolGrid(width, len(rows))
    guards: List[Tuple[int, int, str]] = []

    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == OBSTACLE_CHAR:
                grid.write(x, y, CellMarker.OBSTACLE)
            elif char in GUARD_CHARS:
                guards.append((x, y, char))
            elif char != OPEN_CHAR:
                raise MalformedLayoutError(
                    f"Unknown character {char!r} at ({x}, {y})"
                )

    if not guards:
        raise MalformedLayoutError("No guard found in layout")
    if len(guards) > 1:
        found = ", ".join(f"({x}, {y})" for x, y, _ in guards)
        raise MalformedLayoutError(f"Multiple guards found at {found}")

    x, y, char = guards[0]
    return Layout(grid=grid,
                  start=GuardState((x, y), Direction.from_char(char)))


def load_layout(layout_path: Path) -> Layout:
    """Read and parse a layout file."""
    with open(layout_path, encoding="utf-8") as f:
        return parse_layout(f.read())
