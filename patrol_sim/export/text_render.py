"""ANSI text rendering of a patrol grid."""

from typing import TYPE_CHECKING

from ..model.grid import CellMarker

if TYPE_CHECKING:
    from ..model.grid import PatrolGrid

RESET = "\033[0m"

MARKER_COLORS = {
    CellMarker.VISITED: "\033[31m",    # red
    CellMarker.REVISITED: "\033[32m",  # green
    CellMarker.CANDIDATE: "\033[94m",  # bright blue
}


def render_text(grid: "PatrolGrid", color: bool = True) -> str:
    """
    Render the grid as text, one row per line.

    Markers are derived from the grid layers and never written back.
    """
    lines = []
    for y in range(grid.height):
        cells = []
        for x in range(grid.width):
            marker = grid.read(x, y)
            code = MARKER_COLORS.get(marker) if color else None
            if code:
                cells.append(f"{code}{marker.value}{RESET}")
            else:
                cells.append(marker.value)
        lines.append("".join(cells))
    return "\n".join(lines)
