"""Visualization and export for the guard patrol simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING
from PIL import Image
import io

from ..model.grid import HYPOTHETICAL, PERMANENT

if TYPE_CHECKING:
    from ..model.grid import PatrolGrid
    from ..model.state import GuardState


# Marker drawn for the guard, by facing
_GUARD_MARKERS = {
    'UP': '^',
    'DOWN': 'v',
    'LEFT': '<',
    'RIGHT': '>',
}


class Visualizer:
    """
    Generates visual outputs of a patrol using matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'obstacle': '#2C3E50',   # Dark blue-gray
        'floor': '#ECF0F1',      # Light gray
        'visited': '#E74C3C',    # Red
        'revisited': '#27AE60',  # Green
        'candidate': '#3498DB',  # Blue
        'guard': '#F39C12',      # Orange
    }

    def __init__(self, grid_width: int, grid_height: int):
        self.width = grid_width
        self.height = grid_height
        self.frames: List[Image.Image] = []

    def _base_image(self, grid: "PatrolGrid") -> np.ndarray:
        """Build the RGB cell image from the obstacle and visit layers."""
        base = np.ones((self.height, self.width, 3))
        base[:, :] = to_rgb(self.COLORS['floor'])
        base[grid.visits == 1] = to_rgb(self.COLORS['visited'])
        base[grid.visits >= 2] = to_rgb(self.COLORS['revisited'])
        base[grid.obstacles == PERMANENT] = to_rgb(self.COLORS['obstacle'])
        base[grid.obstacles == HYPOTHETICAL] = to_rgb(self.COLORS['candidate'])
        return base

    def _create_figure(self, grid: "PatrolGrid",
                       guard: Optional["GuardState"] = None,
                       title: str = "") -> plt.Figure:
        """Create matplotlib figure for grid visualization."""
        # Determine figure size based on grid aspect ratio
        aspect = self.width / self.height
        fig_height = 6
        fig_width = max(6, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Row 0 of the layout is drawn at the top
        ax.imshow(self._base_image(grid), origin='upper', aspect='equal',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        if guard is not None:
            ax.plot(guard.x, guard.y, _GUARD_MARKERS[guard.direction.name],
                    color=self.COLORS['guard'], markersize=8,
                    markeredgecolor='black', markeredgewidth=0.5)

        ax.set_title(title or f'Visited cells: {grid.unique_visited()}')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        # Legend
        legend_elements = [
            plt.Line2D([0], [0], marker='s', color='w', label='Visited',
                       markerfacecolor=self.COLORS['visited'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Revisited',
                       markerfacecolor=self.COLORS['revisited'], markersize=8),
            plt.Line2D([0], [0], marker='s', color='w', label='Obstacle',
                       markerfacecolor=self.COLORS['obstacle'], markersize=8),
        ]
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, grid: "PatrolGrid",
                     guard: Optional["GuardState"] = None,
                     title: str = "") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(grid, guard, title)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, grid: "PatrolGrid", output_path: Path,
                      guard: Optional["GuardState"] = None,
                      title: str = "") -> None:
        """Save single PNG image of the grid."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(grid, guard, title)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
