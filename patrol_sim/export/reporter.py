"""Summary report generation for the guard patrol simulation."""

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import PatrolResult, SweepResult
    from ..config import PatrolConfig


class Reporter:
    """Generates a formatted text report of a patrol and its sweep."""

    def __init__(self, layout_path: str, width: int, height: int):
        self.layout_path = layout_path
        self.width = width
        self.height = height

    def generate_summary(self, patrol: "PatrolResult",
                         sweep: "SweepResult",
                         config: "PatrolConfig") -> str:
        """Returns formatted text report."""
        total_cells = self.width * self.height
        coverage = patrol.unique_cells / total_cells * 100 if total_cells else 0
        loop_pct = (sweep.loop_count / sweep.tested * 100
                    if sweep.tested else 0)
        out_dir: Path = config.out_dir

        lines = [
            "",
            "=" * 80,
            "                    GUARD PATROL SIMULATION REPORT",
            "=" * 80,
            f"Layout:      {self.layout_path}",
            f"Grid:        {self.width}x{self.height}",
            f"Exit margin: {config.simulation.exit_margin}",
            "",
            "UNOBSTRUCTED PATROL",
            "-" * 40,
            f"Outcome:               {patrol.outcome.value}",
            f"Moves:                 {patrol.moves}",
            f"Rotations:             {patrol.rotations}",
            f"Unique Cells Visited:  {patrol.unique_cells} "
            f"({coverage:.1f}% of grid)",
            "",
            "OBSTACLE SWEEP",
            "-" * 40,
            f"Candidates Tested:     {sweep.tested}"
            f"{' (pruned to path)' if config.sweep.prune_to_path else ''}",
            f"Loop Placements:       {sweep.loop_count} ({loop_pct:.1f}%)",
            f"Workers:               {config.sweep.workers}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if config.export.csv:
            lines.append(f"CSV Log:    {out_dir / 'sweep_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if config.export.snapshot:
            lines.append(f"Snapshot:   {out_dir / 'patrol.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if config.export.gif:
            lines.append(f"Animation:  {out_dir / 'patrol.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
