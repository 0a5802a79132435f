"""State dataclasses for the guard patrol simulation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .guard import Direction


class PatrolOutcome(Enum):
    """How a patrol terminated."""
    EXIT = "exit"
    LOOP = "loop"


@dataclass(frozen=True)
class GuardState:
    """Immutable pose of the guard; the loop-detection key."""
    position: Tuple[int, int]
    direction: "Direction"

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]


@dataclass
class PatrolResult:
    """Complete record of one simulator run."""
    outcome: PatrolOutcome
    moves: int
    rotations: int
    unique_cells: int
    final_state: GuardState

    @property
    def looped(self) -> bool:
        return self.outcome is PatrolOutcome.LOOP


@dataclass
class SweepState:
    """Mutable per-iteration record of the obstacle sweep."""
    candidate: Tuple[int, int] = (0, 0)
    loop_count: int = 0
    tested: int = 0

    def record(self, candidate: Tuple[int, int],
               outcome: PatrolOutcome) -> None:
        self.candidate = candidate
        self.tested += 1
        if outcome is PatrolOutcome.LOOP:
            self.loop_count += 1


@dataclass(frozen=True)
class CandidateOutcome:
    """Result of one sweep iteration."""
    x: int
    y: int
    outcome: PatrolOutcome
    moves: int


@dataclass
class SweepResult:
    """Summary of a full obstacle sweep."""
    loop_count: int
    tested: int
    outcomes: List[CandidateOutcome] = field(default_factory=list)

    @property
    def loop_positions(self) -> List[Tuple[int, int]]:
        return [(o.x, o.y) for o in self.outcomes
                if o.outcome is PatrolOutcome.LOOP]

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "x": o.x,
                "y": o.y,
                "outcome": o.outcome.value,
                "moves": o.moves,
            }
            for o in self.outcomes
        ]
