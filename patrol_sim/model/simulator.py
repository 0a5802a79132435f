"""Patrol simulator: drives the guard across the grid until Exit or Loop."""

from typing import Iterator, Optional, Set

from .grid import PatrolGrid, VisitState
from .guard import Direction, Guard
from .state import GuardState, PatrolOutcome, PatrolResult


class PatrolSimulator:
    """
    Executes the guard's walk one step at a time.

    Each step:
    1. Look at the cell ahead; outside the grid means Exit
    2. If it is blocked, rotate clockwise and look again (no move consumed)
    3. Otherwise mark the current cell visited and advance
    4. Record the new (position, direction); a repeat means Loop

    The history set lives only as long as this simulator. The grid is
    mutated (visit layer), so callers that need a pristine layout pass a copy.
    """

    def __init__(self, grid: PatrolGrid, guard: Guard, exit_margin: int = 0):
        self.grid = grid
        self.guard = guard
        self.exit_margin = exit_margin

        self.history: Set[GuardState] = set()
        self.moves = 0
        self.rotations = 0
        self.outcome: Optional[PatrolOutcome] = None

    @property
    def max_moves(self) -> int:
        """Upper bound on moves before a Loop must have been detected."""
        return self.grid.width * self.grid.height * len(Direction)

    @property
    def finished(self) -> bool:
        return self.outcome is not None

    def _finish(self, outcome: PatrolOutcome) -> PatrolOutcome:
        # The cell the guard ends on counts as visited, but only once
        x, y = self.guard.position
        if (self.grid.contains(x, y) and
                self.grid.visit_state(x, y) is VisitState.UNVISITED):
            self.grid.mark_visited(x, y)
        self.outcome = outcome
        return outcome

    def step(self) -> Optional[PatrolOutcome]:
        """
        Execute one move (plus any rotations needed before it).

        Returns the outcome once the patrol has terminated, None otherwise.
        """
        if self.outcome is not None:
            return self.outcome

        for _ in range(len(Direction)):
            x, y = self.guard.position_ahead()
            if not self.grid.contains(x, y, self.exit_margin):
                return self._finish(PatrolOutcome.EXIT)
            if not self.grid.is_blocked(x, y):
                break
            self.guard.rotate()
            self.rotations += 1
        else:
            # Boxed in on all four sides: the guard spins forever
            return self._finish(PatrolOutcome.LOOP)

        self.grid.mark_visited(*self.guard.position)
        self.guard.advance()
        self.moves += 1

        state = self.guard.state
        if state in self.history:
            return self._finish(PatrolOutcome.LOOP)
        self.history.add(state)
        return None

    def trace(self) -> Iterator[GuardState]:
        """Yield the starting pose and then the pose after every move."""
        yield self.guard.state
        while self.step() is None:
            yield self.guard.state

    def patrol(self) -> PatrolResult:
        """Run to termination and return the full record."""
        while self.step() is None:
            pass
        return PatrolResult(
            outcome=self.outcome,
            moves=self.moves,
            rotations=self.rotations,
            unique_cells=self.grid.unique_visited(),
            final_state=self.guard.state,
        )

    def run(self) -> PatrolOutcome:
        """Run to termination and return only the classification."""
        return self.patrol().outcome

    def run_counting_unique(self) -> int:
        """
        Run to termination and count the distinct cells visited.

        The count comes from the grid's visit layer, so the start cell is
        included exactly once whether or not the guard ever leaves it.
        """
        return self.patrol().unique_cells


def simulate(grid: PatrolGrid, start: GuardState,
             exit_margin: int = 0) -> PatrolResult:
    """Run a patrol on a working copy of ``grid`` from ``start``."""
    simulator = PatrolSimulator(grid.copy(), Guard.from_state(start),
                                exit_margin)
    return simulator.patrol()
