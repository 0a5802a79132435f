"""Obstacle sweep: counts single-obstacle placements that trap the guard."""

from functools import partial
from multiprocessing.pool import Pool
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from .grid import PatrolGrid
from .guard import Guard
from .simulator import PatrolSimulator
from .state import (CandidateOutcome, GuardState, PatrolOutcome,
                    SweepResult, SweepState)


def _evaluate_candidate(grid: PatrolGrid, start: GuardState,
                        exit_margin: int,
                        candidate: Tuple[int, int]) -> CandidateOutcome:
    """Simulate one placement on a fresh working copy (pool worker)."""
    working = grid.copy()
    working.place_candidate(*candidate)
    simulator = PatrolSimulator(working, Guard.from_state(start), exit_margin)
    outcome = simulator.run()
    return CandidateOutcome(candidate[0], candidate[1], outcome,
                            simulator.moves)


class ObstacleSweep:
    """
    Brute-force search over every hypothetical extra obstacle.

    The pristine grid and start pose are never mutated: every candidate
    is simulated on its own copy, so iterations are independent and can
    be spread over a worker pool without changing the count.
    """

    def __init__(self, grid: PatrolGrid, start: GuardState,
                 exit_margin: int = 0,
                 prune_to_path: bool = False,
                 workers: int = 1):
        self.grid = grid
        self.start = start
        self.exit_margin = exit_margin
        self.prune_to_path = prune_to_path
        self.workers = max(1, workers)
        self.state = SweepState()

    def baseline(self) -> Tuple[PatrolOutcome, np.ndarray]:
        """Run the unobstructed patrol; return its outcome and visited mask."""
        working = self.grid.copy()
        working.clear_visits()
        simulator = PatrolSimulator(working, Guard.from_state(self.start),
                                    self.exit_margin)
        outcome = simulator.run()
        return outcome, working.visited_mask()

    def _path_mask(self) -> Optional[np.ndarray]:
        if not self.prune_to_path:
            return None
        outcome, mask = self.baseline()
        # Off-path cells share the baseline outcome, which only helps
        # when that outcome is Exit
        if outcome is PatrolOutcome.LOOP:
            return None
        return mask

    def candidates(self) -> Iterator[Tuple[int, int]]:
        """Yield eligible obstacle positions in row-major order."""
        mask = self._path_mask()
        for y in range(self.grid.height):
            for x in range(self.grid.width):
                if (x, y) == self.start.position:
                    continue
                if self.grid.is_permanent_obstacle(x, y):
                    continue
                if mask is not None and not mask[y, x]:
                    continue
                yield (x, y)

    def working_grid(self, candidate: Tuple[int, int]) -> PatrolGrid:
        """Copy of the pristine grid with ``candidate`` installed."""
        working = self.grid.copy()
        working.place_candidate(*candidate)
        return working

    def evaluate(self, candidate: Tuple[int, int]) -> CandidateOutcome:
        return _evaluate_candidate(self.grid, self.start, self.exit_margin,
                                   candidate)

    def _outcomes(self, candidates: List[Tuple[int, int]]
                  ) -> Iterator[CandidateOutcome]:
        if self.workers == 1:
            for candidate in candidates:
                yield self.evaluate(candidate)
            return

        worker = partial(_evaluate_candidate, self.grid, self.start,
                         self.exit_margin)
        chunksize = max(1, len(candidates) // (self.workers * 4))
        with Pool(self.workers) as pool:
            # imap keeps row-major order
            yield from pool.imap(worker, candidates, chunksize=chunksize)

    def run(self, on_progress: Optional[Callable[[SweepState], None]] = None
            ) -> SweepResult:
        """Evaluate every candidate and tally the loop outcomes."""
        self.state = SweepState()
        outcomes: List[CandidateOutcome] = []

        for result in self._outcomes(list(self.candidates())):
            outcomes.append(result)
            self.state.record((result.x, result.y), result.outcome)
            if on_progress is not None:
                on_progress(self.state)

        return SweepResult(
            loop_count=self.state.loop_count,
            tested=self.state.tested,
            outcomes=outcomes,
        )

    def count_loops(self) -> int:
        """Number of placements that turn the patrol into a loop."""
        return self.run().loop_count
