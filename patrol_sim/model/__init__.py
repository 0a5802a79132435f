"""Model package for the guard patrol simulation."""

from .state import (GuardState, PatrolOutcome, PatrolResult, SweepState,
                    SweepResult, CandidateOutcome)
from .grid import PatrolGrid, CellMarker, VisitState, OutOfBoundsError
from .guard import Guard, Direction
from .simulator import PatrolSimulator, simulate
from .sweep import ObstacleSweep

__all__ = [
    'GuardState',
    'PatrolOutcome',
    'PatrolResult',
    'SweepState',
    'SweepResult',
    'CandidateOutcome',
    'PatrolGrid',
    'CellMarker',
    'VisitState',
    'OutOfBoundsError',
    'Guard',
    'Direction',
    'PatrolSimulator',
    'simulate',
    'ObstacleSweep',
]
