"""Guard implementation: position, facing and the rotation state machine."""

from enum import Enum
from typing import Tuple

from .state import GuardState

Position = Tuple[int, int]


class Direction(Enum):
    """Facing of the guard. Values are the layout characters."""
    UP = "^"
    DOWN = "v"
    LEFT = "<"
    RIGHT = ">"

    @property
    def delta(self) -> Tuple[int, int]:
        """Unit displacement (dx, dy); y grows downwards."""
        return _DELTAS[self]

    def turn_right(self) -> "Direction":
        """Next direction in the clockwise cycle."""
        return _CLOCKWISE[self]

    @classmethod
    def from_char(cls, char: str) -> "Direction":
        try:
            return cls(char)
        except ValueError:
            raise ValueError(f"Invalid guard character: {char!r}") from None


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_CLOCKWISE = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}

GUARD_CHARS = tuple(d.value for d in Direction)


class Guard:
    """
    The patrolling guard.

    Facing changes only through ``rotate``; ``advance`` moves without any
    checks, so the caller must make sure the destination is legal.
    """

    def __init__(self, position: Position, direction: Direction = Direction.UP):
        self.position = position
        self.direction = direction

    @classmethod
    def from_state(cls, state: GuardState) -> "Guard":
        return cls(state.position, state.direction)

    @property
    def state(self) -> GuardState:
        return GuardState(self.position, self.direction)

    def reset(self, state: GuardState) -> None:
        """Restore a previously captured pose."""
        self.position = state.position
        self.direction = state.direction

    def position_ahead(self) -> Position:
        """Cell one step ahead along the current facing."""
        dx, dy = self.direction.delta
        x, y = self.position
        return (x + dx, y + dy)

    def advance(self) -> None:
        self.position = self.position_ahead()

    def rotate(self) -> None:
        """Turn 90 degrees clockwise in place."""
        self.direction = self.direction.turn_right()

    def __repr__(self) -> str:
        return (f"Guard(pos={self.position}, "
                f"facing={self.direction.name.lower()})")
