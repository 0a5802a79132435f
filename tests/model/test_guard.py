"""Tests for patrol_sim.model.guard module."""

from __future__ import annotations

import pytest

from patrol_sim.model.guard import GUARD_CHARS, Direction, Guard
from patrol_sim.model.state import GuardState


class TestDirection:
    def test_clockwise_cycle(self) -> None:
        order = [Direction.UP]
        for _ in range(4):
            order.append(order[-1].turn_right())
        assert order == [Direction.UP, Direction.RIGHT, Direction.DOWN,
                         Direction.LEFT, Direction.UP]

    @pytest.mark.parametrize(
        ("char", "direction"),
        [("^", Direction.UP), ("v", Direction.DOWN),
         ("<", Direction.LEFT), (">", Direction.RIGHT)],
    )
    def test_from_char(self, char: str, direction: Direction) -> None:
        assert Direction.from_char(char) is direction

    def test_from_char_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Invalid guard character"):
            Direction.from_char("x")

    def test_guard_chars(self) -> None:
        assert set(GUARD_CHARS) == {"^", "v", "<", ">"}


class TestGuard:
    @pytest.mark.parametrize(
        ("direction", "ahead"),
        [(Direction.UP, (2, 1)), (Direction.DOWN, (2, 3)),
         (Direction.LEFT, (1, 2)), (Direction.RIGHT, (3, 2))],
    )
    def test_position_ahead_is_pure(self, direction: Direction,
                                    ahead: tuple) -> None:
        guard = Guard((2, 2), direction)
        assert guard.position_ahead() == ahead
        assert guard.position == (2, 2)
        assert guard.direction is direction

    def test_advance_moves_along_facing(self) -> None:
        guard = Guard((0, 0), Direction.RIGHT)
        guard.advance()
        guard.advance()
        assert guard.position == (2, 0)

    def test_advance_can_leave_grid(self) -> None:
        guard = Guard((0, 0), Direction.UP)
        guard.advance()
        assert guard.position == (0, -1)

    def test_rotate_keeps_position(self) -> None:
        guard = Guard((1, 1), Direction.LEFT)
        guard.rotate()
        assert guard.direction is Direction.UP
        assert guard.position == (1, 1)

    def test_state_and_reset(self) -> None:
        start = GuardState((3, 4), Direction.DOWN)
        guard = Guard.from_state(start)
        guard.advance()
        guard.rotate()
        assert guard.state != start
        guard.reset(start)
        assert guard.state == start

    def test_states_hash_by_value(self) -> None:
        a = GuardState((1, 2), Direction.UP)
        b = GuardState((1, 2), Direction.UP)
        c = GuardState((1, 2), Direction.RIGHT)
        assert a == b and hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2
        assert (a.x, a.y) == (1, 2)
