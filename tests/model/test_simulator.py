"""Tests for patrol_sim.model.simulator module."""

from __future__ import annotations

import pytest

from patrol_sim.layout import Layout, parse_layout
from patrol_sim.model.guard import Direction, Guard
from patrol_sim.model.simulator import PatrolSimulator, simulate
from patrol_sim.model.state import GuardState, PatrolOutcome


def _simulator(layout: Layout, exit_margin: int = 0) -> PatrolSimulator:
    return PatrolSimulator(layout.grid.copy(), Guard.from_state(layout.start),
                           exit_margin)


class TestSampleLayout:
    def test_unique_cells(self, sample_layout: Layout) -> None:
        assert _simulator(sample_layout).run_counting_unique() == 41

    def test_exits(self, sample_layout: Layout) -> None:
        assert _simulator(sample_layout).run() is PatrolOutcome.EXIT

    def test_deterministic(self, sample_layout: Layout) -> None:
        first = simulate(sample_layout.grid, sample_layout.start)
        second = simulate(sample_layout.grid, sample_layout.start)
        assert first == second

    def test_simulate_leaves_grid_untouched(self, sample_layout: Layout) -> None:
        simulate(sample_layout.grid, sample_layout.start)
        assert sample_layout.grid.unique_visited() == 0

    def test_never_stands_on_obstacle(self, sample_layout: Layout) -> None:
        sim = _simulator(sample_layout)
        for state in sim.trace():
            assert not sample_layout.grid.is_blocked(*state.position)
        assert sim.finished

    def test_final_state_is_exit_cell(self, sample_layout: Layout) -> None:
        result = simulate(sample_layout.grid, sample_layout.start)
        assert result.final_state == GuardState((7, 9), Direction.DOWN)
        assert not result.looped

    def test_legacy_margin_exits_at_first_row(self, sample_layout: Layout) -> None:
        sim = _simulator(sample_layout, exit_margin=1)
        assert sim.run_counting_unique() == 6
        assert sim.guard.position == (4, 1)


class TestBoundary:
    @pytest.mark.parametrize(
        ("char", "edge"),
        [("^", (1, 0)), ("v", (1, 2)), ("<", (0, 1)), (">", (2, 1))],
    )
    def test_exit_after_reaching_edge(self, char: str, edge: tuple) -> None:
        layout = parse_layout(f"...\n.{char}.\n...\n")
        sim = _simulator(layout)
        assert sim.step() is None
        assert sim.guard.position == edge
        assert sim.step() is PatrolOutcome.EXIT
        assert sim.moves == 1
        assert sim.run_counting_unique() == 2

    def test_edge_guard_facing_out_exits_immediately(self) -> None:
        sim = _simulator(parse_layout("^.\n"))
        assert sim.run() is PatrolOutcome.EXIT
        assert sim.moves == 0
        assert sim.run_counting_unique() == 1

    def test_step_after_finish_is_stable(self) -> None:
        sim = _simulator(parse_layout(">\n"))
        assert sim.step() is PatrolOutcome.EXIT
        assert sim.step() is PatrolOutcome.EXIT
        assert sim.moves == 0


class TestRotation:
    def test_rotates_before_moving(self) -> None:
        sim = _simulator(parse_layout("#..\n^..\n...\n"))
        sim.step()
        assert sim.guard.state == GuardState((1, 1), Direction.RIGHT)
        assert sim.rotations == 1
        assert sim.moves == 1

    def test_chained_rotations_at_corner(self) -> None:
        sim = _simulator(parse_layout(".#.\n.^#\n...\n"))
        sim.step()
        assert sim.guard.state == GuardState((1, 2), Direction.DOWN)
        assert sim.rotations == 2

    def test_boxed_in_guard_loops(self) -> None:
        sim = _simulator(parse_layout(".#.\n#^#\n.#.\n"))
        result = sim.patrol()
        assert result.outcome is PatrolOutcome.LOOP
        assert result.moves == 0
        assert result.rotations == 4
        assert result.unique_cells == 1
        assert result.final_state.direction is Direction.UP


class TestLoop:
    def test_detects_loop(self, loop_layout: Layout) -> None:
        result = _simulator(loop_layout).patrol()
        assert result.outcome is PatrolOutcome.LOOP
        assert result.moves == 9
        assert result.unique_cells == 8
        assert result.final_state == GuardState((1, 1), Direction.UP)

    def test_terminates_within_state_space(self, loop_layout: Layout) -> None:
        sim = _simulator(loop_layout)
        sim.run()
        assert sim.moves <= sim.max_moves
        assert sim.max_moves == 5 * 5 * 4

    def test_history_holds_each_state_once(self, loop_layout: Layout) -> None:
        sim = _simulator(loop_layout)
        sim.run()
        assert len(sim.history) == sim.moves - 1

    def test_revisited_cells_are_marked(self, loop_layout: Layout) -> None:
        sim = _simulator(loop_layout)
        sim.run()
        assert sim.grid.to_rows()[2][1] == "0"
