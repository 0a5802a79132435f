"""Shared layouts for the patrol simulation tests."""

from __future__ import annotations

import pytest

from patrol_sim.layout import Layout, parse_layout

SAMPLE_LAYOUT = """\
....#.....
.........#
..........
..#.......
.......#..
..........
.#..^.....
........#.
#.........
......#...
"""

# Guard walks a closed rectangle and never reaches the edge
LOOP_LAYOUT = """\
.#...
....#
.^...
#....
...#.
"""


@pytest.fixture
def sample_layout() -> Layout:
    return parse_layout(SAMPLE_LAYOUT)


@pytest.fixture
def loop_layout() -> Layout:
    return parse_layout(LOOP_LAYOUT)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "input"
    path.write_text(SAMPLE_LAYOUT)
    return path
