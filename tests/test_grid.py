"""Tests for the Grid container: tools, silent rejections, snapshots, text import."""

import pytest

from algorithms.step import PathMark, Visit
from models import ConcurrentRunRejected, Grid, InvalidGridState, InvalidInput
from models.grid import GRID_COLS, GRID_ROWS


def test_default_board():
    grid = Grid()
    assert (grid.rows, grid.cols) == (GRID_ROWS, GRID_COLS)
    assert grid.start.coord == (10, 10)
    assert grid.end.coord == (10, 30)
    assert grid.walls() == frozenset()


def test_toggle_wall_flips(small_grid):
    assert small_grid.toggle_wall(1, 1) is True
    assert small_grid.cell(1, 1).is_wall
    assert small_grid.toggle_wall(1, 1) is True
    assert not small_grid.cell(1, 1).is_wall


def test_wall_on_start_or_end_is_silently_rejected(small_grid):
    assert small_grid.toggle_wall(0, 0) is False
    assert small_grid.toggle_wall(2, 2) is False
    assert small_grid.walls() == frozenset()


def test_start_cannot_move_onto_wall_or_end(small_grid):
    small_grid.toggle_wall(1, 1)
    assert small_grid.set_start(1, 1) is False
    assert small_grid.set_start(2, 2) is False
    assert small_grid.start.coord == (0, 0)


def test_end_cannot_move_onto_wall_or_start(small_grid):
    small_grid.toggle_wall(1, 1)
    assert small_grid.set_end(1, 1) is False
    assert small_grid.set_end(0, 0) is False
    assert small_grid.end.coord == (2, 2)


def test_move_start_leaves_exactly_one(small_grid):
    assert small_grid.set_start(1, 0) is True
    starts = [c.coord for c in small_grid if c.is_start]
    assert starts == [(1, 0)]


def test_out_of_range_tool_raises(small_grid):
    with pytest.raises(InvalidInput):
        small_grid.toggle_wall(3, 0)
    with pytest.raises(InvalidInput):
        small_grid.set_end(-1, 0)


def test_start_equal_end_rejected_at_construction():
    with pytest.raises(InvalidInput):
        Grid(3, 3, start=(1, 1), end=(1, 1))


def test_snapshot_is_frozen(small_grid):
    small_grid.toggle_wall(0, 1)
    snap = small_grid.snapshot()
    small_grid.toggle_wall(0, 1)
    assert snap.walls == frozenset({(0, 1)})
    assert snap.start == (0, 0) and snap.end == (2, 2)
    assert snap.is_open((1, 1))
    assert not snap.is_open((0, 1))
    assert not snap.in_bounds((3, 0))


def test_snapshot_without_end_raises():
    grid = Grid.from_text("S..\n...")
    with pytest.raises(InvalidGridState):
        grid.snapshot()


def test_apply_and_clear_trace(small_grid):
    small_grid.apply(Visit(0, 1))
    small_grid.apply(PathMark(0, 1))
    assert small_grid.cell(0, 1).visited and small_grid.cell(0, 1).in_path
    assert small_grid.visited_count() == 1

    small_grid.toggle_wall(1, 1)
    small_grid.clear_trace()
    assert small_grid.visited_count() == 0
    assert not small_grid.cell(0, 1).in_path
    assert small_grid.cell(1, 1).is_wall


def test_clear_walls(small_grid):
    small_grid.toggle_wall(0, 1)
    small_grid.toggle_wall(1, 0)
    small_grid.clear_walls()
    assert small_grid.walls() == frozenset()
    assert small_grid.start.coord == (0, 0)


def test_reset_restores_default_configuration(default_grid):
    default_grid.toggle_wall(0, 0)
    default_grid.set_start(0, 1)
    default_grid.set_end(19, 39)
    default_grid.reset()
    assert default_grid.walls() == frozenset()
    assert default_grid.start.coord == (10, 10)
    assert default_grid.end.coord == (10, 30)


def test_locked_grid_rejects_every_mutator(small_grid):
    small_grid.lock()
    for mutate in (
        lambda: small_grid.toggle_wall(1, 1),
        lambda: small_grid.set_start(1, 1),
        lambda: small_grid.set_end(1, 1),
        small_grid.clear_walls,
        small_grid.clear_trace,
        small_grid.reset,
    ):
        with pytest.raises(ConcurrentRunRejected):
            mutate()
    with pytest.raises(ConcurrentRunRejected):
        small_grid.lock()

    small_grid.unlock()
    assert small_grid.toggle_wall(1, 1) is True


class TestFromText:
    def test_parses_symbols(self):
        grid = Grid.from_text(
            """
            S.#
            .#.
            ..E
            """
        )
        assert (grid.rows, grid.cols) == (3, 3)
        assert grid.start.coord == (0, 0)
        assert grid.end.coord == (2, 2)
        assert grid.walls() == frozenset({(0, 2), (1, 1)})

    def test_render_round_trip(self):
        text = "S.#\n.#.\n..E"
        assert Grid.from_text(text).render() == text

    @pytest.mark.parametrize("text", [
        "",
        "S..\n..",
        "S.X\n..E",
        "SS.\n..E",
        "S.E\n..E",
    ])
    def test_rejects_bad_text(self, text):
        with pytest.raises(InvalidInput):
            Grid.from_text(text)

    def test_reset_keeps_imported_start_and_end(self):
        grid = Grid.from_text(".S.\n#..\n..E")
        grid.clear_walls()
        grid.set_start(2, 0)
        grid.reset()
        assert grid.start.coord == (0, 1)
        assert grid.end.coord == (2, 2)
        assert grid.walls() == frozenset()


def test_to_dict(small_grid):
    small_grid.toggle_wall(1, 1)
    data = small_grid.to_dict()
    assert data["rows"] == 3
    assert data["start"] == [0, 0]
    assert data["end"] == [2, 2]
    assert data["walls"] == [[1, 1]]
    assert data["locked"] is False
    assert data["text"] == "S..\n.#.\n..E"
