"""Tests for run orchestration on live grids and arrays."""

import asyncio

import pytest

from algorithms.step import Visit
from engine import CANCELLED, COMPLETED, Runner
from models import ArrayModel, ConcurrentRunRejected, Grid, InvalidGridState


def test_pathfinding_run_completes(small_grid):
    ends = []

    async def scenario():
        runner = Runner(delay_ms=1)
        handle = await runner.run_pathfinding(small_grid, "bfs", on_end=ends.append)
        result = await handle.wait()
        assert not runner.is_running(small_grid)
        return result

    result = asyncio.run(scenario())
    assert result.status == COMPLETED
    assert result.delivered == 14
    assert ends == [result]
    assert result.outcome.path_length == 4
    assert not small_grid.locked
    assert small_grid.visited_count() == 9
    assert small_grid.cell(1, 2).in_path
    assert small_grid.cell(2, 2).distance == 4
    assert small_grid.cell(2, 2).previous == (1, 2)


def test_grid_is_locked_while_running(small_grid):
    ends = []

    async def scenario():
        runner = Runner(delay_ms=1)
        handle = await runner.run_pathfinding(small_grid, "dijkstra", on_end=ends.append)
        assert small_grid.locked
        assert runner.active(small_grid) is handle
        with pytest.raises(ConcurrentRunRejected):
            small_grid.toggle_wall(1, 1)
        runner.cancel(handle)
        return await handle.wait()

    result = asyncio.run(scenario())
    assert result.status == CANCELLED
    assert ends == []
    assert not small_grid.locked
    assert not small_grid.cell(1, 1).is_wall


def test_cancel_after_n_events(small_grid):
    seen, handles = [], []

    def on_event(event):
        seen.append(event)
        if len(seen) == 3:
            handles[0].cancel()

    async def scenario():
        runner = Runner(delay_ms=1)
        handles.append(await runner.run_pathfinding(small_grid, "bfs", on_event=on_event))
        return await handles[0].wait()

    result = asyncio.run(scenario())
    assert result.delivered == 3
    assert seen == [Visit(0, 0), Visit(0, 1), Visit(1, 0)]
    assert small_grid.visited_count() == 3
    assert not any(c.in_path for c in small_grid)


def test_new_run_cancels_previous(default_grid):
    ends = []

    async def scenario():
        runner = Runner()
        first = await runner.run_pathfinding(default_grid, "dijkstra", on_end=ends.append, delay_ms=5)
        await asyncio.sleep(0.02)
        second = await runner.run_pathfinding(default_grid, "astar", on_end=ends.append, delay_ms=1)
        assert first.done and first.cancelled
        return await first.wait(), await second.wait()

    first, second = asyncio.run(scenario())
    assert first.status == CANCELLED
    assert second.status == COMPLETED
    assert ends == [second]
    assert default_grid.visited_count() == 21


def test_invalid_grid_is_rejected_before_locking():
    grid = Grid.from_text("S..\n...")

    async def scenario():
        runner = Runner(delay_ms=1)
        with pytest.raises(InvalidGridState):
            await runner.run_pathfinding(grid, "bfs")
        return runner

    runner = asyncio.run(scenario())
    assert not grid.locked
    assert not runner.is_running(grid)


@pytest.mark.parametrize("key", ["teleport", "bubble"])
def test_unknown_pathfinding_algorithm(small_grid, key):
    with pytest.raises(ValueError):
        asyncio.run(Runner().run_pathfinding(small_grid, key))


def test_sorting_run_completes(array):
    ends = []

    async def scenario():
        runner = Runner(delay_ms=1)
        handle = await runner.run_sorting(array, "quick", on_end=ends.append)
        with pytest.raises(ConcurrentRunRejected):
            array.load("1,2,3")
        return await handle.wait()

    result = asyncio.run(scenario())
    assert result.completed
    assert result.outcome == [1, 3, 5, 8]
    assert array.values == [1, 3, 5, 8]
    assert not any(b.comparing or b.swapping for b in array.bars)
    assert not array.locked
    assert len(ends) == 1


def test_cancelled_sort_keeps_partial_progress(array):
    handles = []

    def on_event(event):
        if event.kind == "swap":
            handles[0].cancel()

    async def scenario():
        runner = Runner(delay_ms=1)
        handles.append(await runner.run_sorting(array, "bubble", on_event=on_event))
        return await handles[0].wait()

    result = asyncio.run(scenario())
    assert result.status == CANCELLED
    assert result.delivered == 2
    assert array.values == [3, 5, 8, 1]


def test_async_event_callback():
    array = ArrayModel([2, 1])
    seen = []

    async def on_event(event):
        await asyncio.sleep(0)
        seen.append(event.kind)

    async def scenario():
        runner = Runner(delay_ms=1)
        handle = await runner.run_sorting(array, "bubble", on_event=on_event)
        return await handle.wait()

    asyncio.run(scenario())
    assert seen == ["compare", "swap"]


def test_shutdown_cancels_everything(default_grid):
    array = ArrayModel([9, 8, 7, 6, 5, 4, 3, 2, 1])

    async def scenario():
        runner = Runner(delay_ms=5)
        grid_run = await runner.run_pathfinding(default_grid, "dijkstra")
        sort_run = await runner.run_sorting(array, "bubble")
        await asyncio.sleep(0.01)
        await runner.shutdown()
        return runner, await grid_run.wait(), await sort_run.wait()

    runner, grid_result, sort_result = asyncio.run(scenario())
    assert grid_result.status == sort_result.status == CANCELLED
    assert not runner.is_running(default_grid)
    assert not default_grid.locked and not array.locked
