"""Tests for the paced step player."""

import asyncio

import pytest

from algorithms.bubble_sort import bubble_sort
from engine import CancellationToken, StepPlayer
from models import ConcurrentRunRejected


def counted(stream, pulls):
    """Pass events through, counting how many were pulled."""
    result = yield from _tap(stream, pulls)
    return result


def _tap(stream, pulls):
    while True:
        try:
            event = next(stream)
        except StopIteration as stop:
            return stop.value
        pulls.append(event)
        yield event


async def no_sleep(_seconds):
    await asyncio.sleep(0)


def test_plays_every_event():
    seen = []
    player = StepPlayer(sleep=no_sleep)
    result = asyncio.run(player.play(bubble_sort([5, 3, 8, 1]), seen.append))
    assert result.completed
    assert result.delivered == len(seen) == 10
    assert result.result == [1, 3, 5, 8]
    assert not player.busy


def test_sleeps_configured_delay_in_seconds():
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    asyncio.run(StepPlayer(delay_ms=25, sleep=fake_sleep).play(bubble_sort([2, 1]), lambda e: None))
    assert delays == [0.025, 0.025]


def test_cancel_stops_before_next_event():
    seen, pulls = [], []
    token = CancellationToken()

    def on_event(event):
        seen.append(event)
        if len(seen) == 3:
            token.cancel()

    player = StepPlayer(sleep=no_sleep)
    result = asyncio.run(player.play(counted(bubble_sort([5, 3, 8, 1]), pulls), on_event, token))
    assert not result.completed
    assert result.delivered == 3
    assert len(seen) == 3
    assert len(pulls) == 3


def test_precancelled_token_delivers_nothing():
    token = CancellationToken()
    token.cancel()
    seen = []
    result = asyncio.run(StepPlayer(sleep=no_sleep).play(bubble_sort([2, 1]), seen.append, token))
    assert result.delivered == 0
    assert seen == []


def test_awaits_async_callbacks():
    seen = []

    async def on_event(event):
        await asyncio.sleep(0)
        seen.append(event)

    asyncio.run(StepPlayer(sleep=no_sleep).play(bubble_sort([2, 1]), on_event))
    assert len(seen) == 2


def test_second_play_is_rejected():
    async def scenario():
        player = StepPlayer(delay_ms=5)
        token = CancellationToken()
        task = asyncio.create_task(player.play(bubble_sort([9, 8, 7, 6, 5]), lambda e: None, token))
        await asyncio.sleep(0)
        assert player.busy
        with pytest.raises(ConcurrentRunRejected):
            await player.play(bubble_sort([2, 1]), lambda e: None)
        token.cancel()
        return await task

    result = asyncio.run(scenario())
    assert not result.completed
