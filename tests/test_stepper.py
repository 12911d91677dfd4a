"""Tests for manual step-by-step playback."""

import time

from algorithms.bubble_sort import bubble_sort
from algorithms.step import Compare, Swap
from engine import DEFAULT_DELAY_MS, Stepper, StepperState


def started(values=(2, 1), on_step=None) -> Stepper:
    stepper = Stepper(on_step=on_step)
    stepper.start(bubble_sort(list(values)))
    return stepper


def test_start_shows_nothing():
    stepper = started()
    assert stepper.state == StepperState.PAUSED
    assert stepper.current_event is None
    assert stepper.applied() == []


def test_next_and_prev():
    seen = []
    stepper = started(on_step=seen.append)

    assert stepper.next_step()
    assert stepper.current_event == Compare(0, 1)
    assert stepper.next_step()
    assert stepper.current_event == Swap(0, 1)
    assert not stepper.next_step()
    assert stepper.is_finished
    assert stepper.result == [1, 2]

    assert stepper.prev_step()
    assert stepper.current_event == Compare(0, 1)
    assert not stepper.prev_step()
    assert seen == [Compare(0, 1), Swap(0, 1), Compare(0, 1)]


def test_goto_fetches_forward():
    stepper = started([5, 3, 8, 1])
    assert stepper.goto_step(4)
    assert stepper.total_steps_fetched == 5
    assert stepper.applied()[-1] == Swap(2, 3)
    assert not stepper.goto_step(50)
    assert stepper.result == [1, 3, 5, 8]


def test_jump_to_end_and_rewind():
    stepper = started([5, 3, 8, 1])
    stepper.jump_to_end()
    assert stepper.is_finished
    assert stepper.current_idx == 9
    stepper.rewind()
    assert stepper.current_idx == 0


def test_play_and_tick():
    stepper = started([5, 3, 8, 1])
    stepper.play()
    assert stepper.is_playing
    later = time.monotonic() + 1
    assert stepper.tick(now=later)
    assert stepper.current_idx == 0
    assert not stepper.tick(now=later)

    stepper.pause()
    assert not stepper.tick(now=later + 1)
    stepper.toggle_play()
    assert stepper.is_playing


def test_play_is_ignored_when_idle_or_finished():
    stepper = Stepper()
    stepper.play()
    assert stepper.state == StepperState.IDLE

    stepper = started()
    stepper.jump_to_end()
    stepper.play()
    assert stepper.is_finished


def test_speed():
    stepper = Stepper()
    assert stepper.delay_ms == DEFAULT_DELAY_MS
    stepper.set_speed("slow")
    assert stepper.delay_ms == 300
    stepper.set_speed("warp")
    assert stepper.delay_ms == DEFAULT_DELAY_MS
    stepper.set_speed_value(5000)
    assert stepper.delay_ms == 300
    stepper.set_speed_value(0)
    assert stepper.delay_ms == 1


def test_reset():
    stepper = started()
    stepper.next_step()
    stepper.reset()
    assert stepper.state == StepperState.IDLE
    assert stepper.events == []
    assert not stepper.next_step()
