"""
stepper.py — Manual Step-by-Step Playback
==========================================
The Stepper drives ONE event generator by hand.  It buffers every event it
has pulled (enabling rewind), keeps the generator's return value once the
stream is exhausted, and exposes a play / pause / next / prev / speed API.

State machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (stream exhausted) → FINISHED
    any     →  reset()  →  IDLE

Events are deltas, not snapshots: to show step N after a rewind, replay
`applied()` onto a fresh model.

Thread safety:
  This class is NOT thread-safe.  Call it from a single thread (or from
  one asyncio event loop).
"""

import time
from enum import Enum
from typing import Any, Callable, Generator, List, Optional

from algorithms.step import StepEvent


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step) and slider range
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   300,    # teaching mode
    "medium": 100,
    "fast":   25,     # default
    "turbo":  1,
}

MIN_DELAY_MS     = 1
MAX_DELAY_MS     = 300
DEFAULT_DELAY_MS = SPEED_PRESETS["fast"]


def clamp_delay(ms: float) -> float:
    return max(MIN_DELAY_MS, min(MAX_DELAY_MS, ms))


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        events      : Every StepEvent pulled so far (buffer for rewind).
        current_idx : Index into `events` currently displayed (-1 = before the first).
        delay_ms    : Milliseconds between auto-advance ticks.
        result      : Generator return value, set once the stream is exhausted.
        on_step     : Optional callback(StepEvent) fired whenever the current
                      event changes.  The UI hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[StepEvent], None]] = None):
        self._generator:  Optional[Generator[StepEvent, None, Any]] = None
        self.events:      List[StepEvent] = []
        self.current_idx: int             = -1
        self.state:       StepperState    = StepperState.IDLE
        self.delay_ms:    float           = DEFAULT_DELAY_MS
        self.result:      Any             = None
        self.exhausted:   bool            = False
        self.on_step:     Optional[Callable[[StepEvent], None]] = on_step

        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, generator: Generator[StepEvent, None, Any]) -> None:
        """Attach a fresh event generator.  Nothing is displayed yet."""
        self._generator  = generator
        self.events      = []
        self.current_idx = -1
        self.result      = None
        self.exhausted   = False
        self.state       = StepperState.PAUSED

    def reset(self) -> None:
        """Back to IDLE; caller must call start() again."""
        self._generator  = None
        self.events      = []
        self.current_idx = -1
        self.result      = None
        self.exhausted   = False
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one event.  Returns False if already at the end."""
        target = self.current_idx + 1
        if target >= len(self.events):
            if not self._fetch_next():
                self.state = StepperState.FINISHED
                return False
        self._goto(target)
        return True

    def prev_step(self) -> bool:
        """Rewind one event.  Returns False if already at the first."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary event index, fetching forward if needed."""
        while idx >= len(self.events):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.events):
            self._goto(idx)
            return True
        return False

    def rewind(self) -> None:
        """Jump back to the first event."""
        if self.events:
            self._goto(0)

    def jump_to_end(self) -> None:
        """Exhaust the generator and jump to the final event."""
        while self._fetch_next():
            pass
        if self.events:
            self._goto(len(self.events) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically.  If playing and at least `delay_ms` has elapsed
        since the last advance, advances one event.  Returns True if an
        event was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if (now - self._last_tick) * 1000 >= self.delay_ms:
            self._last_tick = now
            return self.next_step()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.delay_ms = SPEED_PRESETS.get(preset, DEFAULT_DELAY_MS)

    def set_speed_value(self, ms: float) -> None:
        self.delay_ms = clamp_delay(ms)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_event(self) -> Optional[StepEvent]:
        if 0 <= self.current_idx < len(self.events):
            return self.events[self.current_idx]
        return None

    def applied(self) -> List[StepEvent]:
        """Events up to and including the current one."""
        return self.events[: self.current_idx + 1]

    @property
    def total_steps_fetched(self) -> int:
        return len(self.events)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one event from the generator into the buffer."""
        if self._generator is None or self.exhausted:
            return False
        try:
            event = next(self._generator)
        except StopIteration as stop:
            self.result    = stop.value
            self.exhausted = True
            return False
        self.events.append(event)
        return True

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if self.on_step and 0 <= idx < len(self.events):
            self.on_step(self.events[idx])
